"""Wall-clock profiling that reports through a logger."""

from __future__ import annotations

import functools
import logging
import time
from enum import Enum
from typing import Callable, TypeVar

F = TypeVar("F", bound=Callable)


class Precision(Enum):
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    MICROSECONDS = "microseconds"
    NANOSECONDS = "nanoseconds"


_DIVISORS = {
    Precision.SECONDS: 1_000_000_000,
    Precision.MILLISECONDS: 1_000_000,
    Precision.MICROSECONDS: 1_000,
    Precision.NANOSECONDS: 1,
}


class CpuProfiler:
    """Measures time from creation and logs it at debug level.

    Used as a context manager, it logs when the block ends.
    """

    def __init__(
        self,
        logger: logging.Logger | None,
        tag: str,
        precision: Precision = Precision.MICROSECONDS,
    ) -> None:
        self.logger = logger
        self.tag = tag
        self.precision = precision
        self._start = time.perf_counter_ns()

    def elapsed(self) -> int:
        """Time since creation, truncated to whole units of the precision."""
        return (time.perf_counter_ns() - self._start) // _DIVISORS[self.precision]

    def print(self) -> None:
        if self.logger is not None:
            self.logger.debug(
                "[PROFILER] %8d %s %s", self.elapsed(), self.precision.value, self.tag
            )

    def __enter__(self) -> CpuProfiler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.print()


def profile_function(
    logger: logging.Logger | None, precision: Precision = Precision.MICROSECONDS
) -> Callable[[F], F]:
    """Decorator that profiles every call of the wrapped function."""

    def decorator(func: F) -> F:
        tag = f"{func.__qualname__} ({func.__module__})"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with CpuProfiler(logger, tag, precision):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator