import logging
import time

from khorbase.profiler import CpuProfiler, Precision, profile_function

LOGGER_NAME = "khorbase.tests.profiler"


def _logger():
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    return logger


def _add(a, b):
    return a + b


def test_context_manager_logs_on_exit(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    with CpuProfiler(_logger(), "block"):
        pass
    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER_NAME]
    assert len(messages) == 1
    assert messages[0].startswith("[PROFILER]")
    assert messages[0].endswith("microseconds block")


def test_precision_name_in_message(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    CpuProfiler(_logger(), "tag", Precision.NANOSECONDS).print()
    assert caplog.records[-1].getMessage().endswith("nanoseconds tag")


def test_elapsed_respects_precision():
    profiler = CpuProfiler(None, "sleep", Precision.MILLISECONDS)
    time.sleep(0.01)
    assert profiler.elapsed() >= 10
    profiler.precision = Precision.MICROSECONDS
    assert profiler.elapsed() >= 10_000


def test_elapsed_is_monotonic():
    profiler = CpuProfiler(None, "mono", Precision.NANOSECONDS)
    first = profiler.elapsed()
    second = profiler.elapsed()
    assert 0 <= first <= second


def test_no_logger_logs_nothing(caplog):
    caplog.set_level(logging.DEBUG)
    with CpuProfiler(None, "silent"):
        pass
    assert [r for r in caplog.records if "silent" in r.getMessage()] == []


def test_profile_function_returns_result_and_logs(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    decorator = profile_function(_logger(), Precision.MILLISECONDS)
    wrapped = decorator(_add)

    assert wrapped(2, 3) == 5
    message = caplog.records[-1].getMessage()
    assert "milliseconds" in message
    assert "_add" in message
    assert wrapped.__name__ == "_add"