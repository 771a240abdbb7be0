"""Case conversion of code points through the lower-case delta tables."""

from __future__ import annotations

from khorbase.case_tables import TABLE_LIMIT, lower_delta

_RESULT_MASK = 0xFFFF


def towlower(wc: int) -> int:
    """Return the lower-case counterpart of code point ``wc``.

    Code points at or beyond the end of the table come back unchanged.
    Mapped results are kept to 16 bits, as the tables were built for them.
    """
    if wc < 0:
        raise ValueError("code point must not be negative")
    if wc >= TABLE_LIMIT:
        return wc
    return (wc + lower_delta(wc)) & _RESULT_MASK


def lower_string(text: str) -> str:
    """Lower-case every character of ``text`` with :func:`towlower`."""
    return "".join(chr(towlower(ord(char))) for char in text)