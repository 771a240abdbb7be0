"""Lower-case mapping deltas for the Basic Multilingual Plane and Deseret."""

from __future__ import annotations

_PAGE_SIZE = 256
TABLE_LIMIT = 0x10800


def _page() -> list[int]:
    return [0] * _PAGE_SIZE


def _fill(page: list[int], start: int, end: int, delta: int) -> None:
    for position in range(start, end + 1):
        page[position] = delta


def _pairs(page: list[int], start: int, end: int) -> None:
    """Mark every second position from ``start`` as an upper case of its successor."""
    for position in range(start, end + 1, 2):
        page[position] = 1


def _set(page: list[int], values: dict[int, int]) -> None:
    for position, delta in values.items():
        page[position] = delta


def _build() -> dict[int, list[int]]:
    pages: dict[int, list[int]] = {}

    p = _page()
    _fill(p, 0x41, 0x5A, 0x20)
    _fill(p, 0xC0, 0xD6, 0x20)
    _fill(p, 0xD8, 0xDE, 0x20)
    pages[0x00] = p

    p = _page()
    _pairs(p, 0x00, 0x2F)
    _pairs(p, 0x32, 0x37)
    _pairs(p, 0x39, 0x47)
    _pairs(p, 0x4A, 0x4F)
    _pairs(p, 0x50, 0x77)
    _pairs(p, 0x79, 0x7D)
    _pairs(p, 0xA0, 0xA4)
    _pairs(p, 0xCD, 0xDB)
    _pairs(p, 0xE0, 0xEF)
    _pairs(p, 0xF8, 0xFF)
    for position in (0x82, 0x84, 0x87, 0x8B, 0x91, 0x98, 0xA7, 0xAC, 0xAF,
                     0xB3, 0xB5, 0xB8, 0xBC, 0xC5, 0xC8, 0xCB, 0xDE, 0xF2, 0xF4):
        p[position] = 1
    _set(p, {
        0x30: -199, 0x78: -121,
        0x81: 210, 0x86: 206, 0x89: 205, 0x8A: 205, 0x8E: 79, 0x8F: 202,
        0x90: 203, 0x93: 205, 0x94: 207, 0x96: 211, 0x97: 209,
        0x9C: 211, 0x9D: 213, 0x9F: 214,
        0xA6: 218, 0xA9: 218, 0xAE: 218,
        0xB1: 217, 0xB2: 217, 0xB7: 219,
        0xC4: 2, 0xC7: 2, 0xCA: 2, 0xF1: 2,
        0xF6: -97, 0xF7: -56,
    })
    pages[0x01] = p

    p = _page()
    _pairs(p, 0x00, 0x1F)
    _pairs(p, 0x22, 0x33)
    pages[0x02] = p

    p = _page()
    _set(p, {0x86: 38, 0x88: 37, 0x89: 37, 0x8A: 37, 0x8C: 64, 0x8E: 63, 0x8F: 63, 0xF4: -60})
    _fill(p, 0x91, 0xA1, 0x20)
    _fill(p, 0xA3, 0xAB, 0x20)
    _pairs(p, 0xDA, 0xEF)
    pages[0x03] = p

    p = _page()
    _fill(p, 0x00, 0x0F, 0x50)
    _fill(p, 0x10, 0x2F, 0x20)
    _pairs(p, 0x60, 0x81)
    _pairs(p, 0x8C, 0xBF)
    for position in (0xC1, 0xC3, 0xC7, 0xCB, 0xF8):
        p[position] = 1
    _pairs(p, 0xD0, 0xF5)
    pages[0x04] = p

    p = _page()
    _fill(p, 0x31, 0x56, 0x30)
    pages[0x05] = p

    p = _page()
    _pairs(p, 0x00, 0x95)
    _pairs(p, 0xA0, 0xF9)
    pages[0x1E] = p

    p = _page()
    for start, end in ((0x08, 0x0F), (0x18, 0x1D), (0x28, 0x2F), (0x38, 0x3F),
                       (0x48, 0x4D), (0x68, 0x6F), (0x88, 0x8F), (0x98, 0x9F),
                       (0xA8, 0xAF), (0xB8, 0xB9), (0xD8, 0xD9), (0xE8, 0xE9)):
        _fill(p, start, end, -8)
    for position in (0x59, 0x5B, 0x5D, 0x5F):
        p[position] = -8
    _fill(p, 0xBA, 0xBB, -74)
    _fill(p, 0xC8, 0xCB, -86)
    _fill(p, 0xDA, 0xDB, -100)
    _fill(p, 0xEA, 0xEB, -112)
    _fill(p, 0xF8, 0xF9, -128)
    _fill(p, 0xFA, 0xFB, -126)
    _set(p, {0xBC: -9, 0xCC: -9, 0xEC: -7, 0xFC: -9})
    pages[0x1F] = p

    p = _page()
    _set(p, {0x26: -7517, 0x2A: -8383, 0x2B: -8262})
    _fill(p, 0x60, 0x6F, 0x10)
    pages[0x21] = p

    p = _page()
    _fill(p, 0xB6, 0xCF, 0x1A)
    pages[0x24] = p

    p = _page()
    _fill(p, 0x21, 0x3A, 0x20)
    pages[0xFF] = p

    p = _page()
    _fill(p, 0x00, 0x25, 0x28)
    pages[0x104] = p

    return pages


_PAGES = _build()


def lower_delta(wc: int) -> int:
    """Return the offset that maps code point ``wc`` to its lower case.

    Code points outside the table, and those with no lower case, give 0.
    """
    if wc < 0:
        raise ValueError("code point must not be negative")
    if wc >= TABLE_LIMIT:
        return 0
    page = _PAGES.get(wc >> 8)
    if page is None:
        return 0
    return page[wc & 0xFF]