import string

import pytest

from khorbase.case_tables import lower_delta


def _nonzero_entries():
    return [(c, lower_delta(c)) for c in range(0x10800) if lower_delta(c) != 0]


def test_ascii_uppercase_maps_to_lowercase():
    for upper, lower in zip(string.ascii_uppercase, string.ascii_lowercase):
        assert chr(ord(upper) + lower_delta(ord(upper))) == lower


def test_ascii_lowercase_and_digits_unchanged():
    for ch in string.ascii_lowercase + string.digits + string.punctuation:
        assert lower_delta(ord(ch)) == 0


def test_pinned_delta_values():
    assert lower_delta(ord("A")) == 0x20
    assert lower_delta(0x2126) == 0x3C9 - 0x2126
    assert lower_delta(0x10400) == 0x28


def test_every_mapping_agrees_with_unicode_lowercase():
    for code, delta in _nonzero_entries():
        assert chr(code).lower()[0] == chr(code + delta), hex(code)


def test_targets_are_already_lowercase():
    for code, delta in _nonzero_entries():
        assert lower_delta(code + delta) == 0, hex(code)


@pytest.mark.parametrize("upper, lower", [("Ж", "ж"), ("Ё", "ё"), ("Σ", "σ"), ("Ա", "ա"), ("Ａ", "ａ"), ("Ⅰ", "ⅰ")])
def test_scripts(upper, lower):
    assert chr(ord(upper) + lower_delta(ord(upper))) == lower


def test_outside_table_is_zero():
    assert lower_delta(0x10800) == 0
    assert lower_delta(0x1F600) == 0


def test_negative_code_point_rejected():
    with pytest.raises(ValueError):
        lower_delta(-1)