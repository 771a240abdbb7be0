import string

import pytest

from khorbase.convert import lower_string, towlower


def test_ascii_upper_maps_to_lower():
    assert towlower(ord("A")) == ord("a")
    assert towlower(ord("Z")) == ord("z")


@pytest.mark.parametrize("char", string.ascii_uppercase)
def test_ascii_letters_match_str_lower(char):
    assert chr(towlower(ord(char))) == char.lower()


@pytest.mark.parametrize("char", string.digits + string.punctuation + string.ascii_lowercase + " ")
def test_non_upper_ascii_unchanged(char):
    assert towlower(ord(char)) == ord(char)


def test_latin1_upper_matches_str_lower():
    for code in list(range(0xC0, 0xD7)) + list(range(0xD8, 0xDF)):
        assert chr(towlower(code)) == chr(code).lower()


def test_multiplication_sign_unchanged():
    assert towlower(0xD7) == 0xD7


def test_greek_and_cyrillic_capitals_match_str_lower():
    for code in list(range(0x391, 0x3A2)) + list(range(0x410, 0x430)):
        assert chr(towlower(code)) == chr(code).lower()


def test_kelvin_sign_maps_to_latin_k():
    assert chr(towlower(0x212A)) == "k"


def test_fullwidth_capitals_match_str_lower():
    for code in range(0xFF21, 0xFF3B):
        assert chr(towlower(code)) == chr(code).lower()


def test_code_point_beyond_table_unchanged():
    assert towlower(0x20000) == 0x20000
    assert towlower(0x10800) == 0x10800


def test_negative_code_point_raises():
    with pytest.raises(ValueError):
        towlower(-1)


def test_lower_string_ascii_matches_str_lower():
    text = "Hello WORLD, Mixed Case 123!"
    assert lower_string(text) == text.lower()


def test_lower_string_cyrillic_matches_str_lower():
    text = "ПРИВЕТ Мир"
    assert lower_string(text) == text.lower()


def test_lower_string_is_idempotent():
    text = "ÀÉÎÕÜ ΑΒΓ АБВ Straße"
    once = lower_string(text)
    assert lower_string(once) == once


def test_lower_string_keeps_length():
    text = "MiXeD ÇÅSË"
    assert len(lower_string(text)) == len(text)


def test_lower_string_empty():
    assert lower_string("") == ""