import string

import pytest

from oldkern import ctype
from oldkern.ctype import CharClass


def test_eof_has_no_class():
    assert ctype.char_class(-1) == CharClass(0)
    assert not ctype.isprint(-1)


@pytest.mark.parametrize("bad", [256, -2, "ab", ""])
def test_out_of_range_rejected(bad):
    with pytest.raises(ValueError):
        ctype.char_class(bad)


def test_space_is_hard_space_and_white():
    assert ctype.char_class(" ") == CharClass.S | CharClass.SP
    assert ctype.isprint(" ")
    assert not ctype.isgraph(" ")


@pytest.mark.parametrize("code", range(128))
def test_ascii_agrees_with_str_methods(code):
    ch = chr(code)
    assert ctype.isalpha(code) == ch.isalpha()
    assert ctype.isdigit(code) == ch.isdigit()
    assert ctype.isupper(code) == ch.isupper()
    assert ctype.islower(code) == ch.islower()
    assert ctype.isprint(code) == ch.isprintable()
    assert ctype.ispunct(code) == (ch in string.punctuation)
    assert ctype.isxdigit(code) == (ch in string.hexdigits)
    assert ctype.isalnum(code) == (ch.isalpha() or ch.isdigit())


@pytest.mark.parametrize("code", range(128, 256))
def test_high_bytes_have_no_class(code):
    assert ctype.char_class(code) == CharClass(0)
    assert ctype.isascii(code) is False


def test_white_space_members():
    assert all(ctype.isspace(ch) for ch in " \t\n\v\f\r")
    assert all(ctype.iscntrl(ch) for ch in "\t\n\v\f\r")
    assert not ctype.isspace("\x1c")


def test_isascii_bounds():
    assert ctype.isascii(0x7F)
    assert not ctype.isascii(0x80)
    assert not ctype.isascii(-1)


def test_toascii_strips_high_bit():
    assert ctype.toascii(ord("A") | 0x80) == ord("A")
    assert ctype.toascii("A") == "A"


def test_case_conversion_round_trip():
    for upper, lower in zip(string.ascii_uppercase, string.ascii_lowercase):
        assert ctype.tolower(upper) == lower
        assert ctype.toupper(lower) == upper
        assert ctype.toupper(ctype.tolower(upper)) == upper
        assert ctype.tolower(ord(upper)) == ord(lower)


def test_case_conversion_leaves_others():
    for ch in string.digits + string.punctuation + " ":
        assert ctype.tolower(ch) == ch
        assert ctype.toupper(ch) == ch