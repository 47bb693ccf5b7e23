import re

import pytest

from backrefmatch.parser import ParseError
from backrefmatch.production import ProductionFA, match


def _expected(pattern, text):
    return re.fullmatch(pattern, text) is not None


@pytest.mark.parametrize(
    "pattern, text",
    [
        ("abc", "abc"),
        ("abc", "abd"),
        ("abc", "abcd"),
        ("", ""),
        ("a", ""),
        ("cat|dog", "dog"),
        ("cat|dog", "cow"),
        ("ab?c", "ac"),
        ("ab?c", "abc"),
        ("ab?c", "abbc"),
        ("a*b", "aaab"),
        ("a*b", "b"),
        ("a+b", "b"),
        ("[a-c]+x", "abcx"),
        ("[a-c]+x", "abdx"),
        ("[^a]b", "cb"),
        ("[^a]b", "ab"),
        ("\\d+", "123"),
        ("\\d+", "12a"),
        ("\\w\\s\\w", "a b"),
        ("\\w\\s\\w", "a_b"),
        ("a.c", "abc"),
        ("a.c", "a\nc"),
        ("^ab$", "ab"),
        ("(?:ab)+", "abab"),
    ],
)
def test_plain_patterns_agree_with_fullmatch(pattern, text):
    assert match(pattern, text) == _expected(pattern, text)


@pytest.mark.parametrize(
    "pattern, text",
    [
        ("(a)\\1", "aa"),
        ("(a)\\1", "ab"),
        ("(ab|c)\\1", "abab"),
        ("(ab|c)\\1", "cc"),
        ("(ab|c)\\1", "abc"),
        ("(a+)b\\1", "aaabaaa"),
        ("(a+)b\\1", "aabaaa"),
        ("(a|b)\\1\\1", "bbb"),
        ("(a|b)\\1\\1", "bba"),
        ("(a)+\\1", "aaa"),
        ("(a)+\\1", "aab"),
        ("x(\\d+)-\\1", "x12-12"),
        ("x(\\d+)-\\1", "x12-13"),
    ],
)
def test_backreferences_agree_with_fullmatch(pattern, text):
    assert match(pattern, text) == _expected(pattern, text)


def test_result_attribute_matches_function():
    fa = ProductionFA("(ab)\\1", "abab")
    assert fa.result == match("(ab)\\1", "abab")
    assert fa.result == _expected("(ab)\\1", "abab")
    assert fa.has_refer


def test_match_state_marked():
    fa = ProductionFA("a", "a")
    assert fa.match_state.refer_no == fa.refer_count + 1
    assert fa.match_state.group_type == 0


def test_long_text_does_not_exhaust_recursion():
    text = "a" * 5000
    assert match("(a)a*\\1", text) == _expected("(a)a*\\1", text)


def test_character_outside_byte_range_rejected():
    with pytest.raises(ValueError):
        match("a", "\u0100")


def test_bad_pattern_propagates_parse_error():
    with pytest.raises(ParseError):
        match("(a)\\2", "aa")