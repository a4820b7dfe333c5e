"""Unit tests for name canonicalization and case helpers."""

import pytest

from noteshelf.utils.text_processing import (
    camel_case,
    canonicalize,
    is_canonical,
    kebab_case,
    lower_case,
    snake_case,
    split_words,
    title_case,
    upper_case,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("Calculus I", "calculus-i"),
        ("Year 1", "year-1"),
        ("calculus-i", "calculus-i"),
        ("  Quantum   Mechanics ", "quantum-mechanics"),
        ("snake_case_name", "snake-case-name"),
        ("C++ & Data Structures!", "c-data-structures"),
        ("Álgebra Lineal", "álgebra-lineal"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_canonicalize(name, expected):
    assert canonicalize(name) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "name", ["Calculus I", "  a -- b  ", "_drafts", "My Notes", "x_y.z", "already-canonical"]
)
def test_canonicalize_is_idempotent(name):
    once = canonicalize(name)
    assert canonicalize(once) == once


@pytest.mark.unit
def test_canonicalize_ignores_case_and_delimiters():
    variants = ["Calculus I", "calculus-i", "CALCULUS_I", "calculus   i"]
    assert len({canonicalize(v) for v in variants}) == 1


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,visible",
    [
        ("calculus-i", True),
        ("year-1", True),
        ("Calculus I", False),
        ("_drafts", False),
        ("My Notes", False),
        ("", False),
        ("-", False),
    ],
)
def test_is_canonical(name, visible):
    assert is_canonical(name) is visible


@pytest.mark.unit
def test_split_words_handles_camel_case_boundaries():
    assert split_words("XMLHttpRequest for the_win") == ["XML", "Http", "Request", "for", "the", "win"]


@pytest.mark.unit
def test_case_helpers():
    text = "hello world-of LaTeX"

    assert upper_case(text) == "HELLO WORLD OF LA TE X"
    assert lower_case("Hello, World") == "hello world"
    assert kebab_case("Calculus I: Limits") == "calculus-i-limits"
    assert snake_case("Calculus I: Limits") == "calculus_i_limits"
    assert camel_case("calculus notes") == "CalculusNotes"
    assert title_case("the quick_brown fox") == "The Quick Brown Fox"


@pytest.mark.unit
def test_case_helpers_strip_punctuation():
    assert kebab_case("  --Hello!!  ") == "hello"
    assert snake_case("") == ""
