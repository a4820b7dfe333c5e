"""Unit tests for lexical path helpers."""

import pytest

from noteshelf.utils.paths import normalize_components, path_components, relative_path_from


@pytest.mark.unit
@pytest.mark.parametrize(
    "destination,base,expected",
    [
        ("university/year-1/semester-1", "university/year-2/semester-2", "../../year-1/semester-1"),
        (".", "university/year-1", "../../."),
        ("/foo/bar", "/foo", "bar"),
        ("/foo", "/foo/bar", ".."),
        ("/foo/bar/baz", "/foo/quux", "../bar/baz"),
        ("foo", "foo", ""),
        ("foo/bar", "foo", "bar"),
        ("foo", ".", "foo"),
        ("/foo", "bar", "/foo"),
    ],
)
def test_relative_path_from(destination, base, expected):
    assert relative_path_from(destination, base) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "destination,base",
    [
        ("foo", "/bar"),
        ("foo", "../bar"),
    ],
)
def test_relative_path_from_without_answer(destination, base):
    assert relative_path_from(destination, base) is None


@pytest.mark.unit
def test_path_components():
    assert path_components("./notes//calculus/./limits/") == [".", "notes", "calculus", "limits"]
    assert path_components("/dev/sda") == ["/", "dev", "sda"]
    assert path_components("") == []


@pytest.mark.unit
def test_normalize_components():
    assert normalize_components("Year 1/Semester 1/Quantum Mechanics/../Calculus I") == [
        "Year 1",
        "Semester 1",
        "Calculus I",
    ]
    assert normalize_components("./Calculus/../Calculus I/../../p") == ["..", "p"]
    assert normalize_components(" a / ./ b ") == ["a", "b"]
    assert normalize_components("") == []
