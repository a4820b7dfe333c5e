"""Unit tests for the template helper set."""

import pytest

from noteshelf.contexts.templating.helpers import (
    add_float,
    add_int,
    div_float,
    div_int,
    mul_float,
    mul_int,
    relpath,
    sub_float,
    sub_int,
)
from noteshelf.contexts.templating.registries import TemplateRegistry


def render(source: str, clock, **context) -> str:
    return TemplateRegistry({"t": source}, clock).render("t", context)


@pytest.mark.unit
def test_add_int_ignores_floats():
    assert add_int(1, 2.0, 3) == 4
    assert add_int() == 0
    assert add_int(True, 2) == 2


@pytest.mark.unit
def test_float_helpers_accept_ints():
    assert add_float(1, 2.5) == 3.5
    assert sub_float(10, 2.5, "x") == 7.5
    assert mul_float(2, 1.5) == 3.0
    assert div_float(7, 2) == 3.5


@pytest.mark.unit
def test_sub_and_mul_int():
    assert sub_int(10, 3, 2) == 5
    assert sub_int(10, 1.5) == 10
    assert sub_int() == 0
    assert mul_int(2, 3, 4) == 24
    assert mul_int(2, "three") == 2
    assert mul_int() == 1


@pytest.mark.unit
def test_div_int_truncates_toward_zero():
    assert div_int(7, 2) == 3
    assert div_int(-7, 2) == -3
    assert div_int(7, -2) == -3
    assert div_int(100, 2, 5) == 10


@pytest.mark.unit
def test_division_skips_zero_divisors():
    assert div_int(10, 0, 2) == 5
    assert div_float(10, 0.0) == 10.0
    assert div_int() == 1


@pytest.mark.unit
def test_relpath_helper():
    assert relpath("university/year-1/semester-1", "university/year-2/semester-2") == (
        "../../year-1/semester-1"
    )
    assert relpath(".", "university/year-1") == "../../."
    assert relpath("foo", "../bar") == ""
    assert relpath(None, "foo") == ""
    assert relpath("foo") == ""


@pytest.mark.unit
def test_helpers_inside_templates(clock):
    assert render("{{ add_int(1, 2.0, 3) }}", clock) == "4"
    assert render("{{ div_float(1, 4) }}", clock) == "0.25"
    assert render("{{ kebab_case(title) }}", clock, title="Taylor Series") == "taylor-series"
    assert render("{{ title | snake_case }}", clock, title="Taylor Series") == "taylor_series"
    assert render("{{ camel_case('linear algebra') }}", clock) == "LinearAlgebra"
    assert render("{{ relpath('a/b', 'a/c') }}", clock) == "../b"


@pytest.mark.unit
def test_reldate_uses_injected_clock(clock):
    assert render("{{ reldate() }}", clock) == "2024-01-31"
    assert render("{{ reldate(days=1) }}", clock) == "2024-02-01"
    assert render('{{ reldate("%d/%m/%Y", -31) }}', clock) == "31/12/2023"


@pytest.mark.unit
def test_filesystem_probes(tmp_path, clock):
    (tmp_path / "note.tex").write_text("x")

    source = "{{ is_file(f) }} {{ is_dir(d) }} {{ is_file(d) }}"
    rendered = render(source, clock, f=str(tmp_path / "note.tex"), d=str(tmp_path))

    assert rendered == "True True False"


@pytest.mark.unit
def test_reldate_falls_back_on_wrong_kind_arguments(clock):
    assert render("{{ reldate(3) }}", clock) == "2024-01-31"
    assert render('{{ reldate("%Y", "two") }}', clock) == "2024"
    assert render('{{ reldate("%Y", 1.5) }}', clock) == "2024"
    assert render("{{ reldate(none, true) }}", clock) == "2024-01-31"
