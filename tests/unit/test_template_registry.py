"""Unit tests for TemplateRegistry class."""

import pytest

from noteshelf.contexts.templating.defaults import BUILTIN_TEMPLATES
from noteshelf.contexts.templating.registries import TemplateRegistry
from noteshelf.exceptions import TemplateError


@pytest.fixture
def registry(clock):
    templates = dict(BUILTIN_TEMPLATES)
    templates.update(
        {
            "lecture": "Lecture: {{ note.title }}\n",
            "broken": "line one\n<%% if %%>\n",
            "undefined": "first line\n{{ note.missing }}\n",
            "loop": "<%% for n in items %%>{{ n }};<%% endfor %%>",
            "latex": "\\begin{document}{% raw %}{#1}\\end{document}",
        }
    )
    return TemplateRegistry(templates, clock)


@pytest.mark.unit
def test_template_registry_init(registry):
    """Test TemplateRegistry initialization."""
    assert registry.has_template("_default")
    assert registry.has_template("master/_default")
    assert registry._cache == {}


@pytest.mark.unit
def test_template_caching(registry):
    """Test that templates are cached after first load."""
    template1 = registry.get_template("lecture")
    assert registry.is_cached("lecture")

    template2 = registry.get_template("lecture")
    assert template1 is template2


@pytest.mark.unit
def test_clear_cache(registry):
    """Test cache clearing."""
    registry.get_template("lecture")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_render_exact_key(registry):
    assert registry.render("lecture", {"note": {"title": "Limits"}}) == "Lecture: Limits\n"


@pytest.mark.unit
def test_render_falls_back_to_default(registry):
    context = {
        "profile": {"name": "Jane Doe"},
        "subject": {"name": "Calculus I"},
        "note": {"title": "Limits"},
    }

    rendered = registry.render("no-such-template", context)

    assert "\\author{Jane Doe}" in rendered
    assert "\\title{Limits}" in rendered
    assert "\\date{2024-01-31}" in rendered
    assert "Calculus I" in rendered


@pytest.mark.unit
def test_render_without_template_or_fallback(clock):
    registry = TemplateRegistry({}, clock)

    with pytest.raises(TemplateError):
        registry.render("lecture", {})


@pytest.mark.unit
def test_block_delimiters_are_latex_safe(registry):
    assert registry.render("loop", {"items": [1, 2]}) == "1;2;"
    assert registry.render("latex", {}) == "\\begin{document}{% raw %}{#1}\\end{document}"


@pytest.mark.unit
def test_syntax_error_reports_line(registry):
    with pytest.raises(TemplateError) as exc_info:
        registry.render("broken", {})

    assert exc_info.value.template_name == "broken"
    assert exc_info.value.lineno == 2


@pytest.mark.unit
def test_undefined_reference_is_an_error(registry):
    with pytest.raises(TemplateError) as exc_info:
        registry.render("undefined", {"note": {"title": "Limits"}})

    assert exc_info.value.template_name == "undefined"
    assert "missing" in str(exc_info.value)


@pytest.mark.unit
def test_master_default_template(registry):
    context = {
        "profile": {"name": "Jane Doe"},
        "subject": {"name": "Calculus I"},
        "master": {"notes": [{"title": "derivatives"}, {"title": "limits"}]},
    }

    rendered = registry.render("master/_default", context)

    assert "\\title{Calculus I}" in rendered
    assert rendered.index("Note: derivatives") < rendered.index("Note: limits")


@pytest.mark.unit
@pytest.mark.parametrize(
    "source, error_type",
    [
        ("first line\n{{ n / 0 }}\n", ZeroDivisionError),
        ("{{ reldate('%Y', 999999999) }}", OverflowError),
        ("<%% for x in 5 %%>{{ x }}<%% endfor %%>", TypeError),
    ],
)
def test_failing_expression_is_a_template_error(clock, source, error_type):
    registry = TemplateRegistry({"failing": source}, clock)

    with pytest.raises(TemplateError) as exc_info:
        registry.render("failing", {"n": 1})

    assert exc_info.value.template_name == "failing"
    assert isinstance(exc_info.value.original_error, error_type)


@pytest.mark.unit
def test_missing_include_is_a_template_error(clock):
    registry = TemplateRegistry({"including": '<%% include "nowhere" %%>'}, clock)

    with pytest.raises(TemplateError) as exc_info:
        registry.render("including", {})

    assert exc_info.value.template_name == "including"
    assert "nowhere" in str(exc_info.value)
