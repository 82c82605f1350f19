"""Unit tests for TemplateRegistry class."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from cvmanager.contexts.templating.registries import TemplateRegistry, graphic_path


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert (registry.templates_path / "types").exists()
    assert (registry.templates_path / "structure").exists()
    assert registry._cache == {}


@pytest.mark.unit
@pytest.mark.parametrize("type_name", ["entries", "projects", "skills"])
def test_get_section_templates(type_name):
    """Every template-backed section type loads."""
    registry = TemplateRegistry()
    assert registry.get_template(type_name) is not None
    assert registry.is_cached(type_name)


@pytest.mark.unit
@pytest.mark.parametrize(
    "name", ["preamble", "photo", "header", "section_wrapper", "footer", "document"]
)
def test_get_structure_templates(name):
    assert TemplateRegistry().get_structure(name) is not None


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("entries")
    template2 = registry.get_template("entries")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent_type")


@pytest.mark.unit
def test_get_template_path():
    """Test getting template file path."""
    path = TemplateRegistry().get_template_path("skills")

    assert isinstance(path, Path)
    assert path.name == "template.tex.jinja"
    assert path.parent.name == "skills"


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry()

    registry.get_template("entries")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0
    assert not registry.is_cached("entries")


@pytest.mark.unit
def test_custom_delimiters_leave_latex_braces_alone():
    """Prepared markup passes through; raw values go through the latex filter."""
    template = TemplateRegistry().get_template("entries")
    result = template.render(
        items=[
            {
                "dates": "2020",
                "title": "R&D {lead}",
                "subtitle": "",
                "description_latex": r"\textbf{Bold Text}",
            }
        ]
    )

    assert r"\entry{2020}" in result
    assert r"{R\&D \{lead\}}" in result
    assert r"{\textbf{Bold Text}}" in result


@pytest.mark.unit
def test_strict_undefined():
    """Missing template variables fail loudly instead of rendering empty."""
    template = TemplateRegistry().get_structure("section_wrapper")
    with pytest.raises(UndefinedError):
        template.render(label="Skills")


@pytest.mark.unit
def test_custom_templates_path(tmp_path):
    (tmp_path / "types" / "entries").mkdir(parents=True)
    (tmp_path / "types" / "entries" / "template.tex.jinja").write_text(
        "<%% for item in items %%><<< item.title | latex >>>;<%% endfor %%>"
    )

    template = TemplateRegistry(tmp_path).get_template("entries")
    assert template.render(items=[{"title": "a_b"}, {"title": "c"}]) == r"a\_b;c;"


@pytest.mark.unit
def test_graphic_path():
    assert graphic_path("logo_v2.png") == "logo_v2.png"
    assert graphic_path("we{ir}d%#\\.png") == "weird.png"
    assert graphic_path(None) == ""
