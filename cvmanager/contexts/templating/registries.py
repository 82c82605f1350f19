"""
Templating Registries

Loads and caches the Jinja2 templates used to assemble CV documents.
"""

import os
import re
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from cvmanager.contexts.templating.escaping import escape_latex

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("CV_TEMPLATES_PATH", Path(__file__).resolve().parent / "template")
)

# Characters that cannot appear in an \includegraphics argument
_GRAPHIC_PATH_UNSAFE_RE = re.compile(r"[\\{}%#]")


def graphic_path(filename) -> str:
    """Filename usable inside \\includegraphics{...}; unsafe characters are dropped."""
    if not filename:
        return ""
    return _GRAPHIC_PATH_UNSAFE_RE.sub("", str(filename))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Layout:
        {templates_path}/structure/{name}.tex.jinja        document skeleton pieces
        {templates_path}/types/{section_type}/template.tex.jinja  section bodies

    Custom delimiters avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Filters available to templates:
    - latex: escape_latex()
    - graphic: graphic_path()
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Root template directory. Defaults to CV_TEMPLATES_PATH
                            or the package's own template/ directory
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags sit on their own lines and leave no trace
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters["latex"] = escape_latex
        self.env.filters["graphic"] = graphic_path

    def _load(self, relative_path: str) -> Template:
        if relative_path in self._cache:
            return self._cache[relative_path]

        try:
            template = self.env.get_template(relative_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found at {self.templates_path / relative_path}"
            ) from e

        self._cache[relative_path] = template
        return template

    def get_template(self, type_name: str) -> Template:
        """
        Get the body template for a section type (e.g. 'entries').

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        return self._load(f"types/{type_name}/template.tex.jinja")

    def get_structure(self, name: str) -> Template:
        """Get a document skeleton template (e.g. 'preamble', 'header')."""
        return self._load(f"structure/{name}.tex.jinja")

    def get_template_path(self, type_name: str) -> Path:
        """File path of a section type's template."""
        return self.templates_path / "types" / type_name / "template.tex.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, type_name: str) -> bool:
        """Check if a section type's template is in the cache."""
        return f"types/{type_name}/template.tex.jinja" in self._cache
