"""
Templating Context

Responsibilities:
- Resolves field values across override and language layers
- Escapes user text and formats multi-line descriptions
- Formats publications in APA, IEEE, Chicago and MLA styles
- Assembles the complete LaTeX source for a configuration

Owns: Field resolution, LaTeX markup, template version
Never: Touches the file system outside its own templates, runs the compiler
"""

from cvmanager.contexts.templating.assembler import DocumentAssembler, assemble
from cvmanager.contexts.templating.citations import CITATION_FORMATTERS, format_publication
from cvmanager.contexts.templating.defaults import TEMPLATE_VERSION, get_template_version
from cvmanager.contexts.templating.escaping import escape_latex, join_lines, join_lines_with_thesis
from cvmanager.contexts.templating.field_resolver import FieldResolver, resolve, resolve_lang

__all__ = [
    # Assembly
    "assemble",
    "DocumentAssembler",
    # Building blocks
    "FieldResolver",
    "resolve",
    "resolve_lang",
    "escape_latex",
    "join_lines",
    "join_lines_with_thesis",
    "CITATION_FORMATTERS",
    "format_publication",
    # Versioning
    "TEMPLATE_VERSION",
    "get_template_version",
]
