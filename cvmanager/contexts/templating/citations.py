"""
Publication Citation Formatters

One function per citation style. Each takes a publication entry and a field getter
(normally FieldResolver.resolve, since publication fields carry no language suffix)
and returns a full-width tabularx block. IEEE also needs the entry's 1-based position
in the rendered list.

Ordering across publications is the caller's business; formatters never sort.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from cvmanager.contexts.templating.defaults import DEFAULT_CITATION_STYLE
from cvmanager.contexts.templating.escaping import escape_latex, href, strip_url_scheme

FieldGetter = Callable[[Mapping[str, Any], str], str]

BLOCK_BEGIN = "\\noindent\\begin{tabularx}{\\textwidth}{@{}X@{}}\n"
BLOCK_END = "\n\\end{tabularx}\n\n"


def _publication_fields(entry: Mapping[str, Any], get_field: FieldGetter) -> Dict[str, str]:
    return {
        name: get_field(entry, name) for name in ("authors", "year", "title", "journal", "url")
    }


def _wrap(body: str, url: str) -> str:
    if url:
        body += "\n    " + href(url, strip_url_scheme(url))
    return BLOCK_BEGIN + body + BLOCK_END


def format_apa(entry: Mapping[str, Any], get_field: FieldGetter, index: Optional[int] = None) -> str:
    """Authors (Year). Title. Journal."""
    f = _publication_fields(entry, get_field)
    body = (
        f"    \\textbf{{{escape_latex(f['authors'])}}} ({escape_latex(f['year'])}).\\\\[2pt]\n"
        f"    \\textit{{{escape_latex(f['title'])}}}. {escape_latex(f['journal'])}.\\\\[2pt]"
    )
    return _wrap(body, f["url"])


def format_ieee(entry: Mapping[str, Any], get_field: FieldGetter, index: Optional[int] = None) -> str:
    """[n] Authors, "Title," Journal, Year."""
    f = _publication_fields(entry, get_field)
    number = index if index is not None else 1
    body = (
        f"    [{number}] {escape_latex(f['authors'])}, ``{escape_latex(f['title'])},'' "
        f"\\textit{{{escape_latex(f['journal'])}}}, {escape_latex(f['year'])}.\\\\[2pt]"
    )
    return _wrap(body, f["url"])


def format_chicago(
    entry: Mapping[str, Any], get_field: FieldGetter, index: Optional[int] = None
) -> str:
    """Authors. Year. "Title." Journal."""
    f = _publication_fields(entry, get_field)
    body = (
        f"    {escape_latex(f['authors'])}. {escape_latex(f['year'])}. "
        f"``{escape_latex(f['title'])}.'' \\textit{{{escape_latex(f['journal'])}}}.\\\\[2pt]"
    )
    return _wrap(body, f["url"])


def format_mla(entry: Mapping[str, Any], get_field: FieldGetter, index: Optional[int] = None) -> str:
    """Authors. "Title." Journal, Year."""
    f = _publication_fields(entry, get_field)
    body = (
        f"    {escape_latex(f['authors'])}. ``{escape_latex(f['title'])}.'' "
        f"\\textit{{{escape_latex(f['journal'])}}}, {escape_latex(f['year'])}.\\\\[2pt]"
    )
    return _wrap(body, f["url"])


CITATION_FORMATTERS: Dict[str, Callable[..., str]] = {
    "apa": format_apa,
    "ieee": format_ieee,
    "chicago": format_chicago,
    "mla": format_mla,
}


def get_citation_formatter(style: Optional[str]) -> Callable[..., str]:
    """Formatter for a style name; unknown or missing styles fall back to APA."""
    return CITATION_FORMATTERS.get((style or "").lower(), CITATION_FORMATTERS[DEFAULT_CITATION_STYLE])


def format_publication(
    entry: Mapping[str, Any], get_field: FieldGetter, style: Optional[str], index: int
) -> str:
    """Format one publication in the given style at 1-based list position index."""
    return get_citation_formatter(style)(entry, get_field, index)
