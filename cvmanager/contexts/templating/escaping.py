"""
LaTeX escaping and description formatting.

escape_latex() maps the ten LaTeX special characters in one left-to-right pass, so an
escape sequence inserted for one character is never rewritten by another rule
(a backslash becomes \\textbackslash{} with its braces intact). Escaping is not
idempotent: escaping twice escapes the first pass's backslashes and braces.
"""

import re

# Rule order matches the historical replacement order; the single pass makes it moot.
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_SPECIAL_CHARS_RE = re.compile("|".join(re.escape(char) for char in LATEX_SPECIAL_CHARS))

# Forced line break between description lines
LINE_BREAK = " \\newline\n    "

THESIS_LINE_RE = re.compile(r'^(Thesis): "(.+)"$')

URL_SCHEME_RE = re.compile(r"^https?://")


def escape_latex(text) -> str:
    """Escape arbitrary user text for inclusion in LaTeX. None and "" give ""."""
    if not text:
        return ""
    return _SPECIAL_CHARS_RE.sub(lambda match: LATEX_SPECIAL_CHARS[match.group(0)], str(text))


def join_lines(text: str) -> str:
    """
    Render multi-line text as forced line breaks.

    Lines are trimmed and escaped; blank lines are dropped.

    Example:
        >>> join_lines("A\\nB\\n")
        'A \\\\newline\\n    B'
    """
    if not text:
        return ""
    lines = [escape_latex(line.strip()) for line in text.split("\n")]
    return LINE_BREAK.join(line for line in lines if line)


def _format_thesis_line(line: str) -> str:
    line = line.strip()
    match = THESIS_LINE_RE.match(line)
    if match:
        label, title = match.groups()
        return f"{escape_latex(label)}: \\textit{{``{escape_latex(title)}''}}"
    return escape_latex(line)


def join_lines_with_thesis(text: str) -> str:
    """
    Like join_lines(), but a line shaped exactly like `Thesis: "Some title"` renders
    the quoted title in italics with typographic quotes.
    """
    if not text:
        return ""
    lines = [_format_thesis_line(line) for line in text.split("\n")]
    return LINE_BREAK.join(line for line in lines if line)


def strip_url_scheme(url: str) -> str:
    """Visible text for a link: the URL without its http(s):// prefix."""
    return URL_SCHEME_RE.sub("", url or "")


def href(url: str, text: str) -> str:
    r"""\href with the raw URL as target and text escaped for display."""
    return f"\\href{{{url}}}{{{escape_latex(text)}}}"
