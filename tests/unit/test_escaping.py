"""Unit tests for LaTeX escaping and description formatting."""

import pytest

from cvmanager.contexts.templating.escaping import (
    LATEX_SPECIAL_CHARS,
    LINE_BREAK,
    escape_latex,
    href,
    join_lines,
    join_lines_with_thesis,
    strip_url_scheme,
)

ALL_SPECIALS = "a\\b&c%d$e#f_g{h}i~j^k"


@pytest.mark.unit
class TestEscapeLatex:
    """Tests for escape_latex()."""

    def test_each_special_character(self):
        assert escape_latex("R&D") == r"R\&D"
        assert escape_latex("50%") == r"50\%"
        assert escape_latex("$5") == r"\$5"
        assert escape_latex("#1") == r"\#1"
        assert escape_latex("a_b") == r"a\_b"
        assert escape_latex("{x}") == r"\{x\}"
        assert escape_latex("~") == r"\textasciitilde{}"
        assert escape_latex("^") == r"\textasciicircum{}"

    def test_backslash_escape_keeps_its_braces(self):
        """The braces inserted for a backslash are not escaped again."""
        assert escape_latex("C:\\path") == r"C:\textbackslash{}path"

    def test_empty_and_none(self):
        assert escape_latex("") == ""
        assert escape_latex(None) == ""

    def test_plain_text_unchanged(self):
        assert escape_latex("Jane Doe, Müller-Lüdenscheidt") == "Jane Doe, Müller-Lüdenscheidt"

    def test_single_pass_leaves_no_unescaped_special(self):
        escaped = escape_latex(ALL_SPECIALS)

        # Remove every escape sequence (longest first); only plain letters may remain
        remainder = escaped
        for sequence in sorted(LATEX_SPECIAL_CHARS.values(), key=len, reverse=True):
            remainder = remainder.replace(sequence, "")

        assert remainder == "abcdefghijk"

    def test_not_idempotent(self):
        """Escaping twice escapes the first pass's backslashes and braces."""
        once = escape_latex("&")
        twice = escape_latex(once)

        assert once == r"\&"
        assert twice == r"\textbackslash{}\&"
        assert twice != once


@pytest.mark.unit
class TestJoinLines:
    """Tests for multi-line description joining."""

    def test_two_lines_no_trailing_segment(self):
        assert join_lines("A\nB\n") == "A" + LINE_BREAK + "B"

    def test_lines_are_trimmed_escaped_and_blank_lines_dropped(self):
        assert join_lines("  50% \n\n   \n a_b ") == r"50\%" + LINE_BREAK + r"a\_b"

    def test_empty(self):
        assert join_lines("") == ""
        assert join_lines(None) == ""

    def test_thesis_line_is_italicized(self):
        result = join_lines_with_thesis('Thesis: "Deep & Wide"')
        assert result == r"Thesis: \textit{``Deep \& Wide''}"

    def test_thesis_line_among_other_lines(self):
        result = join_lines_with_thesis('M.Sc. Physics\n  Thesis: "Spin Chains"  \n')
        assert result == "M.Sc. Physics" + LINE_BREAK + r"Thesis: \textit{``Spin Chains''}"

    def test_other_labels_are_escaped_verbatim(self):
        assert join_lines_with_thesis('Project: "X_1"') == 'Project: "X\\_1"'
        assert join_lines_with_thesis('thesis: "x"') == 'thesis: "x"'


@pytest.mark.unit
def test_strip_url_scheme():
    assert strip_url_scheme("https://example.com/a") == "example.com/a"
    assert strip_url_scheme("http://example.com") == "example.com"
    assert strip_url_scheme("example.com") == "example.com"
    assert strip_url_scheme(None) == ""


@pytest.mark.unit
def test_href_escapes_text_only():
    assert href("https://x.org/a_b", "a_b") == r"\href{https://x.org/a_b}{a\_b}"
