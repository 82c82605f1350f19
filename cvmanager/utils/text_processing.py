"""Text processing utilities for generated LaTeX output."""

import re


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        pattern = r"\n[ \t]*\n([ \t]*\n)*"
    else:
        # Only runs of 2+ blank lines
        pattern = r"\n[ \t]*\n([ \t]*\n)+"

    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)


def tail(text: str, max_chars: int) -> str:
    """Return at most the last max_chars characters of text."""
    if max_chars <= 0:
        return ""
    return text[-max_chars:]


def truncate_display(text: str, max_len: int) -> str:
    """Truncate text for single-line display, appending '...' when cut."""
    text = " ".join(text.split())
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
