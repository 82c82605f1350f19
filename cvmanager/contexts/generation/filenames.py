"""
Output filename derivation.

    CV_<profile name>_<company or configuration name>_<YYYY-MM-DD>.pdf

Both components are restricted to ASCII letters, digits and German umlauts/eszett.
Same inputs on the same day give the same name, so a regeneration overwrites the
earlier PDF.
"""

import re
from pathlib import PurePath
from typing import Optional

from cvmanager.utils.timestamp import today

ALLOWED_CHARS = "a-zA-Z0-9äöüÄÖÜß"
_TARGET_UNSAFE_RE = re.compile(f"[^{ALLOWED_CHARS}]")
_NAME_UNSAFE_RE = re.compile(f"[^{ALLOWED_CHARS} ]")
_WHITESPACE_RE = re.compile(r"\s+")


def safe_target_name(company: Optional[str], config_name: Optional[str]) -> str:
    """Company (or configuration name, or 'cv') with every disallowed character as '_'."""
    return _TARGET_UNSAFE_RE.sub("_", company or config_name or "cv")


def safe_profile_name(name: Optional[str]) -> str:
    """Profile name with disallowed characters dropped and spaces collapsed to '_'."""
    cleaned = _NAME_UNSAFE_RE.sub("", name or "CV")
    return _WHITESPACE_RE.sub("_", cleaned)


def build_output_filename(
    profile_name: Optional[str],
    company: Optional[str],
    config_name: Optional[str],
    date: Optional[str] = None,
) -> str:
    """
    Derive the PDF filename for a generation.

    Example:
        >>> build_output_filename("Jane Doe", "ACME Corp.", "Default", "2025-01-31")
        'CV_Jane_Doe_ACME_Corp__2025-01-31.pdf'
    """
    return (
        f"CV_{safe_profile_name(profile_name)}_{safe_target_name(company, config_name)}"
        f"_{date or today()}.pdf"
    )


def source_filename_for(pdf_filename: str) -> str:
    """The .tex filename stored next to a PDF."""
    return str(PurePath(pdf_filename).with_suffix(".tex"))
