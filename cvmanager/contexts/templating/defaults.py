"""
Default values for CV document generation.

Provides:
- TEMPLATE_VERSION, stamped on every archive entry
- Configuration defaults (language, citation style)
- Per-language layout constants loaded from layout.yaml
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

# Bump when the generated LaTeX structure changes (new commands, fields, layout)
TEMPLATE_VERSION = "2.0.0"

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "de")
DEFAULT_CITATION_STYLE = "apa"
CITATION_STYLES = ("apa", "ieee", "chicago", "mla")

TEMPLATING_CONTEXT_PATH = Path(__file__).resolve().parent
LAYOUT_PATH = Path(os.getenv("CV_LAYOUT_PATH", TEMPLATING_CONTEXT_PATH / "layout.yaml"))


def get_template_version() -> str:
    """Version of the generated LaTeX structure."""
    return TEMPLATE_VERSION


@lru_cache(maxsize=None)
def _load_layouts(layout_path: Path) -> Dict[str, Dict[str, Any]]:
    return OmegaConf.to_container(OmegaConf.load(layout_path), resolve=True)


def load_layout(language: str, layout_path: Path = None) -> Dict[str, Any]:
    """
    Get spacing constants for a language.

    Args:
        language: CV language code; unknown codes use the default language
        layout_path: Optional layout.yaml path (defaults to LAYOUT_PATH)

    Returns:
        Dict with section_before, section_after, entry_after, project_after, skills_after
    """
    layouts = _load_layouts(Path(layout_path or LAYOUT_PATH))
    return dict(layouts.get(language) or layouts[DEFAULT_LANGUAGE])
