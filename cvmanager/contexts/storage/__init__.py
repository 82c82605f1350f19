"""
Storage Context

Responsibilities:
- Reads and writes the whole-document JSON stores (profile, sections, configs, archive)
- Lists the shared asset store and manages the output store
- Configuration lifecycle (defaults, duplication, custom entries)
- Archive ledger with cascading artifact deletion

Owns: Persistence layout under CV_DATA_PATH, CV_ASSETS_PATH, CV_OUTPUT_PATH
Never: Generates LaTeX or runs the compiler
"""

from cvmanager.contexts.storage.archive import ArchiveEntry, ArchiveStore
from cvmanager.contexts.storage.configurations import (
    ConfigurationStore,
    duplicate_configuration,
    new_configuration,
    validate_configuration,
)
from cvmanager.contexts.storage.documents import DataStore

__all__ = [
    "DataStore",
    "ArchiveEntry",
    "ArchiveStore",
    "ConfigurationStore",
    "new_configuration",
    "duplicate_configuration",
    "validate_configuration",
]
