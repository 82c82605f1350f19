"""
Shared utilities for CV Manager.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps
- Text normalization
"""

from cvmanager.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
