"""
Archive Store

The archive is the ledger of completed generations: one entry per produced PDF, in
creation order. Deleting an entry also deletes its PDF and .tex source.
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from cvmanager.contexts.storage.documents import DataStore
from cvmanager.contexts.storage.logger import _log_info, _log_warning
from cvmanager.utils.timestamp import epoch_millis, now_exact

# Python attribute -> key in archive.json
_JSON_KEYS = {
    "config_id": "configId",
    "config_name": "configName",
    "tex_filename": "texFilename",
    "template_version": "templateVersion",
    "created_at": "createdAt",
}
_ATTRIBUTES = {json_key: attr for attr, json_key in _JSON_KEYS.items()}


@dataclass
class ArchiveEntry:
    """One completed generation."""

    id: str = ""
    config_id: str = ""
    config_name: str = ""
    filename: str = ""
    tex_filename: str = ""
    company: str = ""
    position: str = ""
    notes: str = ""
    tags: List[str] = field(default_factory=list)
    language: str = ""
    template_version: str = ""
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {_JSON_KEYS.get(key, key): value for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArchiveEntry":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            attr = _ATTRIBUTES.get(key, key)
            if attr in known and value is not None:
                values[attr] = value
        return cls(**values)

    @property
    def source_filename(self) -> str:
        """The .tex name; entries written before texFilename existed derive it from the PDF."""
        if self.tex_filename:
            return self.tex_filename
        if self.filename:
            return str(PurePath(self.filename).with_suffix(".tex"))
        return ""


class ArchiveStore:
    """Append/update/delete over archive.json."""

    def __init__(self, store: DataStore = None):
        self.store = store or DataStore()

    def list(self) -> List[ArchiveEntry]:
        return [ArchiveEntry.from_dict(item) for item in self.store.load_archive()]

    def get(self, entry_id: str) -> ArchiveEntry:
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        raise KeyError(f"Archive entry not found: {entry_id}")

    def _new_id(self, existing: set) -> str:
        token = epoch_millis()
        while f"arch-{token}" in existing:
            token += 1
        return f"arch-{token}"

    def append(self, entry: ArchiveEntry) -> ArchiveEntry:
        """
        Append an entry, assigning id and createdAt when missing.

        Raises:
            ValueError: If the entry's id is already taken
        """
        archive = self.store.load_archive()
        existing = {item.get("id") for item in archive}

        if not entry.id:
            entry.id = self._new_id(existing)
        elif entry.id in existing:
            raise ValueError(f"Archive entry already exists: {entry.id}")
        if not entry.created_at:
            entry.created_at = now_exact()

        archive.append(entry.to_dict())
        self.store.save_archive(archive)
        _log_info(f"Archived {entry.filename} as {entry.id}")
        return entry

    def update(self, entry_id: str, data: Dict[str, Any]) -> ArchiveEntry:
        """
        Replace an entry with data, keeping its id (and createdAt unless data has one).

        Raises:
            KeyError: If no entry has entry_id
        """
        archive = self.store.load_archive()
        for index, item in enumerate(archive):
            if item.get("id") == entry_id:
                updated = ArchiveEntry.from_dict({**data, "id": entry_id})
                if not updated.created_at:
                    updated.created_at = item.get("createdAt", "")
                archive[index] = updated.to_dict()
                self.store.save_archive(archive)
                return updated
        raise KeyError(f"Archive entry not found: {entry_id}")

    def delete(self, entry_id: str) -> Optional[ArchiveEntry]:
        """
        Delete an entry and its PDF and .tex files if present.

        Returns:
            The deleted entry, or None if no entry had entry_id
        """
        archive = self.store.load_archive()
        remaining = [item for item in archive if item.get("id") != entry_id]
        if len(remaining) == len(archive):
            return None

        entry = ArchiveEntry.from_dict(next(item for item in archive if item.get("id") == entry_id))
        for filename in (entry.filename, entry.source_filename):
            if not filename:
                continue
            try:
                self.store.delete_output(filename)
            except ValueError:
                _log_warning(f"Skipping invalid artifact name on {entry_id}: {filename!r}")

        self.store.save_archive(remaining)
        _log_info(f"Deleted archive entry {entry_id}")
        return entry
