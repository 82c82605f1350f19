"""
JSON Document Store

Profile, sections, configurations and archive are independent top-level JSON
documents, always read and written whole. Concurrent writers race on "last full write
wins"; there is no locking.

Layout:
    {data_path}/profile.json    object
    {data_path}/sections.json   object: section key -> section
    {data_path}/configs.json    list of configurations
    {data_path}/archive.json    list of archive entries
    {assets_path}/*             uploaded photos and logos
    {output_path}/*.pdf|*.tex   generated artifacts
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

from cvmanager.contexts.storage.logger import _log_debug

load_dotenv()
CV_DATA_PATH = Path(os.getenv("CV_DATA_PATH", "data"))
CV_ASSETS_PATH = Path(os.getenv("CV_ASSETS_PATH", "assets"))
CV_OUTPUT_PATH = Path(os.getenv("CV_OUTPUT_PATH", "output"))

PROFILE_FILE = "profile.json"
SECTIONS_FILE = "sections.json"
CONFIGS_FILE = "configs.json"
ARCHIVE_FILE = "archive.json"


class DataStore:
    """
    File-system access for the persisted documents, the asset store and the output store.

    Missing documents read as empty ({} or []); directories are created on first write.
    """

    def __init__(
        self,
        data_path: Path = None,
        assets_path: Path = None,
        output_path: Path = None,
    ):
        self.data_path = Path(data_path or CV_DATA_PATH)
        self.assets_path = Path(assets_path or CV_ASSETS_PATH)
        self.output_path = Path(output_path or CV_OUTPUT_PATH)

    # Documents

    def _read_json(self, filename: str, default):
        path = self.data_path / filename
        if not path.exists():
            return default
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, filename: str, data) -> None:
        self.data_path.mkdir(parents=True, exist_ok=True)
        path = self.data_path / filename

        # Temp file in the same directory, then move over the live document
        temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=self.data_path, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            shutil.move(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
        _log_debug(f"Wrote {path}")

    def load_profile(self) -> Dict[str, Any]:
        return self._read_json(PROFILE_FILE, {})

    def save_profile(self, profile: Dict[str, Any]) -> None:
        self._write_json(PROFILE_FILE, profile)

    def load_sections(self) -> Dict[str, Any]:
        return self._read_json(SECTIONS_FILE, {})

    def save_sections(self, sections: Dict[str, Any]) -> None:
        self._write_json(SECTIONS_FILE, sections)

    def load_configs(self) -> List[Dict[str, Any]]:
        return self._read_json(CONFIGS_FILE, [])

    def save_configs(self, configs: List[Dict[str, Any]]) -> None:
        self._write_json(CONFIGS_FILE, configs)

    def load_archive(self) -> List[Dict[str, Any]]:
        return self._read_json(ARCHIVE_FILE, [])

    def save_archive(self, archive: List[Dict[str, Any]]) -> None:
        self._write_json(ARCHIVE_FILE, archive)

    # Asset store

    def list_assets(self) -> List[Path]:
        """All regular files in the asset store (empty if the store does not exist)."""
        if not self.assets_path.is_dir():
            return []
        return sorted(path for path in self.assets_path.iterdir() if path.is_file())

    def copy_assets_to(self, destination: Path) -> int:
        """Flat-copy every asset into destination; returns the number of files copied."""
        assets = self.list_assets()
        for asset in assets:
            shutil.copy2(asset, destination / asset.name)
        return len(assets)

    # Output store

    def output_path_for(self, filename: str) -> Path:
        """Path of a stored artifact; rejects names that would escape the output store."""
        if not filename or Path(filename).name != filename:
            raise ValueError(f"Invalid output filename: {filename!r}")
        return self.output_path / filename

    def save_output(self, source: Path, filename: str) -> Path:
        """Copy a file into the output store under filename, replacing any existing file."""
        self.output_path.mkdir(parents=True, exist_ok=True)
        target = self.output_path_for(filename)
        shutil.copyfile(source, target)
        _log_debug(f"Stored {target}")
        return target

    def output_exists(self, filename: str) -> bool:
        return self.output_path_for(filename).is_file()

    def delete_output(self, filename: str) -> bool:
        """Delete a stored artifact; returns False if it did not exist."""
        path = self.output_path_for(filename)
        if not path.is_file():
            return False
        path.unlink()
        _log_debug(f"Deleted {path}")
        return True

    def list_outputs(self, suffix: str = ".pdf") -> List[str]:
        """Filenames in the output store with the given suffix."""
        if not self.output_path.is_dir():
            return []
        return sorted(
            path.name
            for path in self.output_path.iterdir()
            if path.is_file() and path.suffix == suffix
        )
