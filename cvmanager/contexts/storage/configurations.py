"""
Configuration Lifecycle

A configuration is a named view over the profile and section library for one target
job: language, logo and citation options, section order, enabled entries, entry order,
per-entry overrides, configuration-only custom entries and profile overrides.

New configurations enable every base entry. Custom entries take part in enabling,
ordering and overrides exactly like base entries, so their ids must be unique across
the section's combined item set.
"""

import copy
from typing import Any, Dict, List, Mapping, Optional

from cvmanager.contexts.storage.documents import DataStore
from cvmanager.contexts.storage.logger import _log_info
from cvmanager.contexts.templating.defaults import (
    CITATION_STYLES,
    DEFAULT_CITATION_STYLE,
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
)
from cvmanager.utils.timestamp import epoch_millis


def new_configuration_id(taken: Optional[set] = None) -> str:
    """"config-<ms>" id, bumped past any id in taken."""
    token = epoch_millis()
    while f"config-{token}" in (taken or set()):
        token += 1
    return f"config-{token}"


def new_configuration(
    name: str, language: str = DEFAULT_LANGUAGE, sections: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build a configuration with every base entry enabled.

    Raises:
        ValueError: If name is blank or language is unsupported
    """
    if not name or not name.strip():
        raise ValueError("Configuration name must not be empty")
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Use one of {SUPPORTED_LANGUAGES}")

    sections = sections or {}
    return {
        "id": new_configuration_id(),
        "name": name.strip(),
        "language": language,
        "useLogos": False,
        "citationStyle": DEFAULT_CITATION_STYLE,
        "sectionOrder": list(sections.keys()),
        "enabledEntries": {
            key: [item["id"] for item in section.get("items") or [] if "id" in item]
            for key, section in sections.items()
        },
        "entryOrder": {},
        "overrides": {},
        "customEntries": {},
        "profileOverrides": {},
    }


def duplicate_configuration(configuration: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep copy with a fresh id and the name suffixed ' (Copy)'."""
    duplicate = copy.deepcopy(dict(configuration))
    duplicate["id"] = new_configuration_id()
    duplicate["name"] = f"{configuration.get('name', '')} (Copy)"
    return duplicate


def clean_profile_overrides(overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop empty overrides so the profile value shows through."""
    return {key: value for key, value in (overrides or {}).items() if value not in ("", None)}


def validate_configuration(configuration: Mapping[str, Any]) -> List[str]:
    """
    Problems that would make a configuration render differently than intended.

    Dangling entry ids are not problems; they are filtered at render time.
    """
    problems = []
    if not configuration.get("id"):
        problems.append("missing id")
    if configuration.get("language", DEFAULT_LANGUAGE) not in SUPPORTED_LANGUAGES:
        problems.append(f"unsupported language '{configuration.get('language')}'")
    style = configuration.get("citationStyle", DEFAULT_CITATION_STYLE)
    if style not in CITATION_STYLES:
        problems.append(f"unknown citation style '{style}' (APA will be used)")
    return problems


def _section_item_ids(
    configuration: Mapping[str, Any], sections: Mapping[str, Any], section_key: str
) -> set:
    base = (sections.get(section_key) or {}).get("items") or []
    custom = (configuration.get("customEntries") or {}).get(section_key) or []
    return {item.get("id") for item in base + custom}


def add_custom_entry(
    configuration: Dict[str, Any],
    sections: Mapping[str, Any],
    section_key: str,
    entry: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Add a configuration-only entry to a section and enable it.

    The entry keeps its id when that id is free in the section's combined item set,
    otherwise it gets a new "custom-<ms>" id.

    Returns:
        The stored entry (with its final id)
    """
    taken = _section_item_ids(configuration, sections, section_key)
    stored = dict(entry)

    entry_id = stored.get("id")
    if not entry_id or entry_id in taken:
        token = epoch_millis()
        while f"custom-{token}" in taken:
            token += 1
        stored["id"] = f"custom-{token}"

    configuration.setdefault("customEntries", {}).setdefault(section_key, []).append(stored)
    configuration.setdefault("enabledEntries", {}).setdefault(section_key, []).append(stored["id"])
    return stored


def remove_custom_entry(configuration: Dict[str, Any], section_key: str, entry_id: str) -> None:
    """Remove a custom entry together with its enabled flag and ordering slot."""
    custom = (configuration.get("customEntries") or {}).get(section_key)
    if custom is not None:
        configuration["customEntries"][section_key] = [
            item for item in custom if item.get("id") != entry_id
        ]

    for key in ("enabledEntries", "entryOrder"):
        ids = (configuration.get(key) or {}).get(section_key)
        if ids is not None:
            configuration[key][section_key] = [item_id for item_id in ids if item_id != entry_id]

    overrides = configuration.get("overrides") or {}
    overrides.pop(entry_id, None)


class ConfigurationStore:
    """List/get/create/update/delete over configs.json (whole-document writes)."""

    def __init__(self, store: DataStore = None):
        self.store = store or DataStore()

    def list(self) -> List[Dict[str, Any]]:
        return self.store.load_configs()

    def find(self, config_id: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.store.load_configs() if c.get("id") == config_id), None)

    def get(self, config_id: str) -> Dict[str, Any]:
        configuration = self.find(config_id)
        if configuration is None:
            raise KeyError(f"Configuration not found: {config_id}")
        return configuration

    def create(self, configuration: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new configuration; a fresh id is assigned when missing or taken."""
        configs = self.store.load_configs()
        stored = dict(configuration)
        stored["profileOverrides"] = clean_profile_overrides(stored.get("profileOverrides"))
        if not stored.get("id") or any(c.get("id") == stored["id"] for c in configs):
            stored["id"] = new_configuration_id({c.get("id") for c in configs})
        configs.append(stored)
        self.store.save_configs(configs)
        _log_info(f"Created configuration {stored['id']} ({stored.get('name', '')})")
        return stored

    def update(self, config_id: str, configuration: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a configuration wholesale, keeping its id."""
        configs = self.store.load_configs()
        for index, existing in enumerate(configs):
            if existing.get("id") == config_id:
                stored = {**configuration, "id": config_id}
                stored["profileOverrides"] = clean_profile_overrides(stored.get("profileOverrides"))
                configs[index] = stored
                self.store.save_configs(configs)
                return stored
        raise KeyError(f"Configuration not found: {config_id}")

    def delete(self, config_id: str) -> bool:
        """Delete a configuration. Generated artifacts and archive entries are kept."""
        configs = self.store.load_configs()
        remaining = [c for c in configs if c.get("id") != config_id]
        if len(remaining) == len(configs):
            return False
        self.store.save_configs(remaining)
        _log_info(f"Deleted configuration {config_id}")
        return True
