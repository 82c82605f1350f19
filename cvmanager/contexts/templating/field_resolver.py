"""
Field Resolution

Resolves the display value of a logical field across the override layers of a
configuration:

    per-configuration entry override -> language-suffixed field -> plain field -> ""

Lookups are an ordered list of small functions tried in sequence. A lookup returns
None to pass, any string to answer. New layers are added by inserting a lookup, not by
touching call sites.

Examples:
    >>> resolver = FieldResolver(overrides={"e1": {"titleEn": "Lead"}}, language="en")
    >>> resolver.resolve_lang({"id": "e1", "titleEn": "Engineer"}, "title")
    'Lead'
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from cvmanager.contexts.templating.defaults import DEFAULT_LANGUAGE

LANGUAGE_SUFFIXES = {"en": "En", "de": "De"}

# (entry, field) -> value or None to defer to the next lookup
FieldLookup = Callable[[Mapping[str, Any], str], Optional[str]]


def language_suffix(language: str) -> str:
    """Field suffix for a language code ("de" -> "De", anything else -> "En")."""
    return LANGUAGE_SUFFIXES.get(language, LANGUAGE_SUFFIXES[DEFAULT_LANGUAGE])


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def lang_value(record: Mapping[str, Any], field: str, language: str) -> str:
    """
    Language lookup for records without an override layer (profile, section labels).

    The suffixed key wins whenever it is present, even if empty; otherwise the
    unsuffixed key, otherwise "".
    """
    suffixed = _as_text(record.get(field + language_suffix(language)))
    if suffixed is not None:
        return suffixed
    return _as_text(record.get(field)) or ""


class FieldResolver:
    """
    Resolves entry fields for one configuration.

    Attributes:
        overrides: Mapping entry id -> partial field-override record
        language: Configuration language ("en" or "de")
        lookups: Ordered lookups tried by resolve()
    """

    def __init__(
        self,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.overrides = overrides or {}
        self.language = language or DEFAULT_LANGUAGE
        self.lookups: List[FieldLookup] = [self._from_override, self._from_entry]

    def _from_override(self, entry: Mapping[str, Any], field: str) -> Optional[str]:
        override = self.overrides.get(entry.get("id")) or {}
        value = _as_text(override.get(field))
        # Empty overrides are treated as "not overridden"
        return value if value else None

    @staticmethod
    def _from_entry(entry: Mapping[str, Any], field: str) -> Optional[str]:
        return _as_text(entry.get(field))

    def resolve(self, entry: Mapping[str, Any], field: str) -> str:
        """
        Resolve a field without language handling.

        Returns the non-empty override for entry["id"] if there is one, else
        entry[field] if defined, else "".
        """
        for lookup in self.lookups:
            value = lookup(entry, field)
            if value is not None:
                return value
        return ""

    def resolve_lang(self, entry: Mapping[str, Any], field: str) -> str:
        """
        Resolve a language-aware field.

        Tries field + language suffix first; an empty result falls back to the
        unsuffixed field, so an override without suffix applies to both languages.
        """
        return (
            self.resolve(entry, field + language_suffix(self.language))
            or self.resolve(entry, field)
        )

    __call__ = resolve


def resolve(entry: Mapping[str, Any], field: str, overrides: Optional[Dict] = None) -> str:
    """Functional form of FieldResolver.resolve()."""
    return FieldResolver(overrides).resolve(entry, field)


def resolve_lang(
    entry: Mapping[str, Any],
    field: str,
    language: str,
    overrides: Optional[Dict] = None,
) -> str:
    """Functional form of FieldResolver.resolve_lang()."""
    return FieldResolver(overrides, language).resolve_lang(entry, field)
