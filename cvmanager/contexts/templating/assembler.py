"""
Document Assembler

Merges a profile, the section library and one configuration into a complete LaTeX
source document. Pure: no file writes, no external calls, and no exceptions for
missing optional data (missing fields render as empty strings, sections with no
enabled items are skipped).

Steps:
1. Apply configuration.profileOverrides to the profile (non-empty values win)
2. Preamble (spacing by language, logo or text project rows)
3. Optional photo block
4. Header (name, title, labelled personal fields)
5. One block per section in configuration.sectionOrder, dispatched on section type
6. Footer (location and CV date, or \\today)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from cvmanager.contexts.templating.citations import format_publication
from cvmanager.contexts.templating.defaults import (
    DEFAULT_CITATION_STYLE,
    DEFAULT_LANGUAGE,
    load_layout,
)
from cvmanager.contexts.templating.escaping import (
    LINE_BREAK,
    escape_latex,
    join_lines,
    join_lines_with_thesis,
)
from cvmanager.contexts.templating.field_resolver import FieldResolver, lang_value
from cvmanager.contexts.templating.logger import _log_debug, _log_warning
from cvmanager.contexts.templating.registries import TemplateRegistry
from cvmanager.utils.text_processing import set_max_consecutive_blank_lines

# (label field, value field, language-aware value)
HEADER_FIELDS = [
    ("dateOfBirthLabel", "dateOfBirth", True),
    ("nationalityLabel", "nationality", True),
    ("locationLabel", "location", True),
    ("emailLabel", "email", False),
]
PHONE_FIELD = ("phoneLabel", "phone", False)


@dataclass
class RenderContext:
    """Per-document state shared by the section renderers."""

    resolver: FieldResolver
    language: str = DEFAULT_LANGUAGE
    use_logos: bool = False
    citation_style: str = DEFAULT_CITATION_STYLE
    layout: Dict[str, Any] = field(default_factory=dict)


def merge_profile(profile: Mapping[str, Any], profile_overrides: Optional[Mapping]) -> Dict:
    """Profile with configuration overrides applied; empty/None overrides are ignored."""
    merged = dict(profile or {})
    for key, value in (profile_overrides or {}).items():
        if value is not None and value != "":
            merged[key] = value
    return merged


def order_items(items: List[Dict], order: Optional[List[str]]) -> List[Dict]:
    """
    Apply a partial id ordering.

    Listed ids come first in listed order, every other item follows in its original
    order. Unknown ids in the ordering are ignored; no item is dropped.
    """
    if not order:
        return list(items)

    by_id = {}
    for item in items:
        by_id.setdefault(item.get("id"), item)

    ordered = []
    placed = set()
    for item_id in order:
        if item_id in by_id and item_id not in placed:
            ordered.append(by_id[item_id])
            placed.add(item_id)

    ordered.extend(item for item in items if item.get("id") not in placed)
    return ordered


def select_section_items(
    section_key: str, section: Mapping[str, Any], configuration: Mapping[str, Any]
) -> List[Dict]:
    """
    Items of one section as rendered under a configuration.

    Base items plus the configuration's custom items, ordered by entryOrder, filtered
    to enabledEntries. Dangling ids anywhere are tolerated.
    """
    custom_entries = configuration.get("customEntries") or {}
    combined = list(section.get("items") or []) + list(custom_entries.get(section_key) or [])

    ordered = order_items(combined, (configuration.get("entryOrder") or {}).get(section_key))

    enabled = set((configuration.get("enabledEntries") or {}).get(section_key) or [])
    return [item for item in ordered if item.get("id") in enabled]


class DocumentAssembler:
    """Assembles LaTeX CV documents from profile, sections and configuration."""

    def __init__(self, template_registry: TemplateRegistry = None, layout_path=None):
        self.template_registry = template_registry or TemplateRegistry()
        self.layout_path = layout_path
        self.section_renderers: Dict[str, Callable[[List[Dict], RenderContext], str]] = {
            "entries": self.render_entries,
            "projects": self.render_projects,
            "publications": self.render_publications,
            "skills": self.render_skills,
        }

    # Section bodies

    def render_entries(self, items: List[Dict], ctx: RenderContext) -> str:
        """Two-column rows: dates | title, subtitle, description (+ optional link)."""
        resolver = ctx.resolver
        rows = []
        for entry in items:
            description = join_lines_with_thesis(resolver.resolve_lang(entry, "description"))

            link_url = resolver.resolve(entry, "linkUrl")
            link_text = resolver.resolve_lang(entry, "linkText")
            if link_url and link_text:
                link = f"\\href{{{link_url}}}{{\\small {escape_latex(link_text)}}}"
                description = f"{description}{LINE_BREAK}{link}" if description else link

            rows.append(
                {
                    "dates": resolver.resolve_lang(entry, "dates"),
                    "title": resolver.resolve_lang(entry, "title"),
                    "subtitle": resolver.resolve_lang(entry, "subtitle"),
                    "description_latex": description,
                }
            )

        return self.template_registry.get_template("entries").render(items=rows)

    def render_projects(self, items: List[Dict], ctx: RenderContext) -> str:
        """Project rows; dates, company, logo and stack carry no language suffix."""
        resolver = ctx.resolver
        rows = [
            {
                "logo": resolver.resolve(entry, "logo"),
                "company": resolver.resolve(entry, "company"),
                "title": resolver.resolve_lang(entry, "title"),
                "role": resolver.resolve_lang(entry, "role"),
                "description_latex": join_lines(resolver.resolve_lang(entry, "description")),
                "stack": resolver.resolve(entry, "stack"),
                "dates": resolver.resolve(entry, "dates"),
            }
            for entry in items
        ]
        return self.template_registry.get_template("projects").render(items=rows)

    def render_publications(self, items: List[Dict], ctx: RenderContext) -> str:
        """Citations in the configured style, numbered by rendered position."""
        return "".join(
            format_publication(entry, ctx.resolver.resolve, ctx.citation_style, index)
            for index, entry in enumerate(items, start=1)
        )

    def render_skills(self, items: List[Dict], ctx: RenderContext) -> str:
        """Label -> value table; a missing label falls back to the value."""
        resolver = ctx.resolver
        rows = []
        for entry in items:
            value = resolver.resolve_lang(entry, "value")
            label = resolver.resolve_lang(entry, "label") or value
            rows.append({"label": label, "value": value})
        return self.template_registry.get_template("skills").render(rows=rows, layout=ctx.layout)

    # Document pieces

    def render_header(self, profile: Mapping[str, Any], language: str) -> str:
        fields = []
        for label_field, value_field, localized in HEADER_FIELDS:
            value = (
                lang_value(profile, value_field, language)
                if localized
                else profile.get(value_field) or ""
            )
            fields.append({"label": lang_value(profile, label_field, language), "value": value})

        if profile.get(PHONE_FIELD[1]):
            fields.append(
                {
                    "label": lang_value(profile, PHONE_FIELD[0], language),
                    "value": profile[PHONE_FIELD[1]],
                }
            )

        return self.template_registry.get_structure("header").render(
            name=profile.get("name") or "",
            title=lang_value(profile, "title", language),
            fields=fields,
        )

    def render_section(
        self, section_key: str, section: Mapping[str, Any], items: List[Dict], ctx: RenderContext
    ) -> str:
        section_type = section.get("type")
        renderer = self.section_renderers.get(section_type)
        if renderer is None:
            _log_warning(f"Unknown section type '{section_type}' in section '{section_key}'")
            content = f"% Unknown section type: {section_type}\n"
        else:
            content = renderer(items, ctx)

        return self.template_registry.get_structure("section_wrapper").render(
            label=lang_value(section, "label", ctx.language), content=content
        )

    def assemble(
        self,
        profile: Mapping[str, Any],
        sections: Mapping[str, Any],
        configuration: Mapping[str, Any],
    ) -> str:
        """
        Generate the complete LaTeX document.

        Args:
            profile: Profile document
            sections: Mapping section key -> section record
            configuration: Configuration record

        Returns:
            LaTeX source string
        """
        sections = sections or {}
        language = configuration.get("language") or DEFAULT_LANGUAGE
        merged = merge_profile(profile, configuration.get("profileOverrides"))

        ctx = RenderContext(
            resolver=FieldResolver(configuration.get("overrides"), language),
            language=language,
            use_logos=bool(configuration.get("useLogos", False)),
            citation_style=configuration.get("citationStyle") or DEFAULT_CITATION_STYLE,
            layout=load_layout(language, self.layout_path),
        )

        structure = self.template_registry.get_structure
        preamble = structure("preamble").render(layout=ctx.layout, use_logos=ctx.use_logos)
        photo_block = structure("photo").render(photo=merged["photo"]) if merged.get("photo") else ""

        rendered_sections = []
        section_order = configuration.get("sectionOrder") or list(sections.keys())
        for section_key in section_order:
            section = sections.get(section_key)
            if not section:
                _log_debug(f"Skipping missing section '{section_key}'")
                continue

            items = select_section_items(section_key, section, configuration)
            if not items:
                continue

            rendered_sections.append(self.render_section(section_key, section, items, ctx))

        footer = structure("footer").render(
            location=lang_value(merged, "location", language),
            cv_date=lang_value(merged, "cvDate", language),
        )

        document = structure("document").render(
            preamble=preamble,
            photo_block=photo_block,
            header=self.render_header(merged, language),
            sections=rendered_sections,
            footer=footer,
        )

        _log_debug(
            f"Assembled '{configuration.get('name', configuration.get('id'))}' "
            f"({language}, {len(rendered_sections)} sections)"
        )
        return set_max_consecutive_blank_lines(document, max_consecutive=1)


_default_assembler: Optional[DocumentAssembler] = None


def assemble(
    profile: Mapping[str, Any], sections: Mapping[str, Any], configuration: Mapping[str, Any]
) -> str:
    """Assemble a document with the default template set."""
    global _default_assembler
    if _default_assembler is None:
        _default_assembler = DocumentAssembler()
    return _default_assembler.assemble(profile, sections, configuration)
