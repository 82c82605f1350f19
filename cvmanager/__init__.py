"""
CV Manager - structured CV data rendered to typeset documents

Stores a profile and a library of CV entries as JSON, lets the user assemble named
configurations (selection, ordering and overrides per target job), and renders a
configuration into a PDF through an external LaTeX compiler.

Architecture:
- Storage Context: JSON documents (profile, sections, configs, archive), asset and output stores
- Templating Context: Field resolution, escaping, citations, LaTeX document assembly
- Rendering Context: External LaTeX compilation and diagnostics
- Generation Context: Orchestrates assembly, compilation, artifact placement and archiving
"""

__version__ = "0.1.0"
