"""
Generation Context

Responsibilities:
- Orchestrates one generation: assemble, compile in a scratch workspace, store, archive
- Derives output filenames
- Maps failures onto the not_found / compilation_failed / io_failure error kinds

Owns: Scratch workspaces, the generation workflow
Never: Edits profile, sections or configurations
"""

from cvmanager.contexts.generation.exceptions import (
    CompilationFailedError,
    ConfigurationNotFoundError,
    GenerationError,
    GenerationIOError,
)
from cvmanager.contexts.generation.orchestrator import GenerationResult, JobMetadata, generate_cv

__all__ = [
    "generate_cv",
    "GenerationResult",
    "JobMetadata",
    "GenerationError",
    "ConfigurationNotFoundError",
    "CompilationFailedError",
    "GenerationIOError",
]
