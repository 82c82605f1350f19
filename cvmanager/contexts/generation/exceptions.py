"""Generation errors, one class per error kind surfaced to callers."""

from typing import Any, Dict, List, Optional


class GenerationError(Exception):
    """
    Base class for failures of generate_cv().

    Attributes:
        kind: Stable machine-readable error kind
        message: Error description
        detail: Optional diagnostic payload for the user (e.g. a log excerpt)
    """

    kind = "generation_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for API/CLI shells: {"kind", "error", "detail"}."""
        return {"kind": self.kind, "error": self.message, "detail": self.detail}


class ConfigurationNotFoundError(GenerationError):
    """The requested configuration id does not exist. Nothing was written."""

    kind = "not_found"

    def __init__(self, config_id: str):
        self.config_id = config_id
        super().__init__(f"Configuration not found: {config_id}")


class CompilationFailedError(GenerationError):
    """
    The compiler produced no PDF after all passes (or timed out).

    Attributes:
        log_excerpt: Tail of the compiler log (bounded)
        errors: Parsed LaTeX error lines
    """

    kind = "compilation_failed"

    def __init__(self, log_excerpt: str = "", errors: Optional[List[str]] = None):
        self.log_excerpt = log_excerpt
        self.errors = errors or []

        parts = ["LaTeX compilation failed"]
        if self.errors:
            parts.append(f": {self.errors[0]}")
            if len(self.errors) > 1:
                parts.append(f" (+{len(self.errors) - 1} more)")

        super().__init__("".join(parts), detail=log_excerpt)


class GenerationIOError(GenerationError):
    """A workspace, asset or output file operation failed."""

    kind = "io_failure"
