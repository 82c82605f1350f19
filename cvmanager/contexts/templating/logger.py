"""
Templating context logger.

Provides logging interface for the templating context with automatic [template] prefix.
Assembly is pure and never configures sinks; the calling context (generation, CLI)
owns logger setup.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
