"""
Generation context logger.

Provides logging interface for the generation context with automatic [generate] prefix.
All generation modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvmanager.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[generate]"


def setup_generation_logger(log_dir: Path, compiler: str) -> Path:
    """
    Setup logger for one generation session.

    Args:
        log_dir: Directory for this session
        compiler: LaTeX compiler command, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="generate",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": compiler},
    )


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [generate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [generate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_generation_start(configuration: dict, company: str, position: str) -> None:
    """Log which configuration is being generated and for which job."""
    _log_info(
        f"Generating '{configuration.get('name', '')}' ({configuration.get('id')}, "
        f"{configuration.get('language', 'en')})"
    )
    if company or position:
        _log_debug(f"  Job: {position or '-'} at {company or '-'}")
