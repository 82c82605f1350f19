"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_compilation_start(tex_file: Path, num_passes: int, compiler: str, timeout: float) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling {tex_file.name} in {tex_file.parent}")
    _log_debug(f"  Compiler: {compiler}")
    _log_debug(f"  Passes: {num_passes} (timeout {timeout}s each)")


def log_compilation_result(result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        result: CompilationResult from compile_latex()
        elapsed_time: Time taken to compile
        verbose: Show more errors/warnings (default: False)
    """
    if result.success:
        _log_success(f"Compilation succeeded: {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
        _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"Compilation failed: {len(result.errors)} errors ({elapsed_time:.2f}s)")
        error_limit = 10 if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    if result.warnings:
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    # Raw compiler output without the log format prefix on every line
    if (verbose or not result.success) and result.stdout:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nCOMPILER STDOUT:\n{'=' * 80}\n{result.stdout}\n"
        )
