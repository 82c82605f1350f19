"""
LaTeX Compilation Module

Runs the external LaTeX compiler against a source file inside its workspace.

Success means "the PDF exists after all passes". pdflatex regularly exits non-zero on
cosmetic problems while still writing a valid PDF, so the exit code only feeds the
diagnostics. A pass that hits its timeout ends compilation and counts as failure.
"""

import os
import re
import shlex
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from cvmanager.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_compilation_result,
    log_compilation_start,
)
from cvmanager.utils.text_processing import tail

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LATEX_TIMEOUT_S = float(os.getenv("LATEX_TIMEOUT_S", "30"))
COMPILER_FLAGS = ["-interaction=nonstopmode", "-file-line-error"]

# Bounded excerpt of the compiler log attached to failures
LOG_EXCERPT_CHARS = 2000


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether a PDF exists after all passes (and no pass timed out)
        pdf_path: Path to generated PDF (None if failed)
        stdout: Combined standard output of all passes
        stderr: Combined standard error of all passes
        errors: Parsed LaTeX errors (plus driver errors such as timeouts)
        warnings: Parsed LaTeX warnings
        log_excerpt: Last LOG_EXCERPT_CHARS characters of the compiler log
        returncodes: Exit code of each pass that ran to completion
        timed_out: Whether a pass exceeded its timeout
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    log_excerpt: str = ""
    returncodes: List[int] = field(default_factory=list)
    timed_out: bool = False


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # "! Error message"
    for match in re.finditer(r"^! (.+)$", log_content, re.MULTILINE):
        errors.append(match.group(1).strip())

    # -file-line-error style: "./cv.tex:42: Undefined control sequence."
    for match in re.finditer(r"^\./[^:\n]+:\d+: (.+)$", log_content, re.MULTILINE):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


def build_command(tex_file: Path, compiler: str = LATEX_COMPILER) -> List[str]:
    """Compiler invocation: <compiler words> <fixed flags> <source filename>."""
    return shlex.split(compiler) + COMPILER_FLAGS + [tex_file.name]


def compile_latex(
    tex_file: Path,
    num_passes: int = 2,
    compiler: str = LATEX_COMPILER,
    timeout: float = LATEX_TIMEOUT_S,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF in its own directory.

    Passes run strictly in sequence (the second resolves references the first wrote
    to .aux). There is no retry.

    Args:
        tex_file: Path to the .tex file; its directory is the working directory
        num_passes: Number of compiler passes (default: 2)
        compiler: Compiler command (default: LATEX_COMPILER env, "pdflatex")
        timeout: Wall-clock limit per pass in seconds
        verbose: Log full compiler output even on success

    Returns:
        CompilationResult with success status and diagnostic information
    """
    tex_file = Path(tex_file)
    compile_dir = tex_file.parent
    pdf_path = compile_dir / f"{tex_file.stem}.pdf"
    log_file = compile_dir / f"{tex_file.stem}.log"

    # A stale PDF would make a failed run look successful
    for stale in (pdf_path, log_file):
        if stale.exists():
            stale.unlink()

    log_compilation_start(tex_file, num_passes, compiler, timeout)
    start_time = time.time()

    cmd = build_command(tex_file, compiler)
    all_stdout = []
    all_stderr = []
    returncodes = []
    driver_errors = []
    timed_out = False

    for pass_number in range(1, num_passes + 1):
        try:
            result = subprocess.run(
                cmd,
                cwd=compile_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            timed_out = True
            driver_errors.append(f"{cmd[0]} timed out after {timeout}s (pass {pass_number})")
            break
        except FileNotFoundError:
            driver_errors.append(f"LaTeX compiler not found: {cmd[0]}")
            break

        all_stdout.append(result.stdout or "")
        all_stderr.append(result.stderr or "")
        returncodes.append(result.returncode)

        if result.returncode != 0:
            # Keep going: the PDF decides, not the exit code
            _log_warning(f"Pass {pass_number} exited with code {result.returncode}")

    log_content = ""
    if log_file.exists():
        # pdflatex writes its log in latin-1 (font metadata is not UTF-8)
        log_content = log_file.read_text(encoding="latin-1")
    errors, warnings = _parse_latex_log(log_content)
    errors = driver_errors + errors

    success = pdf_path.exists() and not timed_out
    if not success and not errors:
        errors.append("PDF file was not generated")

    compilation = CompilationResult(
        success=success,
        pdf_path=pdf_path if success else None,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        log_excerpt=tail(log_content or "\n".join(all_stdout), LOG_EXCERPT_CHARS),
        returncodes=returncodes,
        timed_out=timed_out,
    )

    log_compilation_result(compilation, time.time() - start_time, verbose=verbose)
    _log_debug(f"Exit codes: {returncodes}")
    return compilation
