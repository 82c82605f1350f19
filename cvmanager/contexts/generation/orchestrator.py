"""
Generation Orchestrator

Turns a configuration id plus job metadata into a stored PDF and an archive entry:

1. Load profile, sections and configurations; unknown id -> ConfigurationNotFoundError
2. Assemble the LaTeX source
3. Create a unique scratch workspace
4. Write the source as cv.tex
5. Copy every asset into the workspace
6. Compile twice (bounded by a per-pass timeout)
7. No PDF -> CompilationFailedError carrying the log tail
8. Derive the output filename
9. Copy PDF and source into the output store; the workspace is always removed
10. Append the archive entry (last, so failures never leave one behind)
"""

import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from cvmanager.contexts.generation.exceptions import (
    CompilationFailedError,
    ConfigurationNotFoundError,
    GenerationError,
    GenerationIOError,
)
from cvmanager.contexts.generation.filenames import build_output_filename, source_filename_for
from cvmanager.contexts.generation.logger import (
    _log_debug,
    _log_error,
    _log_success,
    log_generation_start,
    setup_generation_logger,
)
from cvmanager.contexts.rendering.compiler import LATEX_COMPILER, LATEX_TIMEOUT_S, compile_latex
from cvmanager.contexts.storage.archive import ArchiveEntry, ArchiveStore
from cvmanager.contexts.storage.documents import DataStore
from cvmanager.contexts.templating.assembler import DocumentAssembler
from cvmanager.contexts.templating.defaults import DEFAULT_LANGUAGE, get_template_version

load_dotenv()
# None -> the system temp directory
CV_SCRATCH_PATH = os.getenv("CV_SCRATCH_PATH") or None

SOURCE_FILENAME = "cv.tex"
NUM_PASSES = 2


@dataclass
class JobMetadata:
    """What the CV is for. All fields are optional."""

    company: str = ""
    position: str = ""
    notes: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Successful generation: stored artifact names and the new archive entry."""

    filename: str
    source_filename: str
    archive_entry: ArchiveEntry
    pdf_path: Path
    warnings: List[str] = field(default_factory=list)


def _create_workspace(scratch_root: Optional[Path]) -> Path:
    if scratch_root is not None:
        Path(scratch_root).mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix="cv-temp-", dir=scratch_root))


def generate_cv(
    config_id: str,
    job: Optional[JobMetadata] = None,
    store: Optional[DataStore] = None,
    assembler: Optional[DocumentAssembler] = None,
    compiler: str = LATEX_COMPILER,
    timeout: float = LATEX_TIMEOUT_S,
    scratch_root: Optional[Path] = CV_SCRATCH_PATH,
    log_dir: Optional[Path] = None,
    date: Optional[str] = None,
) -> GenerationResult:
    """
    Generate, store and archive the PDF for one configuration.

    Args:
        config_id: Configuration to render
        job: Company, position, notes and tags recorded in the archive
        store: Data/asset/output store (default: paths from the environment)
        assembler: Document assembler (default: package templates)
        compiler: LaTeX compiler command
        timeout: Per-pass compiler timeout in seconds
        scratch_root: Parent directory for the scratch workspace
        log_dir: When given, a session log is written there
        date: Date stamp for the filename (default: today)

    Returns:
        GenerationResult

    Raises:
        ConfigurationNotFoundError: Unknown config_id (no side effects)
        CompilationFailedError: No PDF after both passes
        GenerationIOError: A file operation failed
        GenerationError: Any other failure (unreadable document, template error, ...),
            chained to the original exception
    """
    job = job or JobMetadata()
    store = store or DataStore()
    assembler = assembler or DocumentAssembler()

    workspace = None
    try:
        profile = store.load_profile()
        sections = store.load_sections()
        configuration = next(
            (c for c in store.load_configs() if c.get("id") == config_id), None
        )
        if configuration is None:
            raise ConfigurationNotFoundError(config_id)

        # Session log only once the configuration is known
        if log_dir is not None:
            setup_generation_logger(Path(log_dir), compiler)
        log_generation_start(configuration, job.company, job.position)

        latex = assembler.assemble(profile, sections, configuration)

        workspace = _create_workspace(scratch_root)
        tex_path = workspace / SOURCE_FILENAME
        tex_path.write_text(latex, encoding="utf-8")
        copied = store.copy_assets_to(workspace)
        _log_debug(f"Workspace {workspace}: {SOURCE_FILENAME} + {copied} assets")

        compilation = compile_latex(
            tex_path, num_passes=NUM_PASSES, compiler=compiler, timeout=timeout
        )
        if not compilation.success:
            raise CompilationFailedError(compilation.log_excerpt, compilation.errors)

        filename = build_output_filename(
            profile.get("name"), job.company, configuration.get("name"), date
        )
        source_filename = source_filename_for(filename)
        if store.output_exists(filename):
            _log_debug(f"Overwriting {filename}")
        pdf_path = store.save_output(compilation.pdf_path, filename)
        store.save_output(tex_path, source_filename)

        archive_entry = ArchiveStore(store).append(
            ArchiveEntry(
                config_id=config_id,
                config_name=configuration.get("name", ""),
                filename=filename,
                tex_filename=source_filename,
                company=job.company or "",
                position=job.position or "",
                notes=job.notes or "",
                tags=list(job.tags or []),
                language=configuration.get("language") or DEFAULT_LANGUAGE,
                template_version=get_template_version(),
            )
        )

    except GenerationError as e:
        _log_error(e.message)
        raise
    except OSError as e:
        _log_error(f"File operation failed: {e}")
        raise GenerationIOError(str(e)) from e
    except Exception as e:
        _log_error(f"Generation failed: {type(e).__name__}: {e}")
        raise GenerationError(str(e)) from e
    finally:
        if workspace is not None:
            shutil.rmtree(workspace, ignore_errors=True)

    _log_success(f"Generated {filename}")
    return GenerationResult(
        filename=filename,
        source_filename=source_filename,
        archive_entry=archive_entry,
        pdf_path=pdf_path,
        warnings=compilation.warnings,
    )
