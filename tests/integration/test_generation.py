"""
Integration tests for the generation workflow.

Runs generate_cv() against a temporary data tree. The compiler is replaced with a
fake (subprocess.run patched) so these tests need no LaTeX installation; see
test_latex_compilation.py for the real-compiler smoke test.
"""

import subprocess
from datetime import datetime
from pathlib import Path

import pytest

from cvmanager.contexts.generation import (
    CompilationFailedError,
    ConfigurationNotFoundError,
    GenerationError,
    GenerationIOError,
    JobMetadata,
    generate_cv,
)
from cvmanager.contexts.rendering import compiler
from cvmanager.contexts.storage import ArchiveStore, DataStore
from cvmanager.contexts.templating import get_template_version

PROFILE = {"name": "Jane Doe", "email": "j@x.com", "photo": "me.jpg"}
SECTIONS = {
    "experience": {
        "type": "entries",
        "labelEn": "Experience",
        "items": [
            {
                "id": "e1",
                "titleEn": "Engineer",
                "titleDe": "Ingenieurin",
                "datesEn": "2020-2022",
                "datesDe": "2020-2022",
            }
        ],
    }
}
CONFIG = {
    "id": "config-1",
    "name": "Default",
    "language": "de",
    "sectionOrder": ["experience"],
    "enabledEntries": {"experience": ["e1"]},
}


class FakeCompiler:
    """Writes cv.pdf when asked to; records what the workspace looked like."""

    def __init__(self, writes_pdf=True):
        self.writes_pdf = writes_pdf
        self.workspaces = []
        self.seen_files = []

    def __call__(self, cmd, cwd=None, **kwargs):
        workspace = Path(cwd)
        self.workspaces.append(workspace)
        self.seen_files.append(sorted(p.name for p in workspace.iterdir()))
        if self.writes_pdf:
            (workspace / "cv.pdf").write_bytes(b"%PDF-1.5\n")
        else:
            (workspace / "cv.log").write_text("! LaTeX Error: File `x.sty' not found.\n")
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="")


@pytest.fixture
def store(tmp_path):
    store = DataStore(tmp_path / "data", tmp_path / "assets", tmp_path / "output")
    store.save_profile(PROFILE)
    store.save_sections(SECTIONS)
    store.save_configs([CONFIG])
    store.assets_path.mkdir()
    (store.assets_path / "me.jpg").write_bytes(b"jpg")
    return store


@pytest.fixture
def scratch(tmp_path):
    return tmp_path / "scratch"


def install(monkeypatch, fake):
    monkeypatch.setattr(compiler.subprocess, "run", fake)
    return fake


@pytest.mark.integration
def test_generate_success(monkeypatch, store, scratch):
    fake = install(monkeypatch, FakeCompiler())
    job = JobMetadata(company="ACME Corp.", position="Engineer", notes="referral", tags=["ml"])

    result = generate_cv("config-1", job, store=store, scratch_root=scratch, date="2025-01-31")

    assert result.filename == "CV_Jane_Doe_ACME_Corp__2025-01-31.pdf"
    assert result.source_filename == "CV_Jane_Doe_ACME_Corp__2025-01-31.tex"
    assert store.output_exists(result.filename)
    assert store.output_exists(result.source_filename)
    tex = store.output_path_for(result.source_filename).read_text(encoding="utf-8")
    assert "Ingenieurin" in tex
    assert "2020-2022" in tex

    entry = result.archive_entry
    assert entry.template_version == get_template_version()
    assert datetime.fromisoformat(entry.created_at)
    assert entry.config_id == "config-1"
    assert entry.config_name == "Default"
    assert entry.language == "de"
    assert (entry.company, entry.position, entry.notes, entry.tags) == (
        "ACME Corp.",
        "Engineer",
        "referral",
        ["ml"],
    )
    assert [e.id for e in ArchiveStore(store).list()] == [entry.id]

    # Two passes in one workspace with source and assets in place; workspace removed
    assert len(fake.workspaces) == 2
    assert fake.workspaces[0] == fake.workspaces[1]
    assert fake.seen_files[0] == ["cv.tex", "me.jpg"]
    assert not fake.workspaces[0].exists()
    assert list(scratch.iterdir()) == []


@pytest.mark.integration
def test_generate_without_company_uses_configuration_name(monkeypatch, store, scratch):
    install(monkeypatch, FakeCompiler())

    result = generate_cv("config-1", store=store, scratch_root=scratch, date="2025-01-31")

    assert result.filename == "CV_Jane_Doe_Default_2025-01-31.pdf"
    assert result.archive_entry.company == ""


@pytest.mark.integration
def test_regeneration_same_day_overwrites(monkeypatch, store, scratch):
    install(monkeypatch, FakeCompiler())

    first = generate_cv("config-1", store=store, scratch_root=scratch, date="2025-01-31")
    second = generate_cv("config-1", store=store, scratch_root=scratch, date="2025-01-31")

    assert first.filename == second.filename
    assert store.list_outputs() == [first.filename]
    assert len(ArchiveStore(store).list()) == 2


@pytest.mark.integration
def test_unknown_configuration(monkeypatch, store, scratch):
    fake = install(monkeypatch, FakeCompiler())

    with pytest.raises(ConfigurationNotFoundError) as excinfo:
        generate_cv("config-404", store=store, scratch_root=scratch)

    assert excinfo.value.kind == "not_found"
    assert excinfo.value.to_dict()["error"] == "Configuration not found: config-404"
    assert ArchiveStore(store).list() == []
    assert store.list_outputs() == []
    assert fake.workspaces == []
    assert not scratch.exists()


@pytest.mark.integration
def test_compilation_failure(monkeypatch, store, scratch):
    fake = install(monkeypatch, FakeCompiler(writes_pdf=False))

    with pytest.raises(CompilationFailedError) as excinfo:
        generate_cv("config-1", store=store, scratch_root=scratch)

    error = excinfo.value
    assert error.kind == "compilation_failed"
    assert "File `x.sty' not found." in error.detail
    assert error.detail == error.log_excerpt
    assert len(fake.workspaces) == 2

    assert ArchiveStore(store).list() == []
    assert store.list_outputs() == []
    assert not fake.workspaces[0].exists()
    assert list(scratch.iterdir()) == []


@pytest.mark.integration
def test_output_store_failure_is_io_error(monkeypatch, store, scratch):
    install(monkeypatch, FakeCompiler())
    # A file where the output directory should be
    store.output_path.write_text("not a directory")

    with pytest.raises(GenerationIOError) as excinfo:
        generate_cv("config-1", store=store, scratch_root=scratch)

    assert excinfo.value.kind == "io_failure"
    assert isinstance(excinfo.value.__cause__, OSError)
    assert ArchiveStore(store).list() == []
    assert list(scratch.iterdir()) == []


@pytest.mark.integration
def test_session_log_written(monkeypatch, store, scratch, tmp_path):
    install(monkeypatch, FakeCompiler())
    log_dir = tmp_path / "logs" / "generate_test"

    result = generate_cv("config-1", store=store, scratch_root=scratch, log_dir=log_dir)

    log_text = (log_dir / "generate.log").read_text()
    assert "[generate]" in log_text
    assert f"Generated {result.filename}" in log_text


@pytest.mark.integration
def test_unknown_configuration_writes_no_session_log(monkeypatch, store, scratch, tmp_path):
    install(monkeypatch, FakeCompiler())
    log_dir = tmp_path / "logs" / "generate_test"

    with pytest.raises(ConfigurationNotFoundError):
        generate_cv("config-404", store=store, scratch_root=scratch, log_dir=log_dir)

    assert not log_dir.exists()


@pytest.mark.integration
def test_corrupt_archive_is_generation_error(monkeypatch, store, scratch):
    install(monkeypatch, FakeCompiler())
    archive_file = store.data_path / "archive.json"
    archive_file.write_text('[{"id": ', encoding="utf-8")

    with pytest.raises(GenerationError) as excinfo:
        generate_cv("config-1", store=store, scratch_root=scratch)

    error = excinfo.value
    assert error.kind == "generation_error"
    assert error.to_dict()["error"]
    assert isinstance(error.__cause__, ValueError)
    assert archive_file.read_text(encoding="utf-8") == '[{"id": '
    assert list(scratch.iterdir()) == []


@pytest.mark.integration
def test_corrupt_configurations_is_generation_error(monkeypatch, store, scratch):
    fake = install(monkeypatch, FakeCompiler())
    (store.data_path / "configs.json").write_text("not json", encoding="utf-8")

    with pytest.raises(GenerationError) as excinfo:
        generate_cv("config-1", store=store, scratch_root=scratch)

    assert excinfo.value.kind == "generation_error"
    assert fake.workspaces == []
    assert not scratch.exists()
    assert store.list_outputs() == []
