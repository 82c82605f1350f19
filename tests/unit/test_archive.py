"""Unit tests for the archive ledger."""

import pytest

from cvmanager.contexts.storage.archive import ArchiveEntry, ArchiveStore
from cvmanager.contexts.storage.documents import DataStore


@pytest.fixture
def store(tmp_path):
    return DataStore(tmp_path / "data", tmp_path / "assets", tmp_path / "output")


@pytest.fixture
def archive(store):
    return ArchiveStore(store)


def write_outputs(store, *names):
    store.output_path.mkdir(parents=True, exist_ok=True)
    for name in names:
        (store.output_path / name).write_bytes(b"x")


@pytest.mark.unit
class TestArchiveEntry:
    def test_camel_case_on_disk(self):
        entry = ArchiveEntry(id="arch-1", config_id="config-1", tex_filename="a.tex")
        data = entry.to_dict()

        assert data["configId"] == "config-1"
        assert data["texFilename"] == "a.tex"
        assert "config_id" not in data
        assert ArchiveEntry.from_dict(data) == entry

    def test_unknown_keys_and_nulls_ignored(self):
        entry = ArchiveEntry.from_dict({"id": "arch-1", "tags": None, "extra": 1})
        assert entry.tags == []

    def test_legacy_source_filename(self):
        assert ArchiveEntry(filename="CV_a.pdf").source_filename == "CV_a.tex"
        assert ArchiveEntry(filename="CV_a.pdf", tex_filename="x.tex").source_filename == "x.tex"
        assert ArchiveEntry().source_filename == ""


@pytest.mark.unit
class TestArchiveStore:
    def test_append_assigns_id_and_created_at(self, archive):
        entry = archive.append(ArchiveEntry(filename="a.pdf", template_version="2.0.0"))

        assert entry.id.startswith("arch-")
        assert entry.created_at
        assert [e.id for e in archive.list()] == [entry.id]

    def test_ids_unique_and_creation_ordered(self, archive):
        ids = [archive.append(ArchiveEntry(filename=f"{n}.pdf")).id for n in range(3)]

        assert len(set(ids)) == 3
        assert [e.id for e in archive.list()] == ids
        tokens = [int(i.split("-")[1]) for i in ids]
        assert tokens == sorted(tokens)

    def test_append_rejects_duplicate_id(self, archive):
        archive.append(ArchiveEntry(id="arch-1"))
        with pytest.raises(ValueError):
            archive.append(ArchiveEntry(id="arch-1"))

    def test_get_missing_raises_key_error(self, archive):
        with pytest.raises(KeyError):
            archive.get("arch-404")

    def test_update_keeps_id_and_created_at(self, archive):
        entry = archive.append(ArchiveEntry(company="ACME"))

        updated = archive.update(entry.id, {"id": "other", "company": "Initech", "tags": ["x"]})

        assert updated.id == entry.id
        assert updated.created_at == entry.created_at
        assert archive.get(entry.id).company == "Initech"
        assert archive.get(entry.id).tags == ["x"]

    def test_update_missing_raises_key_error(self, archive):
        with pytest.raises(KeyError):
            archive.update("arch-404", {})

    def test_delete_cascades_to_files(self, store, archive):
        write_outputs(store, "a.pdf", "a.tex", "b.pdf")
        entry = archive.append(ArchiveEntry(filename="a.pdf", tex_filename="a.tex"))
        keep = archive.append(ArchiveEntry(filename="b.pdf"))

        deleted = archive.delete(entry.id)

        assert deleted.id == entry.id
        assert not store.output_exists("a.pdf")
        assert not store.output_exists("a.tex")
        assert store.output_exists("b.pdf")
        assert [e.id for e in archive.list()] == [keep.id]

    def test_delete_legacy_entry_derives_tex_name(self, store, archive):
        write_outputs(store, "old.pdf", "old.tex")
        entry = archive.append(ArchiveEntry(filename="old.pdf"))

        archive.delete(entry.id)

        assert store.list_outputs(".tex") == []

    def test_delete_tolerates_missing_files(self, archive):
        entry = archive.append(ArchiveEntry(filename="gone.pdf"))
        assert archive.delete(entry.id) is not None
        assert archive.list() == []

    def test_delete_unknown_returns_none(self, archive):
        assert archive.delete("arch-404") is None
