"""Tests for the JSON file entry repository."""

import json

import pytest

from anoto.adapters.file_entries import FileEntryRepository


@pytest.fixture
def repo(tmp_path):
    return FileEntryRepository(tmp_path / "entries")


def record(key: str, text: str = "Buy milk") -> dict:
    return {
        "date": key,
        "createdAt": "2025-06-09T08:00:00",
        "lastModified": "2025-06-09T08:00:00",
        "tasks": [
            {
                "id": "line-0",
                "text": text,
                "completed": False,
                "createdAt": "2025-06-09T08:00:00",
                "isReminder": True,
                "reminderShown": False,
                "reminderDate": key,
            }
        ],
    }


class TestFileEntryRepository:
    def test_creates_directory(self, tmp_path):
        FileEntryRepository(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_save_writes_one_file_per_day(self, repo):
        repo.save(record("2025-06-10"))
        path = repo.entries_dir / "2025-06-10.json"
        assert path.exists()
        assert json.loads(path.read_text())["tasks"][0]["text"] == "Buy milk"

    def test_save_overwrites(self, repo):
        repo.save(record("2025-06-10"))
        repo.save(record("2025-06-10", "Buy eggs"))
        records = repo.load_all()
        assert len(records) == 1
        assert records[0]["tasks"][0]["text"] == "Buy eggs"

    def test_no_temp_files_left(self, repo):
        repo.save(record("2025-06-10"))
        assert [p.name for p in repo.entries_dir.iterdir()] == ["2025-06-10.json"]

    def test_load_all_sorted(self, repo):
        repo.save(record("2025-06-12"))
        repo.save(record("2025-06-10"))
        assert [r["date"] for r in repo.load_all()] == ["2025-06-10", "2025-06-12"]

    def test_load_skips_corrupt_json(self, repo, caplog):
        repo.save(record("2025-06-10"))
        (repo.entries_dir / "2025-06-11.json").write_text("{not json")
        records = repo.load_all()
        assert [r["date"] for r in records] == ["2025-06-10"]
        assert "2025-06-11.json" in caplog.text

    def test_load_ignores_unrelated_files(self, repo):
        repo.save(record("2025-06-10"))
        (repo.entries_dir / "notes.json").write_text("{}")
        (repo.entries_dir / "2025-06-10.md").write_text("# hi")
        assert [r["date"] for r in repo.load_all()] == ["2025-06-10"]

    def test_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        repo = FileEntryRepository("~/journal")
        assert repo.entries_dir == tmp_path / "journal"
