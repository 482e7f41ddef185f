"""Tests for project storage backends."""

import json
import logging
from datetime import datetime, timezone

import pytest

from umlgen.project.models import StoredProject
from umlgen.project.storage import JsonFileStorage, MemoryStorage, StorageResult, parse_records

CREATED = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _record(project_id: str, name: str = "Project") -> StoredProject:
    return StoredProject(
        id=project_id,
        name=name,
        diagram={"type": "class", "classes": [], "relationships": []},
        created_at=CREATED,
        updated_at=CREATED,
    )


@pytest.fixture(params=["memory", "file"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return JsonFileStorage(tmp_path / "projects.json")


class TestStorageResult:
    def test_ok(self):
        result = StorageResult.ok([1])

        assert result.success
        assert result.data == [1]
        assert result.error is None

    def test_fail_logs(self, caplog):
        with caplog.at_level(logging.ERROR, logger="umlgen"):
            result = StorageResult.fail("Failed to save project: boom")

        assert not result.success
        assert result.error == "Failed to save project: boom"
        assert "boom" in caplog.text


class TestBackends:
    def test_empty(self, backend):
        result = backend.load_all()

        assert result.success
        assert result.data == []

    def test_save_and_load(self, backend):
        assert backend.save(_record("a")).success

        loaded = backend.load_by_id("a")

        assert loaded.success
        assert loaded.data == _record("a")

    def test_save_replaces_same_id(self, backend):
        backend.save(_record("a", "First"))
        backend.save(_record("b"))
        backend.save(_record("a", "Renamed"))

        records = backend.load_all().data

        assert [(r.id, r.name) for r in records] == [("a", "Renamed"), ("b", "Project")]

    def test_load_missing_id(self, backend):
        result = backend.load_by_id("nope")

        assert result.success
        assert result.data is None

    def test_delete(self, backend):
        backend.save(_record("a"))
        backend.save(_record("b"))

        assert backend.delete_by_id("a").success
        assert [r.id for r in backend.load_all().data] == ["b"]

    def test_delete_missing_id(self, backend):
        assert backend.delete_by_id("nope").success

    def test_clear(self, backend):
        backend.save(_record("a"))

        assert backend.clear().success
        assert backend.load_all().data == []

    def test_loaded_records_do_not_alias_saved(self, backend):
        record = _record("a")
        backend.save(record)

        record.diagram["classes"].append({"id": "x", "name": "X"})

        assert backend.load_by_id("a").data.diagram["classes"] == []


class TestParseRecords:
    def test_skips_invalid_records(self, caplog):
        raw = [_record("a").to_wire(), {"id": "broken"}, "junk"]

        with caplog.at_level(logging.WARNING, logger="umlgen"):
            records = parse_records(raw)

        assert [r.id for r in records] == ["a"]
        assert "Skipping unreadable project record 1" in caplog.text


class TestJsonFileStorage:
    def test_file_holds_json_array(self, tmp_path):
        path = tmp_path / "projects.json"
        JsonFileStorage(path).save(_record("a"))

        data = json.loads(path.read_text())

        assert isinstance(data, list)
        assert data[0]["id"] == "a"
        assert data[0]["diagramType"] == "class"

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "projects.json"

        assert JsonFileStorage(path).save(_record("a")).success
        assert path.exists()

    def test_undecodable_file_fails_to_load(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text("{not json")

        result = JsonFileStorage(path).load_all()

        assert not result.success
        assert result.error.startswith("Failed to load projects:")

    def test_load_by_id_propagates_failure(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text("{not json")

        result = JsonFileStorage(path).load_by_id("a")

        assert not result.success
        assert result.data is None

    def test_save_replaces_undecodable_file(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text("{not json")
        storage = JsonFileStorage(path)

        assert storage.save(_record("a")).success
        assert [r.id for r in storage.load_all().data] == ["a"]

    def test_non_array_contents_read_as_empty(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text('{"id": "a"}')

        result = JsonFileStorage(path).load_all()

        assert result.success
        assert result.data == []

    def test_unreadable_record_is_skipped(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text(json.dumps([{"id": "broken"}, _record("a").to_wire()]))

        assert [r.id for r in JsonFileStorage(path).load_all().data] == ["a"]

    def test_delete_without_file(self, tmp_path):
        path = tmp_path / "projects.json"

        assert JsonFileStorage(path).delete_by_id("a").success
        assert not path.exists()

    @pytest.mark.parametrize("contents", ['{"not": "an array"}', "{not json", "42"])
    def test_delete_leaves_unusable_file_untouched(self, tmp_path, contents):
        path = tmp_path / "projects.json"
        path.write_text(contents)

        assert JsonFileStorage(path).delete_by_id("x").success
        assert path.read_text() == contents

    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / "projects.json"
        storage = JsonFileStorage(path)
        storage.save(_record("a"))

        assert storage.clear().success
        assert not path.exists()
        assert storage.clear().success

    def test_io_errors_become_failures(self, tmp_path):
        storage = JsonFileStorage(tmp_path)

        save = storage.save(_record("a"))
        load = storage.load_all()
        delete = storage.delete_by_id("a")

        assert save.error.startswith("Failed to save project:")
        assert load.error.startswith("Failed to load projects:")
        assert delete.error.startswith("Failed to delete project:")
