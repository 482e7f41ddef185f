"""Persistence of stored project records."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from pydantic import ValidationError

from .models import StoredProject

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StorageResult(Generic[T]):
    """Outcome of a storage operation. Storage never raises."""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "StorageResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "StorageResult[T]":
        logger.error(error)
        return cls(success=False, error=error)


class ProjectStorage(Protocol):
    """Where stored project records live."""

    def save(self, project: StoredProject) -> StorageResult[None]:
        """Insert the record, or replace the record with the same id."""
        ...

    def load_all(self) -> StorageResult[list[StoredProject]]:
        ...

    def load_by_id(self, project_id: str) -> StorageResult[StoredProject | None]:
        ...

    def delete_by_id(self, project_id: str) -> StorageResult[None]:
        ...

    def clear(self) -> StorageResult[None]:
        ...


def parse_records(raw: list[Any]) -> list[StoredProject]:
    """Parse raw stored records, skipping the ones that do not parse."""
    records = []
    for index, item in enumerate(raw):
        try:
            records.append(StoredProject.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping unreadable project record %d: %s", index, e)
    return records


def _find(records: list[StoredProject], project_id: str) -> StoredProject | None:
    return next((record for record in records if record.id == project_id), None)


class MemoryStorage:
    """Storage holding serialized records in memory.

    Records go through the same wire format as on disk, so loaded records
    never alias saved ones.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self._records: list[dict[str, Any]] = list(records or [])

    def save(self, project: StoredProject) -> StorageResult[None]:
        wire = project.to_wire()
        for index, record in enumerate(self._records):
            if isinstance(record, dict) and record.get("id") == project.id:
                self._records[index] = wire
                break
        else:
            self._records.append(wire)
        return StorageResult.ok()

    def load_all(self) -> StorageResult[list[StoredProject]]:
        return StorageResult.ok(parse_records(self._records))

    def load_by_id(self, project_id: str) -> StorageResult[StoredProject | None]:
        return StorageResult.ok(_find(parse_records(self._records), project_id))

    def delete_by_id(self, project_id: str) -> StorageResult[None]:
        self._records = [
            record
            for record in self._records
            if not (isinstance(record, dict) and record.get("id") == project_id)
        ]
        return StorageResult.ok()

    def clear(self) -> StorageResult[None]:
        self._records = []
        return StorageResult.ok()


class JsonFileStorage:
    """Storage keeping all records as one JSON array in a file.

    A missing file holds no projects. Undecodable or non-array contents are
    treated as empty when saving, so a save replaces them. A delete leaves
    such a file untouched.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> Any:
        if not self.path.exists():
            return []
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _read_for_update(self) -> list[Any]:
        try:
            raw = self._read()
        except ValueError:
            logger.warning("Discarding undecodable project file %s", self.path)
            return []
        return raw if isinstance(raw, list) else []

    def _write(self, records: list[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")

    def save(self, project: StoredProject) -> StorageResult[None]:
        try:
            records = self._read_for_update()
            wire = project.to_wire()
            for index, record in enumerate(records):
                if isinstance(record, dict) and record.get("id") == project.id:
                    records[index] = wire
                    break
            else:
                records.append(wire)
            self._write(records)
        except OSError as e:
            return StorageResult.fail(f"Failed to save project: {e}")
        logger.debug("Saved project %s to %s", project.id, self.path)
        return StorageResult.ok()

    def load_all(self) -> StorageResult[list[StoredProject]]:
        try:
            raw = self._read()
        except (OSError, ValueError) as e:
            return StorageResult.fail(f"Failed to load projects: {e}")
        if not isinstance(raw, list):
            return StorageResult.ok([])
        return StorageResult.ok(parse_records(raw))

    def load_by_id(self, project_id: str) -> StorageResult[StoredProject | None]:
        result = self.load_all()
        if not result.success:
            return StorageResult(success=False, error=result.error)
        return StorageResult.ok(_find(result.data, project_id))

    def delete_by_id(self, project_id: str) -> StorageResult[None]:
        try:
            if not self.path.exists():
                return StorageResult.ok()
            try:
                records = self._read()
            except ValueError:
                logger.warning("Leaving undecodable project file %s untouched", self.path)
                return StorageResult.ok()
            if not isinstance(records, list):
                return StorageResult.ok()
            self._write(
                [
                    record
                    for record in records
                    if not (isinstance(record, dict) and record.get("id") == project_id)
                ]
            )
        except OSError as e:
            return StorageResult.fail(f"Failed to delete project: {e}")
        return StorageResult.ok()

    def clear(self) -> StorageResult[None]:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            return StorageResult.fail(f"Failed to clear storage: {e}")
        return StorageResult.ok()
