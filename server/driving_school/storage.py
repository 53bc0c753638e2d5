"""
In-memory storage for students, instructors, lessons and reports.

State lives only as long as the process; a restart starts every collection
empty with its id counter back at 1.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Type, TypeVar

from driving_school.logger import get_logger
from driving_school.models import Instructor, Lesson, Record, Report, Student
from driving_school.result import Result

logger = get_logger(__name__)

R = TypeVar("R", bound=Record)

# Fields a caller can never overwrite through update()
_IMMUTABLE_FIELDS = {"id", "created_at", "generated_at", "updated_at"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Collection(Generic[R]):
    """
    Records of one entity type, kept in insertion order.

    Ids come from a per-collection counter that only moves forward, so an id
    is never handed out twice even after the record is deleted. Mutations run
    under a lock; reads work on a copy of the record list.
    """

    def __init__(self, name: str, model: Type[R], timestamp_field: str = "created_at"):
        self.name = name
        self.model = model
        self.timestamp_field = timestamp_field
        self.next_id = 1
        self._records: List[R] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def create(self, fields: Dict[str, Any]) -> R:
        """Store a new record built from ``fields`` and return it."""
        with self._lock:
            now = utcnow()
            values = dict(fields)
            values["id"] = self.next_id
            values[self.timestamp_field] = now
            if "updated_at" in self.model.model_fields:
                values["updated_at"] = now
            record = self.model(**values)
            # Only advance the counter once the record is valid
            self.next_id += 1
            self._records.append(record)

        logger.info(
            f"{self.entity_name} created",
            extra={"collection": self.name, "record_id": record.id},
        )
        return record

    def all(self) -> List[R]:
        with self._lock:
            return list(self._records)

    def get(self, record_id: int) -> Result[R]:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return Result.ok(record)
        return Result.not_found(f"{self.entity_name} not found")

    def update(self, record_id: int, changes: Dict[str, Any]) -> Result[R]:
        """
        Overwrite the given fields of a record.

        Fields missing from ``changes`` keep their value; ``id`` and the
        timestamps are never taken from ``changes``. ``updated_at`` is
        refreshed when the model has one.
        """
        changes = {k: v for k, v in changes.items() if k not in _IMMUTABLE_FIELDS}
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id != record_id:
                    continue
                if "updated_at" in self.model.model_fields:
                    changes["updated_at"] = utcnow()
                updated = record.model_copy(update=changes)
                self._records[index] = updated
                break
            else:
                return Result.not_found(f"{self.entity_name} not found")

        logger.info(
            f"{self.entity_name} updated",
            extra={"collection": self.name, "record_id": record_id, "fields": sorted(changes)},
        )
        return Result.ok(updated)

    def delete(self, record_id: int) -> Result[R]:
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == record_id:
                    removed = self._records.pop(index)
                    break
            else:
                return Result.not_found(f"{self.entity_name} not found")

        logger.info(
            f"{self.entity_name} deleted",
            extra={"collection": self.name, "record_id": record_id},
        )
        return Result.ok(removed)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self.next_id = 1


class InMemoryStore:
    """Holds every collection for the lifetime of one application instance."""

    def __init__(self):
        self.students: Collection[Student] = Collection("students", Student)
        self.instructors: Collection[Instructor] = Collection("instructors", Instructor)
        self.lessons: Collection[Lesson] = Collection("lessons", Lesson)
        self.reports: Collection[Report] = Collection("reports", Report, timestamp_field="generated_at")

    @property
    def collections(self) -> Dict[str, Collection]:
        return {
            "students": self.students,
            "instructors": self.instructors,
            "lessons": self.lessons,
            "reports": self.reports,
        }

    def counts(self) -> Dict[str, int]:
        return {name: len(collection) for name, collection in self.collections.items()}

    def reset(self) -> None:
        for collection in self.collections.values():
            collection.clear()
