"""
Unit tests for the in-memory store.
"""

import threading
from datetime import date, datetime, timezone

import pytest

from driving_school.models import LessonStatus
from driving_school.result import ResultStatus
from driving_school.storage import Collection, InMemoryStore


@pytest.fixture
def lessons():
    return InMemoryStore().lessons


def lesson_fields(**overrides):
    fields = {"student_id": 1, "instructor_id": 2, "date": date(2025, 12, 15), "duration": 60}
    fields.update(overrides)
    return fields


class TestCollection:

    def test_create_assigns_sequential_ids(self, lessons):
        first = lessons.create(lesson_fields())
        second = lessons.create(lesson_fields())

        assert (first.id, second.id) == (1, 2)
        assert len(lessons) == 2

    def test_create_stamps_timestamps(self, lessons):
        lesson = lessons.create(lesson_fields())

        assert lesson.created_at <= datetime.now(timezone.utc)
        assert lesson.updated_at == lesson.created_at
        assert lesson.status == LessonStatus.SCHEDULED

    def test_invalid_record_does_not_consume_id(self, lessons):
        with pytest.raises(ValueError):
            lessons.create({"student_id": 1})

        assert lessons.create(lesson_fields()).id == 1

    def test_all_returns_a_copy(self, lessons):
        lessons.create(lesson_fields())

        snapshot = lessons.all()
        snapshot.clear()

        assert len(lessons) == 1

    def test_get(self, lessons):
        lessons.create(lesson_fields())

        assert lessons.get(1).value.id == 1
        assert lessons.get(5).status == ResultStatus.NOT_FOUND

    def test_update_overwrites_only_given_fields(self, lessons):
        original = lessons.create(lesson_fields(notes="keep"))

        result = lessons.update(1, {"status": LessonStatus.COMPLETED})

        assert result.is_ok
        updated = result.value
        assert updated.status == LessonStatus.COMPLETED
        assert updated.notes == "keep"
        assert updated.created_at == original.created_at
        assert updated.updated_at >= original.updated_at

    def test_update_never_touches_id_or_created_at(self, lessons):
        original = lessons.create(lesson_fields())

        updated = lessons.update(1, {"id": 9, "created_at": datetime(2000, 1, 1)}).unwrap()

        assert updated.id == 1
        assert updated.created_at == original.created_at

    def test_update_missing(self, lessons):
        result = lessons.update(3, {"duration": 30})

        assert result.is_not_found
        assert result.message == "Lesson not found"

    def test_delete_then_not_found(self, lessons):
        lessons.create(lesson_fields())

        assert lessons.delete(1).value.id == 1
        assert lessons.delete(1).is_not_found
        assert len(lessons) == 0

    def test_ids_never_reused(self, lessons):
        lessons.create(lesson_fields())
        lessons.delete(1)

        assert lessons.create(lesson_fields()).id == 2

    def test_clear_resets_counter(self, lessons):
        lessons.create(lesson_fields())
        lessons.clear()

        assert len(lessons) == 0
        assert lessons.create(lesson_fields()).id == 1

    def test_concurrent_creates_get_unique_ids(self, lessons):
        def worker():
            for _ in range(50):
                lessons.create(lesson_fields())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [lesson.id for lesson in lessons.all()]
        assert sorted(ids) == list(range(1, 401))


class TestInMemoryStore:

    def test_collections_are_independent(self):
        store = InMemoryStore()
        store.students.create({"name": "A", "email": "a@test.com"})

        assert store.counts() == {"students": 1, "instructors": 0, "lessons": 0, "reports": 0}
        assert store.instructors.create({"name": "B", "email": "b@test.com"}).id == 1

    def test_reports_use_generated_at(self):
        store = InMemoryStore()
        report = store.reports.create(
            {"type": "revenue", "start_date": date(2025, 1, 1), "end_date": date(2025, 1, 31)}
        )

        assert report.generated_at is not None

    def test_reset(self):
        store = InMemoryStore()
        store.students.create({"name": "A", "email": "a@test.com"})
        store.reset()

        assert store.counts()["students"] == 0

    def test_stores_are_not_shared(self):
        InMemoryStore().students.create({"name": "A", "email": "a@test.com"})

        assert len(InMemoryStore().students) == 0

    def test_collection_name(self):
        collection = InMemoryStore().instructors

        assert isinstance(collection, Collection)
        assert collection.entity_name == "Instructor"
