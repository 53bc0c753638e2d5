from typing import Optional

from fastapi import APIRouter, Depends, Query

from driving_school.config import Settings
from driving_school.dependencies import get_settings, get_store
from driving_school.errors import not_found_response
from driving_school.models import Lesson
from driving_school.schemas import ErrorResponse, LessonCreate, LessonDeleted, LessonPage, LessonUpdate
from driving_school.services.query import filter_equals, paginate, parse_pagination, safe_int, sort_by
from driving_school.storage import InMemoryStore

router = APIRouter(tags=["Lessons"])


def _lesson_id(raw: str) -> int:
    # Ids start at 1, so anything unparseable maps to an id that never exists
    return safe_int(raw, default=0)


@router.get("", response_model=LessonPage)
async def list_lessons(
    student_id: Optional[str] = Query(None, alias="studentId"),
    instructor_id: Optional[str] = Query(None, alias="instructorId"),
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    List lessons, most recent lesson date first.

    Filters are exact matches; ``total`` counts every matching lesson
    regardless of the requested page.
    """
    lessons = store.lessons.all()
    lessons = filter_equals(lessons, "student_id", student_id)
    lessons = filter_equals(lessons, "instructor_id", instructor_id)
    lessons = filter_equals(lessons, "status", status)
    lessons = sort_by(lessons, key=lambda lesson: lesson.date, descending=True)
    data, pagination = paginate(lessons, parse_pagination(page, limit, settings))
    return {"data": data, "pagination": pagination}


@router.post(
    "",
    response_model=Lesson,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_lesson(payload: LessonCreate, store: InMemoryStore = Depends(get_store)):
    """Schedule a lesson. Student and instructor ids are stored as given."""
    return store.lessons.create(payload.model_dump(exclude_none=True))


@router.put(
    "/{lesson_id}",
    response_model=Lesson,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_lesson(
    lesson_id: str,
    payload: Optional[LessonUpdate] = None,
    store: InMemoryStore = Depends(get_store),
):
    """Overwrite the fields present in the body; everything else is kept."""
    changes = payload.changes() if payload is not None else {}
    result = store.lessons.update(_lesson_id(lesson_id), changes)
    if not result.is_ok:
        return not_found_response(result)
    return result.value


@router.delete(
    "/{lesson_id}",
    response_model=LessonDeleted,
    responses={404: {"model": ErrorResponse}},
)
async def delete_lesson(lesson_id: str, store: InMemoryStore = Depends(get_store)):
    result = store.lessons.delete(_lesson_id(lesson_id))
    if not result.is_ok:
        return not_found_response(result)
    return {"message": "Lesson deleted", "data": result.value}
