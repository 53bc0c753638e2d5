from typing import Optional

from fastapi import APIRouter, Depends, Query

from driving_school.config import Settings
from driving_school.dependencies import get_settings, get_store
from driving_school.models import Student
from driving_school.schemas import ErrorResponse, StudentCreate, StudentPage
from driving_school.services.query import filter_equals, paginate, parse_pagination, sort_by
from driving_school.storage import InMemoryStore

router = APIRouter(tags=["Students"])


@router.get("", response_model=StudentPage)
async def list_students(
    license_status: Optional[str] = Query(None, alias="licenseStatus"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """List students ordered by name"""
    students = filter_equals(store.students.all(), "license_status", license_status)
    students = sort_by(students, key=lambda s: s.name.casefold())
    data, pagination = paginate(students, parse_pagination(page, limit, settings))
    return {"data": data, "pagination": pagination}


@router.post(
    "",
    response_model=Student,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_student(payload: StudentCreate, store: InMemoryStore = Depends(get_store)):
    """Register a new student"""
    return store.students.create(payload.model_dump(exclude_none=True))
