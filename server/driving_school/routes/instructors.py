from typing import Optional

from fastapi import APIRouter, Depends

from driving_school.config import Settings
from driving_school.dependencies import get_settings, get_store
from driving_school.models import Instructor
from driving_school.schemas import ErrorResponse, InstructorCreate, InstructorPage
from driving_school.services.query import filter_equals, paginate, parse_pagination, sort_by
from driving_school.storage import InMemoryStore

router = APIRouter(tags=["Instructors"])


@router.get("", response_model=InstructorPage)
async def list_instructors(
    specialization: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    instructors = filter_equals(store.instructors.all(), "specialization", specialization)
    instructors = sort_by(instructors, key=lambda i: i.name.casefold())
    data, pagination = paginate(instructors, parse_pagination(page, limit, settings))
    return {"data": data, "pagination": pagination}


@router.post(
    "",
    response_model=Instructor,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_instructor(payload: InstructorCreate, store: InMemoryStore = Depends(get_store)):
    return store.instructors.create(payload.model_dump(exclude_none=True))
