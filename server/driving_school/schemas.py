import datetime as dt
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from driving_school.models import Instructor, Lesson, LessonStatus, Report, Student


T = TypeVar("T")

NonEmptyStr = Annotated[str, Field(min_length=1)]

# A reference to another entity: a positive number or a non-empty string
EntityRefInput = Union[Annotated[int, Field(strict=True, gt=0)], NonEmptyStr]


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case keys, ignores unknown ones."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        str_strip_whitespace = True


# Student Schemas
class StudentCreate(CamelModel):
    name: NonEmptyStr
    email: NonEmptyStr
    phone: Optional[str] = None
    license_status: Optional[str] = None


# Instructor Schemas
class InstructorCreate(CamelModel):
    name: NonEmptyStr
    email: NonEmptyStr
    phone: Optional[str] = None
    specialization: Optional[str] = None


# Lesson Schemas
class LessonCreate(CamelModel):
    student_id: EntityRefInput
    instructor_id: EntityRefInput
    date: dt.date
    duration: int = Field(gt=0)
    status: Optional[LessonStatus] = None
    notes: Optional[str] = None


class LessonUpdate(CamelModel):
    """Partial lesson update; only the keys the client sent are applied."""
    student_id: Optional[EntityRefInput] = None
    instructor_id: Optional[EntityRefInput] = None
    date: Optional[dt.date] = None
    duration: Optional[int] = Field(default=None, gt=0)
    status: Optional[LessonStatus] = None
    notes: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        sent = self.model_dump(exclude_unset=True)
        # notes may be cleared with null, every other field needs a value
        return {k: v for k, v in sent.items() if v is not None or k == "notes"}


# Report Schemas
class ReportCreate(CamelModel):
    type: NonEmptyStr
    start_date: dt.date
    end_date: dt.date
    student_id: Optional[EntityRefInput] = None
    format: Optional[str] = None
    content: Optional[Dict[str, Any]] = None


# Response envelopes
class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(BaseModel, Generic[T]):
    data: List[T]
    pagination: Pagination


class StudentPage(Page[Student]):
    pass


class InstructorPage(Page[Instructor]):
    pass


class LessonPage(Page[Lesson]):
    pass


class ReportPage(Page[Report]):
    pass


class LessonDeleted(BaseModel):
    message: str
    data: Lesson


class ErrorResponse(BaseModel):
    error: str
    fields: Optional[List[str]] = None
    message: Optional[str] = None
