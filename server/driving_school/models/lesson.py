import datetime as dt
import enum
from typing import Optional

from driving_school.models.base import EntityRef, TimestampedRecord


class LessonStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Lesson(TimestampedRecord):
    """A driving lesson booked between a student and an instructor"""
    student_id: EntityRef  # never checked against the students collection
    instructor_id: EntityRef
    date: dt.date
    duration: int  # minutes
    status: LessonStatus = LessonStatus.SCHEDULED
    notes: Optional[str] = ""
    updated_at: dt.datetime
