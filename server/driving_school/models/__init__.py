"""
Models package initialization
Import all entity models here so callers can use ``driving_school.models``
"""

from driving_school.models.base import EntityRef, Record, TimestampedRecord
from driving_school.models.person import Instructor, Student
from driving_school.models.lesson import Lesson, LessonStatus
from driving_school.models.report import Report

__all__ = [
    "EntityRef",
    "Record",
    "TimestampedRecord",
    "Student",
    "Instructor",
    "Lesson",
    "LessonStatus",
    "Report",
]
