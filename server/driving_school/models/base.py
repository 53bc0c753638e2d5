from datetime import datetime
from typing import Union

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# Lessons and reports point at students/instructors by whatever id the client sent.
EntityRef = Union[int, str]


class Record(BaseModel):
    """Base for every stored entity. Serialized with camelCase keys."""
    id: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TimestampedRecord(Record):
    created_at: datetime
