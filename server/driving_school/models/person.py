from driving_school.models.base import TimestampedRecord


class Student(TimestampedRecord):
    """A learner driver enrolled with the school"""
    name: str
    email: str
    phone: str = ""
    license_status: str = "pending"
    lessons_completed: int = 0
    total_cost: float = 0


class Instructor(TimestampedRecord):
    """A driving instructor"""
    name: str
    email: str
    phone: str = ""
    specialization: str = "standard"
    lessons_given: int = 0
    rating: float = 0
