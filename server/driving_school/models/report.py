from datetime import date, datetime
from typing import Any, Dict, Optional

from driving_school.models.base import EntityRef, Record


class Report(Record):
    """A generated report over a date range"""
    type: str
    student_id: Optional[EntityRef] = None
    start_date: date
    end_date: date
    format: str = "json"
    status: str = "generated"
    content: Dict[str, Any] = {}
    generated_at: datetime
