"""
Filtering, sorting and pagination shared by the list endpoints.
"""
import enum
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from driving_school.config import Settings
from driving_school.schemas import Pagination

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def safe_int(value: Any, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """
    Parse an integer query parameter without ever raising.

    Missing, non-numeric and below-minimum values give ``default``; values
    above ``maximum`` are clamped to it.
    """
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    if number < minimum:
        return default
    if maximum is not None and number > maximum:
        return maximum
    return number


def safe_date(value: Optional[str]) -> Optional[date]:
    """ISO date from a query string, or None when absent or unparseable."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_pagination(page: Optional[str], limit: Optional[str], settings: Settings) -> PageRequest:
    return PageRequest(
        page=safe_int(page, default=1),
        limit=safe_int(limit, default=settings.default_page_limit, maximum=settings.max_page_limit),
    )


def paginate(records: Sequence[T], request: PageRequest) -> Tuple[List[T], Pagination]:
    """Slice one page out of ``records``; ``total`` counts every record given."""
    total = len(records)
    items = list(records[request.offset:request.offset + request.limit])
    return items, Pagination(
        page=request.page,
        limit=request.limit,
        total=total,
        pages=math.ceil(total / request.limit),
    )


def _plain(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


def filter_equals(records: Iterable[T], attr: str, value: Optional[str]) -> List[T]:
    """
    Keep records whose ``attr`` equals ``value``.

    Values are compared as strings so that ``?studentId=1`` matches a stored
    integer 1. A ``None`` value disables the filter; records without the
    attribute (or with it unset) never match.
    """
    if value is None:
        return list(records)
    matched = []
    for record in records:
        current = _plain(getattr(record, attr, None))
        if current is not None and str(current) == value:
            matched.append(record)
    return matched


def filter_range(
    records: Iterable[T],
    attr: str,
    lower: Optional[date] = None,
    upper: Optional[date] = None,
) -> List[T]:
    """Keep records whose date ``attr`` lies within the given bounds (inclusive)."""
    matched = []
    for record in records:
        current = getattr(record, attr, None)
        if isinstance(current, datetime):
            current = current.date()
        if current is None:
            continue
        if lower is not None and current < lower:
            continue
        if upper is not None and current > upper:
            continue
        matched.append(record)
    return matched


def sort_by(records: Iterable[T], key: Callable[[T], Any], descending: bool = False) -> List[T]:
    # sorted() is stable, ties keep insertion order in both directions
    return sorted(records, key=key, reverse=descending)
