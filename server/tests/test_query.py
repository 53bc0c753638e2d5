"""
Unit tests for filtering, sorting and pagination helpers.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytest

from driving_school.config import Settings
from driving_school.models import LessonStatus
from driving_school.services.query import (
    PageRequest,
    filter_equals,
    filter_range,
    paginate,
    parse_pagination,
    safe_date,
    safe_int,
    sort_by,
)


@dataclass
class Item:
    id: int
    name: str = ""
    status: Optional[object] = None
    day: Optional[date] = None


class TestSafeInt:

    @pytest.mark.parametrize("value,expected", [
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("2.5", 10),
        ("0", 10),
        ("-4", 10),
        ("7", 7),
        (" 3 ", 3),
        (5, 5),
    ])
    def test_parses_or_defaults(self, value, expected):
        assert safe_int(value, default=10) == expected

    def test_clamps_to_maximum(self):
        assert safe_int("500", default=10, maximum=100) == 100


def test_safe_date():
    assert safe_date("2025-12-01") == date(2025, 12, 1)
    assert safe_date("2025-12-01T10:00:00Z") == date(2025, 12, 1)
    assert safe_date("yesterday") is None
    assert safe_date(None) is None


def test_parse_pagination_uses_settings():
    settings = Settings(default_page_limit=25, max_page_limit=40, _env_file=None)

    assert parse_pagination(None, None, settings) == PageRequest(page=1, limit=25)
    assert parse_pagination("3", "1000", settings) == PageRequest(page=3, limit=40)


class TestPaginate:

    def test_first_and_last_page(self):
        records = list(range(15))

        first, meta = paginate(records, PageRequest(page=1, limit=10))
        last, _ = paginate(records, PageRequest(page=2, limit=10))

        assert first == list(range(10))
        assert last == list(range(10, 15))
        assert (meta.total, meta.pages) == (15, 2)

    def test_empty(self):
        items, meta = paginate([], PageRequest(page=1, limit=10))

        assert items == []
        assert meta.pages == 0

    def test_exact_multiple(self):
        _, meta = paginate(list(range(20)), PageRequest(page=1, limit=10))

        assert meta.pages == 2


class TestFilters:

    def test_equals_compares_string_forms(self):
        records = [Item(1, status=1), Item(2, status="1"), Item(3, status=2)]

        assert [r.id for r in filter_equals(records, "status", "1")] == [1, 2]

    def test_equals_uses_enum_values(self):
        records = [Item(1, status=LessonStatus.COMPLETED), Item(2, status=LessonStatus.SCHEDULED)]

        assert [r.id for r in filter_equals(records, "status", "completed")] == [1]

    def test_equals_skips_records_without_value(self):
        records = [Item(1), Item(2, status="x")]

        assert [r.id for r in filter_equals(records, "status", "x")] == [2]
        assert [r.id for r in filter_equals(records, "missing_attr", "x")] == []

    def test_none_disables_filter(self):
        records = [Item(1), Item(2)]

        assert filter_equals(records, "status", None) == records

    def test_range_is_inclusive(self):
        records = [Item(i, day=date(2025, 12, i)) for i in (1, 10, 20)]

        kept = filter_range(records, "day", lower=date(2025, 12, 10), upper=date(2025, 12, 20))

        assert [r.id for r in kept] == [10, 20]


def test_sort_by_is_stable_in_both_directions():
    records = [Item(1, name="b"), Item(2, name="a"), Item(3, name="b")]

    assert [r.id for r in sort_by(records, key=lambda r: r.name)] == [2, 1, 3]
    assert [r.id for r in sort_by(records, key=lambda r: r.name, descending=True)] == [1, 3, 2]
