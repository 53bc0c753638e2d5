from typing import Optional

from fastapi import APIRouter, Depends, Query

from driving_school.config import Settings
from driving_school.dependencies import get_settings, get_store
from driving_school.models import Report
from driving_school.schemas import ErrorResponse, ReportCreate, ReportPage
from driving_school.services.query import (
    filter_equals,
    filter_range,
    paginate,
    parse_pagination,
    safe_date,
    sort_by,
)
from driving_school.storage import InMemoryStore

router = APIRouter(tags=["Reports"])


@router.get("", response_model=ReportPage)
async def list_reports(
    report_type: Optional[str] = Query(None, alias="type"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    List reports, newest first.

    ``startDate`` keeps reports whose period starts on or after it and
    ``endDate`` keeps reports whose period ends on or before it. Dates that
    cannot be parsed are ignored.
    """
    reports = filter_equals(store.reports.all(), "type", report_type)
    reports = filter_equals(reports, "student_id", student_id)
    reports = filter_range(reports, "start_date", lower=safe_date(start_date))
    reports = filter_range(reports, "end_date", upper=safe_date(end_date))
    reports = sort_by(reports, key=lambda r: r.generated_at, descending=True)
    data, pagination = paginate(reports, parse_pagination(page, limit, settings))
    return {"data": data, "pagination": pagination}


@router.post(
    "",
    response_model=Report,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_report(payload: ReportCreate, store: InMemoryStore = Depends(get_store)):
    """Generate a report for the given period"""
    return store.reports.create(payload.model_dump(exclude_none=True))
