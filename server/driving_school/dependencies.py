"""
Request-scoped access to the objects owned by the running application.
"""
from fastapi import Request

from driving_school.config import Settings
from driving_school.services.metrics import RequestMetrics
from driving_school.storage import InMemoryStore


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics
