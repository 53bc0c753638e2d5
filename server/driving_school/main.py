import asyncio
import os
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from driving_school.config import Settings, settings as default_settings
from driving_school.errors import internal_error_response, register_exception_handlers
from driving_school.lifecycle import loop_exception_handler
from driving_school.logger import get_logger, setup_logger
from driving_school.services.metrics import RequestMetrics
from driving_school.storage import InMemoryStore

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryStore] = None,
    metrics: Optional[RequestMetrics] = None,
) -> FastAPI:
    """
    Build an application with its own store and metrics.

    Every call returns an independent instance, which is how tests get a
    clean store each time. There is no module-level app; run it with
    ``python -m driving_school`` or
    ``uvicorn --factory driving_school.main:create_app``.
    """
    settings = settings or default_settings
    setup_logger(level=settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=False,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryStore()
    app.state.metrics = metrics or RequestMetrics(error_budget_cost=settings.error_budget_cost)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        """Count and log every request; turn unhandled exceptions into 500s."""
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled error",
                exc_info=exc,
                extra={"method": request.method, "path": request.url.path},
            )
            app.state.metrics.record_fault()
            response = internal_error_response(exc, app.state.settings)

        duration_ms = (time.perf_counter() - started) * 1000
        app.state.metrics.record_request(response.status_code)
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration": f"{duration_ms:.0f}ms",
            },
        )
        return response

    register_exception_handlers(app)

    # Mount static assets for the landing page
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.on_event("startup")
    async def startup_event():
        """Hook loop-level error logging and announce the store"""
        asyncio.get_running_loop().set_exception_handler(loop_exception_handler)
        logger.info(
            "In-memory store initialized",
            extra={
                "collections": app.state.store.counts(),
                "environment": app.state.settings.environment,
            },
        )

    @app.get("/", include_in_schema=False)
    async def root():
        """Landing page"""
        return FileResponse(os.path.join(STATIC_DIR, "index.html"))

    # Import and include routers
    from driving_school.routes import health, instructors, lessons, reports, students

    app.include_router(health.router)
    app.include_router(lessons.router, prefix="/api/lessons", tags=["Lessons"])
    app.include_router(students.router, prefix="/api/students", tags=["Students"])
    app.include_router(instructors.router, prefix="/api/instructors", tags=["Instructors"])
    app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])

    return app

