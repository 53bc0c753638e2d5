"""
Translation of failures into JSON error responses.

Validation failures become 400, unknown ids and routes become 404, and
anything unexpected becomes 500 with the message only shown in development.
"""
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from driving_school.config import Settings
from driving_school.logger import get_logger
from driving_school.result import Result

logger = get_logger(__name__)

MISSING_FIELDS = "Missing required fields"
INVALID_FIELDS = "Invalid field values"
INVALID_JSON = "Invalid JSON body"
ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"

# Error types that mean "the client did not really send a value"
_MISSING_TYPES = {"missing", "string_too_short"}


def _field_name(error: Dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    return loc[0] if loc else "body"


def _is_missing(error: Dict[str, Any]) -> bool:
    return error.get("type") in _MISSING_TYPES or ("input" in error and error["input"] is None)


def validation_error_body(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    if any(error.get("type") == "json_invalid" for error in errors):
        return {"error": INVALID_JSON}

    fields: List[str] = []
    for error in errors:
        name = _field_name(error)
        if name not in fields:
            fields.append(name)

    message = MISSING_FIELDS if any(_is_missing(error) for error in errors) else INVALID_FIELDS
    return {"error": message, "fields": fields}


def not_found_response(result: Result) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": result.message})


def internal_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    content: Dict[str, Any] = {"error": INTERNAL_ERROR}
    if settings.is_development:
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = validation_error_body(list(exc.errors()))
    logger.debug(
        "Request validation failed",
        extra={"method": request.method, "path": request.url.path, "fields": body.get("fields", [])},
    )
    return JSONResponse(status_code=400, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and known paths with an unsupported method look the same to clients
    if exc.status_code in (404, 405):
        logger.warning(ROUTE_NOT_FOUND, extra={"method": request.method, "path": request.url.path})
        return JSONResponse(status_code=404, content={"error": ROUTE_NOT_FOUND})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
