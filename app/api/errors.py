import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.errors import (
    BugStoreError, InvalidIdentifier, InvalidStatus, MissingRequiredField, NotFound, ValidationError
)
from app.domain.schemas import wire_name

logger = logging.getLogger("errors")

STATUS_CODES = {
    ValidationError: 400,
    MissingRequiredField: 400,
    InvalidIdentifier: 400,
    InvalidStatus: 400,
    NotFound: 404,
}

REQUEST_LOCATIONS = {"body", "query", "path"}


def error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message, **extra},
    )


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:

    @app.exception_handler(BugStoreError)
    async def handle_store_error(request: Request, exc: BugStoreError):
        status_code = STATUS_CODES.get(type(exc), 400)
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc)
        extra = {}
        if isinstance(exc, ValidationError):
            extra["errors"] = exc.errors
        elif isinstance(exc, MissingRequiredField):
            extra["errors"] = [{"field": f, "message": "Field is required"} for f in exc.fields]
        return error_response(status_code, exc.kind, str(exc), **extra)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            loc = [p for p in err.get("loc", ()) if p not in REQUEST_LOCATIONS]
            errors.append({
                "field": ".".join(wire_name(p) for p in loc) or "body",
                "message": err.get("msg", "Invalid value"),
            })
        return error_response(400, ValidationError.kind, "Validation error", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return error_response(404, "NotFound", f"Route not found: {request.url.path}")
        return error_response(exc.status_code, "HTTPError", str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        extra = {}
        if debug:
            extra["detail"] = str(exc)
            extra["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return error_response(500, "ServerError", "Server Error", **extra)
