# File: civicfeed/core/errors.py
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("civicfeed.errors")


class DomainError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(DomainError):
    """Malformed or missing input. ``errors`` carries field-level detail."""
    status_code = 400
    message = "Invalid data"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict]] = None,
                 field: Optional[str] = None):
        super().__init__(message)
        self.errors = list(errors or [])
        if field:
            self.errors.append({"field": field, "message": self.message})

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class NotFound(DomainError):
    status_code = 404
    message = "Not found"


class InvalidTransition(DomainError):
    status_code = 409
    message = "Invalid status transition"

    def __init__(self, current: str, target: str, message: Optional[str] = None):
        super().__init__(message or f"Cannot move issue from '{current}' to '{target}'")
        self.current = current
        self.target = target

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "from": self.current, "to": self.target}


class InternalError(DomainError):
    """Unexpected store or adapter fault. Logged with traceback; the body never carries detail."""
    status_code = 500


def _format_request_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        out.append({"field": ".".join(loc) or None, "message": err.get("msg", "invalid")})
    return out


async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # 401/403 from auth dependencies, 404/405 from routing
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": _format_request_errors(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
