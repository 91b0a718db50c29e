"""
Exception handlers that turn errors into the JSON ErrorResponse envelope

    RequestValidationError -> 422 VALIDATION_ERROR, one entry per field
    DomainError            -> the error's own status and code
    anything else          -> 500 INTERNAL_SERVER_ERROR, traceback logged

Every response carries a request_id that also appears in the log line.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uuid
from typing import Any, Dict, List, Optional

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Error with a stable code the web UI can switch on"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class PatternNotFoundError(DomainError):
    def __init__(self, pattern_id: str):
        super().__init__(
            code="PATTERN_NOT_FOUND",
            message=f"Pattern '{pattern_id}' not found",
            details={"pattern_id": pattern_id},
            status_code=404
        )


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    # loc starts with "body"/"query"/"path"; the client only needs the field
    return [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def _respond(status_code: int, body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        field_errors = _field_errors(exc)

        log.warn(
            "Rejected request body",
            path=request.url.path,
            fields=", ".join(e["field"] for e in field_errors),
            request_id=request_id,
        )

        return _respond(status.HTTP_422_UNPROCESSABLE_ENTITY, ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(field_errors)},
            ),
            validation_errors=field_errors,
            request_id=request_id,
        ))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        request_id = str(uuid.uuid4())
        log.warn(f"{exc.code}: {exc.message}", path=request.url.path, request_id=request_id)

        return _respond(exc.status_code, ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
            request_id=request_id,
        ))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())
        log.error(
            f"Unhandled {type(exc).__name__}: {exc}",
            path=request.url.path,
            request_id=request_id,
        )

        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                details={"request_id": request_id},
            ),
            request_id=request_id,
        ))
