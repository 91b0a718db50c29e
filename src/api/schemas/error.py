"""
Error schemas - the JSON body of every non-2xx API response
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (offending ID, error count)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the error occurred (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error envelope"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID, also written to the log")

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "PATTERN_NOT_FOUND",
                    "message": "Pattern 'sparkles' not found",
                    "details": {"pattern_id": "sparkles"},
                    "timestamp": "2026-03-02T18:04:11Z"
                },
                "request_id": "5f0c7d3e-2b1a-4c39-9f5e-0d8a6b7e4c21"
            }
        }


class ValidationErrorResponse(BaseModel):
    """Request body did not match the schema"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: List[Dict[str, Any]] = Field(
        description="One entry per offending field"
    )
    request_id: Optional[str] = Field(None, description="Request ID, also written to the log")

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"error_count": 1},
                    "timestamp": "2026-03-02T18:04:11Z"
                },
                "validation_errors": [
                    {"field": "activePattern", "message": "Field required", "type": "missing"}
                ],
                "request_id": "5f0c7d3e-2b1a-4c39-9f5e-0d8a6b7e4c21"
            }
        }
