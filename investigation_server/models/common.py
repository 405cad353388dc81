"""Common Pydantic models shared across routes."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    error: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every engine rejection: {"detail": {"error": kind, "message": text}}."""

    detail: ErrorDetail


# OpenAPI docs for the statuses engine rejections map to
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Record belongs to another podcast or major branch"},
    404: {"model": ErrorResponse, "description": "Session or content record not found"},
    409: {
        "model": ErrorResponse,
        "description": "InvalidState, QuotaExceeded, DuplicateSelection or StaleRevision",
    },
}
