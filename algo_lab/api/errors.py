"""Mapping of core errors onto HTTP responses."""

from fastapi import HTTPException

from algo_lab.core.errors import (
    GenerationError,
    ParseError,
    PlayerError,
    TransportError,
    UpstreamError,
    ValidationError,
)

STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (ValidationError, 422),
    (TransportError, 503),
    (UpstreamError, 502),
    (ParseError, 502),
    (PlayerError, 409),
]


def to_http_exception(error: Exception) -> HTTPException:
    """Convert a core error into an HTTPException with a readable detail."""
    status = 500
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            status = code
            break
    detail = error.message if isinstance(error, GenerationError) else str(error)
    return HTTPException(status_code=status, detail=detail)
