"""Error utilities."""

from datetime import datetime
from typing import Optional, Dict, Any

from fastapi import HTTPException, status


# Common status codes
SERVICE_ERROR = status.HTTP_503_SERVICE_UNAVAILABLE
INTERNAL_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR
CONFLICT = status.HTTP_409_CONFLICT
NOT_FOUND = status.HTTP_404_NOT_FOUND
BAD_REQUEST = status.HTTP_400_BAD_REQUEST
PAYLOAD_TOO_LARGE = 413  # constant name differs across Starlette releases


def create_error(
    message: str,
    status_code: int,
    context: Optional[Dict[str, Any]] = None,
    cause: Optional[Exception] = None
) -> HTTPException:
    """Create HTTP exception with consistent format.

    Common status codes:
    - 503 Service Unavailable: Service failed to start/stop
    - 500 Internal Server Error: Store or notifier failure
    - 409 Conflict: Service already running
    - 404 Not Found: Configuration not found
    - 413 Payload Too Large: Upload exceeds the configured limit
    - 400 Bad Request: Invalid OpenAPI document

    Args:
        message: Error message
        status_code: HTTP status code (required)
        context: Optional error context
        cause: Optional cause exception

    Returns:
        HTTPException with formatted detail
    """
    detail = {
        "status": "error",
        "message": message,
        "timestamp": datetime.now().isoformat(),
        "context": dict(context or {})
    }

    if cause:
        detail["context"]["error"] = str(cause)

    error = HTTPException(
        status_code=status_code,
        detail=detail
    )

    if cause:
        error.__cause__ = cause

    return error
