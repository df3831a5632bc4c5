"""Application exception types."""

from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error rendered as an ``{"error": ...}`` payload."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(error=message)
        super().__init__(message)


__all__ = ["ApiError"]
