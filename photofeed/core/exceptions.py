# photofeed/core/exceptions.py
from typing import Any, Dict, Optional


class ApiError(Exception):
    """
    Base class for errors that map to a fixed HTTP status.
    Routes turn them into `{"error_code", "message"}` JSON bodies via `to_dict()`.
    """
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body = {"error_code": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class AuthenticationError(ApiError):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"


class ValidationError(ApiError):
    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(ApiError):
    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"


class ConflictError(ApiError):
    status_code = 409
    error_code = "CONFLICT"


class StoreError(ApiError):
    """Any persistence failure. The underlying message is passed through unchanged."""
    status_code = 500
    error_code = "STORE_ERROR"
