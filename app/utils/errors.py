"""
API error types

Every failure leaves the API as
    {"error": {"code": ..., "message": ..., "details": {...}}}
Services and routes raise APIError (an HTTPException) and the handlers
registered in app.main render the envelope.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIError(HTTPException):
    """HTTPException carrying a machine-readable error code"""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.details = details or {}


class ValidationFailed(APIError):
    """400 for a malformed or missing request parameter"""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, code, message, details)


class Unauthorized(APIError):
    def __init__(self, message: str = "API key required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", message)


class Forbidden(APIError):
    def __init__(self, message: str = "API key does not grant access to this user"):
        super().__init__(status.HTTP_403_FORBIDDEN, "FORBIDDEN", message)


class NotFound(APIError):
    def __init__(self, code: str, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, code, message)


class MovieNotFound(NotFound):
    def __init__(self):
        super().__init__("MOVIE_NOT_FOUND", "Movie not found")


class NotSaved(NotFound):
    def __init__(self):
        super().__init__("NOT_SAVED", "Movie is not saved")


class DuplicateSave(APIError):
    def __init__(self):
        super().__init__(status.HTTP_409_CONFLICT, "DUPLICATE_SAVE", "Movie is already saved")


class UnavailableInCountry(APIError):
    def __init__(self, country_code: str):
        super().__init__(
            422,
            "UNAVAILABLE_IN_COUNTRY",
            "Movie is not available in the specified country",
            {"country": country_code},
        )


# Codes for HTTPExceptions raised by the framework itself (routing, methods)
STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> dict:
    """Build the JSON error envelope"""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        }
    }
