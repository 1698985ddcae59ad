from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Base class for every custom error raised by the API.
    Keeps the error format returned to clients uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class BadRequestException(BaseAPIException):
    """400: invalid input (bad query parameters, missing fields...)"""
    def __init__(self, message: str = "Bad Request", details: dict = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class UnauthorizedException(BaseAPIException):
    """
    401: bad credentials, missing or expired token.

    `reason` is an internal code for logs only; it never reaches the response
    body, so every authentication failure looks the same to the caller.
    """
    def __init__(self, message: str = "Unauthorized", reason: Optional[str] = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=status.HTTP_401_UNAUTHORIZED
        )
        self.reason = reason

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

class ConflictException(BaseAPIException):
    """409: a record with the same identity already exists"""
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=status.HTTP_409_CONFLICT
        )

# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class PersistenceException(BaseAPIException):
    """
    500: the database rejected or failed a read/write.
    Raised by the services instead of letting SQLAlchemy errors escape.
    """
    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
