"""
Domain errors raised by the service layer.

Services never build HTTP responses themselves.  They raise one of
the exceptions below and the handlers registered in
``main.create_app`` translate them into JSON bodies of the form
``{"message": "..."}`` with the status code carried by the class.
"""

from fastapi import status
from pydantic import ValidationError as PydanticValidationError


class ServiceError(Exception):
    """Base class for errors that map onto a client-facing status code."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """A user, profile, vendor, inquiry or owned item does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ServiceError):
    """A payload violates a required-field or value rule."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Summarise a pydantic error as ``field: reason; field: reason``."""
        parts = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "body"
            parts.append(f"{field}: {error['msg']}")
        return cls("; ".join(parts))


class InvalidRoleError(ValidationError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """The caller is authenticated but does not own the target record."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ServiceError):
    """A uniqueness rule was violated, e.g. a second profile setup."""

    status_code = status.HTTP_409_CONFLICT
