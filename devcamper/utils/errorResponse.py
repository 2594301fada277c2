from fastapi import HTTPException
from starlette import status


class ErrorResponse(HTTPException):
    """Base for every error rendered as ``{"success": false, "error": ...}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(
            status_code=status_code or self.status_code,
            detail=message or self.default_message,
        )

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationFailed(ErrorResponse):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class NotFound(ErrorResponse):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Unauthenticated(ErrorResponse):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized to access this route"


class InvalidCredentials(ErrorResponse):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotAuthorized(ErrorResponse):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized to perform this action"


class DuplicateOwnership(ErrorResponse):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User has already published a bootcamp"


class DuplicateKey(ErrorResponse):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Duplicate field value entered"


class UpstreamFailure(ErrorResponse):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service failure"


class ServerError(ErrorResponse):
    pass


def to_id(value: str) -> int:
    """Parse a path id; anything that is not a valid id is reported as not found."""
    try:
        resource_id = int(value)
    except (TypeError, ValueError):
        raise NotFound(f"Resource not found with id of {value}")
    if resource_id < 1:
        raise NotFound(f"Resource not found with id of {value}")
    return resource_id
