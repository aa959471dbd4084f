from typing import Any


class ApiError(Exception):
    """A failure with a known HTTP status, rendered as the error envelope."""

    status_code = 500

    def __init__(self, message: str = "Something went wrong", *, status_code: int | None = None, errors: list[Any] | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors or []


class ValidationError(ApiError):
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401


class AuthorizationError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class UpstreamFailure(ApiError):
    """The media store or the database did not produce the expected result."""

    status_code = 500
