"""Typed API errors raised by services and mapped to HTTP responses in one place."""

DEFAULT_ERROR_CODE = "UNKNOWN_ERROR"


class ApiError(Exception):
    """Base error carrying an HTTP status, a human message and a machine-readable code."""

    status_code = 500

    def __init__(self, message: str, error_code: str | None = None) -> None:
        self.message = message
        self.error_code = error_code or DEFAULT_ERROR_CODE
        super().__init__(message)


class BadRequestError(ApiError):
    """Malformed or invalid input, or a business-rule conflict."""

    status_code = 400


class UnauthorizedError(ApiError):
    """Missing or invalid credentials or token."""

    status_code = 401


class ForbiddenError(ApiError):
    """Authenticated but the role is insufficient."""

    status_code = 403


class NotFoundError(ApiError):
    """Referenced entity does not exist."""

    status_code = 404


class InternalError(ApiError):
    """Unexpected or storage failure."""

    status_code = 500
