from __future__ import annotations


class AppError(Exception):
    """Base error carrying the HTTP status it maps to at the API boundary."""

    status_code = 500

    def __init__(self, message: str = "", status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UsageError(AppError):
    """Caller supplied nothing usable (e.g. an empty update payload)."""

    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class DuplicateError(AppError):
    status_code = 400

    def __init__(self, message: str = "Duplicate"):
        super().__init__(message)


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)
