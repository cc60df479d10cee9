# app/core/exceptions.py
"""Domain errors raised by services and storage.

Each carries the HTTP status it maps to; ``app.main`` turns them into
``{"detail": ...}`` responses, the same shape ``HTTPException`` produces.
"""


class AppError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AppError):
    status_code = 404


class DuplicateEmailError(AppError):
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class PermissionDeniedError(AppError):
    status_code = 403


class InvalidTransitionError(AppError):
    status_code = 409


class CaseValidationError(AppError):
    status_code = 400


class UploadRejectedError(AppError):
    status_code = 400
