"""
Domain errors surfaced to the HTTP boundary.

Each error carries a fixed status class; `main.py` renders them as
`{"detail": message}` responses.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    rule: str
    message: str


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(f"{e.message}: {e.field}" for e in self.errors))


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class WriteFailed(AppError):
    """
    A write statement affected zero rows.
    """

    status_code = 500


class CreateFailed(WriteFailed):
    status_code = 400


class UpdateFailed(WriteFailed):
    status_code = 404


class DeleteFailed(WriteFailed):
    status_code = 400
