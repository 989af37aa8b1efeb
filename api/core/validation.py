"""
Request validation on top of pydantic.

Pydantic collects every failing field in one pass; we translate its error list
into `FieldError`s so callers can inspect individual failures, and raise a single
`ValidationError` that aggregates them.
"""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

import pydantic

from .errors import FieldError, ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) or "body"


def _message(error: dict[str, Any]) -> str:
    # pydantic prefixes custom validator messages with "Value error, ".
    msg = str(error.get("msg") or "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def field_errors(errors: Sequence[dict[str, Any]]) -> list[FieldError]:
    """
    Accepts `errors()` from pydantic or from FastAPI request validation.
    """
    return [
        FieldError(
            field=_field_name(tuple(err.get("loc") or ())),
            rule=str(err.get("type") or "invalid"),
            message=_message(err),
        )
        for err in errors
    ]


def parse(model: type[ModelT], data: Any) -> ModelT:
    """
    Validate `data` against `model`, raising one aggregated `ValidationError`.
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError(field="body", rule="dict_type", message="Request body must be an object")])
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from exc

