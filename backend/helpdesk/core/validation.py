"""Validation Engine: validate a payload against a declared request schema.

Invariants:
    - All violations collected in one pass, never stopping at the first
    - Errors ordered by schema declaration order, not input order
    - Unknown fields stripped; declared defaults applied to absent fields
    - Optional fields without a default that were omitted (or sent as null) are
      absent from the normalized value
    - Cross-field rules run only when both sides are present and individually valid
    - A result carries either `value` or `errors`, never both

Design Decisions:
    - Schemas are pydantic models (schemas/common.py RequestSchema); pydantic already
      validates every field before raising, which gives abortEarly=false semantics
    - Cross-field rules are field validators reading ValidationInfo.data, so a
      cross-field violation is reported together with ordinary field errors
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

ROOT_FIELD = "body"


@dataclass(frozen=True)
class FieldError:
    """One violated constraint: dotted wire path + human-readable message."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    value: dict[str, Any] | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_details(self) -> list[dict]:
        return [e.to_dict() for e in self.errors]


def validate(schema: type[BaseModel], payload: Any) -> ValidationResult:
    """Validate `payload` against `schema` and normalize it."""
    try:
        model = schema.model_validate(payload if payload is not None else {})
    except ValidationError as exc:
        return ValidationResult(errors=tuple(field_errors(exc)))
    return ValidationResult(value=normalize(model))


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Errors with an empty location (payload not an object) land on `body`."""
    return [
        FieldError(
            field=".".join(str(part) for part in err["loc"]) or ROOT_FIELD,
            message=err["msg"],
        )
        for err in exc.errors()
    ]


def normalize(model: BaseModel) -> dict[str, Any]:
    """Declared fields only, keyed by attribute name."""
    declared = type(model).model_fields
    value = {}
    for name, info in declared.items():
        current = getattr(model, name)
        if current is None and info.default is None:
            continue
        value[name] = current
    return value
