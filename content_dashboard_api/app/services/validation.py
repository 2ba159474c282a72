"""
Payload validation pass.

``validate_payload`` checks a raw request body against a schema and
returns a ``ValidationResult`` instead of raising, so callers decide
how to surface the itemised errors.  ``format_errors`` converts
pydantic error dicts (also produced by FastAPI for query parameters)
into the ``{"path", "message", "code"}`` items of the response
envelope.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError


M = TypeVar("M", bound=BaseModel)


@dataclass
class ValidationResult(Generic[M]):
    value: Optional[M] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "path": [part for part in error.get("loc", ())],
            "message": error.get("msg", "Invalid value"),
            "code": error.get("type", "value_error"),
        }
        for error in errors
    ]


def validate_payload(schema: Type[M], raw: Any) -> ValidationResult[M]:
    """Validate ``raw`` against ``schema``.

    Anything other than a JSON object is rejected outright.  Unknown
    keys are ignored, which also drops caller-supplied ``id`` and
    timestamp fields.
    """
    if not isinstance(raw, Mapping):
        return ValidationResult(
            errors=[
                {
                    "path": [],
                    "message": "Request body must be a JSON object",
                    "code": "model_type",
                }
            ]
        )
    try:
        return ValidationResult(value=schema.model_validate(raw))
    except SchemaError as exc:
        return ValidationResult(errors=format_errors(exc.errors()))
