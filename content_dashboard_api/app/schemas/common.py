"""
Shared schema building blocks.

``CamelModel`` maps snake_case attributes to the camelCase keys used on
the wire (``coverImageUrl``, ``publishedAt`` and so on).  Both forms
are accepted on input.  The ``Envelope`` model documents the uniform
response wrapper every endpoint returns.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


T = TypeVar("T")


class PublishStatus(str, Enum):
    """Lifecycle status of a blog post or project.

    Transitions are free in both directions and only happen through an
    explicit update payload.
    """

    DRAFT = "draft"
    PUBLISHED = "published"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


def check_http_url(value: Optional[str]) -> Optional[str]:
    """Reject strings that are not absolute http(s) URLs.

    The original string is returned untouched; pydantic's URL types
    would normalise it (e.g. append a trailing slash).
    """
    if value is None:
        return value
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc or " " in value:
        raise PydanticCustomError("url", "Input should be a valid http(s) URL")
    return value


def blank_to_none(value: Any) -> Any:
    """Treat empty form fields as "not provided" for optional strings."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


HttpUrlStr = Annotated[str, AfterValidator(check_http_url)]
OptionalHttpUrlStr = Annotated[
    Optional[str], BeforeValidator(blank_to_none), AfterValidator(check_http_url)
]


class ErrorDetail(BaseModel):
    """One violated constraint in a rejected payload."""

    path: List[Any] = Field(default_factory=list, examples=[["title"]])
    message: str = Field(..., examples=["String should have at least 1 character"])
    code: str = Field(..., examples=["string_too_short"])


class Envelope(BaseModel, Generic[T]):
    """Uniform response wrapper.

    Success responses carry ``data`` (or only ``message`` for deletes);
    failures carry ``message`` and, for validation failures, ``errors``.
    """

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[ErrorDetail]] = None


class HealthStatus(BaseModel):
    success: bool = True
    status: str = Field("healthy", examples=["healthy"])
    timestamp: str
    message: str = Field(..., examples=["API is running properly"])
    records: Optional[Dict[str, int]] = None
