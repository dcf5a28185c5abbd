"""GraphQL response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_MISSING: Any = object()


@dataclass
class ErrorLocation:
    """Error location in a GraphQL document."""

    line: int
    column: int


@dataclass
class GraphQlErrorObject:
    """Single entry of a GraphQL ``errors`` array."""

    message: str
    extensions: dict[str, Any] = field(default_factory=dict)
    path: list[Any] | None = None
    locations: list[ErrorLocation] | None = None

    @property
    def code(self) -> Any:
        return self.extensions.get("code")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | Any) -> GraphQlErrorObject:
        # Some servers send bare strings instead of error objects.
        if not isinstance(data, Mapping):
            return cls(message=str(data))
        locations = data.get("locations")
        return cls(
            message=str(data.get("message", "")),
            extensions=dict(data.get("extensions") or {}),
            path=data.get("path"),
            locations=(
                [ErrorLocation(line=loc["line"], column=loc["column"]) for loc in locations]
                if locations
                else None
            ),
        )


@dataclass
class GraphQlResponse(Generic[T]):
    """Decoded GraphQL response envelope.

    ``has_data`` distinguishes a missing ``data`` key from an explicit null.
    """

    data: T | None = None
    errors: list[GraphQlErrorObject] | None = None
    has_data: bool = True

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GraphQlResponse[Any]:
        raw_data = data.get("data", _MISSING)
        raw_errors = data.get("errors")
        return cls(
            data=None if raw_data is _MISSING else raw_data,
            errors=(
                [GraphQlErrorObject.from_dict(e) for e in raw_errors]
                if raw_errors is not None
                else None
            ),
            has_data=raw_data is not _MISSING,
        )
