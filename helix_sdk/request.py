"""Request contract shared by every Helix endpoint.

A concrete endpoint is a pydantic model declaring its wire path, HTTP
method, required scopes and item model as class variables. Its fields are
the query parameters, each annotated with a :class:`QueryParam`
descriptor that tells the encoder how to render it::

    class GetGamesRequest(HelixRequest):
        PATH: ClassVar[str] = "games"
        RESPONSE: ClassVar[type[BaseModel]] = Game

        id: Annotated[list[str], Repeated] = Field(default_factory=list)
        name: Annotated[list[str], Repeated] = Field(default_factory=list)

Fields render in declaration order. Requests that support forward paging
additionally implement :class:`Paginated`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from helix_sdk.scopes import ScopeId

Cursor = str


class FieldKind(str, Enum):
    SCALAR = "scalar"
    ABSENTABLE = "absentable"
    REPEATED = "repeated"
    BODY = "body"


@dataclass(frozen=True)
class QueryParam:
    """Field descriptor consumed by the query encoder.

    ``Repeated.named("user_id")`` overrides the wire key.

    Attributes:
        kind: How the field is rendered.
        name: Wire key, when it differs from the Python field name.
    """

    kind: FieldKind
    name: str | None = None

    def named(self, name: str) -> "QueryParam":
        return QueryParam(self.kind, name)


Scalar = QueryParam(FieldKind.SCALAR)
Absentable = QueryParam(FieldKind.ABSENTABLE)
Repeated = QueryParam(FieldKind.REPEATED)
Body = QueryParam(FieldKind.BODY)


@runtime_checkable
class Request(Protocol):
    """Capability set every endpoint request implements."""

    def path(self) -> str: ...

    def method(self) -> str: ...

    def required_scopes(self) -> frozenset[ScopeId]: ...

    def response_model(self) -> type[BaseModel]: ...

    def single_item(self) -> bool: ...


@runtime_checkable
class Paginated(Protocol):
    """Requests supporting cursor-based forward paging."""

    def set_pagination(self, cursor: Cursor | None) -> None: ...


class HelixRequest(BaseModel):
    """Base model implementing :class:`Request` from class variables."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    PATH: ClassVar[str]
    METHOD: ClassVar[str] = "GET"
    SCOPES: ClassVar[frozenset[ScopeId]] = frozenset()
    RESPONSE: ClassVar[type[BaseModel]]
    SINGLE: ClassVar[bool] = False

    def path(self) -> str:
        return self.PATH

    def method(self) -> str:
        return self.METHOD

    def required_scopes(self) -> frozenset[ScopeId]:
        return frozenset(self.SCOPES)

    def response_model(self) -> type[BaseModel]:
        return self.RESPONSE

    def single_item(self) -> bool:
        return self.SINGLE


def field_descriptor(request: BaseModel, field_name: str) -> QueryParam:
    """Return the QueryParam attached to a field, inferring one if absent.

    Unannotated ``list`` fields are repeated, fields defaulting to None are
    absentable, anything else is a required scalar.
    """
    info = type(request).model_fields[field_name]
    for meta in info.metadata:
        if isinstance(meta, QueryParam):
            return meta

    origin: Any = getattr(info.annotation, "__origin__", info.annotation)
    if origin in (list, tuple):
        return Repeated
    if not info.is_required() and info.default is None:
        return Absentable
    return Scalar
