"""Typed result of a single Helix dispatch."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from helix_sdk.request import Cursor, Paginated

T = TypeVar("T")


class Pagination(BaseModel):
    """The ``pagination`` object of a response envelope."""

    cursor: Cursor | None = None


class Response(BaseModel, Generic[T]):
    """Decoded response of one request.

    ``data`` keeps the API's ordering. For single-item endpoints it is the
    item itself rather than a list.
    """

    data: T
    cursor: Cursor | None = None
    total: int | None = None
    other: dict[str, Any] = Field(default_factory=dict)
    request: Any = Field(default=None, exclude=True, repr=False)

    @property
    def has_next_page(self) -> bool:
        return self.cursor is not None and isinstance(self.request, Paginated)

    def next_request(self) -> Any:
        """Return a copy of the originating request positioned at ``cursor``.

        Returns None when there is no further page or the request does not
        support paging. The original request is left untouched.
        """
        if not self.has_next_page:
            return None
        next_request = self.request.model_copy(deep=True)
        next_request.set_pagination(self.cursor)
        return next_request
