"""Pageable protocol.

The ``Invoker`` only ever talks to resources through this protocol, never
through the concrete resource types. Python's ``Protocol`` (structural
subtyping) means a resource just has to provide the methods; inheriting from
``Pageable`` is not required.

Example usage:
    class ReviewsResponse:
        def __init__(self) -> None:
            self.page = ResponsePage()
            self.reviews: list[Review] = []

        def path(self) -> str:
            return "api/reviews"

        def query_params(self) -> dict[str, str]:
            return {}

        ...

    await invoker.get(reviews)
    while not reviews.is_complete():
        await invoker.next(reviews)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Pageable(Protocol):
    """A resource representing one page of a paginated upstream collection."""

    def path(self) -> str:
        """Request path relative to the endpoint, e.g. ``api/videos``."""
        ...

    def query_params(self) -> dict[str, str]:
        """Resource-specific query parameters added to every request."""
        ...

    def current_offset(self) -> int:
        """Offset sent with the next request."""
        ...

    def advance_offset(self) -> int:
        """Move the offset forward one page and return it.

        Raises:
            ExhaustedError: If there are no further results
        """
        ...

    def retreat_offset(self) -> int:
        """Move the offset backward and return it.

        Raises:
            ExhaustedError: If already at the first page
        """
        ...

    def is_complete(self) -> bool:
        """Whether the offset has reached the total result count."""
        ...

    def parse(self, body: bytes) -> None:
        """Replace this page's state with the decoded response body.

        Raises:
            DecodeError: If the body is malformed. State is left unchanged.
        """
        ...
