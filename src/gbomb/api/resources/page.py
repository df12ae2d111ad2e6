"""Pagination header and the shared pageable resource base.

Every JSON list response from the Giant Bomb API starts with the same header
(``limit``, ``offset``, ``number_of_total_results``, ...). ``ResponsePage``
holds that header and owns the offset arithmetic; resources hold a
``ResponsePage`` by value and delegate to it.

Page lifecycle:
    fresh      offset 0, all counters 0, before the first request
    loaded     after a successful parse, counters taken from the response
    exhausted  offset >= max_results
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gbomb.exceptions import DecodeError, ExhaustedError

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")


class ResponsePage(BaseModel):
    """Pagination header of a Giant Bomb JSON response.

    Attributes:
        error: Upstream status message ("OK" on success)
        limit: Page size requested
        offset: Start index of the current page
        page_results: Number of results in this page
        max_results: Upstream-reported total number of results
        status_code: Upstream status code (1 on success)
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    error: str = ""
    limit: int = 0
    offset: int = 0
    page_results: int = Field(0, alias="number_of_page_results")
    max_results: int = Field(0, alias="number_of_total_results")
    status_code: int = 0

    def advance_offset(self) -> int:
        """Predict the start of the next page and move the offset there.

        The request for the next page is made with the already advanced
        offset.

        Raises:
            ExhaustedError: If the offset has reached the total, or the page
                size is not positive so the offset could never move
        """
        if self.offset >= self.max_results:
            raise ExhaustedError(
                "no more results", offset=self.offset, max_results=self.max_results
            )
        if self.limit <= 0:
            raise ExhaustedError(
                f"cannot advance with page size {self.limit}",
                offset=self.offset,
                max_results=self.max_results,
            )
        self.offset += min(self.limit, self.max_results - self.offset)
        return self.offset

    def retreat_offset(self) -> int:
        """Move the offset backward, clamping at zero.

        The step is ``max_results``, not ``limit``, so this only lands on a
        page boundary when the two are equal. Kept as the upstream client
        behaves until the intended step is confirmed.

        Raises:
            ExhaustedError: If already at offset 0
        """
        if self.offset - 1 < 0:
            raise ExhaustedError(
                "no previous results", offset=self.offset, max_results=self.max_results
            )
        self.offset = max(0, self.offset - self.max_results)
        return self.offset

    def is_complete(self) -> bool:
        """Check whether no results remain past the current offset."""
        return self.offset >= self.max_results


def load_json_object(body: bytes) -> dict[str, Any]:
    """Decode a response body that must be a JSON object.

    Raises:
        DecodeError: If the body is not valid JSON or not an object
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Invalid JSON response: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


class PagedResource(ABC, Generic[PayloadT]):
    """Base for resources implementing the ``Pageable`` protocol.

    Subclasses provide the request path, any extra query parameters, and how
    to decode and store the ``results`` member of the response.
    """

    def __init__(self, offset: int = 0) -> None:
        self.page = ResponsePage(offset=offset)

    @abstractmethod
    def path(self) -> str:
        """Request path relative to the endpoint."""
        ...

    def query_params(self) -> dict[str, str]:
        """Extra query parameters; none by default."""
        return {}

    @abstractmethod
    def _decode_results(self, results: Any) -> PayloadT:
        """Decode the ``results`` member of a response.

        Raises:
            ValidationError: If the results do not match the record shape
            DecodeError: For other shape mismatches
        """
        ...

    @abstractmethod
    def _replace_results(self, payload: PayloadT) -> None:
        """Store a decoded payload, replacing the previous one."""
        ...

    def current_offset(self) -> int:
        return self.page.offset

    def advance_offset(self) -> int:
        return self.page.advance_offset()

    def retreat_offset(self) -> int:
        return self.page.retreat_offset()

    def is_complete(self) -> bool:
        return self.page.is_complete()

    def parse(self, body: bytes) -> None:
        """Decode a response body and replace header and payload together.

        Decoding happens into new values first, so a failure leaves the
        previous page untouched.

        Raises:
            DecodeError: If the body is malformed
        """
        data = load_json_object(body)
        try:
            page = ResponsePage.model_validate(data)
            payload = self._decode_results(data.get("results"))
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected response shape for {self.path()}: {e}", cause=e
            ) from e

        self.page = page
        self._replace_results(payload)
        logger.debug(
            "Decoded %s: offset=%d page_results=%d max_results=%d",
            self.path(),
            page.offset,
            page.page_results,
            page.max_results,
        )
