"""Exception hierarchy for the Giant Bomb client.

Every error raised by this package derives from ``GiantBombError`` so callers
can catch the whole family at once. The original exception, when there is one,
is chained with ``raise ... from`` and also kept on the ``cause`` attribute.
"""

from __future__ import annotations


class GiantBombError(Exception):
    """Base exception for Giant Bomb client errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransportError(GiantBombError):
    """Raised when the HTTP exchange itself fails.

    Attributes:
        url: The URL that was requested (without credentials)
        status: HTTP status code when the server answered with a non-2xx status
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.url = url
        self.status = status

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.status is not None:
            parts.append(f"status={self.status}")
        return " ".join(parts)


class ConnectError(TransportError):
    """Raised when the connection to the server fails."""

    pass


class RequestTimeoutError(TransportError):
    """Raised when a request times out."""

    pass


class ExhaustedError(GiantBombError):
    """Raised when paging past the available results.

    Attributes:
        offset: Offset of the page at the time of the failed move
        max_results: Upstream-reported total number of results
    """

    def __init__(
        self,
        message: str = "no more results",
        offset: int | None = None,
        max_results: int | None = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.max_results = max_results


class DecodeError(GiantBombError):
    """Raised when a response body does not have the expected shape."""

    pass
