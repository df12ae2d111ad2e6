"""Giant Bomb date values.

The API reports dates either as ``YYYY-MM-DD HH:MM:SS`` or ``YYYY-MM-DD`` and
occasionally wraps the value in an extra pair of quotes. ``Date`` keeps the
raw string and only interprets it on request:

- ``to_datetime()`` is lenient and returns ``ZERO_TIME`` for anything it
  cannot read. Existing callers rely on that fallback.
- ``parse()`` is strict and raises ``DecodeError``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator

from gbomb.exceptions import DecodeError

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

# Returned by Date.to_datetime() for values that cannot be parsed
ZERO_TIME = datetime.min

_FORMATS_BY_LENGTH = {
    19: DATETIME_FORMAT,
    10: DATE_FORMAT,
}


class Date:
    """A date string as reported by the Giant Bomb API."""

    __slots__ = ("_raw",)

    def __init__(self, raw: str = "") -> None:
        self._raw = raw

    @classmethod
    def from_json(cls, value: Any) -> Date:
        """Build a Date from a decoded JSON value.

        Strips one leading and one trailing double quote if present.
        """
        if isinstance(value, Date):
            return value
        if value is None:
            return cls()
        raw = str(value)
        if raw.startswith('"'):
            raw = raw[1:]
        if raw.endswith('"'):
            raw = raw[:-1]
        return cls(raw)

    def parse(self) -> datetime:
        """Parse the date, raising on an unreadable value.

        Raises:
            DecodeError: If the value is not in one of the two known formats
        """
        layout = _FORMATS_BY_LENGTH.get(len(self._raw))
        if layout is None:
            raise DecodeError(f"Unrecognized date format: {self._raw!r}")
        try:
            return datetime.strptime(self._raw, layout)
        except ValueError as e:
            raise DecodeError(f"Invalid date {self._raw!r}: {e}", cause=e) from e

    def to_datetime(self) -> datetime:
        """Parse the date, returning ``ZERO_TIME`` when it cannot be read."""
        try:
            return self.parse()
        except DecodeError:
            return ZERO_TIME

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Date({self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Date):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._raw)

    def __bool__(self) -> bool:
        return bool(self._raw)


# Field type for pydantic models
DateField = Annotated[Date, BeforeValidator(Date.from_json)]
