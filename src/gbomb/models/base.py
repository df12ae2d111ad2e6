"""Shared pydantic configuration for Giant Bomb payload records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class GiantBombModel(BaseModel):
    """Base class for records decoded from Giant Bomb responses.

    Unknown fields are ignored. The API returns ``null`` for empty lists and
    missing values alike, so nulls fall back to the field default.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
