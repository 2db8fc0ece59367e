"""Shared pydantic configuration for boundary models."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class LeagueModel(BaseModel):
    """Accepts both snake_case and the camelCase keys used by the web client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
