"""Participant model shared across ingestion and allocation."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


MIN_SKILL = 1
MAX_SKILL = 5
DEFAULT_SKILL = 3


class Participant(BaseModel):
    """Normalized roster entry consumed by the allocator."""

    name: str = Field(..., min_length=1)
    skill: int = Field(DEFAULT_SKILL, ge=MIN_SKILL, le=MAX_SKILL)
    position: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("position")
    @classmethod
    def _upper_position(cls, value: str) -> str:
        return value.upper()
