"""Domain models for usercache."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "validate_default": True,
    }


class User(StrictModel):
    """A user record as held by the store and mirrored in the cache."""

    id: int = Field(ge=1)
    email: str = Field(min_length=1)
    name: str
    created_at: datetime
