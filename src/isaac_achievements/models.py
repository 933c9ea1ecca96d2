"""Pydantic models for extracted achievements and run results."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

FailureKind = Literal["fetch_failed", "empty_content", "schema_drift", "invalid_heuristics"]


class Achievement(BaseModel):
    id: int = Field(ge=0)
    name: str = Field(min_length=1)
    unlock_html: str = Field(alias="unlockHtml")
    url: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    model_config = {"populate_by_name": True, "frozen": True}


class AchievementsEnvelope(BaseModel):
    achievements: list[Achievement]
    count: int = Field(ge=0)
    source: str
    last_fetched: datetime = Field(alias="lastFetched")

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class Failure(BaseModel):
    kind: FailureKind
    message: str
    retryable: bool = True
    status_code: int | None = Field(default=None, alias="statusCode")

    model_config = {"populate_by_name": True}
