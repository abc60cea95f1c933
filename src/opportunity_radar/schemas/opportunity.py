"""Opportunity schemas: candidate/create input, partial update, and stored read model."""
from datetime import datetime, timezone

from pydantic import Field, ValidationInfo, field_validator

from opportunity_radar.db.models import Category
from opportunity_radar.schemas.base import CamelModel
from opportunity_radar.utils import clamp

HOTNESS_MIN = 0.0
HOTNESS_MAX = 300.0

# Columns that cannot be cleared through a partial update
NON_NULLABLE = (
    "name",
    "description",
    "category",
    "source_url",
    "twitter_followers",
    "discord_members",
    "trading_volume",
    "market_cap",
    "hotness_score",
    "is_active",
)


def _clamp_hotness(value: float | None) -> float | None:
    if value is None:
        return None
    return clamp(float(value), HOTNESS_MIN, HOTNESS_MAX)


def _naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _strip_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _normalize_category(value: str | Category | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, Category):
        return value.value
    if not value.strip():
        raise ValueError("category must not be empty")
    return Category.normalize(value).value


class OpportunityCandidate(CamelModel):
    """Normalized record produced by a source adapter or submitted through the API.

    Also the create payload: id and timestamps are assigned by the store.
    """

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)
    source_url: str = Field(min_length=1)
    website_url: str | None = None
    discord_url: str | None = None
    twitter_url: str | None = None
    image_url: str | None = None

    estimated_value: float | None = None
    participants: int | None = None
    twitter_followers: int = 0
    discord_members: int = 0
    trading_volume: float = 0.0
    market_cap: float = 0.0
    time_remaining: str | None = None
    deadline: datetime | None = None

    hotness_score: float = 0.0
    is_active: bool = True

    @field_validator("name", "description", "source_url")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        return _strip_text(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: str | Category) -> str:
        return _normalize_category(value)

    @field_validator("hotness_score")
    @classmethod
    def _hotness(cls, value: float) -> float:
        return _clamp_hotness(value)

    @field_validator("deadline")
    @classmethod
    def _deadline(cls, value: datetime | None) -> datetime | None:
        return _naive_utc(value)

    @field_validator("twitter_followers", "discord_members", mode="before")
    @classmethod
    def _int_default(cls, value: int | None) -> int:
        return 0 if value is None else value

    @field_validator("trading_volume", "market_cap", mode="before")
    @classmethod
    def _float_default(cls, value: float | None) -> float:
        return 0.0 if value is None else value

    @property
    def content_key(self) -> str:
        """Identity used to upsert repeated discoveries of the same item."""
        return f"{self.name.strip().lower()}|{self.source_url.strip()}"


class OpportunityUpdate(CamelModel):
    """Partial update; only fields that were set are applied."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = None
    source_url: str | None = Field(default=None, min_length=1)
    website_url: str | None = None
    discord_url: str | None = None
    twitter_url: str | None = None
    image_url: str | None = None

    estimated_value: float | None = None
    participants: int | None = None
    twitter_followers: int | None = None
    discord_members: int | None = None
    trading_volume: float | None = None
    market_cap: float | None = None
    time_remaining: str | None = None
    deadline: datetime | None = None

    hotness_score: float | None = None
    is_active: bool | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: str | Category | None) -> str | None:
        return _normalize_category(value)

    @field_validator("hotness_score")
    @classmethod
    def _hotness(cls, value: float | None) -> float | None:
        return _clamp_hotness(value)

    @field_validator("deadline")
    @classmethod
    def _deadline(cls, value: datetime | None) -> datetime | None:
        return _naive_utc(value)

    @field_validator(*NON_NULLABLE, mode="before")
    @classmethod
    def _not_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("name", "description", "source_url")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        return _strip_text(value)


class OpportunityRead(OpportunityCandidate):
    """Stored opportunity as returned by the store and the API."""

    id: int
    created_at: datetime
    updated_at: datetime


class HistoryPoint(CamelModel):
    """One day of an opportunity's score history."""

    date: str  # YYYY-MM-DD
    hotness_score: float
    estimated_value: float
