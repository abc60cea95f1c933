"""Price alert schemas."""
from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from opportunity_radar.schemas.base import CamelModel
from opportunity_radar.utils import utcnow


class AlertCondition(str, Enum):
    ABOVE = "above"
    BELOW = "below"


class PriceAlertCreate(CamelModel):
    symbol: str = Field(min_length=1)
    target_price: float = Field(gt=0)
    condition: AlertCondition

    @field_validator("symbol")
    @classmethod
    def _upper(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be blank")
        return value


class PriceAlert(PriceAlertCreate):
    id: int
    user_id: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
