"""Response models for the CoinGecko trending endpoint."""
from pydantic import BaseModel, Field


class TrendingItem(BaseModel):
    id: str
    name: str
    symbol: str | None = None
    market_cap_rank: int | None = None
    large: str | None = None
    price_btc: float | None = None


class TrendingCoin(BaseModel):
    item: TrendingItem


class TrendingResponse(BaseModel):
    """Payload of /search/trending; only `coins` is used."""

    coins: list[TrendingCoin] = Field(default_factory=list)
