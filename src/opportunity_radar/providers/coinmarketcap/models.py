"""Response models for the CoinMarketCap new-listings endpoint."""
from pydantic import BaseModel, ConfigDict, Field


class UsdQuote(BaseModel):
    price: float | None = None
    volume_24h: float | None = None
    market_cap: float | None = None


class ListingQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    usd: UsdQuote | None = Field(default=None, alias="USD")


class Listing(BaseModel):
    name: str
    symbol: str
    quote: ListingQuote | None = None

    @property
    def usd(self) -> UsdQuote:
        if self.quote is None or self.quote.usd is None:
            return UsdQuote()
        return self.quote.usd


class ListingsResponse(BaseModel):
    data: list[Listing] = Field(default_factory=list)


class ListingsParams(BaseModel):
    """Query params for /v1/cryptocurrency/listings/new."""

    start: int = 1
    limit: int = 10
    convert: str = "USD"
