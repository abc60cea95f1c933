"""CoinMarketCap recently added tokens as New Listings candidates."""
import math

from opportunity_radar.db import Category
from opportunity_radar.providers.coinmarketcap.models import (Listing,
                                                              ListingsParams,
                                                              ListingsResponse)
from opportunity_radar.providers.core import (MissingCredentialsError,
                                              SourceAdapterABC, check_response)
from opportunity_radar.schemas import OpportunityCandidate
from opportunity_radar.services.source_status import DataSourceStatusTable

SYNTHETIC_TOKENS = ("DogeCoin2.0", "SafeMoonX", "ElonSpaceCoin", "MemeLord", "RocketFuel")


class CoinMarketCapListingsAdapter(SourceAdapterABC):
    """Newest listings from the CoinMarketCap Pro API.

    Requires an API key; without one every fetch fails with a status error.
    On failure a handful of synthetic tokens keep the New Listings view populated.
    """

    name = "coinmarketcap"
    api_name = "CoinMarketCap"

    LISTINGS_URL = "https://pro-api.coinmarketcap.com/v1/cryptocurrency/listings/new"
    SOURCE_URL = "https://coinmarketcap.com/new/"
    MAX_ITEMS = 10

    def __init__(self, status: DataSourceStatusTable, *, api_key: str = "", **kwargs) -> None:
        super().__init__(status, **kwargs)
        self._api_key = api_key

    async def fetch(self) -> list[OpportunityCandidate]:
        if not self._api_key:
            raise MissingCredentialsError(f"{self.api_name} API key required", api_name=self.api_name)
        response = await self.client.get(
            self.LISTINGS_URL,
            params=ListingsParams(limit=self.MAX_ITEMS).model_dump(),
            headers={"X-CMC_PRO_API_KEY": self._api_key, "Accept": "application/json"},
        )
        check_response(response, self.api_name)
        payload = ListingsResponse.model_validate(response.json())
        return [self._to_candidate(listing) for listing in payload.data[: self.MAX_ITEMS]]

    def _to_candidate(self, listing: Listing) -> OpportunityCandidate:
        p = self._placeholders
        usd = listing.usd
        market_cap_label = f"${usd.market_cap:,.0f}" if usd.market_cap else "N/A"
        return OpportunityCandidate(
            name=listing.name,
            description=(
                f"Recently listed cryptocurrency ({listing.symbol}). Market Cap: {market_cap_label}. "
                f"{listing.name} is a new addition to the cryptocurrency market."
            ),
            category=Category.NEW_LISTINGS,
            source_url=self.SOURCE_URL,
            estimated_value=(
                float(math.floor(usd.price * 100)) if usd.price else float(p.between(50, 1049))
            ),
            time_remaining=p.time_remaining(14),
            participants=p.between(3_000, 32_999),
            twitter_followers=p.between(5_000, 79_999),
            discord_members=p.between(1_000, 15_999),
            trading_volume=usd.volume_24h or float(p.between(50_000, 2_049_999)),
            market_cap=usd.market_cap or float(p.between(500_000, 50_499_999)),
        )

    def fallback(self) -> list[OpportunityCandidate]:
        p = self._placeholders
        return [
            OpportunityCandidate(
                name=token,
                description=(
                    "Revolutionary new cryptocurrency project with innovative tokenomics "
                    "and strong community backing."
                ),
                category=Category.NEW_LISTINGS,
                source_url=self.SOURCE_URL,
                estimated_value=float(p.between(100, 1099)),
                time_remaining=p.time_remaining(7),
                participants=p.between(1_000, 20_999),
                twitter_followers=p.between(1_000, 50_999),
                discord_members=p.between(500, 10_499),
                trading_volume=float(p.between(50_000, 1_049_999)),
                market_cap=float(p.between(100_000, 10_099_999)),
            )
            for token in SYNTHETIC_TOKENS
        ]
