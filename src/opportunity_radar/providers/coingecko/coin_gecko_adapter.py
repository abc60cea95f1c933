"""CoinGecko trending coins as New Listings candidates."""
import math

from opportunity_radar.db import Category
from opportunity_radar.providers.coingecko.models import (TrendingItem,
                                                          TrendingResponse)
from opportunity_radar.providers.core import SourceAdapterABC, check_response
from opportunity_radar.schemas import OpportunityCandidate
from opportunity_radar.services.source_status import DataSourceStatusTable


class CoinGeckoTrendingAdapter(SourceAdapterABC):
    """Trending coins from CoinGecko's public API.

    The demo API key is optional and sent as `x-cg-demo-api-key` when set.
    Fields CoinGecko does not report (followers, Discord size, volume) are
    filled with placeholders. No fallback: a failure yields no candidates.
    """

    name = "coingecko"
    api_name = "CoinGecko"

    TRENDING_URL = "https://api.coingecko.com/api/v3/search/trending"
    SOURCE_URL = "https://coingecko.com/trending"
    COIN_URL = "https://www.coingecko.com/en/coins/{id}"
    MAX_ITEMS = 8
    BTC_USD_ESTIMATE = 45_000

    def __init__(self, status: DataSourceStatusTable, *, api_key: str = "", **kwargs) -> None:
        super().__init__(status, **kwargs)
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["x-cg-demo-api-key"] = self._api_key
        return headers

    async def fetch(self) -> list[OpportunityCandidate]:
        response = await self.client.get(self.TRENDING_URL, headers=self._headers())
        check_response(response, self.api_name)
        payload = TrendingResponse.model_validate(response.json())
        return [self._to_candidate(coin.item) for coin in payload.coins[: self.MAX_ITEMS]]

    def _to_candidate(self, item: TrendingItem) -> OpportunityCandidate:
        p = self._placeholders
        rank = f"#{item.market_cap_rank}" if item.market_cap_rank else "N/A"
        if item.price_btc:
            estimated_value = float(math.floor(item.price_btc * self.BTC_USD_ESTIMATE))
        else:
            estimated_value = float(p.between(100, 2099))
        return OpportunityCandidate(
            name=item.name,
            description=(
                f"Trending cryptocurrency with market cap rank {rank}. "
                f"{item.name} is gaining significant attention in the crypto community."
            ),
            category=Category.NEW_LISTINGS,
            source_url=self.SOURCE_URL,
            image_url=item.large,
            website_url=self.COIN_URL.format(id=item.id),
            estimated_value=estimated_value,
            time_remaining=p.time_remaining(30),
            participants=p.between(5_000, 54_999),
            twitter_followers=p.between(10_000, 109_999),
            discord_members=p.between(2_000, 26_999),
            trading_volume=float(p.between(100_000, 5_099_999)),
            market_cap=float(p.between(1_000_000, 100_999_999)) if item.market_cap_rank else 0.0,
        )
