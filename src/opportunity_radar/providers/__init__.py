"""Opportunity source adapters.

Each adapter fetches one external provider and normalizes its payload into
OpportunityCandidate records:

- CoinGeckoTrendingAdapter: trending coins (New Listings)
- CoinMarketCapListingsAdapter: newest listings (New Listings)
- AirdropAlertAdapter, CryptoNewsAdapter, NftEveningAdapter,
  PlayToEarnAdapter: scraped P2E and airdrop listing pages
- TwitterSearchClient: recent-search API used by the sentiment tracker

All adapters implement SourceAdapterABC and report their health to the
shared DataSourceStatusTable under their `name`.

Example:
    async with CoinGeckoTrendingAdapter(status) as adapter:
        for candidate in await adapter.collect():
            print(candidate.name)
"""
import random

from opportunity_radar.config import Settings
from opportunity_radar.providers.coingecko import CoinGeckoTrendingAdapter
from opportunity_radar.providers.coinmarketcap import \
    CoinMarketCapListingsAdapter
from opportunity_radar.providers.core import SourceAdapterABC
from opportunity_radar.providers.scraped import (AirdropAlertAdapter,
                                                 CryptoNewsAdapter,
                                                 NftEveningAdapter,
                                                 PlayToEarnAdapter)
from opportunity_radar.providers.twitter import TwitterSearchClient
from opportunity_radar.services.source_status import DataSourceStatusTable

TWITTER_SOURCE = "twitter"

# Ingestion order within a pass.
ADAPTER_TYPES: tuple[type[SourceAdapterABC], ...] = (
    CoinGeckoTrendingAdapter,
    CoinMarketCapListingsAdapter,
    AirdropAlertAdapter,
    CryptoNewsAdapter,
    NftEveningAdapter,
    PlayToEarnAdapter,
)

SOURCE_NAMES: tuple[str, ...] = tuple(t.name for t in ADAPTER_TYPES) + (TWITTER_SOURCE,)


def build_adapters(
    settings: Settings,
    status: DataSourceStatusTable,
    rng: random.Random | None = None,
) -> list[SourceAdapterABC]:
    """Instantiate every configured adapter in ingestion order."""
    api_timeout = settings.http_timeout_seconds
    page_timeout = settings.scrape_timeout_seconds
    return [
        CoinGeckoTrendingAdapter(
            status, api_key=settings.coingecko_api_key, timeout=api_timeout, rng=rng
        ),
        CoinMarketCapListingsAdapter(
            status, api_key=settings.coinmarketcap_api_key, timeout=api_timeout, rng=rng
        ),
        AirdropAlertAdapter(status, timeout=page_timeout, rng=rng),
        CryptoNewsAdapter(status, timeout=page_timeout, rng=rng),
        NftEveningAdapter(status, timeout=page_timeout, rng=rng),
        PlayToEarnAdapter(status, timeout=page_timeout, rng=rng),
    ]


__all__ = [
    "ADAPTER_TYPES",
    "AirdropAlertAdapter",
    "CoinGeckoTrendingAdapter",
    "CoinMarketCapListingsAdapter",
    "CryptoNewsAdapter",
    "NftEveningAdapter",
    "PlayToEarnAdapter",
    "SOURCE_NAMES",
    "SourceAdapterABC",
    "TWITTER_SOURCE",
    "TwitterSearchClient",
    "build_adapters",
]
