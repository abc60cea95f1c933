"""Adapters for sources scraped from public HTML pages."""
from opportunity_radar.providers.scraped.html_listing_adapter import \
    HtmlListingAdapter
from opportunity_radar.providers.scraped.pages import (AirdropAlertAdapter,
                                                       CryptoNewsAdapter,
                                                       NftEveningAdapter,
                                                       PlayToEarnAdapter)

__all__ = [
    "AirdropAlertAdapter",
    "CryptoNewsAdapter",
    "HtmlListingAdapter",
    "NftEveningAdapter",
    "PlayToEarnAdapter",
]
