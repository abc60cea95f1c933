"""Base adapter for sources that are plain HTML listing pages."""
from abc import abstractmethod
from collections.abc import Iterable

import httpx

from opportunity_radar.db import Category
from opportunity_radar.providers.core import SourceAdapterABC, check_response
from opportunity_radar.providers.core.html import (ListingEntry, ListingRule,
                                                   extract_listing)
from opportunity_radar.schemas import OpportunityCandidate

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml",
}


class HtmlListingAdapter(SourceAdapterABC):
    """Fetches `page_url`, picks entries with `rule`, and maps each to a candidate.

    Subclasses declare the page and rule and implement to_candidate(). An
    empty extraction is a successful fetch with no candidates.
    """

    page_url: str
    rule: ListingRule

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout, follow_redirects=True, headers=BROWSER_HEADERS
        )

    async def fetch(self) -> list[OpportunityCandidate]:
        response = await self.client.get(self.page_url)
        check_response(response, self.api_name)
        entries = extract_listing(response.text, self.rule, base_url=self.page_url)
        return [self.to_candidate(entry) for entry in entries]

    @abstractmethod
    def to_candidate(self, entry: ListingEntry) -> OpportunityCandidate:
        """Map one extracted entry to a candidate, filling placeholder metrics."""

    def _from_samples(self, samples: Iterable[dict], category: Category) -> list[OpportunityCandidate]:
        """Build fallback candidates from fixed sample records."""
        p = self._placeholders
        return [
            OpportunityCandidate(
                **sample,
                category=category,
                source_url=self.page_url,
                trading_volume=float(p.between(100_000, 5_099_999)),
                market_cap=float(p.between(1_000_000, 50_999_999)),
            )
            for sample in samples
        ]
