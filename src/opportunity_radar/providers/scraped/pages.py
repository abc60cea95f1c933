"""Adapters for the scraped P2E and airdrop listing pages."""
from opportunity_radar.db import Category
from opportunity_radar.providers.core.html import (DescriptionFrom,
                                                   ListingEntry, ListingRule)
from opportunity_radar.providers.scraped.html_listing_adapter import \
    HtmlListingAdapter
from opportunity_radar.providers.scraped.samples import (SAMPLE_AIRDROPS,
                                                         SAMPLE_P2E_GAMES)
from opportunity_radar.schemas import OpportunityCandidate


class AirdropAlertAdapter(HtmlListingAdapter):
    """AirdropAlert's list of P2E airdrops.

    Headings that themselves mention "airdrop" are section titles, not
    projects, and are skipped.
    """

    name = "airdropalert"
    api_name = "AirdropAlert"
    page_url = "https://airdropalert.com/blogs/list-of-p2e-airdrops/"
    rule = ListingRule(
        selector="h3, h4, .game-item, .airdrop-item",
        min_length=6,
        max_length=None,
        limit=5,
        exclude_words=("airdrop",),
    )
    NAME_LENGTH = 50

    def to_candidate(self, entry: ListingEntry) -> OpportunityCandidate:
        return OpportunityCandidate(
            name=entry.name[: self.NAME_LENGTH],
            description=f"P2E airdrop opportunity: {entry.name}",
            category=Category.AIRDROPS,
            source_url=self.page_url,
            website_url=entry.link or self.page_url,
            estimated_value=self._placeholders.uniform(100, 600),
            time_remaining="30 days",
        )

    def fallback(self) -> list[OpportunityCandidate]:
        return self._from_samples(SAMPLE_AIRDROPS, Category.AIRDROPS)


class CryptoNewsAdapter(HtmlListingAdapter):
    """CryptoNews' best play-to-earn games article."""

    name = "cryptonews"
    api_name = "CryptoNews"
    page_url = "https://cryptonews.com/cryptocurrency/best-play-to-earn-games/"
    rule = ListingRule(
        selector="h2, h3, .game-title, strong",
        min_length=6,
        max_length=59,
        limit=4,
        description_from=DescriptionFrom.PARENT,
        description_length=150,
    )

    def to_candidate(self, entry: ListingEntry) -> OpportunityCandidate:
        summary = f"{entry.description}..." if entry.description else entry.name
        return OpportunityCandidate(
            name=entry.name,
            description=f"Top P2E game: {summary}",
            category=Category.P2E_GAMES,
            source_url=self.page_url,
            website_url=self.page_url,
            trading_volume=self._placeholders.uniform(500_000, 1_500_000),
        )


class NftEveningAdapter(HtmlListingAdapter):
    """NFT Evening's best play-to-earn games article."""

    name = "nftevening"
    api_name = "NFT Evening"
    page_url = "https://nftevening.com/best-play-to-earn-games/"
    rule = ListingRule(
        selector="h2, h3, .wp-block-heading",
        min_length=6,
        max_length=79,
        limit=4,
        description_from=DescriptionFrom.NEXT_SIBLING,
        description_length=180,
    )
    DEFAULT_DESCRIPTION = "Popular P2E game featured on NFT Evening"

    def to_candidate(self, entry: ListingEntry) -> OpportunityCandidate:
        return OpportunityCandidate(
            name=entry.name,
            description=f"NFT & P2E game: {entry.description or self.DEFAULT_DESCRIPTION}",
            category=Category.P2E_GAMES,
            source_url=self.page_url,
            website_url=self.page_url,
            market_cap=self._placeholders.uniform(10_000_000, 60_000_000),
        )


class PlayToEarnAdapter(HtmlListingAdapter):
    """PlayToEarn's blockchain games directory."""

    name = "playtoearn"
    api_name = "PlayToEarn"
    page_url = "https://playtoearn.com/blockchaingames/"
    rule = ListingRule(
        selector=".game-card, .game-item, h3, .title",
        min_length=4,
        max_length=49,
        limit=6,
    )

    def to_candidate(self, entry: ListingEntry) -> OpportunityCandidate:
        return OpportunityCandidate(
            name=entry.name,
            description=f"Blockchain game from PlayToEarn: {entry.name}",
            category=Category.P2E_GAMES,
            source_url=self.page_url,
            website_url=entry.link or self.page_url,
            participants=self._placeholders.between(10_000, 109_999),
        )

    def fallback(self) -> list[OpportunityCandidate]:
        return self._from_samples(SAMPLE_P2E_GAMES, Category.P2E_GAMES)

