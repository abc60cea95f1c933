"""Social sentiment tracking over Twitter recent search.

Two independent loops poll a small priority subset of terms: a frequent
mention cycle (top mentions by influence) and a slower trend cycle (per-term
volume and polarity). Terms in a cycle are fetched one at a time through a
token bucket; the first failed request ends the cycle, and whatever was
collected before it is still published. Results go to the broadcast hub and
an in-memory cache, never to the store.
"""
import asyncio
import contextlib
import logging
import re
from collections.abc import Iterable, Sequence

from opportunity_radar.providers import TWITTER_SOURCE, TwitterSearchClient
from opportunity_radar.providers.core import (SOURCE_EXCEPTIONS,
                                              ProviderErrorMapper, TokenBucket)
from opportunity_radar.providers.twitter.models import RecentSearchResponse
from opportunity_radar.schemas import (EventType, PublicMetrics, Sentiment,
                                       SentimentTrend, SocialMention,
                                       TermSentiment)
from opportunity_radar.services.broadcast import BroadcastHub
from opportunity_radar.services.source_status import DataSourceStatusTable
from opportunity_radar.utils import utcnow

logger = logging.getLogger(__name__)

TOP_MENTIONS = 10
INFLUENCER_FOLLOWERS = 10_000  # strictly more than this
TRENDING_MIN_VOLUME = 100
TRENDING_MIN_MENTIONS = 5

_HASHTAG = re.compile(r"#\w+")


def _word_pattern(words: Iterable[str]) -> re.Pattern | None:
    words = [w for w in words if w]
    if not words:
        return None
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)


class SentimentClassifier:
    """Keyword-lexicon sentiment plus hashtag and tracked-term extraction.

    Each lexicon word counts once if it appears as a whole word; more positive
    than negative hits is positive, the reverse is negative, ties are neutral.
    """

    def __init__(
        self,
        positive_words: Iterable[str],
        negative_words: Iterable[str],
        tracked_terms: Iterable[str] = (),
    ) -> None:
        self._positive = [_word_pattern([w]) for w in positive_words if w]
        self._negative = [_word_pattern([w]) for w in negative_words if w]
        self._tracked = [(t, _word_pattern([t])) for t in tracked_terms if t]

    def classify(self, text: str) -> Sentiment:
        positive = sum(1 for p in self._positive if p.search(text))
        negative = sum(1 for p in self._negative if p.search(text))
        if positive > negative:
            return Sentiment.POSITIVE
        if negative > positive:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def relevant_terms(self, text: str) -> list[str]:
        return [term for term, p in self._tracked if p.search(text)]

    @staticmethod
    def hashtags(text: str) -> list[str]:
        return _HASHTAG.findall(text)


def rank_by_influence(mentions: Iterable[SocialMention]) -> list[SocialMention]:
    """Most influential first (followers x engagement)."""
    return sorted(mentions, key=lambda m: m.influence, reverse=True)


def aggregate_trend(term: str, mentions: Sequence[SocialMention]) -> SentimentTrend | None:
    """Per-term volume, mean polarity and trending flag; None without mentions."""
    if not mentions:
        return None
    volume = sum(m.engagement for m in mentions)
    return SentimentTrend(
        term=term,
        volume=volume,
        sentiment=sum(m.sentiment.polarity for m in mentions) / len(mentions),
        mentions_24h=len(mentions),
        influencer_mentions=sum(1 for m in mentions if m.author_followers > INFLUENCER_FOLLOWERS),
        trending=volume > TRENDING_MIN_VOLUME and len(mentions) > TRENDING_MIN_MENTIONS,
    )


class SentimentTracker:
    """Runs the mention and trend cycles and caches their latest results."""

    def __init__(
        self,
        client: TwitterSearchClient,
        classifier: SentimentClassifier,
        hub: BroadcastHub,
        status: DataSourceStatusTable,
        *,
        mention_terms: Sequence[str] = ("P2E", "airdrop", "GameFi"),
        trend_terms: Sequence[str] = ("P2E", "airdrop"),
        mention_interval: float = 15 * 60,
        trend_interval: float = 30 * 60,
        mention_warmup: float = 5.0,
        trend_warmup: float = 10.0,
        mention_spacing: float = 2.0,
        trend_spacing: float = 3.0,
    ) -> None:
        self._client = client
        self._classifier = classifier
        self._hub = hub
        self._status = status
        self._mention_terms = list(mention_terms)
        self._trend_terms = list(trend_terms)
        self._mention_interval = mention_interval
        self._trend_interval = trend_interval
        self._mention_warmup = mention_warmup
        self._trend_warmup = trend_warmup
        self._mention_bucket = TokenBucket.spaced(mention_spacing)
        self._trend_bucket = TokenBucket.spaced(trend_spacing)
        self._error_mapper = ProviderErrorMapper(api_name=client.api_name)
        self._tasks: list[asyncio.Task] = []
        self.latest_mentions: list[SocialMention] = []
        self.latest_trends: list[SentimentTrend] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def term_sentiment(self) -> list[TermSentiment]:
        """Latest per-term sentiment and volume, highest volume first."""
        return [
            TermSentiment(term=t.term, sentiment=t.sentiment, volume=t.volume)
            for t in self.latest_trends
        ]

    async def start(self) -> None:
        if self.running:
            return
        if not self._client.configured:
            logger.warning("Twitter API credentials not configured - social sentiment tracking disabled")
            await self._status.record_failure(TWITTER_SOURCE, "Twitter API credentials not configured")
            return
        self._tasks = [
            asyncio.create_task(
                self._loop(self.run_mention_cycle, self._mention_warmup, self._mention_interval),
                name="sentiment-mentions",
            ),
            asyncio.create_task(
                self._loop(self.run_trend_cycle, self._trend_warmup, self._trend_interval),
                name="sentiment-trends",
            ),
        ]
        logger.info("Social sentiment tracking started")

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks = []
        await self._client.close()

    async def run_mention_cycle(self) -> list[SocialMention]:
        """Fetch mentions for the priority terms and publish the most influential."""
        collected: dict[str, list[SocialMention]] = await self._collect(
            self._mention_terms, self._mention_bucket
        )
        top = rank_by_influence(m for mentions in collected.values() for m in mentions)[:TOP_MENTIONS]
        self.latest_mentions = top
        if top:
            await self._hub.broadcast(EventType.TWITTER_MENTIONS, top)
        return top

    async def run_trend_cycle(self) -> list[SentimentTrend]:
        """Aggregate per-term trends and publish them, highest volume first."""
        collected = await self._collect(self._trend_terms, self._trend_bucket)
        trends = [t for t in (aggregate_trend(term, m) for term, m in collected.items()) if t]
        trends.sort(key=lambda t: t.volume, reverse=True)
        if trends:
            self.latest_trends = trends
            await self._hub.broadcast(EventType.TWITTER_TRENDS, trends)
        return trends

    async def _collect(
        self, terms: Sequence[str], bucket: TokenBucket | None
    ) -> dict[str, list[SocialMention]]:
        """Search each term in order; stop at the first failure and keep what was fetched."""
        collected: dict[str, list[SocialMention]] = {}
        error: str | None = None
        for term in terms:
            if bucket is not None:
                await bucket.acquire()
            try:
                response = await self._client.search_recent(term)
            except SOURCE_EXCEPTIONS as exc:
                error = self._error_mapper.describe(exc)
                logger.warning("Twitter search for %r failed (%s); skipping remaining terms", term, error)
                break
            collected[term] = self._to_mentions(response)

        if error is None:
            await self._status.record_success(TWITTER_SOURCE)
        else:
            await self._status.record_failure(TWITTER_SOURCE, error)
        return collected

    def _to_mentions(self, response: RecentSearchResponse) -> list[SocialMention]:
        mentions = []
        for tweet in response.data:
            author = response.author(tweet)
            metrics = tweet.public_metrics
            mentions.append(
                SocialMention(
                    id=tweet.id,
                    text=tweet.text,
                    author=author.username if author else "unknown",
                    author_followers=author.public_metrics.followers_count if author else 0,
                    created_at=tweet.created_at or utcnow(),
                    public_metrics=PublicMetrics(
                        retweet_count=metrics.retweet_count,
                        like_count=metrics.like_count,
                        reply_count=metrics.reply_count,
                        quote_count=metrics.quote_count,
                    ),
                    sentiment=self._classifier.classify(tweet.text),
                    relevant_terms=self._classifier.relevant_terms(tweet.text),
                    hashtags=self._classifier.hashtags(tweet.text),
                )
            )
        return mentions

    @staticmethod
    async def _loop(cycle, warmup: float, interval: float) -> None:  # noqa: ANN001
        if warmup > 0:
            await asyncio.sleep(warmup)
        while True:
            try:
                await cycle()
            except Exception:  # pylint: disable=broad-except
                logger.exception("Sentiment cycle failed")
            await asyncio.sleep(interval)
