"""Tests for sentiment classification, trend aggregation and the Twitter tracker."""
import json
from datetime import datetime

import httpx
import pytest

from opportunity_radar.providers import TwitterSearchClient
from opportunity_radar.schemas import PublicMetrics, Sentiment, SocialMention
from opportunity_radar.services.sentiment import (SentimentClassifier,
                                                  SentimentTracker,
                                                  aggregate_trend,
                                                  rank_by_influence)
from tests.helpers import FakeSubscriber, mock_client

TOKEN = "test-bearer"


@pytest.fixture
def classifier() -> SentimentClassifier:
    return SentimentClassifier(
        positive_words=["moon", "bullish", "gem"],
        negative_words=["scam", "rug", "dump"],
        tracked_terms=["P2E", "airdrop", "GameFi"],
    )


def _mention(followers: int = 100, likes: int = 0, retweets: int = 0,
             sentiment: Sentiment = Sentiment.NEUTRAL, mention_id: str = "1") -> SocialMention:
    return SocialMention(
        id=mention_id,
        text="text",
        author="someone",
        author_followers=followers,
        created_at=datetime(2024, 1, 1),
        public_metrics=PublicMetrics(like_count=likes, retweet_count=retweets),
        sentiment=sentiment,
    )


def _search_payload(count: int, *, text: str = "P2E to the moon #GameFi", followers: int = 50_000,
                    likes: int = 10, retweets: int = 5, prefix: str = "t") -> dict:
    return {
        "data": [
            {
                "id": f"{prefix}{index}",
                "text": text,
                "author_id": f"u{index}",
                "created_at": "2024-05-01T12:00:00.000Z",
                "public_metrics": {
                    "retweet_count": retweets,
                    "like_count": likes + index,
                    "reply_count": 1,
                    "quote_count": 0,
                },
            }
            for index in range(count)
        ],
        "includes": {
            "users": [
                {"id": f"u{index}", "username": f"user{index}",
                 "public_metrics": {"followers_count": followers}}
                for index in range(count)
            ]
        },
    }


def _tracker(handler, classifier, hub, status_table, *, token=TOKEN, **kwargs) -> SentimentTracker:
    client = TwitterSearchClient(token, client=mock_client(handler))
    options = {
        "mention_terms": ("P2E", "airdrop", "GameFi"),
        "trend_terms": ("P2E", "airdrop"),
        "mention_spacing": 0,
        "trend_spacing": 0,
        "mention_warmup": 60,
        "trend_warmup": 60,
    }
    options.update(kwargs)
    return SentimentTracker(client, classifier, hub, status_table, **options)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("This gem is going to the MOON", Sentiment.POSITIVE),
        ("Total rug, looks like a scam", Sentiment.NEGATIVE),
        ("moon or dump?", Sentiment.NEUTRAL),
        ("moonshot scammers everywhere", Sentiment.NEUTRAL),
        ("", Sentiment.NEUTRAL),
    ],
)
def test_classify(classifier, text, expected):
    assert classifier.classify(text) is expected


def test_relevant_terms_and_hashtags(classifier):
    text = "Best p2e AIRDROP list #P2E #GameFi2024!"
    assert classifier.relevant_terms(text) == ["P2E", "airdrop"]
    assert classifier.hashtags(text) == ["#P2E", "#GameFi2024"]


# ---------------------------------------------------------------------------
# Aggregation and ranking
# ---------------------------------------------------------------------------

def test_aggregate_trend_without_mentions_is_none():
    assert aggregate_trend("P2E", []) is None


def test_aggregate_trend_volume_polarity_and_influencers():
    mentions = [
        _mention(followers=10_001, likes=30, sentiment=Sentiment.POSITIVE),
        _mention(followers=10_000, likes=10, retweets=5, sentiment=Sentiment.NEGATIVE),
        _mention(followers=50, likes=1, sentiment=Sentiment.POSITIVE),
    ]
    trend = aggregate_trend("airdrop", mentions)
    assert trend.volume == 46
    assert trend.sentiment == pytest.approx(1 / 3)
    assert trend.mentions_24h == 3
    assert trend.influencer_mentions == 1
    assert trend.trending is False


def test_trending_requires_volume_and_mention_count():
    busy = [_mention(likes=20, mention_id=str(i)) for i in range(6)]
    assert aggregate_trend("P2E", busy).trending is True
    assert aggregate_trend("P2E", busy[:5]).trending is False
    quiet = [_mention(likes=1, mention_id=str(i)) for i in range(10)]
    assert aggregate_trend("P2E", quiet).trending is False


def test_rank_by_influence():
    low = _mention(followers=10, likes=1, mention_id="low")
    high = _mention(followers=1000, likes=5, mention_id="high")
    mid = _mention(followers=100, likes=10, mention_id="mid")
    assert [m.id for m in rank_by_influence([low, high, mid])] == ["high", "mid", "low"]


# ---------------------------------------------------------------------------
# Search client
# ---------------------------------------------------------------------------

async def test_search_client_sends_expected_query():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"meta": {"result_count": 0}})

    client = TwitterSearchClient(TOKEN, client=mock_client(handler))
    response = await client.search_recent("GameFi")

    assert response.data == []
    params = seen[0].url.params
    assert params["query"] == "GameFi"
    assert params["max_results"] == "10"
    assert params["expansions"] == "author_id"
    assert params["user.fields"] == "public_metrics"
    assert params["tweet.fields"] == "public_metrics,created_at"
    assert seen[0].headers["Authorization"] == f"Bearer {TOKEN}"


# ---------------------------------------------------------------------------
# Tracker cycles
# ---------------------------------------------------------------------------

async def test_mention_cycle_stops_at_first_failure(classifier, hub, status_table):
    queries: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = request.url.params["query"]
        queries.append(query)
        if query == "airdrop":
            return httpx.Response(429)
        return httpx.Response(200, json=_search_payload(2))

    subscriber = FakeSubscriber()
    hub.add(subscriber)
    tracker = _tracker(handler, classifier, hub, status_table)

    mentions = await tracker.run_mention_cycle()

    assert queries == ["P2E", "airdrop"]
    assert len(mentions) == 2
    assert tracker.latest_mentions == mentions
    status = status_table.get("twitter")
    assert status.active is False
    assert status.error == "Twitter rate limited (HTTP 429)"

    types = [json.loads(m)["type"] for m in subscriber.messages]
    assert "twitter_mentions" in types


async def test_mention_cycle_maps_and_caps_mentions(classifier, hub, status_table):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_search_payload(12, prefix=request.url.params["query"]))

    subscriber = FakeSubscriber()
    hub.add(subscriber)
    tracker = _tracker(handler, classifier, hub, status_table, mention_terms=("P2E",))

    mentions = await tracker.run_mention_cycle()

    assert len(mentions) == 10
    engagement = [m.engagement for m in mentions]
    assert engagement == sorted(engagement, reverse=True)
    top = mentions[0]
    assert top.author == "user11"
    assert top.author_followers == 50_000
    assert top.sentiment is Sentiment.POSITIVE
    assert top.relevant_terms == ["P2E", "GameFi"]
    assert top.hashtags == ["#GameFi"]
    assert status_table.get("twitter").active is True

    frame = json.loads(subscriber.messages[-1])
    assert frame["type"] == "twitter_mentions"
    assert len(frame["data"]) == 10
    assert frame["data"][0]["authorFollowers"] == 50_000
    assert frame["data"][0]["publicMetrics"]["likeCount"] == top.public_metrics.like_count


async def test_mention_without_author_is_attributed_to_unknown(classifier, hub, status_table):
    payload = {"data": [{"id": "1", "text": "gm", "public_metrics": {"like_count": 1}}]}
    tracker = _tracker(lambda r: httpx.Response(200, json=payload), classifier, hub, status_table,
                       mention_terms=("P2E",))
    (mention,) = await tracker.run_mention_cycle()
    assert mention.author == "unknown"
    assert mention.author_followers == 0
    assert mention.created_at is not None


async def test_trend_cycle_sorts_by_volume_and_caches(classifier, hub, status_table):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["query"] == "P2E":
            return httpx.Response(200, json=_search_payload(6, likes=20, retweets=0))
        return httpx.Response(200, json=_search_payload(1, text="airdrop scam", likes=500, retweets=0))

    subscriber = FakeSubscriber()
    hub.add(subscriber)
    tracker = _tracker(handler, classifier, hub, status_table)

    trends = await tracker.run_trend_cycle()

    assert [t.term for t in trends] == ["airdrop", "P2E"]
    airdrop, p2e = trends
    assert airdrop.volume == 500
    assert airdrop.sentiment == -1.0
    assert airdrop.trending is False
    assert p2e.mentions_24h == 6
    assert p2e.trending is True
    assert p2e.influencer_mentions == 6

    assert [t.term for t in tracker.term_sentiment()] == ["airdrop", "P2E"]
    frame = json.loads(subscriber.messages[-1])
    assert frame["type"] == "twitter_trends"
    assert frame["data"][1]["mentions24h"] == 6


async def test_trend_cycle_without_results_keeps_previous_cache(classifier, hub, status_table):
    payloads = iter([_search_payload(1), {"meta": {}}, {"meta": {}}, {"meta": {}}])
    tracker = _tracker(lambda r: httpx.Response(200, json=next(payloads)), classifier, hub,
                       status_table, trend_terms=("P2E",))

    first = await tracker.run_trend_cycle()
    assert await tracker.run_trend_cycle() == []
    assert tracker.latest_trends == first


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

async def test_missing_token_disables_tracking(classifier, hub, status_table):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    tracker = _tracker(handler, classifier, hub, status_table, token="")
    await tracker.start()

    assert tracker.running is False
    assert calls == []
    status = status_table.get("twitter")
    assert status.active is False
    assert status.error == "Twitter API credentials not configured"

    assert await tracker.run_mention_cycle() == []
    assert status_table.get("twitter").error == "Twitter API credentials not configured"


async def test_start_and_stop_loops(classifier, hub, status_table):
    tracker = _tracker(lambda r: httpx.Response(200, json={}), classifier, hub, status_table)
    await tracker.start()
    assert tracker.running is True
    await tracker.stop()
    assert tracker.running is False
