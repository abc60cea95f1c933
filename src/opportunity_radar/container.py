"""DI container. Build via init_container(); the app keeps it on app.state.container."""
import random

from dependency_injector import containers, providers

from opportunity_radar.config import Settings, get_settings
from opportunity_radar.db import create_db_engine
from opportunity_radar.providers import (SOURCE_NAMES, TwitterSearchClient,
                                         build_adapters)
from opportunity_radar.scoring import HotnessScorer
from opportunity_radar.services.alerts import PriceAlertBook
from opportunity_radar.services.analytics import HistoricalAnalytics
from opportunity_radar.services.broadcast import BroadcastHub
from opportunity_radar.services.ingestion import IngestionPipeline
from opportunity_radar.services.live_feed import LiveFeed
from opportunity_radar.services.scheduler import IngestionScheduler
from opportunity_radar.services.sentiment import (SentimentClassifier,
                                                  SentimentTracker)
from opportunity_radar.services.source_status import DataSourceStatusTable
from opportunity_radar.services.store import OpportunityStore


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(get_settings)
    rng = providers.Singleton(random.Random)

    engine = providers.Singleton(
        create_db_engine,
        settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )
    store = providers.Singleton(OpportunityStore, engine)

    hub = providers.Singleton(BroadcastHub, send_timeout=settings.provided.ws_send_timeout_seconds)
    status = providers.Singleton(
        DataSourceStatusTable,
        SOURCE_NAMES,
        listener=hub.provided.publish_status_change,
    )

    scorer = providers.Singleton(HotnessScorer, rng=rng)
    adapters = providers.Singleton(build_adapters, settings, status, rng=rng)
    pipeline = providers.Singleton(
        IngestionPipeline,
        store,
        scorer,
        hub,
        adapters,
        inter_adapter_delay=settings.provided.inter_adapter_delay_seconds,
        dedupe=settings.provided.dedupe_on_ingest,
    )
    scheduler = providers.Singleton(
        IngestionScheduler,
        pipeline,
        interval=settings.provided.scrape_interval_seconds,
        warmup=settings.provided.scrape_warmup_seconds,
    )

    analytics = providers.Singleton(HistoricalAnalytics, store)
    live_feed = providers.Singleton(
        LiveFeed,
        hub,
        store,
        analytics,
        status,
        interval=settings.provided.live_update_interval_seconds,
    )
    alerts = providers.Singleton(PriceAlertBook)

    twitter_client = providers.Singleton(
        TwitterSearchClient,
        settings.provided.twitter_bearer_token,
        timeout=settings.provided.http_timeout_seconds,
    )
    classifier = providers.Singleton(
        SentimentClassifier,
        settings.provided.sentiment_positive_words,
        settings.provided.sentiment_negative_words,
        settings.provided.sentiment_tracked_terms,
    )
    tracker = providers.Singleton(
        SentimentTracker,
        twitter_client,
        classifier,
        hub,
        status,
        mention_terms=settings.provided.sentiment_mention_terms,
        trend_terms=settings.provided.sentiment_trend_terms,
        mention_interval=settings.provided.sentiment_mention_interval_seconds,
        trend_interval=settings.provided.sentiment_trend_interval_seconds,
        mention_warmup=settings.provided.sentiment_mention_warmup_seconds,
        trend_warmup=settings.provided.sentiment_trend_warmup_seconds,
        mention_spacing=settings.provided.sentiment_mention_spacing_seconds,
        trend_spacing=settings.provided.sentiment_trend_spacing_seconds,
    )


def init_container(settings: Settings | None = None) -> Container:
    """Create the container, optionally pinned to explicit settings (tests, CLIs)."""
    container = Container()
    if settings is not None:
        container.settings.override(providers.Object(settings))
    return container
