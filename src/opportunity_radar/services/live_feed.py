"""Live channel: initial snapshots on connect and periodic live updates."""
import asyncio
import contextlib
import logging

from opportunity_radar.schemas import EventType
from opportunity_radar.services.analytics import HistoricalAnalytics
from opportunity_radar.services.broadcast import BroadcastHub, Subscriber
from opportunity_radar.services.source_status import DataSourceStatusTable
from opportunity_radar.services.store import OpportunityStore

logger = logging.getLogger(__name__)


class LiveFeed:
    """Greets new subscribers and pushes `live_update` on a fixed tick."""

    def __init__(
        self,
        hub: BroadcastHub,
        store: OpportunityStore,
        analytics: HistoricalAnalytics,
        status: DataSourceStatusTable,
        *,
        interval: float = 30.0,
    ) -> None:
        self._hub = hub
        self._store = store
        self._analytics = analytics
        self._status = status
        self._interval = interval
        self._task: asyncio.Task | None = None

    async def connect(self, subscriber: Subscriber) -> bool:
        """Send a subscriber the current status and opportunities, then register it.

        The greeting is always the first thing a subscriber sees: it joins the
        hub only once both envelopes are sent. Returns False when the hub is
        full or the greeting failed.
        """
        if self._hub.full:
            logger.warning("Live subscriber rejected: connection limit reached")
            return False
        if not await self._hub.send(subscriber, EventType.DATA_SOURCES_STATUS, self._status.snapshot()):
            return False
        opportunities = await asyncio.to_thread(self._store.list_all)
        if not await self._hub.send(subscriber, EventType.OPPORTUNITIES_UPDATE, opportunities):
            return False
        if not self._hub.add(subscriber):
            logger.warning("Live subscriber rejected: connection limit reached")
            return False
        return True

    def disconnect(self, subscriber: Subscriber) -> None:
        self._hub.discard(subscriber)

    async def tick(self) -> int:
        """Broadcast one live update; skipped (returns 0) with no subscribers."""
        if not self._hub.subscriber_count:
            return 0
        opportunities = await asyncio.to_thread(self._store.list_all)
        stats = await asyncio.to_thread(self._analytics.dashboard_stats)
        return await self._hub.broadcast(
            EventType.LIVE_UPDATE, {"opportunities": opportunities, "stats": stats}
        )

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run(), name="live-feed")

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.tick()
            except Exception:  # pylint: disable=broad-except
                logger.exception("Live update failed")
