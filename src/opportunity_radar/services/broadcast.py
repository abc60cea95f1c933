"""Fan-out of typed envelopes to every connected live subscriber."""
import asyncio
import logging
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder

from opportunity_radar.schemas import DataSourceStatus, EventType, LiveMessage

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    """Anything that can receive text frames (e.g. a Starlette WebSocket)."""

    async def send_text(self, data: str) -> None: ...


def encode_envelope(event_type: EventType, data: Any) -> str:
    """Serialize `{type, data}` with camelCase keys."""
    return LiveMessage(type=event_type, data=jsonable_encoder(data, by_alias=True)).model_dump_json()


class BroadcastHub:
    """Best-effort, fire-and-forget delivery to all subscribers.

    Sends run concurrently with a per-send timeout, so a slow subscriber never
    holds up the others. Subscribers whose send fails or times out are dropped.
    No replay, no per-client filtering.
    """

    MAX_CONNECTIONS = 1000

    def __init__(self, send_timeout: float = 5.0) -> None:
        self._send_timeout = send_timeout
        self.active: set[Subscriber] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self.active)

    @property
    def full(self) -> bool:
        return len(self.active) >= self.MAX_CONNECTIONS

    def add(self, subscriber: Subscriber) -> bool:
        if self.full:
            return False
        self.active.add(subscriber)
        logger.debug("Live subscriber added (%d connected)", len(self.active))
        return True

    def discard(self, subscriber: Subscriber) -> None:
        self.active.discard(subscriber)

    async def send(self, subscriber: Subscriber, event_type: EventType, data: Any) -> bool:
        """Send one envelope to a single subscriber; drop it on failure."""
        return await self._deliver(subscriber, encode_envelope(event_type, data))

    async def broadcast(self, event_type: EventType, data: Any) -> int:
        """Send one envelope to every subscriber; returns how many received it."""
        if not self.active:
            return 0
        message = encode_envelope(event_type, data)
        targets = list(self.active)
        results = await asyncio.gather(*(self._deliver(s, message) for s in targets))
        return sum(results)

    async def publish_status_change(self, source: str, status: DataSourceStatus) -> None:
        await self.broadcast(EventType.DATA_SOURCE_UPDATE, {"source": source, "status": status})

    async def _deliver(self, subscriber: Subscriber, message: str) -> bool:
        try:
            await asyncio.wait_for(subscriber.send_text(message), timeout=self._send_timeout)
            return True
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Dropping live subscriber after send failure: %r", exc)
            self.active.discard(subscriber)
            return False
