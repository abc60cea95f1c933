"""Process-wide health table, one entry per external source."""
import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from opportunity_radar.schemas import DataSourceStatus
from opportunity_radar.utils import utcnow

logger = logging.getLogger(__name__)

StatusListener = Callable[[str, DataSourceStatus], Awaitable[None]]


class DataSourceStatusTable:
    """Health records written by the adapter (or tracker) that owns each source.

    Writes are serialized through a lock so parallel writers cannot lose
    updates. Every write notifies the listener (the broadcast hub) with the
    new record; listener failures are logged and do not fail the write.
    """

    def __init__(self, sources: Iterable[str], listener: StatusListener | None = None) -> None:
        self._statuses: dict[str, DataSourceStatus] = {name: DataSourceStatus() for name in sources}
        self._listener = listener
        self._lock = asyncio.Lock()

    def snapshot(self) -> dict[str, DataSourceStatus]:
        return dict(self._statuses)

    def get(self, source: str) -> DataSourceStatus | None:
        return self._statuses.get(source)

    async def record_success(self, source: str) -> DataSourceStatus:
        return await self._write(source, DataSourceStatus(active=True, last_update=utcnow()))

    async def record_failure(self, source: str, error: str) -> DataSourceStatus:
        return await self._write(
            source, DataSourceStatus(active=False, last_update=utcnow(), error=error)
        )

    async def _write(self, source: str, status: DataSourceStatus) -> DataSourceStatus:
        async with self._lock:
            self._statuses[source] = status
        if self._listener is not None:
            try:
                await self._listener(source, status)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Status listener failed for %s", source)
        return status
