"""One ingestion pass: collect from every adapter, score, store, announce."""
import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from opportunity_radar.providers.core import SourceAdapterABC
from opportunity_radar.schemas import EventType, OpportunityCandidate
from opportunity_radar.scoring import HotnessScorer
from opportunity_radar.services.broadcast import BroadcastHub
from opportunity_radar.services.store import OpportunityStore

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class PassResult:
    """Counts for one ingestion pass."""

    fetched: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0

    @property
    def stored(self) -> int:
        return self.created + self.updated


class IngestionPipeline:
    """Runs adapters sequentially and writes their scored candidates to the store.

    Adapters never raise out of collect(), so one failing source cannot abort
    the pass. A record that fails to store is logged and skipped. A fixed
    delay separates consecutive adapters to limit burst load on shared hosts.
    """

    def __init__(
        self,
        store: OpportunityStore,
        scorer: HotnessScorer,
        hub: BroadcastHub,
        adapters: Sequence[SourceAdapterABC],
        *,
        inter_adapter_delay: float = 2.0,
        dedupe: bool = True,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._store = store
        self._scorer = scorer
        self._hub = hub
        self._adapters = list(adapters)
        self._delay = inter_adapter_delay
        self._dedupe = dedupe
        self._sleep = sleep

    @property
    def adapters(self) -> list[SourceAdapterABC]:
        return list(self._adapters)

    async def prepare(self) -> None:
        for adapter in self._adapters:
            await adapter.prepare()

    async def close(self) -> None:
        """Release adapter resources; a failing close does not stop the others."""
        for adapter in self._adapters:
            try:
                await adapter.close()
            except Exception:  # pylint: disable=broad-except
                logger.exception("Failed to close adapter %s", adapter.name)

    async def run_pass(self) -> PassResult:
        result = PassResult()
        logger.info("Starting ingestion pass over %d sources", len(self._adapters))
        for index, adapter in enumerate(self._adapters):
            if index and self._delay > 0:
                await self._sleep(self._delay)
            candidates = await adapter.collect()
            result.fetched += len(candidates)
            for candidate in candidates:
                await self._store_candidate(candidate, result)

        if result.stored:
            opportunities = await asyncio.to_thread(self._store.list_all)
            await self._hub.broadcast(EventType.OPPORTUNITIES_UPDATE, opportunities)
        logger.info(
            "Ingestion pass complete: %d fetched, %d created, %d updated, %d failed",
            result.fetched, result.created, result.updated, result.failed,
        )
        return result

    async def _store_candidate(self, candidate: OpportunityCandidate, result: PassResult) -> None:
        try:
            scored = candidate.model_copy(update={"hotness_score": self._scorer.score(candidate)})
            if self._dedupe:
                _, created = await asyncio.to_thread(self._store.upsert, scored)
            else:
                await asyncio.to_thread(self._store.create, scored)
                created = True
        except Exception:  # pylint: disable=broad-except
            logger.exception("Error saving opportunity %r", candidate.name)
            result.failed += 1
            return
        if created:
            result.created += 1
        else:
            result.updated += 1
