"""Periodic driver for ingestion passes."""
import asyncio
import contextlib
import logging
from enum import Enum

from opportunity_radar.services.ingestion import IngestionPipeline, PassResult

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    WARMING_UP = "warming_up"
    RUNNING_PASS = "running_pass"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class IngestionScheduler:
    """Runs the first pass after a warm-up, then one pass per fixed wall-clock interval.

    Ticks are anchored to the first pass, so a pass's own duration does not
    shift later ticks. Only one pass runs at a time: a tick (or a manual
    trigger) that arrives while a pass is running is skipped and logged.
    stop() cancels the loop and releases adapter resources.
    """

    def __init__(
        self,
        pipeline: IngestionPipeline,
        *,
        interval: float = 15 * 60,
        warmup: float = 5.0,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._pipeline = pipeline
        self._interval = interval
        self._warmup = warmup
        self._pass_lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self.state = SchedulerState.IDLE
        self.passes_completed = 0
        self.ticks_skipped = 0
        self.last_result: PassResult | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        await self._pipeline.prepare()
        self._task = asyncio.create_task(self._run(), name="ingestion-scheduler")
        logger.info(
            "Ingestion scheduler started (warm-up %.0fs, interval %.0fs)",
            self._warmup, self._interval,
        )

    async def stop(self) -> None:
        self.state = SchedulerState.SHUTTING_DOWN
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await self._pipeline.close()
        self.state = SchedulerState.STOPPED
        logger.info("Ingestion scheduler stopped")

    async def trigger(self) -> PassResult | None:
        """Run one pass now; returns None when a pass is already in progress."""
        if self._pass_lock.locked():
            self.ticks_skipped += 1
            logger.warning("Ingestion pass still running; skipping this tick")
            return None
        async with self._pass_lock:
            self.state = SchedulerState.RUNNING_PASS
            try:
                self.last_result = await self._pipeline.run_pass()
                self.passes_completed += 1
            except Exception:  # pylint: disable=broad-except
                logger.exception("Ingestion pass failed")
            finally:
                if self.state is SchedulerState.RUNNING_PASS:
                    self.state = SchedulerState.IDLE
        return self.last_result

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        self.state = SchedulerState.WARMING_UP
        if self._warmup > 0:
            await asyncio.sleep(self._warmup)
        next_tick = loop.time()
        while True:
            await self.trigger()
            next_tick += self._interval
            now = loop.time()
            if next_tick <= now:
                missed = int((now - next_tick) // self._interval) + 1
                self.ticks_skipped += missed
                next_tick += missed * self._interval
                logger.warning("Ingestion pass overran %d tick(s)", missed)
            await asyncio.sleep(next_tick - now)
