"""Test doubles and database helpers shared across test modules."""
import asyncio
from collections.abc import Callable
from datetime import datetime

import httpx
from sqlmodel import Session

from opportunity_radar.db import Opportunity, ScoreEvent
from opportunity_radar.providers.core import SourceAdapterABC


def backdate(engine, opportunity_id: int, created_at: datetime) -> None:
    """Rewrite a record's created_at (the store always stamps the current time)."""
    with Session(engine) as session:
        row = session.get(Opportunity, opportunity_id)
        row.created_at = created_at
        session.add(row)
        session.commit()


def add_score_event(
    engine, opportunity_id: int, recorded_at: datetime, hotness: float, value: float = 0.0
) -> None:
    with Session(engine) as session:
        session.add(
            ScoreEvent(
                opportunity_id=opportunity_id,
                hotness_score=hotness,
                estimated_value=value,
                recorded_at=recorded_at,
            )
        )
        session.commit()


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeSubscriber:
    """Stands in for a WebSocket; records frames, optionally fails or stalls."""

    def __init__(self, fail: bool = False, delay: float = 0.0) -> None:
        self.fail = fail
        self.delay = delay
        self.messages: list[str] = []

    async def send_text(self, data: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("connection closed")
        self.messages.append(data)


class FakeAdapter(SourceAdapterABC):
    """Adapter returning fixed candidates, or raising `error` from fetch()."""

    def __init__(self, status, name: str, candidates=(), error: Exception | None = None, fallback=()):
        self.name = name
        self.api_name = name.title()
        super().__init__(status, client=httpx.AsyncClient())
        self._candidates = list(candidates)
        self._error = error
        self._fallback = list(fallback)
        self.fetch_calls = 0
        self.closed = False

    async def fetch(self):
        self.fetch_calls += 1
        if self._error is not None:
            raise self._error
        return list(self._candidates)

    def fallback(self):
        return list(self._fallback)

    async def close(self) -> None:
        self.closed = True
        await self.client.aclose()
