"""Opportunity store backed by SQLModel.

Reads return immutable `OpportunityRead` snapshots. Writes go through a single
writer lock and commit in one transaction each, so a concurrent reader sees
either the old row or the new one. Every write that changes the score or the
estimated value appends a `ScoreEvent`, which is what opportunity history is
rebuilt from.
"""
import logging
import re
import threading
from collections.abc import Iterable
from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, col, select

from opportunity_radar.db import Opportunity, ScoreEvent, init_db, session_scope
from opportunity_radar.schemas import (OpportunityCandidate, OpportunityRead,
                                       OpportunityUpdate)
from opportunity_radar.utils import utcnow

logger = logging.getLogger(__name__)

# Fields an ingestion upsert refreshes on an existing record.
_UPSERT_FIELDS = (
    "description",
    "category",
    "website_url",
    "discord_url",
    "twitter_url",
    "image_url",
    "estimated_value",
    "participants",
    "twitter_followers",
    "discord_members",
    "trading_volume",
    "market_cap",
    "time_remaining",
    "deadline",
    "hotness_score",
)


def _hot_first(statement):
    return statement.order_by(col(Opportunity.hotness_score).desc(), col(Opportunity.id))


def _active():
    return select(Opportunity).where(col(Opportunity.is_active).is_(True))


def exclude_denylisted(
    records: Iterable[OpportunityRead], denylist: Iterable[str]
) -> list[OpportunityRead]:
    """Drop records whose name or description mentions a denylisted term.

    Terms match as whole words, case-insensitively. This is a presentation
    filter; the records stay in storage.
    """
    terms = [t for t in denylist if t]
    if not terms:
        return list(records)
    pattern = re.compile(r"\b(" + "|".join(re.escape(t) for t in terms) + r")\b", re.IGNORECASE)
    return [
        r for r in records
        if not pattern.search(r.name) and not pattern.search(r.description)
    ]


class OpportunityStore:
    """Durable collection of opportunities with category/time/text/rank queries."""

    def __init__(self, engine: Engine, *, create_tables: bool = True) -> None:
        self._engine = engine
        self._write_lock = threading.Lock()
        if create_tables:
            init_db(engine)

    # ---- Writes ----
    def create(self, candidate: OpportunityCandidate) -> OpportunityRead:
        """Insert a new record; assigns id and timestamps."""
        with self._write_lock, session_scope(self._engine) as session:
            row = self._insert(session, candidate)
            return OpportunityRead.model_validate(row)

    def upsert(self, candidate: OpportunityCandidate) -> tuple[OpportunityRead, bool]:
        """Insert, or refresh the active record with the same content key.

        Returns:
            (record, created) where created is False when an existing record
            was refreshed (id and created_at are kept).
        """
        with self._write_lock, session_scope(self._engine) as session:
            existing = session.exec(
                _active()
                .where(Opportunity.content_key == candidate.content_key)
                .order_by(col(Opportunity.id))
            ).first()
            if existing is None:
                row = self._insert(session, candidate)
                return OpportunityRead.model_validate(row), True

            changes = candidate.model_dump(include=set(_UPSERT_FIELDS))
            self._apply(session, existing, changes)
            return OpportunityRead.model_validate(existing), False

    def update(self, opportunity_id: int, changes: OpportunityUpdate) -> OpportunityRead | None:
        """Apply a partial update and refresh updated_at; None when absent."""
        with self._write_lock, session_scope(self._engine) as session:
            row = session.get(Opportunity, opportunity_id)
            if row is None:
                return None
            self._apply(session, row, changes.model_dump(exclude_unset=True))
            return OpportunityRead.model_validate(row)

    def delete(self, opportunity_id: int) -> bool:
        """Hard delete, including the record's score history."""
        with self._write_lock, session_scope(self._engine) as session:
            row = session.get(Opportunity, opportunity_id)
            if row is None:
                return False
            events = session.exec(
                select(ScoreEvent).where(ScoreEvent.opportunity_id == opportunity_id)
            ).all()
            for event in events:
                session.delete(event)
            session.delete(row)
            return True

    # ---- Reads ----
    def get(self, opportunity_id: int) -> OpportunityRead | None:
        with Session(self._engine) as session:
            row = session.get(Opportunity, opportunity_id)
            return OpportunityRead.model_validate(row) if row else None

    def list_all(self) -> list[OpportunityRead]:
        """Active records, hottest first."""
        return self._query(_hot_first(_active()))

    def list_by_category(self, category: str) -> list[OpportunityRead]:
        statement = _active().where(func.lower(Opportunity.category) == category.strip().lower())
        return self._query(_hot_first(statement))

    def list_by_timeframe(self, hours: float, now: datetime | None = None) -> list[OpportunityRead]:
        """Active records with created_at >= now - hours (the cutoff is inclusive)."""
        cutoff = (now or utcnow()) - timedelta(hours=hours)
        statement = _active().where(col(Opportunity.created_at) >= cutoff)
        return self._query(_hot_first(statement))

    def search(self, text: str) -> list[OpportunityRead]:
        """Case-insensitive substring match over name, description and category."""
        term = text.strip().lower()
        statement = _active().where(
            func.lower(Opportunity.name).contains(term, autoescape=True)
            | func.lower(Opportunity.description).contains(term, autoescape=True)
            | func.lower(Opportunity.category).contains(term, autoescape=True)
        )
        return self._query(_hot_first(statement))

    def list_hot(self, limit: int) -> list[OpportunityRead]:
        if limit <= 0:
            return []
        return self._query(_hot_first(_active()).limit(limit))

    def count_active(self) -> int:
        with Session(self._engine) as session:
            statement = select(func.count()).select_from(Opportunity).where(
                col(Opportunity.is_active).is_(True)
            )
            return session.exec(statement).one()

    def score_events(self, opportunity_id: int) -> list[ScoreEvent]:
        """Score events for one record, oldest first."""
        with Session(self._engine) as session:
            events = session.exec(
                select(ScoreEvent)
                .where(ScoreEvent.opportunity_id == opportunity_id)
                .order_by(col(ScoreEvent.recorded_at), col(ScoreEvent.id))
            ).all()
            for event in events:
                session.expunge(event)
            return list(events)

    # ---- Internals ----
    def _query(self, statement) -> list[OpportunityRead]:
        with Session(self._engine) as session:
            return [OpportunityRead.model_validate(row) for row in session.exec(statement)]

    def _insert(self, session: Session, candidate: OpportunityCandidate) -> Opportunity:
        now = utcnow()
        row = Opportunity(
            **candidate.model_dump(),
            content_key=candidate.content_key,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        session.add(
            ScoreEvent(
                opportunity_id=row.id,
                hotness_score=row.hotness_score,
                estimated_value=row.estimated_value,
                recorded_at=now,
            )
        )
        session.flush()
        session.refresh(row)
        logger.debug("Stored opportunity %s (%s)", row.id, row.name)
        return row

    def _apply(self, session: Session, row: Opportunity, changes: dict) -> None:
        before = (row.hotness_score, row.estimated_value)
        for field, value in changes.items():
            setattr(row, field, value)
        if "name" in changes or "source_url" in changes:
            row.content_key = f"{row.name.strip().lower()}|{row.source_url.strip()}"
        row.updated_at = utcnow()
        session.add(row)
        if (row.hotness_score, row.estimated_value) != before:
            session.add(
                ScoreEvent(
                    opportunity_id=row.id,
                    hotness_score=row.hotness_score,
                    estimated_value=row.estimated_value,
                    recorded_at=row.updated_at,
                )
            )
        session.flush()
        session.refresh(row)
