"""Database package: models and session management."""
from opportunity_radar.db.models import Category, Opportunity, ScoreEvent
from opportunity_radar.db.sessions import create_db_engine, init_db, session_scope

__all__ = [
    "Category",
    "Opportunity",
    "ScoreEvent",
    "create_db_engine",
    "init_db",
    "session_scope",
]
