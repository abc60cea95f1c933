"""Shared utilities for opportunity discovery."""
from datetime import datetime, timezone
from urllib.parse import urlparse


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def source_label(url: str) -> str:
    """Short provenance label for a source URL (host without `www.`)."""
    host = urlparse(url).hostname or url
    return host.removeprefix("www.")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
