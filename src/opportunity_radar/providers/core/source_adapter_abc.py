"""Abstract base class for opportunity source adapters."""
import logging
import random
from abc import ABC, abstractmethod

import httpx

from opportunity_radar.providers.core.error_mapper import (SOURCE_EXCEPTIONS,
                                                           ProviderErrorMapper)
from opportunity_radar.providers.core.placeholders import PlaceholderMetrics
from opportunity_radar.schemas import OpportunityCandidate
from opportunity_radar.services.source_status import DataSourceStatusTable

logger = logging.getLogger(__name__)


class SourceAdapterABC(ABC):
    """Base interface for all opportunity sources.

    Each adapter fetches one external provider, normalizes its payload into
    OpportunityCandidates, and owns that provider's entry in the status table.
    Callers use collect(), which never raises: a failure is recorded as
    active=False with an error message, and the adapter's fallback() is
    returned instead (empty by default).

    Subclasses set `name` (the status key) and `api_name` (for messages) and
    implement fetch().
    """

    name: str = "source"
    api_name: str = "Source"

    def __init__(
        self,
        status: DataSourceStatusTable,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            status: Shared status table; this adapter writes only its own entry.
            client: Optional preconfigured HTTP client (tests inject a mock
                transport). When omitted, prepare() creates one and close()
                releases it.
            timeout: Request timeout in seconds for the owned client.
            rng: Random source for placeholder metrics.
        """
        self._status = status
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._error_mapper = ProviderErrorMapper(api_name=self.api_name)
        self._placeholders = PlaceholderMetrics(rng)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(f"{type(self).__name__} used before prepare()")
        return self._client

    def _build_client(self) -> httpx.AsyncClient:
        """Create the HTTP client for this source. Override to add base_url/headers."""
        return httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)

    async def prepare(self) -> None:
        """Acquire resources (HTTP client). Idempotent."""
        if self._client is None:
            self._client = self._build_client()
            self._owns_client = True

    async def close(self) -> None:
        """Release the HTTP client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    async def fetch(self) -> list[OpportunityCandidate]:
        """Fetch and normalize candidates. May raise on any source failure."""

    def fallback(self) -> list[OpportunityCandidate]:
        """Candidates to use when fetch() fails. Default: none."""
        return []

    async def collect(self) -> list[OpportunityCandidate]:
        """Run fetch(), record the outcome in the status table, never raise."""
        await self.prepare()
        logger.info("Fetching %s", self.api_name)
        try:
            candidates = await self.fetch()
        except SOURCE_EXCEPTIONS as exc:
            return await self._failed(exc)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error fetching %s", self.api_name)
            return await self._failed(exc, logged=True)

        await self._status.record_success(self.name)
        logger.info("Found %d candidates from %s", len(candidates), self.api_name)
        return candidates

    async def _failed(self, exc: Exception, logged: bool = False) -> list[OpportunityCandidate]:
        message = self._error_mapper.describe(exc)
        if not logged:
            logger.warning("Fetching %s failed: %s", self.api_name, message)
        await self._status.record_failure(self.name, message)
        fallback = self.fallback()
        if fallback:
            logger.info("Using %d fallback candidates for %s", len(fallback), self.api_name)
        return fallback

    async def __aenter__(self) -> "SourceAdapterABC":
        """Async context manager entry."""
        await self.prepare()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
