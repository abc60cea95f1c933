"""Thin async client for Twitter's recent-search API."""
import httpx

from opportunity_radar.providers.core import (MissingCredentialsError,
                                              check_response)
from opportunity_radar.providers.twitter.models import (RecentSearchParams,
                                                        RecentSearchResponse)


class TwitterSearchClient:
    """Bearer-token client for /2/tweets/search/recent.

    search_recent() raises on any failure (missing token, rate limit,
    non-2xx, network); the caller decides whether to stop its cycle.
    """

    api_name = "Twitter"
    SEARCH_URL = "https://api.twitter.com/2/tweets/search/recent"

    def __init__(
        self,
        bearer_token: str = "",
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._bearer_token = bearer_token
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._bearer_token)

    async def search_recent(self, query: str) -> RecentSearchResponse:
        if not self.configured:
            raise MissingCredentialsError(
                "Twitter API credentials not configured", api_name=self.api_name
            )
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        params = RecentSearchParams().model_dump(by_alias=True) | {"query": query}
        response = await self._client.get(
            self.SEARCH_URL,
            params=params,
            headers={"Authorization": f"Bearer {self._bearer_token}"},
        )
        check_response(response, self.api_name)
        return RecentSearchResponse.model_validate(response.json())

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
