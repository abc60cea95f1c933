"""Domain concept for mapping source exceptions to status-table messages."""
import asyncio
from dataclasses import dataclass

import httpx

from opportunity_radar.providers.core.exceptions import SourceError

# Failures an adapter expects from a flaky source; anything else is logged with a traceback.
SOURCE_EXCEPTIONS: tuple[type[Exception], ...] = (
    SourceError,
    httpx.HTTPError,
    asyncio.TimeoutError,
    TimeoutError,
    OSError,
    ValueError,
    KeyError,
    TypeError,
)


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps source/backend exceptions to the short message stored in DataSourceStatus.

    One mapper per source, carrying the human-readable API name.
    """

    api_name: str = "API"

    def describe(self, exc: BaseException) -> str:
        """Return a message for the status table; never leaks tracebacks."""
        if isinstance(exc, SourceError):
            return str(exc)
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status >= 500:
                return f"{self.api_name} error (HTTP {status})"
            return f"{self.api_name} rejected request (HTTP {status})"
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
            return f"Request to {self.api_name} timed out"
        if isinstance(exc, (httpx.RequestError, OSError)):
            return f"Network error contacting {self.api_name}"
        if isinstance(exc, (ValueError, KeyError, TypeError)):
            return f"Malformed response from {self.api_name}"
        return f"Unexpected error from {self.api_name}"
