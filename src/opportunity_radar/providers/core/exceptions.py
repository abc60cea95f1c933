"""Source failure types and response checking shared by adapters and the tracker."""
import httpx

RATE_LIMIT_STATUSES = frozenset({403, 429})


class SourceError(Exception):
    """An external source could not deliver usable data."""

    def __init__(self, message: str, *, api_name: str | None = None) -> None:
        super().__init__(message)
        self.api_name = api_name


class RateLimitedError(SourceError):
    """The source answered 429 or 403; stop calling it until the next cycle."""

    def __init__(self, api_name: str, status_code: int) -> None:
        super().__init__(f"{api_name} rate limited (HTTP {status_code})", api_name=api_name)
        self.status_code = status_code


class MissingCredentialsError(SourceError):
    """No API key/token is configured for a source that requires one."""


def check_response(response: httpx.Response, api_name: str) -> httpx.Response:
    """Raise RateLimitedError for 429/403, HTTPStatusError for any other non-2xx."""
    if response.status_code in RATE_LIMIT_STATUSES:
        raise RateLimitedError(api_name, response.status_code)
    response.raise_for_status()
    return response
