"""Core adapter abstractions."""
from opportunity_radar.providers.core.error_mapper import (SOURCE_EXCEPTIONS,
                                                           ProviderErrorMapper)
from opportunity_radar.providers.core.exceptions import (
    MissingCredentialsError, RateLimitedError, SourceError, check_response)
from opportunity_radar.providers.core.placeholders import PlaceholderMetrics
from opportunity_radar.providers.core.rate_limit import TokenBucket
from opportunity_radar.providers.core.source_adapter_abc import \
    SourceAdapterABC

__all__ = [
    "MissingCredentialsError",
    "PlaceholderMetrics",
    "ProviderErrorMapper",
    "RateLimitedError",
    "SOURCE_EXCEPTIONS",
    "SourceAdapterABC",
    "SourceError",
    "TokenBucket",
    "check_response",
]
