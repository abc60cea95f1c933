from opportunity_radar.providers.twitter.search_client import \
    TwitterSearchClient

__all__ = ["TwitterSearchClient"]
