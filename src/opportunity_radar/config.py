"""Application settings, read from the environment (and `.env` when present)."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TRACKED_TERMS = [
    "P2E", "PlayToEarn", "GameFi", "crypto gaming", "blockchain gaming",
    "airdrop", "crypto airdrop", "token airdrop", "free crypto",
    "DeFi", "decentralized finance", "yield farming", "liquidity mining",
    "NFT", "non-fungible token", "NFT gaming", "crypto collectibles",
    "altcoin", "new listing", "crypto launch", "token launch",
]

DEFAULT_POSITIVE_WORDS = [
    "good", "great", "amazing", "love", "best", "awesome",
    "bullish", "moon", "gem", "opportunity",
]

DEFAULT_NEGATIVE_WORDS = [
    "bad", "terrible", "hate", "worst", "scam", "dump",
    "bearish", "rug", "avoid", "warning",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = "development"  # development | test | production

    # Server
    host: str = "127.0.0.1"
    port: int = 8001

    # Database
    database_url: str = "sqlite:///./opportunities.db"
    sql_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool | None = None  # None: JSON in production only

    # External credentials
    coingecko_api_key: str = ""
    coinmarketcap_api_key: str = ""
    twitter_bearer_token: str = ""

    # Outbound HTTP
    http_timeout_seconds: float = 15.0
    scrape_timeout_seconds: float = 30.0

    # Ingestion
    scrape_interval_seconds: float = 15 * 60
    scrape_warmup_seconds: float = 5.0
    inter_adapter_delay_seconds: float = 2.0
    dedupe_on_ingest: bool = True

    # Live feed
    live_update_interval_seconds: float = 30.0
    ws_send_timeout_seconds: float = 5.0

    # Social sentiment
    sentiment_mention_interval_seconds: float = 15 * 60
    sentiment_trend_interval_seconds: float = 30 * 60
    sentiment_mention_warmup_seconds: float = 5.0
    sentiment_trend_warmup_seconds: float = 10.0
    sentiment_mention_spacing_seconds: float = 2.0
    sentiment_trend_spacing_seconds: float = 3.0
    sentiment_mention_terms: list[str] = ["P2E", "airdrop", "GameFi"]
    sentiment_trend_terms: list[str] = ["P2E", "airdrop"]
    sentiment_tracked_terms: list[str] = DEFAULT_TRACKED_TERMS
    sentiment_positive_words: list[str] = DEFAULT_POSITIVE_WORDS
    sentiment_negative_words: list[str] = DEFAULT_NEGATIVE_WORDS

    # Presentation filter for mainstream assets
    mainstream_denylist: list[str] = ["bitcoin", "ethereum", "btc", "eth"]

    # Background loops (scheduler, live ticks, sentiment); tests switch these off
    enable_background_tasks: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
