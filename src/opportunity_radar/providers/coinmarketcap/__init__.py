from opportunity_radar.providers.coinmarketcap.coin_market_cap_adapter import (
    SYNTHETIC_TOKENS, CoinMarketCapListingsAdapter)

__all__ = ["CoinMarketCapListingsAdapter", "SYNTHETIC_TOKENS"]
