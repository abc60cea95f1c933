from opportunity_radar.providers.coingecko.coin_gecko_adapter import \
    CoinGeckoTrendingAdapter

__all__ = ["CoinGeckoTrendingAdapter"]
