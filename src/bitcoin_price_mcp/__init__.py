"""Bitcoin price tool server with CoinMarketCap -> CoinGecko fallback."""
__version__ = "0.1.0"
