"""Price provider implementations."""
from .base import PriceProvider
from .coinmarketcap import CoinMarketCapProvider
from .coingecko import CoinGeckoProvider
from .mock import MockPriceProvider

__all__ = ["PriceProvider", "CoinMarketCapProvider", "CoinGeckoProvider", "MockPriceProvider"]
