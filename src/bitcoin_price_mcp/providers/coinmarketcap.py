"""CoinMarketCap price provider (primary).

Requires the COINMARKETCAP_API_KEY environment variable or an explicit API
key. Without a key the provider fails fast with ConfigurationMissingError so
the fallback chain moves on without a network call.
"""
import os
from typing import Optional

from ..errors import ConfigurationMissingError
from ..schemas import PriceRecord, PriceSource
from .base import PriceProvider, normalize_timestamp, to_fixed

API_KEY_ENV = "COINMARKETCAP_API_KEY"


class CoinMarketCapProvider(PriceProvider):
    """CoinMarketCap Pro API provider.

    Example:
        >>> provider = CoinMarketCapProvider(api_key="b54bcf4d-...")
        >>> record = provider.fetch_price()
        >>> record.source
        <PriceSource.COINMARKETCAP: 'CoinMarketCap'>
    """

    API_ENDPOINT = "https://pro-api.coinmarketcap.com/v1/cryptocurrency/quotes/latest"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize CoinMarketCap provider.

        Args:
            api_key: API key (default: from COINMARKETCAP_API_KEY env var)
            timeout: Request timeout in seconds (default: from settings)
        """
        super().__init__(timeout=timeout)
        self._api_key = api_key if api_key is not None else os.getenv(API_KEY_ENV)

    @property
    def source(self) -> PriceSource:
        return PriceSource.COINMARKETCAP

    def fetch_price(self) -> PriceRecord:
        if not self._api_key:
            raise ConfigurationMissingError(self.name, variable=API_KEY_ENV)

        payload = self._get_json(
            self.API_ENDPOINT,
            params={"symbol": "BTC", "convert": "USD"},
            headers={"X-CMC_PRO_API_KEY": self._api_key},
        )

        try:
            quote = payload["data"]["BTC"]["quote"]["USD"]
            return PriceRecord(
                price=to_fixed(quote["price"]),
                percent_change_24h=to_fixed(quote["percent_change_24h"]),
                market_cap=to_fixed(quote["market_cap"]),
                last_updated=normalize_timestamp(quote["last_updated"]),
                source=self.source,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise self._malformed(e)
