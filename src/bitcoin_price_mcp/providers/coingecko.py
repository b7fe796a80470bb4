"""CoinGecko price provider (secondary, no API key required)."""
from ..schemas import PriceRecord, PriceSource
from .base import PriceProvider, normalize_timestamp, to_fixed


class CoinGeckoProvider(PriceProvider):
    """CoinGecko public Simple Price API.

    The response looks like::

        {"bitcoin": {"usd": 43000.1, "usd_market_cap": 842000000000.5,
                     "usd_24h_change": -1.234, "last_updated_at": 1704067200}}

    ``last_updated_at`` is epoch seconds and is converted to ISO UTC.
    """

    API_ENDPOINT = "https://api.coingecko.com/api/v3/simple/price"

    @property
    def source(self) -> PriceSource:
        return PriceSource.COINGECKO

    def fetch_price(self) -> PriceRecord:
        payload = self._get_json(
            self.API_ENDPOINT,
            params={
                "ids": "bitcoin",
                "vs_currencies": "usd",
                "include_market_cap": "true",
                "include_24hr_change": "true",
                "include_last_updated_at": "true",
            },
        )

        try:
            btc = payload["bitcoin"]
            return PriceRecord(
                price=to_fixed(btc["usd"]),
                percent_change_24h=to_fixed(btc["usd_24h_change"]),
                market_cap=to_fixed(btc["usd_market_cap"]),
                last_updated=normalize_timestamp(btc["last_updated_at"]),
                source=self.source,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise self._malformed(e)
