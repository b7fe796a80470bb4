"""Mock price provider for testing.

Returns a predefined record (or a predefined failure) without making network
calls, and counts how often it was asked.
"""
from typing import Optional

from ..errors import ProviderError
from ..schemas import PriceRecord, PriceSource
from .base import PriceProvider


class MockPriceProvider(PriceProvider):
    """Mock price provider for testing.

    Example:
        >>> provider = MockPriceProvider(PriceSource.COINGECKO, price="43000.10")
        >>> provider.fetch_price().price
        '43000.10'
        >>> provider.calls
        1
    """

    def __init__(
        self,
        source: PriceSource = PriceSource.COINMARKETCAP,
        price: str = "43000.10",
        percent_change_24h: str = "-1.23",
        market_cap: str = "842000000000.50",
        last_updated: str = "2024-01-01T00:00:00.000Z",
        error: Optional[ProviderError] = None
    ):
        """Initialize mock provider.

        Args:
            source: Which upstream this mock stands in for
            price, percent_change_24h, market_cap, last_updated: Record fields
            error: If set, raised from every fetch_price() call
        """
        super().__init__(timeout=0.0)
        self._source = source
        self._record = PriceRecord(
            price=price,
            percent_change_24h=percent_change_24h,
            market_cap=market_cap,
            last_updated=last_updated,
            source=source,
        )
        self._error = error
        self.calls = 0

    @property
    def source(self) -> PriceSource:
        return self._source

    def fetch_price(self) -> PriceRecord:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._record
