from typing import Any, Dict, Optional

from ..fallback import FallbackOrchestrator
from ..schemas import PriceRecord
from .base import ToolDescriptor, output_schema

TOOL_NAME = "get-bitcoin-price"


class BitcoinPriceTool:
    name = TOOL_NAME
    descriptor = ToolDescriptor(
        name=TOOL_NAME,
        description="Get the current price of Bitcoin (BTC) in USD",
        output=output_schema(PriceRecord),
    )

    def __init__(self, orchestrator: Optional[FallbackOrchestrator] = None):
        """Initialize the tool.

        Args:
            orchestrator: Provider fallback chain. If None, uses the default
                          CoinMarketCap -> CoinGecko chain.
        """
        self._orchestrator = orchestrator or FallbackOrchestrator()

    def run(self, arguments: Dict[str, Any]) -> PriceRecord:
        """Fetch the current price. ``arguments`` is accepted and ignored.

        Raises:
            AllProvidersFailedError: If no provider answered
        """
        return self._orchestrator.get_price()
