"""Pytest fixtures and configuration.

Provides shared fixtures for provider, orchestrator and API tests.
"""
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import Mock

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bitcoin_price_mcp.errors import ConfigurationMissingError, ProviderError
from bitcoin_price_mcp.fallback import FallbackOrchestrator
from bitcoin_price_mcp.providers import MockPriceProvider
from bitcoin_price_mcp.registry import ToolRegistry
from bitcoin_price_mcp.router import ToolRouter
from bitcoin_price_mcp.schemas import PriceSource
from bitcoin_price_mcp.tools import BitcoinPriceTool


def make_response(status_code: int = 200, payload: Any = None) -> Mock:
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def cmc_payload() -> Dict[str, Any]:
    """CoinMarketCap quotes/latest body (trimmed to the fields we read)."""
    return {
        "status": {"error_code": 0},
        "data": {
            "BTC": {
                "symbol": "BTC",
                "quote": {
                    "USD": {
                        "price": 43000.1,
                        "percent_change_24h": 2.345678,
                        "market_cap": 842123456789.987,
                        "last_updated": "2024-01-01T12:30:00.000Z",
                    }
                },
            }
        },
    }


@pytest.fixture
def coingecko_payload() -> Dict[str, Any]:
    """CoinGecko simple/price body."""
    return {
        "bitcoin": {
            "usd": 42999.5,
            "usd_market_cap": 841999999999.123,
            "usd_24h_change": -1.23456,
            "last_updated_at": 1704067200,
        }
    }


@pytest.fixture
def primary() -> MockPriceProvider:
    return MockPriceProvider(PriceSource.COINMARKETCAP, price="43000.10")


@pytest.fixture
def secondary() -> MockPriceProvider:
    return MockPriceProvider(PriceSource.COINGECKO, price="42999.50")


@pytest.fixture
def failing_primary() -> MockPriceProvider:
    return MockPriceProvider(
        PriceSource.COINMARKETCAP,
        error=ProviderError("CoinMarketCap", "API returned status 500"),
    )


@pytest.fixture
def unconfigured_primary() -> MockPriceProvider:
    return MockPriceProvider(
        PriceSource.COINMARKETCAP,
        error=ConfigurationMissingError("CoinMarketCap", variable="COINMARKETCAP_API_KEY"),
    )


@pytest.fixture
def failing_secondary() -> MockPriceProvider:
    return MockPriceProvider(
        PriceSource.COINGECKO,
        error=ProviderError("CoinGecko", "request failed: connection refused"),
    )


def build_router(*providers: MockPriceProvider) -> ToolRouter:
    """ToolRouter whose get-bitcoin-price tool uses the given providers."""
    orchestrator = FallbackOrchestrator(list(providers))
    return ToolRouter(ToolRegistry([BitcoinPriceTool(orchestrator)]))
