"""Tests for the provider fallback orchestrator.

Validates that:
1. A successful primary short-circuits (secondary never called)
2. Any primary failure, including missing credentials, falls back once
3. Exhausting the chain raises a single generic AllProvidersFailedError
"""
import logging

import pytest

from bitcoin_price_mcp.errors import AllProvidersFailedError, ConfigurationMissingError
from bitcoin_price_mcp.fallback import FallbackOrchestrator, default_providers
from bitcoin_price_mcp.providers import CoinGeckoProvider, CoinMarketCapProvider, MockPriceProvider
from bitcoin_price_mcp.schemas import PriceSource


class TestFallbackOrder:

    def test_primary_success_skips_secondary(self, primary, secondary):
        orchestrator = FallbackOrchestrator([primary, secondary])

        record = orchestrator.get_price()

        assert record.source == PriceSource.COINMARKETCAP
        assert record.price == "43000.10"
        assert primary.calls == 1
        assert secondary.calls == 0

    def test_primary_failure_falls_back_once(self, failing_primary, secondary):
        orchestrator = FallbackOrchestrator([failing_primary, secondary])

        record = orchestrator.get_price()

        assert record.source == PriceSource.COINGECKO
        assert record.price == "42999.50"
        assert failing_primary.calls == 1
        assert secondary.calls == 1

    def test_missing_credential_falls_back(self, unconfigured_primary, secondary):
        orchestrator = FallbackOrchestrator([unconfigured_primary, secondary])

        record = orchestrator.get_price()

        assert record.source == PriceSource.COINGECKO
        assert secondary.calls == 1

    def test_missing_credential_is_not_logged_as_error(self, unconfigured_primary, secondary, caplog):
        orchestrator = FallbackOrchestrator([unconfigured_primary, secondary])

        with caplog.at_level(logging.INFO, logger="bitcoin_price_mcp"):
            orchestrator.get_price()

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert any("Falling back to CoinGecko" in r.getMessage() for r in caplog.records)

    def test_each_provider_called_at_most_once_per_invocation(self, failing_primary, failing_secondary):
        orchestrator = FallbackOrchestrator([failing_primary, failing_secondary])

        with pytest.raises(AllProvidersFailedError):
            orchestrator.get_price()

        assert failing_primary.calls == 1
        assert failing_secondary.calls == 1

    def test_invocations_are_independent(self, failing_primary, secondary):
        orchestrator = FallbackOrchestrator([failing_primary, secondary])

        orchestrator.get_price()
        orchestrator.get_price()

        # No memory of earlier failures: primary is retried on every invocation
        assert failing_primary.calls == 2
        assert secondary.calls == 2


class TestAllProvidersFailed:

    def test_generic_message_hides_provider_diagnostics(self, failing_primary, failing_secondary):
        orchestrator = FallbackOrchestrator([failing_primary, failing_secondary])

        with pytest.raises(AllProvidersFailedError) as exc_info:
            orchestrator.get_price()

        error = exc_info.value
        assert error.message == "Failed to fetch Bitcoin price"
        assert error.to_wire() == {"error": {"message": "Failed to fetch Bitcoin price"}}
        assert [e.provider for e in error.errors] == ["CoinMarketCap", "CoinGecko"]

    def test_failure_is_logged(self, unconfigured_primary, failing_secondary, caplog):
        orchestrator = FallbackOrchestrator([unconfigured_primary, failing_secondary])

        with caplog.at_level(logging.INFO, logger="bitcoin_price_mcp"):
            with pytest.raises(AllProvidersFailedError) as exc_info:
                orchestrator.get_price()

        assert isinstance(exc_info.value.errors[0], ConfigurationMissingError)
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "connection refused" in errors[0].getMessage()

    def test_single_provider_chain(self, failing_secondary):
        orchestrator = FallbackOrchestrator([failing_secondary])

        with pytest.raises(AllProvidersFailedError):
            orchestrator.get_price()


class TestConstruction:

    def test_empty_chain_rejected(self):
        with pytest.raises(ValueError):
            FallbackOrchestrator([])

    def test_default_priority_order(self):
        providers = default_providers()

        assert isinstance(providers[0], CoinMarketCapProvider)
        assert isinstance(providers[1], CoinGeckoProvider)
        assert [p.source for p in providers] == [PriceSource.COINMARKETCAP, PriceSource.COINGECKO]

    def test_further_providers_need_no_orchestration_changes(self, failing_primary, failing_secondary):
        third = MockPriceProvider(PriceSource.COINGECKO, price="1.00")
        orchestrator = FallbackOrchestrator([failing_primary, failing_secondary, third])

        assert orchestrator.get_price().price == "1.00"
        assert len(orchestrator.providers) == 3
