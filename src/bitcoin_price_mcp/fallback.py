"""Ordered provider fallback.

Providers are tried in fixed priority order, one call each. The first
successful record is returned; a failure moves on to the next provider.
Only when every provider has failed does the caller see an error, and then
a single uniform AllProvidersFailedError. Per-provider errors are logged.

Any primary failure triggers the fallback, transient or not.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from prometheus_client import Counter

from .errors import AllProvidersFailedError, ConfigurationMissingError, ProviderError
from .providers import CoinGeckoProvider, CoinMarketCapProvider, PriceProvider
from .schemas import PriceRecord

logger = logging.getLogger(__name__)

PROVIDER_FAILURES = Counter(
    "bitcoin_mcp_provider_failures_total", "Failed provider attempts", ["provider", "category"]
)


def default_providers() -> List[PriceProvider]:
    """Primary (CoinMarketCap) first, then the free CoinGecko fallback."""
    return [CoinMarketCapProvider(), CoinGeckoProvider()]


class FallbackOrchestrator:
    def __init__(self, providers: Sequence[PriceProvider] | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            providers: Providers in priority order. If None, uses
                       default_providers().

        Raises:
            ValueError: If the provider list is empty
        """
        self._providers = tuple(providers) if providers is not None else tuple(default_providers())
        if not self._providers:
            raise ValueError("FallbackOrchestrator needs at least one provider")

    @property
    def providers(self) -> Sequence[PriceProvider]:
        return self._providers

    def get_price(self) -> PriceRecord:
        """Fetch the current price from the first provider that answers.

        Raises:
            AllProvidersFailedError: If every provider failed
        """
        errors: List[ProviderError] = []
        for index, provider in enumerate(self._providers):
            try:
                record = provider.fetch_price()
            except ConfigurationMissingError as e:
                logger.info("Skipping %s: %s", provider.name, e.cause)
                errors.append(e)
                PROVIDER_FAILURES.labels(provider=provider.name, category=e.category.value).inc()
            except ProviderError as e:
                logger.warning("%s API error: %s", provider.name, e.cause)
                errors.append(e)
                PROVIDER_FAILURES.labels(provider=provider.name, category=e.category.value).inc()
            else:
                if record.source != provider.source:
                    record = record.model_copy(update={"source": provider.source})
                return record

            if index + 1 < len(self._providers):
                logger.info("Falling back to %s API...", self._providers[index + 1].name)

        error = AllProvidersFailedError(errors)
        logger.error("All API attempts failed: %s", "; ".join(error.details["provider_errors"]))
        raise error
