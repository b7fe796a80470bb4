"""Base classes for price provider abstraction.

Each upstream price API is wrapped in a PriceProvider that performs exactly
one outbound request and normalizes the response into a PriceRecord. All
failures (missing credential, network error, non-success status, malformed
payload) surface as ProviderError; raw ``requests`` exceptions never escape.
"""
import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..errors import ProviderError
from ..schemas import PriceRecord, PriceSource


def to_fixed(value: Any) -> str:
    """Format a numeric value with exactly two fraction digits.

    Raises:
        ValueError: If value is not a finite int or float (bools included)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as e:
        raise ValueError(f"number out of range: {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return f"{number:.2f}"


def normalize_timestamp(value: Any) -> str:
    """Return an absolute UTC timestamp string.

    Epoch seconds are converted to ``YYYY-MM-DDTHH:MM:SS.mmmZ``; strings are
    assumed to already be absolute and pass through unchanged.
    """
    if isinstance(value, str) and value:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a timestamp, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"expected a finite timestamp, got {value!r}")
    try:
        moment = datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PriceProvider(ABC):
    """Abstract base class for Bitcoin price providers.

    Subclasses implement fetch_price() and use _get_json() for the single
    outbound request so that transport failures are classified uniformly.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout if timeout is not None else settings.provider_timeout_seconds

    @property
    @abstractmethod
    def source(self) -> PriceSource:
        """Which upstream this provider represents."""
        pass

    @property
    def name(self) -> str:
        return self.source.value

    @abstractmethod
    def fetch_price(self) -> PriceRecord:
        """Fetch the current BTC/USD price.

        Returns:
            A complete PriceRecord with ``source`` set to this provider

        Raises:
            ProviderError: On any failure, including missing configuration
        """
        pass

    def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """Perform one GET request and return the decoded JSON body."""
        try:
            response = requests.get(url, params=params, headers=headers, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise ProviderError(self.name, f"request exceeded timeout of {self._timeout}s: {e}")
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"request failed: {e}")

        if not 200 <= response.status_code < 300:
            raise ProviderError(
                self.name,
                f"API returned status {response.status_code}",
                details={"status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON in response: {e}", retryable=False)

    def _malformed(self, exc: Exception) -> ProviderError:
        return ProviderError(
            self.name,
            f"unexpected response payload: {type(exc).__name__}: {exc}",
            retryable=False
        )
