from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PriceSource(str, Enum):
    COINMARKETCAP = "CoinMarketCap"  # primary, keyed
    COINGECKO = "CoinGecko"          # secondary, free


class PriceRecord(BaseModel):
    """Canonical result of one successful price lookup.

    Numeric fields are display-grade strings with exactly two fraction
    digits. ``last_updated`` is the provider's timestamp, not request time.
    """
    price: str = Field(..., description="Current price of Bitcoin in USD")
    percent_change_24h: str = Field(..., description="24-hour percent change in Bitcoin price")
    market_cap: str = Field(..., description="Current market cap of Bitcoin in USD")
    last_updated: str = Field(..., description="Timestamp of when the price was last updated")
    source: PriceSource = Field(..., description="Data source (CoinMarketCap or CoinGecko)")

    model_config = ConfigDict(frozen=True)


class InvocationRequest(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(strict=True)


class ErrorBody(BaseModel):
    message: str


class InvocationResult(BaseModel):
    """Either ``{"result": PriceRecord}`` or ``{"error": {"message"}}``."""
    result: Optional[PriceRecord] = None
    error: Optional[ErrorBody] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "InvocationResult":
        if (self.result is None) == (self.error is None):
            raise ValueError("exactly one of result or error must be set")
        return self

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
