"""Structured error taxonomy for the Bitcoin price tool server.

Every error raised inside the service inherits from StructuredError and
provides:
- Error category and severity metadata
- A retryability indicator
- A consistent to_dict() method for logs

Errors that reach a caller additionally carry an HTTP status code and a
to_wire() method producing the public ``{"error": {"message": ...}}`` body.
Provider diagnostics live in ``details`` and never appear on the wire.

Example:
    >>> try:
    ...     raise UnknownToolError("get-ethereum-price")
    ... except ClientError as e:
    ...     body = e.to_wire()
    ...     print(body["error"]["message"])
    Unknown tool: get-ethereum-price
"""
from enum import Enum
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIGURATION = "configuration"  # Missing/invalid configuration
    PROVIDER = "provider"            # Upstream price provider failures
    EXECUTION = "execution"          # Tool execution failures
    VALIDATION = "validation"        # Invocation request validation
    UNKNOWN = "unknown"              # Unclassified errors


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"          # Expected condition (e.g., credential not configured)
    WARNING = "warning"    # Recoverable (e.g., provider down, fallback used)
    ERROR = "error"        # Request failed
    CRITICAL = "critical"  # System failure


class StructuredError(Exception):
    """Base class for all structured errors.

    Attributes:
        message: Human-readable error message
        category: ErrorCategory classification
        severity: ErrorSeverity level
        retryable: Whether the operation can be retried
        details: Additional context (dict)
        timestamp: When the error occurred
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.retryable = retryable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary.

        Returns:
            Dictionary with error details in predictable schema:
            {
                "error_type": "ErrorClassName",
                "message": "Human-readable message",
                "category": "provider|validation|execution|...",
                "severity": "info|warning|error|critical",
                "retryable": true|false,
                "details": {...},
                "timestamp": "2024-01-01T12:00:00.000000+00:00"
            }
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }


class ProviderError(StructuredError):
    """Failure of a single upstream price provider.

    Raised for network failures, non-success HTTP statuses and malformed
    payloads. Absorbed by the fallback orchestrator; never returned to a
    caller directly.

    Example:
        >>> raise ProviderError(
        ...     "CoinGecko",
        ...     "HTTP 429 Too Many Requests",
        ...     details={"status_code": 429}
        ... )
    """

    def __init__(
        self,
        provider: str,
        cause: str,
        retryable: bool = True,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        category: ErrorCategory = ErrorCategory.PROVIDER,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize provider error.

        Args:
            provider: Name of the provider that failed
            cause: Short description of what went wrong
            retryable: Whether a later attempt could succeed (default: True)
            severity: Log severity (default: WARNING, fallback follows)
            category: Error category (default: PROVIDER)
            details: Additional context (status code, payload keys, etc.)
        """
        super().__init__(
            message=f"{provider}: {cause}",
            category=category,
            severity=severity,
            retryable=retryable,
            details={"provider": provider, **(details or {})}
        )
        self.provider = provider
        self.cause = cause


class ConfigurationMissingError(ProviderError):
    """A provider cannot be called because its credential is not configured.

    Expected when running without a paid API key. Classified before any
    network call and handled like any other provider failure (fallback).

    Example:
        >>> raise ConfigurationMissingError(
        ...     "CoinMarketCap",
        ...     variable="COINMARKETCAP_API_KEY"
        ... )
    """

    def __init__(self, provider: str, variable: str):
        super().__init__(
            provider=provider,
            cause=f"{variable} not found in environment variables",
            retryable=False,
            severity=ErrorSeverity.INFO,
            category=ErrorCategory.CONFIGURATION,
            details={"variable": variable}
        )
        self.variable = variable


class ClientError(StructuredError):
    """Error that is reported back to the caller of /execute.

    Subclasses set ``status_code``. Only ``message`` is serialized for the
    caller; ``details`` stay in the logs.
    """

    status_code: int = 500

    def to_wire(self) -> Dict[str, Any]:
        """Public error body: ``{"error": {"message": ...}}``."""
        return {"error": {"message": self.message}}


class MalformedRequestError(ClientError):
    """Invocation body could not be parsed as ``{name, arguments}``."""

    status_code = 400

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Malformed request: {reason}",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            retryable=False,
            details=details
        )


class UnknownToolError(ClientError):
    """Invocation named a tool that is not registered."""

    status_code = 400

    def __init__(self, name: Any):
        super().__init__(
            message=f"Unknown tool: {name}",
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            retryable=False,
            details={"name": name}
        )
        self.name = name


class AllProvidersFailedError(ClientError):
    """Every provider in the fallback chain failed for one invocation.

    The caller receives a generic message; the per-provider errors are kept
    on ``errors`` for logging only.

    Example:
        >>> error = AllProvidersFailedError([
        ...     ConfigurationMissingError("CoinMarketCap", "COINMARKETCAP_API_KEY"),
        ...     ProviderError("CoinGecko", "connection refused"),
        ... ])
        >>> error.to_wire()
        {'error': {'message': 'Failed to fetch Bitcoin price'}}
    """

    status_code = 503

    def __init__(self, errors: Optional[List[ProviderError]] = None):
        self.errors = list(errors or [])
        super().__init__(
            message="Failed to fetch Bitcoin price",
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.ERROR,
            retryable=True,
            details={"provider_errors": [e.message for e in self.errors]}
        )
