from __future__ import annotations
import json
import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import ValidationError

from .errors import ClientError, MalformedRequestError, UnknownToolError
from .registry import ToolRegistry
from .schemas import ErrorBody, InvocationRequest, InvocationResult
from .tools import BitcoinPriceTool

logger = logging.getLogger(__name__)


@dataclass
class Routed:
    tool: Optional[str]
    status_code: int
    result: InvocationResult
    elapsed_ms: float
    outcome: str


def default_registry() -> ToolRegistry:
    return ToolRegistry([BitcoinPriceTool()])


class ToolRouter:
    def __init__(self, registry: Optional[ToolRegistry] = None) -> None:
        """Initialize the execution handler.

        Args:
            registry: Registered tools. If None, registers get-bitcoin-price
                      backed by the default provider chain.
        """
        self.registry = registry or default_registry()

    def parse(self, body: Union[bytes, str]) -> InvocationRequest:
        """Parse a fully buffered request body.

        Raises:
            MalformedRequestError: If the body is not ``{name, arguments}`` JSON
        """
        try:
            payload = json.loads(body)
        except (ValueError, TypeError) as e:
            raise MalformedRequestError("body is not valid JSON", details={"reason": str(e)})

        if not isinstance(payload, dict):
            raise MalformedRequestError("expected a JSON object with 'name' and 'arguments'")

        try:
            return InvocationRequest.model_validate(payload)
        except ValidationError as e:
            raise MalformedRequestError(
                "expected a JSON object with 'name' and 'arguments'",
                details={"errors": e.errors(include_url=False, include_input=False)},
            )

    def handle(self, body: Union[bytes, str]) -> Routed:
        """Parse, validate and execute one invocation.

        Never raises for malformed input, unknown tools or provider
        exhaustion; those become an error InvocationResult.

        Returns:
            Routed with the HTTP status code and the InvocationResult
        """
        start = time.perf_counter()
        tool_name: Optional[str] = None
        try:
            request = self.parse(body)
            tool_name = request.name
            logger.info("Received request: %s", request.model_dump())

            tool = self.registry.get(request.name)
            if tool is None:
                raise UnknownToolError(request.name)

            record = tool.run(request.arguments)
            result = InvocationResult(result=record)
            status_code, outcome = 200, "success"
        except ClientError as e:
            logger.warning("Error processing request: %s", e.to_dict())
            result = InvocationResult(error=ErrorBody(message=e.message))
            status_code, outcome = e.status_code, type(e).__name__

        elapsed = (time.perf_counter() - start) * 1000
        return Routed(tool=tool_name, status_code=status_code, result=result,
                      elapsed_ms=elapsed, outcome=outcome)
