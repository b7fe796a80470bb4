"""Tools exposed by the server."""
from .base import Tool, ToolDescriptor
from .bitcoin_price import BitcoinPriceTool, TOOL_NAME

__all__ = ["Tool", "ToolDescriptor", "BitcoinPriceTool", "TOOL_NAME"]
