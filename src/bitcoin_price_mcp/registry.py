"""Tool registry: the discovery payload advertised to callers.

Built once at startup and read-only afterwards. The serialized JSON is
computed at construction so that ``GET /``, the first SSE event and
describe() all yield the same bytes.
"""
import copy
import json
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .tools.base import Tool

SCHEMA_VERSION = "2.0"


class ToolRegistry:
    def __init__(self, tools: Iterable[Tool], schema_version: str = SCHEMA_VERSION) -> None:
        """Initialize the registry.

        Args:
            tools: Tools to advertise, in discovery order
            schema_version: Discovery payload schema version

        Raises:
            ValueError: If two tools share a name
        """
        by_name: Dict[str, Tool] = {}
        for tool in tools:
            if tool.name in by_name:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            by_name[tool.name] = tool

        self._tools: Mapping[str, Tool] = MappingProxyType(by_name)
        self._schema_version = schema_version
        self._discovery_json = json.dumps(self.describe(), separators=(",", ":"))

    @property
    def schema_version(self) -> str:
        return self._schema_version

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._tools)

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def describe(self) -> Dict[str, Any]:
        """Return ``{"schemaVersion": ..., "tools": {name: descriptor}}``.

        A fresh dict on every call; mutating it does not affect the registry.
        """
        return {
            "schemaVersion": self._schema_version,
            "tools": {name: copy.deepcopy(tool.descriptor.to_discovery()) for name, tool in self._tools.items()},
        }

    def discovery_json(self) -> str:
        return self._discovery_json
