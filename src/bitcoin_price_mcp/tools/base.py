from typing import Any, Dict, List, Protocol, Type

from pydantic import BaseModel, ConfigDict, Field

EMPTY_INPUT_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}, "required": []}


class ToolDescriptor(BaseModel):
    """Static schema entry advertised to callers."""
    name: str = Field(..., min_length=1)
    description: str
    input: Dict[str, Any] = Field(default_factory=lambda: dict(EMPTY_INPUT_SCHEMA))
    output: Dict[str, Any]

    model_config = ConfigDict(frozen=True)

    def to_discovery(self) -> Dict[str, Any]:
        """Entry under ``tools[name]`` in the discovery payload."""
        return {"description": self.description, "input": self.input, "output": self.output}


def output_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """Object schema with one string property per model field, all required."""
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for field_name, info in model.model_fields.items():
        properties[field_name] = {"type": "string", "description": info.description or ""}
        if info.is_required():
            required.append(field_name)
    return {"type": "object", "properties": properties, "required": required}


class Tool(Protocol):
    name: str
    descriptor: ToolDescriptor

    def run(self, arguments: Dict[str, Any]) -> BaseModel:
        """Execute the tool.

        Args:
            arguments: Invocation arguments (validated shape, may be empty)

        Returns:
            The tool's result model
        """
        ...
