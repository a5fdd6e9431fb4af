import inspect
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    """Represents the result of a tool execution."""

    output: Any = Field(default=None)
    error: Optional[str] = Field(default=None)

    class Config:
        arbitrary_types_allowed = True

    def __bool__(self):
        return any(getattr(self, field) for field in type(self).model_fields)

    def __str__(self):
        return f"Error: {self.error}" if self.error else str(self.output)

    @property
    def ok(self) -> bool:
        return self.error is None

    def json_output(self) -> Any:
        """Decode the JSON text in ``output``; None for failed results."""
        if self.error is not None or self.output is None:
            return None
        return json.loads(self.output)


class BaseTool(ABC, BaseModel):
    """Base class for tools: a name, a JSON-schema parameter block and an async execute."""

    name: str
    description: str
    parameters: Optional[dict] = None

    class Config:
        arbitrary_types_allowed = True

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with given parameters."""

    def to_param(self) -> Dict:
        """Convert tool to function call format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def success_response(self, data: Union[Dict[str, Any], List[Any], str]) -> ToolResult:
        """Create a successful tool result."""
        if isinstance(data, str):
            text = data
        else:
            text = json.dumps(data, indent=2)
        return ToolResult(output=text)

    def fail_response(self, msg: str) -> ToolResult:
        """Create a failed tool result."""
        return ToolResult(error=msg)


class ToolRegistry:
    """Registry of tools by name. One instance per engine/store pair."""

    def __init__(self):
        self.tools: Dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool."""
        self.tools[tool.name] = tool

    def get(self, name: str) -> Optional[BaseTool]:
        """Get a tool by name."""
        return self.tools.get(name)

    def list_tools(self) -> List[BaseTool]:
        """Get all registered tools."""
        return list(self.tools.values())

    def to_llm_schema(self, tool_names: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        Convert tools to LLM-compatible schema.

        Args:
            tool_names: Optional list of specific tools to include. If None, all tools.
        """
        if tool_names is None:
            tools_to_convert = self.tools.values()
        else:
            tools_to_convert = [self.tools[name] for name in tool_names if name in self.tools]

        return [tool.to_param() for tool in tools_to_convert]

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """
        Run a tool by name.

        Unknown tools and bad argument names come back as a failed ToolResult
        rather than an exception.
        """
        tool = self.get(name)
        if tool is None:
            return ToolResult(error=f"Unknown tool: {name}")
        if arguments is not None and not isinstance(arguments, dict):
            return ToolResult(error=f"Arguments for {name} must be an object")

        arguments = arguments or {}
        try:
            inspect.signature(tool.execute).bind(**arguments)
        except TypeError as e:
            logger.warning(f"Bad arguments for tool {name}: {e}")
            return tool.fail_response(f"Invalid arguments for {name}: {e}")

        logger.debug(f"Dispatching tool {name} with {sorted(arguments)}")
        return await tool.execute(**arguments)

    def clear(self) -> None:
        """Clear all tools (useful for testing)."""
        self.tools = {}
