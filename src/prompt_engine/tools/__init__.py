"""Tool-dispatch layer over the engine and the prompt store."""

from .prompt_tools import (
    ComparePromptsTool,
    EvaluatePromptTool,
    GetPromptTool,
    GetStatsTool,
    ProcessPromptTool,
    SavePromptTool,
    SearchPromptsTool,
    ValidatePromptTool,
    create_tool_registry,
)
from .tool_base import BaseTool, ToolRegistry, ToolResult

__all__ = [
    "BaseTool",
    "ComparePromptsTool",
    "EvaluatePromptTool",
    "GetPromptTool",
    "GetStatsTool",
    "ProcessPromptTool",
    "SavePromptTool",
    "SearchPromptsTool",
    "ToolRegistry",
    "ToolResult",
    "ValidatePromptTool",
    "create_tool_registry",
]
