"""
Tool API routes.

Lists the registered prompt tools and dispatches calls to them.
"""

from fastapi import APIRouter, Depends, HTTPException

from prompt_engine.tools import ToolRegistry

from ..dependencies import get_tool_registry
from ..schemas import ToolCallRequest

router = APIRouter()


@router.get("")
async def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """Function-call schemas for every registered tool."""
    schemas = registry.to_llm_schema()
    return {"tools": schemas, "total": len(schemas)}


@router.post("/call")
async def call_tool(request: ToolCallRequest, registry: ToolRegistry = Depends(get_tool_registry)):
    """
    Run a tool by name.

    Tool failures are reported in the body with ``ok`` false; only an unknown
    tool name is an HTTP error.
    """
    if registry.get(request.name) is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {request.name}")

    result = await registry.dispatch(request.name, request.arguments)
    return {
        "name": request.name,
        "ok": result.ok,
        "output": result.json_output(),
        "error": result.error,
    }
