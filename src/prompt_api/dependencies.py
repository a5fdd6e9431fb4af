"""
Shared engine, store and tool registry for the routes.

Each getter is a FastAPI dependency; tests swap them through
``app.dependency_overrides``.
"""

import logging
from typing import Optional

from fastapi import Depends

from prompt_engine import PromptEngine
from prompt_engine.storage import InMemoryPromptStore, PromptStore
from prompt_engine.tools import ToolRegistry, create_tool_registry

logger = logging.getLogger(__name__)

# Global singleton instances
_engine: Optional[PromptEngine] = None
_store: Optional[PromptStore] = None


def get_engine() -> PromptEngine:
    """Get the global PromptEngine instance."""
    global _engine
    if _engine is None:
        _engine = PromptEngine()
        logger.info(f"PromptEngine created with rules from {_engine.rule_tables.source}")
    return _engine


def get_store() -> PromptStore:
    """Get the global prompt store."""
    global _store
    if _store is None:
        _store = InMemoryPromptStore()
    return _store


def get_tool_registry(
    engine: PromptEngine = Depends(get_engine),
    store: PromptStore = Depends(get_store),
) -> ToolRegistry:
    return create_tool_registry(engine, store)
