"""
Prompt persistence.

The engine produces RefinedPrompt values; stores in this package keep them.
"""

from .memory import InMemoryPromptStore
from .store import PromptRecord, PromptStore

__all__ = [
    "InMemoryPromptStore",
    "PromptRecord",
    "PromptStore",
]
