"""
API Routes for PromptSmith.
"""

from . import health
from . import prompts
from . import tools

__all__ = ["health", "prompts", "tools"]
