"""
PromptSmith API - HTTP surface for the prompt engine, the tool layer and the prompt library.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
