"""
PromptSmith CLI - refine, score, validate and compare prompts from the terminal.
"""

__version__ = "0.1.0"
__author__ = "PromptSmith Team"
__license__ = "MIT"

__all__ = ["__version__"]
