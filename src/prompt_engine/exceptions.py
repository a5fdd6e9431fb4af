"""
Custom exceptions for the prompt engine.
"""


class PromptEngineError(Exception):
    """Base exception for prompt engine errors."""
    pass


class InvalidInputError(PromptEngineError):
    """Raised when an argument is structurally invalid (not when content is poor)."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class ConfigurationError(PromptEngineError):
    """Raised when rule tables or settings cannot be loaded. Fatal at startup."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source}: {reason}")


class PromptNotFoundError(PromptEngineError):
    """Raised when a stored prompt cannot be found."""

    def __init__(self, prompt_id: str):
        self.prompt_id = prompt_id
        super().__init__(f"Prompt not found: {prompt_id}")
