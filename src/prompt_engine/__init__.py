"""
PromptSmith - domain-aware prompt refinement and scoring.

Turns an unstructured prompt into a structured, domain-optimized instruction
together with a reproducible four-dimensional quality score.
"""

from .domains import Domain, Template, Tone
from .engine import PromptEngine
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    PromptEngineError,
    PromptNotFoundError,
)
from .models import (
    ComparisonResult,
    ProcessingMetadata,
    QualityScore,
    RankedVariant,
    RawPrompt,
    RefinedPrompt,
    Severity,
    Suggestion,
    ValidationFinding,
)
from .refiner import Enhancement
from .rules import RuleTables

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ComparisonResult",
    "ConfigurationError",
    "Domain",
    "Enhancement",
    "InvalidInputError",
    "ProcessingMetadata",
    "PromptEngine",
    "PromptEngineError",
    "PromptNotFoundError",
    "QualityScore",
    "RankedVariant",
    "RawPrompt",
    "RefinedPrompt",
    "RuleTables",
    "Severity",
    "Suggestion",
    "Template",
    "Tone",
    "ValidationFinding",
]
