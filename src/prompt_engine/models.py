"""
Value objects produced by the engine.

Every object here is created fresh per request and never mutated afterwards.
A new refinement produces a new RefinedPrompt.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .domains import Domain, Template, Tone

# Fixed, domain-independent weights for the overall score
SCORE_WEIGHTS: Dict[str, float] = {
    "clarity": 0.25,
    "specificity": 0.25,
    "structure": 0.25,
    "completeness": 0.25,
}


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class RawPrompt:
    """The original input text plus optional hints."""

    text: str
    domain_hint: Optional[str] = None
    style_hint: Optional[str] = None
    tone: Optional[Tone] = None

    @classmethod
    def coerce(cls, value: Any) -> "RawPrompt":
        """Accept either a RawPrompt or a plain string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(text=value)
        raise TypeError(f"Expected RawPrompt or str, got {type(value).__name__}")


@dataclass(frozen=True)
class QualityScore:
    """Four independent sub-scores and their weighted overall score."""

    clarity: float
    specificity: float
    structure: float
    completeness: float
    overall: float

    @classmethod
    def from_components(
        cls,
        clarity: float,
        specificity: float,
        structure: float,
        completeness: float,
    ) -> "QualityScore":
        """Build a score; overall is always derived, never supplied."""
        clarity = clamp(clarity)
        specificity = clamp(specificity)
        structure = clamp(structure)
        completeness = clamp(completeness)
        overall = clamp(
            clarity * SCORE_WEIGHTS["clarity"]
            + specificity * SCORE_WEIGHTS["specificity"]
            + structure * SCORE_WEIGHTS["structure"]
            + completeness * SCORE_WEIGHTS["completeness"]
        )
        return cls(
            clarity=clarity,
            specificity=specificity,
            structure=structure,
            completeness=completeness,
            overall=overall,
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class Severity(str, Enum):
    """Finding severity, highest first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Higher rank means more severe."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.HIGH: 2,
    Severity.MEDIUM: 1,
    Severity.LOW: 0,
}


@dataclass(frozen=True)
class ValidationFinding:
    """A single anti-pattern detection."""

    severity: Severity
    message: str
    category: str
    code: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "category": self.category,
            "code": self.code,
        }


@dataclass(frozen=True)
class Suggestion:
    """A concrete rewrite: replace ``before`` with ``after``."""

    kind: str
    message: str
    before: str
    after: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "kind": self.kind,
            "message": self.message,
            "before": self.before,
            "after": self.after,
        }


@dataclass(frozen=True)
class ProcessingMetadata:
    """How a RefinedPrompt was produced."""

    elapsed_ms: float
    iterations: int
    history: Tuple[float, ...] = ()
    enhancements: Tuple[str, ...] = ()
    forced_boost: bool = False
    # Only set when forced_boost is True; the genuine score is left untouched
    reported_overall: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elapsed_ms": self.elapsed_ms,
            "iterations": self.iterations,
            "history": list(self.history),
            "enhancements": list(self.enhancements),
            "forced_boost": self.forced_boost,
            "score_overridden": self.forced_boost,
            "reported_overall": self.reported_overall,
        }


@dataclass(frozen=True)
class RefinedPrompt:
    """Output of one Refiner + Scorer (+ Improver) run."""

    original: str
    refined: str
    domain: Domain
    template: Template
    score: QualityScore
    metadata: ProcessingMetadata
    findings: Tuple[ValidationFinding, ...] = ()
    system_prompt: str = ""
    suggestions: Tuple[Suggestion, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "refined": self.refined,
            "domain": self.domain.value,
            "template": self.template.value,
            "score": self.score.to_dict(),
            "metadata": self.metadata.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
            "system_prompt": self.system_prompt,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass(frozen=True)
class RankedVariant:
    """One candidate in a comparison."""

    index: int
    rank: int
    raw: str
    refined: str
    domain: Domain
    template: Template
    score: QualityScore
    is_winner: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "rank": self.rank,
            "raw": self.raw,
            "refined": self.refined,
            "domain": self.domain.value,
            "template": self.template.value,
            "score": self.score.to_dict(),
            "is_winner": self.is_winner,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Variants ordered by overall score, best first."""

    ranking: Tuple[RankedVariant, ...] = field(default_factory=tuple)

    @property
    def winner(self) -> RankedVariant:
        return self.ranking[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner_index": self.winner.index,
            "ranking": [variant.to_dict() for variant in self.ranking],
        }

    def __len__(self) -> int:
        return len(self.ranking)

    def __iter__(self):
        return iter(self.ranking)

