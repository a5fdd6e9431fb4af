"""
Domain classification by weighted keyword matching.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .domains import Domain
from .rules import RuleTables

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 2.0


@dataclass(frozen=True)
class ClassificationResult:
    """The chosen domain plus every candidate's relevance score."""

    domain: Domain
    scores: Dict[Domain, float]
    from_hint: bool = False

    @property
    def confidence(self) -> float:
        """Share of the total relevance held by the chosen domain."""
        total = sum(self.scores.values())
        if self.from_hint:
            return 1.0
        if total <= 0:
            return 0.0
        return self.scores.get(self.domain, 0.0) / total

    def to_dict(self) -> Dict:
        return {
            "domain": self.domain.value,
            "from_hint": self.from_hint,
            "confidence": round(self.confidence, 4),
            "scores": {domain.value: score for domain, score in self.scores.items() if score > 0},
        }


class DomainClassifier:
    """
    Resolve a prompt to exactly one Domain.

    A valid hint always wins. Otherwise each domain except ``general`` is
    scored as the sum of its keyword weights over every match; the strictly
    highest score wins, ties go to the earlier domain, and anything below
    ``min_score`` falls back to ``general``.
    """

    def __init__(self, rule_tables: RuleTables, min_score: float = DEFAULT_MIN_SCORE):
        self.rule_tables = rule_tables
        self.min_score = min_score

    def classify(self, text: str, hint: Optional[object] = None) -> Domain:
        return self.classify_detailed(text, hint).domain

    def classify_detailed(self, text: str, hint: Optional[object] = None) -> ClassificationResult:
        hinted = Domain.parse(hint) if hint is not None else None
        if hinted is not None:
            logger.debug(f"Domain hint accepted: {hinted.value}")
            return ClassificationResult(domain=hinted, scores={}, from_hint=True)
        if hint is not None:
            logger.debug(f"Ignoring unrecognized domain hint: {hint!r}")

        text = text if isinstance(text, str) else ""
        scores: Dict[Domain, float] = {}
        best: Optional[Domain] = None
        best_score = 0.0
        # Iteration follows declaration order, so only a strictly higher
        # score can displace an earlier domain
        for domain in self.rule_tables:
            if domain is Domain.GENERAL:
                continue
            relevance = self.rule_tables[domain].relevance(text) if text else 0.0
            scores[domain] = relevance
            if relevance > best_score:
                best, best_score = domain, relevance

        if best is None or best_score < self.min_score:
            best = Domain.GENERAL

        logger.debug(f"Classified as {best.value} (score={best_score:.2f})")
        return ClassificationResult(domain=best, scores=scores)
