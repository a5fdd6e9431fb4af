"""
Rule table building blocks.

Everything here is frozen data; the only behaviour is pattern compilation,
which is cached so concurrent requests share compiled patterns safely.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import FrozenSet, Pattern, Tuple

from ..domains import Domain, Template
from ..models import Severity


@lru_cache(maxsize=2048)
def compile_pattern(pattern: str, word_boundary: bool = False) -> Pattern:
    """Compile a case-insensitive, multiline rule pattern."""
    if word_boundary:
        pattern = rf"\b(?:{pattern})\b"
    return re.compile(pattern, re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class KeywordPattern:
    """A weighted classifier keyword (regex fragment, matched on word boundaries)."""

    pattern: str
    weight: float = 1.0

    def count(self, text: str) -> int:
        return len(compile_pattern(self.pattern, True).findall(text))


@dataclass(frozen=True)
class Replacement:
    """Vague or sloppy wording and its professional replacement."""

    pattern: str
    replacement: str
    description: str = ""

    def apply(self, text: str) -> str:
        return compile_pattern(self.pattern, True).sub(self.replacement, text)


@dataclass(frozen=True)
class OverlaySection:
    """A section the Refiner appends for a domain."""

    title: str
    content: str


@dataclass(frozen=True)
class EnhancementRule:
    """Adds a requirement item when its trigger matches the task text."""

    trigger: str
    item: str

    def matches(self, text: str) -> bool:
        return compile_pattern(self.trigger, True).search(text) is not None


@dataclass(frozen=True)
class ChecklistField:
    """A completeness field; satisfied when its pattern is found."""

    name: str
    pattern: str
    description: str = ""

    def satisfied_by(self, text: str) -> bool:
        return compile_pattern(self.pattern).search(text) is not None


@dataclass(frozen=True)
class AntiPattern:
    """
    A validator check expressed as data.

    mode "present" flags text where the pattern is found, mode "absent" flags
    text where it is missing.
    """

    code: str
    category: str
    severity: Severity
    message: str
    pattern: str
    mode: str = "present"

    def triggered_by(self, text: str) -> bool:
        found = compile_pattern(self.pattern).search(text) is not None
        return found if self.mode == "present" else not found


@dataclass(frozen=True)
class ExamplePair:
    """An input/output pair used by the few-shot template."""

    input: str
    output: str


@dataclass(frozen=True)
class DomainRules:
    """Static configuration for one domain."""

    domain: Domain
    description: str
    persona: str
    persona_title: str
    default_template: Template
    output_format: str
    preferred_verb: str = "Create"
    keywords: Tuple[KeywordPattern, ...] = ()
    vocabulary: FrozenSet[str] = field(default_factory=frozenset)
    replacements: Tuple[Replacement, ...] = ()
    overlay_sections: Tuple[OverlaySection, ...] = ()
    enhancements: Tuple[EnhancementRule, ...] = ()
    checklist: Tuple[ChecklistField, ...] = ()
    constraints: Tuple[str, ...] = ()
    success_criteria: Tuple[str, ...] = ()
    default_requirements: Tuple[str, ...] = ()
    reasoning_steps: Tuple[str, ...] = ()
    examples: Tuple[ExamplePair, ...] = ()
    anti_patterns: Tuple[AntiPattern, ...] = ()

    def relevance(self, text: str) -> float:
        """Sum of keyword weights over every match in text."""
        return sum(keyword.weight * keyword.count(text) for keyword in self.keywords)


def vocab(*terms: str) -> FrozenSet[str]:
    """Build a lowercase vocabulary set."""
    return frozenset(term.lower() for term in terms)


def keywords(*pairs: Tuple[str, float]) -> Tuple[KeywordPattern, ...]:
    return tuple(KeywordPattern(pattern, weight) for pattern, weight in pairs)
