"""
Domain rule tables.

``RuleTables`` is the immutable, validated mapping from every Domain to its
DomainRules. Build it once at startup (``RuleTables.default()`` or
``prompt_engine.config.load_rule_tables``) and inject it into each component.
"""

import logging
import re
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple

from ..domains import Domain, Template
from ..exceptions import ConfigurationError
from .base import (
    AntiPattern,
    ChecklistField,
    DomainRules,
    EnhancementRule,
    ExamplePair,
    KeywordPattern,
    OverlaySection,
    Replacement,
    compile_pattern,
)
from .branding import BRANDING_RULES
from .cinema import CINEMA_RULES
from .devops import DEVOPS_RULES
from .extended import EXTENDED_RULES
from .general import (
    CANONICAL_CASING,
    GENERAL_RULES,
    GENERIC_ANTI_PATTERNS,
    GENERIC_CHECKLIST,
    GENERIC_REPLACEMENTS,
)
from .saas import SAAS_RULES
from .sql import SQL_RULES

logger = logging.getLogger(__name__)

BUILTIN_SOURCE = "built-in rule tables"


def builtin_rules() -> Tuple[DomainRules, ...]:
    """Every shipped DomainRules, in no particular order."""
    return (
        SQL_RULES,
        BRANDING_RULES,
        CINEMA_RULES,
        SAAS_RULES,
        DEVOPS_RULES,
        GENERAL_RULES,
    ) + EXTENDED_RULES


class RuleTables(Mapping):
    """
    Read-only ``Domain -> DomainRules`` mapping plus the generic rule lists.

    Construction validates that every Domain has a table and that every table
    carries the data the components rely on. Any gap raises
    ConfigurationError, so a broken table fails at startup rather than per
    request.
    """

    def __init__(
        self,
        tables: Iterable[DomainRules],
        generic_checklist: Tuple[ChecklistField, ...] = GENERIC_CHECKLIST,
        generic_anti_patterns: Tuple[AntiPattern, ...] = GENERIC_ANTI_PATTERNS,
        generic_replacements: Tuple[Replacement, ...] = GENERIC_REPLACEMENTS,
        source: str = BUILTIN_SOURCE,
    ):
        self.source = source
        by_domain = {}
        for rules in tables:
            if rules.domain in by_domain:
                raise ConfigurationError(source, f"duplicate table for domain '{rules.domain.value}'")
            by_domain[rules.domain] = rules

        missing = [domain.value for domain in Domain if domain not in by_domain]
        if missing:
            raise ConfigurationError(source, f"no rule table for domain(s): {', '.join(missing)}")

        for rules in by_domain.values():
            self._validate(rules)
        for item in generic_checklist + generic_anti_patterns:
            self._check_pattern(Domain.GENERAL, item.pattern)
        for replacement in generic_replacements:
            self._check_pattern(Domain.GENERAL, replacement.pattern, word_boundary=True)

        self._tables = MappingProxyType(by_domain)
        self.generic_checklist = tuple(generic_checklist)
        self.generic_anti_patterns = tuple(generic_anti_patterns)
        self.generic_replacements = tuple(generic_replacements)
        self.canonical_casing = CANONICAL_CASING

        logger.debug(f"Loaded rule tables for {len(by_domain)} domains from {source}")

    @classmethod
    def default(cls) -> "RuleTables":
        """The shipped rule tables."""
        return cls(builtin_rules())

    def _validate(self, rules: DomainRules) -> None:
        name = rules.domain.value
        for field_name in ("persona", "persona_title", "output_format", "preferred_verb"):
            if not getattr(rules, field_name).strip():
                raise ConfigurationError(self.source, f"domain '{name}' has an empty {field_name}")
        if not isinstance(rules.default_template, Template):
            raise ConfigurationError(self.source, f"domain '{name}' has no default template")

        if rules.domain is not Domain.GENERAL:
            if not rules.keywords:
                raise ConfigurationError(self.source, f"domain '{name}' has no classifier keywords")
            if not rules.checklist:
                raise ConfigurationError(self.source, f"domain '{name}' has no completeness checklist")

        for keyword in rules.keywords:
            if keyword.weight <= 0:
                raise ConfigurationError(self.source, f"domain '{name}' keyword '{keyword.pattern}' has weight <= 0")
            self._check_pattern(rules.domain, keyword.pattern, word_boundary=True)
        for replacement in rules.replacements:
            self._check_pattern(rules.domain, replacement.pattern, word_boundary=True)
        for enhancement in rules.enhancements:
            self._check_pattern(rules.domain, enhancement.trigger, word_boundary=True)
        for item in rules.checklist + rules.anti_patterns:
            self._check_pattern(rules.domain, item.pattern)
        for anti_pattern in rules.anti_patterns:
            if anti_pattern.mode not in ("present", "absent"):
                raise ConfigurationError(
                    self.source, f"domain '{name}' anti-pattern {anti_pattern.code} has mode '{anti_pattern.mode}'"
                )

    def _check_pattern(self, domain: Domain, pattern: str, word_boundary: bool = False) -> None:
        try:
            compile_pattern(pattern, word_boundary)
        except re.error as e:
            raise ConfigurationError(self.source, f"domain '{domain.value}' pattern {pattern!r}: {e}")

    def __getitem__(self, domain: Domain) -> DomainRules:
        return self._tables[domain]

    def __iter__(self) -> Iterator[Domain]:
        # Declaration order, so iteration doubles as the tie-break order
        return iter(domain for domain in Domain if domain in self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def with_overrides(self, overrides: Mapping[Domain, DomainRules], source: str) -> "RuleTables":
        """Return new tables with some domains replaced; self is unchanged."""
        merged = dict(self._tables)
        merged.update(overrides)
        return RuleTables(
            merged.values(),
            generic_checklist=self.generic_checklist,
            generic_anti_patterns=self.generic_anti_patterns,
            generic_replacements=self.generic_replacements,
            source=source,
        )


__all__ = [
    "AntiPattern",
    "ChecklistField",
    "DomainRules",
    "EnhancementRule",
    "ExamplePair",
    "KeywordPattern",
    "OverlaySection",
    "Replacement",
    "RuleTables",
    "builtin_rules",
]
