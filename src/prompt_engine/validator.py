"""
Anti-pattern validation.

Findings are independent of the score: a prompt can score well and still
carry findings, and the other way round.
"""

import logging
from typing import List

from .domains import Domain
from .lexicon import (
    AMBIGUOUS_PRONOUNS,
    CONTRADICTORY_MODIFIERS,
    VAGUE_TERM_ALTERNATIVES,
    VAGUE_TERMS,
    strip_labels,
    words,
)
from .models import Severity, Suggestion, ValidationFinding
from .rules import RuleTables
from .rules.base import AntiPattern, compile_pattern

logger = logging.getLogger(__name__)

MIN_LENGTH = 10
MAX_LENGTH = 4000


def _finding(anti_pattern: AntiPattern) -> ValidationFinding:
    return ValidationFinding(
        severity=anti_pattern.severity,
        message=anti_pattern.message,
        category=anti_pattern.category,
        code=anti_pattern.code,
    )


class PromptValidator:
    """
    Run the generic checks, then the domain's anti-patterns.

    Results are sorted by descending severity; ties keep declaration order.
    """

    def __init__(self, rule_tables: RuleTables):
        self.rule_tables = rule_tables

    def validate(self, refined: str, domain: Domain) -> List[ValidationFinding]:
        text = refined if isinstance(refined, str) else ""
        if not text.strip():
            return [
                ValidationFinding(
                    severity=Severity.CRITICAL,
                    message="Prompt is empty.",
                    category="empty",
                    code="EMPTY_PROMPT",
                )
            ]

        findings: List[ValidationFinding] = []
        length = len(text.strip())
        if length < MIN_LENGTH:
            findings.append(ValidationFinding(
                severity=Severity.HIGH,
                message=f"Prompt is too short ({length} characters) to describe a task.",
                category="length",
                code="TOO_SHORT",
            ))

        findings.extend(
            _finding(anti_pattern)
            for anti_pattern in self.rule_tables.generic_anti_patterns
            if anti_pattern.triggered_by(text)
        )

        tokens = words(strip_labels(text))
        present = set(tokens)
        for first, second in CONTRADICTORY_MODIFIERS:
            if first in present and second in present:
                findings.append(ValidationFinding(
                    severity=Severity.HIGH,
                    message=f"Contradictory modifiers: '{first}' and '{second}'.",
                    category="contradiction",
                    code="CONTRADICTORY_MODIFIERS",
                ))

        vague = sorted({token for token in tokens if token in VAGUE_TERMS})
        if vague:
            findings.append(ValidationFinding(
                severity=Severity.LOW,
                message=f"Vague terms: {', '.join(vague)}.",
                category="vagueness",
                code="VAGUE_LANGUAGE",
            ))

        pronouns = sorted({token for token in tokens if token in AMBIGUOUS_PRONOUNS})
        if pronouns:
            findings.append(ValidationFinding(
                severity=Severity.LOW,
                message=f"Ambiguous references: {', '.join(pronouns)}.",
                category="ambiguous-reference",
                code="AMBIGUOUS_REFERENCE",
            ))

        if length > MAX_LENGTH:
            findings.append(ValidationFinding(
                severity=Severity.MEDIUM,
                message=f"Prompt is {length} characters; keep prompts under {MAX_LENGTH}.",
                category="length",
                code="TOO_LONG",
            ))

        findings.extend(
            _finding(anti_pattern)
            for anti_pattern in self.rule_tables[domain].anti_patterns
            if anti_pattern.triggered_by(text)
        )

        # sorted() is stable, so equal severities keep declaration order
        findings = sorted(findings, key=lambda finding: -finding.severity.rank)
        logger.debug(f"Validation for {domain.value}: {len(findings)} finding(s)")
        return findings

    def suggest(self, text: str, domain: Domain) -> List[Suggestion]:
        """
        Concrete before/after rewrites for text.

        Replacements run in the order the Refiner applies them (domain first,
        then generic), each against the output of the previous one, so every
        pair is a rewrite the Refiner makes. Vague terms that no replacement
        covers follow in order of first appearance.
        """
        working = text if isinstance(text, str) else ""
        suggestions: List[Suggestion] = []
        seen = set()

        for replacement in self.rule_tables[domain].replacements + self.rule_tables.generic_replacements:
            match = compile_pattern(replacement.pattern, True).search(working)
            if match is None:
                continue
            before = match.group(0)
            if before.lower() not in seen:
                seen.add(before.lower())
                suggestions.append(Suggestion(
                    kind="replacement",
                    message=replacement.description or f"Replace '{before}'",
                    before=before,
                    after=replacement.apply(before),
                ))
            working = replacement.apply(working)

        for token in words(strip_labels(working)):
            if token in VAGUE_TERMS and token not in seen:
                seen.add(token)
                suggestions.append(Suggestion(
                    kind="vague_term",
                    message=f"Replace the vague term '{token}' with a measurable requirement",
                    before=token,
                    after=VAGUE_TERM_ALTERNATIVES[token],
                ))

        return suggestions
