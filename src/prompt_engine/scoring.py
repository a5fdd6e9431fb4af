"""
Quality scoring.

Each dimension is a named pure function of the refined text (plus the domain
data it needs), so it can be tested on its own. ``QualityScorer`` combines
them into a QualityScore with fixed weights.

Dimensions:
- clarity: sentence length, ambiguous pronouns, vague terms and a leading
  action verb
- specificity: concrete tokens (numbers, named entities, domain vocabulary,
  constraint words) over all content tokens
- structure: required sections of the inferred template, present and in
  order, plus a small share for overall length
- completeness: fraction of the generic and domain checklist satisfied
"""

import logging
import re
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from . import lexicon
from .domains import Domain, Template
from .lexicon import (
    ACTION_VERBS,
    AMBIGUOUS_PRONOUNS,
    CONSTRAINT_WORDS,
    VAGUE_TERMS,
    section_positions,
    split_sentences,
    strip_labels,
    tokenize,
    words,
)
from .models import QualityScore, clamp
from .rules import RuleTables
from .rules.base import ChecklistField

logger = logging.getLogger(__name__)

LONG_SENTENCE_WORDS = 25
LONG_SENTENCE_PENALTY = 0.3
MEAN_LENGTH_THRESHOLD = 20
MEAN_LENGTH_PENALTY_PER_WORD = 0.02
MEAN_LENGTH_PENALTY_CAP = 0.2
PRONOUN_PENALTY = 0.1
PRONOUN_PENALTY_CAP = 0.3
VAGUE_PENALTY = 0.05
VAGUE_PENALTY_CAP = 0.3
MISSING_ACTION_PENALTY = 0.3

SECTION_SHARE = 0.84
LENGTH_SHARE = 0.16

REQUIRED_SECTIONS = {
    Template.BASIC: (lexicon.ROLE, lexicon.TASK, lexicon.REQUIREMENTS, lexicon.OUTPUT),
    Template.CHAIN_OF_THOUGHT: (
        lexicon.ROLE, lexicon.TASK, lexicon.REQUIREMENTS, lexicon.REASONING_STEPS, lexicon.OUTPUT,
    ),
    Template.FEW_SHOT: (
        lexicon.ROLE, lexicon.TASK, lexicon.REQUIREMENTS, lexicon.EXAMPLES, lexicon.OUTPUT,
    ),
    Template.ROLE_BASED: (
        lexicon.PERSONA, lexicon.ROLE, lexicon.TASK, lexicon.REQUIREMENTS, lexicon.OUTPUT,
    ),
}

TASK_LINE = re.compile(r"^Task:[ \t]*(?P<body>.*)$", re.MULTILINE)


def _content_sentences(text: str) -> List[str]:
    return [s for s in split_sentences(strip_labels(text)) if tokenize(s)]


def has_primary_action(text: str) -> bool:
    """True when the Task section (or the text itself) opens with an action verb."""
    task = TASK_LINE.search(text)
    body = task.group("body") if task else strip_labels(text)
    tokens = words(body)
    return bool(tokens) and tokens[0] in ACTION_VERBS


def clarity_score(text: str) -> float:
    """1.0 minus penalties for long sentences, pronouns, vague terms and a missing verb."""
    sentences = _content_sentences(text)
    if not sentences:
        return 0.0

    lengths = [len(tokenize(s)) for s in sentences]
    score = 1.0

    long_sentences = sum(1 for n in lengths if n > LONG_SENTENCE_WORDS)
    score -= LONG_SENTENCE_PENALTY * long_sentences / len(lengths)

    mean = sum(lengths) / len(lengths)
    if mean > MEAN_LENGTH_THRESHOLD:
        score -= min(MEAN_LENGTH_PENALTY_CAP, (mean - MEAN_LENGTH_THRESHOLD) * MEAN_LENGTH_PENALTY_PER_WORD)

    tokens = words(strip_labels(text))
    pronouns = sum(1 for token in tokens if token in AMBIGUOUS_PRONOUNS)
    score -= min(PRONOUN_PENALTY_CAP, PRONOUN_PENALTY * pronouns)

    vague = sum(1 for token in tokens if token in VAGUE_TERMS)
    score -= min(VAGUE_PENALTY_CAP, VAGUE_PENALTY * vague)

    if not has_primary_action(text):
        score -= MISSING_ACTION_PENALTY

    return clamp(score)


def is_concrete(token: str, sentence_initial: bool, vocabulary: FrozenSet[str]) -> bool:
    """Numbers, domain terms, constraint words and mid-sentence capitalized names."""
    lower = token.lower()
    if any(ch.isdigit() for ch in token):
        return True
    if lower in vocabulary or (lower.endswith("s") and lower[:-1] in vocabulary):
        return True
    if lower in CONSTRAINT_WORDS:
        return True
    return not sentence_initial and token[0].isupper() and token != "I"


def specificity_score(text: str, vocabulary: Iterable[str]) -> float:
    """Concrete tokens over all content tokens; section labels are not counted."""
    vocabulary = frozenset(vocabulary)
    total = 0
    concrete = 0
    for sentence in _content_sentences(text):
        for i, token in enumerate(tokenize(sentence)):
            total += 1
            if is_concrete(token, i == 0, vocabulary):
                concrete += 1
    if total == 0:
        return 0.0
    return clamp(concrete / total)


def infer_template(text: str) -> Template:
    """Recover the template from the section labels present in the text."""
    positions = section_positions(text)
    if lexicon.PERSONA in positions:
        return Template.ROLE_BASED
    if lexicon.REASONING_STEPS in positions:
        return Template.CHAIN_OF_THOUGHT
    if lexicon.EXAMPLES in positions:
        return Template.FEW_SHOT
    return Template.BASIC


def length_score(text: str) -> float:
    length = len(text.strip())
    if 100 <= length <= 300:
        return 1.0
    if 50 <= length <= 500:
        return 0.8
    if 20 <= length <= 800:
        return 0.6
    return 0.4


def ordered_sections(text: str, template: Template) -> List[str]:
    """Required sections of the template found in increasing position order."""
    positions = section_positions(text)
    found = []
    last = -1
    for label in REQUIRED_SECTIONS[template]:
        position = positions.get(label)
        if position is not None and position > last:
            found.append(label)
            last = position
    return found


def structure_score(text: str) -> float:
    """0.84 shared equally by the template's sections, 0.16 for length."""
    if not text.strip():
        return 0.0
    template = infer_template(text)
    required = REQUIRED_SECTIONS[template]
    ratio = len(ordered_sections(text, template)) / len(required)
    return clamp(SECTION_SHARE * ratio + LENGTH_SHARE * length_score(text))


def completeness_score(text: str, checklist: Iterable[ChecklistField]) -> float:
    """Fraction of checklist fields satisfied by the text."""
    checklist = tuple(checklist)
    if not checklist or not text.strip():
        return 0.0
    satisfied = sum(1 for item in checklist if item.satisfied_by(text))
    return satisfied / len(checklist)


class QualityScorer:
    """Combines the four dimension functions using a domain's rule table."""

    def __init__(self, rule_tables: RuleTables):
        self.rule_tables = rule_tables

    def checklist(self, domain: Domain):
        return self.rule_tables.generic_checklist + self.rule_tables[domain].checklist

    def score(self, raw: Optional[str], refined: str, domain: Domain) -> QualityScore:
        """
        Score refined text for a domain.

        ``raw`` is accepted for symmetry with score_breakdown and does not
        influence the result.
        """
        refined = refined if isinstance(refined, str) else ""
        rules = self.rule_tables[domain]
        score = QualityScore.from_components(
            clarity=clarity_score(refined),
            specificity=specificity_score(refined, rules.vocabulary),
            structure=structure_score(refined),
            completeness=completeness_score(refined, self.checklist(domain)),
        )
        logger.debug(f"Scored {domain.value} prompt: overall={score.overall:.4f}")
        return score

    def score_breakdown(self, raw: Optional[str], refined: str, domain: Domain) -> Dict[str, Any]:
        """The score plus the named factors behind each dimension."""
        raw = raw if isinstance(raw, str) else ""
        refined = refined if isinstance(refined, str) else ""
        rules = self.rule_tables[domain]
        score = self.score(raw, refined, domain)
        baseline = self.score(None, raw, domain)

        tokens = words(strip_labels(refined))
        lengths = [len(tokenize(s)) for s in _content_sentences(refined)]
        template = infer_template(refined)
        checklist = self.checklist(domain)

        return {
            "score": score.to_dict(),
            "raw_score": baseline.to_dict(),
            "improvement": round(score.overall - baseline.overall, 4),
            "clarity": {
                "sentences": len(lengths),
                "long_sentences": sum(1 for n in lengths if n > LONG_SENTENCE_WORDS),
                "mean_sentence_length": round(sum(lengths) / len(lengths), 2) if lengths else 0.0,
                "ambiguous_pronouns": sorted({t for t in tokens if t in AMBIGUOUS_PRONOUNS}),
                "vague_terms": sorted({t for t in tokens if t in VAGUE_TERMS}),
                "primary_action": has_primary_action(refined),
            },
            "specificity": {
                "tokens": len(tokens),
                "vocabulary_terms": sorted(
                    {t for t in tokens if t in rules.vocabulary or (t.endswith("s") and t[:-1] in rules.vocabulary)}
                ),
            },
            "structure": {
                "template": template.value,
                "required_sections": list(REQUIRED_SECTIONS[template]),
                "ordered_sections": ordered_sections(refined, template),
                "length": len(refined.strip()),
                "length_score": length_score(refined) if refined.strip() else 0.0,
            },
            "completeness": {
                "satisfied": [item.name for item in checklist if item.satisfied_by(refined)],
                "missing": [item.name for item in checklist if not item.satisfied_by(refined)],
            },
        }
