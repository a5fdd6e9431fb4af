"""
Rule-based prompt refinement.

The Refiner turns raw text into a sectioned instruction:

    Persona:            (role-based only)
    Role:
    Task:
    Context:            (leftover raw sentences)
    Requirements:       (itemized from the raw text and domain triggers)
    <domain overlay sections>
    Constraints:        (Enhancement.CONSTRAINTS)
    Success criteria:   (Enhancement.SUCCESS_CRITERIA)
    Reasoning steps:    (chain-of-thought only)
    Examples:           (few-shot only)
    Output:

Output is a pure function of (raw, domain, template, enhancements) and the
rule tables.
"""

import logging
import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from . import lexicon
from .domains import Domain, Template, Tone
from .lexicon import (
    ACTION_VERBS,
    FILLER_PATTERN,
    POLITE_PREFIX_PATTERN,
    QUESTION_PREFIX_PATTERN,
    QUESTION_START,
    REQUIREMENT_CLAUSE_PATTERN,
    REQUIREMENT_SENTENCE_PATTERN,
    ROLE_SENTENCE_PATTERN,
    WEAK_LEADING_VERBS,
    split_sentences,
)
from .models import RawPrompt
from .rules import DomainRules, RuleTables
from .rules.base import compile_pattern
from .rules.general import GENERAL_RULES, GENERIC_REASONING_STEPS

logger = logging.getLogger(__name__)


class Enhancement(str, Enum):
    """Feedback the Improver passes back into the Refiner, in widening order."""

    CONSTRAINTS = "constraints"
    SUCCESS_CRITERIA = "success_criteria"
    DEFAULT_REQUIREMENTS = "default_requirements"
    EXPLICIT_REFERENCES = "explicit_references"


ENHANCEMENT_ORDER: Tuple[Enhancement, ...] = tuple(Enhancement)

# Vague references rewritten when Enhancement.EXPLICIT_REFERENCES is active
EXPLICIT_REFERENCES = (
    (r"its", "the deliverable's"),
    (r"it", "the deliverable"),
    (r"they|them", "the items"),
    (r"stuff|things|thing", "the details"),
    (r"something|anything", "a solution"),
    (r"whatever", "the chosen option"),
    (r"big", "large-scale"),
    (r"small", "compact"),
    (r"fast", "low-latency"),
    (r"slow", "high-latency"),
    (r"easy", "straightforward"),
    (r"hard", "demanding"),
    (r"bad", "low-quality"),
    (r"great", "outstanding"),
    (r"etc\.?", ""),
)

WHITESPACE = re.compile(r"\s+")
WANT_PREFIX = re.compile(
    r"^(?:i|we)\s+(?:want|need|would like|'d like)(?:\s+you)?(?:\s+to)?\s+",
    re.IGNORECASE,
)
ROLE_TASK_SPLIT = re.compile(
    r"^(?P<role>.+?)(?:,|\s+and)\s+(?P<rest>(?:" + "|".join(sorted(ACTION_VERBS)) + r")\b.*)$",
    re.IGNORECASE,
)
ITEM_SPLIT = re.compile(r"\s*,\s*(?:and\s+|or\s+)?|\s+and\s+", re.IGNORECASE)
PERSONA_PREAMBLE = "Adopt the perspective of {title} and keep that voice for the whole answer."
EMPTY_TASK = "Identify the missing task details and request them before answering."
MAX_EXAMPLES = 3


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _lower_first(text: str) -> str:
    """Lowercase a leading ordinary word, leaving acronyms such as SQL alone."""
    first = text.split(" ", 1)[0]
    if len(first) > 1 and first[0].isupper() and first[1:].islower():
        return text[:1].lower() + text[1:]
    return text


def _sentence(text: str) -> str:
    text = _capitalize(text.strip())
    if text and text[-1] not in ".!?":
        text += "."
    return text


def _item(text: str) -> str:
    return _capitalize(text.strip().rstrip(".;,"))


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        key = item.lower()
        if item and key not in seen:
            seen.add(key)
            result.append(item)
    return result


class PromptRefiner:
    """Deterministic, rule-table-driven refinement."""

    def __init__(self, rule_tables: RuleTables):
        self.rule_tables = rule_tables
        self._casing = tuple(
            (re.compile(rf"(?<![\w/]){re.escape(lower)}(?![\w/])", re.IGNORECASE), canonical)
            for lower, canonical in rule_tables.canonical_casing
        )

    def refine(
        self,
        raw: RawPrompt,
        domain: Domain,
        template: Template,
        enhancements: Iterable[Enhancement] = (),
    ) -> str:
        """
        Refine a raw prompt.

        Args:
            raw: RawPrompt or plain string
            domain: Resolved domain
            template: Template to shape the output with
            enhancements: Improver feedback; empty for the baseline refinement

        Returns:
            The refined prompt text
        """
        raw = RawPrompt.coerce(raw)
        rules = self.rule_tables[domain]
        enhancements = frozenset(enhancements)

        text = self.normalize(raw.text, rules, Enhancement.EXPLICIT_REFERENCES in enhancements)
        role, task, context, requirements = self._decompose(text, rules)

        requirements.extend(
            rule.item for rule in rules.enhancements if rule.matches(text)
        )
        if Enhancement.DEFAULT_REQUIREMENTS in enhancements:
            requirements.extend(rules.default_requirements)
        requirements = _dedupe(_item(r) for r in requirements)

        sections = []
        if template is Template.ROLE_BASED:
            sections.append(f"{lexicon.PERSONA}: {PERSONA_PREAMBLE.format(title=rules.persona_title)}")
        sections.append(f"{lexicon.ROLE}: {role or rules.persona}")
        sections.append(f"{lexicon.TASK}: {task or EMPTY_TASK}")
        if context:
            sections.append(f"{lexicon.CONTEXT}: {' '.join(context)}")
        if requirements:
            sections.append(self._list(lexicon.REQUIREMENTS, requirements))
        for overlay in rules.overlay_sections:
            sections.append(f"{overlay.title}: {overlay.content}")
        if Enhancement.CONSTRAINTS in enhancements and rules.constraints:
            sections.append(self._list(lexicon.CONSTRAINTS, rules.constraints))
        if Enhancement.SUCCESS_CRITERIA in enhancements and rules.success_criteria:
            sections.append(self._list(lexicon.SUCCESS_CRITERIA, rules.success_criteria))
        if template is Template.CHAIN_OF_THOUGHT:
            steps = rules.reasoning_steps or GENERIC_REASONING_STEPS
            numbered = "\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1))
            sections.append(f"{lexicon.REASONING_STEPS}:\n{numbered}")
        if template is Template.FEW_SHOT:
            sections.append(self._examples(rules))
        sections.append(f"{lexicon.OUTPUT}: {self._output(rules, raw.tone)}")

        refined = "\n\n".join(sections)
        logger.debug(
            f"Refined prompt for {domain.value}/{template.value} "
            f"({len(enhancements)} enhancements, {len(refined)} chars)"
        )
        return refined

    def system_prompt(self, domain: Domain, tone: Optional[Tone] = None) -> str:
        """
        System message for a model that will answer prompts in this domain.

        Built only from the domain's rule table, so it is identical for every
        prompt of the domain:

            <persona>

            Focus: <description>.

            Constraints:
            - <constraint>

            Output: <output format> [Use a <tone> tone.]
        """
        rules = self.rule_tables[domain]
        description = rules.description.strip()
        if description and description[-1] not in ".!?":
            description += "."

        sections = [rules.persona]
        if description:
            sections.append(f"Focus: {description}")
        if rules.constraints:
            sections.append(self._list(lexicon.CONSTRAINTS, rules.constraints))
        sections.append(f"{lexicon.OUTPUT}: {self._output(rules, tone)}")
        return "\n\n".join(sections)

    def normalize(self, text: str, rules: DomainRules, explicit_references: bool = False) -> str:
        """Strip politeness and filler, then apply domain and generic replacements and casing."""
        text = WHITESPACE.sub(" ", text or "").strip()

        was_request = False
        while True:
            match = POLITE_PREFIX_PATTERN.match(text)
            if not match:
                break
            if QUESTION_PREFIX_PATTERN.match(text):
                was_request = True
            text = text[match.end():].lstrip(" ,")
        if was_request and text.endswith("?"):
            text = text[:-1] + "."

        text = FILLER_PATTERN.sub("", text)
        for replacement in rules.replacements + self.rule_tables.generic_replacements:
            text = replacement.apply(text)
        if explicit_references:
            for pattern, replacement in EXPLICIT_REFERENCES:
                text = compile_pattern(pattern, True).sub(replacement, text)
        for pattern, canonical in self._casing:
            text = pattern.sub(canonical, text)

        return WHITESPACE.sub(" ", text).strip(" ,")

    def _decompose(self, text: str, rules: DomainRules):
        """Split normalized text into role, task, context and requirement items."""
        role: Optional[str] = None
        remaining: List[str] = []
        for sentence in split_sentences(text):
            if role is None and ROLE_SENTENCE_PATTERN.match(sentence):
                role, rest = self._split_role(sentence)
                if rest:
                    remaining.append(rest)
                continue
            remaining.append(sentence)

        if not remaining:
            return role, "", [], []

        requirements: List[str] = []
        task, clause_items = self._split_clause(remaining[0])
        requirements.extend(clause_items)
        task = self._imperative(task, rules)

        context: List[str] = []
        for sentence in remaining[1:]:
            if REQUIREMENT_SENTENCE_PATTERN.search(sentence):
                requirements.append(sentence)
            else:
                context.append(_sentence(sentence))
        return role, task, context, requirements

    @staticmethod
    def _split_role(sentence: str) -> Tuple[str, Optional[str]]:
        """'As a data analyst, summarize X' -> ('Act as a data analyst.', 'summarize X')."""
        split = ROLE_TASK_SPLIT.match(sentence)
        if split:
            role = split.group("role").strip().rstrip(",")
            if role.lower().startswith("as "):
                role = f"Act {_lower_first(role)}"
            return _sentence(role), split.group("rest")
        if sentence.lower().startswith("as "):
            head, sep, rest = sentence.partition(",")
            role = _sentence(f"Act {_lower_first(head.strip())}")
            return role, (rest.strip() or None) if sep else None
        return _sentence(sentence), None

    @staticmethod
    def _split_clause(task: str) -> Tuple[str, List[str]]:
        """Pull 'with A, B and C' out of the task as requirement items."""
        body = task.rstrip(".!")
        match = REQUIREMENT_CLAUSE_PATTERN.search(body)
        if not match:
            return task, []
        items = [part.strip() for part in ITEM_SPLIT.split(match.group("items")) if part.strip()]
        # A lone "with X" usually qualifies the task rather than listing requirements
        if match.group("marker").lower() == "with" and len(items) < 2:
            return task, []
        return body[:match.start()], items

    @staticmethod
    def _imperative(task: str, rules: DomainRules) -> str:
        task = task.strip()
        want = WANT_PREFIX.match(task)
        if want:
            task = task[want.end():]
        if not task:
            return ""

        first = task.split(" ", 1)[0].lower().strip(",")
        if task.endswith("?") or first in QUESTION_START:
            question = _capitalize(task.rstrip("?.")) + "?"
            return f"Answer the following question: {question}"

        lowered = task.lower()
        for phrase in sorted(WEAK_LEADING_VERBS, key=len, reverse=True):
            if lowered.startswith(phrase + " "):
                verb = WEAK_LEADING_VERBS[phrase] or rules.preferred_verb
                task = f"{verb} {task[len(phrase) + 1:].lstrip()}"
                break
        else:
            if first not in ACTION_VERBS:
                task = f"{rules.preferred_verb} {_lower_first(task)}"

        return _sentence(task.rstrip("!"))

    @staticmethod
    def _list(label: str, items: Iterable[str]) -> str:
        lines = "\n".join(f"- {_item(item)}" for item in items)
        return f"{label}:\n{lines}"

    @staticmethod
    def _examples(rules: DomainRules) -> str:
        pairs = (rules.examples or GENERAL_RULES.examples)[:MAX_EXAMPLES]
        lines = []
        for i, pair in enumerate(pairs, 1):
            lines.append(f"{i}. Input: {pair.input}")
            lines.append(f"   Output: {pair.output}")
        return f"{lexicon.EXAMPLES}:\n" + "\n".join(lines)

    @staticmethod
    def _output(rules: DomainRules, tone: Optional[Tone]) -> str:
        output = rules.output_format
        tone = Tone.parse(tone) if tone is not None else None
        if tone is not None:
            output = f"{output} Use a {tone.value} tone."
        return output
