"""
PromptEngine facade.

Wires the components to one RuleTables instance and one EngineSettings and
exposes the operations the tool layer, the CLI and the API call.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .classifier import ClassificationResult, DomainClassifier
from .comparator import VariantComparator
from .config.loader import load_rule_tables
from .config.settings import EngineSettings
from .domains import Domain, Template, Tone
from .exceptions import InvalidInputError
from .improver import IterationCallback, IterativeImprover
from .models import ComparisonResult, QualityScore, RawPrompt, RefinedPrompt, Suggestion, ValidationFinding
from .refiner import Enhancement, PromptRefiner
from .rules import RuleTables
from .scoring import QualityScorer
from .templates import TemplateSelector
from .validator import PromptValidator

logger = logging.getLogger(__name__)


class PromptEngine:
    """
    Domain-aware prompt refinement and scoring.

    All operations are synchronous and free of shared mutable state, so one
    engine can serve any number of threads.
    """

    def __init__(
        self,
        rule_tables: Optional[RuleTables] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self.settings = settings or EngineSettings()
        if rule_tables is None:
            rule_tables = load_rule_tables(self.settings.RULES_PATH)
        self.rule_tables = rule_tables

        self.classifier = DomainClassifier(rule_tables, min_score=self.settings.MIN_CLASSIFICATION_SCORE)
        self.selector = TemplateSelector(rule_tables)
        self.refiner = PromptRefiner(rule_tables)
        self.scorer = QualityScorer(rule_tables)
        self.validator = PromptValidator(rule_tables)
        self.improver = IterativeImprover(
            self.refiner,
            self.scorer,
            self.validator,
            allow_score_override=self.settings.ALLOW_SCORE_OVERRIDE,
        )
        self.comparator = VariantComparator(self.classifier, self.selector, self.refiner, self.scorer)
        logger.debug(f"PromptEngine ready with rules from {rule_tables.source}")

    # Component operations

    def classify(self, text: str, hint: Optional[Union[Domain, str]] = None) -> Domain:
        return self.classifier.classify(text, hint)

    def classify_detailed(self, text: str, hint: Optional[Union[Domain, str]] = None) -> ClassificationResult:
        return self.classifier.classify_detailed(text, hint)

    def select_template(self, domain: Union[Domain, str], style_hint: Optional[str] = None) -> Template:
        return self.selector.select(self._require_domain(domain), style_hint)

    def refine(
        self,
        raw: Union[RawPrompt, str],
        domain: Union[Domain, str],
        template: Union[Template, str],
        enhancements: Sequence[Enhancement] = (),
    ) -> str:
        return self.refiner.refine(raw, self._require_domain(domain), self._require_template(template), enhancements)

    def score(self, raw: str, refined: str, domain: Union[Domain, str]) -> QualityScore:
        return self.scorer.score(raw, refined, self._require_domain(domain))

    def score_breakdown(self, raw: str, refined: str, domain: Union[Domain, str]) -> Dict[str, Any]:
        """The scorer's breakdown plus before/after suggestions for the refined text."""
        domain = self._require_domain(domain)
        breakdown = self.scorer.score_breakdown(raw, refined, domain)
        breakdown["suggestions"] = [s.to_dict() for s in self.suggest(refined, domain)]
        return breakdown

    def suggest(self, text: str, domain: Union[Domain, str]) -> List[Suggestion]:
        return self.validator.suggest(text, self._require_domain(domain))

    def system_prompt(self, domain: Union[Domain, str], tone: Optional[Union[Tone, str]] = None) -> str:
        return self.refiner.system_prompt(self._require_domain(domain), self._optional_tone(tone))

    def improve(
        self,
        raw: Union[RawPrompt, str],
        domain: Union[Domain, str],
        template: Union[Template, str],
        target_score: Optional[float] = None,
        max_iterations: Optional[int] = None,
        on_iteration: Optional[IterationCallback] = None,
    ) -> RefinedPrompt:
        return self.improver.improve(
            raw,
            self._require_domain(domain),
            self._require_template(template),
            target_score=self.settings.TARGET_SCORE if target_score is None else target_score,
            max_iterations=self.settings.MAX_ITERATIONS if max_iterations is None else max_iterations,
            on_iteration=on_iteration,
        )

    # External contracts

    def process(
        self,
        raw: Union[RawPrompt, str],
        domain_hint: Optional[str] = None,
        style_hint: Optional[str] = None,
        tone: Optional[Union[Tone, str]] = None,
        target_score: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> RefinedPrompt:
        """
        Classify, pick a template and run the improvement loop.

        Explicit arguments take precedence over the hints on a RawPrompt. An
        unrecognized domain hint is ignored and the text is classified.
        """
        raw = self._coerce_raw(raw)
        tone = self._optional_tone(tone)
        raw = RawPrompt(
            text=raw.text,
            domain_hint=domain_hint if domain_hint is not None else raw.domain_hint,
            style_hint=style_hint if style_hint is not None else raw.style_hint,
            tone=tone if tone is not None else raw.tone,
        )

        domain = self.classifier.classify(raw.text, raw.domain_hint)
        template = self.selector.select(domain, raw.style_hint)
        logger.info(f"Processing prompt ({len(raw.text)} chars) as {domain.value}/{template.value}")

        result = self.improve(raw, domain, template, target_score, max_iterations)
        logger.info(
            f"Processed prompt: overall={result.score.overall:.4f} "
            f"in {result.metadata.iterations} iteration(s)"
        )
        return result

    def evaluate(self, raw: str, refined: str, domain: Union[Domain, str]) -> QualityScore:
        """Score an already refined prompt; the domain is authoritative."""
        if not isinstance(refined, str):
            raise InvalidInputError("refined", "must be a string")
        return self.scorer.score(raw, refined, self._require_domain(domain))

    def validate(self, refined: str, domain: Union[Domain, str]) -> List[ValidationFinding]:
        if not isinstance(refined, str):
            raise InvalidInputError("refined", "must be a string")
        return self.validator.validate(refined, self._require_domain(domain))

    def compare(
        self,
        variants: Sequence[Union[RawPrompt, str]],
        domain: Optional[Union[Domain, str]] = None,
    ) -> ComparisonResult:
        return self.comparator.compare(variants, domain)

    def domains(self) -> List[Dict[str, str]]:
        """Every domain with its description and default template."""
        return [
            {
                "domain": domain.value,
                "description": self.rule_tables[domain].description,
                "default_template": self.rule_tables[domain].default_template.value,
            }
            for domain in self.rule_tables
        ]

    @staticmethod
    def _require_domain(domain: Union[Domain, str]) -> Domain:
        resolved = Domain.parse(domain)
        if resolved is None:
            raise InvalidInputError("domain", f"'{domain}' is not a supported domain")
        return resolved

    @staticmethod
    def _require_template(template: Union[Template, str]) -> Template:
        resolved = Template.parse(template)
        if resolved is None:
            raise InvalidInputError("template", f"'{template}' is not a supported template")
        return resolved

    @staticmethod
    def _optional_tone(tone: Optional[Union[Tone, str]]) -> Optional[Tone]:
        if tone is None:
            return None
        resolved = Tone.parse(tone)
        if resolved is None:
            raise InvalidInputError("tone", f"'{tone}' is not one of {', '.join(t.value for t in Tone)}")
        return resolved

    @staticmethod
    def _coerce_raw(raw: Union[RawPrompt, str]) -> RawPrompt:
        try:
            return RawPrompt.coerce(raw)
        except TypeError as e:
            raise InvalidInputError("raw", str(e))
