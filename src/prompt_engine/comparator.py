"""
Variant comparison.
"""

import logging
from typing import Optional, Sequence, Union

from .classifier import DomainClassifier
from .domains import Domain
from .exceptions import InvalidInputError
from .models import ComparisonResult, RankedVariant, RawPrompt
from .refiner import PromptRefiner
from .scoring import QualityScorer
from .templates import TemplateSelector

logger = logging.getLogger(__name__)


class VariantComparator:
    """Refine and score each variant once, then rank by overall score."""

    def __init__(
        self,
        classifier: DomainClassifier,
        selector: TemplateSelector,
        refiner: PromptRefiner,
        scorer: QualityScorer,
    ):
        self.classifier = classifier
        self.selector = selector
        self.refiner = refiner
        self.scorer = scorer

    def compare(
        self,
        variants: Sequence[Union[RawPrompt, str]],
        domain: Optional[Union[Domain, str]] = None,
    ) -> ComparisonResult:
        """
        Rank prompt variants.

        Args:
            variants: RawPrompt objects or plain strings
            domain: Authoritative domain for every variant; classified per
                variant when omitted

        Returns:
            ComparisonResult, best first; ties keep input order

        Raises:
            InvalidInputError: If variants is empty or domain is not supported
        """
        if variants is None or isinstance(variants, (str, RawPrompt)) or len(variants) == 0:
            raise InvalidInputError("variants", "at least one variant is required")

        fixed_domain = None
        if domain is not None:
            fixed_domain = Domain.parse(domain)
            if fixed_domain is None:
                raise InvalidInputError("domain", f"'{domain}' is not a supported domain")

        candidates = []
        for index, variant in enumerate(variants):
            try:
                raw = RawPrompt.coerce(variant)
            except TypeError as e:
                raise InvalidInputError(f"variants[{index}]", str(e))
            resolved = fixed_domain or self.classifier.classify(raw.text, raw.domain_hint)
            template = self.selector.select(resolved, raw.style_hint)
            refined = self.refiner.refine(raw, resolved, template)
            score = self.scorer.score(raw.text, refined, resolved)
            candidates.append((index, raw, refined, resolved, template, score))

        ordered = sorted(candidates, key=lambda c: (-c[5].overall, c[0]))
        ranking = tuple(
            RankedVariant(
                index=index,
                rank=rank,
                raw=raw.text,
                refined=refined,
                domain=resolved,
                template=template,
                score=score,
                is_winner=rank == 1,
            )
            for rank, (index, raw, refined, resolved, template, score) in enumerate(ordered, 1)
        )
        logger.info(f"Compared {len(ranking)} variant(s); winner is #{ranking[0].index}")
        return ComparisonResult(ranking=ranking)
