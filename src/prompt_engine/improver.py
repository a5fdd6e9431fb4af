"""
Iterative improvement.

Iteration 1 is the baseline refinement. Every later iteration feeds the
Validator's findings on the best candidate so far back into the Refiner as
Enhancement values; when the findings ask for nothing new, the enhancement set
widens by one step in ENHANCEMENT_ORDER. The loop ends on reaching the target,
on the iteration cap, or when there is nothing left to add.
"""

import logging
import time
from typing import Callable, FrozenSet, List, Optional

from .domains import Domain, Template
from .exceptions import InvalidInputError
from .models import ProcessingMetadata, QualityScore, RawPrompt, RefinedPrompt
from .refiner import ENHANCEMENT_ORDER, Enhancement, PromptRefiner
from .scoring import QualityScorer
from .validator import PromptValidator

logger = logging.getLogger(__name__)

# Finding category -> enhancement that addresses it
CATEGORY_ENHANCEMENTS = {
    "missing-constraint": Enhancement.CONSTRAINTS,
    "missing-success-criterion": Enhancement.SUCCESS_CRITERIA,
    "missing-requirements": Enhancement.DEFAULT_REQUIREMENTS,
    "vagueness": Enhancement.EXPLICIT_REFERENCES,
    "ambiguous-reference": Enhancement.EXPLICIT_REFERENCES,
}

IterationCallback = Callable[[int, QualityScore], Optional[bool]]


def validate_loop_arguments(target_score, max_iterations) -> None:
    """Raise InvalidInputError unless the loop is guaranteed to terminate sensibly."""
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 1:
        raise InvalidInputError("max_iterations", f"must be a positive integer, got {max_iterations!r}")
    if isinstance(target_score, bool) or not isinstance(target_score, (int, float)):
        raise InvalidInputError("target_score", f"must be a number, got {target_score!r}")
    if not 0.0 <= target_score <= 1.0:
        raise InvalidInputError("target_score", f"must be between 0 and 1, got {target_score}")


class IterativeImprover:
    """Refine, score and feed findings back until good enough or out of moves."""

    def __init__(
        self,
        refiner: PromptRefiner,
        scorer: QualityScorer,
        validator: PromptValidator,
        allow_score_override: bool = False,
    ):
        self.refiner = refiner
        self.scorer = scorer
        self.validator = validator
        self.allow_score_override = allow_score_override

    def next_enhancements(
        self,
        best_text: str,
        domain: Domain,
        applied: FrozenSet[Enhancement],
    ) -> FrozenSet[Enhancement]:
        """
        Compute the next iteration's enhancement set.

        Returns ``applied`` unchanged when every enhancement is already in use,
        which the loop treats as convergence.
        """
        findings = self.validator.validate(best_text, domain)
        wanted = {
            CATEGORY_ENHANCEMENTS[finding.category]
            for finding in findings
            if finding.category in CATEGORY_ENHANCEMENTS
        }
        new = wanted - applied
        if not new:
            for enhancement in ENHANCEMENT_ORDER:
                if enhancement not in applied:
                    new = {enhancement}
                    break
        return applied | frozenset(new)

    def improve(
        self,
        raw: RawPrompt,
        domain: Domain,
        template: Template,
        target_score: float = 0.99,
        max_iterations: int = 3,
        on_iteration: Optional[IterationCallback] = None,
    ) -> RefinedPrompt:
        """
        Run the improvement loop.

        Args:
            raw: RawPrompt or plain string
            domain: Resolved domain
            template: Template for every iteration
            target_score: Stop once the best overall score reaches this
            max_iterations: Hard cap on refine+score cycles
            on_iteration: Called with (iteration, best score) after each
                iteration; returning False stops the loop early

        Returns:
            The best-scoring RefinedPrompt seen

        Raises:
            InvalidInputError: If target_score or max_iterations is invalid
        """
        validate_loop_arguments(target_score, max_iterations)
        raw = RawPrompt.coerce(raw)
        started = time.perf_counter()

        applied: FrozenSet[Enhancement] = frozenset()
        history: List[float] = []
        best_text = ""
        best_score: Optional[QualityScore] = None
        best_applied: FrozenSet[Enhancement] = applied
        iteration = 0

        while iteration < max_iterations:
            if iteration > 0:
                following = self.next_enhancements(best_text, domain, applied)
                if following == applied:
                    logger.debug(f"Converged after {iteration} iteration(s)")
                    break
                applied = following

            iteration += 1
            text = self.refiner.refine(raw, domain, template, applied)
            score = self.scorer.score(raw.text, text, domain)
            history.append(score.overall)

            # Strictly greater: ties keep the earlier candidate
            if best_score is None or score.overall > best_score.overall:
                best_text, best_score, best_applied = text, score, applied

            logger.debug(
                f"Iteration {iteration}: overall={score.overall:.4f} "
                f"best={best_score.overall:.4f} enhancements={sorted(e.value for e in applied)}"
            )

            if best_score.overall >= target_score:
                break
            if on_iteration is not None and on_iteration(iteration, best_score) is False:
                logger.info(f"Improvement stopped by caller after {iteration} iteration(s)")
                break

        forced_boost = False
        reported_overall = None
        if self.allow_score_override and best_score.overall < target_score:
            forced_boost = True
            reported_overall = target_score
            logger.warning(
                f"Reporting overall={target_score} for a prompt that scored {best_score.overall:.4f} "
                f"(score override enabled)"
            )

        metadata = ProcessingMetadata(
            elapsed_ms=round((time.perf_counter() - started) * 1000, 3),
            iterations=iteration,
            history=tuple(history),
            enhancements=tuple(e.value for e in ENHANCEMENT_ORDER if e in best_applied),
            forced_boost=forced_boost,
            reported_overall=reported_overall,
        )
        return RefinedPrompt(
            original=raw.text,
            refined=best_text,
            domain=domain,
            template=template,
            score=best_score,
            metadata=metadata,
            findings=tuple(self.validator.validate(best_text, domain)),
            system_prompt=self.refiner.system_prompt(domain, raw.tone),
            suggestions=tuple(self.validator.suggest(raw.text, domain)),
        )
