"""
Tests for the iterative improvement loop.
"""

import pytest

from prompt_engine.domains import Domain, Template
from prompt_engine.exceptions import InvalidInputError
from prompt_engine.improver import IterativeImprover
from prompt_engine.refiner import ENHANCEMENT_ORDER, Enhancement, PromptRefiner
from prompt_engine.rules import RuleTables
from prompt_engine.scoring import QualityScorer
from prompt_engine.validator import PromptValidator

LOGIN_FORM_REFINED = (
    "Role: You are an experienced professional assistant.\n\n"
    "Task: Create a login form.\n\n"
    "Output: Deliver the complete result as structured markdown with clear headings."
)


class TestIterativeImprover:

    def setup_method(self):
        tables = RuleTables.default()
        self.refiner = PromptRefiner(tables)
        self.scorer = QualityScorer(tables)
        self.validator = PromptValidator(tables)
        self.improver = IterativeImprover(self.refiner, self.scorer, self.validator)

    def improve(self, text="create a login form", **kwargs):
        return self.improver.improve(text, Domain.GENERAL, Template.BASIC, **kwargs)

    def test_single_iteration_is_baseline(self):
        result = self.improve(max_iterations=1)

        assert result.refined == LOGIN_FORM_REFINED
        assert result.score.overall == pytest.approx(0.6475)
        assert result.metadata.iterations == 1
        assert result.metadata.history == (result.score.overall,)
        assert result.metadata.enhancements == ()

    def test_improves_on_baseline(self):
        result = self.improve()

        assert result.metadata.history[0] == pytest.approx(0.6475)
        assert result.score.overall > result.metadata.history[0]
        assert "Constraints:" in result.refined
        assert "Success criteria:" in result.refined

    def test_best_score_is_never_lower_than_history(self):
        result = self.improve(max_iterations=4)

        assert result.score.overall == max(result.metadata.history)

    def test_bounded_by_max_iterations(self):
        for cap in (1, 2, 3, 4):
            result = self.improve(max_iterations=cap)
            assert 1 <= result.metadata.iterations <= cap
            assert len(result.metadata.history) == result.metadata.iterations

    def test_stops_when_target_reached(self):
        result = self.improve(target_score=0.0, max_iterations=5)

        assert result.metadata.iterations == 1

    def test_converges_when_nothing_left_to_add(self):
        result = self.improve(max_iterations=50)

        # baseline, the three findings-driven enhancements, then explicit references
        assert result.metadata.iterations <= 1 + len(ENHANCEMENT_ORDER)

    def test_enhancements_reported_in_order(self):
        result = self.improve(max_iterations=2)

        assert result.metadata.enhancements == ("constraints", "success_criteria", "default_requirements")

    def test_findings_belong_to_best_text(self):
        result = self.improve()

        assert list(result.findings) == self.validator.validate(result.refined, Domain.GENERAL)

    def test_callback_can_stop_the_loop(self):
        seen = []

        def on_iteration(iteration, best):
            seen.append((iteration, best.overall))
            return False

        result = self.improve(on_iteration=on_iteration)

        assert result.metadata.iterations == 1
        assert seen == [(1, pytest.approx(0.6475))]

    def test_callback_sees_non_decreasing_best(self):
        best_scores = []
        self.improve(max_iterations=4, on_iteration=lambda i, best: best_scores.append(best.overall))

        assert best_scores == sorted(best_scores)

    @pytest.mark.parametrize("target", [-0.1, 1.5, "high", None, True])
    def test_invalid_target(self, target):
        with pytest.raises(InvalidInputError) as exc:
            self.improve(target_score=target)
        assert exc.value.field == "target_score"

    @pytest.mark.parametrize("cap", [0, -1, 2.5, "3", None, True])
    def test_invalid_max_iterations(self, cap):
        with pytest.raises(InvalidInputError) as exc:
            self.improve(max_iterations=cap)
        assert exc.value.field == "max_iterations"

    def test_no_override_by_default(self):
        result = self.improve(max_iterations=1)

        assert result.metadata.forced_boost is False
        assert result.metadata.reported_overall is None

    def test_score_override_is_labeled_and_keeps_real_score(self):
        improver = IterativeImprover(self.refiner, self.scorer, self.validator, allow_score_override=True)

        result = improver.improve("create a login form", Domain.GENERAL, Template.BASIC, target_score=0.99, max_iterations=1)

        assert result.metadata.forced_boost is True
        assert result.metadata.reported_overall == 0.99
        assert result.score.overall == pytest.approx(0.6475)
        assert result.metadata.to_dict()["score_overridden"] is True


class TestNextEnhancements:

    def setup_method(self):
        tables = RuleTables.default()
        self.improver = IterativeImprover(PromptRefiner(tables), QualityScorer(tables), PromptValidator(tables))

    def test_findings_map_to_enhancements(self):
        following = self.improver.next_enhancements(LOGIN_FORM_REFINED, Domain.GENERAL, frozenset())

        assert following == {Enhancement.CONSTRAINTS, Enhancement.SUCCESS_CRITERIA, Enhancement.DEFAULT_REQUIREMENTS}

    def test_widens_when_findings_ask_for_nothing_new(self):
        applied = frozenset({Enhancement.CONSTRAINTS, Enhancement.SUCCESS_CRITERIA, Enhancement.DEFAULT_REQUIREMENTS})

        following = self.improver.next_enhancements(LOGIN_FORM_REFINED, Domain.GENERAL, applied)

        assert following == applied | {Enhancement.EXPLICIT_REFERENCES}

    def test_vagueness_asks_for_explicit_references(self):
        following = self.improver.next_enhancements(
            "Task: Fix it.\n\nConstraints:\n- Must pass.\n\nSuccess criteria:\n- Done when verified.",
            Domain.GENERAL,
            frozenset(),
        )

        assert Enhancement.EXPLICIT_REFERENCES in following

    def test_unchanged_when_everything_applied(self):
        applied = frozenset(ENHANCEMENT_ORDER)

        assert self.improver.next_enhancements(LOGIN_FORM_REFINED, Domain.GENERAL, applied) == applied
