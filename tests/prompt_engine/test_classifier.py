"""
Tests for domain classification.
"""

from dataclasses import replace

import pytest

from prompt_engine.classifier import DomainClassifier
from prompt_engine.domains import Domain
from prompt_engine.rules import RuleTables
from prompt_engine.rules.base import keywords


class TestDomainClassifier:
    """Tests for DomainClassifier."""

    def setup_method(self):
        self.tables = RuleTables.default()
        self.classifier = DomainClassifier(self.tables)

    def test_sql_prompt(self):
        result = self.classifier.classify_detailed("make a sql query to get users")

        assert result.domain is Domain.SQL
        assert result.scores[Domain.SQL] == pytest.approx(5.0)
        assert result.from_hint is False

    def test_login_form_is_general(self):
        assert self.classifier.classify("create a login form") is Domain.GENERAL

    def test_dashboard_prompts_are_saas(self):
        assert self.classifier.classify("Build a user dashboard") is Domain.SAAS
        assert self.classifier.classify(
            "Create a comprehensive user management dashboard with authentication, "
            "role management, and activity tracking"
        ) is Domain.SAAS

    @pytest.mark.parametrize("text", ["", "   ", "hello there", "12345"])
    def test_unmatched_text_falls_back_to_general(self, text):
        assert self.classifier.classify(text) is Domain.GENERAL

    def test_non_string_text_is_general(self):
        assert self.classifier.classify(None) is Domain.GENERAL

    def test_valid_hint_wins(self):
        result = self.classifier.classify_detailed("make a sql query to get users", hint="branding")

        assert result.domain is Domain.BRANDING
        assert result.from_hint is True
        assert result.confidence == 1.0

    @pytest.mark.parametrize("alias", ["cine", "film", "CINEMA", " cinema "])
    def test_cinema_aliases(self, alias):
        assert self.classifier.classify("anything at all", hint=alias) is Domain.CINEMA

    def test_unknown_hint_is_ignored(self):
        assert self.classifier.classify("make a sql query to get users", hint="astrology") is Domain.SQL

    def test_below_minimum_score_is_general(self):
        strict = DomainClassifier(self.tables, min_score=100.0)

        assert strict.classify("make a sql query to get users") is Domain.GENERAL

    def test_ties_go_to_earlier_domain(self):
        tied = keywords((r"widget", 3.0))
        tables = self.tables.with_overrides(
            {
                Domain.SQL: replace(self.tables[Domain.SQL], keywords=tied),
                Domain.BRANDING: replace(self.tables[Domain.BRANDING], keywords=tied),
            },
            source="test",
        )

        result = DomainClassifier(tables).classify_detailed("a widget")

        assert result.scores[Domain.SQL] == result.scores[Domain.BRANDING]
        assert result.domain is Domain.SQL

    def test_every_domain_is_scored_except_general(self):
        result = self.classifier.classify_detailed("make a sql query to get users")

        assert Domain.GENERAL not in result.scores
        assert set(result.scores) == set(Domain) - {Domain.GENERAL}

    def test_deterministic(self):
        text = "deploy the api to kubernetes with a ci/cd pipeline"
        assert len({self.classifier.classify(text) for _ in range(5)}) == 1

    def test_to_dict(self):
        data = self.classifier.classify_detailed("make a sql query to get users").to_dict()

        assert data["domain"] == "sql"
        assert data["from_hint"] is False
        assert data["scores"]["sql"] == pytest.approx(5.0)
        assert 0.0 < data["confidence"] <= 1.0
