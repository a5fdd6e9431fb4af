"""
Tests for template selection.
"""

import pytest

from prompt_engine.domains import Domain, Template
from prompt_engine.rules import RuleTables
from prompt_engine.templates import TemplateSelector


class TestTemplateSelector:

    def setup_method(self):
        self.selector = TemplateSelector(RuleTables.default())

    def test_domain_defaults(self):
        assert self.selector.select(Domain.GENERAL) is Template.BASIC
        assert self.selector.select(Domain.SQL) is Template.CHAIN_OF_THOUGHT
        assert self.selector.select(Domain.BRANDING) is Template.ROLE_BASED
        assert self.selector.select(Domain.EDUCATION) is Template.FEW_SHOT

    @pytest.mark.parametrize("hint,expected", [
        ("basic", Template.BASIC),
        ("few-shot", Template.FEW_SHOT),
        ("Role-Based", Template.ROLE_BASED),
        ("chain-of-thought", Template.CHAIN_OF_THOUGHT),
    ])
    def test_exact_identifier(self, hint, expected):
        assert self.selector.select(Domain.SQL, hint) is expected

    @pytest.mark.parametrize("hint,expected", [
        ("walk through it step by step", Template.CHAIN_OF_THOUGHT),
        ("give me some examples", Template.FEW_SHOT),
        ("answer like an expert", Template.ROLE_BASED),
        ("keep it plain", Template.BASIC),
    ])
    def test_synonyms(self, hint, expected):
        assert self.selector.select(Domain.GENERAL, hint) is expected

    def test_ambiguous_hint_uses_default(self):
        assert self.selector.select(Domain.SQL, "step by step with examples") is Template.CHAIN_OF_THOUGHT

    @pytest.mark.parametrize("hint", [None, "", "purple", 42])
    def test_unrecognized_hint_uses_default(self, hint):
        assert self.selector.select(Domain.BRANDING, hint) is Template.ROLE_BASED
