"""
Tests for rule tables and the override loader.
"""

import json
from dataclasses import replace

import pytest

from prompt_engine.config import load_rule_tables, load_rules_file
from prompt_engine.domains import Domain, Template
from prompt_engine.exceptions import ConfigurationError
from prompt_engine.rules import KeywordPattern, RuleTables, builtin_rules


class TestRuleTables:

    def setup_method(self):
        self.tables = RuleTables.default()

    def test_every_domain_has_a_table(self):
        assert len(self.tables) == len(Domain) == 17
        assert list(self.tables) == list(Domain)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            self.tables[Domain.SQL] = self.tables[Domain.GENERAL]

    def test_missing_domain(self):
        tables = [rules for rules in builtin_rules() if rules.domain is not Domain.CRYPTO]

        with pytest.raises(ConfigurationError, match="crypto"):
            RuleTables(tables)

    def test_duplicate_domain(self):
        with pytest.raises(ConfigurationError, match="duplicate"):
            RuleTables(builtin_rules() + (self.tables[Domain.SQL],))

    def test_invalid_keyword_regex(self):
        broken = replace(self.tables[Domain.SQL], keywords=(KeywordPattern("select(", 1.0),))

        with pytest.raises(ConfigurationError) as exc:
            self.tables.with_overrides({Domain.SQL: broken}, source="test")
        assert exc.value.source == "test"

    def test_non_positive_weight(self):
        broken = replace(self.tables[Domain.SQL], keywords=(KeywordPattern("select", 0.0),))

        with pytest.raises(ConfigurationError, match="weight"):
            self.tables.with_overrides({Domain.SQL: broken}, source="test")

    def test_empty_persona(self):
        broken = replace(self.tables[Domain.CINEMA], persona="  ")

        with pytest.raises(ConfigurationError, match="persona"):
            self.tables.with_overrides({Domain.CINEMA: broken}, source="test")

    def test_missing_keywords(self):
        broken = replace(self.tables[Domain.DEVOPS], keywords=())

        with pytest.raises(ConfigurationError, match="keywords"):
            self.tables.with_overrides({Domain.DEVOPS: broken}, source="test")

    def test_general_needs_no_keywords(self):
        general = replace(self.tables[Domain.GENERAL], keywords=())

        tables = self.tables.with_overrides({Domain.GENERAL: general}, source="test")

        assert tables[Domain.GENERAL].keywords == ()

    def test_with_overrides_leaves_original_untouched(self):
        custom = replace(self.tables[Domain.SQL], persona="You are a DBA.")

        tables = self.tables.with_overrides({Domain.SQL: custom}, source="test")

        assert tables[Domain.SQL].persona == "You are a DBA."
        assert self.tables[Domain.SQL].persona != "You are a DBA."
        assert tables[Domain.BRANDING] is self.tables[Domain.BRANDING]
        assert tables.source == "test"

    def test_default_templates(self):
        assert self.tables[Domain.SQL].default_template is Template.CHAIN_OF_THOUGHT
        assert self.tables[Domain.GENERAL].default_template is Template.BASIC


class TestRuleLoader:

    def write(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_no_path_returns_base(self):
        base = RuleTables.default()

        assert load_rule_tables(None, base) is base

    def test_yaml_override(self, tmp_path):
        path = self.write(
            tmp_path,
            "rules.yaml",
            "version: '1'\n"
            "domains:\n"
            "  sql:\n"
            "    persona: \"You are a data warehouse engineer.\"\n"
            "    keywords:\n"
            "      - pattern: \"snowflake|bigquery\"\n"
            "        weight: 3.0\n",
        )

        tables = load_rule_tables(path)

        assert tables[Domain.SQL].persona == "You are a data warehouse engineer."
        assert tables[Domain.SQL].keywords == (KeywordPattern("snowflake|bigquery", 3.0),)
        assert tables[Domain.SQL].overlay_sections == RuleTables.default()[Domain.SQL].overlay_sections
        assert tables.source == str(path)

    def test_json_override_with_alias(self, tmp_path):
        path = self.write(
            tmp_path,
            "rules.json",
            json.dumps({"domains": {"film": {"default_template": "few-shot", "vocabulary": ["Storyboard"]}}}),
        )

        tables = load_rule_tables(path)

        assert tables[Domain.CINEMA].default_template is Template.FEW_SHOT
        assert tables[Domain.CINEMA].vocabulary == frozenset({"storyboard"})

    def test_empty_file(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "")

        assert load_rules_file(path).domains == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_rule_tables(tmp_path / "absent.yaml")

    def test_unknown_domain(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "domains:\n  astrology:\n    persona: \"You are a stargazer.\"\n")

        with pytest.raises(ConfigurationError, match="astrology"):
            load_rule_tables(path)

    def test_unknown_field(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "domains:\n  sql:\n    mascot: \"elephant\"\n")

        with pytest.raises(ConfigurationError):
            load_rule_tables(path)

    def test_bad_regex(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "domains:\n  sql:\n    keywords:\n      - pattern: \"select(\"\n")

        with pytest.raises(ConfigurationError):
            load_rule_tables(path)

    def test_non_positive_weight(self, tmp_path):
        path = self.write(
            tmp_path, "rules.yaml", "domains:\n  sql:\n    keywords:\n      - pattern: \"select\"\n        weight: 0\n"
        )

        with pytest.raises(ConfigurationError):
            load_rule_tables(path)

    def test_bad_anti_pattern_mode(self, tmp_path):
        path = self.write(
            tmp_path,
            "rules.yaml",
            "domains:\n"
            "  sql:\n"
            "    anti_patterns:\n"
            "      - code: NO_LIMIT\n"
            "        category: performance\n"
            "        severity: low\n"
            "        message: \"Add a LIMIT clause.\"\n"
            "        pattern: \"limit\"\n"
            "        mode: sometimes\n",
        )

        with pytest.raises(ConfigurationError):
            load_rule_tables(path)

    def test_non_mapping(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "- sql\n- cinema\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_rules_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = self.write(tmp_path, "rules.yaml", "domains: [sql\n")

        with pytest.raises(ConfigurationError, match="cannot parse"):
            load_rules_file(path)

    def test_invalid_json(self, tmp_path):
        path = self.write(tmp_path, "rules.json", "{\"domains\": ")

        with pytest.raises(ConfigurationError, match="cannot parse"):
            load_rules_file(path)
