"""
Tests for the PromptEngine facade.
"""

import pytest

from prompt_engine import (
    Domain,
    InvalidInputError,
    PromptEngine,
    RawPrompt,
    Severity,
    Template,
    Tone,
)
from prompt_engine.config import EngineSettings

LOGIN_FORM_REFINED = (
    "Role: You are an experienced professional assistant.\n\n"
    "Task: Create a login form.\n\n"
    "Output: Deliver the complete result as structured markdown with clear headings."
)


class TestProcess:

    def test_login_form(self, engine):
        result = engine.process("create a login form")

        assert result.domain is Domain.GENERAL
        assert result.template is Template.BASIC
        assert result.metadata.history[0] == pytest.approx(0.6475)
        assert result.score.overall == max(result.metadata.history)
        assert 1 <= result.metadata.iterations <= 3
        assert result.metadata.elapsed_ms >= 0

    def test_sql_scenario(self, engine):
        result = engine.process("make a sql query to get users")

        assert result.domain is Domain.SQL
        assert result.template is Template.CHAIN_OF_THOUGHT
        assert "Task: Write a SQL query to get users." in result.refined
        assert "- Consider query performance with a proper indexing strategy" in result.refined
        for title in ("Dialect:", "Schema assumptions:", "Performance constraints:"):
            assert title in result.refined

    def test_domain_hint(self, engine):
        result = engine.process("create a login form", domain_hint="cine")

        assert result.domain is Domain.CINEMA

    def test_unknown_domain_hint_is_ignored(self, engine):
        result = engine.process("make a sql query to get users", domain_hint="astrology")

        assert result.domain is Domain.SQL

    def test_style_hint(self, engine):
        result = engine.process("create a login form", style_hint="role-based")

        assert result.template is Template.ROLE_BASED
        assert result.refined.startswith("Persona:")

    def test_raw_prompt_hints(self, engine):
        result = engine.process(RawPrompt("create a login form", domain_hint="saas", tone=Tone.CASUAL))

        assert result.domain is Domain.SAAS
        assert "Use a casual tone." in result.refined

    def test_explicit_arguments_override_raw_prompt(self, engine):
        result = engine.process(RawPrompt("create a login form", domain_hint="saas"), domain_hint="sql")

        assert result.domain is Domain.SQL

    def test_invalid_tone(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.process("create a login form", tone="sarcastic")
        assert exc.value.field == "tone"

    def test_invalid_raw(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.process(42)
        assert exc.value.field == "raw"

    def test_settings_drive_the_loop(self, rule_tables):
        engine = PromptEngine(rule_tables=rule_tables, settings=EngineSettings(_env_file=None, MAX_ITERATIONS=1))

        result = engine.process("create a login form")

        assert result.metadata.iterations == 1
        assert result.refined == LOGIN_FORM_REFINED

    def test_override_setting(self, rule_tables):
        settings = EngineSettings(_env_file=None, MAX_ITERATIONS=1, ALLOW_SCORE_OVERRIDE=True)
        engine = PromptEngine(rule_tables=rule_tables, settings=settings)

        result = engine.process("create a login form")

        assert result.metadata.forced_boost is True
        assert result.metadata.reported_overall == settings.TARGET_SCORE
        assert result.score.overall == pytest.approx(0.6475)

    def test_deterministic(self, engine):
        first = engine.process("make a sql query to get users")
        second = engine.process("make a sql query to get users")

        assert first.refined == second.refined
        assert first.score == second.score
        assert first.findings == second.findings

    def test_to_dict(self, engine):
        data = engine.process("create a login form", tone="technical").to_dict()

        assert data["domain"] == "general"
        assert data["template"] == "basic"
        assert set(data["metadata"]) >= {"iterations", "history", "enhancements", "forced_boost", "elapsed_ms"}
        assert all(set(f) == {"severity", "message", "category", "code"} for f in data["findings"])


class TestEvaluateAndValidate:

    def test_evaluate(self, engine):
        score = engine.evaluate("create a login form", LOGIN_FORM_REFINED, "general")

        assert score.overall == pytest.approx(0.6475)

    def test_evaluate_domain_is_authoritative(self, engine):
        general = engine.evaluate("", LOGIN_FORM_REFINED, Domain.GENERAL)
        sql = engine.evaluate("", LOGIN_FORM_REFINED, Domain.SQL)

        assert general != sql

    def test_evaluate_invalid_domain(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.evaluate("raw", LOGIN_FORM_REFINED, "astrology")
        assert exc.value.field == "domain"

    def test_evaluate_non_string(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.evaluate("raw", None, "general")
        assert exc.value.field == "refined"

    def test_validate(self, engine):
        findings = engine.validate("", "general")

        assert len(findings) == 1
        assert findings[0].severity is Severity.CRITICAL

    def test_validate_invalid_domain(self, engine):
        with pytest.raises(InvalidInputError):
            engine.validate("Write the report.", "astrology")


class TestComponentOperations:

    def test_classify(self, engine):
        assert engine.classify("make a sql query to get users") is Domain.SQL
        assert engine.classify_detailed("create a login form").domain is Domain.GENERAL

    def test_select_template(self, engine):
        assert engine.select_template("sql") is Template.CHAIN_OF_THOUGHT
        assert engine.select_template("general", "few-shot") is Template.FEW_SHOT

    def test_refine(self, engine):
        assert engine.refine("create a login form", "general", "basic") == LOGIN_FORM_REFINED

    def test_refine_invalid_template(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.refine("create a login form", "general", "haiku")
        assert exc.value.field == "template"

    def test_improve_uses_settings_defaults(self, engine):
        result = engine.improve("create a login form", "general", "basic")

        assert result.metadata.iterations <= engine.settings.MAX_ITERATIONS

    def test_compare(self, engine):
        result = engine.compare(["Build a user dashboard", "create a login form"])

        assert len(result) == 2

    def test_domains(self, engine):
        domains = engine.domains()

        assert [entry["domain"] for entry in domains] == [domain.value for domain in Domain]
        assert domains[0] == {
            "domain": "sql",
            "description": engine.rule_tables[Domain.SQL].description,
            "default_template": "chain-of-thought",
        }

    def test_rules_path_setting(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text(
            "domains:\n"
            "  general:\n"
            "    persona: \"You are a meticulous technical writer.\"\n",
            encoding="utf-8",
        )

        engine = PromptEngine(settings=EngineSettings(_env_file=None, RULES_PATH=str(rules_file), MAX_ITERATIONS=1))

        assert engine.process("create a login form").refined.startswith("Role: You are a meticulous technical writer.")
        assert engine.rule_tables.source == str(rules_file)


class TestSystemPromptAndSuggestions:

    def test_process_carries_system_prompt(self, engine):
        result = engine.process("make a sql query to get users", tone="technical")

        assert result.system_prompt == engine.system_prompt("sql", "technical")
        assert result.system_prompt.startswith(engine.rule_tables[Domain.SQL].persona)

    def test_process_suggestions_come_from_raw_text(self, engine):
        result = engine.process("make a nice login form")

        assert [(s.before, s.after) for s in result.suggestions] == [("nice", "well-crafted")]
        assert "nice" not in result.refined

    def test_to_dict_includes_both(self, engine):
        data = engine.process("build a fast app").to_dict()

        assert data["system_prompt"].startswith("You are")
        assert data["suggestions"][0]["before"] == "fast"

    def test_breakdown_includes_suggestions(self, engine):
        breakdown = engine.score_breakdown("", "Task: Build a fast app with good stuff.", "general")

        assert [s["before"] for s in breakdown["suggestions"]] == ["good", "stuff", "fast"]

    def test_breakdown_for_clean_prompt(self, engine):
        breakdown = engine.score_breakdown("create a login form", LOGIN_FORM_REFINED, "general")

        assert breakdown["suggestions"] == []

    def test_system_prompt_invalid_tone(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.system_prompt("general", "sarcastic")
        assert exc.value.field == "tone"

    def test_system_prompt_invalid_domain(self, engine):
        with pytest.raises(InvalidInputError) as exc:
            engine.system_prompt("astrology")
        assert exc.value.field == "domain"
