"""
Tests for the promptsmith command line.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from prompt_cli.main import cli

LOGIN_FORM_REFINED = (
    "Role: You are an experienced professional assistant.\n\n"
    "Task: Create a login form.\n\n"
    "Output: Deliver the complete result as structured markdown with clear headings."
)


def test_cli_version_flag() -> None:
    """Test that --version flag works."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "PromptSmith version 0.1.0" in result.output


def test_cli_help() -> None:
    """Test that running without a command prints help."""
    runner = CliRunner()
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Commands:" in result.output
    for command in ("process", "evaluate", "validate", "compare", "domains", "system-prompt", "serve"):
        assert command in result.output


def test_process_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "make a sql query to get users", "--json"])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["domain"] == "sql"
    assert data["template"] == "chain-of-thought"
    assert "Task: Write a SQL query to get users." in data["refined"]


def test_process_with_options() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["process", "create a login form", "-D", "saas", "-s", "role-based", "-t", "casual", "--max-iterations", "1", "--json"],
    )
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["domain"] == "saas"
    assert data["template"] == "role-based"
    assert data["metadata"]["iterations"] == 1
    assert "Use a casual tone." in data["refined"]


def test_process_rich_output() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "create a login form"])
    assert result.exit_code == 0
    assert "Create a login form." in result.output


def test_process_rich_output_shows_suggestions() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "make a nice login form"])
    assert result.exit_code == 0
    assert "Suggestions" in result.output
    assert "well-crafted" in result.output


def test_process_json_includes_system_prompt() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "build a fast app", "--json"])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["system_prompt"].startswith("You are")
    assert data["suggestions"][0]["before"] == "fast"


def test_process_rejects_unknown_tone() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "create a login form", "--tone", "sarcastic"])
    assert result.exit_code == 2


def test_process_invalid_iterations() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["process", "create a login form", "--max-iterations", "0"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_evaluate_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["evaluate", LOGIN_FORM_REFINED, "--domain", "general", "--json"])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["score"]["overall"] == pytest.approx(0.6475)
    assert data["completeness"]["missing"] == ["constraints", "success"]


def test_evaluate_requires_domain() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["evaluate", LOGIN_FORM_REFINED])
    assert result.exit_code == 2


def test_evaluate_unknown_domain() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["evaluate", LOGIN_FORM_REFINED, "--domain", "astrology"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_validate_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", "", "--domain", "general", "--json"])
    assert result.exit_code == 0

    findings = json.loads(result.output)
    assert [f["code"] for f in findings] == ["EMPTY_PROMPT"]
    assert findings[0]["severity"] == "critical"


def test_validate_rich_output() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", "do it"])
    assert result.exit_code == 0
    assert "TOO_SHORT" in result.output


def test_compare_json() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "compare",
            "Build a user dashboard",
            "Create a comprehensive user management dashboard with authentication, "
            "role management, and activity tracking",
            "--json",
        ],
    )
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["winner_index"] == 1
    assert [entry["rank"] for entry in data["ranking"]] == [1, 2]


def test_compare_rich_output() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["compare", "Build a user dashboard", "fix it"])
    assert result.exit_code == 0
    assert "Winner: variant #" in result.output


def test_compare_requires_variants() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["compare"])
    assert result.exit_code == 2


def test_domains_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["domains", "--json"])
    assert result.exit_code == 0

    entries = json.loads(result.output)
    assert len(entries) == 17
    assert entries[0]["domain"] == "sql"
    assert entries[0]["default_template"] == "chain-of-thought"


def test_system_prompt() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["system-prompt", "sql", "--tone", "formal"])
    assert result.exit_code == 0
    assert result.output.startswith("You are a senior database engineer")
    assert result.output.rstrip().endswith("Use a formal tone.")


def test_system_prompt_unknown_domain() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["system-prompt", "astrology"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_rules_override(tmp_path) -> None:
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("domains:\n  sql:\n    default_template: basic\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--rules", str(rules_file), "domains", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output)[0]["default_template"] == "basic"


def test_rules_override_invalid(tmp_path) -> None:
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("domains:\n  astrology: {}\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--rules", str(rules_file), "domains"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_serve_runs_uvicorn() -> None:
    runner = CliRunner()
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9001"])
        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == "prompt_api.main:app"
        assert mock_run.call_args.kwargs["port"] == 9001
