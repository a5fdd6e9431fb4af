"""
Main CLI entry point for PromptSmith.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from prompt_cli import __version__
from prompt_cli.renderer import OutputRenderer
from prompt_engine import PromptEngine, PromptEngineError, Template, Tone
from prompt_engine.config import EngineSettings

console = Console()
renderer = OutputRenderer(console)


def configure_logging(level: int) -> Path:
    """Send logs to stderr and to a timestamped file under logs/."""
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"promptsmith_{timestamp}.log"

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.info(f"Logging initialized. Log file: {log_file}")
    return log_file


def get_engine(ctx: click.Context) -> PromptEngine:
    """Build the engine once per invocation, honoring --rules."""
    if ctx.obj.get("engine") is None:
        overrides = {}
        if ctx.obj.get("rules_path") is not None:
            overrides["RULES_PATH"] = str(ctx.obj["rules_path"])
        ctx.obj["engine"] = PromptEngine(settings=EngineSettings(**overrides))
    return ctx.obj["engine"]


def emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


def fail(ctx: click.Context, error: Exception) -> None:
    renderer.error(str(error))
    if ctx.obj.get("debug"):
        raise error
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--rules",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file with rule-table overrides",
)
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
@click.option("--info", "-i", is_flag=True, help="Enable info logging")
@click.pass_context
def cli(ctx: click.Context, version: bool, rules: Path | None, debug: bool, info: bool) -> None:
    """
    PromptSmith - domain-aware prompt refinement and scoring.

    Turns a rough prompt into a structured, domain-optimized one and scores it.
    """
    ctx.ensure_object(dict)
    ctx.obj["rules_path"] = rules
    ctx.obj["debug"] = debug

    if debug or info:
        configure_logging(logging.DEBUG if debug else logging.INFO)

    if version:
        console.print(f"[bold cyan]PromptSmith[/bold cyan] version [green]{__version__}[/green]")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("raw")
@click.option("--domain", "-D", help="Domain hint (e.g. sql, saas, cinema)")
@click.option("--style", "-s", help=f"Template id or style hint ({', '.join(t.value for t in Template)})")
@click.option("--tone", "-t", type=click.Choice([t.value for t in Tone]), help="Tone of the output section")
@click.option("--target", type=float, help="Target overall score (0-1)")
@click.option("--max-iterations", type=int, help="Maximum improvement iterations")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def process(
    ctx: click.Context,
    raw: str,
    domain: str | None,
    style: str | None,
    tone: str | None,
    target: float | None,
    max_iterations: int | None,
    as_json: bool,
) -> None:
    """Refine RAW into a structured prompt and score it."""
    try:
        result = get_engine(ctx).process(
            raw,
            domain_hint=domain,
            style_hint=style,
            tone=tone,
            target_score=target,
            max_iterations=max_iterations,
        )
    except PromptEngineError as e:
        fail(ctx, e)
        return

    if as_json:
        emit_json(result.to_dict())
    else:
        renderer.render_refined(result.to_dict())


@cli.command()
@click.argument("refined")
@click.option("--raw", "raw", default="", help="Original text the prompt was refined from")
@click.option("--domain", "-D", required=True, help="Domain to score against")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def evaluate(ctx: click.Context, refined: str, raw: str, domain: str, as_json: bool) -> None:
    """Score an already refined prompt against DOMAIN."""
    try:
        engine = get_engine(ctx)
        engine.evaluate(raw, refined, domain)
        breakdown = engine.score_breakdown(raw, refined, domain)
    except PromptEngineError as e:
        fail(ctx, e)
        return

    if as_json:
        emit_json(breakdown)
    else:
        renderer.render_breakdown(breakdown)


@cli.command()
@click.argument("prompt")
@click.option("--domain", "-D", help="Domain context; detected from the text when omitted")
@click.option("--json", "as_json", is_flag=True, help="Print the findings as JSON")
@click.pass_context
def validate(ctx: click.Context, prompt: str, domain: str | None, as_json: bool) -> None:
    """Check PROMPT for common issues and domain anti-patterns."""
    try:
        engine = get_engine(ctx)
        resolved = domain if domain is not None else engine.classify(prompt)
        findings = engine.validate(prompt, resolved)
    except PromptEngineError as e:
        fail(ctx, e)
        return

    payload = [finding.to_dict() for finding in findings]
    if as_json:
        emit_json(payload)
    else:
        renderer.render_findings(payload)


@cli.command()
@click.argument("variants", nargs=-1, required=True)
@click.option("--domain", "-D", help="Domain for every variant; detected per variant when omitted")
@click.option("--json", "as_json", is_flag=True, help="Print the ranking as JSON")
@click.pass_context
def compare(ctx: click.Context, variants: tuple[str, ...], domain: str | None, as_json: bool) -> None:
    """Rank prompt VARIANTS by overall score."""
    try:
        result = get_engine(ctx).compare(list(variants), domain)
    except PromptEngineError as e:
        fail(ctx, e)
        return

    if as_json:
        emit_json(result.to_dict())
    else:
        renderer.render_comparison(result.to_dict())


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the domains as JSON")
@click.pass_context
def domains(ctx: click.Context, as_json: bool) -> None:
    """List supported domains and their default templates."""
    try:
        entries = get_engine(ctx).domains()
    except PromptEngineError as e:
        fail(ctx, e)
        return

    if as_json:
        emit_json(entries)
    else:
        renderer.table(
            "Domains",
            ["Domain", "Default template", "Description"],
            [[e["domain"], e["default_template"], e["description"]] for e in entries],
        )


@cli.command("system-prompt")
@click.argument("domain")
@click.option("--tone", "-t", type=click.Choice([t.value for t in Tone]), help="Tone of the output line")
@click.pass_context
def system_prompt(ctx: click.Context, domain: str, tone: str | None) -> None:
    """Print the system message for prompts in DOMAIN."""
    try:
        text = get_engine(ctx).system_prompt(domain, tone)
    except PromptEngineError as e:
        fail(ctx, e)
        return

    click.echo(text)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to the API settings)")
@click.option("--port", type=int, default=None, help="Port (defaults to the API settings)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from prompt_api.config import settings

    uvicorn.run(
        "prompt_api.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
    )


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
