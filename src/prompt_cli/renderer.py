"""
Output renderer for the CLI.

Provides consistent formatting for engine results.
"""

from typing import Any
import logging

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console()
logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "blue",
}

SCORE_DIMENSIONS = ("clarity", "specificity", "structure", "completeness", "overall")


def score_style(value: float) -> str:
    if value >= 0.8:
        return "green"
    if value >= 0.6:
        return "yellow"
    return "red"


class OutputRenderer:
    """
    Renders engine results with consistent formatting using Rich.

    Every render_* method takes the ``to_dict()`` form of a result, so the
    same payloads back both the rich view and ``--json``.
    """

    def __init__(self, console_instance: Console | None = None) -> None:
        self.console = console_instance or console

    def error(self, message: str, title: str | None = None) -> None:
        """
        Render an error message in red.

        Args:
            message: The error message
            title: Optional title for the error
        """
        if title:
            self.console.print(f"[bold red]{title}:[/bold red] {message}")
        else:
            self.console.print(f"[bold red]Error:[/bold red] {message}")

    def success(self, message: str, title: str | None = None) -> None:
        if title:
            self.console.print(f"[bold green]{title}:[/bold green] {message}")
        else:
            self.console.print(f"[green]{message}[/green]")

    def warning(self, message: str, title: str | None = None) -> None:
        if title:
            self.console.print(f"[bold yellow]{title}:[/bold yellow] {message}")
        else:
            self.console.print(f"[yellow]{message}[/yellow]")

    def table(self, title: str, columns: list[str], rows: list[list[Any]]) -> None:
        """
        Render a table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows
        """
        table = Table(title=title)

        for column in columns:
            table.add_column(column)

        for row in rows:
            table.add_row(*[str(cell) for cell in row])

        self.console.print(table)

    def render_score(self, score: dict[str, float], title: str = "Quality Score") -> None:
        """Render the four sub-scores and the overall score."""
        table = Table(title=title, box=None, show_header=False)
        table.add_column("Dimension", style="cyan")
        table.add_column("Score", justify="right")

        for dimension in SCORE_DIMENSIONS:
            value = score[dimension]
            label = dimension.capitalize()
            if dimension == "overall":
                label = f"[bold]{label}[/bold]"
            table.add_row(label, f"[{score_style(value)}]{value:.3f}[/{score_style(value)}]")

        self.console.print(table)

    def render_findings(self, findings: list[dict[str, str]]) -> None:
        """Render validation findings, most severe first."""
        if not findings:
            self.success("No issues found.", title="Validation")
            return

        self.console.print(f"[bold]Findings[/bold] [dim]({len(findings)})[/dim]")
        for finding in findings:
            style = SEVERITY_STYLES.get(finding["severity"], "white")
            self.console.print(
                f"  [{style}]{finding['severity'].upper():<8}[/{style}] "
                f"{finding['message']} [dim]({finding['code']})[/dim]"
            )

    def render_suggestions(self, suggestions: list[dict[str, str]]) -> None:
        """Render before/after rewrites; prints nothing when there are none."""
        if not suggestions:
            return

        table = Table(title="Suggestions", box=None)
        table.add_column("Before", style="red")
        table.add_column("After", style="green")
        table.add_column("Why", style="dim")
        for suggestion in suggestions:
            table.add_row(suggestion["before"], suggestion["after"], suggestion["message"])
        self.console.print(table)

    def render_refined(self, result: dict[str, Any]) -> None:
        """Render a processed prompt: the refined text, its score and findings."""
        metadata = result["metadata"]
        self.console.print(
            f"[bold cyan]Domain:[/bold cyan] {result['domain']}  "
            f"[bold cyan]Template:[/bold cyan] {result['template']}  "
            f"[bold cyan]Iterations:[/bold cyan] {metadata['iterations']}"
        )
        self.console.print(Panel(result["refined"], title="Refined Prompt", border_style="blue"))
        self.render_score(result["score"])

        if metadata["enhancements"]:
            self.console.print(f"[dim]Enhancements: {', '.join(metadata['enhancements'])}[/dim]")
        if metadata["forced_boost"]:
            self.warning(
                f"reported as {metadata['reported_overall']:.3f}; "
                f"computed overall is {result['score']['overall']:.3f}",
                title="Score override",
            )

        self.render_findings(result["findings"])
        self.render_suggestions(result["suggestions"])

    def render_breakdown(self, breakdown: dict[str, Any]) -> None:
        """Render an evaluation with the factors behind each dimension."""
        self.render_score(breakdown["score"])
        self.console.print(
            f"[dim]Raw overall {breakdown['raw_score']['overall']:.3f}, "
            f"improvement {breakdown['improvement']:+.3f}[/dim]"
        )

        structure = breakdown["structure"]
        completeness = breakdown["completeness"]
        self.console.print(
            f"[cyan]Structure:[/cyan] {structure['template']} template, "
            f"{len(structure['ordered_sections'])}/{len(structure['required_sections'])} sections in order"
        )
        if completeness["missing"]:
            self.console.print(f"[cyan]Missing:[/cyan] {', '.join(completeness['missing'])}")
        vague = breakdown["clarity"]["vague_terms"]
        if vague:
            self.console.print(f"[cyan]Vague terms:[/cyan] {', '.join(vague)}")
        self.render_suggestions(breakdown.get("suggestions", []))

    def render_comparison(self, comparison: dict[str, Any]) -> None:
        table = Table(title="Variant Ranking")
        table.add_column("Rank", justify="right")
        table.add_column("Variant")
        table.add_column("Domain")
        table.add_column("Overall", justify="right")

        for variant in comparison["ranking"]:
            overall = variant["score"]["overall"]
            rank = f"[bold green]{variant['rank']}[/bold green]" if variant["is_winner"] else str(variant["rank"])
            table.add_row(
                rank,
                variant["raw"],
                variant["domain"],
                f"[{score_style(overall)}]{overall:.3f}[/{score_style(overall)}]",
            )

        self.console.print(table)
        self.success(f"variant #{comparison['winner_index'] + 1}", title="Winner")
