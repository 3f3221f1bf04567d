"""CLI for cronspeak - translate plain-English schedules to cron and back."""

from datetime import datetime
from typing import Annotated, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cronspeak import __version__
from cronspeak.explain import explain, explain_fields
from cronspeak.fields import detect_format, split_seconds, validate
from cronspeak.log import setup_logging
from cronspeak.models import Confidence, CronFormat
from cronspeak.occurrences import format_occurrence, next_occurrences, relative_time
from cronspeak.settings import MAX_COUNT, get_default_count, get_default_format
from cronspeak.translate import translate

app = typer.Typer(name="cronspeak", help="Translate plain-English schedules to cron and back.", add_completion=False)
console = Console()

CONFIDENCE_STYLES = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}

FormatOption = Annotated[
    Optional[CronFormat], typer.Option("--format", "-f", help="Cron format (5-field or 6-field)")
]


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"cronspeak {__version__}")
        raise typer.Exit()


def _runs_table(expression: str, count: int, fmt: CronFormat) -> Table | None:
    now = datetime.now()
    runs = next_occurrences(expression, min(count, MAX_COUNT), fmt, start=now)
    if not runs:
        return None

    table = Table(title="Next runs")
    table.add_column("#", style="dim")
    table.add_column("When", style="cyan")
    table.add_column("Relative")
    for i, run in enumerate(runs, 1):
        table.add_row(str(i), format_occurrence(run), relative_time(run, now))
    return table


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option("--version", "-v", callback=_version_callback, is_eager=True)] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging")] = False,
) -> None:
    setup_logging(verbose)


@app.command(name="translate")
def translate_cmd(
    text: Annotated[str, typer.Argument(help="Schedule description, e.g. 'every Monday at 3pm'")],
    fmt: FormatOption = None,
    runs: Annotated[Optional[int], typer.Option("--next", "-n", help="Upcoming runs to show (0 hides them)")] = None,
) -> None:
    """Translate a plain-English schedule into cron."""
    fmt = fmt or get_default_format()
    result = translate(text, fmt)
    if not result.ok:
        rprint(f"[red]Error:[/red] {escape(result.error)}")
        raise typer.Exit(1)

    rprint(f"[bold green]{result.cron}[/bold green]")

    table = Table(show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Format", fmt.value)
    style = CONFIDENCE_STYLES[result.confidence]
    table.add_row("Confidence", f"[{style}]{result.confidence.value}[/{style}]")
    if result.interpretation:
        table.add_row("Understood", result.interpretation)
    table.add_row("Meaning", explain(result.cron))
    console.print(table)

    if result.warning:
        rprint(f"[yellow]Approximation:[/yellow] {escape(result.warning)}")

    count = get_default_count() if runs is None else runs
    if count > 0:
        runs_table = _runs_table(result.cron, count, fmt)
        if runs_table:
            console.print(runs_table)


@app.command(name="validate")
def validate_cmd(
    expression: Annotated[str, typer.Argument(help="Cron expression")],
    fmt: FormatOption = None,
) -> None:
    """Check a cron expression."""
    result = validate(expression, fmt)
    if not result.valid:
        rprint(f"[red]Error:[/red] {escape(result.error)}")
        raise typer.Exit(1)
    rprint(f"[green]✓[/green] Valid {result.detected_format.value} expression")


@app.command(name="explain")
def explain_cmd(
    expression: Annotated[str, typer.Argument(help="Cron expression")],
    fields: Annotated[bool, typer.Option("--fields", help="Break the expression down field by field")] = False,
) -> None:
    """Describe a cron expression in English."""
    result = validate(expression)
    if not result.valid:
        rprint(f"[red]Error:[/red] {escape(result.error)}")
        raise typer.Exit(1)

    rprint(explain(expression))

    if fields:
        seconds, cron5 = split_seconds(expression)
        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_column("Meaning")
        if seconds is not None:
            table.add_row("second", seconds, "[dim]ignored for run times[/dim]")
        breakdown = explain_fields(cron5) or {}
        for value, (key, meaning) in zip(cron5.split(), breakdown.items()):
            table.add_row(key.replace("_", " "), value, meaning)
        console.print(table)


@app.command(name="next")
def next_cmd(
    expression: Annotated[str, typer.Argument(help="Cron expression")],
    count: Annotated[Optional[int], typer.Option("--count", "-c", help="Number of runs")] = None,
    fmt: FormatOption = None,
) -> None:
    """Show the next run times of a cron expression."""
    fmt = fmt or detect_format(expression) or get_default_format()
    result = validate(expression, fmt)
    if not result.valid:
        rprint(f"[red]Error:[/red] {escape(result.error)}")
        raise typer.Exit(1)

    table = _runs_table(expression, get_default_count() if count is None else count, fmt)
    if table is None:
        rprint("[dim]No upcoming runs[/dim]")
        raise typer.Exit(0)
    console.print(table)


if __name__ == "__main__":
    app()
