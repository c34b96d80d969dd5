"""Final run summary.

The per-step results table reflects what actually ran. The "Installed
tools" and "Next steps" sections that follow are printed unchanged for every
successful run, whatever was selected.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import click
from rich.console import Console
from rich.table import Table


@dataclass(frozen=True)
class RunResult:
    """Outcome of one executed step."""

    step_id: str
    succeeded: bool
    message: str = ""


INSTALLED_TOOLS = (
    "- Homebrew with development packages",
    "- Node.js, Python 3.12, Go",
    "- Git, GitHub CLI",
    "- CLI utilities (fzf, ripgrep, htop, tree)",
    "- JetBrains IDEs (IntelliJ, WebStorm, PyCharm)",
    "- System optimizations for development",
)

NEXT_STEPS = (
    "1. Restart your terminal or run: source ~/.bashrc",
    "2. Test tools: brew --version, node --version, gh auth status",
    "3. Launch IDEs from applications menu",
)


def build_results_table(results: Sequence[RunResult]) -> Table:
    table = Table(title="Steps", show_header=True, header_style="bold")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for result in results:
        status = "[green]OK[/green]" if result.succeeded else "[red]FAILED[/red]"
        table.add_row(result.step_id, status, result.message)

    return table


def print_summary(results: Sequence[RunResult], console: Console | None = None) -> None:
    """Print the results table followed by the static tool list."""
    console = console or Console()

    click.echo()
    if results:
        console.print(build_results_table(results))
    else:
        click.echo("No steps were selected.")

    click.echo()
    click.echo("Installed tools:")
    for line in INSTALLED_TOOLS:
        click.echo(line)
    click.echo()
    click.echo("Next steps:")
    for line in NEXT_STEPS:
        click.echo(line)
    click.echo()
    click.echo("Happy coding! 🚀")


__all__ = ["INSTALLED_TOOLS", "NEXT_STEPS", "RunResult", "build_results_table", "print_summary"]
