"""Command-line interface for Complexity Insight"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .api import analyse_file
from .config import load_settings
from .engine import Report
from .exceptions import ComplexityInsightError
from .logging_config import setup_logging

app = typer.Typer(
    name="complexity-insight",
    help="Complexity Insight - cyclomatic, Halstead and maintainability metrics",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(
            f"[bold cyan]Complexity Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)


@app.command()
def main(
    paths: List[Path] = typer.Argument(
        ...,
        help="Python source files to analyse",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default), json",
    ),
    logicalor: Optional[bool] = typer.Option(
        None,
        "--logicalor/--no-logicalor",
        help="Count each 'or' operand as a decision point",
    ),
    switchcase: Optional[bool] = typer.Option(
        None,
        "--switchcase/--no-switchcase",
        help="Count each match case as a decision point",
    ),
    forin: Optional[bool] = typer.Option(
        None,
        "--forin/--no-forin",
        help="Count comprehension loops as decision points",
    ),
    trycatch: Optional[bool] = typer.Option(
        None,
        "--trycatch/--no-trycatch",
        help="Count exception handlers as decision points",
    ),
    newmi: Optional[bool] = typer.Option(
        None,
        "--newmi/--no-newmi",
        help="Rescale the maintainability index to 0-100",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Report complexity metrics for Python source files.

    [bold cyan]Examples:[/bold cyan]

      complexity-insight module.py

      complexity-insight src/a.py src/b.py --newmi

      complexity-insight module.py --format json | jq .
    """
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    valid_formats = {"rich", "json"}
    if fmt not in valid_formats:
        console.print(f"[red]Error:[/red] --format must be one of: {', '.join(sorted(valid_formats))}")
        raise typer.Exit(1)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_settings(
            config_file=config,
            logicalor=logicalor,
            switchcase=switchcase,
            forin=forin,
            trycatch=trycatch,
            newmi=newmi,
        )
        logger.debug(f"Loaded settings: {settings.to_dict()}")

        results = [(path, analyse_file(path, settings)) for path in paths]

        if fmt == "json":
            print(
                json.dumps(
                    [{"path": str(path), "report": report.to_dict()} for path, report in results],
                    indent=2,
                )
            )
        else:
            for path, report in results:
                print_report(path, report)

    except ComplexityInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def print_report(path: Path, report: Report) -> None:
    """Render one report as a rich table followed by module totals."""
    table = Table(title=str(path), title_style="bold cyan")
    table.add_column("Function")
    table.add_column("Line", justify="right")
    table.add_column("LLOC", justify="right")
    table.add_column("Cyclomatic", justify="right")
    table.add_column("Density", justify="right")
    table.add_column("Params", justify="right")
    table.add_column("Effort", justify="right")

    for fn in report.functions:
        table.add_row(
            fn.name or "<anonymous>",
            str(fn.line) if fn.line is not None else "-",
            f"{fn.logical_sloc:g}",
            f"{fn.cyclomatic:g}",
            f"{fn.cyclomatic_density:.1f}",
            str(fn.params),
            f"{fn.halstead.effort:.1f}",
        )

    console.print(table)

    aggregate = report.aggregate
    console.print(
        f"  LLOC [yellow]{aggregate.logical_sloc:g}[/yellow]  "
        f"Cyclomatic [yellow]{aggregate.cyclomatic:g}[/yellow]  "
        f"Effort [yellow]{aggregate.halstead.effort:.1f}[/yellow]  "
        f"Params/fn [yellow]{report.params:.2f}[/yellow]  "
        f"Maintainability [bold green]{report.maintainability:.2f}[/bold green]"
    )
    if report.dependencies:
        paths = ", ".join(str(dep.get("path", dep)) if isinstance(dep, dict) else str(dep)
                          for dep in report.dependencies)
        console.print(f"  Dependencies: [blue]{paths}[/blue]")
    console.print()


if __name__ == "__main__":
    app()
