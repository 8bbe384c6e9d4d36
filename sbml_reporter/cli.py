"""
Command-line interface for SBML-Reporter.

Provides commands for:
- Generating HTML and LaTeX reports of a model
- Summarizing a model in the terminal
- System diagnostics

Usage:
    sbml-reporter report model.xml out/
    sbml-reporter report model.xml out/ --format latex --stem mymodel
    sbml-reporter info model.xml
    sbml-reporter info model.xml --sbo-terms sbo.obo
    sbml-reporter doctor
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sbml_reporter import __version__
from sbml_reporter.config import APP_NAME
from sbml_reporter.exceptions import ReporterError
from sbml_reporter.ingest import load_model
from sbml_reporter.models import describe
from sbml_reporter.ontology import TermCatalog, load_term_catalog
from sbml_reporter.pipeline import FORMATS, ReportConfig, generate_reports
from sbml_reporter.preprocess import preprocess

app = typer.Typer(
    name="sbml-reporter",
    help="SBML-Reporter: HTML and LaTeX documentation for SBML models",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


def load_catalog(path: Optional[Path]) -> Optional[TermCatalog]:
    """Load a term catalog given on the command line, or None for the shipped one."""
    return load_term_catalog(path) if path is not None else None


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """SBML-Reporter: documentation generator for biochemical models."""
    pass


@app.command()
def report(
    input_file: Path = typer.Argument(
        ..., help="Model file (SBML .xml or .json)",
    ),
    output_dir: Path = typer.Argument(
        ..., help="Directory receiving the reports",
    ),
    fmt: str = typer.Option(
        "all", "--format", "-f",
        help="Output format: html, latex or all",
    ),
    stem: Optional[str] = typer.Option(
        None, "--stem", "-s",
        help="Output file name without extension (default: input file name)",
    ),
    sbo_terms: Optional[Path] = typer.Option(
        None, "--sbo-terms",
        help="SBO term catalog (.csv or sbo.obo) instead of the shipped one",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Log progress details",
    ),
):
    """Generate documentation for a model."""
    setup_logging(verbose)

    fmt = fmt.lower()
    formats = FORMATS if fmt == "all" else (fmt,)

    config = ReportConfig(
        formats=formats,
        output_dir=output_dir,
        stem=stem or input_file.stem,
    )

    try:
        catalog = load_catalog(sbo_terms)
        model = load_model(input_file)
        console.print(f"[green]Loaded model:[/] {describe(model)} from {input_file}")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Generating...", total=100)

            def update_progress(msg: str, pct: float):
                progress.update(task, description=msg, completed=int(pct * 100))

            written = generate_reports(
                model, config, catalog, progress_callback=update_progress,
            )
            progress.update(task, description="[green]Complete!", completed=100)
    except (ReporterError, ValueError, OSError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)

    for path in written:
        console.print(f"[green]Saved to:[/] {path}")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Model file (SBML .xml or .json)"),
    sbo_terms: Optional[Path] = typer.Option(
        None, "--sbo-terms",
        help="SBO term catalog (.csv or sbo.obo) instead of the shipped one",
    ),
):
    """Summarize compartments, species, reactions and SBO terms of a model."""
    try:
        model = load_model(input_file)
        index = preprocess(model, load_catalog(sbo_terms))
    except (ReporterError, ValueError, OSError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold]{describe(model)}[/] ({model.id})\n")

    table = Table(title="Compartments")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Species", justify="right")
    table.add_column("Reactions", justify="right")
    for c in model.compartments:
        table.add_row(
            c.id, c.name or "",
            str(len(index.species_in(c.id))), str(len(index.reactions_in(c.id))),
        )
    console.print(table)

    table = Table(title="Species")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Compartment")
    table.add_column("Initial Value", justify="right")
    for s in model.species:
        value = s.initial_amount if s.initial_amount is not None else s.initial_concentration
        table.add_row(s.id, s.name or "", s.compartment, "" if value is None else str(value))
    console.print(table)

    table = Table(title="Reactions")
    table.add_column("Id", style="cyan")
    table.add_column("Reactants")
    table.add_column("Products")
    table.add_column("Kinetic Law", style="green")
    for r in model.reactions:
        table.add_row(
            r.id, ", ".join(r.reactants), ", ".join(r.products),
            str(r.kinetic_law) if r.kinetic_law is not None else "",
        )
    console.print(table)

    if index.terms:
        table = Table(title="SBO Terms")
        table.add_column("Term", style="cyan")
        table.add_column("Name")
        for term in index.terms:
            table.add_row(term.id, term.name)
        console.print(table)


@app.command()
def doctor():
    """Check dependencies and shipped resources."""
    from sbml_reporter.diagnostics import run_diagnostics, summarize_checks

    console.print(f"[bold]{APP_NAME} v{__version__}[/]\n")

    checks = run_diagnostics()
    table = Table(title="Diagnostics")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")
    styles = {"ok": "[green]✓ ok[/]", "warn": "[yellow]⚠ warn[/]", "error": "[red]✗ error[/]"}
    for check in checks:
        table.add_row(check.name, styles.get(check.status, check.status), check.detail)
    console.print(table)

    summary = summarize_checks(checks)
    if summary["error"]:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
