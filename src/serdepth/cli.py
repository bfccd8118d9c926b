"""
Command line front-end.

    serdepth check PATH... [--engine FILE] [--max-depth 8] [--dot FILE]
    serdepth graph PATH... [--engine FILE] [--output FILE]

PATH arguments are universe documents or directories of them (the project's
compiled type descriptions). Without --engine the built-in Unity engine
description is used.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from serdepth.analyzer import analyze_universe
from serdepth.backends import DotMode, format_report, generate_dot, save_dot_file
from serdepth.examples import build_unity_engine_universe
from serdepth.model import TypeUniverse
from serdepth.rules import DEFAULT_MAX_DEPTH, SerializationRules
from serdepth.serialization import UniverseFormatError, load_engine_universe, load_project_universe

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_BAD_INPUT = 2

app = typer.Typer(
    name="serdepth",
    help="Find serialized member chains that exceed the engine's serialization depth.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # skipped files are reported through warnings
    logging.captureWarnings(True)


def _load(paths: List[Path], engine: Optional[Path]) -> TypeUniverse:
    missing = [p for p in paths if not p.exists()]
    if missing:
        typer.secho(f"Error: Could not find {', '.join(str(p) for p in missing)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(EXIT_BAD_INPUT)

    if engine is None:
        engine_universe = build_unity_engine_universe()
    else:
        try:
            engine_universe = load_engine_universe(engine)
        except (OSError, UniverseFormatError) as e:
            typer.secho(f"Error: Could not load engine description: {e}", fg=typer.colors.RED, err=True)
            typer.echo("Please specify a valid engine description using the --engine option.", err=True)
            raise typer.Exit(EXIT_BAD_INPUT)
    logger.info("Engine object type: %s", engine_universe.engine_object)

    return load_project_universe(paths, engine=engine_universe)


@app.command()
def check(
    paths: List[Path] = typer.Argument(..., help="Universe files or directories of the project"),
    engine: Optional[Path] = typer.Option(None, "--engine", "-e", help="Engine description file (default: Unity)"),
    max_depth: int = typer.Option(DEFAULT_MAX_DEPTH, "--max-depth", "-d", min=1, help="Serialization depth bound"),
    dot: Optional[Path] = typer.Option(None, "--dot", help="Also write the dependency graph as DOT"),
    dot_mode: DotMode = typer.Option(DotMode.DETAILED, "--dot-mode", help="DOT visualization mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Report every member chain that reaches the serialization depth bound."""
    _configure_logging(verbose)
    universe = _load(paths, engine)

    rules = SerializationRules.for_universe(universe, max_depth=max_depth)
    report = analyze_universe(universe, rules)

    typer.echo(format_report(report))

    if dot is not None and report.graph is not None:
        save_dot_file(report.graph, str(dot), violations=report.violations, mode=dot_mode, roots=report.roots)
        typer.echo(f"Dependency graph written to {dot}")

    if not report.ok:
        raise typer.Exit(EXIT_VIOLATIONS)


@app.command()
def graph(
    paths: List[Path] = typer.Argument(..., help="Universe files or directories of the project"),
    engine: Optional[Path] = typer.Option(None, "--engine", "-e", help="Engine description file (default: Unity)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write DOT here instead of stdout"),
    mode: DotMode = typer.Option(DotMode.SIMPLE, "--mode", "-m", help="DOT visualization mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Print the serialization dependency graph in Graphviz DOT format."""
    _configure_logging(verbose)
    universe = _load(paths, engine)
    report = analyze_universe(universe)

    dot = generate_dot(report.graph, violations=report.violations, mode=mode, roots=report.roots)
    if output is None:
        typer.echo(dot)
    else:
        output.write_text(dot)
        typer.echo(f"Dependency graph written to {output}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
