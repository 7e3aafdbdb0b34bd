"""
Command-line interface for Recital.

Provides commands for:
  - Planning a festival from an events file
  - Comparing plans across budget levels
  - Listing the keys related to a key
  - Finding a modulation path between two keys
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

from recital.config import load_config
from recital.core.exceptions import RecitalError

app = typer.Typer(
    name="recital",
    help="Recital -- festival planning and key modulation",
    add_completion=False,
)


def _setup(config_path: Optional[Path], verbose: bool):
    """Helper: configure logging and load the config for a command."""
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
    return load_config(config_path)


def _fail(err: RecitalError) -> None:
    logger.error(f"{err.code}: {err}")
    raise typer.Exit(code=2)


# ---------------------------------------------------------------------------
# festival
# ---------------------------------------------------------------------------

@app.command()
def festival(
    events_file: Path = typer.Argument(..., help="CSV, JSON or YAML events file"),
    budget: int = typer.Option(..., "--budget", "-b", help="Money available"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="exhaustive, memoized or tabulated",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the plan as JSON",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recital.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Choose the events that give the most minutes within a budget."""
    from recital.festival import SelectionOptimizer, load_events

    try:
        _setup(config_path, verbose)
        events = load_events(events_file)
        result = SelectionOptimizer(events=events, budget=budget, strategy=strategy).optimize()
    except RecitalError as e:
        _fail(e)

    typer.echo(f"Best total: {result.total_minutes} minutes ({result.strategy})")
    typer.echo(f"Spent: {result.total_cost} of {result.budget}")
    for event in result.selected:
        typer.echo(f"  - {event.label}: {event.minutes} min, ${event.cost}")

    if output is not None:
        result.save(output)
        logger.info(f"Saved plan to {output}")


# ---------------------------------------------------------------------------
# scenarios
# ---------------------------------------------------------------------------

@app.command()
def scenarios(
    events_file: Path = typer.Argument(..., help="CSV, JSON or YAML events file"),
    budgets: List[int] = typer.Option(..., "--budget", "-b", help="Budget level (repeatable)"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="exhaustive, memoized or tabulated",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recital.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Compare festival plans across several budgets."""
    from recital.festival import compare_scenarios, create_budget_scenarios, load_events

    try:
        _setup(config_path, verbose)
        events = load_events(events_file)
        table = compare_scenarios(create_budget_scenarios(events, budgets, strategy=strategy))
    except RecitalError as e:
        _fail(e)

    typer.echo(table.to_string(index=False))


# ---------------------------------------------------------------------------
# related
# ---------------------------------------------------------------------------

@app.command()
def related(
    key: str = typer.Argument(..., help='Key such as "C major" or "Bb minor"'),
    relations: Optional[List[int]] = typer.Option(
        None, "--relation", "-r", help="Allowed relation index 0-5 (repeatable)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recital.yaml",
    ),
):
    """List the keys a piece in KEY may modulate to."""
    from recital.modulation import related_keys

    try:
        cfg = _setup(config_path, verbose=False)
        keys = related_keys(key, relations or cfg.modulation.default_relations)
    except RecitalError as e:
        _fail(e)

    for name in sorted(keys):
        typer.echo(name)


# ---------------------------------------------------------------------------
# modulate
# ---------------------------------------------------------------------------

@app.command()
def modulate(
    start: str = typer.Argument(..., help="Starting key"),
    end: str = typer.Argument(..., help="Target key"),
    relations: Optional[List[int]] = typer.Option(
        None, "--relation", "-r", help="Allowed relation index 0-5 (repeatable)",
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="bfs or dfs",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recital.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Find the shortest chain of modulations from START to END."""
    from recital.modulation import ModulationPlanner

    try:
        _setup(config_path, verbose)
        result = ModulationPlanner(allowed_relations=relations, strategy=strategy).find(start, end)
    except RecitalError as e:
        _fail(e)

    if not result.found:
        typer.echo(f"No modulation path from {start} to {end}")
        raise typer.Exit(code=1)

    typer.echo(" -> ".join(result.path))
    typer.echo(f"{result.n_modulations} modulation(s)")


if __name__ == "__main__":
    app()
