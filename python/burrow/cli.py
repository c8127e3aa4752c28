"""Amphipod burrow solver.

Usage::

    python main.py                      # all three variants of the example
    python main.py -i inputs/burrow.txt # folded + unfolded from a file
    python main.py -f rich --moves      # Rich tables with the move list
    python main.py -V extended -v       # deep extended burrow, debug logging
"""

from __future__ import annotations

import importlib
import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from burrow.engine.loader import EXAMPLE, EXTENDED_EXAMPLE, PuzzleLoader
from burrow.engine.solver import SearchOptions
from burrow.engine.state import State

ROOT = Path(__file__).resolve().parent.parent  # python/
PROJECT_ROOT = ROOT.parent
INPUTS_DIR = PROJECT_ROOT / "inputs"
DEFAULT_INPUT = INPUTS_DIR / "burrow.txt"

logger = logging.getLogger("burrow")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "burrow.frontend.cli.vanilla.app",
    Frontend.rich: "burrow.frontend.cli.rich.app",
}


class Variant(StrEnum):
    folded = "folded"
    unfolded = "unfolded"
    extended = "extended"


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _read(path: Optional[Path], fallback: str) -> State:
    if path is None:
        return PuzzleLoader.parse(fallback)
    logger.debug("loading %s", path)
    return PuzzleLoader.load(path)


def _build_puzzles(
    variants: list[Variant],
    input_path: Optional[Path],
    extended_path: Optional[Path],
) -> list[tuple[str, State]]:
    puzzles: list[tuple[str, State]] = []
    base: State | None = None
    for variant in variants:
        if variant is Variant.extended:
            puzzles.append((variant.value, _read(extended_path, EXTENDED_EXAMPLE)))
            continue
        if base is None:
            base = _read(input_path, EXAMPLE)
        if variant is Variant.folded:
            puzzles.append((variant.value, base))
        else:
            puzzles.append((variant.value, PuzzleLoader.unfold(base)))
    return puzzles


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    input_path: Optional[Path] = typer.Option(
        None, "-i", "--input",
        exists=True, dir_okay=False, readable=True,
        help="Burrow diagram for the folded/unfolded variants. Defaults to inputs/burrow.txt or the built-in example.",
    ),
    extended_path: Optional[Path] = typer.Option(
        None, "-x", "--extended-input",
        exists=True, dir_okay=False, readable=True,
        help="Burrow diagram for the extended variant. Defaults to the built-in deep example.",
    ),
    variants: Optional[list[Variant]] = typer.Option(
        None, "-V", "--variant",
        help="Variant(s) to solve. Repeatable; omit for all three.",
    ),
    frontend: Frontend = typer.Option(
        Frontend.vanilla, "-f", "--frontend",
        help="Output frontend.",
    ),
    show_moves: bool = typer.Option(False, "--moves", help="Print the optimal move sequence."),
    show_board: bool = typer.Option(False, "--board", help="Print each parsed burrow."),
    no_estimate: bool = typer.Option(
        False, "--no-estimate", help="Prune on accumulated energy only.",
    ),
    no_ordering: bool = typer.Option(
        False, "--no-ordering", help="Explore moves in generation order.",
    ),
    no_commit: bool = typer.Option(
        False, "--no-commit", help="Branch on every move even when a piece can go home.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Amphipod burrow solver."""
    _configure_logging(verbose)

    if input_path is None and DEFAULT_INPUT.exists():
        input_path = DEFAULT_INPUT

    try:
        puzzles = _build_puzzles(variants or list(Variant), input_path, extended_path)
    except ValueError as exc:
        typer.secho(f"Invalid burrow: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    options = SearchOptions(
        estimate=not no_estimate,
        order_moves=not no_ordering,
        commit_entries=not no_commit,
    )
    mod = importlib.import_module(_RUNNERS[frontend])
    results = mod.run(puzzles, show_board=show_board, show_moves=show_moves, options=options)

    if any(result.energy is None for result in results):
        raise typer.Exit(code=1)
