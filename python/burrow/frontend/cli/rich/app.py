"""Rich terminal frontend: tables and panels.

Uses the ``rich`` library for styled output while sharing the same
solver as the vanilla CLI.
"""

from __future__ import annotations

from typing import Sequence

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from burrow.engine.solver import SearchOptions, SearchResult, Solver
from burrow.engine.state import State
from burrow.models.grid import Grid
from burrow.models.pieces import PIECES

console = Console()

_PIECE_STYLE = {
    "A": "bold bright_yellow",
    "B": "bold orange3",
    "C": "bold bright_cyan",
    "D": "bold magenta",
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(seconds, 60)
    return f"{int(m):02d}:{s:05.2f}"


# -- board rendering ----------------------------------------------------------


def _render_board(grid: Grid) -> Text:
    """Return the burrow diagram with settled pieces underlined in green."""
    text = Text()
    for i, line in enumerate(grid.render().splitlines()):
        r = i - 1
        for pos, ch in enumerate(line):
            if ch in PIECES:
                style = "bold green underline" if grid.is_settled(r, pos - 1) else _PIECE_STYLE[ch]
                text.append(ch, style=style)
            elif ch == "#":
                text.append(ch, style="bright_blue")
            elif ch == ".":
                text.append("·", style="dim")
            else:
                text.append(ch)
        text.append("\n")
    text.rstrip()
    return text


def _board_panel(label: str, state: State) -> Panel:
    return Panel(
        Align.center(_render_board(state.grid)),
        title=f"[bold cyan]{label}  depth {state.depth}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )


# -- result reporting ---------------------------------------------------------


def _results_table(rows: list[tuple[str, SearchResult]]) -> Table:
    table = Table(
        title="[bold]A M P H I P O D   B U R R O W[/bold]",
        box=rich.box.HEAVY,
        border_style="bright_blue",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Variant", style="bold cyan")
    table.add_column("Energy", justify="right")
    table.add_column("Moves", justify="right")
    table.add_column("Expanded", justify="right", style="dim")
    table.add_column("Memo", justify="right", style="dim")
    table.add_column("Time", justify="right", style="dim")

    for number, (label, result) in enumerate(rows, 1):
        energy = (
            f"[bold green]{result.energy}[/bold green]"
            if result.energy is not None
            else "[red]no solution[/red]"
        )
        table.add_row(
            str(number),
            label,
            energy,
            str(len(result.moves)),
            f"{result.expanded:,}",
            f"{result.memo_size:,}",
            _format_time(result.elapsed),
        )
    return table


def _moves_panel(label: str, result: SearchResult) -> Panel:
    table = Table(show_header=True, box=rich.box.SIMPLE, padding=(0, 1))
    table.add_column("Step", justify="right", style="dim")
    table.add_column("Piece", justify="center")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Energy", justify="right")
    table.add_column("Total", justify="right", style="bold")

    running = 0
    for i, move in enumerate(result.moves, 1):
        running += move.energy
        table.add_row(
            str(i),
            Text(move.kind.value, style=_PIECE_STYLE[move.kind.value]),
            f"{move.source}",
            f"{move.target}",
            str(move.energy),
            str(running),
        )
    return Panel(
        table,
        title=f"[bold cyan]Optimal moves: {label}[/bold cyan]",
        border_style="cyan",
    )


# -- public entry point -------------------------------------------------------


def run(
    puzzles: Sequence[tuple[str, State]],
    show_board: bool = False,
    show_moves: bool = False,
    options: SearchOptions | None = None,
) -> list[SearchResult]:
    """Solve each labelled puzzle and present the results with Rich."""
    solved: list[tuple[str, SearchResult]] = []
    for label, state in puzzles:
        if show_board:
            console.print(Align.center(_board_panel(label, state)))
        with console.status(f"[cyan]Searching {label}…[/cyan]", spinner="dots"):
            result = Solver.solve(state, options)
        solved.append((label, result))

    if show_moves:
        console.print(
            Group(*(_moves_panel(label, r) for label, r in solved if r.moves))
        )
    console.print()
    console.print(Align.center(_results_table(solved)))
    return [result for _, result in solved]
