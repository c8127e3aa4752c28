"""Vanilla terminal frontend with no third-party dependencies.

Uses only print and ANSI codes to report each variant's minimum energy,
optionally with the parsed burrow and the optimal move sequence.
"""

from __future__ import annotations

import sys
from typing import Sequence

from burrow.engine.solver import SearchOptions, SearchResult, Solver
from burrow.engine.state import State
from burrow.models.grid import Grid
from burrow.models.pieces import PIECES


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_R = "\033[0m"       # reset


def _format_time(seconds: float) -> str:
    m, s = divmod(seconds, 60)
    return f"{int(m)}m{s:04.1f}s" if m else f"{s:.2f}s"


# -- board rendering ----------------------------------------------------------


def _render_board(grid: Grid) -> str:
    """Return an ANSI-coloured diagram; settled pieces are green."""
    lines = grid.render().splitlines()
    out: list[str] = []
    for i, line in enumerate(lines):
        r = i - 1  # first line is the top border
        chars: list[str] = []
        for pos, ch in enumerate(line):
            if ch in PIECES:
                colour = _G if grid.is_settled(r, pos - 1) else _Y
                chars.append(f"{colour}{ch}{_R}")
            elif ch == "#":
                chars.append(f"{_DIM}#{_R}")
            else:
                chars.append(ch)
        out.append("  " + "".join(chars))
    return "\n".join(out)


# -- result reporting ---------------------------------------------------------


def _print_result(number: int, label: str, result: SearchResult, show_moves: bool) -> None:
    if result.energy is None:
        print(f"  Answer {number} ({label}): {_RED}no solution{_R}")
        return
    print(
        f"  Answer {number} ({label}): {_G}{result.energy}{_R}  "
        f"{_DIM}[{len(result.moves)} moves, {result.expanded} expanded, "
        f"{_format_time(result.elapsed)}]{_R}"
    )
    if show_moves:
        running = 0
        for i, move in enumerate(result.moves, 1):
            running += move.energy
            print(f"    {_C}{i:>3}.{_R} {move.to_notation():<32} {_DIM}total {running}{_R}")


# -- public entry point -------------------------------------------------------


def run(
    puzzles: Sequence[tuple[str, State]],
    show_board: bool = False,
    show_moves: bool = False,
    options: SearchOptions | None = None,
) -> list[SearchResult]:
    """Solve each labelled puzzle in turn and print its answer."""
    results: list[SearchResult] = []
    for number, (label, state) in enumerate(puzzles, 1):
        if show_board:
            print(f"\n  {_C}=== {label} (depth {state.depth}) ==={_R}")
            print(_render_board(state.grid))
        result = Solver.solve(state, options)
        _print_result(number, label, result, show_moves)
        sys.stdout.flush()
        results.append(result)
    return results
