"""Solver test suite: fixture burrows plus the three reference puzzles.

Burrows are JSON fixtures under ``<project_root>/fixtures/``.  Every
test is hard-killed by ``pytest-timeout`` (configured in
``pyproject.toml``); the deep searches carry their own, larger limit.
If the solver returns in time, its move list is replayed through
``State.apply`` to verify that it really sorts the burrow at the
reported energy.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from burrow.engine.loader import EXAMPLE, EXTENDED_EXAMPLE, PuzzleLoader
from burrow.engine.movegen import MoveGenerator
from burrow.engine.solver import SearchOptions, SearchResult, Solver
from burrow.engine.solver.solver import estimate_remaining
from burrow.engine.state import State
from burrow.models.grid import Grid

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures"


# -- fixture loaders ----------------------------------------------------------


def _load(name: str) -> list[dict]:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


def _ids(burrow_data: dict) -> str:
    return burrow_data["id"]


_BURROWS = _load("burrows.json")


# -- helpers ------------------------------------------------------------------


def _replay(state: State, result: SearchResult) -> State:
    """Apply the reported moves one by one, checking each is legal."""
    for i, move in enumerate(result.moves):
        legal = MoveGenerator.moves(state.grid)
        assert move in legal, f"Move {i} ({move.to_notation()}) is not legal here"
        state = state.apply(move)
    return state


def _assert_solve(state: State, expected: int, options: SearchOptions | None = None) -> SearchResult:
    result = Solver.solve(state, options)

    assert result.energy == expected
    final = _replay(state, result)
    assert final.is_solved(), f"Burrow not sorted after {len(result.moves)} moves"
    assert final.energy == expected
    assert sum(move.energy for move in result.moves) == expected
    return result


# -- fixture burrows ----------------------------------------------------------


@pytest.mark.parametrize("burrow_data", _BURROWS, ids=_ids)
def test_solve_fixture(burrow_data: dict) -> None:
    state = PuzzleLoader.parse(burrow_data["diagram"])
    _assert_solve(state, burrow_data["energy"])


@pytest.mark.parametrize(
    "options",
    [
        SearchOptions(estimate=False, order_moves=False, commit_entries=False),
        SearchOptions(estimate=True, order_moves=False, commit_entries=False),
        SearchOptions(estimate=False, order_moves=True, commit_entries=False),
        SearchOptions(estimate=False, order_moves=False, commit_entries=True),
    ],
    ids=["plain", "estimate", "ordered", "commit"],
)
def test_options_do_not_change_the_answer(options: SearchOptions) -> None:
    _assert_solve(PuzzleLoader.parse(EXAMPLE), 12521, options)


# -- reference puzzles --------------------------------------------------------


def test_folded_example() -> None:
    _assert_solve(PuzzleLoader.parse(EXAMPLE), 12521)


@pytest.mark.timeout(300)
def test_unfolded_example() -> None:
    _assert_solve(PuzzleLoader.unfold(PuzzleLoader.parse(EXAMPLE)), 44169)


@pytest.mark.timeout(900)
def test_extended_example() -> None:
    _assert_solve(PuzzleLoader.parse(EXTENDED_EXAMPLE), 82849)


# -- search behaviour ---------------------------------------------------------


def test_already_solved_expands_nothing() -> None:
    result = Solver.solve(State(Grid.solved(4)))

    assert result.energy == 0
    assert result.expanded == 0
    assert result.moves == []
    assert result.improvements == [0]


def test_bound_only_tightens() -> None:
    options = SearchOptions(estimate=False, order_moves=False, commit_entries=False)
    result = Solver.solve(PuzzleLoader.parse(EXAMPLE), options)

    assert result.improvements, "no solution was ever recorded"
    assert all(a > b for a, b in zip(result.improvements, result.improvements[1:]))
    assert result.improvements[-1] == result.energy == 12521


def test_unsolvable_burrow_reports_no_solution() -> None:
    # Two amber pieces and no bronze one: room 4 can never be filled.
    grid = Grid.from_rooms([["A"], ["A"], ["C"], ["D"]])
    result = Solver.solve(State(grid))

    assert result.energy is None
    assert not result.solved
    assert result.moves == []


def test_estimate_never_overshoots_along_optimal_path() -> None:
    state = PuzzleLoader.parse(EXAMPLE)
    result = Solver.solve(state)

    for move in result.moves:
        assert estimate_remaining(state.grid) <= result.energy - state.energy
        state = state.apply(move)
    assert estimate_remaining(state.grid) == 0


def test_memo_counts_are_consistent() -> None:
    result = Solver.solve(PuzzleLoader.parse(EXAMPLE))

    assert 0 < result.memo_size <= result.expanded <= result.visited


# -- hint ---------------------------------------------------------------------


def test_hint_is_first_optimal_move() -> None:
    state = PuzzleLoader.parse(_BURROWS[2]["diagram"])
    hint = Solver.hint(state)

    assert hint is not None
    assert hint in MoveGenerator.moves(state.grid)
    # The successor carries the hint's energy, so its optimum is the full total.
    assert Solver.solve(state.apply(hint)).energy == 46


def test_hint_on_solved_burrow_is_none() -> None:
    assert Solver.hint(State(Grid.solved(2))) is None
