"""Minimum-energy solver: depth-first branch-and-bound with a dominance memo."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field

from burrow.engine.movegen.generator import Move, MoveGenerator
from burrow.engine.state.state import State
from burrow.models.grid import Grid
from burrow.models.pieces import DESTINATION, ENERGY, OWNER, PIECES, ROOM_COLUMNS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchOptions:
    # Prune with an admissible estimate of the energy still to spend.
    estimate: bool = True
    # Try room entries first, then cheaper moves, to tighten the bound early.
    order_moves: bool = True
    # A piece that can reach its room now loses nothing by going straight in.
    commit_entries: bool = True


DEFAULT_OPTIONS = SearchOptions()


@dataclass
class SearchContext:
    """Bookkeeping shared by every recursive call of one search run."""

    options: SearchOptions = DEFAULT_OPTIONS
    best: float = math.inf
    memo: dict[str, int] = field(default_factory=dict)
    path: list[Move] = field(default_factory=list)
    best_path: list[Move] = field(default_factory=list)
    improvements: list[int] = field(default_factory=list)
    visited: int = 0
    expanded: int = 0
    pruned: int = 0
    started: float = field(default_factory=time.perf_counter)

    def improve(self, energy: int) -> None:
        self.best = energy
        self.best_path = list(self.path)
        self.improvements.append(energy)
        logger.debug(
            "bound tightened to %d after %d expansions", energy, self.expanded
        )

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started


@dataclass
class SearchResult:
    energy: int | None
    moves: list[Move]
    visited: int
    expanded: int
    pruned: int
    memo_size: int
    improvements: list[int]
    elapsed: float

    @property
    def solved(self) -> bool:
        return self.energy is not None


class Solver:
    """Stateless solver; all methods are static."""

    @staticmethod
    def solve(state: State, options: SearchOptions | None = None) -> SearchResult:
        """Return the minimum energy that sorts *state*, with one optimal path.

        ``energy`` is ``None`` when no sequence of legal moves reaches a
        solved burrow.
        """
        context = SearchContext(options=options or DEFAULT_OPTIONS)
        found = Solver._search(state, context)
        energy = None if math.isinf(found) else int(found)

        logger.info(
            "depth-%d burrow: energy=%s expanded=%d memo=%d in %.2fs",
            state.depth, energy, context.expanded, len(context.memo), context.elapsed,
        )
        return SearchResult(
            energy=energy,
            moves=context.best_path if energy is not None else [],
            visited=context.visited,
            expanded=context.expanded,
            pruned=context.pruned,
            memo_size=len(context.memo),
            improvements=context.improvements,
            elapsed=context.elapsed,
        )

    @staticmethod
    def hint(state: State) -> Move | None:
        """Return the first move of an optimal sequence, or ``None`` if solved / unsolvable."""
        if state.is_solved():
            return None
        result = Solver.solve(state)
        return result.moves[0] if result.moves else None

    # -- search ---------------------------------------------------------------

    @staticmethod
    def _search(state: State, context: SearchContext) -> float:
        context.visited += 1
        energy = state.energy

        bound = energy
        if context.options.estimate:
            bound += estimate_remaining(state.grid)
        if bound >= context.best:
            context.pruned += 1
            return math.inf

        if state.is_solved():
            if energy < context.best:
                context.improve(energy)
            return energy

        key = state.key
        seen = context.memo.get(key)
        if seen is not None and seen <= energy:
            context.pruned += 1
            return math.inf
        context.memo[key] = energy

        context.expanded += 1
        children = MoveGenerator.next_states(state)
        if context.options.commit_entries and children and children[0][0].enters_room:
            children = children[:1]
        elif context.options.order_moves:
            children.sort(key=lambda pair: (not pair[0].enters_room, pair[0].energy))

        result = math.inf
        for move, child in children:
            context.path.append(move)
            found = Solver._search(child, context)
            context.path.pop()
            if found < result:
                result = found
        return result


def estimate_remaining(grid: Grid) -> int:
    """Lower bound on the energy still needed to sort *grid*.

    Every unsettled piece must at least walk to its room entrance, and
    the pieces still to arrive in a room fill its top slots one row each.
    """
    rows = grid.rows
    total = 0
    arriving = dict.fromkeys(PIECES, 0)

    for col, piece in enumerate(rows[0]):
        if piece in PIECES:
            total += abs(col - DESTINATION[piece]) * ENERGY[piece]
            arriving[piece] += 1

    for col in ROOM_COLUMNS:
        owner = OWNER[col]
        settled = grid.depth
        while settled >= 1 and rows[settled][col] == owner:
            settled -= 1
        for r in range(1, settled + 1):
            piece = rows[r][col]
            if piece not in PIECES:
                continue
            sideways = abs(col - DESTINATION[piece]) if piece != owner else 2
            total += (r + sideways) * ENERGY[piece]
            arriving[piece] += 1

    for piece, n in arriving.items():
        total += n * (n + 1) // 2 * ENERGY[piece]
    return total
