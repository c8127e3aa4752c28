"""Enumerates every legal single-piece move out of a burrow layout."""

from __future__ import annotations

from dataclasses import dataclass

from burrow.engine.state.state import State
from burrow.models.grid import Grid
from burrow.models.pieces import DESTINATION, ENERGY, PIECES, ROOM_COLUMNS, Cell, Kind


@dataclass(frozen=True, slots=True)
class Move:
    """One piece travelling from ``source`` to ``target`` as (row, col)."""

    kind: Kind
    source: tuple[int, int]
    target: tuple[int, int]
    steps: int

    @property
    def energy(self) -> int:
        return self.steps * ENERGY[self.kind.value]

    @property
    def enters_room(self) -> bool:
        return self.target[0] > 0

    def to_notation(self) -> str:
        (sr, sc), (tr, tc) = self.source, self.target
        return f"{self.kind.value} ({sr},{sc})->({tr},{tc}) x{self.steps} = {self.energy}"


class MoveGenerator:
    """Stateless move generator; all methods are static."""

    @staticmethod
    def moves(grid: Grid) -> list[Move]:
        """Return every legal move, hallway-to-room entries first."""
        out: list[Move] = []
        hallway = grid.hallway
        for col in grid.stops:
            if hallway[col] in PIECES:
                move = MoveGenerator._into_room(grid, col)
                if move is not None:
                    out.append(move)
        for col in ROOM_COLUMNS:
            out.extend(MoveGenerator._out_of_room(grid, col))
        return out

    @staticmethod
    def next_states(state: State) -> list[tuple[Move, State]]:
        return [(move, state.apply(move)) for move in MoveGenerator.moves(state.grid)]

    # -- hallway -> room ------------------------------------------------------

    @staticmethod
    def _into_room(grid: Grid, col: int) -> Move | None:
        rows = grid.rows
        piece = rows[0][col]
        dest = DESTINATION[piece]

        if not MoveGenerator.hallway_clear(grid, col, dest):
            return None

        # A room only takes pieces once every foreign kind has left it.
        deepest = 0
        for r in range(1, grid.depth + 1):
            cell = rows[r][dest]
            if cell == Cell.EMPTY:
                deepest = r
            elif cell != piece:
                return None
        if deepest == 0:
            return None

        return Move(Kind(piece), (0, col), (deepest, dest), deepest + abs(col - dest))

    # -- room -> hallway ------------------------------------------------------

    @staticmethod
    def _out_of_room(grid: Grid, col: int) -> list[Move]:
        rows = grid.rows
        row = MoveGenerator.top_of_room(grid, col)
        if row is None or grid.is_settled(row, col):
            return []

        kind = Kind(rows[row][col])
        hallway = rows[0]
        out: list[Move] = []
        for direction in (-1, 1):
            t = col + direction
            while 0 <= t < grid.width and hallway[t] == Cell.EMPTY:
                if t not in ROOM_COLUMNS:
                    out.append(Move(kind, (row, col), (0, t), row + abs(col - t)))
                t += direction
        return out

    # -- predicates -----------------------------------------------------------

    @staticmethod
    def hallway_clear(grid: Grid, start: int, end: int) -> bool:
        """True when hallway cells from *start* (exclusive) to *end* are empty."""
        hallway = grid.hallway
        if start < end:
            span = hallway[start + 1 : end + 1]
        else:
            span = hallway[end:start]
        return span == Cell.EMPTY * len(span)

    @staticmethod
    def top_of_room(grid: Grid, col: int) -> int | None:
        """Row of the uppermost piece in room *col*, or ``None`` if empty."""
        rows = grid.rows
        for r in range(1, grid.depth + 1):
            if rows[r][col] != Cell.EMPTY:
                return r
        return None
