"""Grid model for the amphipod burrow.

Each row is stored as an immutable string of cell symbols, so a grid is
cheap to copy-on-write and its joined rows serve as the canonical key
for memoisation.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Sequence

from burrow.models.pieces import (
    DESTINATION,
    OWNER,
    PIECES,
    ROOM_COLUMNS,
    Cell,
    Kind,
)

if TYPE_CHECKING:
    from burrow.engine.movegen.generator import Move

STANDARD_WIDTH = 11
EXTENDED_WIDTH = 12
BOTTOM_BORDER = "  #########"


@lru_cache(maxsize=None)
def hallway_stops(width: int) -> tuple[int, ...]:
    """Hallway columns a piece may stop on (never directly above a room)."""
    return tuple(c for c in range(width) if c not in ROOM_COLUMNS)


@dataclass(frozen=True, slots=True)
class Grid:
    """Hallway (row 0) plus ``depth`` room rows.

    Equality and hashing look at ``rows`` only.
    """

    rows: tuple[str, ...]
    depth: int = field(init=False, compare=False)
    width: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.rows) < 2:
            raise ValueError("A burrow needs a hallway and at least one room row.")
        width = len(self.rows[0])
        if width < STANDARD_WIDTH:
            raise ValueError(f"Hallway must be at least {STANDARD_WIDTH} wide, got {width}.")
        for r, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {r} has {len(row)} cells, expected {width}."
                )
        object.__setattr__(self, "depth", len(self.rows) - 1)
        object.__setattr__(self, "width", width)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_rooms(
        cls,
        rooms: Sequence[Sequence[str]],
        width: int = STANDARD_WIDTH,
        hallway: str | None = None,
    ) -> Grid:
        """Lay out a burrow from one top-to-bottom letter list per room.

        ``rooms`` is ordered like ``ROOM_COLUMNS``.  A ``width`` of 12
        selects the extended layout, whose rows below the second room row
        carry empty elbow cells at columns 0 and 10.

        Example::

            Grid.from_rooms([["B", "A"], ["C", "D"], ["B", "C"], ["D", "A"]])
        """
        if len(rooms) != len(ROOM_COLUMNS):
            raise ValueError(f"Expected {len(ROOM_COLUMNS)} rooms, got {len(rooms)}.")
        depth = len(rooms[0])
        if depth < 1 or any(len(room) != depth for room in rooms):
            raise ValueError("Every room must hold the same, non-zero number of pieces.")

        if hallway is None:
            hallway = Cell.EMPTY * width
        rows = [hallway]
        for r in range(depth):
            cells: list[str] = []
            for c in range(width):
                if c in ROOM_COLUMNS:
                    cells.append(rooms[ROOM_COLUMNS.index(c)][r])
                elif r == 0 or 1 <= c <= 9:
                    cells.append(Cell.WALL)
                elif width == EXTENDED_WIDTH and r >= 2 and c in (0, 10):
                    cells.append(Cell.EMPTY)
                else:
                    cells.append(Cell.VOID)
            rows.append("".join(cells))
        return cls(tuple(rows))

    @classmethod
    def solved(cls, depth: int, width: int = STANDARD_WIDTH) -> Grid:
        """Return the goal layout for the given dimensions."""
        return cls.from_rooms([[OWNER[c]] * depth for c in ROOM_COLUMNS], width)

    # -- queries --------------------------------------------------------------

    @property
    def key(self) -> str:
        """Canonical memo key: every cell, row after row."""
        return "".join(self.rows)

    @property
    def hallway(self) -> str:
        return self.rows[0]

    @property
    def stops(self) -> tuple[int, ...]:
        return hallway_stops(self.width)

    @property
    def extended(self) -> bool:
        return self.width == EXTENDED_WIDTH

    def cell(self, row: int, col: int) -> str:
        return self.rows[row][col]

    def room(self, col: int) -> str:
        """Room contents of column *col*, top to bottom."""
        return "".join(self.rows[r][col] for r in range(1, self.depth + 1))

    def rooms(self) -> list[str]:
        return [self.room(c) for c in ROOM_COLUMNS]

    def is_solved(self) -> bool:
        """True when every room is filled with its own kind."""
        rows = self.rows
        for col in ROOM_COLUMNS:
            owner = OWNER[col]
            for r in range(1, self.depth + 1):
                if rows[r][col] != owner:
                    return False
        return True

    def is_settled(self, row: int, col: int) -> bool:
        """True when the piece at (row, col) is home above only its own kind."""
        piece = self.rows[row][col]
        if piece not in PIECES or row == 0 or DESTINATION[piece] != col:
            return False
        return all(self.rows[r][col] == piece for r in range(row, self.depth + 1))

    def pieces(self) -> Counter[Kind]:
        return Counter(
            Kind(ch) for row in self.rows for ch in row if ch in PIECES
        )

    # -- transforms -----------------------------------------------------------

    def apply(self, move: Move) -> Grid:
        """Return a new grid with the moved piece relocated."""
        (sr, sc), (tr, tc) = move.source, move.target
        rows = list(self.rows)
        rows[sr] = _put(rows[sr], sc, Cell.EMPTY)
        rows[tr] = _put(rows[tr], tc, move.kind.value)
        return Grid(tuple(rows))

    def render(self) -> str:
        """Return the text diagram, matching the puzzle input format."""
        lines = ["#" * (self.width + 2)]
        for r, row in enumerate(self.rows):
            edge = Cell.WALL if r <= 1 else Cell.VOID
            lines.append((edge + row + edge).rstrip())
        lines.append(BOTTOM_BORDER)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


def _put(row: str, col: int, char: str) -> str:
    return row[:col] + char + row[col + 1 :]
