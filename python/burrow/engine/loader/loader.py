"""Parses burrow diagrams and unfolds shallow puzzles into deeper ones."""

from __future__ import annotations

import logging
from pathlib import Path

from burrow.engine.state.state import State
from burrow.models.grid import BOTTOM_BORDER, EXTENDED_WIDTH, STANDARD_WIDTH, Grid
from burrow.models.pieces import PIECES, ROOM_COLUMNS, Kind

logger = logging.getLogger(__name__)

EXAMPLE = """\
#############
#...........#
###B#C#B#D###
  #A#D#C#A#
  #########
"""

EXTENDED_EXAMPLE = """\
##############
#............#
###B#C#B#D####
  #D#C#B#A#
  #D#B#A#C#
  #D#C#B#A#
  #D#B#A#C#
  #A#D#C#A#
  #########
"""

# Rows spliced in between the two room rows when unfolding.
UNFOLD_ROWS: tuple[str, str] = ("DCBA", "DBAC")

_ALLOWED = frozenset("#. ") | PIECES
_LETTER_POSITIONS = tuple(c + 1 for c in ROOM_COLUMNS)
_SEPARATOR_POSITIONS = (2, 4, 6, 8, 10)


class PuzzleFormatError(ValueError):
    """Raised when a burrow diagram does not match the expected shape."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line + 1}: {message}"
        super().__init__(message)


class PuzzleLoader:
    """Stateless loader; all methods are static."""

    @staticmethod
    def parse(text: str) -> State:
        """Build the initial state (energy 0) from a burrow diagram."""
        lines = [line.rstrip() for line in text.splitlines()]
        while lines and not lines[-1]:
            lines.pop()
        if len(lines) < 4:
            raise PuzzleFormatError(
                f"expected a border, a hallway, room rows and a bottom border; got {len(lines)} lines"
            )

        top, hallway, *room_lines, bottom = lines
        width = len(top) - 2
        if width not in (STANDARD_WIDTH, EXTENDED_WIDTH) or set(top) != {"#"}:
            raise PuzzleFormatError(f"malformed top border {top!r}", 0)
        if hallway != "#" + "." * width + "#":
            raise PuzzleFormatError(
                f"hallway must be {width} empty cells between walls, got {hallway!r}", 1
            )
        if bottom != BOTTOM_BORDER:
            raise PuzzleFormatError(f"malformed bottom border {bottom!r}", len(lines) - 1)

        rooms: list[list[str]] = [[] for _ in ROOM_COLUMNS]
        for offset, line in enumerate(room_lines):
            index = offset + 2
            PuzzleLoader._check_room_line(line, index, first=offset == 0, width=width)
            for room, pos in zip(rooms, _LETTER_POSITIONS):
                room.append(Kind.from_char(line[pos]))

        depth = len(room_lines)
        grid = Grid.from_rooms(rooms, width)
        counts = grid.pieces()
        for kind in Kind:
            if counts[kind] != depth:
                raise PuzzleFormatError(
                    f"expected {depth} pieces of kind {kind.value}, found {counts[kind]}"
                )

        logger.debug("parsed burrow: depth=%d width=%d", depth, width)
        return State(grid)

    @staticmethod
    def load(path: Path) -> State:
        return PuzzleLoader.parse(Path(path).read_text())

    @staticmethod
    def unfold(state: State) -> State:
        """Splice the two fixed rows into a depth-2 burrow, keeping its energy."""
        grid = state.grid
        if grid.depth != 2:
            raise ValueError(f"Only depth-2 burrows can be unfolded, got depth {grid.depth}.")

        rooms = [
            [top, *inserted, bottom]
            for (top, bottom), inserted in zip(grid.rooms(), zip(*UNFOLD_ROWS))
        ]
        unfolded = Grid.from_rooms(rooms, grid.width, hallway=grid.hallway)
        return State(unfolded, state.energy)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _check_room_line(line: str, index: int, first: bool, width: int) -> None:
        if len(line) <= max(_SEPARATOR_POSITIONS):
            raise PuzzleFormatError(f"room row too short: {line!r}", index)
        if len(line) > width + 2:
            raise PuzzleFormatError(f"room row too long: {line!r}", index)
        stray = set(line) - _ALLOWED
        if stray:
            raise PuzzleFormatError(
                f"unexpected characters {''.join(sorted(stray))!r}", index
            )
        for pos, char in enumerate(line):
            if pos in _LETTER_POSITIONS:
                if char not in PIECES:
                    raise PuzzleFormatError(
                        f"expected a piece letter at column {pos + 1}, got {char!r}", index
                    )
            elif pos in _SEPARATOR_POSITIONS or first:
                if char != "#":
                    raise PuzzleFormatError(
                        f"expected a wall at column {pos + 1}, got {char!r}", index
                    )
            elif char in PIECES:
                raise PuzzleFormatError(
                    f"piece letter {char!r} outside a room at column {pos + 1}", index
                )
        if first and len(line) != width + 2:
            raise PuzzleFormatError(f"first room row must span the burrow: {line!r}", index)
