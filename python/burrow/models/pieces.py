"""Piece catalog: the four amphipod kinds and the burrow's fixed cells."""

from __future__ import annotations

from enum import StrEnum


class Kind(StrEnum):
    AMBER = "A"
    BRONZE = "B"
    COPPER = "C"
    DESERT = "D"

    @classmethod
    def from_char(cls, char: str) -> Kind:
        try:
            return cls(char)
        except ValueError:
            raise ValueError(f"Unknown piece letter {char!r}.") from None

    @classmethod
    def for_column(cls, column: int) -> Kind:
        """Return the kind whose destination room is *column*."""
        return cls(OWNER[column])

    @property
    def column(self) -> int:
        return DESTINATION[self.value]

    @property
    def energy_per_step(self) -> int:
        return ENERGY[self.value]


class Cell(StrEnum):
    """Non-piece cells, stored by their diagram symbol."""

    EMPTY = "."
    WALL = "#"
    VOID = " "


# Plain-str lookups keep the search's inner loops off the Enum machinery.
DESTINATION: dict[str, int] = {"A": 2, "B": 4, "C": 6, "D": 8}
ENERGY: dict[str, int] = {"A": 1, "B": 10, "C": 100, "D": 1000}
OWNER: dict[int, str] = {col: kind for kind, col in DESTINATION.items()}

ROOM_COLUMNS: tuple[int, ...] = (2, 4, 6, 8)
PIECES = frozenset(DESTINATION)
