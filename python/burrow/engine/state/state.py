"""A single search node: a grid snapshot plus the energy spent to reach it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from burrow.models.grid import Grid

if TYPE_CHECKING:
    from burrow.engine.movegen.generator import Move


@dataclass(frozen=True, slots=True)
class State:
    """Immutable (grid, energy) pair.

    Two states share a memo entry whenever their grids match, whatever
    energy each one carries.
    """

    grid: Grid
    energy: int = 0

    def __post_init__(self) -> None:
        if self.energy < 0:
            raise ValueError(f"Energy cannot be negative, got {self.energy}.")

    @property
    def key(self) -> str:
        return self.grid.key

    @property
    def depth(self) -> int:
        return self.grid.depth

    def is_solved(self) -> bool:
        return self.grid.is_solved()

    def apply(self, move: Move) -> State:
        return State(self.grid.apply(move), self.energy + move.energy)
