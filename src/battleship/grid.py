"""
A coordinate on the playing field and the per-cell record of shots that landed on it

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from src.core.shared_types import ShotState

# The field is always 10x10 in classic Battleship.
GRID_SIZE = 10


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def is_within_bounds(self) -> bool:
        return 0 <= self.x < GRID_SIZE and 0 <= self.y < GRID_SIZE

    def to_index(self) -> int:
        return self.y * GRID_SIZE + self.x

    @classmethod
    def from_index(cls, index: int) -> Coordinate:
        y, x = divmod(index, GRID_SIZE)
        return cls(x, y)


@dataclass
class Grid:
    """Shot record for one board. A cell holds None until a shot lands on it."""

    cells: list[ShotState | None] = field(
        default_factory=lambda: [None] * (GRID_SIZE * GRID_SIZE)
    )

    def state(self, coordinate: Coordinate) -> ShotState | None:
        return self.cells[coordinate.to_index()]

    def was_shot(self, coordinate: Coordinate) -> bool:
        return self.state(coordinate) is not None

    def mark(self, coordinate: Coordinate, state: ShotState) -> None:
        self.cells[coordinate.to_index()] = state

    def hits(self) -> list[Coordinate]:
        """Cells where a ship was hit (a sinking hit is a hit too)"""
        return [
            coordinate
            for coordinate, state in self._recorded()
            if state in (ShotState.HIT, ShotState.SUNK)
        ]

    def misses(self) -> list[Coordinate]:
        return [
            coordinate
            for coordinate, state in self._recorded()
            if state == ShotState.MISS
        ]

    def _recorded(self) -> Iterator[tuple[Coordinate, ShotState]]:
        for index, state in enumerate(self.cells):
            if state is not None:
                yield Coordinate.from_index(index), state
