"""Defines a ship placed on a board and the damage it has taken"""

from dataclasses import dataclass, field

from src.battleship.grid import Coordinate
from src.core.shared_types import Orientation, ShipType


@dataclass
class Ship:
    type: ShipType
    x: int
    y: int
    orientation: Orientation
    hits: int = 0
    cells: tuple[Coordinate, ...] = field(init=False)

    def __post_init__(self):
        # The anchor is the first cell. Horizontal ships extend to the right (+x), vertical ships downwards (+y)
        if self.orientation == Orientation.HORIZONTAL:
            self.cells = tuple(
                Coordinate(self.x + i, self.y) for i in range(self.length)
            )
        else:
            self.cells = tuple(
                Coordinate(self.x, self.y + i) for i in range(self.length)
            )

    @property
    def length(self) -> int:
        return self.type.length

    def occupies(self, coordinate: Coordinate) -> bool:
        return coordinate in self.cells

    def is_within_bounds(self) -> bool:
        return all(cell.is_within_bounds() for cell in self.cells)

    def overlaps(self, other: "Ship") -> bool:
        return not set(self.cells).isdisjoint(other.cells)

    def register_hit(self) -> None:
        """Only call this for a cell that has not been hit before: the board keeps track of that."""
        self.hits += 1

    def is_sunk(self) -> bool:
        return self.hits >= self.length
