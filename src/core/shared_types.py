"""
Type definitions used across layers
"""

from enum import StrEnum


class GameStatus(StrEnum):
    PLACE_SHIPS = "place_ships"
    SHOOT = "shoot"
    FINISHED = "finished"


class ShipType(StrEnum):
    AIRCRAFT_CARRIER = "aircraft_carrier"
    BATTLESHIP = "battleship"
    SUBMARINE = "submarine"
    CRUISER = "cruiser"
    DESTROYER = "destroyer"

    @property
    def length(self) -> int:
        return SHIP_LENGTHS[self]


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.AIRCRAFT_CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.SUBMARINE: 3,
    ShipType.CRUISER: 3,
    ShipType.DESTROYER: 2,
}


class Orientation(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ShotState(StrEnum):
    """Outcome of a shot. A SUNK cell still counts as a hit on the board."""

    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"


class PlacementRule(StrEnum):
    """Which placement rule a rejected fleet violated."""

    MISSING_OR_DUPLICATE_TYPE = "missing_or_duplicate_type"
    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAP = "overlap"
