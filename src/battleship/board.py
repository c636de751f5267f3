"""The Board implements all rules that affect a single player's fleet: where ships may be placed, and what a shot at a cell does."""

from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations

from src.battleship.grid import Coordinate, Grid
from src.battleship.ship import Ship
from src.core.exceptions import InvalidPlacementError, OutOfBoundsError
from src.core.shared_types import Orientation, PlacementRule, ShipType, ShotState

# One of each, in this order when a default fleet is built.
REQUIRED_FLEET: tuple[ShipType, ...] = (
    ShipType.AIRCRAFT_CARRIER,
    ShipType.BATTLESHIP,
    ShipType.SUBMARINE,
    ShipType.CRUISER,
    ShipType.DESTROYER,
)


@dataclass(frozen=True)
class ShotOutcome:
    state: ShotState
    already_resolved: bool = False
    sunk_ship_type: ShipType | None = None


@dataclass
class Board:
    ships: list[Ship] = field(default_factory=list)
    grid: Grid = field(default_factory=Grid)

    @property
    def has_fleet(self) -> bool:
        return len(self.ships) > 0

    def place_fleet(self, ships: list[Ship]) -> None:
        """Validate the proposed fleet first, only then replace the ships on the board (so a rejected fleet changes nothing).

        The board builds its own undamaged ships from the placements: ships handed in by the caller are never shared
        with another board, and damage they carry is ignored.
        """
        validate_fleet(ships)
        self.ships = [Ship(ship.type, ship.x, ship.y, ship.orientation) for ship in ships]

    def ship_at(self, coordinate: Coordinate) -> Ship | None:
        return next((ship for ship in self.ships if ship.occupies(coordinate)), None)

    def receive_shot(self, coordinate: Coordinate) -> ShotOutcome:
        """
        Resolve an incoming shot.
        ----

        1. Out of bounds? --> raise, nothing changes
        2. Cell was shot before? --> report what was recorded back then, nothing changes
        3. No ship there --> miss
        4. Ship there --> hit, or sunk when this was the ship's last intact cell
        """
        if not coordinate.is_within_bounds():
            raise OutOfBoundsError(
                f"Cannot shoot at ({coordinate.x}, {coordinate.y}): outside of the board."
            )

        recorded = self.grid.state(coordinate)
        if recorded is not None:
            ship = self.ship_at(coordinate)
            sunk_type = ship.type if recorded == ShotState.SUNK and ship else None
            return ShotOutcome(recorded, already_resolved=True, sunk_ship_type=sunk_type)

        ship = self.ship_at(coordinate)
        if ship is None:
            self.grid.mark(coordinate, ShotState.MISS)
            return ShotOutcome(ShotState.MISS)

        ship.register_hit()
        if ship.is_sunk():
            self.grid.mark(coordinate, ShotState.SUNK)
            return ShotOutcome(ShotState.SUNK, sunk_ship_type=ship.type)

        self.grid.mark(coordinate, ShotState.HIT)
        return ShotOutcome(ShotState.HIT)

    def all_ships_sunk(self) -> bool:
        return self.has_fleet and all(ship.is_sunk() for ship in self.ships)

    def sunk_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if ship.is_sunk()]


def validate_fleet(ships: list[Ship]) -> None:
    """Raise InvalidPlacementError for the first placement rule the fleet violates."""
    counts = Counter(ship.type for ship in ships)
    missing = [ship_type for ship_type in REQUIRED_FLEET if counts[ship_type] == 0]
    duplicates = [ship_type for ship_type, count in counts.items() if count > 1]
    if missing or duplicates:
        raise InvalidPlacementError(
            PlacementRule.MISSING_OR_DUPLICATE_TYPE,
            f"Fleet must contain exactly one ship of each type. missing: {[str(t) for t in missing]}, duplicate: {[str(t) for t in duplicates]}",
        )

    for ship in ships:
        if not ship.is_within_bounds():
            raise InvalidPlacementError(
                PlacementRule.OUT_OF_BOUNDS,
                f"{ship.type} at ({ship.x}, {ship.y}) {ship.orientation} does not fit on the board.",
            )

    for first, second in combinations(ships, 2):
        if first.overlaps(second):
            raise InvalidPlacementError(
                PlacementRule.OVERLAP,
                f"{first.type} and {second.type} overlap.",
            )


def standard_fleet() -> list[Ship]:
    """Convenience fleet: every ship horizontal at x=0, one ship per row starting from the top."""
    return [
        Ship(ship_type, 0, row, Orientation.HORIZONTAL)
        for row, ship_type in enumerate(REQUIRED_FLEET)
    ]
