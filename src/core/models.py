"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
The domain layer (lower) produces snapshots of its state in this format, the Service converts them into API responses (higher)
and hands them to the notification sink. None of them hold references to live domain objects.
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.core.shared_types import GameStatus, ShipType, ShotState


@dataclass(frozen=True)
class ShotModel:
    player_id: UUID
    x: int
    y: int
    state: ShotState
    already_resolved: bool = False
    sunk_ship_type: ShipType | None = None


@dataclass(frozen=True)
class RoundModel:
    index: int
    shots: list[ShotModel]
    finished: bool


@dataclass(frozen=True)
class GameModel:
    """Transport-safe snapshot of a Game. Boards are left out: they are private to each player."""

    id: UUID
    first_player_id: UUID
    second_player_id: UUID
    status: GameStatus
    players_placed: list[UUID]
    rounds: list[RoundModel]
    winner_ids: set[UUID] = field(default_factory=set)


@dataclass(frozen=True)
class GameUpdate:
    """Payload handed to the notification sink after a successful state change."""

    game_id: UUID
    status: GameStatus
    event: str
    shot: ShotModel | None = None
    winner_ids: set[UUID] = field(default_factory=set)
