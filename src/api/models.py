"""Requests and Response models"""

from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameStatus, Orientation, ShipType, ShotState


# --- REQUEST MODELS ---
class RegisterRequest(BaseModel):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()


class CreateGameRequest(BaseModel):
    first_player_id: UUID
    second_player_id: UUID


class ShipPlacement(BaseModel):
    """A ship as the client sends it: anchor cell + orientation. Bounds are checked by the game, not here."""

    type: ShipType
    x: int
    y: int
    orientation: Orientation


class PlaceShipsRequest(BaseModel):
    game_id: UUID
    player_id: UUID
    player_token: str
    ships: list[ShipPlacement]


class ShootRequest(BaseModel):
    game_id: UUID
    player_id: UUID
    player_token: str
    x: int
    y: int


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    """Only returned once, to the player who registered: contains the token."""

    player_id: UUID
    player_name: str
    player_token: str


class PlayerSummaryResponse(BaseModel):
    player_id: UUID
    player_name: str


class CreateGameResponse(BaseModel):
    game_id: UUID
    status: GameStatus


class ShotResponse(BaseModel):
    player_id: UUID
    x: int
    y: int
    state: ShotState
    already_resolved: bool
    sunk_ship_type: ShipType | None


class RoundResponse(BaseModel):
    index: int
    shots: list[ShotResponse]
    finished: bool


class GameResponse(BaseModel):
    game_id: UUID
    players: list[UUID]
    status: GameStatus
    players_placed: list[UUID]
    rounds: list[RoundResponse]
    winners: list[UUID]


class GameSummaryResponse(BaseModel):
    game_id: UUID
    players: list[UUID]
    status: GameStatus
    round_count: int
    winners: list[UUID]


class ShootResponse(BaseModel):
    game_id: UUID
    round_index: int
    state: ShotState
    already_resolved: bool
    sunk_ship_type: ShipType | None
    game_finished: bool
    winners: list[UUID]


class ErrorResponse(BaseModel):
    error: str
    detail: str
