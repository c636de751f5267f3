"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the rules required to play a round of Battleship:
who may act, what the current status allows, which board a shot lands on, and when the game is over.
"""

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Self
from uuid import UUID, uuid4

from src.battleship.board import Board
from src.battleship.grid import Coordinate
from src.battleship.player import Player
from src.battleship.round import Round, Shot
from src.battleship.ship import Ship
from src.core.exceptions import (
    GameAlreadyFinishedError,
    IllegalStateForActionError,
    OutOfBoundsError,
    PlayerNotAuthorizedError,
)
from src.core.models import GameModel
from src.core.shared_types import GameStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShotResult:
    """What the caller (and the notification sink) needs to know after a shot was resolved."""

    shot: Shot
    round_index: int
    status: GameStatus
    winner_ids: frozenset[UUID]

    @property
    def game_finished(self) -> bool:
        return self.status == GameStatus.FINISHED


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    first_player: Player
    second_player: Player
    id: UUID = field(default_factory=uuid4)
    status: GameStatus = GameStatus.PLACE_SHIPS
    boards: dict[UUID, Board] = field(default_factory=dict)
    rounds: list[Round] = field(default_factory=list)
    winner_ids: set[UUID] = field(default_factory=set)
    # every state transition of this game runs under this lock
    _lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    def __post_init__(self):
        for player in self.players:
            self.boards.setdefault(player.id, Board())

    @classmethod
    def new_game(cls, first_player: Player, second_player: Player) -> Self:
        game = cls(first_player=first_player, second_player=second_player)
        logger.info(
            "game_created game_id=%s first=%s second=%s",
            game.id,
            first_player.id,
            second_player.id,
        )
        return game

    @property
    def players(self) -> tuple[Player, Player]:
        return (self.first_player, self.second_player)

    @property
    def player_ids(self) -> tuple[UUID, UUID]:
        return (self.first_player.id, self.second_player.id)

    @property
    def current_round(self) -> Round | None:
        """The latest round (which may already be sealed if both players just fired)."""
        return self.rounds[-1] if self.rounds else None

    @property
    def has_winner(self) -> bool:
        return len(self.winner_ids) > 0

    def board_of(self, player_id: UUID) -> Board:
        return self.boards[player_id]

    def opponent_id(self, player_id: UUID) -> UUID:
        first_id, second_id = self.player_ids
        return second_id if player_id == first_id else first_id

    def place_ships(self, player_id: UUID, token: str | None, ships: list[Ship]) -> None:
        """
        Place the fleet of one of the players.
        ----

        1. Check the player is part of this game and presents the right token
        2. Check the game is still in the placement phase, and this player did not place a fleet yet
        3. Validate and place the fleet (the board stays untouched if the fleet is rejected)
        4. Both fleets placed? --> start shooting
        """
        with self._lock:
            self._authorize(player_id, token)
            self._assert_status(GameStatus.PLACE_SHIPS, action="place ships")

            board = self.board_of(player_id)
            if board.has_fleet:
                raise IllegalStateForActionError(
                    f"Player {player_id} already placed a fleet in game {self.id}."
                )

            board.place_fleet(ships)
            logger.info("fleet_placed game_id=%s player_id=%s", self.id, player_id)

            if all(self.board_of(pid).has_fleet for pid in self.player_ids):
                self._change_status(GameStatus.SHOOT)

    def shoot(self, player_id: UUID, token: str | None, coordinate: Coordinate) -> ShotResult:
        """
        Fire at the opponent's board.
        ----

        1. Check the player is part of this game and presents the right token
        2. Check the game is in the shooting phase
        3. Check the coordinate and that this player did not fire in the open round yet
        4. Resolve the shot on the opponent's board and record it in the (possibly new) round
        5. Opponent's fleet destroyed? --> shooter joins the winner set
        6. Winner(s) known and round sealed --> game finished

        NOTE: a winner does not end the game before the round is sealed. The opponent still gets the reply shot of that
        round, so both fleets can go down in the same round and both players end up in the winner set.
        """
        with self._lock:
            self._authorize(player_id, token)
            self._assert_status(GameStatus.SHOOT, action="shoot")

            if not coordinate.is_within_bounds():
                raise OutOfBoundsError(
                    f"Cannot shoot at ({coordinate.x}, {coordinate.y}): outside of the board."
                )

            open_round = self._open_round()
            if open_round is not None:
                open_round.assert_can_shoot(player_id)

            opponent_board = self.board_of(self.opponent_id(player_id))
            outcome = opponent_board.receive_shot(coordinate)
            shot = Shot(player_id, coordinate, outcome)

            if open_round is None:
                open_round = Round(index=len(self.rounds), player_ids=self.player_ids)
                self.rounds.append(open_round)
            open_round.record(shot)
            logger.debug(
                "shot_resolved game_id=%s round=%d player_id=%s x=%d y=%d state=%s repeated=%s",
                self.id,
                open_round.index,
                player_id,
                coordinate.x,
                coordinate.y,
                outcome.state,
                outcome.already_resolved,
            )

            self._update_winners(player_id, opponent_board)
            if self.has_winner and open_round.is_finished:
                self._change_status(GameStatus.FINISHED)

            return ShotResult(
                shot=shot,
                round_index=open_round.index,
                status=self.status,
                winner_ids=frozenset(self.winner_ids),
            )

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        with self._lock:
            return GameModel(
                id=self.id,
                first_player_id=self.first_player.id,
                second_player_id=self.second_player.id,
                status=self.status,
                players_placed=[
                    pid for pid in self.player_ids if self.board_of(pid).has_fleet
                ],
                rounds=[game_round.to_model() for game_round in self.rounds],
                winner_ids=set(self.winner_ids),
            )

    # -- PRIVATE HELPERS ---
    def _authorize(self, player_id: UUID, token: str | None) -> None:
        player = next((p for p in self.players if p.id == player_id), None)
        if player is None:
            raise PlayerNotAuthorizedError(
                f"Player {player_id} is not part of game {self.id}."
            )
        if not player.has_token(token):
            raise PlayerNotAuthorizedError(f"Invalid token for player {player_id}.")

    def _assert_status(self, required: GameStatus, action: str) -> None:
        if self.status == GameStatus.FINISHED:
            raise GameAlreadyFinishedError(
                f"Cannot {action}. Game {self.id} is already finished."
            )
        if self.status != required:
            raise IllegalStateForActionError(
                f"Cannot {action} while game {self.id} has status: {self.status}"
            )

    def _open_round(self) -> Round | None:
        """The round still waiting for a shot, or None if the next shot starts a new one."""
        latest = self.current_round
        if latest is None or latest.is_finished:
            return None
        return latest

    def _update_winners(self, player_id: UUID, opponent_board: Board) -> None:
        if player_id not in self.winner_ids and opponent_board.all_ships_sunk():
            self.winner_ids.add(player_id)
            logger.info("fleet_destroyed game_id=%s winner_id=%s", self.id, player_id)

    def _change_status(self, new_status: GameStatus) -> None:
        logger.info(
            "status_changed game_id=%s from=%s to=%s", self.id, self.status, new_status
        )
        self.status = new_status
