"""Orchestration of communication from API router to business logic and registry layers (and the reverse direction)."""

import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    CreateGameResponse,
    DeleteGameRequest,
    GameResponse,
    GameSummaryResponse,
    GetGameRequest,
    PlaceShipsRequest,
    PlayerResponse,
    PlayerSummaryResponse,
    RegisterRequest,
    RoundResponse,
    ShootRequest,
    ShootResponse,
    ShotResponse,
)
from src.battleship.game import Game
from src.battleship.grid import Coordinate
from src.battleship.ship import Ship
from src.core.exceptions import GameError, GameNotFoundError
from src.core.models import GameModel, GameUpdate, ShotModel
from src.db.repository import GameRepository
from src.services.notifications import Notifier, NullNotifier

logger = logging.getLogger(__name__)


class BattleshipService:
    """Orchestration of layers for battleship games."""

    def __init__(self, repository: GameRepository, notifier: Notifier | None = None) -> None:
        self.repo = repository
        self.notifier = notifier if notifier is not None else NullNotifier()

    # -- API routes logic ---
    def register_player(self, request: RegisterRequest) -> PlayerResponse:
        """A new player enters the lobby. The token in the response is needed for every later action."""
        player = self.repo.register_player(request.player_name)
        return PlayerResponse(
            player_id=player.id, player_name=player.name, player_token=player.token
        )

    def list_players(self) -> list[PlayerSummaryResponse]:
        return [
            PlayerSummaryResponse(player_id=player.id, player_name=player.name)
            for player in self.repo.list_players()
        ]

    def create_game(self, request: CreateGameRequest) -> CreateGameResponse:
        """Bind two registered players to a new game."""
        game = self.repo.create_game(request.first_player_id, request.second_player_id)
        model = game.to_model()
        self._notify(GameUpdate(game_id=model.id, status=model.status, event="game_created"))
        return CreateGameResponse(game_id=model.id, status=model.status)

    def place_ships(self, request: PlaceShipsRequest) -> GameResponse:
        """One of the players submits the fleet."""
        # Retrieve the live Game from the registry
        game = self._fetch_game(request.game_id)

        ships = [
            Ship(placement.type, placement.x, placement.y, placement.orientation)
            for placement in request.ships
        ]

        # Attempt the placement
        with self._log_rejection("place_ships", request.game_id, request.player_id):
            game.place_ships(request.player_id, request.player_token, ships)

        # Capture updated state
        model = game.to_model()
        self._notify(GameUpdate(game_id=model.id, status=model.status, event="ships_placed"))
        return self._create_game_response(model)

    def shoot(self, request: ShootRequest) -> ShootResponse:
        """One of the players fires at the opponent's board."""
        game = self._fetch_game(request.game_id)

        with self._log_rejection("shoot", request.game_id, request.player_id):
            result = game.shoot(
                request.player_id, request.player_token, Coordinate(request.x, request.y)
            )

        shot: ShotModel = result.shot.to_model()
        self._notify(
            GameUpdate(
                game_id=game.id,
                status=result.status,
                event="shot_fired",
                shot=shot,
                winner_ids=set(result.winner_ids),
            )
        )
        return ShootResponse(
            game_id=game.id,
            round_index=result.round_index,
            state=shot.state,
            already_resolved=shot.already_resolved,
            sunk_ship_type=shot.sunk_ship_type,
            game_finished=result.game_finished,
            winners=self._ordered_winners(game.player_ids, set(result.winner_ids)),
        )

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by clients, e.g. to see when the opponent placed the fleet or fired.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(game.to_model())

    def list_games(self) -> list[GameSummaryResponse]:
        """Show all active games, oldest first."""
        summaries: list[GameSummaryResponse] = []
        for game in self.repo.list_games():
            model = game.to_model()
            players = [model.first_player_id, model.second_player_id]
            summaries.append(
                GameSummaryResponse(
                    game_id=model.id,
                    players=players,
                    status=model.status,
                    round_count=len(model.rounds),
                    winners=self._ordered_winners(players, model.winner_ids),
                )
            )
        return summaries

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        players = [model.first_player_id, model.second_player_id]
        return GameResponse(
            game_id=model.id,
            players=players,
            status=model.status,
            players_placed=model.players_placed,
            rounds=[
                RoundResponse(
                    index=game_round.index,
                    shots=[
                        ShotResponse(
                            player_id=shot.player_id,
                            x=shot.x,
                            y=shot.y,
                            state=shot.state,
                            already_resolved=shot.already_resolved,
                            sunk_ship_type=shot.sunk_ship_type,
                        )
                        for shot in game_round.shots
                    ],
                    finished=game_round.finished,
                )
                for game_round in model.rounds
            ],
            winners=self._ordered_winners(players, model.winner_ids),
        )

    @staticmethod
    def _ordered_winners(players: list[UUID] | tuple[UUID, ...], winner_ids: set[UUID]) -> list[UUID]:
        """Winner set as a list, first player first (a set has no stable order to send over the wire)."""
        return [player_id for player_id in players if player_id in winner_ids]

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the registry and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game

    def _notify(self, update: GameUpdate) -> None:
        """The sink is not part of the game's correctness: a failing sink is logged, never propagated."""
        try:
            self.notifier.notify_game_update(update)
        except Exception:
            logger.exception(
                "notification_failed game_id=%s event=%s", update.game_id, update.event
            )

    @contextmanager
    def _log_rejection(self, action: str, game_id: UUID, player_id: UUID) -> Iterator[None]:
        try:
            yield
        except GameError as error:
            logger.info(
                "action_rejected action=%s game_id=%s player_id=%s kind=%s reason=%s",
                action,
                game_id,
                player_id,
                error.kind,
                error,
            )
            raise
