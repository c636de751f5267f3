"""Implementation of (Game)Repository keeping everything in memory"""

import logging
from threading import Lock
from uuid import UUID

from src.battleship.game import Game
from src.battleship.player import Player
from src.core.exceptions import InvalidRequestError, PlayerNotAuthorizedError

logger = logging.getLogger(__name__)


class GameRegistry:
    """
    Players and games stored in dictionaries (insertion ordered, so listing keeps creation order).

    The registry lock only guards the dictionaries. Each Game guards its own state.
    """

    def __init__(self, token_bytes: int = 16) -> None:
        self.token_bytes = token_bytes
        self._players: dict[UUID, Player] = {}
        self._games: dict[UUID, Game] = {}
        self._lock = Lock()

    def register_player(self, name: str) -> Player:
        player = Player.register(name, token_bytes=self.token_bytes)
        with self._lock:
            self._players[player.id] = player
        logger.info("player_registered player_id=%s name=%r", player.id, name)
        return player

    def get_player(self, player_id: UUID) -> Player | None:
        with self._lock:
            return self._players.get(player_id)

    def list_players(self) -> list[Player]:
        with self._lock:
            return list(self._players.values())

    def create_game(self, first_player_id: UUID, second_player_id: UUID) -> Game:
        if first_player_id == second_player_id:
            raise InvalidRequestError("A game needs two different players.")

        first_player = self._registered_player(first_player_id)
        second_player = self._registered_player(second_player_id)
        game = Game.new_game(first_player, second_player)
        with self._lock:
            self._games[game.id] = game
        return game

    def get_game(self, game_id: UUID) -> Game | None:
        with self._lock:
            return self._games.get(game_id)

    def list_games(self) -> list[Game]:
        with self._lock:
            return list(self._games.values())

    def delete_game(self, game_id: UUID) -> Game | None:
        with self._lock:
            game = self._games.pop(game_id, None)
        if game is not None:
            logger.info("game_deleted game_id=%s", game_id)
        return game

    def clear(self) -> None:
        with self._lock:
            self._games.clear()
            self._players.clear()

    def _registered_player(self, player_id: UUID) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotAuthorizedError(f"Player {player_id} is not registered.")
        return player
