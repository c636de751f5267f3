"""Protocol repository (the service only depends on this, the in-memory registry implements it)"""

from typing import Protocol
from uuid import UUID

from src.battleship.game import Game
from src.battleship.player import Player


class GameRepository(Protocol):
    """Keeps registered players and active games for the lifetime of the process"""

    def register_player(self, name: str) -> Player:
        """Issue a new player identifier + token."""
        ...

    def get_player(self, player_id: UUID) -> Player | None:
        """Get player by ID, if registered."""
        ...

    def list_players(self) -> list[Player]:
        """All registered players, in registration order."""
        ...

    def create_game(self, first_player_id: UUID, second_player_id: UUID) -> Game:
        """Create and store a new game for two registered players."""
        ...

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def list_games(self) -> list[Game]:
        """All active games, in creation order."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game and return it (None if there was nothing to remove)."""
        ...
