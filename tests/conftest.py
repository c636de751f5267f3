"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Iterator

import pytest

from src.battleship.board import standard_fleet
from src.battleship.game import Game
from src.battleship.player import Player
from src.core.shared_types import GameStatus
from src.db.registry import GameRegistry


@pytest.fixture
def registry() -> Iterator[GameRegistry]:
    """Fresh in-memory registry, emptied at teardown."""
    repo = GameRegistry()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def players() -> tuple[Player, Player]:
    return Player.register("Player One"), Player.register("Player Two")


@pytest.fixture
def new_game(players: tuple[Player, Player]) -> Game:
    """Game still waiting for both fleets."""
    first, second = players
    return Game.new_game(first, second)


@pytest.fixture
def shooting_game(new_game: Game) -> Game:
    """Both players placed the standard fleet (one ship per row 0-4, all starting at x=0)."""
    for player in new_game.players:
        new_game.place_ships(player.id, player.token, standard_fleet())
    assert new_game.status == GameStatus.SHOOT
    return new_game
