"""Unit tests for /src/battleship/game.py"""

from threading import Thread

import pytest

from src.battleship.board import standard_fleet
from src.battleship.game import Game
from src.battleship.grid import Coordinate
from src.battleship.player import Player
from src.battleship.ship import Ship
from src.core.exceptions import (
    AlreadyShotThisRoundError,
    GameAlreadyFinishedError,
    IllegalStateForActionError,
    InvalidPlacementError,
    OutOfBoundsError,
    PlayerNotAuthorizedError,
)
from src.core.shared_types import GameStatus, Orientation, ShipType, ShotState


def _fleet_cells() -> list[Coordinate]:
    return [cell for ship in standard_fleet() for cell in ship.cells]


# -- CREATION --
def test_new_game(new_game: Game) -> None:
    assert new_game.status == GameStatus.PLACE_SHIPS
    assert new_game.rounds == []
    assert new_game.current_round is None
    assert not new_game.has_winner
    assert set(new_game.boards) == set(new_game.player_ids)
    assert all(not board.has_fleet for board in new_game.boards.values())


# -- PLACEMENT --
def test_status_changes_after_second_fleet(new_game: Game) -> None:
    first, second = new_game.players

    new_game.place_ships(first.id, first.token, standard_fleet())
    assert new_game.status == GameStatus.PLACE_SHIPS
    assert new_game.to_model().players_placed == [first.id]

    new_game.place_ships(second.id, second.token, standard_fleet())
    assert new_game.status == GameStatus.SHOOT


def test_placing_twice_is_rejected(new_game: Game) -> None:
    """The first valid fleet stays, the second attempt is refused."""
    first, _ = new_game.players
    new_game.place_ships(first.id, first.token, standard_fleet())

    other_fleet = [
        Ship(ship.type, ship.x, ship.y + 5, ship.orientation) for ship in standard_fleet()
    ]
    with pytest.raises(IllegalStateForActionError):
        new_game.place_ships(first.id, first.token, other_fleet)

    assert [ship.y for ship in new_game.board_of(first.id).ships] == [0, 1, 2, 3, 4]
    assert new_game.status == GameStatus.PLACE_SHIPS


def test_invalid_fleet_is_not_placed(new_game: Game) -> None:
    first, _ = new_game.players
    fleet = standard_fleet()[:4] + [Ship(ShipType.DESTROYER, 9, 0, Orientation.HORIZONTAL)]
    with pytest.raises(InvalidPlacementError):
        new_game.place_ships(first.id, first.token, fleet)
    assert not new_game.board_of(first.id).has_fleet

    # a valid retry is still accepted
    new_game.place_ships(first.id, first.token, standard_fleet())
    assert new_game.board_of(first.id).has_fleet


def test_cannot_place_after_placement_phase(shooting_game: Game) -> None:
    first, _ = shooting_game.players
    with pytest.raises(IllegalStateForActionError):
        shooting_game.place_ships(first.id, first.token, standard_fleet())


def test_one_fleet_list_placed_for_both_players(new_game: Game) -> None:
    """Damage on one board never shows up on the other board or in the caller's list."""
    first, second = new_game.players
    fleet = standard_fleet()
    new_game.place_ships(first.id, first.token, fleet)
    new_game.place_ships(second.id, second.token, fleet)

    new_game.shoot(first.id, first.token, Coordinate(0, 0))

    assert new_game.board_of(second.id).ship_at(Coordinate(0, 0)).hits == 1
    assert new_game.board_of(first.id).ship_at(Coordinate(0, 0)).hits == 0
    assert fleet[0].hits == 0


def test_damage_carried_by_placed_ships_is_ignored(new_game: Game) -> None:
    first, second = new_game.players
    wrecked_fleet = [
        Ship(ship.type, ship.x, ship.y, ship.orientation, hits=ship.length)
        for ship in standard_fleet()
    ]
    new_game.place_ships(first.id, first.token, wrecked_fleet)
    new_game.place_ships(second.id, second.token, standard_fleet())

    result = new_game.shoot(second.id, second.token, Coordinate(9, 9))

    assert result.shot.outcome.state == ShotState.MISS
    assert second.id not in new_game.winner_ids
    assert not new_game.board_of(first.id).all_ships_sunk()
    assert new_game.status == GameStatus.SHOOT


# -- AUTHORIZATION --
def test_wrong_token(new_game: Game) -> None:
    first, second = new_game.players
    with pytest.raises(PlayerNotAuthorizedError):
        new_game.place_ships(first.id, second.token, standard_fleet())
    with pytest.raises(PlayerNotAuthorizedError):
        new_game.place_ships(first.id, None, standard_fleet())
    assert not new_game.board_of(first.id).has_fleet


def test_player_not_in_game(shooting_game: Game) -> None:
    stranger = Player.register("Stranger")
    with pytest.raises(PlayerNotAuthorizedError):
        shooting_game.shoot(stranger.id, stranger.token, Coordinate(0, 0))
    assert shooting_game.rounds == []


# -- SHOOTING --
def test_cannot_shoot_before_fleets_placed(new_game: Game) -> None:
    first, _ = new_game.players
    with pytest.raises(IllegalStateForActionError):
        new_game.shoot(first.id, first.token, Coordinate(0, 0))


def test_shot_lands_on_opponent_board(shooting_game: Game) -> None:
    first, second = shooting_game.players
    result = shooting_game.shoot(first.id, first.token, Coordinate(0, 0))

    assert result.shot.outcome.state == ShotState.HIT
    assert result.round_index == 0
    assert not result.game_finished
    assert shooting_game.board_of(second.id).grid.hits() == [Coordinate(0, 0)]
    assert shooting_game.board_of(first.id).grid.hits() == []


def test_same_cell_on_both_boards_resolves_independently(shooting_game: Game) -> None:
    """'Already resolved' is tracked per board, not across the game."""
    first, second = shooting_game.players
    first_result = shooting_game.shoot(first.id, first.token, Coordinate(0, 0))
    second_result = shooting_game.shoot(second.id, second.token, Coordinate(0, 0))

    assert first_result.shot.outcome.state == ShotState.HIT
    assert second_result.shot.outcome.state == ShotState.HIT
    assert not second_result.shot.outcome.already_resolved
    assert shooting_game.current_round.is_finished


def test_second_shot_in_same_round_rejected(shooting_game: Game) -> None:
    first, second = shooting_game.players
    shooting_game.shoot(first.id, first.token, Coordinate(0, 0))
    with pytest.raises(AlreadyShotThisRoundError):
        shooting_game.shoot(first.id, first.token, Coordinate(1, 0))

    # the rejected shot did not touch the opponent board
    assert not shooting_game.board_of(second.id).grid.was_shot(Coordinate(1, 0))
    assert len(shooting_game.rounds) == 1

    # once the opponent fired, a new round opens
    shooting_game.shoot(second.id, second.token, Coordinate(5, 5))
    result = shooting_game.shoot(first.id, first.token, Coordinate(1, 0))
    assert result.round_index == 1
    assert len(shooting_game.rounds) == 2
    assert shooting_game.rounds[0].is_finished
    assert not shooting_game.rounds[1].is_finished


def test_repeated_shot_counts_for_the_round(shooting_game: Game) -> None:
    first, second = shooting_game.players
    shooting_game.shoot(first.id, first.token, Coordinate(0, 0))
    shooting_game.shoot(second.id, second.token, Coordinate(9, 9))

    repeated = shooting_game.shoot(first.id, first.token, Coordinate(0, 0))
    assert repeated.shot.outcome.state == ShotState.HIT
    assert repeated.shot.outcome.already_resolved
    assert shooting_game.board_of(second.id).ship_at(Coordinate(0, 0)).hits == 1
    with pytest.raises(AlreadyShotThisRoundError):
        shooting_game.shoot(first.id, first.token, Coordinate(1, 0))


@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, 10)])
def test_out_of_bounds_shot(shooting_game: Game, x: int, y: int) -> None:
    first, _ = shooting_game.players
    with pytest.raises(OutOfBoundsError):
        shooting_game.shoot(first.id, first.token, Coordinate(x, y))
    assert shooting_game.rounds == []


# -- WINNING --
def test_single_winner(shooting_game: Game) -> None:
    """First player hits every ship cell, second player only hits water. The second player's reply seals the last round."""
    first, second = shooting_game.players
    water = [Coordinate(x, y) for y in range(5, 10) for x in range(10)]

    cells = _fleet_cells()
    for index, cell in enumerate(cells):
        shooting_game.shoot(first.id, first.token, cell)
        if index < len(cells) - 1:
            shooting_game.shoot(second.id, second.token, water[index])

    assert shooting_game.winner_ids == {first.id}
    # round still open for the opponent's reply
    assert shooting_game.status == GameStatus.SHOOT

    result = shooting_game.shoot(second.id, second.token, water[len(cells)])
    assert result.game_finished
    assert result.winner_ids == frozenset({first.id})
    assert shooting_game.status == GameStatus.FINISHED


def test_winner_as_second_shooter_finishes_immediately(shooting_game: Game) -> None:
    first, second = shooting_game.players
    water = [Coordinate(x, y) for y in range(5, 10) for x in range(10)]

    for index, cell in enumerate(_fleet_cells()):
        shooting_game.shoot(first.id, first.token, water[index])
        result = shooting_game.shoot(second.id, second.token, cell)

    assert result.shot.outcome.state == ShotState.SUNK
    assert result.game_finished
    assert shooting_game.winner_ids == {second.id}


def test_both_fleets_destroyed_in_same_round(shooting_game: Game) -> None:
    first, second = shooting_game.players
    for cell in _fleet_cells():
        shooting_game.shoot(first.id, first.token, cell)
        shooting_game.shoot(second.id, second.token, cell)

    assert shooting_game.status == GameStatus.FINISHED
    assert shooting_game.has_winner
    assert shooting_game.winner_ids == {first.id, second.id}


def test_finished_game_rejects_everything(shooting_game: Game) -> None:
    first, second = shooting_game.players
    for cell in _fleet_cells():
        shooting_game.shoot(first.id, first.token, cell)
        shooting_game.shoot(second.id, second.token, cell)

    with pytest.raises(GameAlreadyFinishedError):
        shooting_game.shoot(first.id, first.token, Coordinate(9, 9))
    with pytest.raises(GameAlreadyFinishedError):
        shooting_game.place_ships(second.id, second.token, standard_fleet())
    # still an IllegalStateForActionError for callers that only care about that
    with pytest.raises(IllegalStateForActionError):
        shooting_game.shoot(second.id, second.token, Coordinate(9, 9))


# -- SNAPSHOT / CONCURRENCY --
def test_model_snapshot(shooting_game: Game) -> None:
    first, second = shooting_game.players
    shooting_game.shoot(first.id, first.token, Coordinate(0, 0))

    model = shooting_game.to_model()
    assert model.id == shooting_game.id
    assert model.status == GameStatus.SHOOT
    assert model.players_placed == [first.id, second.id]
    assert len(model.rounds) == 1
    assert not model.rounds[0].finished
    assert model.rounds[0].shots[0].state == ShotState.HIT
    assert model.winner_ids == set()


def test_concurrent_shots_in_one_round(shooting_game: Game) -> None:
    """Both players fire from separate threads: exactly one round holding both shots."""
    first, second = shooting_game.players
    threads = [
        Thread(target=shooting_game.shoot, args=(first.id, first.token, Coordinate(0, 0))),
        Thread(target=shooting_game.shoot, args=(second.id, second.token, Coordinate(0, 0))),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(shooting_game.rounds) == 1
    assert shooting_game.rounds[0].is_finished
