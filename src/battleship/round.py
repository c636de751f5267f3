"""One exchange of shots: each of the two players fires exactly once, in any order."""

from dataclasses import dataclass, field
from uuid import UUID

from src.battleship.board import ShotOutcome
from src.battleship.grid import Coordinate
from src.core.exceptions import AlreadyShotThisRoundError, IllegalStateForActionError
from src.core.models import RoundModel, ShotModel


@dataclass(frozen=True)
class Shot:
    player_id: UUID
    coordinate: Coordinate
    outcome: ShotOutcome

    def to_model(self) -> ShotModel:
        return ShotModel(
            player_id=self.player_id,
            x=self.coordinate.x,
            y=self.coordinate.y,
            state=self.outcome.state,
            already_resolved=self.outcome.already_resolved,
            sunk_ship_type=self.outcome.sunk_ship_type,
        )


@dataclass
class Round:
    index: int
    player_ids: tuple[UUID, UUID]
    shots: dict[UUID, Shot] = field(default_factory=dict)

    @property
    def is_finished(self) -> bool:
        return all(player_id in self.shots for player_id in self.player_ids)

    def has_shot(self, player_id: UUID) -> bool:
        return player_id in self.shots

    def assert_can_shoot(self, player_id: UUID) -> None:
        """Check before resolving the shot, so a rejected shot never touches a board."""
        if self.is_finished:
            raise IllegalStateForActionError(f"Round {self.index} is already sealed.")
        if self.has_shot(player_id):
            raise AlreadyShotThisRoundError(
                f"Player {player_id} already shot in round {self.index}. Waiting for the opponent."
            )

    def record(self, shot: Shot) -> None:
        self.assert_can_shoot(shot.player_id)
        self.shots[shot.player_id] = shot

    def to_model(self) -> RoundModel:
        # keep the order of the bound players, not the order in which they fired
        return RoundModel(
            index=self.index,
            shots=[
                self.shots[player_id].to_model()
                for player_id in self.player_ids
                if player_id in self.shots
            ],
            finished=self.is_finished,
        )
