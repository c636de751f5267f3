"""
Custom exceptions raised across layers.

All of them derive from GameError, so the service (and the API layer on top of it) can catch a single type.
The `kind` attribute is a stable name for the violated rule, used by the API layer to build its error payload.
"""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a game action."""

    kind = "GameError"


class InvalidRequestError(GameError):
    """Request data cannot be interpreted (raised while validating API models)."""

    kind = "InvalidRequest"


class RepositoryError(GameError):
    """Record could not be found / stored."""

    kind = "RepositoryError"


class GameNotFoundError(RepositoryError):
    kind = "GameNotFound"


class PlayerNotAuthorizedError(GameError):
    """Unknown player, player not bound to the game, or token does not match."""

    kind = "PlayerNotAuthorized"


class IllegalStateForActionError(GameError):
    """The action is not allowed for the current status of the game."""

    kind = "IllegalStateForAction"


class GameAlreadyFinishedError(IllegalStateForActionError):
    kind = "GameAlreadyFinished"


class InvalidPlacementError(GameError):
    """A proposed fleet violates one of the placement rules."""

    kind = "InvalidPlacement"

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message)
        self.rule = rule


class OutOfBoundsError(GameError):
    kind = "OutOfBounds"


class AlreadyShotThisRoundError(GameError):
    kind = "AlreadyShotThisRound"
