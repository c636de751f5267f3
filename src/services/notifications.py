"""Contract for the notification sink the service calls after every state change (pushing to clients happens elsewhere)."""

import logging
from typing import Protocol

from src.core.models import GameUpdate

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify_game_update(self, update: GameUpdate) -> None:
        """Fire-and-forget: the service ignores the outcome."""
        ...


class LoggingNotifier:
    """Default sink when no transport is wired in: just log the update."""

    def notify_game_update(self, update: GameUpdate) -> None:
        logger.info(
            "game_update game_id=%s event=%s status=%s",
            update.game_id,
            update.event,
            update.status,
        )


class NullNotifier:
    def notify_game_update(self, update: GameUpdate) -> None:
        return None
