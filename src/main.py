"""
Process wiring: settings -> logging -> registry -> service -> FastAPI app.

Run with any ASGI server, e.g. `uvicorn src.main:create_app --factory`.
"""

import logging

from fastapi import FastAPI

from src.api.routes import register_error_handlers, router
from src.core.config import Settings, load_settings
from src.core.logging import setup_logging
from src.db.registry import GameRegistry
from src.services.battleship_service import BattleshipService
from src.services.notifications import LoggingNotifier, NullNotifier

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings if settings is not None else load_settings()
    setup_logging(settings)

    registry = GameRegistry(token_bytes=settings.token_bytes)
    notifier = LoggingNotifier() if settings.notifications_enabled else NullNotifier()

    app = FastAPI(title="Battleship lobby")
    app.state.settings = settings
    app.state.service = BattleshipService(registry, notifier)
    app.include_router(router)
    register_error_handlers(app)

    logger.info(
        "app_created log_level=%s notifications=%s",
        settings.log_level,
        settings.notifications_enabled,
    )
    return app
