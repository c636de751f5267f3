"""HTTP routes of the lobby. Thin layer: parse the request model, call the service, map errors to status codes."""

from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.models import (
    CreateGameRequest,
    CreateGameResponse,
    DeleteGameRequest,
    ErrorResponse,
    GameResponse,
    GameSummaryResponse,
    GetGameRequest,
    PlaceShipsRequest,
    PlayerResponse,
    PlayerSummaryResponse,
    RegisterRequest,
    ShootRequest,
    ShootResponse,
)
from src.core.exceptions import GameError, GameNotFoundError, PlayerNotAuthorizedError
from src.services.battleship_service import BattleshipService

router = APIRouter(prefix="/lobby")


def get_service(request: Request) -> BattleshipService:
    return request.app.state.service


@router.post("/players", response_model=PlayerResponse)
def register(
    request: RegisterRequest, service: BattleshipService = Depends(get_service)
) -> PlayerResponse:
    return service.register_player(request)


@router.get("/players", response_model=list[PlayerSummaryResponse])
def list_players(
    service: BattleshipService = Depends(get_service),
) -> list[PlayerSummaryResponse]:
    return service.list_players()


@router.get("/games", response_model=list[GameSummaryResponse])
def list_games(
    service: BattleshipService = Depends(get_service),
) -> list[GameSummaryResponse]:
    return service.list_games()


@router.post("/games", response_model=CreateGameResponse)
def create_game(
    request: CreateGameRequest, service: BattleshipService = Depends(get_service)
) -> CreateGameResponse:
    return service.create_game(request)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(
    game_id: UUID, service: BattleshipService = Depends(get_service)
) -> GameResponse:
    return service.get_game(GetGameRequest(game_id=game_id))


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(
    game_id: UUID, service: BattleshipService = Depends(get_service)
) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))


@router.post("/place-ships", response_model=GameResponse)
def place_ships(
    request: PlaceShipsRequest, service: BattleshipService = Depends(get_service)
) -> GameResponse:
    return service.place_ships(request)


@router.post("/shoot", response_model=ShootResponse)
def shoot(
    request: ShootRequest, service: BattleshipService = Depends(get_service)
) -> ShootResponse:
    return service.shoot(request)


# -- Error mapping --
def status_code_for(error: GameError) -> int:
    if isinstance(error, GameNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, PlayerNotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


async def handle_game_error(_: Request, error: GameError) -> JSONResponse:
    body = ErrorResponse(error=error.kind, detail=str(error))
    return JSONResponse(status_code=status_code_for(error), content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GameError, handle_game_error)
