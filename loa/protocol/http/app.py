from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.board import DEFAULT_MOVE_LIMIT
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...engine.piece import BLACK, EMPTY, WHITE, Piece
from ...players import MachinePlayer
from ...search.service import DEFAULT_DEPTH, SearchService
from .session import InMemorySessionStore


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    position: str


class SetPositionRequest(BaseModel):
    position: str = Field(..., description="Position string, e.g. '1bbbbbb1/w6w/.../1bbbbbb1 b'")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move string, e.g. d1-f3")


class LimitRequest(BaseModel):
    moves_per_side: int = Field(default=DEFAULT_MOVE_LIMIT, ge=1, le=1000)


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=0, le=6)


class EngineMoveRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=6)


class PerftRequest(BaseModel):
    position: str
    depth: int = Field(default=1, ge=0, le=4)


class GameState(BaseModel):
    game_id: str
    position: str
    turn: str
    legal_moves: list[str]
    winner: Optional[str]
    game_over: bool
    black_regions: list[int]
    white_regions: list[int]
    move_limit: int
    last_move: Optional[str]
    move_history: list[str]


def create_app() -> FastAPI:
    app = FastAPI(title="Lines of Action API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game = Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, position=game.to_position())

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        logger.info("game deleted", extra={"game_id": game_id})
        return {"status": "deleted"}

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            game = Game.from_position(req.position)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid position: {e}")
        store.replace(game_id, game)
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            game.apply_move(move)
        except ValueError:
            raise HTTPException(status_code=400, detail="illegal move")
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/engine-move", response_model=GameState)
    async def engine_move(game_id: str, req: EngineMoveRequest) -> GameState:
        game = _require_game(store, game_id)
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        depth = DEFAULT_DEPTH if req.depth is None else req.depth
        player = MachinePlayer(game.turn(), SearchService(depth))
        try:
            text = player.get_move(game)
        except ValueError as e:
            # side to move is blocked
            raise HTTPException(status_code=409, detail=str(e))
        game.apply_move(parse_move(text))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/limit", response_model=GameState)
    async def set_limit(game_id: str, req: LimitRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.set_move_limit(req.moves_per_side)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/search")
    async def search(game_id: str, req: SearchRequest) -> Dict[str, Any]:
        game = _require_game(store, game_id)
        if game.game_over():
            raise HTTPException(status_code=409, detail="game is over")
        depth = DEFAULT_DEPTH if req.depth is None else req.depth
        res = SearchService(depth).search(game.board)
        return {
            "best_move": res.best_move.to_text() if res.best_move else None,
            "score": res.score,
            "nodes": res.nodes,
            "depth": res.depth,
            "time_ms": res.time_ms,
        }

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, Any]:
        try:
            game = Game.from_position(req.position)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid position: {e}")
        return {"nodes": perft_nodes(game.board, req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _side_name(piece: Optional[Piece]) -> Optional[str]:
    if piece is None:
        return None
    if piece is EMPTY:
        return "tie"
    return piece.full_name.lower()


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    history = game.move_history_text()
    return GameState(
        game_id=game_id,
        position=game.to_position(),
        turn=board.turn.full_name.lower(),
        legal_moves=[] if game.game_over() else [m.to_text() for m in game.legal_moves()],
        winner=_side_name(game.winner()),
        game_over=game.game_over(),
        black_regions=board.region_sizes(BLACK),
        white_regions=board.region_sizes(WHITE),
        move_limit=board.move_limit // 2,
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
