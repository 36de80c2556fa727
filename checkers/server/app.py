from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from checkers import __version__

from .schemas import ConfigRequest, MoveRequest, ResetRequest, SelectRequest
from .session import GameSession

# Session errors and the HTTP status each one maps to.
ERROR_STATUS: tuple[tuple[type[Exception], int], ...] = (
    (ValueError, 400),
    (RuntimeError, 409),
)


def _guarded(action: Callable[..., dict[str, Any]], *args: Any) -> dict[str, Any]:
    try:
        return action(*args)
    except (ValueError, RuntimeError) as exc:
        status = next(code for kind, code in ERROR_STATUS if isinstance(exc, kind))
        raise HTTPException(status_code=status, detail=str(exc)) from exc


def create_app(session: Optional[GameSession] = None) -> FastAPI:
    app = FastAPI(title="Checkers Engine", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    shared = session if session is not None else GameSession()

    def current_session() -> GameSession:
        return shared

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def board(game: GameSession = Depends(current_session)):
        return game.serialize()

    @app.get("/valid-moves")
    def valid_moves(
        row: int = Query(..., ge=0, le=7),
        col: int = Query(..., ge=0, le=7),
        game: GameSession = Depends(current_session),
    ):
        return _guarded(game.get_valid_moves, row, col)

    @app.post("/select")
    def select(payload: SelectRequest, game: GameSession = Depends(current_session)):
        return _guarded(game.select_piece, payload)

    @app.post("/move")
    def move(payload: MoveRequest, game: GameSession = Depends(current_session)):
        return _guarded(game.make_move, payload)

    @app.post("/ai-move")
    def ai_move(game: GameSession = Depends(current_session)):
        return _guarded(game.run_ai_move)

    @app.post("/undo")
    def undo(game: GameSession = Depends(current_session)):
        return _guarded(game.undo_move)

    @app.post("/reset")
    def reset(payload: Optional[ResetRequest] = None, game: GameSession = Depends(current_session)):
        return game.reset(payload)

    @app.post("/config")
    def config(payload: ConfigRequest, game: GameSession = Depends(current_session)):
        return game.configure(payload)

    return app


app = create_app()
