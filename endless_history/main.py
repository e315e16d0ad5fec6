'''
Endless History API (in-memory)

Endpoints:
POST   /games                   -> open a session and start a game
GET    /games/{id}              -> read state
PUT    /games/{id}/guess        -> set the in-progress guess
POST   /games/{id}/guess/step   -> move the guess one year up/down
POST   /games/{id}/submit       -> submit the guess
POST   /games/{id}/new          -> drop the game and start another
GET    /games/{id}/details      -> year, unseen events, link (game over only)
DELETE /games/{id}              -> close the session

Sessions live in memory only; restarting the process forgets them.
'''

import logging
from typing import Literal

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .exceptions import IllegalTransition, InvalidGuessFormat, SessionNotFound, SourceUnavailable
from .store import SessionStore
from .schemas import (
    DetailsOut,
    GameStateOut,
    GuessRequest,
    SubmitResponse,
    game_state_out,
    submit_response,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Endless History API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

_store = SessionStore()

# Routes get the store through a dependency so tests can swap it
def get_store() -> SessionStore:
    return _store

SOURCE_DOWN = "Could not find a year to play right now. Please try again."

# ---------------- Routes ----------------

@app.post("/games", response_model=GameStateOut, summary="Start a new game")
async def start_game(store: SessionStore = Depends(get_store)) -> GameStateOut:
    session = store.create()
    try:
        game = await store.start_game(session.id)
    except SourceUnavailable as exc:
        logger.warning("Year selection failed for new session %s: %s", session.id, exc)
        store.close(session.id)
        raise HTTPException(status_code=503, detail=SOURCE_DOWN)
    except BaseException:
        # any other failure (or cancellation) must not leave an empty session behind
        store.close(session.id)
        raise
    if game is None:
        raise HTTPException(status_code=409, detail="Session was closed before the year was chosen.")
    return game_state_out(session.id, game)

@app.get("/games/{session_id}", response_model=GameStateOut, summary="Get current game state")
def get_game(session_id: str, store: SessionStore = Depends(get_store)) -> GameStateOut:
    session = store.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return game_state_out(session.id, session.game)

@app.put("/games/{session_id}/guess", response_model=GameStateOut, summary="Set the in-progress guess")
def set_guess(
    session_id: str,
    payload: GuessRequest,
    store: SessionStore = Depends(get_store),
) -> GameStateOut:
    try:
        game = store.set_guess(session_id, payload.guess)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    except InvalidGuessFormat as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except IllegalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return game_state_out(session_id, game)

@app.post("/games/{session_id}/guess/step", response_model=GameStateOut, summary="Move the guess one year")
def step_guess(
    session_id: str,
    direction: Literal["up", "down"],
    store: SessionStore = Depends(get_store),
) -> GameStateOut:
    try:
        game = store.step_guess(session_id, 1 if direction == "up" else -1)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    except IllegalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return game_state_out(session_id, game)

@app.post("/games/{session_id}/submit", response_model=SubmitResponse, summary="Submit the current guess")
def submit(session_id: str, store: SessionStore = Depends(get_store)) -> SubmitResponse:
    try:
        game, result = store.submit(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    except IllegalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return submit_response(session_id, game, result)

@app.post("/games/{session_id}/new", response_model=GameStateOut, summary="Start a new game in this session")
async def new_game(session_id: str, store: SessionStore = Depends(get_store)) -> GameStateOut:
    try:
        game = await store.new_game(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    except SourceUnavailable as exc:
        # session stays open without a game, so the player can retry this call
        logger.warning("Year selection failed for session %s: %s", session_id, exc)
        raise HTTPException(status_code=503, detail=SOURCE_DOWN)
    if game is None:
        raise HTTPException(status_code=409, detail="A newer game was requested for this session.")
    return game_state_out(session_id, game)

@app.get("/games/{session_id}/details", response_model=DetailsOut, summary="End-of-game details")
def get_details(session_id: str, store: SessionStore = Depends(get_store)) -> DetailsOut:
    try:
        game = store.game(session_id)
        return DetailsOut(
            year=game.secret,
            won=game.status == "won",
            other_events=[event.description for event in game.unseen_events()],
            wikipedia_url=game.wikipedia_url(),
        )
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Game not found")
    except IllegalTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))

@app.delete("/games/{session_id}", summary="Close the session")
def close_game(session_id: str, store: SessionStore = Depends(get_store)) -> dict:
    if not store.close(session_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"message": "Session closed."}
