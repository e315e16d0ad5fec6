"""
In-memory session store
Each session owns at most one GameState. Sessions never share game data.

Choosing a year is slow (network), so start_game releases the lock while it
waits. When the year arrives we only apply it if the session is still open
and nobody asked for a newer game in the meantime; otherwise it is dropped.
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Awaitable, Callable, Dict, Optional, Tuple
from uuid import uuid4

from . import config
from .exceptions import IllegalTransition, SessionNotFound
from .game import GameState, SubmitResult
from .models import SecretYear
from .year_selector import select_year

logger = logging.getLogger(__name__)

YearSelector = Callable[[], Awaitable[SecretYear]]


@dataclass
class Session:
    id: str
    game: Optional[GameState] = None
    # bumped by every start/new/close; a selection only applies if it still matches
    generation: int = 0
    closed: bool = False
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)


class SessionStore:
    def __init__(self, selector: Optional[YearSelector] = None, idle_timeout: Optional[float] = None) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = RLock()
        self._selector = selector
        if idle_timeout is None:
            idle_timeout = config.SESSION_IDLE_TIMEOUT
        self._idle_timeout = idle_timeout

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> Session:
        session = Session(id=str(uuid4()))
        with self._lock:
            # drop abandoned sessions before adding another one
            if self._idle_timeout > 0:
                self.sweep_idle(self._idle_timeout)
            self._sessions[session.id] = session
        logger.info("Created session %s", session.id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def require(self, session_id: str) -> Session:
        session = self.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def game(self, session_id: str) -> GameState:
        """The session's current game; IllegalTransition while its year is still being chosen."""
        with self._lock:
            return self._game_locked(self.require(session_id))

    # Commands run lookup + state change under one lock, so two requests on the
    # same session cannot both pass the status check.

    def set_guess(self, session_id: str, raw: str) -> GameState:
        with self._lock:
            session = self.require(session_id)
            game = self._game_locked(session)
            game.set_guess(raw)
            session.updated_at = time()
            return game

    def step_guess(self, session_id: str, delta: int) -> GameState:
        with self._lock:
            session = self.require(session_id)
            game = self._game_locked(session)
            game.step_guess(delta)
            session.updated_at = time()
            return game

    def submit(self, session_id: str) -> Tuple[GameState, SubmitResult]:
        with self._lock:
            session = self.require(session_id)
            game = self._game_locked(session)
            result = game.submit()
            session.updated_at = time()
            return game, result

    def close(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                return False
            session.closed = True
            session.generation += 1
            session.game = None
        logger.info("Closed session %s", session_id)
        return True

    def sweep_idle(self, max_idle_seconds: float, now: Optional[float] = None) -> int:
        """Close every session not touched for max_idle_seconds. Returns how many were closed."""
        if now is None:
            now = time()
        with self._lock:
            stale = [s.id for s in self._sessions.values() if now - s.updated_at > max_idle_seconds]
            for session_id in stale:
                self.close(session_id)
        if stale:
            logger.info("Expired %d idle session(s)", len(stale))
        return len(stale)

    def _game_locked(self, session: Session) -> GameState:
        if session.game is None:
            raise IllegalTransition("No game yet: the year is still being chosen or the last attempt failed.")
        return session.game

    async def start_game(self, session_id: str) -> Optional[GameState]:
        """
        Choose a year and start a fresh game on the session.
        Returns None when the result came back too late (session closed,
        or a newer start superseded this one).
        """
        with self._lock:
            session = self.require(session_id)
            session.generation += 1
            session.updated_at = time()
            token = session.generation

        # SourceUnavailable / CancelledError leave the session as it was
        secret = await self._select()

        with self._lock:
            if session.closed or session.generation != token:
                logger.info("Discarded year selection for session %s (superseded or closed)", session_id)
                return None
            game = GameState()
            game.start(secret)
            session.game = game
            session.updated_at = time()
            return game

    async def new_game(self, session_id: str) -> Optional[GameState]:
        """Throw the current game away right now, then start another one."""
        with self._lock:
            session = self.require(session_id)
            session.game = None
            session.updated_at = time()
        return await self.start_game(session_id)

    async def _select(self) -> SecretYear:
        if self._selector is not None:
            return await self._selector()
        return await select_year()
