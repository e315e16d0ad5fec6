"""
Game state for one player session.

A GameState is created empty, started once with a SecretYear, then driven by
set_guess/submit until it is won or lost. Starting over means building a new
GameState; nothing here is ever reset in place.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from . import config
from .engine import (
    DIGIT_LABELS,
    YEAR_DIGITS,
    direction_hint,
    match_digits,
    merge_feedback,
    normalize,
    validate_guess,
)
from .exceptions import IllegalTransition
from .models import HistoricalEvent, SecretYear
from .types import DigitFeedback, GameStatus, Hint, IgnoredReason, Year

MAX_MISSES = 5
MAX_REVEALS = 5
WIKIPEDIA_URL = "https://en.wikipedia.org/wiki/AD_{year}"


@dataclass(frozen=True)
class DigitConfirmed:
    """A digit that became confirmed with the last submission."""
    index: int
    label: str


@dataclass(frozen=True)
class MissEntry:
    guess: Year
    hint: Hint


@dataclass
class SubmitResult:
    accepted: bool
    status: GameStatus
    ignored_reason: Optional[IgnoredReason] = None
    confirmed: List[DigitConfirmed] = field(default_factory=list)
    hint: Optional[Hint] = None


class GameState:
    def __init__(self) -> None:
        self._secret: Optional[SecretYear] = None
        self._status: Optional[GameStatus] = None
        self._guess = ""
        self._feedback: DigitFeedback = [False] * YEAR_DIGITS
        self._misses: List[Year] = []
        self._winning_guess: Optional[Year] = None

    # ---------------- Commands ----------------

    def start(self, secret: SecretYear) -> None:
        if self._status is not None:
            raise IllegalTransition(f"Game already started (status: {self._status}). Start a new game instead.")
        self._secret = secret
        self._status = "active"

    def set_guess(self, raw: str) -> None:
        """Store the in-progress input. Range is not checked until submit."""
        self._require_active("set a guess")
        self._guess = validate_guess(raw)

    def step_guess(self, delta: int) -> str:
        """
        Move the in-progress guess one year up (+1) or down (-1), staying inside
        [MIN_YEAR, MAX_YEAR]. From an empty input, up starts at MIN_YEAR and
        down starts at MAX_YEAR.
        """
        self._require_active("change the guess")
        if delta not in (1, -1):
            raise ValueError("delta must be +1 or -1.")

        if self._guess == "":
            value = config.MIN_YEAR if delta > 0 else config.MAX_YEAR
        else:
            value = int(self._guess) + delta
        value = max(config.MIN_YEAR, min(config.MAX_YEAR, value))

        self._guess = str(value)
        return self._guess

    def submit(self) -> SubmitResult:
        self._require_active("submit")

        # 1. Ignore an empty input or a guess that already missed
        if self._guess == "":
            return SubmitResult(accepted=False, status=self._status, ignored_reason="empty_guess")
        guess = normalize(self._guess)
        if guess in self._misses:
            return SubmitResult(accepted=False, status=self._status, ignored_reason="duplicate_guess")

        # 2. Merge this guess's feedback into what is already confirmed
        before = self._feedback
        self._feedback = merge_feedback(before, match_digits(guess, self._secret.year))
        confirmed = [
            DigitConfirmed(index=i, label=DIGIT_LABELS[i])
            for i in range(YEAR_DIGITS)
            if self._feedback[i] and not before[i]
        ]

        # 3. Win
        if guess == self._secret.year:
            self._winning_guess = guess
            self._status = "won"
            return SubmitResult(accepted=True, status=self._status, confirmed=confirmed)

        # 4. Miss; the 5th one ends the game
        self._misses.append(guess)
        if len(self._misses) >= MAX_MISSES:
            self._status = "lost"
        return SubmitResult(
            accepted=True,
            status=self._status,
            confirmed=confirmed,
            hint=direction_hint(guess, self._secret.year),
        )

    # ---------------- Queries ----------------

    @property
    def started(self) -> bool:
        return self._status is not None

    @property
    def status(self) -> Optional[GameStatus]:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status in ("won", "lost")

    @property
    def guess(self) -> str:
        return self._guess

    @property
    def feedback(self) -> Tuple[bool, ...]:
        return tuple(self._feedback)

    @property
    def misses(self) -> Tuple[Year, ...]:
        return tuple(self._misses)

    @property
    def winning_guess(self) -> Optional[Year]:
        return self._winning_guess

    @property
    def attempts_left(self) -> int:
        if self._status == "won":
            return MAX_MISSES - len(self._misses) - 1
        return MAX_MISSES - len(self._misses)

    def revealed_events(self) -> List[HistoricalEvent]:
        """One event to start with, one more per miss, at most 5."""
        if self._secret is None:
            return []
        count = min(len(self._misses) + 1, MAX_REVEALS)
        return list(self._secret.events[:count])

    def hint_for(self, miss: str) -> Hint:
        if self._secret is None:
            raise IllegalTransition("Game has not started.")
        return direction_hint(miss, self._secret.year)

    def history(self) -> List[MissEntry]:
        return [MissEntry(guess=miss, hint=self.hint_for(miss)) for miss in self._misses]

    def masked_year(self) -> str:
        """Confirmed digits shown, the rest as X (e.g. "19XX")."""
        if self._secret is None:
            return "X" * YEAR_DIGITS
        return "".join(
            self._secret.year[i] if self._feedback[i] else "X"
            for i in range(YEAR_DIGITS)
        )

    # End-of-game details: only once the game is over

    @property
    def secret(self) -> Year:
        self._require_over("reveal the year")
        return self._secret.year

    def unseen_events(self) -> List[HistoricalEvent]:
        self._require_over("show the remaining events")
        return list(self._secret.events[len(self.revealed_events()):])

    def wikipedia_url(self) -> str:
        self._require_over("link the year")
        return WIKIPEDIA_URL.format(year=int(self._secret.year))

    # ---------------- Guards ----------------

    def _require_active(self, action: str) -> None:
        if self._status is None:
            raise IllegalTransition(f"Cannot {action}: game has not started.")
        if self._status != "active":
            raise IllegalTransition(f"Cannot {action}: game is {self._status}.")

    def _require_over(self, action: str) -> None:
        if not self.is_over:
            raise IllegalTransition(f"Cannot {action} before the game is over.")
