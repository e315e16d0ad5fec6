"""
Pydantic models for the HTTP layer.
- Define the structure of API requests and responses.
- Guess contents are validated by the game itself (so the rules live in one place),
  the request model only checks the type.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from .game import GameState, SubmitResult

# 1. Player's guess (in-progress input)
class GuessRequest(BaseModel):
    guess: str = Field(..., description="Up to 4 decimal digits; empty clears the input")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"guess": "1969"},
                {"guess": "42"},
            ]
        }
    }

# 2. One missed guess with its direction
class MissOut(BaseModel):
    guess: str = Field(..., description="The missed guess, zero-padded to 4 digits")
    hint: Literal["too old", "too recent"] = Field(..., description="Where the secret year lies relative to this guess")

# 3. A digit that got confirmed by the last submission
class DigitConfirmedOut(BaseModel):
    index: int = Field(..., description="Position in the year, 0 = leftmost")
    label: str = Field(..., description="millennium, century, decade or year")

# 4. Overall state of a session's game
class GameStateOut(BaseModel):
    session_id: str = Field(..., description="Unique ID for the session")
    status: Literal["pending", "active", "won", "lost"] = Field(
        ..., description="'pending' while the year is being chosen"
    )
    guess: str = Field("", description="Current in-progress input")
    masked_year: str = Field("XXXX", description="Confirmed digits, X elsewhere")
    feedback: List[bool] = Field(default_factory=lambda: [False] * 4, description="Per-digit confirmation")
    misses: List[MissOut] = Field(default_factory=list, description="Missed guesses in order")
    revealed_events: List[str] = Field(default_factory=list, description="Events unlocked so far")
    attempts_left: int = Field(5, description="Guesses remaining")

# 5. Result of a submission
class SubmitResponse(BaseModel):
    accepted: bool = Field(..., description="False if the submission was ignored")
    ignored_reason: Optional[Literal["empty_guess", "duplicate_guess"]] = Field(None, description="Why it was ignored")
    confirmed: List[DigitConfirmedOut] = Field(default_factory=list, description="Digits newly confirmed")
    hint: Optional[Literal["too old", "too recent"]] = Field(None, description="Direction for a miss")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Game lost.')")
    state: GameStateOut

# 6. End-of-game details
class DetailsOut(BaseModel):
    year: str = Field(..., description="The secret year")
    won: bool = Field(..., description="Whether the player found it")
    other_events: List[str] = Field(..., description="Events from that year the player did not see")
    wikipedia_url: str = Field(..., description="Where to read more about the year")


def game_state_out(session_id: str, game: Optional[GameState]) -> GameStateOut:
    if game is None:
        return GameStateOut(session_id=session_id, status="pending")
    return GameStateOut(
        session_id=session_id,
        status=game.status,
        guess=game.guess,
        masked_year=game.masked_year(),
        feedback=list(game.feedback),
        misses=[MissOut(guess=entry.guess, hint=entry.hint) for entry in game.history()],
        revealed_events=[event.description for event in game.revealed_events()],
        attempts_left=game.attempts_left,
    )


def submit_response(session_id: str, game: GameState, result: SubmitResult) -> SubmitResponse:
    note = None
    if result.status == "won":
        note = "You won! No more guesses allowed."
    elif result.status == "lost":
        note = "You lost! No more guesses allowed."
    return SubmitResponse(
        accepted=result.accepted,
        ignored_reason=result.ignored_reason,
        confirmed=[DigitConfirmedOut(index=c.index, label=c.label) for c in result.confirmed],
        hint=result.hint,
        note=note,
        state=game_state_out(session_id, game),
    )
