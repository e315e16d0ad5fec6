"""
Pure game logic (no HTTP, no storage, no randomness).

Digit feedback only ever grows a confirmed prefix of the year:
we walk left to right and stop at the first digit that differs.
A later digit that happens to line up gets no credit.

  secret = "1500"
  guess  = "1962"
  -> [True, False, False, False]   ('9' != '5', so we stop there)
"""

from typing import List

from .exceptions import InvalidGuessFormat
from .types import DigitFeedback, Hint, Year

YEAR_DIGITS = 4
DIGIT_CHARS = "0123456789"

# Names for each position, used when a digit gets confirmed
DIGIT_LABELS = ("millennium", "century", "decade", "year")


def validate_guess(raw: str) -> str:
    """
    Accepts what a player may type: up to 4 decimal digits, or nothing.
    Only ASCII digits count; str.isdigit() would let other scripts through.
    """
    if not isinstance(raw, str):
        raise InvalidGuessFormat("Guess must be a string of digits.")
    if len(raw) > YEAR_DIGITS:
        raise InvalidGuessFormat(f"Guess must have at most {YEAR_DIGITS} digits.")
    for ch in raw:
        if ch not in DIGIT_CHARS:
            raise InvalidGuessFormat("Guess must contain only the digits 0-9.")
    return raw


def normalize(raw: str) -> Year:
    """
    Left-pad with zeros to 4 digits.
      "7"    -> "0007"
      "42"   -> "0042"
      "1999" -> "1999"
    """
    validate_guess(raw)
    if raw == "":
        raise InvalidGuessFormat("Guess is empty.")
    return raw.zfill(YEAR_DIGITS)


def match_digits(guess: str, secret: str) -> DigitFeedback:
    """
    Per-digit feedback with the prefix-break rule.
    Returns a list of 4 booleans.
    """
    guess_digits = normalize(guess)
    secret_digits = normalize(secret)

    feedback: List[bool] = [False] * YEAR_DIGITS
    i = 0
    while i < YEAR_DIGITS:
        if guess_digits[i] != secret_digits[i]:
            break
        feedback[i] = True
        i += 1
    return feedback


def merge_feedback(current: DigitFeedback, new: DigitFeedback) -> DigitFeedback:
    """Index-wise OR, so a confirmed digit never goes back to unconfirmed."""
    return [old or fresh for old, fresh in zip(current, new)]


def is_win(guess: str, secret: str) -> bool:
    return normalize(guess) == normalize(secret)


def direction_hint(miss: str, secret: str) -> Hint:
    """
    Compare years as numbers.
    An earlier guess is "too old", a later one "too recent".
    """
    miss_value = int(normalize(miss))
    secret_value = int(normalize(secret))
    if miss_value == secret_value:
        raise ValueError("A correct guess has no direction hint.")
    if miss_value < secret_value:
        return "too old"
    return "too recent"
