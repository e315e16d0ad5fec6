"""
Data records shared by the selector, the game and the API.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .types import Year

# A year is only usable as a secret if the source knows more than this many events
MIN_EVENTS_EXCLUSIVE = 5


@dataclass(frozen=True)
class HistoricalEvent:
    description: str
    year: Optional[str] = None
    month: Optional[str] = None
    day: Optional[str] = None


@dataclass(frozen=True)
class SecretYear:
    """
    The year to guess plus the events the source returned for it.
    Construction fails unless the year is 4 digits and there are more than 5 events,
    so an instance is always safe to start a game with.
    """
    year: Year
    events: Tuple[HistoricalEvent, ...]

    def __post_init__(self) -> None:
        if len(self.year) != 4 or not all(ch in "0123456789" for ch in self.year):
            raise ValueError(f"Secret year must be 4 decimal digits, got {self.year!r}.")
        if len(self.events) <= MIN_EVENTS_EXCLUSIVE:
            raise ValueError(
                f"A secret year needs more than {MIN_EVENTS_EXCLUSIVE} events, got {len(self.events)}."
            )
        # accept any sequence, store a tuple
        object.__setattr__(self, "events", tuple(self.events))


def format_year(value: int) -> Year:
    """1066 -> "1066", 42 -> "0042"."""
    if value < 0 or value > 9999:
        raise ValueError(f"Year {value} does not fit in 4 digits.")
    return f"{value:04d}"
