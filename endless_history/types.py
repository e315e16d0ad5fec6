"""
Labels for clarity.
"""

from typing import List, Literal

Year = str  # zero-padded, 4 digits: "0042", "1969"
DigitFeedback = List[bool]  # one flag per digit of the year
GameStatus = Literal["active", "won", "lost"]
Hint = Literal["too old", "too recent"]
IgnoredReason = Literal["empty_guess", "duplicate_guess"]
