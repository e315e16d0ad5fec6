"""
Game errors, kept in one place so the API layer can map them to responses.
"""


class HistoryGameError(Exception):
    """Base class for every game error."""
    pass


class InvalidGuessFormat(HistoryGameError):
    """Guess is not 0-4 decimal digits."""
    pass


class IllegalTransition(HistoryGameError):
    """Command not allowed in the game's current status."""
    pass


class SourceUnavailable(HistoryGameError):
    """The historical-events source failed, or no usable year was found."""
    pass


class SessionNotFound(HistoryGameError):
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")
