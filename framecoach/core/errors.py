"""Typed failure signals raised by the matchup engine.

Parsing never raises; these only come out of data retrieval and name
resolution. Callers pick policy per type (e.g. degrade on ``DataEmpty``,
surface ``FetchError`` to the user).
"""


class MatchupEngineError(Exception):
    """Base exception for matchup engine failures."""

    def __init__(self, message: str, *, character_id: str | None = None) -> None:
        super().__init__(message)
        self.character_id = character_id


class FetchError(MatchupEngineError):
    """Upstream source unreachable, timed out, or returned malformed data."""

    pass


class DataEmpty(MatchupEngineError):
    """Upstream returned a structurally valid but empty move list."""

    pass


class ResolutionError(MatchupEngineError):
    """A display name could not be turned into a character identifier."""

    def __init__(self, message: str, *, display_name: str) -> None:
        super().__init__(message)
        self.display_name = display_name
