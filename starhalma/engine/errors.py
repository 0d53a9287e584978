from __future__ import annotations


class GameEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvalidStateError(GameEngineError):
    """Serialized state could not be parsed or does not fit the board."""

    def __init__(self, message: str, details: object | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class AgentError(GameEngineError):
    """An AI agent is misconfigured or was asked to play for the wrong player."""
    pass
