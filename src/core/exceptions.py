"""
Custom exceptions shared by all layers.

Rule violations during move validation are NOT raised (see MoveValidation in src/games/engine.py).
Everything below signals a condition the caller cannot continue from without changing its request.
"""


class GameError(Exception):
    """Top-level exception. Catch this one in the outer layers."""


class GameStateError(GameError):
    """The match is not in a state that allows the requested action."""


class NotYourTurnError(GameStateError):
    """A player attempted to act while another player is to move."""


class IllegalMoveError(GameError):
    """A move was rejected, or could not be parsed when it had to be applied."""


class InvalidBoardStateError(GameError):
    """A persisted board state could not be interpreted."""


class UnsupportedGameTypeError(GameError):
    """No engine is registered for the requested game type."""


class EngineRegistrationError(GameError):
    """An engine class does not provide the constants/operations every game type must have."""


class RepositoryError(GameError):
    """Something went wrong in the persistence layer (ex. record not found)."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""
