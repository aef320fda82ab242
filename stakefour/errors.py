"""
errors.py - Error kinds raised by the stakefour engine

Every rejected operation raises a subclass of GameError. The ``code`` attribute
is the stable kind name callers can match on; the message is for humans.
"""

from typing import Optional


class GameError(Exception):
    """Base class for all rule violations and collaborator failures."""
    code = "GameError"
    default_message = "Game error"
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class DuplicateReference(GameError):
    code = "DuplicateReference"
    default_message = "A game with this reference already exists"


class GameNotFound(GameError):
    code = "GameNotFound"
    default_message = "Game not found"


class GameStarted(GameError):
    code = "GameStarted"
    default_message = "Game started"


class GameFull(GameError):
    code = "GameFull"
    default_message = "Game is full"


class InvalidPlayer(GameError):
    code = "InvalidPlayer"
    default_message = "Invalid player"


class InvalidCommitment(GameError):
    code = "InvalidCommitment"
    default_message = "Invalid commitment"


class GameNotStarted(GameError):
    code = "GameNotStarted"
    default_message = "Game not started"


class GameOver(GameError):
    code = "GameOver"
    default_message = "Game over"


class NotYourTurn(GameError):
    code = "NotYourTurn"
    default_message = "Not your turn"


class InvalidColumn(GameError):
    code = "InvalidColumn"
    default_message = "Invalid column"


class InvalidRow(GameError):
    code = "InvalidRow"
    default_message = "Invalid row"


class CellNotEmpty(GameError):
    code = "CellNotEmpty"
    default_message = "Cell is not empty"


class TransferFailed(GameError):
    code = "TransferFailed"
    default_message = "Fund transfer failed"
