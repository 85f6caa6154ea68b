"""
Errors raised by the outer layers (service, transport).

The chess engine itself does not raise for illegal requests: an illegal move or a click out of turn is ignored and
reported back as an outcome instead.
"""


class GameError(Exception):
    """Base class of all errors of this application"""


class GameNotFoundError(GameError):
    """No game stored under the requested ID"""


class InvalidSquareError(GameError):
    """A square name that does not exist on the board"""


class InvalidRequestError(GameError, ValueError):
    """The request could not be interpreted (a ValueError, so pydantic validators report it as a validation error)"""
