"""Custom exception hierarchy for hex crossword generation."""


class HexawordError(Exception):
    """Base exception for engine failures."""


class PlacementInvariantError(HexawordError, AssertionError):
    """Raised when a placement would corrupt the board.

    Legality checks run before every placement, so reaching this means a
    logic bug rather than a bad word list.
    """


class ValidationError(HexawordError):
    """Raised when the board integrity checks fail."""
