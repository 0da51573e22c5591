"""
Custom exceptions raised by the replay pipeline and the layers around it.

Every failure inside the pipeline is fatal for the game being replayed: the first error raised aborts the replay.
The `kind` attribute lets the boundary (see `src.chess.game.replay`) report *which* stage gave up without
having to inspect the exception class.
"""

from enum import StrEnum
from typing import Optional


class ErrorKind(StrEnum):
    LEXICAL = "lexical"
    GRAMMAR = "grammar"
    DECODE = "decode"
    ILLEGAL_MOVE = "illegal move"


class ReplayError(Exception):
    """Base class for everything that can go wrong while replaying a game."""

    kind: ErrorKind


class LexicalError(ReplayError):
    """A character is not allowed in the token being built (or cannot start a token at all)."""

    kind = ErrorKind.LEXICAL

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class GrammarError(ReplayError):
    """The grammar automaton has no transition for the token it received."""

    kind = ErrorKind.GRAMMAR


class DecodeError(ReplayError):
    """A move token does not follow the SAN move grammar."""

    kind = ErrorKind.DECODE


class IllegalMoveError(ReplayError):
    """A decoded move cannot be played on the current board."""

    kind = ErrorKind.ILLEGAL_MOVE


class AmbiguousMoveError(IllegalMoveError):
    """More than one piece could have made the move."""


class CastlingError(IllegalMoveError):
    """King or rook missing, or squares between them occupied."""


class InvalidRequestError(Exception):
    """Raised by the request models when the payload cannot be replayed at all."""
