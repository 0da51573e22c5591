"""
Move events: what the PGN automaton hands to the Board.

A closed set of immutable records. Consumers dispatch over them with `match` and `assert_never`.
"""

from dataclasses import dataclass
from typing import Optional

from src.chess.pieces import PIECE_TO_SAN, Color, PieceType
from src.chess.square import Coordinates
from src.core.shared_types import Termination


@dataclass(frozen=True)
class NextMove:
    """
    A regular (non-castling) move as decoded from SAN.
    ---

    `source` and `destination` are usually partial: SAN only writes as much as is needed to identify the move,
    the Board fills in the rest.
    """

    piece: PieceType
    color: Color
    destination: Coordinates
    source: Coordinates = Coordinates()
    capture: bool = False
    check: bool = False
    checkmate: bool = False
    promotion: Optional[PieceType] = None
    text: str = ""

    def to_san(self) -> str:
        """Canonical SAN for the decoded fields (decoding it again gives back the same fields)."""
        piece = "" if self.piece == PieceType.PAWN else PIECE_TO_SAN[self.piece]
        takes = "x" if self.capture else ""
        promotion = f"={PIECE_TO_SAN[self.promotion]}" if self.promotion else ""
        check = "+" if self.check else ""
        mate = "#" if self.checkmate else ""
        return (
            f"{piece}{self.source.to_algebraic()}{takes}"
            f"{self.destination.to_algebraic()}{promotion}{check}{mate}"
        )


@dataclass(frozen=True)
class KingsideCastle:
    color: Color


@dataclass(frozen=True)
class QueensideCastle:
    color: Color


@dataclass(frozen=True)
class GameEnd:
    result: Termination = Termination.MANUAL


@dataclass(frozen=True)
class Ignore:
    """Tokens without meaning for the board (the 'e' and 'p' of an 'e.p.' annotation)."""

    text: str = ""


MoveEvent = NextMove | KingsideCastle | QueensideCastle | GameEnd | Ignore
