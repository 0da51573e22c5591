"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.chess.pieces import Color
from src.chess.square import Coordinates


class CastlingDirection(Enum):
    """The two castling directions. Values are the SAN spelling."""

    KING_SIDE = "O-O"
    QUEEN_SIDE = "O-O-O"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: No castling rights are tracked: the Board only checks the king / rook are still on these starting squares.
    """

    king_from: Coordinates
    king_to: Coordinates
    rook_from: Coordinates
    rook_to: Coordinates

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Coordinates.from_algebraic(k_from)
        king_to = Coordinates.from_algebraic(k_to)
        rook_from = Coordinates.from_algebraic(r_from)
        rook_to = Coordinates.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def squares_between(self) -> list[Coordinates]:
        """
        The squares in between king and rook (same rank, exclusive on both ends).

        These all have to be empty before castling.
        """
        assert self.king_from.file is not None and self.rook_from.file is not None
        step = 1 if self.rook_from.file > self.king_from.file else -1
        return [
            Coordinates(self.king_from.rank, file)
            for file in range(self.king_from.file + step, self.rook_from.file, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingDirection], CastlingSquares] = {
    (Color.WHITE, CastlingDirection.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingDirection.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingDirection.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingDirection.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}
