"""Defines the types of chess pieces, and what a single cell of the board holds"""

from dataclasses import dataclass
from enum import Enum
from typing import Self


class PieceType(Enum):
    """Values are the letters used for the pieces in SAN (and in the board diagram)."""

    EMPTY = " "
    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"


class Color(Enum):
    NONE = " "
    WHITE = "w"
    BLACK = "b"

    def opponent(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


SAN_TO_PIECE: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}

PIECE_TO_SAN: dict[PieceType, str] = {value: key for key, value in SAN_TO_PIECE.items()}

CODE_TO_COLOR: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}


@dataclass
class Cell:
    """
    Content of one square of the board.

    NOTE: `double_step` is only ever set on a pawn that just advanced two squares. It is what makes an
    en passant capture of that pawn legal on the very next move, and gets cleared right after.
    """

    piece: PieceType = PieceType.EMPTY
    color: Color = Color.NONE
    double_step: bool = False

    @classmethod
    def empty(cls) -> Self:
        return cls(PieceType.EMPTY, Color.NONE)

    @classmethod
    def from_code(cls, code: str) -> Self:
        """'wP', 'bK', ... or two spaces for an empty cell"""
        if code.strip() == "":
            return cls.empty()
        return cls(SAN_TO_PIECE[code[1]], CODE_TO_COLOR[code[0]])

    def to_code(self) -> str:
        if self.is_empty():
            return "  "
        return f"{self.color.value}{self.piece.value}"

    def is_empty(self) -> bool:
        return self.piece == PieceType.EMPTY

    def holds(self, piece: PieceType, color: Color) -> bool:
        return self.piece == piece and self.color == color

    def clear(self) -> None:
        self.piece = PieceType.EMPTY
        self.color = Color.NONE
        self.double_step = False
