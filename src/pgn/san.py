"""
Standard Algebraic Notation (SAN) decoding.

Turns the text of a single move token into a move event. Pure function: no board is needed (or consulted),
the Board fills in what SAN leaves out.
"""

from typing import Optional

from src.chess.events import (
    GameEnd,
    Ignore,
    KingsideCastle,
    MoveEvent,
    NextMove,
    QueensideCastle,
)
from src.chess.pieces import SAN_TO_PIECE, Color, PieceType
from src.chess.square import Coordinates, file_index, is_file_name, is_rank_name, rank_index
from src.core.exceptions import DecodeError
from src.core.shared_types import Termination

KINGSIDE_CASTLING = ("O-O", "0-0")
QUEENSIDE_CASTLING = ("O-O-O", "0-0-0")
RESULTS: dict[str, Termination] = {
    Termination.WHITE_WON.value: Termination.WHITE_WON,
    Termination.BLACK_WON.value: Termination.BLACK_WON,
    Termination.DRAW.value: Termination.DRAW,
}
# The tokenizer splits 'e.p.' into 'e', '.', 'p', '.': the letters carry no information (en passant is derived anyway)
EN_PASSANT_PARTS = ("e", "p")

TRAILING_MARKERS = "#+:"
PROMOTION_SEPARATORS = "=/("
CAPTURE_MARKERS = "x:"
MAX_TRAILING_MARKERS = 2


class _ReverseCursor:
    """Walks over the move text from its last character to its first."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = len(text) - 1

    def has_more(self) -> bool:
        return self.position >= 0

    def peek(self) -> Optional[str]:
        return self.text[self.position] if self.has_more() else None

    def require(self) -> str:
        """The current character, which has to be there."""
        if not self.has_more():
            raise DecodeError(f"Move {self.text!r} ends unexpectedly.")
        return self.text[self.position]

    def advance(self) -> None:
        self.position -= 1


def decode_san(text: str, color: Color) -> MoveEvent:
    """
    Decode a move token for the side to move
    ----

    Literal tokens first (castling, results, the halves of 'e.p.'), everything else is read from right to left:

    1. up to 2 trailing markers: '#' (mate), '+' (check), ':' (capture)
    2. an optional ')' closing an "(Q)" promotion
    3. the promotion piece, optionally preceded by '=', '/' or '('
    4. destination rank, then destination file
    5. nothing left? -> a pawn move
    6. 'x' or ':' for a capture
    7. source rank, then source file (disambiguation)
    8. the piece letter. No letter means a pawn.

    ex. "Nbd7" -> knight from the b-file to d7, "exd8=Q+" -> pawn from the e-file takes on d8, promotes, gives check.
    """
    castling = text.rstrip("+#")
    if castling in KINGSIDE_CASTLING:
        return KingsideCastle(color)
    if castling in QUEENSIDE_CASTLING:
        return QueensideCastle(color)
    if text in RESULTS:
        return GameEnd(RESULTS[text])
    if text in EN_PASSANT_PARTS:
        return Ignore(text)

    cursor = _ReverseCursor(text)
    check = checkmate = capture = False

    seen_markers: set[str] = set()
    for _ in range(MAX_TRAILING_MARKERS):
        marker = cursor.require()
        if marker not in TRAILING_MARKERS:
            break
        if marker in seen_markers:
            raise DecodeError(f"Move {text!r}: {marker!r} written twice.")
        seen_markers.add(marker)
        if marker == "#":
            checkmate = True
        elif marker == "+":
            check = True
        else:
            capture = True
        cursor.advance()

    if cursor.require() == ")":
        cursor.advance()
        cursor.require()

    promotion: Optional[PieceType] = None
    if cursor.require() in SAN_TO_PIECE:
        promotion = SAN_TO_PIECE[cursor.require()]
        cursor.advance()
        if cursor.require() in PROMOTION_SEPARATORS:
            cursor.advance()

    destination = _read_coordinates(cursor)

    if not cursor.has_more():
        return NextMove(
            piece=PieceType.PAWN,
            color=color,
            destination=destination,
            capture=capture,
            check=check,
            checkmate=checkmate,
            promotion=promotion,
            text=text,
        )

    if cursor.peek() in CAPTURE_MARKERS:
        capture = True
        cursor.advance()

    source = _read_coordinates(cursor)

    piece = PieceType.PAWN
    if cursor.has_more():
        letter = cursor.require()
        if letter not in SAN_TO_PIECE:
            raise DecodeError(f"Move {text!r}: was expecting a piece, got {letter!r}.")
        piece = SAN_TO_PIECE[letter]
        cursor.advance()

    if cursor.has_more():
        raise DecodeError(f"Move {text!r}: unexpected trailing characters.")

    return NextMove(
        piece=piece,
        color=color,
        destination=destination,
        source=source,
        capture=capture,
        check=check,
        checkmate=checkmate,
        promotion=promotion,
        text=text,
    )


def _read_coordinates(cursor: _ReverseCursor) -> Coordinates:
    """Rank digit then file letter (reading backwards), each one optional"""
    rank: Optional[int] = None
    file: Optional[int] = None
    character = cursor.peek()
    if character is not None and is_rank_name(character):
        rank = rank_index(character)
        cursor.advance()
    character = cursor.peek()
    if character is not None and is_file_name(character):
        file = file_index(character)
        cursor.advance()
    return Coordinates(rank, file)
