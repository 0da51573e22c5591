"""Unit tests for /src/pgn/san.py"""

import pytest

from src.chess.events import (
    GameEnd,
    Ignore,
    KingsideCastle,
    NextMove,
    QueensideCastle,
)
from src.chess.pieces import Color, PieceType
from src.chess.square import Coordinates
from src.core.exceptions import DecodeError
from src.core.shared_types import Termination
from src.pgn.san import decode_san


def decode_move(text: str, color: Color = Color.WHITE) -> NextMove:
    event = decode_san(text, color)
    assert isinstance(event, NextMove)
    return event


def test_pawn_push() -> None:
    move = decode_move("e4")
    assert move.piece == PieceType.PAWN
    assert move.color == Color.WHITE
    assert move.destination == Coordinates(4, 4)
    assert move.source == Coordinates()
    assert not (move.capture or move.check or move.checkmate)
    assert move.promotion is None
    assert move.text == "e4"


def test_corner() -> None:
    assert decode_move("h1").destination == Coordinates(7, 7)
    assert decode_move("a8").destination == Coordinates(0, 0)


def test_pawn_capture_with_promotion() -> None:
    move = decode_move("a7xb8=Q", Color.BLACK)
    assert move.piece == PieceType.PAWN
    assert move.color == Color.BLACK
    assert move.capture
    assert move.destination == Coordinates(0, 1)
    assert move.source == Coordinates(1, 0)
    assert move.promotion == PieceType.QUEEN


@pytest.mark.parametrize(
    "text, promotion",
    [
        ("a1=Q", PieceType.QUEEN),
        ("a1/R", PieceType.ROOK),
        ("a1(B)", PieceType.BISHOP),
        ("a1N", PieceType.KNIGHT),
    ],
)
def test_promotion_spellings(text: str, promotion: PieceType) -> None:
    move = decode_move(text, Color.BLACK)
    assert move.destination == Coordinates(7, 0)
    assert move.promotion == promotion
    assert move.piece == PieceType.PAWN


@pytest.mark.parametrize(
    "text, piece, source, destination, capture",
    [
        ("Nf3", PieceType.KNIGHT, Coordinates(), Coordinates(5, 5), False),
        ("Bxe7", PieceType.BISHOP, Coordinates(), Coordinates(1, 4), True),
        ("Nbd7", PieceType.KNIGHT, Coordinates(None, 1), Coordinates(1, 3), False),
        ("R1e2", PieceType.ROOK, Coordinates(7, None), Coordinates(6, 4), False),
        ("Qh4xe1", PieceType.QUEEN, Coordinates(4, 7), Coordinates(7, 4), True),
        ("exd6", PieceType.PAWN, Coordinates(None, 4), Coordinates(2, 3), True),
        ("Kd2", PieceType.KING, Coordinates(), Coordinates(6, 3), False),
        ("N:e5", PieceType.KNIGHT, Coordinates(), Coordinates(3, 4), True),
    ],
)
def test_piece_moves(
    text: str,
    piece: PieceType,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
) -> None:
    move = decode_move(text)
    assert move.piece == piece
    assert move.source == source
    assert move.destination == destination
    assert move.capture == capture


def test_partial_destination() -> None:
    """'axb': pawn from the a-file takes something on the b-file."""
    move = decode_move("axb", Color.BLACK)
    assert move.destination == Coordinates(None, 1)
    assert move.source == Coordinates(None, 0)
    assert move.capture


@pytest.mark.parametrize(
    "text, check, checkmate, capture",
    [
        ("Rxh5#", False, True, True),
        ("Bxf7+", True, False, True),
        ("Qe5+#", True, True, False),
        ("e5:", False, False, True),
        ("Nf3:+", True, False, True),
    ],
)
def test_trailing_markers(text: str, check: bool, checkmate: bool, capture: bool) -> None:
    move = decode_move(text)
    assert move.check == check
    assert move.checkmate == checkmate
    assert move.capture == capture


@pytest.mark.parametrize(
    "text, expected",
    [
        ("O-O", KingsideCastle(Color.BLACK)),
        ("0-0", KingsideCastle(Color.BLACK)),
        ("O-O+", KingsideCastle(Color.BLACK)),
        ("O-O-O", QueensideCastle(Color.BLACK)),
        ("0-0-0", QueensideCastle(Color.BLACK)),
        ("O-O-O#", QueensideCastle(Color.BLACK)),
        ("1-0", GameEnd(Termination.WHITE_WON)),
        ("0-1", GameEnd(Termination.BLACK_WON)),
        ("1/2-1/2", GameEnd(Termination.DRAW)),
        ("e", Ignore("e")),
        ("p", Ignore("p")),
    ],
)
def test_literal_tokens(text: str, expected: object) -> None:
    assert decode_san(text, Color.BLACK) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "+",
        "++",
        "#+",
        "e4++",  # each marker at most once
        "Nf3##",
        "e5::",
        "Zf3",
        "xNf3",
        "NNf3",
        "Q-e4",
        "asdfasdf",
    ],
)
def test_decode_errors(text: str) -> None:
    with pytest.raises(DecodeError):
        decode_san(text, Color.WHITE)


@pytest.mark.parametrize(
    "text",
    ["e4", "Nbd7", "a7xb8=Q", "Qh4xe1+", "R1e2#", "exd6", "axb", "b1=N", "Kxf7+#"],
)
def test_to_san_decodes_to_the_same_move(text: str) -> None:
    """Writing the decoded fields back as SAN, and decoding that again, gives the same fields."""
    move = decode_move(text, Color.BLACK)
    again = decode_move(move.to_san(), Color.BLACK)
    assert (again.piece, again.source, again.destination) == (move.piece, move.source, move.destination)
    assert (again.capture, again.check, again.checkmate) == (move.capture, move.check, move.checkmate)
    assert again.promotion == move.promotion


def test_to_san_is_canonical() -> None:
    assert decode_move("Qh4:e1").to_san() == "Qh4xe1"
    assert decode_move("b8(Q)").to_san() == "b8=Q"
    assert decode_move("N:e5").to_san() == "Nxe5"

