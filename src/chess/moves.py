"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the legality check for each piece type.

Every rule answers a single question: "Could the piece of this type on `source` go to `destination`?"
The rules only look at the board, they never change it. Applying the move (including the en passant capture
and the bookkeeping of pawns that just advanced two squares) is done by the Board once a single match was found.
"""

from typing import Callable, Optional, Protocol

from src.chess.pieces import Cell, Color, PieceType
from src.chess.square import BOARD_SIZE, Coordinates


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def cell(self, square: Coordinates) -> Cell: ...


Vector = tuple[int, int]

# (d_rank, d_file) for the 8 compass directions, clockwise starting "up the board".
# Even index: along a rank or file. Odd index: along a diagonal.
DIRECTIONS: list[Vector] = [
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
]

# Row on which the pawns of each color start (and from which they may advance two squares)
PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
# White pawns move up the board, which means towards row 0
PAWN_FORWARD: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
# Row a pawn has to promote on
PAWN_PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
PROMOTION_PIECES: frozenset[PieceType] = frozenset(
    {PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}
)


def _deltas(source: Coordinates, destination: Coordinates) -> Vector:
    assert source.rank is not None and source.file is not None
    assert destination.rank is not None and destination.file is not None
    return destination.rank - source.rank, destination.file - source.file


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_free(board: Board, square: Coordinates) -> bool:
    return board.cell(square).is_empty()


def is_valid_dest(
    board: Board, destination: Coordinates, capture: bool, color: Color
) -> bool:
    """
    The destination of a capture has to hold an opponent's piece (but never the king itself)
    Any other move has to land on an empty square.
    """
    target = board.cell(destination)
    if capture:
        return target.color == color.opponent() and target.piece != PieceType.KING
    return target.is_empty()


def path_is_clear(board: Board, source: Coordinates, destination: Coordinates) -> bool:
    """All squares strictly in between source and destination are empty (along a straight or diagonal line)."""
    d_rank, d_file = _deltas(source, destination)
    step = (_sign(d_rank), _sign(d_file))
    square = source.shifted(*step)
    while square != destination:
        if not is_free(board, square):
            return False
        square = square.shifted(*step)
    return True


def en_passant_victim(source: Coordinates, destination: Coordinates) -> Coordinates:
    """The pawn taken en passant stands next to the capturing pawn: on the source's rank, in the destination's file."""
    return Coordinates(source.rank, destination.file)


def is_en_passant(
    board: Board, source: Coordinates, destination: Coordinates, color: Color
) -> bool:
    """A diagonal pawn capture onto an empty square is only allowed if it takes a pawn that just advanced two squares."""
    victim = board.cell(en_passant_victim(source, destination))
    return (
        victim.holds(PieceType.PAWN, color.opponent())
        and victim.double_step
        and is_free(board, destination)
    )


# --- MOVEMENT RULES ---
def pawn_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """
    A pawn:
    - moves by a single square forward (onto an empty square).
    - It can move by two in their first move (so when on their starting rank), if both squares are free
    - takes diagonally, by a single square forward. Either a piece on that square, or en passant.
    """
    d_rank, d_file = _deltas(source, destination)
    forward = d_rank * PAWN_FORWARD[color]
    sideways = abs(d_file)

    if capture:
        if forward != 1 or sideways != 1:
            return False
        if is_free(board, destination):
            return is_en_passant(board, source, destination, color)
        return is_valid_dest(board, destination, capture, color)

    if sideways != 0:
        return False
    if forward == 1:
        return is_valid_dest(board, destination, capture, color)
    if forward == 2 and source.rank == PAWN_HOME_RANK[color]:
        in_between = source.shifted(PAWN_FORWARD[color], 0)
        return is_free(board, in_between) and is_valid_dest(
            board, destination, capture, color
        )
    return False


def knight_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """Knights jump (no need to check the path): {|delta_rank|, |delta_file|} = {1, 2}"""
    d_rank, d_file = _deltas(source, destination)
    jumps = sorted((abs(d_rank), abs(d_file))) == [1, 2]
    return jumps and is_valid_dest(board, destination, capture, color)


def bishop_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    d_rank, d_file = _deltas(source, destination)
    if d_rank == 0 or abs(d_rank) != abs(d_file):
        return False
    return path_is_clear(board, source, destination) and is_valid_dest(
        board, destination, capture, color
    )


def rook_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """Rooks move either horizontally or vertically"""
    d_rank, d_file = _deltas(source, destination)
    if (d_rank == 0) == (d_file == 0):
        # either not moving at all, or not staying on a rank/file
        return False
    return path_is_clear(board, source, destination) and is_valid_dest(
        board, destination, capture, color
    )


def queen_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_can_move(board, source, destination, capture, color) or bishop_can_move(
        board, source, destination, capture, color
    )


def king_can_move(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a separate event (handled by the Board).
    """
    d_rank, d_file = _deltas(source, destination)
    single_step = (d_rank, d_file) != (0, 0) and abs(d_rank) <= 1 and abs(d_file) <= 1
    return single_step and is_valid_dest(board, destination, capture, color)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CanMoveFn = Callable[[Board, Coordinates, Coordinates, bool, Color], bool]
LEGALITY_RULES: dict[PieceType, CanMoveFn] = {
    PieceType.PAWN: pawn_can_move,
    PieceType.KNIGHT: knight_can_move,
    PieceType.BISHOP: bishop_can_move,
    PieceType.ROOK: rook_can_move,
    PieceType.QUEEN: queen_can_move,
    PieceType.KING: king_can_move,
}


# --- PINS ---
def raycast(
    board: Board, square: Coordinates, direction: Vector
) -> Optional[Coordinates]:
    """
    Raycasting algorithm
    ----

    The main trick we use to check the 'line of sight of a piece'.
    Move along the direction until we hit another piece (returned) or the edge of the board (None).
    """
    for _ in range(BOARD_SIZE):
        square = square.shifted(*direction)
        if not square.is_within_bounds():
            return None
        if not is_free(board, square):
            return square
    return None


def attacks_along(cell: Cell, direction_index: int, color: Color) -> bool:
    """Can the (opponent's) piece on this cell attack along a line of the given direction?"""
    if cell.color != color.opponent():
        return False
    if direction_index % 2:
        return cell.piece in (PieceType.QUEEN, PieceType.BISHOP)
    return cell.piece in (PieceType.QUEEN, PieceType.ROOK)


def pin_line(
    king: Coordinates, attacker: Coordinates, direction: Vector
) -> list[Coordinates]:
    """Squares from (excluding) the king up to (including) the attacker."""
    squares: list[Coordinates] = []
    square = king
    while square != attacker:
        square = square.shifted(*direction)
        squares.append(square)
    return squares


def is_locked(
    board: Board,
    source: Coordinates,
    destination: Coordinates,
    capture: bool,
    color: Color,
) -> bool:
    """
    Is the piece on `source` pinned to its own king, with `destination` off the pin line?
    ----

    1. Look along all 8 directions from the source square for the first piece. If it is our own king, remember the direction.
    2. Look the opposite way for the first piece. If that is an opponent's piece that attacks along this line
       (rook / queen on ranks and files, bishop / queen on diagonals), the piece is pinned.
    3. A pinned piece may still move along the pin line: anywhere in between king and attacker, or capture the attacker.

    NOTE: `capture` is not needed to decide, capturing the pinning piece simply is a destination on the line.
    """
    for index, direction in enumerate(DIRECTIONS):
        found = raycast(board, source, direction)
        if found is None or not board.cell(found).holds(PieceType.KING, color):
            continue

        opposite = DIRECTIONS[(index + len(DIRECTIONS) // 2) % len(DIRECTIONS)]
        attacker = raycast(board, source, opposite)
        if attacker is None or not attacks_along(board.cell(attacker), index, color):
            return False
        return destination not in pin_line(found, attacker, opposite)
    return False
