"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

import logging
from dataclasses import dataclass
from typing import Self, assert_never

from src.chess.castling import CASTLING_RULES, CastlingDirection
from src.chess.events import (
    GameEnd,
    Ignore,
    KingsideCastle,
    MoveEvent,
    NextMove,
    QueensideCastle,
)
from src.chess.moves import (
    LEGALITY_RULES,
    PAWN_PROMOTION_RANK,
    PROMOTION_PIECES,
    CanMoveFn,
    en_passant_victim,
    is_locked,
)
from src.chess.pieces import Cell, Color, PieceType
from src.chess.square import BOARD_SIZE, Coordinates, all_squares
from src.core.exceptions import AmbiguousMoveError, CastlingError, IllegalMoveError

logger = logging.getLogger(__name__)

Grid = list[list[Cell]]

BACK_RANK: list[PieceType] = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


def _empty_grid() -> Grid:
    return [[Cell.empty() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def starting_position(cls) -> Self:
        """Standard set-up: Black on rows 0-1 (ranks 8 and 7), White on rows 6-7 (ranks 2 and 1)."""
        grid = _empty_grid()
        for file, piece_type in enumerate(BACK_RANK):
            grid[0][file] = Cell(piece_type, Color.BLACK)
            grid[1][file] = Cell(PieceType.PAWN, Color.BLACK)
            grid[6][file] = Cell(PieceType.PAWN, Color.WHITE)
            grid[7][file] = Cell(piece_type, Color.WHITE)
        return cls(grid)

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """
        Construct a board from the same text format `to_diagram()` produces.

        ex. the row "  |  |wK|  |  |  |  |bR" puts a white king on c and a black rook on h.
        Rows are read from top (8th rank) to bottom (1st rank).
        """
        rows = diagram.split("\n")
        if rows and rows[-1] == "":
            rows = rows[:-1]
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Board diagram needs {BOARD_SIZE} rows, got {len(rows)}")

        grid: Grid = []
        for row in rows:
            codes = row.split("|")
            if len(codes) != BOARD_SIZE:
                raise ValueError(f"Cannot read diagram row {row!r}")
            grid.append([Cell.from_code(code) for code in codes])
        return cls(grid)

    def to_diagram(self) -> str:
        """8 rows (8th rank first), cells separated by '|', every row terminated by a newline"""
        return "".join(
            "|".join(cell.to_code() for cell in row) + "\n" for row in self.grid
        )

    def __str__(self) -> str:
        return self.to_diagram()

    def cell(self, square: Coordinates) -> Cell:
        assert square.rank is not None and square.file is not None
        return self.grid[square.rank][square.file]

    def set_cell(self, square: Coordinates, cell: Cell) -> None:
        """To set up positions by hand"""
        assert square.rank is not None and square.file is not None
        self.grid[square.rank][square.file] = cell

    def locate(self, piece: PieceType, color: Color) -> list[Coordinates]:
        return [square for square in all_squares() if self.cell(square).holds(piece, color)]

    def double_stepped_pawns(self, color: Color) -> list[Coordinates]:
        return [
            square
            for square in self.locate(PieceType.PAWN, color)
            if self.cell(square).double_step
        ]

    # --- APPLYING EVENTS ---
    def apply(self, event: MoveEvent) -> None:
        """Update the position on the board"""
        match event:
            case NextMove():
                self._apply_move(event)
            case KingsideCastle(color=color):
                self._castle(color, CastlingDirection.KING_SIDE)
            case QueensideCastle(color=color):
                self._castle(color, CastlingDirection.QUEEN_SIDE)
            case GameEnd() | Ignore():
                pass
            case _:
                assert_never(event)

    def source_candidates(self, move: NextMove) -> list[Coordinates]:
        """
        Squares holding the moving piece (right type and color), restricted by whatever SAN told us about the source.
        ----

        - both rank and file known: just that square (if it holds the piece)
        - only the rank or only the file known: the pieces on that rank / file
        - nothing known: all such pieces on the board
        """
        return [
            square
            for square in self._squares_matching(move.source)
            if self.cell(square).holds(move.piece, move.color)
        ]

    def destination_candidates(self, move: NextMove) -> list[Coordinates]:
        """
        Squares the move could land on.

        NOTE: For a capture, any occupied square is kept here: color / king checks happen in the movement rules.
        """
        if move.destination.file is None:
            raise IllegalMoveError(
                f"Move {move.text!r}: cannot tell on which file the {move.piece.name.lower()} should land."
            )
        return [
            square
            for square in self._squares_matching(move.destination)
            if move.capture or self.cell(square).is_empty()
        ]

    def resolve(self, move: NextMove) -> tuple[Coordinates, Coordinates]:
        """Find the single (source, destination) pair that is a legal move for the event."""
        sources = self.source_candidates(move)
        if not sources:
            raise IllegalMoveError(
                f"Move {move.text!r}: no {move.color.name.lower()} {move.piece.name.lower()} "
                f"on {move.source.to_algebraic() or 'the board'}."
            )
        destinations = self.destination_candidates(move)

        can_move: CanMoveFn = LEGALITY_RULES[move.piece]
        matches = [
            (source, destination)
            for source in sources
            for destination in destinations
            if source != destination
            and not is_locked(self, source, destination, move.capture, move.color)
            and can_move(self, source, destination, move.capture, move.color)
        ]

        if not matches:
            raise IllegalMoveError(
                f"Move {move.text!r} is not legal for {move.color.name.lower()} in this position."
            )
        if len(matches) > 1:
            options = ", ".join(f"{src}-{dst}" for src, dst in matches)
            raise AmbiguousMoveError(
                f"Move {move.text!r} is ambiguous: could be any of {options}."
            )
        return matches[0]

    def _squares_matching(self, coordinates: Coordinates) -> list[Coordinates]:
        return [
            square
            for square in all_squares()
            if coordinates.rank in (None, square.rank)
            and coordinates.file in (None, square.file)
        ]

    def _expire_double_steps(self, color: Color) -> None:
        """The opponent had exactly one move to take these pawns en passant."""
        for square in self.double_stepped_pawns(color):
            self.cell(square).double_step = False

    def _check_promotion(self, move: NextMove, destination: Coordinates) -> None:
        """A pawn reaching the last rank has to promote (to N, B, R or Q), and nothing else ever does."""
        if move.piece != PieceType.PAWN:
            if move.promotion is not None:
                raise IllegalMoveError(
                    f"Move {move.text!r}: only pawns can promote, not a {move.piece.name.lower()}."
                )
            return

        reaches_last_rank = destination.rank == PAWN_PROMOTION_RANK[move.color]
        if move.promotion is None:
            if reaches_last_rank:
                raise IllegalMoveError(
                    f"Move {move.text!r}: a pawn reaching {destination} has to promote."
                )
            return
        if not reaches_last_rank:
            raise IllegalMoveError(
                f"Move {move.text!r}: a pawn can not promote on {destination}."
            )
        if move.promotion not in PROMOTION_PIECES:
            raise IllegalMoveError(
                f"Move {move.text!r}: a pawn can not promote to a {move.promotion.name.lower()}."
            )

    def _apply_move(self, move: NextMove) -> None:
        self._expire_double_steps(move.color)
        source, destination = self.resolve(move)
        self._check_promotion(move, destination)
        source_cell = self.cell(source)
        destination_cell = self.cell(destination)

        source_cell.double_step = False
        if move.capture:
            destination_cell.double_step = False

        if move.piece == PieceType.PAWN:
            if move.capture and destination_cell.is_empty():
                victim = en_passant_victim(source, destination)
                logger.debug("%s takes en passant on %s", move.text, victim)
                self.cell(victim).clear()
            if source.rank_distance(destination) == 2:
                destination_cell.double_step = True

        destination_cell.piece = move.promotion or move.piece
        destination_cell.color = move.color
        source_cell.clear()
        logger.debug("%s: %s %s -> %s", move.text, move.piece.name.lower(), source, destination)

    def _castle(self, color: Color, direction: CastlingDirection) -> None:
        """
        Move king and rook in one go.

        All preconditions are checked before touching the board, so a failed castle leaves the position as it was.
        """
        rule = CASTLING_RULES[(color, direction)]
        if not self.cell(rule.king_from).holds(PieceType.KING, color):
            raise CastlingError(
                f"{direction.value}: no {color.name.lower()} king on {rule.king_from}."
            )
        if not self.cell(rule.rook_from).holds(PieceType.ROOK, color):
            raise CastlingError(
                f"{direction.value}: no {color.name.lower()} rook on {rule.rook_from}."
            )
        blocked = [square for square in rule.squares_between() if not self.cell(square).is_empty()]
        if blocked:
            raise CastlingError(
                f"{direction.value}: {', '.join(str(square) for square in blocked)} not empty."
            )

        self._expire_double_steps(color)
        self.set_cell(rule.king_to, Cell(PieceType.KING, color))
        self.set_cell(rule.rook_to, Cell(PieceType.ROOK, color))
        self.cell(rule.king_from).clear()
        self.cell(rule.rook_from).clear()
        logger.debug("%s castles %s", color.name.lower(), direction.value)
