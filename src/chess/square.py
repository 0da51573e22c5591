"""
Coordinates on the board

(placed in its own module as multiple other modules need to import it)

Indices follow the printed board: row 0 is the 8th rank (top line of the diagram), row 7 is the 1st rank.
Files run a -> 0 up to h -> 7.
So 'e4' lives at (rank=4, file=4) and 'b8' at (rank=0, file=1).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Chess board is always 8x8.
BOARD_SIZE = 8

FILE_NAMES = "abcdefgh"
RANK_NAMES = "87654321"


def rank_index(character: str) -> int:
    """'8' -> 0, ..., '1' -> 7"""
    return ord("8") - ord(character)


def file_index(character: str) -> int:
    """'a' -> 0, ..., 'h' -> 7"""
    return ord(character) - ord("a")


def is_rank_name(character: str) -> bool:
    return len(character) == 1 and character in RANK_NAMES


def is_file_name(character: str) -> bool:
    return len(character) == 1 and character in FILE_NAMES


@dataclass(frozen=True)
class Coordinates:
    """
    A (possibly partial) position on the board.
    ----

    Either part may be missing: SAN only writes down as much of the source square as is needed to disambiguate,
    and sometimes not even the full destination ('axb' for a pawn capture).
    A missing part means "any of the 8 values", never zero.
    """

    rank: Optional[int] = None
    file: Optional[int] = None

    @classmethod
    def from_algebraic(cls, sq: str) -> Coordinates:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        return cls(rank=rank_index(sq[1]), file=file_index(sq[0]))

    def to_algebraic(self) -> str:
        """Write whatever is known. Missing parts are simply left out."""
        file_part = FILE_NAMES[self.file] if self.file is not None else ""
        rank_part = RANK_NAMES[self.rank] if self.rank is not None else ""
        return f"{file_part}{rank_part}"

    def is_complete(self) -> bool:
        return self.rank is not None and self.file is not None

    def is_unconstrained(self) -> bool:
        return self.rank is None and self.file is None

    def is_within_bounds(self) -> bool:
        return (
            self.rank is not None
            and self.file is not None
            and 0 <= self.rank < BOARD_SIZE
            and 0 <= self.file < BOARD_SIZE
        )

    def shifted(self, d_rank: int, d_file: int) -> Coordinates:
        """One step along a direction vector. Only meaningful for complete coordinates."""
        assert self.rank is not None and self.file is not None
        return Coordinates(self.rank + d_rank, self.file + d_file)

    def rank_distance(self, other: Coordinates) -> int:
        assert self.rank is not None and other.rank is not None
        return abs(other.rank - self.rank)

    def __str__(self) -> str:
        return self.to_algebraic() or "?"


def all_squares() -> list[Coordinates]:
    return [
        Coordinates(rank, file)
        for rank in range(BOARD_SIZE)
        for file in range(BOARD_SIZE)
    ]
