"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from pathlib import Path
from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.pieces import Cell
from src.chess.square import Coordinates

DATA_DIR = Path(__file__).parent / "data"

# ex. {"e1": "wK", "a8": "bR"}
Placement = dict[str, str]


@pytest.fixture
def data_dir() -> Path:
    """Folder holding the integration games (*.pgn) and the expected final positions (*.board)."""
    return DATA_DIR


@pytest.fixture
def board_with_pieces() -> Callable[[Placement], Board]:
    """Call the inner function with the pieces (by square name) that should be on an otherwise empty board"""

    def _create_board(placement: Placement) -> Board:
        board = Board.empty()
        for square_name, code in placement.items():
            board.set_cell(Coordinates.from_algebraic(square_name), Cell.from_code(code))
        return board

    return _create_board
