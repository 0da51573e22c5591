import pytest

from src.chess.square import Coordinates, all_squares, file_index, rank_index


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a8", Coordinates(0, 0)),
        ("h8", Coordinates(0, 7)),
        ("a1", Coordinates(7, 0)),
        ("h1", Coordinates(7, 7)),
        ("e4", Coordinates(4, 4)),
        ("b8", Coordinates(0, 1)),
    ],
)
def test_from_algebraic(name: str, expected: Coordinates) -> None:
    """Rows count down from the 8th rank, files count from the a-file."""
    assert Coordinates.from_algebraic(name) == expected
    assert expected.to_algebraic() == name


def test_rank_and_file_index() -> None:
    assert rank_index("8") == 0
    assert rank_index("1") == 7
    assert file_index("a") == 0
    assert file_index("h") == 7


@pytest.mark.parametrize(
    "coordinates, written",
    [
        (Coordinates(rank=None, file=1), "b"),
        (Coordinates(rank=4, file=None), "4"),
        (Coordinates(), ""),
    ],
)
def test_partial_coordinates_to_algebraic(coordinates: Coordinates, written: str) -> None:
    """Only the known parts get written."""
    assert coordinates.to_algebraic() == written
    assert not coordinates.is_complete()


def test_partial_coordinates_are_not_equal() -> None:
    """Equality needs both parts to match."""
    assert Coordinates(4, None) != Coordinates(4, 4)
    assert Coordinates(None, 4) != Coordinates(4, 4)
    assert Coordinates(None, None) == Coordinates()


@pytest.mark.parametrize(
    "coordinates, inside",
    [
        (Coordinates(0, 0), True),
        (Coordinates(7, 7), True),
        (Coordinates(-1, 3), False),
        (Coordinates(3, 8), False),
        (Coordinates(None, 3), False),
    ],
)
def test_is_within_bounds(coordinates: Coordinates, inside: bool) -> None:
    assert coordinates.is_within_bounds() == inside


def test_shifted() -> None:
    assert Coordinates(4, 4).shifted(-1, 1) == Coordinates(3, 5)


def test_all_squares() -> None:
    squares = all_squares()
    assert len(squares) == 64
    assert len(set(squares)) == 64
