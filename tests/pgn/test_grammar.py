"""Unit tests for /src/pgn/grammar.py"""

import pytest

from src.chess.events import (
    GameEnd,
    KingsideCastle,
    MoveEvent,
    NextMove,
)
from src.chess.pieces import Color
from src.core.exceptions import GrammarError
from src.core.shared_types import Termination
from src.pgn.grammar import GrammarState, PgnAutomaton, build_transitions
from src.pgn.tokenizer import Tokenizer
from src.pgn.tokens import Token, TokenKind


def run(pgn: str) -> tuple[PgnAutomaton, list[MoveEvent]]:
    automaton = PgnAutomaton()
    return automaton, list(automaton.events(Tokenizer(pgn)))


def texts(events: list[MoveEvent]) -> list[str]:
    return [event.text for event in events if isinstance(event, NextMove)]


def test_transitions_cover_every_state_with_asterisk() -> None:
    transitions = build_transitions()
    for state in GrammarState:
        assert transitions[(state, TokenKind.ASTERISK)] == GrammarState.FINISHED


def test_headers_are_collected() -> None:
    automaton, events = run('[Event "Rated"]\n[White "Lasker, Edward"]\n\n1. d4 *')
    assert automaton.headers == {"Event": "Rated", "White": "Lasker, Edward"}
    assert texts(events) == ["d4"]


def test_sides_alternate() -> None:
    _, events = run("1. e4 e5 2. Nf3 Nc6 3. Bb5 ")
    colors = [event.color for event in events if isinstance(event, NextMove)]
    assert colors == [Color.WHITE, Color.BLACK] * 2 + [Color.WHITE]


def test_castling_takes_a_turn() -> None:
    _, events = run("1. O-O O-O ")
    assert events == [KingsideCastle(Color.WHITE), KingsideCastle(Color.BLACK)]


@pytest.mark.parametrize(
    "pgn",
    [
        "e4 e5 Nf3 ",  # no numbers at all
        "1 e4 e5 2 Nf3 ",  # numbers without periods
        "1.e4 e5 2.Nf3 ",
        "1. e4 1... e5 2. Nf3 ",
        "1. e4 e5. 2. Nf3. ",  # trailing periods
        "1. e4 .. e5 2. Nf3 ",
    ],
)
def test_move_number_styles(pgn: str) -> None:
    _, events = run(pgn)
    assert texts(events) == ["e4", "e5", "Nf3"]


def test_comments_and_annotations_are_transparent() -> None:
    pgn = "1. e4 {best by test} $1 e5 ! ;line\n%escape\n2. Nf3?! e.p. Nc6 "
    _, events = run(pgn)
    assert texts(events) == ["e4", "e5", "Nf3", "Nc6"]
    assert [event.color for event in events if isinstance(event, NextMove)] == [
        Color.WHITE,
        Color.BLACK,
        Color.WHITE,
        Color.BLACK,
    ]


def test_variations_are_skipped() -> None:
    """Moves inside parentheses are parsed, never emitted, and don't change who is to move."""
    automaton, events = run("1. e4 (1. d4 d5 (1... Nf6 2. c4)) e5 2. Nf3 ")
    assert texts(events) == ["e4", "e5", "Nf3"]
    assert [event.color for event in events if isinstance(event, NextMove)] == [
        Color.WHITE,
        Color.BLACK,
        Color.WHITE,
    ]
    assert automaton.depth == 0


def test_variation_before_any_move() -> None:
    automaton, events = run("(asdfasdf {asdfasd)(f})")
    assert events == []
    assert automaton.depth == 0


def test_asterisk_inside_variation_does_not_end_the_game() -> None:
    _, events = run("1. e4 (1. d4 *) e5 *")
    assert texts(events) == ["e4", "e5"]
    assert events[-1] == GameEnd(Termination.MANUAL)


@pytest.mark.parametrize(
    "marker, result",
    [
        ("1-0", Termination.WHITE_WON),
        ("0-1", Termination.BLACK_WON),
        ("1/2-1/2", Termination.DRAW),
        ("*", Termination.MANUAL),
    ],
)
def test_game_end(marker: str, result: Termination) -> None:
    automaton, events = run(f"1. e4 e5 {marker} 2. Nf3 ")
    assert events[-1] == GameEnd(result)
    assert automaton.finished
    assert texts(events) == ["e4", "e5"]


def test_events_stop_reading_after_game_end() -> None:
    """Tokens after the result are never pulled (so garbage there does not matter)."""
    automaton = PgnAutomaton()
    tokens = iter(Tokenizer("1. e4 1-0 & & &"))
    events = list(automaton.events(tokens))
    assert events[-1] == GameEnd(Termination.WHITE_WON)


def test_feed_single_tokens() -> None:
    automaton = PgnAutomaton()
    assert automaton.feed(Token(TokenKind.INTEGER, "1")) is None
    assert automaton.state == GrammarState.MOVE_NUMBER
    assert automaton.feed(Token(TokenKind.PERIOD, ".")) is None
    assert automaton.state == GrammarState.PERIOD

    event = automaton.feed(Token(TokenKind.SYMBOL, "e4"))
    assert isinstance(event, NextMove)
    assert automaton.state == GrammarState.MOVE
    assert automaton.side_to_move == Color.BLACK


def test_game_without_headers_or_numbers_starts_with_white() -> None:
    automaton = PgnAutomaton()
    event = automaton.feed(Token(TokenKind.SYMBOL, "d4"))
    assert isinstance(event, NextMove)
    assert event.color == Color.WHITE


@pytest.mark.parametrize(
    "pgn",
    [
        '[Event "x" "y"]',  # two values
        "[Event]",  # no value
        '["Event" "x"]',  # name must be a symbol
        "1. e4 [Event",  # header after moves
        ". e4",  # period first
        "1 2 ",  # two numbers
    ],
)
def test_syntax_errors(pgn: str) -> None:
    with pytest.raises(GrammarError):
        run(pgn)


def test_period_chains_are_allowed() -> None:
    _, events = run("1. . . e4 ")
    assert texts(events) == ["e4"]


def test_unbalanced_parenthesis() -> None:
    with pytest.raises(GrammarError):
        run("1. e4 ) e5 ")


@pytest.mark.parametrize(
    "pgn",
    [
        '[ ( X ) "y" ]\n1. e4 *',
        '[X ( "y" ) ]\n1. e4 *',
        '[X "y" ( ]',
        '([X ) "y"] 1. e4 *',  # tag name inside the variation, value outside
    ],
)
def test_parentheses_inside_header_tag(pgn: str) -> None:
    with pytest.raises(GrammarError):
        run(pgn)


def test_header_value_without_tag_name() -> None:
    automaton = PgnAutomaton()
    automaton.state = GrammarState.HEADER_NAME
    with pytest.raises(GrammarError):
        automaton.feed(Token(TokenKind.STRING, "y"))


def test_variation_between_header_tags() -> None:
    automaton, events = run('[Event "a"] ([X "ignored"]) [Site "b"]\n1. e4 *')
    assert automaton.headers == {"Event": "a", "Site": "b"}
    assert texts(events) == ["e4"]


@pytest.mark.parametrize("name", ["e", "p"])
def test_en_passant_letters_as_header_names(name: str) -> None:
    """'e' and 'p' are only skipped in the movetext."""
    automaton, events = run(f'[{name} "x"]\n1. e4 e5 2. exd6 e.p. *')
    assert automaton.headers == {name: "x"}
    assert texts(events) == ["e4", "e5", "exd6"]
