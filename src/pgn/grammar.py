"""
The PGN grammar as a finite state machine.

Tokens go in, move events come out (for the tokens that are moves of the main line).
Header tag pairs are collected on the way, variations are followed only to know where they end.
"""

import logging
from enum import Enum, auto
from typing import Iterable, Iterator, Optional

from src.chess.events import GameEnd, Ignore, MoveEvent
from src.chess.pieces import Color
from src.core.exceptions import GrammarError
from src.core.shared_types import Termination
from src.pgn.san import EN_PASSANT_PARTS, decode_san
from src.pgn.tokens import TRANSPARENT_KINDS, Token, TokenKind

logger = logging.getLogger(__name__)


class GrammarState(Enum):
    INIT = auto()
    HEADER_OPEN = auto()  # read '['
    HEADER_NAME = auto()  # read the tag name
    HEADER_VALUE = auto()  # read the tag value (a string)
    HEADER_CLOSE = auto()  # read ']'
    MOVE_NUMBER = auto()
    PERIOD = auto()
    MOVE = auto()
    FINISHED = auto()


# States in between '[' and ']'
OPEN_HEADER_STATES = frozenset(
    {GrammarState.HEADER_OPEN, GrammarState.HEADER_NAME, GrammarState.HEADER_VALUE}
)
# States in which an 'e' or 'p' can only be half of an "e.p." annotation
MOVETEXT_STATES = frozenset(
    {GrammarState.MOVE_NUMBER, GrammarState.PERIOD, GrammarState.MOVE}
)

Transitions = dict[tuple[GrammarState, TokenKind], GrammarState]


def build_transitions() -> Transitions:
    """(current state, kind of the token read) -> next state. Anything not listed is a syntax error."""
    S = GrammarState
    K = TokenKind
    transitions: Transitions = {
        # start of the game: headers, or straight into the moves (numbered or not)
        (S.INIT, K.LEFT_BRACKET): S.HEADER_OPEN,
        (S.INIT, K.INTEGER): S.MOVE_NUMBER,
        (S.INIT, K.SYMBOL): S.MOVE,
        # [Name "Value"]
        (S.HEADER_OPEN, K.SYMBOL): S.HEADER_NAME,
        (S.HEADER_NAME, K.STRING): S.HEADER_VALUE,
        (S.HEADER_VALUE, K.RIGHT_BRACKET): S.HEADER_CLOSE,
        (S.HEADER_CLOSE, K.LEFT_BRACKET): S.HEADER_OPEN,
        (S.HEADER_CLOSE, K.INTEGER): S.MOVE_NUMBER,
        (S.HEADER_CLOSE, K.SYMBOL): S.MOVE,
        # 12. e4 / 12... Nf6 / 12 e4
        (S.MOVE_NUMBER, K.PERIOD): S.PERIOD,
        (S.MOVE_NUMBER, K.SYMBOL): S.MOVE,
        (S.PERIOD, K.PERIOD): S.PERIOD,
        (S.PERIOD, K.SYMBOL): S.MOVE,
        (S.MOVE, K.SYMBOL): S.MOVE,
        (S.MOVE, K.INTEGER): S.MOVE_NUMBER,
    }
    # the game may end anywhere
    for state in GrammarState:
        transitions[(state, K.ASTERISK)] = S.FINISHED
    return transitions


class PgnAutomaton:
    """
    Consumes tokens one at a time, see `feed()`.
    ----

    Keeps track of
    - the grammar state
    - how deep inside (nested) variations we are. Variations are parsed, but never played.
    - whose move it is (white moves first)
    - the header tag pairs read so far
    """

    def __init__(self) -> None:
        self.state = GrammarState.INIT
        self.depth = 0
        self.side_to_move = Color.WHITE
        self.headers: dict[str, str] = {}
        self._header_name: Optional[str] = None
        self._transitions = build_transitions()

    @property
    def finished(self) -> bool:
        return self.state == GrammarState.FINISHED

    def feed(self, token: Token) -> Optional[MoveEvent]:
        """Advance the state machine by one token. Returns the move event, if the token was a move of the main line."""
        if self._skip(token):
            return None

        next_state = self._transitions.get((self.state, token.kind))
        if next_state is None:
            raise GrammarError(
                f"Unexpected {token.kind.name.lower()} token {token.text!r} in state {self.state.name.lower()}."
            )
        self.state = next_state
        return self._on_enter(token)

    def events(self, tokens: Iterable[Token]) -> Iterator[MoveEvent]:
        """Feed all tokens, yield the move events. Stops reading tokens once the game ended."""
        for token in tokens:
            event = self.feed(token)
            if event is None:
                continue
            yield event
            if isinstance(event, GameEnd):
                return

    def _skip(self, token: Token) -> bool:
        """Tokens that never change the state: comments, annotations, variation boundaries, ..."""
        if token.kind in TRANSPARENT_KINDS:
            return True
        if (
            token.kind == TokenKind.SYMBOL
            and token.text in EN_PASSANT_PARTS
            and self.state in MOVETEXT_STATES
        ):
            return True
        is_parenthesis = token.kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN)
        if is_parenthesis and self.state in OPEN_HEADER_STATES:
            raise GrammarError(
                f"Unexpected {token.text!r} inside a header tag (state {self.state.name.lower()})."
            )
        if token.kind == TokenKind.LEFT_PAREN:
            self.depth += 1
            logger.debug("Entering variation (depth %d)", self.depth)
            return True
        if token.kind == TokenKind.RIGHT_PAREN:
            if self.depth == 0:
                raise GrammarError("Closing parenthesis without an open variation.")
            self.depth -= 1
            logger.debug("Leaving variation (depth %d)", self.depth)
            return True
        if token.kind == TokenKind.PERIOD and self.state == GrammarState.MOVE:
            # "1. e4 e5." or "23. Ne5 e.p."
            return True
        if token.kind == TokenKind.ASTERISK and self.depth > 0:
            return True
        return False

    def _on_enter(self, token: Token) -> Optional[MoveEvent]:
        if self.depth > 0:
            return None

        match self.state:
            case GrammarState.HEADER_NAME:
                self._header_name = token.text
            case GrammarState.HEADER_VALUE:
                if self._header_name is None:
                    raise GrammarError(f"Header value {token.text!r} without a tag name.")
                self.headers[self._header_name] = token.text
                logger.debug("Header %s = %r", self._header_name, token.text)
            case GrammarState.MOVE:
                event, self.side_to_move = self._emit(token.text, self.side_to_move)
                if isinstance(event, GameEnd):
                    self.state = GrammarState.FINISHED
                return event
            case GrammarState.FINISHED:
                return GameEnd(Termination.MANUAL)
        return None

    def _emit(self, text: str, side: Color) -> tuple[MoveEvent, Color]:
        """Decode the move for the given side. Returns the event, and who moves next."""
        event = decode_san(text, side)
        if isinstance(event, (GameEnd, Ignore)):
            return event, side
        return event, side.opponent()
