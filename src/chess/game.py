"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating the whole replay: characters -> tokens -> move events -> board updates,
and passes the outcome to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self, TextIO

from src.chess.board import Board
from src.chess.events import GameEnd
from src.core.config import ReplaySettings
from src.core.exceptions import ErrorKind, ReplayError
from src.core.models import ReplayModel
from src.core.shared_types import ReplayStatus, Termination
from src.pgn.grammar import PgnAutomaton
from src.pgn.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@dataclass
class ReplayOutcome:
    """
    What came out of replaying a game.

    NOTE: A failed replay never carries a board (a half replayed position is not a result).
    """

    status: ReplayStatus
    board: Optional[Board]
    result: Optional[Termination] = None
    moves_applied: int = 0
    headers: dict[str, str] = field(default_factory=dict)
    error: Optional[ReplayError] = None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    def to_model(self) -> ReplayModel:
        """Encode into a format the Service layer uses"""
        return ReplayModel(
            status=self.status.value,
            diagram=self.board.to_diagram() if self.board else None,
            result=self.result.value if self.result else None,
            moves_applied=self.moves_applied,
            headers=dict(self.headers),
            error_kind=self.error_kind.value if self.error_kind else None,
            error_message=str(self.error) if self.error else None,
        )


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    automaton: PgnAutomaton
    settings: ReplaySettings
    moves_applied: int = 0
    result: Optional[Termination] = None

    @classmethod
    def new_game(cls, settings: Optional[ReplaySettings] = None) -> Self:
        """Pieces on their starting squares, nothing read yet."""
        return cls(
            board=Board.starting_position(),
            automaton=PgnAutomaton(),
            settings=settings or ReplaySettings(),
        )

    @property
    def headers(self) -> dict[str, str]:
        return self.automaton.headers

    @property
    def status(self) -> ReplayStatus:
        return ReplayStatus.FINISHED if self.result else ReplayStatus.COMPLETED

    def play(self, source: str | TextIO) -> Board:
        """
        Replay all moves of the main line, in order, until the game ends or the input runs out.

        Raises the first ReplayError encountered. See `replay()` for the non-raising version.
        """
        tokens = Tokenizer(source, flush_trailing_token=self.settings.flush_trailing_token)
        for event in self.automaton.events(tokens):
            if isinstance(event, GameEnd):
                self.result = event.result
                break
            self.board.apply(event)
            self.moves_applied += 1
        return self.board

    def outcome(self) -> ReplayOutcome:
        return ReplayOutcome(
            status=self.status,
            board=self.board,
            result=self.result,
            moves_applied=self.moves_applied,
            headers=dict(self.headers),
        )


def replay(
    source: str | TextIO, settings: Optional[ReplaySettings] = None
) -> ReplayOutcome:
    """Replay a PGN game from the starting position. Errors are reported in the outcome, not raised."""
    game = Game.new_game(settings)
    logger.info("Replaying game")
    try:
        game.play(source)
    except ReplayError as error:
        logger.warning(
            "Replay failed (%s) after %d moves: %s",
            error.kind.value,
            game.moves_applied,
            error,
        )
        return ReplayOutcome(
            status=ReplayStatus.FAILED,
            board=None,
            moves_applied=game.moves_applied,
            headers=dict(game.headers),
            error=error,
        )

    outcome = game.outcome()
    logger.info(
        "Replay %s after %d moves (result: %s)",
        outcome.status.value,
        outcome.moves_applied,
        outcome.result.value if outcome.result else "none",
    )
    return outcome
