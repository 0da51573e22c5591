"""Orchestration of communication from the API models to the business logic (and the reverse direction)."""

from pathlib import Path
from typing import Optional

from src.api.models import ReplayRequest, ReplayResponse
from src.chess.game import replay
from src.core.config import ReplaySettings, setup_logging
from src.core.models import ReplayModel


class ReplayService:
    """Orchestration of layers for replaying games."""

    def __init__(self, settings: Optional[ReplaySettings] = None) -> None:
        self.settings = settings or ReplaySettings.from_env()
        self.logger = setup_logging(self.settings)

    # -- API logic ---
    def replay(self, request: ReplayRequest) -> ReplayResponse:
        """Replay the game in the request, from the standard starting position."""

        # Hand the PGN to the domain layer and convert the outcome into a ReplayModel
        outcome = replay(request.pgn, self.settings)
        model = outcome.to_model()

        # Return a ReplayResponse
        return self._create_replay_response(model)

    def replay_file(self, path: Path) -> ReplayResponse:
        """Convenience method: read the PGN from a file first."""
        self.logger.info("Reading PGN from %s", path)
        request = ReplayRequest(pgn=path.read_text(encoding="utf-8"))
        return self.replay(request)

    # -- Helper methods --
    def _create_replay_response(self, model: ReplayModel) -> ReplayResponse:
        """Convert domain model into API response"""
        return ReplayResponse(
            status=model.status,
            diagram=model.diagram,
            result=model.result,
            moves_applied=model.moves_applied,
            headers=model.headers,
            error_kind=model.error_kind,
            error_message=model.error_message,
        )
