"""
Type definitions used across layers
"""

from enum import StrEnum


class Termination(StrEnum):
    """Game termination markers, valued by how they are written in PGN movetext."""

    MANUAL = "*"
    WHITE_WON = "1-0"
    BLACK_WON = "0-1"
    DRAW = "1/2-1/2"


class ReplayStatus(StrEnum):
    COMPLETED = "completed"  # ran out of input
    FINISHED = "finished"  # reached a termination marker
    FAILED = "failed"
