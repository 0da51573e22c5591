"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The domain layer (lower) hands a ReplayModel to the Service, which turns it into the response models of the API layer (higher).
(Decouples the Board / event types of the domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make ReplayModel easier to read
HeaderName = str
HeaderValue = str


@dataclass
class ReplayModel:
    """Transport-safe representation of a replayed game used between API, Service, and Game layers."""

    status: str
    diagram: Optional[str]
    result: Optional[str]
    moves_applied: int
    headers: dict[HeaderName, HeaderValue] = field(default_factory=dict)
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
