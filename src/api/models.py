"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import ErrorKind, InvalidRequestError
from src.core.shared_types import ReplayStatus, Termination

HeaderName = str
HeaderValue = str

BYTE_ORDER_MARK = "\ufeff"


# --- REQUEST MODELS ---
class ReplayRequest(BaseModel):
    pgn: str

    @field_validator("pgn")
    @classmethod
    def validate_pgn(cls, value: str) -> str:
        # files saved by some editors start with a BOM, which no token can start with
        value = value.removeprefix(BYTE_ORDER_MARK)
        if not value.strip():
            raise InvalidRequestError("Cannot replay an empty PGN text.")
        return value


# --- RESPONSE MODELS ---
class ReplayResponse(BaseModel):
    status: ReplayStatus
    diagram: Optional[str]
    result: Optional[Termination]
    moves_applied: int
    headers: dict[HeaderName, HeaderValue]
    error_kind: Optional[ErrorKind]
    error_message: Optional[str]
