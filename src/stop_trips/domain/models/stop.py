"""Stop domain model."""

from dataclasses import dataclass
from typing import Literal

StopType = Literal["urban", "extraurban"]
STOP_TYPES: tuple[str, ...] = ("urban", "extraurban")


@dataclass(frozen=True)
class Stop:
    """Represents a transit stop (static metadata only)."""

    stop_id: int
    stop_type: StopType
    name: str
    street: str | None = None
    town: str | None = None
    latitude: float | None = None
    longitude: float | None = None
