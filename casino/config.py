"""Validation schema for Casino game configuration."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, validator

from .deck import NUM_SEATS
from .scoring import TARGET_SCORE


def _validate_seat(value: int) -> int:
    if not 0 <= value < NUM_SEATS:
        raise ValueError(f"Seat {value!r} is outside 0..{NUM_SEATS - 1}.")
    return value


class GameConfig(BaseModel):
    target_score: int = Field(TARGET_SCORE, ge=1, description="Cumulative score that ends the game.")
    human_seats: List[int] = Field(default_factory=lambda: [0], description="Seats driven by human input.")
    dealer_seat: int = Field(0, description="Dealer of the first round; rotates each round.")
    seed: Optional[int] = Field(None, description="Seed for the shuffling random source.")

    @validator("human_seats")
    def validate_human_seats(cls, value: List[int]) -> List[int]:
        seats = [_validate_seat(seat) for seat in value]
        if len(set(seats)) != len(seats):
            raise ValueError("Human seats must be distinct.")
        return sorted(seats)

    @validator("dealer_seat")
    def validate_dealer_seat(cls, value: int) -> int:
        return _validate_seat(value)


def load_config(payload: Optional[Mapping[str, Any]] = None) -> GameConfig:
    return GameConfig(**dict(payload or {}))
