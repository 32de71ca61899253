"""Events and immutable snapshots handed to presentation layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .actions import ActionKind
from .cards import Card, Rank
from .scoring import SeatScore


@dataclass(frozen=True)
class BuildSnapshot:
    build_id: str
    owner_seat: int
    cards: Tuple[Card, ...]
    is_face_build: bool
    value: int
    face_rank: Optional[Rank]


@dataclass(frozen=True)
class PlayerSnapshot:
    seat: int
    is_human: bool
    hand: Tuple[Card, ...]
    captured: Tuple[Card, ...]
    sweeps: int


@dataclass(frozen=True)
class RoundSnapshot:
    phase: str
    dealer_seat: int
    first_seat: int
    current_seat: int
    last_capturer_seat: Optional[int]
    is_last_deal: bool
    deck_size: int
    players: Tuple[PlayerSnapshot, ...]
    loose: Tuple[Card, ...]
    builds: Tuple[BuildSnapshot, ...]
    cumulative_scores: Tuple[int, ...]


@dataclass(frozen=True)
class CardsDealt:
    """One dealt card. ``destination`` is a seat index or ``deck.TABLE``."""

    destination: object
    card: Card
    snapshot: RoundSnapshot


@dataclass(frozen=True)
class MoveResolved:
    seat: int
    action_kind: ActionKind
    resulting_message: str
    snapshot: RoundSnapshot


@dataclass(frozen=True)
class TurnAdvanced:
    next_seat: int
    snapshot: RoundSnapshot


@dataclass(frozen=True)
class RoundEnded:
    breakdown: Tuple[SeatScore, ...]
    cumulative_scores: Tuple[int, ...]
    snapshot: RoundSnapshot


@dataclass(frozen=True)
class GameEnded:
    winning_seat: Optional[int]
    tied_seats: Tuple[int, ...]
    snapshot: RoundSnapshot


Event = Union[CardsDealt, MoveResolved, TurnAdvanced, RoundEnded, GameEnded]
