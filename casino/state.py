"""Entity model for a round of Casino."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .cards import Card, Rank, total_value
from .deck import NUM_SEATS, build_deck
from .errors import InvariantViolation, UnknownSelection


@dataclass
class Player:
    seat: int
    is_human: bool = False
    hand: List[Card] = field(default_factory=list)
    captured: List[Card] = field(default_factory=list)
    sweeps: int = 0

    def hand_card(self, card_id: str) -> Card:
        for card in self.hand:
            if card.id == card_id:
                return card
        raise UnknownSelection(f"Card {card_id} is not in seat {self.seat}'s hand.")


@dataclass
class Build:
    """A formation on the table that only its owner may extend."""

    build_id: str
    owner_seat: int
    cards: List[Card]
    is_face_build: bool = False
    value: int = 0
    face_rank: Optional[Rank] = None

    def __post_init__(self) -> None:
        self.cards = list(self.cards)
        if not self.cards:
            raise InvariantViolation(f"Build {self.build_id} has no cards.")
        if self.is_face_build:
            if self.face_rank is None or any(card.rank is not self.face_rank for card in self.cards):
                raise InvariantViolation(f"Face build {self.build_id} mixes ranks.")
            self.value = 0
        elif total_value(self.cards) != self.value:
            raise InvariantViolation(
                f"Build {self.build_id} cards sum to {total_value(self.cards)}, not {self.value}."
            )

    def captured_by(self, card: Card) -> bool:
        if self.is_face_build:
            return card.rank is self.face_rank
        return not card.is_face and card.value == self.value

    def label(self) -> str:
        return f"{self.face_rank.value}s" if self.is_face_build else f"{self.value}s"


@dataclass
class TableState:
    loose: List[Card] = field(default_factory=list)
    builds: List[Build] = field(default_factory=list)
    # Residue removed from play at round end when nobody captured.
    discarded: List[Card] = field(default_factory=list)
    build_counter: int = 0

    def peek_build_id(self) -> str:
        return f"build-{self.build_counter + 1}"

    def next_build_id(self) -> str:
        build_id = self.peek_build_id()
        self.build_counter += 1
        return build_id

    def loose_card(self, card_id: str) -> Card:
        for card in self.loose:
            if card.id == card_id:
                return card
        raise UnknownSelection(f"Card {card_id} is not loose on the table.")

    def build(self, build_id: str) -> Build:
        for build in self.builds:
            if build.build_id == build_id:
                return build
        raise UnknownSelection(f"Build {build_id} is not on the table.")

    def builds_owned_by(self, seat: int) -> List[Build]:
        return [build for build in self.builds if build.owner_seat == seat]

    def is_clear(self) -> bool:
        return not self.loose and not self.builds

    def build_cards(self) -> List[Card]:
        return [card for build in self.builds for card in build.cards]


@dataclass
class RoundState:
    dealer_seat: int
    first_seat: int = field(init=False)
    last_capturer_seat: Optional[int] = None
    is_last_deal: bool = False
    cumulative_scores: List[int] = field(default_factory=lambda: [0] * NUM_SEATS)

    def __post_init__(self) -> None:
        self.first_seat = (self.dealer_seat + 1) % NUM_SEATS
        self.cumulative_scores = list(self.cumulative_scores)
        if len(self.cumulative_scores) != NUM_SEATS:
            raise ValueError("Cumulative scores must cover exactly four seats.")


def cards_in_play(players: Sequence[Player], table: TableState, deck: Iterable[Card]) -> List[Card]:
    cards: List[Card] = []
    for player in players:
        cards.extend(player.hand)
        cards.extend(player.captured)
    cards.extend(table.loose)
    cards.extend(table.build_cards())
    cards.extend(table.discarded)
    cards.extend(deck)
    return cards


def check_conservation(players: Sequence[Player], table: TableState, deck: Iterable[Card]) -> None:
    """Raise InvariantViolation unless every card of the deck appears exactly once."""
    seen = Counter(cards_in_play(players, table, deck))
    universe = Counter(build_deck())
    if seen == universe:
        return
    duplicated = sorted(card.id for card, count in seen.items() if count > 1)
    missing = sorted(card.id for card in universe if card not in seen)
    raise InvariantViolation(f"Card accounting broken: duplicated={duplicated} missing={missing}")
