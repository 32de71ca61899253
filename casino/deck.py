"""Deck creation, shuffling and dealing for Casino."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit
from .errors import InsufficientCards

NUM_SEATS = 4
CARDS_PER_PASS = 2
PASSES_PER_DEAL = 2
TABLE_CARDS_PER_PASS = 2

# Destination marker for cards dealt face up onto the table.
TABLE = "table"


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(cards: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a Fisher-Yates shuffled copy of ``cards``."""
    if rng is None:
        rng = Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def seat_order(dealer_seat: int) -> List[int]:
    """Seats in dealing order, starting left of the dealer."""
    return [(dealer_seat + offset) % NUM_SEATS for offset in range(1, NUM_SEATS + 1)]


def cards_needed(include_table: bool) -> int:
    per_pass = NUM_SEATS * CARDS_PER_PASS
    if include_table:
        per_pass += TABLE_CARDS_PER_PASS
    return per_pass * PASSES_PER_DEAL


@dataclass
class DealResult:
    hands: Dict[int, List[Card]]
    table: List[Card]
    order: List[Tuple[object, Card]]
    remaining: List[Card]


def deal_cards(cards: Sequence[Card], dealer_seat: int, *, include_table: bool) -> DealResult:
    """Deal from the end of ``cards`` without mutating it.

    Two cards go to each seat per pass, for two passes. On the opening deal of
    a round two more cards go to the table after each pass.
    """
    required = cards_needed(include_table)
    if len(cards) < required:
        raise InsufficientCards(f"Deal needs {required} cards, deck holds {len(cards)}.")

    remaining = list(cards)
    hands: Dict[int, List[Card]] = {seat: [] for seat in range(NUM_SEATS)}
    table: List[Card] = []
    order: List[Tuple[object, Card]] = []

    for _ in range(PASSES_PER_DEAL):
        for seat in seat_order(dealer_seat):
            for _ in range(CARDS_PER_PASS):
                card = remaining.pop()
                hands[seat].append(card)
                order.append((seat, card))
        if include_table:
            for _ in range(TABLE_CARDS_PER_PASS):
                card = remaining.pop()
                table.append(card)
                order.append((TABLE, card))

    return DealResult(hands=hands, table=table, order=order, remaining=remaining)


@dataclass
class Deck:
    """The undealt stock of a single round."""

    cards: List[Card] = field(default_factory=build_deck)

    @classmethod
    def shuffled(cls, rng: Optional[Random] = None) -> "Deck":
        return cls(shuffle_deck(build_deck(), rng))

    def shuffle(self, rng: Optional[Random] = None) -> None:
        self.cards = shuffle_deck(self.cards, rng)

    def deal(self, dealer_seat: int, *, include_table: bool) -> DealResult:
        result = deal_cards(self.cards, dealer_seat, include_table=include_table)
        self.cards = list(result.remaining)
        return result

    def can_deal(self, *, include_table: bool = False) -> bool:
        return len(self.cards) >= cards_needed(include_table)

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)
