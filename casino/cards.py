"""Card-related data structures and helpers for Casino."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping


class Suit(Enum):
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value


FACE_RANKS = frozenset({Rank.JACK, Rank.QUEEN, Rank.KING})

# Capture values. Face cards capture by rank, so they carry no numeric value.
CARD_VALUES: dict[Rank, int] = {
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 0,
    Rank.QUEEN: 0,
    Rank.KING: 0,
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    @property
    def value(self) -> int:
        return CARD_VALUES[self.rank]

    @property
    def is_face(self) -> bool:
        return self.rank in FACE_RANKS

    def __str__(self) -> str:
        return self.id


LITTLE_CASINO = Card(Rank.TWO, Suit.SPADES)
BIG_CASINO = Card(Rank.TEN, Suit.DIAMONDS)


def card_value(card: Card) -> int:
    return CARD_VALUES[card.rank]


def total_value(cards: Iterable[Card]) -> int:
    return sum(CARD_VALUES[card.rank] for card in cards)


def parse_card(card_id: str) -> Card:
    """Return the card for an id such as ``"10♦"`` or ``"Q♠"``."""
    if len(card_id) < 2:
        raise ValueError(f"Unknown card id: {card_id!r}")
    rank_label, suit_symbol = card_id[:-1], card_id[-1]
    try:
        return Card(Rank(rank_label), Suit(suit_symbol))
    except ValueError as exc:
        raise ValueError(f"Unknown card id: {card_id!r}") from exc


def serialize_card(card: Card) -> dict[str, str]:
    return {"id": card.id, "rank": card.rank.value, "suit": card.suit.value}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    if "id" in payload:
        return parse_card(payload["id"])
    return Card(Rank(payload["rank"]), Suit(payload["suit"]))


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
