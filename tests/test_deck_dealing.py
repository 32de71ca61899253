from collections import Counter
from random import Random

import pytest

from casino.cards import BIG_CASINO, LITTLE_CASINO, Card, Rank, Suit, parse_card
from casino.deck import TABLE, Deck, build_deck, deal_cards, shuffle_deck
from casino.errors import InsufficientCards


def test_deck_holds_52_unique_cards():
    deck = build_deck()
    assert len(deck) == 52
    assert len({card.id for card in deck}) == 52


def test_shuffle_is_a_permutation():
    deck = build_deck()
    shuffled = shuffle_deck(deck, Random(3))
    assert Counter(shuffled) == Counter(deck)
    assert shuffled != deck


def test_seeded_shuffle_is_reproducible():
    assert shuffle_deck(build_deck(), Random(11)) == shuffle_deck(build_deck(), Random(11))


def test_opening_deal_order_starts_left_of_dealer():
    result = deal_cards(build_deck(), dealer_seat=0, include_table=True)

    assert result.order[0] == (1, parse_card("K♣"))
    assert result.hands[1] == [parse_card(i) for i in ("K♣", "Q♣", "3♣", "2♣")]
    assert result.hands[0] == [parse_card(i) for i in ("7♣", "6♣", "10♦", "9♦")]
    assert result.table == [parse_card(i) for i in ("5♣", "4♣", "8♦", "7♦")]
    assert [dest for dest, _ in result.order].count(TABLE) == 4
    assert len(result.remaining) == 32


def test_redeal_skips_table_and_consumes_sixteen_cards():
    deck = Deck(build_deck())
    deck.deal(dealer_seat=2, include_table=True)
    result = deck.deal(dealer_seat=2, include_table=False)

    assert result.table == []
    assert all(len(hand) == 4 for hand in result.hands.values())
    assert result.order[0][0] == 3
    assert len(deck) == 16


def test_deal_with_too_few_cards_raises():
    deck = Deck(build_deck()[:10])
    with pytest.raises(InsufficientCards):
        deck.deal(dealer_seat=0, include_table=False)
    assert len(deck) == 10


def test_card_values_and_ids():
    assert parse_card("10♦") == BIG_CASINO
    assert LITTLE_CASINO.id == "2♠"
    assert Card(Rank.ACE, Suit.HEARTS).value == 1
    assert Card(Rank.QUEEN, Suit.CLUBS).value == 0
    assert Card(Rank.QUEEN, Suit.CLUBS).is_face
    with pytest.raises(ValueError):
        parse_card("11♠")
