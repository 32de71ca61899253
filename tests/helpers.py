from random import Random
from typing import Dict, Optional, Sequence

from casino.cards import Card, parse_card
from casino.deck import build_deck
from casino.game import RoundEngine
from casino.state import Build


def cards(*ids: str) -> list:
    return [parse_card(card_id) for card_id in ids]


def numeric_build(build_id: str, owner: int, *ids: str) -> Build:
    members = cards(*ids)
    return Build(build_id=build_id, owner_seat=owner, cards=members, value=sum(c.value for c in members))


def face_build(build_id: str, owner: int, *ids: str) -> Build:
    members = cards(*ids)
    return Build(build_id=build_id, owner_seat=owner, cards=members, is_face_build=True, face_rank=members[0].rank)


def new_round(human_seats: Sequence[int] = (), dealer_seat: int = 0, seed: int = 1) -> RoundEngine:
    return RoundEngine(dealer_seat=dealer_seat, human_seats=human_seats, rng=Random(seed))


def arrange(
    round_engine: RoundEngine,
    hands: Dict[int, Sequence[Card]],
    loose: Sequence[Card] = (),
    builds: Sequence[Build] = (),
    deck: Sequence[Card] = (),
    current_seat: Optional[int] = None,
) -> RoundEngine:
    """Force an exact table situation; cards not placed anywhere are set aside as discarded."""
    placed = set(loose) | set(deck)
    for build in builds:
        placed.update(build.cards)
    for player in round_engine.players:
        player.hand = list(hands.get(player.seat, []))
        player.captured = []
        player.sweeps = 0
        placed.update(player.hand)

    round_engine.table.loose = list(loose)
    round_engine.table.builds = list(builds)
    round_engine.table.build_counter = len(builds)
    round_engine.table.discarded = [card for card in build_deck() if card not in placed]
    round_engine.deck.cards = list(deck)
    round_engine.state.is_last_deal = not deck
    round_engine.state.last_capturer_seat = None
    if current_seat is not None:
        round_engine.current_seat = current_seat
    return round_engine
