"""Deterministic decision procedure for computer-controlled seats.

Rules are tried in priority order and the first one that yields an action
wins. Within a rule, hand cards are considered in hand order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from .actions import Action, BuildAction, CaptureAction, TrailAction
from .builds import MAX_BUILD_VALUE
from .capture import sum_groups
from .cards import Card
from .errors import InvariantViolation
from .state import Build, Player, TableState

if TYPE_CHECKING:
    from .game import RoundEngine


def _capture(card: Card, table_cards: Sequence[Card], builds: Sequence[Build]) -> CaptureAction:
    return CaptureAction(
        hand_card_id=card.id,
        table_card_ids=tuple(c.id for c in table_cards),
        build_ids=tuple(b.build_id for b in builds),
    )


def _matching_loose(card: Card, table: TableState) -> List[Card]:
    if card.is_face:
        return [c for c in table.loose if c.rank is card.rank]
    return [c for c in table.loose if not c.is_face and c.value == card.value]


def _capture_own_build(player: Player, table: TableState) -> Optional[Action]:
    own = table.builds_owned_by(player.seat)
    for card in player.hand:
        builds = [b for b in own if b.captured_by(card)]
        if builds:
            return _capture(card, _matching_loose(card, table), builds)
    return None


def _capture_faces(player: Player, table: TableState) -> Optional[Action]:
    for card in player.hand:
        if not card.is_face:
            continue
        matching = _matching_loose(card, table)
        builds = [
            b for b in table.builds
            if b.is_face_build and b.face_rank is card.rank and b.owner_seat != player.seat
        ]
        if matching or builds:
            return _capture(card, matching, builds)
    return None


def disjoint_combinations(cards: Sequence[Card], target: int) -> List[Card]:
    """Greedily collect multi-card groups summing to ``target`` without reusing a card."""
    taken: List[Card] = []
    used: set = set()
    for group in sum_groups(cards, target):
        if len(group) < 2 or used.intersection(group):
            continue
        used.update(group)
        taken.extend(cards[index] for index in group)
    return taken


def _capture_numeric(player: Player, table: TableState) -> Optional[Action]:
    for card in player.hand:
        if card.is_face:
            continue
        value = card.value
        builds = [
            b for b in table.builds
            if not b.is_face_build and b.value == value and b.owner_seat != player.seat
        ]
        matching = _matching_loose(card, table)
        others = [c for c in table.loose if not c.is_face and c.value != value]
        taken = matching + disjoint_combinations(others, value)
        if taken or builds:
            return _capture(card, taken, builds)
    return None


def _has_other(hand: Sequence[Card], card: Card, predicate: Callable[[Card], bool]) -> bool:
    return any(other != card and predicate(other) for other in hand)


def _build_numeric(player: Player, table: TableState) -> Optional[Action]:
    for card in player.hand:
        if card.is_face or not 2 <= card.value <= 9:
            continue
        for table_card in table.loose:
            if table_card.is_face:
                continue
            target = card.value + table_card.value
            if target > MAX_BUILD_VALUE:
                continue
            if _has_other(player.hand, card, lambda c: not c.is_face and c.value == target):
                return BuildAction(
                    hand_card_id=card.id,
                    table_card_ids=(table_card.id,),
                    declared_value=target,
                )
    return None


def _build_face(player: Player, table: TableState) -> Optional[Action]:
    for card in player.hand:
        if not card.is_face:
            continue
        matching = _matching_loose(card, table)
        if matching and _has_other(player.hand, card, lambda c: c.rank is card.rank):
            return BuildAction(hand_card_id=card.id, table_card_ids=(matching[0].id,))
    return None


def _trail(player: Player, table: TableState) -> Optional[Action]:
    if table.builds_owned_by(player.seat) or not player.hand:
        return None
    return TrailAction(hand_card_id=player.hand[0].id)


def _forced_capture(player: Player, table: TableState) -> Action:
    own = table.builds_owned_by(player.seat)
    if own:
        build = own[0]
        for card in player.hand:
            if build.captured_by(card):
                return _capture(card, [], [build])
    raise InvariantViolation(f"Seat {player.seat} has no legal move; its build cannot be captured.")


RULES: Tuple[Callable[[Player, TableState], Optional[Action]], ...] = (
    _capture_own_build,
    _capture_faces,
    _capture_numeric,
    _build_numeric,
    _build_face,
    _trail,
)


def decide(seat: int, state: "RoundEngine") -> Action:
    """Return the action the computer player at ``seat`` takes in ``state``."""
    player = state.players[seat]
    for rule in RULES:
        action = rule(player, state.table)
        if action is not None:
            return action
    return _forced_capture(player, state.table)
