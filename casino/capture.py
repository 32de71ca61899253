"""Capture validation for Casino.

Numeric captures may take several loose cards at once as long as the
selection splits into disjoint groups that each add up to the played card.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .cards import Card, total_value
from .errors import (
    BuildValueMismatch,
    FaceRankMismatch,
    InvalidSelection,
    NoMatchingCombination,
)
from .state import Build


def sum_groups(cards: Sequence[Card], target: int) -> List[Tuple[int, ...]]:
    """Return index tuples of every combination of ``cards`` summing to ``target``.

    The search stops extending a combination as soon as its sum reaches or
    passes the target.
    """
    groups: List[Tuple[int, ...]] = []

    def search(start: int, current: Tuple[int, ...], total: int) -> None:
        if current and total == target:
            groups.append(current)
            return
        for index in range(start, len(cards)):
            value = cards[index].value
            if total + value > target:
                continue
            search(index + 1, current + (index,), total + value)

    if target > 0:
        search(0, (), 0)
    return groups


def can_partition(cards: Sequence[Card], target: int) -> bool:
    """Return True if ``cards`` split into disjoint groups each summing to ``target``."""
    if target <= 0 or not cards:
        return False
    if any(card.is_face for card in cards):
        return False
    if total_value(cards) % target != 0:
        return False

    def cover(remaining: Tuple[Card, ...]) -> bool:
        if not remaining:
            return True
        first, rest = remaining[0], remaining[1:]
        need = target - first.value
        if need < 0:
            return False
        if need == 0:
            return cover(rest)
        for group in sum_groups(rest, need):
            used = set(group)
            if cover(tuple(card for index, card in enumerate(rest) if index not in used)):
                return True
        return False

    return cover(tuple(cards))


def validate_capture(hand_card: Card, table_cards: Sequence[Card], builds: Sequence[Build]) -> None:
    """Raise an InvalidSelection subtype unless the capture is legal."""
    if not table_cards and not builds:
        raise NoMatchingCombination("Select table cards or builds to capture.")

    if hand_card.is_face:
        for build in builds:
            if not build.is_face_build or build.face_rank is not hand_card.rank:
                raise FaceRankMismatch(f"{hand_card} cannot take build {build.build_id}.")
        for card in table_cards:
            if card.rank is not hand_card.rank:
                raise FaceRankMismatch(f"{hand_card} cannot take {card}.")
        return

    value = hand_card.value
    for build in builds:
        if build.is_face_build or build.value != value:
            raise BuildValueMismatch(f"Build {build.build_id} is not worth {value}.")

    if not table_cards:
        return

    if any(card.is_face for card in table_cards):
        raise NoMatchingCombination(f"{hand_card} cannot take face cards.")

    if len(table_cards) == 1:
        if table_cards[0].value != value:
            raise NoMatchingCombination(f"{table_cards[0]} does not match {hand_card}.")
        return

    if total_value(table_cards) == value:
        return
    if not can_partition(table_cards, value):
        raise NoMatchingCombination(f"Selected cards do not split into groups of {value}.")


def is_valid_capture(hand_card: Card, table_cards: Sequence[Card], builds: Sequence[Build]) -> bool:
    try:
        validate_capture(hand_card, table_cards, builds)
    except InvalidSelection:
        return False
    return True
