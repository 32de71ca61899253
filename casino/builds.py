"""Build creation rules.

Functions here never mutate table or hand state; they return the new Build and
leave committing it to the turn controller.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .cards import Card, total_value
from .errors import (
    BuildNotOwned,
    BuildValueMismatch,
    FaceRankMismatch,
    MissingCapturingCard,
    NoMatchingCombination,
)
from .state import Build

MIN_BUILD_VALUE = 2
MAX_BUILD_VALUE = 10


def _rest_of_hand(hand: Iterable[Card], hand_card: Card) -> list[Card]:
    return [card for card in hand if card != hand_card]


def create_face_build(
    hand_card: Card,
    selected_table: Sequence[Card],
    hand: Sequence[Card],
    acting_seat: int,
    *,
    build_id: str,
) -> Build:
    if not hand_card.is_face:
        raise FaceRankMismatch(f"{hand_card} is not a face card.")
    if not selected_table:
        raise NoMatchingCombination(f"Select {hand_card.rank.value}s on the table to build.")
    if any(card.rank is not hand_card.rank for card in selected_table):
        raise FaceRankMismatch("Face builds must be same rank.")
    if not any(card.rank is hand_card.rank for card in _rest_of_hand(hand, hand_card)):
        raise MissingCapturingCard(f"Need another {hand_card.rank.value} to capture.")

    return Build(
        build_id=build_id,
        owner_seat=acting_seat,
        cards=[hand_card, *selected_table],
        is_face_build=True,
        face_rank=hand_card.rank,
    )


def create_numeric_build(
    hand_card: Card,
    selected_table: Sequence[Card],
    selected_builds: Sequence[Build],
    declared_value: Optional[int],
    hand: Sequence[Card],
    acting_seat: int,
    *,
    build_id: str,
) -> Build:
    """Combine the hand card with table cards and own builds into one build.

    When ``declared_value`` is None the build takes the value of the selection.
    """
    if hand_card.is_face:
        raise FaceRankMismatch(f"{hand_card} can only build by rank.")
    if not selected_table and not selected_builds:
        raise NoMatchingCombination("Select table cards or builds to build on.")
    if any(card.is_face for card in selected_table):
        raise FaceRankMismatch("Face cards cannot join a numeric build.")
    for build in selected_builds:
        if build.owner_seat != acting_seat:
            raise BuildNotOwned(f"Build {build.build_id} belongs to seat {build.owner_seat}.")
        if build.is_face_build:
            raise FaceRankMismatch(f"Build {build.build_id} is a face build.")

    selection_value = hand_card.value + total_value(selected_table) + sum(b.value for b in selected_builds)
    value = selection_value if declared_value is None else declared_value
    if not MIN_BUILD_VALUE <= value <= MAX_BUILD_VALUE:
        raise BuildValueMismatch(f"Build value must be between {MIN_BUILD_VALUE} and {MAX_BUILD_VALUE}.")

    rest = _rest_of_hand(hand, hand_card)
    if not any(not card.is_face and card.value == value for card in rest):
        raise MissingCapturingCard("Need a card in hand to capture this build.")
    if selection_value != value:
        raise BuildValueMismatch("Cards must add up to build value.")

    cards = [hand_card, *selected_table]
    for build in selected_builds:
        cards.extend(build.cards)
    return Build(build_id=build_id, owner_seat=acting_seat, cards=cards, value=value)


def check_owned_builds_covered(hand_after: Sequence[Card], owned_builds_after: Sequence[Build]) -> None:
    """Raise MissingCapturingCard if an owner would be left unable to take a build."""
    for build in owned_builds_after:
        if not any(build.captured_by(card) for card in hand_after):
            raise MissingCapturingCard(f"Keep a card that captures build {build.build_id}.")
