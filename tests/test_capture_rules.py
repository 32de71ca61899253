import pytest

from casino.capture import can_partition, is_valid_capture, sum_groups, validate_capture
from casino.errors import BuildValueMismatch, FaceRankMismatch, NoMatchingCombination

from helpers import cards, face_build, numeric_build


def card(card_id):
    return cards(card_id)[0]


def test_sum_match_is_legal():
    assert is_valid_capture(card("5♠"), cards("2♥", "3♦"), [])


def test_selection_without_covering_partition_is_illegal():
    assert not is_valid_capture(card("5♠"), cards("2♥", "3♦", "4♣"), [])


def test_multiple_groups_may_be_captured_together():
    assert is_valid_capture(card("5♠"), cards("2♥", "3♦", "5♣"), [])
    assert is_valid_capture(card("5♠"), cards("A♥", "4♦", "2♣", "3♥"), [])


def test_overlapping_groups_do_not_count_as_partition():
    # 2+3 and 2+3' both reach 5, but the three cards cannot be split disjointly.
    assert not can_partition(cards("2♥", "3♦", "3♣"), 5)
    assert not is_valid_capture(card("5♠"), cards("2♥", "3♦", "3♣"), [])


def test_single_table_card_must_match_value():
    assert is_valid_capture(card("7♠"), cards("7♥"), [])
    with pytest.raises(NoMatchingCombination):
        validate_capture(card("7♠"), cards("6♥"), [])


def test_face_capture_matches_by_rank():
    assert is_valid_capture(card("J♠"), cards("J♦"), [])
    assert not is_valid_capture(card("J♠"), cards("Q♦"), [])
    with pytest.raises(FaceRankMismatch):
        validate_capture(card("J♠"), cards("J♦", "Q♦"), [])


def test_face_capture_of_face_builds():
    build = face_build("build-1", 2, "K♥", "K♦")
    assert is_valid_capture(card("K♠"), [], [build])
    assert not is_valid_capture(card("Q♠"), [], [build])


def test_numeric_card_cannot_take_face_cards():
    assert not is_valid_capture(card("5♠"), cards("5♥", "K♦"), [])


def test_builds_must_match_numeric_value():
    eight = numeric_build("build-1", 1, "3♥", "5♦")
    assert is_valid_capture(card("8♠"), [], [eight])
    assert is_valid_capture(card("8♠"), cards("8♣"), [eight])
    with pytest.raises(BuildValueMismatch):
        validate_capture(card("7♠"), [], [eight])


def test_numeric_card_cannot_take_face_build():
    with pytest.raises(BuildValueMismatch):
        validate_capture(card("5♠"), [], [face_build("build-1", 0, "Q♥", "Q♦")])


def test_empty_selection_is_rejected():
    with pytest.raises(NoMatchingCombination):
        validate_capture(card("5♠"), [], [])


def test_sum_groups_lists_every_combination():
    groups = sum_groups(cards("A♥", "4♦", "2♣", "3♥", "5♠"), 5)
    assert sorted(groups) == [(0, 1), (2, 3), (4,)]
