import pytest

from casino import strategy
from casino.actions import BuildAction, CaptureAction, TrailAction
from casino.errors import InvariantViolation
from casino.events import MoveResolved
from casino.game import RoundPhase
from casino.strategy import decide, disjoint_combinations

from helpers import arrange, cards, face_build, new_round, numeric_build

OTHER_HANDS = {2: cards("4♣", "6♣"), 3: cards("8♣", "9♣"), 0: cards("8♥", "9♦")}


def seat_one(hand, loose=(), builds=()):
    return arrange(new_round(), hands={1: cards(*hand), **OTHER_HANDS}, loose=cards(*loose), builds=builds, current_seat=1)


def test_captures_own_build_first():
    engine = seat_one(("K♠", "7♥"), loose=("7♦", "2♠"), builds=[numeric_build("build-1", 1, "3♥", "4♦")])
    action = decide(1, engine)

    assert action == CaptureAction("7♥", ("7♦",), ("build-1",))
    engine.apply(1, action)
    assert engine.table.builds == []


def test_face_capture_takes_loose_cards_and_foreign_face_builds():
    engine = seat_one(("3♠", "Q♥"), loose=("Q♦", "5♣"), builds=[face_build("build-1", 2, "Q♠", "Q♣")])
    assert decide(1, engine) == CaptureAction("Q♥", ("Q♦",), ("build-1",))


def test_numeric_capture_collects_direct_and_summed_matches():
    engine = seat_one(("K♠", "6♥"), loose=("6♦", "2♣", "4♠", "3♥"))
    action = decide(1, engine)

    assert action == CaptureAction("6♥", ("6♦", "2♣", "4♠"))
    engine.apply(1, action)
    assert engine.table.loose == cards("3♥")


def test_numeric_capture_includes_foreign_builds():
    engine = seat_one(("9♥", "2♦"), loose=("10♣",), builds=[numeric_build("build-1", 3, "5♥", "4♠")])
    assert decide(1, engine) == CaptureAction("9♥", (), ("build-1",))


def test_builds_when_holding_the_capturing_card():
    engine = seat_one(("3♠", "8♥"), loose=("5♦", "K♣"))
    action = decide(1, engine)

    assert action == BuildAction("3♠", ("5♦",), declared_value=8)
    engine.apply(1, action)
    assert engine.table.builds[0].value == 8


def test_face_build_rule():
    engine = seat_one(("J♠", "J♥", "4♣"), loose=("J♦",))
    player = engine.players[1]
    assert strategy._build_face(player, engine.table) == BuildAction("J♠", ("J♦",))


def test_trails_first_card_when_nothing_else_applies():
    engine = seat_one(("9♠", "K♥"), loose=("2♦",))
    assert decide(1, engine) == TrailAction("9♠")


def test_missing_capturing_card_for_own_build_is_fatal():
    engine = seat_one(("9♠",), loose=("K♦",), builds=[numeric_build("build-1", 1, "3♥", "4♦")])
    with pytest.raises(InvariantViolation):
        decide(1, engine)


def test_stranded_own_build_aborts_round_during_ai_turns(caplog):
    engine = seat_one(("9♠",), loose=("K♦",), builds=[numeric_build("build-1", 1, "3♥", "4♦")])
    with pytest.raises(InvariantViolation):
        engine.play_ai_turns()

    assert engine.phase is RoundPhase.ABORTED
    assert "Round aborted, state dump" in caplog.text
    assert "build-1 owner=1" in caplog.text


def test_captures_every_own_build_the_card_takes():
    engine = seat_one(
        ("7♥",),
        builds=[numeric_build("build-1", 1, "3♥", "4♦"), numeric_build("build-2", 1, "5♣", "2♦")],
    )
    action = decide(1, engine)

    assert action == CaptureAction("7♥", (), ("build-1", "build-2"))
    engine.apply(1, action)
    assert engine.table.builds == []
    assert engine.players[1].captured == cards("7♥", "3♥", "4♦", "5♣", "2♦")


def test_ai_turns_stop_at_human_seat():
    engine = arrange(
        new_round(human_seats=(0,)),
        hands={1: cards("9♠", "K♥"), 2: cards("4♣", "6♣"), 3: cards("8♣", "9♣"), 0: cards("8♥", "9♦")},
        loose=cards("2♦"),
        current_seat=1,
    )
    events = engine.play_ai_turns()

    assert engine.current_seat == 0
    assert [e.seat for e in events if isinstance(e, MoveResolved)] == [1, 2, 3]


def test_disjoint_combinations_never_reuse_cards():
    taken = disjoint_combinations(cards("2♥", "3♦", "3♣", "A♠", "4♠"), 5)
    assert len(taken) == len(set(taken))
    assert sum(card.value for card in taken) % 5 == 0
