import pytest
from pydantic import ValidationError

from bots.priority_bot import PriorityBot
from bots.random_bot import RandomBot
from casino.config import load_config
from casino.game import GameSession, RoundPhase
from casino.state import check_conservation


def play_round_checked(round_engine, bots):
    while round_engine.phase is RoundPhase.AWAITING_ACTION:
        seat = round_engine.current_seat
        round_engine.apply(seat, bots[seat].choose_action(round_engine, seat))
        check_conservation(round_engine.players, round_engine.table, round_engine.deck.cards)
        hand_sizes = {len(p.hand) for p in round_engine.players}
        assert max(hand_sizes) - min(hand_sizes) <= 1


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_cards_are_conserved_through_random_play(seed):
    session = GameSession(seed=seed, human_seats=())
    bots = [RandomBot(seed=seed + seat) for seat in range(4)]
    round_engine = session.start_round()
    play_round_checked(round_engine, bots)

    result = session.finish_round()
    captured = sum(len(p.captured) for p in round_engine.players)
    assert captured + len(round_engine.table.discarded) == 52
    assert len(result.breakdown) == 4


def test_mixed_bots_finish_a_round():
    session = GameSession(seed=5, human_seats=())
    bots = [PriorityBot(), RandomBot(seed=1), PriorityBot(), RandomBot(seed=2)]
    round_engine = session.start_round()
    play_round_checked(round_engine, bots)
    assert round_engine.is_complete


def test_dealer_rotates_between_rounds():
    session = GameSession(seed=9, human_seats=(), dealer_seat=3, target_score=1000)
    round_engine = session.start_round()
    assert round_engine.current_seat == 0
    round_engine.play_ai_turns(RandomBot(seed=4))
    session.finish_round()

    assert session.dealer_seat == 0
    assert session.start_round().state.first_seat == 1


def test_cannot_finish_unfinished_round():
    session = GameSession(seed=9)
    session.start_round()
    with pytest.raises(RuntimeError):
        session.finish_round()
    with pytest.raises(RuntimeError):
        session.start_round()


def play_full_game(seed):
    session = GameSession(seed=seed, human_seats=())
    while not session.is_over:
        session.start_round().play_ai_turns()
        session.finish_round()
    return session


def test_same_seed_replays_identically():
    first = play_full_game(seed=42)
    second = play_full_game(seed=42)

    assert first.scores == second.scores
    assert [r.round_points for r in first.round_history] == [r.round_points for r in second.round_history]
    assert max(first.scores) >= 21
    assert first.outcome.game_over


def test_session_from_config():
    config = load_config({"human_seats": [2, 0], "dealer_seat": 1, "seed": 4, "target_score": 11})
    session = GameSession.from_config(config)

    assert session.human_seats == (0, 2)
    assert session.target_score == 11
    round_engine = session.start_round()
    assert [p.is_human for p in round_engine.players] == [True, False, True, False]


@pytest.mark.parametrize(
    "payload",
    [
        {"human_seats": [0, 0]},
        {"human_seats": [4]},
        {"dealer_seat": 7},
        {"target_score": 0},
    ],
)
def test_invalid_config_rejected(payload):
    with pytest.raises(ValidationError):
        load_config(payload)
