import pytest

from bots.base import BotStrategy
from bots.bot_arena import main, play_round, run_match
from bots.priority_bot import PriorityBot
from bots.random_bot import RandomBot
from casino.errors import InvariantViolation
from casino.game import GameSession, RoundPhase


def test_run_match_executes():
    results = run_match([PriorityBot(), RandomBot(seed=1), PriorityBot(), RandomBot(seed=2)], seed=7)
    assert len(results["scores"]) == 4
    assert results["game_over"]
    assert results["history"]
    assert max(results["scores"]) >= 21


def test_arena_cli_prints_scores(capsys):
    main(["--seats", "priority", "priority", "priority", "priority", "--seed", "3", "--log-level", "WARNING"])
    assert "Scores after" in capsys.readouterr().out


def test_bot_failure_aborts_round():
    class BrokenBot(BotStrategy):
        def choose_action(self, round_engine, seat):
            raise InvariantViolation("no legal move")

    session = GameSession(seed=5, human_seats=())
    round_engine = session.start_round()
    with pytest.raises(InvariantViolation):
        play_round(round_engine, [BrokenBot()] * 4)
    assert round_engine.phase is RoundPhase.ABORTED
