"""Simple bot arena for Casino."""

from __future__ import annotations

import argparse
from typing import Dict, Iterable, Optional, Sequence

from casino.game import GameSession, RoundEngine
from casino.logging_utils import get_logger, setup_logging
from casino.scoring import TARGET_SCORE

from .base import BotStrategy
from .priority_bot import PriorityBot
from .random_bot import RandomBot

logger = get_logger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "priority": PriorityBot,
    "random": RandomBot,
}

MAX_ROUNDS = 100


def play_round(round_engine: RoundEngine, bots: Sequence[BotStrategy]) -> None:
    for bot in bots:
        bot.on_round_start(round_engine)
    round_engine.play_ai_turns(lambda seat, engine: bots[seat](seat, engine))
    if not round_engine.is_complete:
        raise RuntimeError(f"Round stopped at human seat {round_engine.current_seat}.")


def run_match(
    bots: Sequence[BotStrategy],
    *,
    seed: Optional[int] = None,
    target_score: int = TARGET_SCORE,
    max_rounds: int = MAX_ROUNDS,
) -> dict:
    if len(bots) != 4:
        raise ValueError("Exactly four bots are required.")
    session = GameSession(seed=seed, target_score=target_score, human_seats=())
    history = []
    while not session.is_over and len(history) < max_rounds:
        round_engine = session.start_round()
        play_round(round_engine, bots)
        result = session.finish_round()
        history.append(
            {
                "dealer": round_engine.state.dealer_seat,
                "round_points": list(result.round_points),
                "scores": list(result.new_scores),
            }
        )
        logger.debug("Round %d scores: %s", len(history), list(result.new_scores))

    outcome = session.outcome
    return {
        "scores": list(session.scores),
        "history": history,
        "game_over": session.is_over,
        "winning_seat": outcome.winning_seat if outcome else None,
        "tied_seats": list(outcome.tied_seats) if outcome else [],
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a four-seat bot match.")
    parser.add_argument(
        "--seats",
        nargs=4,
        default=["priority", "priority", "random", "random"],
        choices=BOT_REGISTRY.keys(),
        help="Bot for each seat, in seat order.",
    )
    parser.add_argument("--target", type=int, default=TARGET_SCORE, help="Score that ends the game.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    bots = [BOT_REGISTRY[name]() for name in args.seats]
    results = run_match(bots, seed=args.seed, target_score=args.target)

    print(f"Scores after {len(results['history'])} rounds: {results['scores']}")
    if results["winning_seat"] is not None:
        print(f"Winner: seat {results['winning_seat']} ({args.seats[results['winning_seat']]})")
    elif results["tied_seats"]:
        print(f"Tied at the top: seats {results['tied_seats']}")


if __name__ == "__main__":
    main()
