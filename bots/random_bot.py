"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from casino.actions import Action
from casino.errors import InvariantViolation
from casino.game import RoundEngine
from casino.mechanics import candidate_actions

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_action(self, round_engine: RoundEngine, seat: int) -> Action:
        legal = candidate_actions(round_engine, seat)
        if not legal:
            raise InvariantViolation(f"Seat {seat} has no legal action.")
        return self._rng.choice(legal)
