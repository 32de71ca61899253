"""Baseline bot following the built-in priority rules."""

from __future__ import annotations

from casino.actions import Action
from casino.game import RoundEngine
from casino.strategy import decide

from .base import BotStrategy


class PriorityBot(BotStrategy):
    name = "Priority"

    def choose_action(self, round_engine: RoundEngine, seat: int) -> Action:
        return decide(seat, round_engine)
