"""Common bot strategy interfaces."""

from __future__ import annotations

from casino.actions import Action, TrailAction
from casino.game import RoundEngine


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_round_start(self, round_engine: RoundEngine) -> None:
        """Optional hook invoked at the start of each round."""
        return None

    def choose_action(self, round_engine: RoundEngine, seat: int) -> Action:
        """Return the action to take for ``seat``; trails the first card by default."""
        hand = round_engine.players[seat].hand
        if not hand:
            raise RuntimeError("No cards in hand for bot.")
        return TrailAction(hand_card_id=hand[0].id)

    def __call__(self, seat: int, round_engine: RoundEngine) -> Action:
        return self.choose_action(round_engine, seat)
