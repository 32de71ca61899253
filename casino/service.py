"""Convenience service layer for UI adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .actions import Action, BuildAction, CaptureAction, TrailAction
from .cards import card_label, serialize_card
from .config import GameConfig
from .errors import RECOVERABLE_ERRORS
from .events import Event, MoveResolved
from .game import GameSession, RoundEngine


@dataclass
class BuildView:
    build_id: str
    owner_seat: int
    cards: list[dict]
    label: str
    is_face_build: bool
    value: int


@dataclass
class RoundView:
    phase: str
    dealer_seat: int
    current_seat: int
    is_last_deal: bool
    deck_size: int
    hand: list[dict]
    hand_labels: list[str]
    hand_sizes: list[int]
    captured_counts: list[int]
    sweeps: list[int]
    loose: list[dict]
    builds: list[BuildView]
    last_capturer_seat: Optional[int]
    scores: list[int]


@dataclass
class SessionView:
    scores: list[int]
    round: Optional[RoundView]
    game_over: bool
    winning_seat: Optional[int] = None
    tied_seats: list[int] = field(default_factory=list)


@dataclass
class ActionResult:
    accepted: bool
    reason: Optional[str]
    message: str
    view: Optional[RoundView]


class CasinoService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None, *, perspective: int = 0) -> None:
        self.session = session or GameSession()
        self.perspective = perspective
        self._pending_events: List[Event] = []

    @classmethod
    def from_config(cls, config: GameConfig) -> "CasinoService":
        perspective = config.human_seats[0] if config.human_seats else 0
        return cls(GameSession.from_config(config), perspective=perspective)

    # Session lifecycle -------------------------------------------------

    def start_new_round(self) -> RoundView:
        round_engine = self.session.start_round()
        self._pending_events.extend(round_engine.events)
        self._pending_events.extend(round_engine.play_ai_turns())
        return self.get_round_view()

    def has_active_round(self) -> bool:
        return self.session.current_round is not None

    def finish_round(self) -> SessionView:
        self.session.finish_round()
        return self.get_session_view()

    # Actions -----------------------------------------------------------

    def capture(self, seat: int, hand_card_id: str, table_card_ids: Sequence[str] = (), build_ids: Sequence[str] = ()) -> ActionResult:
        return self.submit(
            seat,
            CaptureAction(hand_card_id=hand_card_id, table_card_ids=tuple(table_card_ids), build_ids=tuple(build_ids)),
        )

    def build(
        self,
        seat: int,
        hand_card_id: str,
        table_card_ids: Sequence[str] = (),
        build_ids: Sequence[str] = (),
        declared_value: Optional[int] = None,
    ) -> ActionResult:
        return self.submit(
            seat,
            BuildAction(
                hand_card_id=hand_card_id,
                table_card_ids=tuple(table_card_ids),
                build_ids=tuple(build_ids),
                declared_value=declared_value,
            ),
        )

    def trail(self, seat: int, hand_card_id: str) -> ActionResult:
        return self.submit(seat, TrailAction(hand_card_id=hand_card_id))

    def submit(self, seat: int, action: Action) -> ActionResult:
        """Apply a human action, then let computer seats respond."""
        round_engine = self._require_round()
        try:
            events = round_engine.apply(seat, action)
        except RECOVERABLE_ERRORS as exc:
            return ActionResult(accepted=False, reason=exc.reason, message=str(exc), view=self.get_round_view())
        self._pending_events.extend(events)
        message = next((e.resulting_message for e in events if isinstance(e, MoveResolved)), "")
        self._pending_events.extend(round_engine.play_ai_turns())
        return ActionResult(accepted=True, reason=None, message=message, view=self.get_round_view())

    def drain_events(self) -> List[Event]:
        events, self._pending_events = self._pending_events, []
        return events

    # Views -------------------------------------------------------------

    def get_session_view(self) -> SessionView:
        outcome = self.session.outcome
        return SessionView(
            scores=list(self.session.scores),
            round=self.get_round_view() if self.has_active_round() else None,
            game_over=self.session.is_over,
            winning_seat=outcome.winning_seat if outcome else None,
            tied_seats=list(outcome.tied_seats) if outcome else [],
        )

    def get_round_view(self, perspective: Optional[int] = None) -> RoundView:
        round_engine = self._require_round()
        seat = self.perspective if perspective is None else perspective
        snapshot = round_engine.snapshot()
        hand = snapshot.players[seat].hand
        return RoundView(
            phase=snapshot.phase,
            dealer_seat=snapshot.dealer_seat,
            current_seat=snapshot.current_seat,
            is_last_deal=snapshot.is_last_deal,
            deck_size=snapshot.deck_size,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            hand_sizes=[len(p.hand) for p in snapshot.players],
            captured_counts=[len(p.captured) for p in snapshot.players],
            sweeps=[p.sweeps for p in snapshot.players],
            loose=[serialize_card(card) for card in snapshot.loose],
            builds=[
                BuildView(
                    build_id=b.build_id,
                    owner_seat=b.owner_seat,
                    cards=[serialize_card(card) for card in b.cards],
                    label=f"{b.face_rank.value}s" if b.is_face_build else f"{b.value}s",
                    is_face_build=b.is_face_build,
                    value=b.value,
                )
                for b in snapshot.builds
            ],
            last_capturer_seat=snapshot.last_capturer_seat,
            scores=list(snapshot.cumulative_scores),
        )

    # Helpers -----------------------------------------------------------

    def _require_round(self) -> RoundEngine:
        if self.session.current_round is None:
            raise RuntimeError("No active round.")
        return self.session.current_round
