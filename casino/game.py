"""Turn control and round/game orchestration for Casino."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Callable, List, Optional, Sequence

from .actions import Action, ActionKind, BuildAction, CaptureAction, TrailAction
from .builds import check_owned_builds_covered, create_face_build, create_numeric_build
from .capture import validate_capture
from .cards import Card
from .config import GameConfig
from .deck import NUM_SEATS, TABLE, Deck, build_deck
from .errors import (
    FATAL_ERRORS,
    RECOVERABLE_ERRORS,
    ActiveBuildBlocksTrail,
    BuildValueMismatch,
    FaceRankMismatch,
    InvariantViolation,
    OutOfTurn,
)
from .events import (
    BuildSnapshot,
    CardsDealt,
    Event,
    GameEnded,
    MoveResolved,
    PlayerSnapshot,
    RoundEnded,
    RoundSnapshot,
    TurnAdvanced,
)
from .logging_utils import get_logger
from .scoring import TARGET_SCORE, GameOutcome, RoundScoreResult, award_residue, finalize_round
from .state import Build, Player, RoundState, TableState, check_conservation
from .strategy import decide

logger = get_logger(__name__)

Policy = Callable[[int, "RoundEngine"], Action]


class RoundPhase(Enum):
    AWAITING_ACTION = auto()
    COMPLETE = auto()
    ABORTED = auto()


@dataclass
class MovePlan:
    """A fully validated move, ready to be committed."""

    seat: int
    kind: ActionKind
    hand_card: Card
    table_cards: List[Card] = field(default_factory=list)
    builds: List[Build] = field(default_factory=list)
    new_build: Optional[Build] = None


@dataclass
class RoundEngine:
    """Manage a single round of Casino, from the opening deal to scoring."""

    dealer_seat: int = 0
    human_seats: Sequence[int] = (0,)
    prior_scores: Sequence[int] = (0, 0, 0, 0)
    target_score: int = TARGET_SCORE
    rng: Optional[Random] = None
    deck_order: Optional[Sequence[Card]] = None

    phase: RoundPhase = field(init=False, default=RoundPhase.AWAITING_ACTION)
    players: List[Player] = field(init=False)
    table: TableState = field(init=False)
    deck: Deck = field(init=False)
    state: RoundState = field(init=False)
    current_seat: int = field(init=False)
    events: List[Event] = field(init=False, default_factory=list)
    score_result: Optional[RoundScoreResult] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if not 0 <= self.dealer_seat < NUM_SEATS:
            raise ValueError(f"Dealer seat must be in 0..{NUM_SEATS - 1}.")
        humans = set(self.human_seats)
        self.players = [Player(seat=seat, is_human=seat in humans) for seat in range(NUM_SEATS)]
        self.table = TableState()
        self.state = RoundState(dealer_seat=self.dealer_seat, cumulative_scores=list(self.prior_scores))
        if self.deck_order is not None:
            cards = list(self.deck_order)
            if Counter(cards) != Counter(build_deck()):
                raise ValueError("Deck must contain each of the 52 cards exactly once.")
            self.deck = Deck(cards)
        else:
            self.deck = Deck.shuffled(self.rng)
        self.current_seat = self.state.first_seat
        self.events.extend(self._deal(include_table=True))

    # Actions -----------------------------------------------------------

    def apply(self, seat: int, action: Action) -> List[Event]:
        """Resolve one action atomically and return the events it produced."""
        self._ensure_phase(RoundPhase.AWAITING_ACTION)
        try:
            plan = self.plan(seat, action)
        except RECOVERABLE_ERRORS as exc:
            logger.info("Rejected %s from seat %d: %s (%s)", action.kind, seat, exc.reason, exc)
            raise

        try:
            events = self._commit(plan)
            events.extend(self._after_move())
            check_conservation(self.players, self.table, self.deck.cards)
        except FATAL_ERRORS:
            self._abort()
            raise
        self.events.extend(events)
        return events

    def play_ai_turns(self, policy: Policy = decide) -> List[Event]:
        """Let computer seats act until a human seat is up or the round ends."""
        events: List[Event] = []
        while self.phase is RoundPhase.AWAITING_ACTION and not self.players[self.current_seat].is_human:
            seat = self.current_seat
            try:
                action = policy(seat, self)
            except FATAL_ERRORS:
                self._abort()
                raise
            try:
                events.extend(self.apply(seat, action))
            except RECOVERABLE_ERRORS as exc:
                self._abort()
                raise InvariantViolation(f"Computer seat {seat} proposed an illegal action: {exc}") from exc
        return events

    def plan(self, seat: int, action: Action) -> MovePlan:
        """Validate ``action`` against the current state without changing it."""
        if seat != self.current_seat:
            raise OutOfTurn(f"It is seat {self.current_seat}'s turn, not seat {seat}'s.")
        player = self.players[seat]
        hand_card = player.hand_card(action.hand_card_id)

        if isinstance(action, TrailAction):
            if self.table.builds_owned_by(seat):
                raise ActiveBuildBlocksTrail("Can't trail with a build on table!")
            return MovePlan(seat=seat, kind=ActionKind.TRAIL, hand_card=hand_card)

        table_cards = [self.table.loose_card(card_id) for card_id in action.table_card_ids]
        builds = [self.table.build(build_id) for build_id in action.build_ids]
        new_build: Optional[Build] = None

        if isinstance(action, CaptureAction):
            validate_capture(hand_card, table_cards, builds)
        elif hand_card.is_face:
            if builds:
                raise FaceRankMismatch("Face builds are made from table cards only.")
            if action.declared_value is not None:
                raise BuildValueMismatch("Face builds have no numeric value.")
            new_build = create_face_build(
                hand_card, table_cards, player.hand, seat, build_id=self.table.peek_build_id()
            )
        else:
            new_build = create_numeric_build(
                hand_card,
                table_cards,
                builds,
                action.declared_value,
                player.hand,
                seat,
                build_id=self.table.peek_build_id(),
            )

        consumed = {build.build_id for build in builds}
        owned_after = [b for b in self.table.builds_owned_by(seat) if b.build_id not in consumed]
        if new_build is not None:
            owned_after.append(new_build)
        check_owned_builds_covered([c for c in player.hand if c != hand_card], owned_after)

        return MovePlan(
            seat=seat,
            kind=action.kind,
            hand_card=hand_card,
            table_cards=table_cards,
            builds=builds,
            new_build=new_build,
        )

    def is_legal(self, seat: int, action: Action) -> bool:
        try:
            self.plan(seat, action)
        except RECOVERABLE_ERRORS:
            return False
        return True

    # Views -------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        return self.phase is RoundPhase.COMPLETE

    def snapshot(self, *, deck_size: Optional[int] = None) -> RoundSnapshot:
        return RoundSnapshot(
            phase=self.phase.name.lower(),
            dealer_seat=self.state.dealer_seat,
            first_seat=self.state.first_seat,
            current_seat=self.current_seat,
            last_capturer_seat=self.state.last_capturer_seat,
            is_last_deal=self.state.is_last_deal,
            deck_size=len(self.deck) if deck_size is None else deck_size,
            players=tuple(
                PlayerSnapshot(
                    seat=p.seat,
                    is_human=p.is_human,
                    hand=tuple(p.hand),
                    captured=tuple(p.captured),
                    sweeps=p.sweeps,
                )
                for p in self.players
            ),
            loose=tuple(self.table.loose),
            builds=tuple(
                BuildSnapshot(
                    build_id=b.build_id,
                    owner_seat=b.owner_seat,
                    cards=tuple(b.cards),
                    is_face_build=b.is_face_build,
                    value=b.value,
                    face_rank=b.face_rank,
                )
                for b in self.table.builds
            ),
            cumulative_scores=tuple(self.state.cumulative_scores),
        )

    def dump_state(self) -> str:
        lines = [
            f"phase={self.phase.name} dealer={self.state.dealer_seat} current={self.current_seat} "
            f"last_capturer={self.state.last_capturer_seat} last_deal={self.state.is_last_deal}",
            f"deck ({len(self.deck)}): {' '.join(card.id for card in self.deck.cards)}",
        ]
        for p in self.players:
            lines.append(
                f"seat {p.seat}: hand=[{' '.join(c.id for c in p.hand)}] "
                f"captured=[{' '.join(c.id for c in p.captured)}] sweeps={p.sweeps}"
            )
        lines.append(f"loose: [{' '.join(c.id for c in self.table.loose)}]")
        for b in self.table.builds:
            lines.append(f"{b.build_id} owner={b.owner_seat} {b.label()}: [{' '.join(c.id for c in b.cards)}]")
        if self.table.discarded:
            lines.append(f"discarded: [{' '.join(c.id for c in self.table.discarded)}]")
        return "\n".join(lines)

    # Internals ---------------------------------------------------------

    def _commit(self, plan: MovePlan) -> List[Event]:
        player = self.players[plan.seat]
        card = plan.hand_card
        player.hand.remove(card)
        consumed = {build.build_id for build in plan.builds}
        self.table.loose = [c for c in self.table.loose if c not in plan.table_cards]
        self.table.builds = [b for b in self.table.builds if b.build_id not in consumed]

        if plan.kind is ActionKind.CAPTURE:
            player.captured.append(card)
            player.captured.extend(plan.table_cards)
            for build in plan.builds:
                player.captured.extend(build.cards)
            self.state.last_capturer_seat = plan.seat
            message = f"Taking {card.rank.value if card.is_face else card.value}s"
            if self.table.is_clear():
                player.sweeps += 1
                message = "Sweep!"
        elif plan.kind is ActionKind.BUILD:
            assert plan.new_build is not None
            if self.table.next_build_id() != plan.new_build.build_id:
                raise InvariantViolation("Build id changed between planning and commit.")
            self.table.builds.append(plan.new_build)
            message = f"Building {plan.new_build.label()}"
        else:
            self.table.loose.append(card)
            message = f"Trailing {card.rank.value}"

        logger.debug("Seat %d %s with %s: %s", plan.seat, plan.kind, card, message)
        return [MoveResolved(seat=plan.seat, action_kind=plan.kind, resulting_message=message, snapshot=self.snapshot())]

    def _after_move(self) -> List[Event]:
        if any(player.hand for player in self.players):
            self.current_seat = (self.current_seat + 1) % NUM_SEATS
            return [TurnAdvanced(next_seat=self.current_seat, snapshot=self.snapshot())]
        if not self.deck.is_empty():
            return self._deal(include_table=False)
        if not self.state.is_last_deal:
            raise InvariantViolation("Deck ran out without a last deal.")
        return self._end_round()

    def _deal(self, *, include_table: bool) -> List[Event]:
        result = self.deck.deal(self.state.dealer_seat, include_table=include_table)
        events: List[Event] = []
        still_in_deck = len(result.order)
        for destination, card in result.order:
            if destination == TABLE:
                self.table.loose.append(card)
            else:
                self.players[destination].hand.append(card)
            still_in_deck -= 1
            events.append(
                CardsDealt(
                    destination=destination,
                    card=card,
                    snapshot=self.snapshot(deck_size=len(self.deck) + still_in_deck),
                )
            )
        if self.deck.is_empty():
            self.state.is_last_deal = True
        self.current_seat = self.state.first_seat
        logger.debug(
            "Dealt %d cards (dealer %d), %d left%s",
            len(result.order),
            self.state.dealer_seat,
            len(self.deck),
            ", last deal" if self.state.is_last_deal else "",
        )
        events.append(TurnAdvanced(next_seat=self.current_seat, snapshot=self.snapshot()))
        return events

    def _end_round(self) -> List[Event]:
        award_residue(self.players, self.table, self.state.last_capturer_seat)
        check_conservation(self.players, self.table, self.deck.cards)
        result = finalize_round(self.players, self.state.cumulative_scores, self.target_score)
        self.state.cumulative_scores = list(result.new_scores)
        self.score_result = result
        self.phase = RoundPhase.COMPLETE
        logger.info(
            "Round complete (dealer %d): points=%s totals=%s",
            self.state.dealer_seat,
            list(result.round_points),
            list(result.new_scores),
        )

        snapshot = self.snapshot()
        events: List[Event] = [
            RoundEnded(breakdown=result.breakdown, cumulative_scores=result.new_scores, snapshot=snapshot)
        ]
        if result.game_over:
            outcome = result.outcome
            if outcome.tied_seats:
                logger.warning("Game over with seats %s tied on %d", list(outcome.tied_seats), max(result.new_scores))
            events.append(GameEnded(winning_seat=outcome.winning_seat, tied_seats=outcome.tied_seats, snapshot=snapshot))
        return events

    def _abort(self) -> None:
        self.phase = RoundPhase.ABORTED
        logger.error("Round aborted, state dump:\n%s", self.dump_state())

    def _ensure_phase(self, expected: RoundPhase) -> None:
        if self.phase != expected:
            raise RuntimeError(f"Action not allowed in phase {self.phase}. Expected {expected}.")


@dataclass
class GameSession:
    """Track cumulative scores and dealer rotation across rounds."""

    seed: Optional[int] = None
    target_score: int = TARGET_SCORE
    human_seats: Sequence[int] = (0,)
    dealer_seat: int = 0
    scores: List[int] = field(default_factory=lambda: [0] * NUM_SEATS)
    rng: Random = field(init=False)
    current_round: Optional[RoundEngine] = field(default=None, init=False)
    round_history: List[RoundScoreResult] = field(default_factory=list)
    outcome: Optional[GameOutcome] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameSession":
        return cls(
            seed=config.seed,
            target_score=config.target_score,
            human_seats=tuple(config.human_seats),
            dealer_seat=config.dealer_seat,
        )

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def start_round(self) -> RoundEngine:
        if self.is_over:
            raise RuntimeError("Game is already over.")
        if self.current_round is not None:
            raise RuntimeError("A round is already in progress.")
        self.current_round = RoundEngine(
            dealer_seat=self.dealer_seat,
            human_seats=self.human_seats,
            prior_scores=self.scores,
            target_score=self.target_score,
            rng=self.rng,
        )
        return self.current_round

    def finish_round(self) -> RoundScoreResult:
        if self.current_round is None:
            raise RuntimeError("No active round.")
        if not self.current_round.is_complete:
            raise RuntimeError("Cannot finish round before play is complete.")
        result = self.current_round.score_result
        assert result is not None
        self.scores = list(result.new_scores)
        self.round_history.append(result)
        self.current_round = None
        if result.game_over:
            self.outcome = result.outcome
        else:
            self.dealer_seat = (self.dealer_seat + 1) % NUM_SEATS
        return result
