"""Round scoring helpers for Casino."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .cards import BIG_CASINO, LITTLE_CASINO, Card, Rank, Suit
from .deck import NUM_SEATS
from .state import Player, TableState

TARGET_SCORE = 21

MOST_CARDS_POINTS = 3
MOST_SPADES_POINTS = 1
LITTLE_CASINO_POINTS = 1
BIG_CASINO_POINTS = 2
ACE_POINTS = 1
SWEEP_POINTS = 1


class ScoringError(ValueError):
    """Raised when scoring input is malformed."""


@dataclass(frozen=True)
class SeatScore:
    seat: int
    cards: int
    spades: int
    has_little_casino: bool
    has_big_casino: bool
    aces: int
    sweeps: int
    most_cards_points: int
    most_spades_points: int
    total: int


@dataclass(frozen=True)
class GameOutcome:
    game_over: bool
    threshold_seats: Tuple[int, ...]
    winning_seat: Optional[int]
    tied_seats: Tuple[int, ...]


@dataclass(frozen=True)
class RoundScoreResult:
    breakdown: Tuple[SeatScore, ...]
    round_points: Tuple[int, ...]
    new_scores: Tuple[int, ...]
    outcome: GameOutcome

    @property
    def game_over(self) -> bool:
        return self.outcome.game_over


def award_residue(players: Sequence[Player], table: TableState, last_capturer: Optional[int]) -> List[Card]:
    """Move loose and build cards to the last capturer.

    Returns the awarded cards. When nobody captured all round the residue is
    moved out of play onto ``table.discarded`` instead.
    """
    residue = list(table.loose) + table.build_cards()
    table.loose = []
    table.builds = []
    if last_capturer is None:
        table.discarded.extend(residue)
    else:
        players[last_capturer].captured.extend(residue)
    return residue


def _unique_max(values: Sequence[int]) -> Optional[int]:
    top = max(values)
    holders = [index for index, value in enumerate(values) if value == top]
    return holders[0] if len(holders) == 1 else None


def score_round(
    captured: Sequence[Sequence[Card]],
    sweeps: Sequence[int],
) -> Tuple[SeatScore, ...]:
    if len(captured) != NUM_SEATS or len(sweeps) != NUM_SEATS:
        raise ScoringError("Exactly four seats are supported.")

    card_counts = [len(pile) for pile in captured]
    spade_counts = [sum(1 for card in pile if card.suit is Suit.SPADES) for pile in captured]
    most_cards = _unique_max(card_counts)
    most_spades = _unique_max(spade_counts)

    breakdown = []
    for seat, pile in enumerate(captured):
        has_little = LITTLE_CASINO in pile
        has_big = BIG_CASINO in pile
        aces = sum(1 for card in pile if card.rank is Rank.ACE)
        cards_points = MOST_CARDS_POINTS if seat == most_cards else 0
        spades_points = MOST_SPADES_POINTS if seat == most_spades else 0
        total = (
            cards_points
            + spades_points
            + (LITTLE_CASINO_POINTS if has_little else 0)
            + (BIG_CASINO_POINTS if has_big else 0)
            + aces * ACE_POINTS
            + sweeps[seat] * SWEEP_POINTS
        )
        breakdown.append(
            SeatScore(
                seat=seat,
                cards=card_counts[seat],
                spades=spade_counts[seat],
                has_little_casino=has_little,
                has_big_casino=has_big,
                aces=aces,
                sweeps=sweeps[seat],
                most_cards_points=cards_points,
                most_spades_points=spades_points,
                total=total,
            )
        )
    return tuple(breakdown)


def game_outcome(scores: Sequence[int], target_score: int = TARGET_SCORE) -> GameOutcome:
    """Decide whether the game is over.

    A tie for the highest score among finishing seats yields no winner; the
    tied seats are reported instead.
    """
    threshold_seats = tuple(seat for seat, score in enumerate(scores) if score >= target_score)
    if not threshold_seats:
        return GameOutcome(game_over=False, threshold_seats=(), winning_seat=None, tied_seats=())

    top = max(scores)
    leaders = tuple(seat for seat, score in enumerate(scores) if score == top)
    if len(leaders) == 1:
        return GameOutcome(game_over=True, threshold_seats=threshold_seats, winning_seat=leaders[0], tied_seats=())
    return GameOutcome(game_over=True, threshold_seats=threshold_seats, winning_seat=None, tied_seats=leaders)


def finalize_round(
    players: Sequence[Player],
    prior_scores: Sequence[int],
    target_score: int = TARGET_SCORE,
) -> RoundScoreResult:
    if len(prior_scores) != NUM_SEATS:
        raise ScoringError("Exactly four seats are supported.")
    breakdown = score_round([p.captured for p in players], [p.sweeps for p in players])
    round_points = tuple(entry.total for entry in breakdown)
    new_scores = tuple(prior + points for prior, points in zip(prior_scores, round_points))
    return RoundScoreResult(
        breakdown=breakdown,
        round_points=round_points,
        new_scores=new_scores,
        outcome=game_outcome(new_scores, target_score),
    )
