"""Legal move generation for Casino."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .actions import Action, BuildAction, CaptureAction, TrailAction
from .builds import MAX_BUILD_VALUE
from .strategy import disjoint_combinations

if TYPE_CHECKING:
    from .game import RoundEngine


def candidate_actions(round_engine: "RoundEngine", seat: int) -> List[Action]:
    """Return a varied set of legal actions for the seat whose turn it is.

    The list is not exhaustive: multi-card captures are generated greedily,
    alongside single-card captures, pair builds, extensions of own builds and
    trails. Every returned action passes ``RoundEngine.is_legal``.
    """
    player = round_engine.players[seat]
    table = round_engine.table
    candidates: List[Action] = []

    for card in player.hand:
        takeable_builds = [b for b in table.builds if b.captured_by(card)]
        if card.is_face:
            singles = [c for c in table.loose if c.rank is card.rank]
            combos = []
        else:
            singles = [c for c in table.loose if not c.is_face and c.value == card.value]
            others = [c for c in table.loose if not c.is_face and c.value != card.value]
            combos = disjoint_combinations(others, card.value)

        greedy = singles + combos
        if greedy or takeable_builds:
            candidates.append(
                CaptureAction(
                    hand_card_id=card.id,
                    table_card_ids=tuple(c.id for c in greedy),
                    build_ids=tuple(b.build_id for b in takeable_builds),
                )
            )
        for single in singles:
            candidates.append(CaptureAction(hand_card_id=card.id, table_card_ids=(single.id,)))
        for build in takeable_builds:
            candidates.append(CaptureAction(hand_card_id=card.id, build_ids=(build.build_id,)))

        for table_card in table.loose:
            if card.is_face:
                if table_card.rank is card.rank:
                    candidates.append(BuildAction(hand_card_id=card.id, table_card_ids=(table_card.id,)))
            elif not table_card.is_face and card.value + table_card.value <= MAX_BUILD_VALUE:
                candidates.append(
                    BuildAction(
                        hand_card_id=card.id,
                        table_card_ids=(table_card.id,),
                        declared_value=card.value + table_card.value,
                    )
                )
        if not card.is_face:
            for build in table.builds_owned_by(seat):
                if not build.is_face_build and build.value + card.value <= MAX_BUILD_VALUE:
                    candidates.append(
                        BuildAction(
                            hand_card_id=card.id,
                            build_ids=(build.build_id,),
                            declared_value=build.value + card.value,
                        )
                    )

        candidates.append(TrailAction(hand_card_id=card.id))

    unique = list(dict.fromkeys(candidates))
    return [action for action in unique if round_engine.is_legal(seat, action)]
