"""Player actions accepted by the turn controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Optional, Tuple, Union

from .errors import InvalidSelection


class ActionKind(Enum):
    CAPTURE = auto()
    BUILD = auto()
    TRAIL = auto()

    def __str__(self) -> str:
        return self.name.lower()


def _unique_ids(ids, what: str) -> Tuple[str, ...]:
    normalized = tuple(ids)
    if len(set(normalized)) != len(normalized):
        raise InvalidSelection(f"Duplicate {what} in selection.")
    return normalized


@dataclass(frozen=True)
class CaptureAction:
    hand_card_id: str
    table_card_ids: Tuple[str, ...] = ()
    build_ids: Tuple[str, ...] = ()

    kind: ClassVar[ActionKind] = ActionKind.CAPTURE

    def __post_init__(self) -> None:
        object.__setattr__(self, "table_card_ids", _unique_ids(self.table_card_ids, "table cards"))
        object.__setattr__(self, "build_ids", _unique_ids(self.build_ids, "builds"))


@dataclass(frozen=True)
class BuildAction:
    hand_card_id: str
    table_card_ids: Tuple[str, ...] = ()
    build_ids: Tuple[str, ...] = ()
    declared_value: Optional[int] = None

    kind: ClassVar[ActionKind] = ActionKind.BUILD

    def __post_init__(self) -> None:
        object.__setattr__(self, "table_card_ids", _unique_ids(self.table_card_ids, "table cards"))
        object.__setattr__(self, "build_ids", _unique_ids(self.build_ids, "builds"))


@dataclass(frozen=True)
class TrailAction:
    hand_card_id: str

    kind: ClassVar[ActionKind] = ActionKind.TRAIL


Action = Union[CaptureAction, BuildAction, TrailAction]
