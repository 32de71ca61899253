"""Error taxonomy for the Casino engine.

Recoverable errors (``InvalidSelection``, ``IllegalTrail``, ``OutOfTurn``) are
raised before any state is touched, so callers may simply re-prompt.
``InsufficientCards`` and ``InvariantViolation`` indicate a bookkeeping bug and
abort the round.
"""

from __future__ import annotations


class CasinoError(RuntimeError):
    """Base class for engine errors."""

    reason = "CasinoError"


class InvalidSelection(CasinoError):
    """Raised when a capture or build selection breaks the rules."""

    reason = "InvalidSelection"


class NoMatchingCombination(InvalidSelection):
    reason = "NoMatchingCombination"


class BuildValueMismatch(InvalidSelection):
    reason = "BuildValueMismatch"


class FaceRankMismatch(InvalidSelection):
    reason = "FaceRankMismatch"


class MissingCapturingCard(InvalidSelection):
    reason = "MissingCapturingCard"


class BuildNotOwned(InvalidSelection):
    """Raised when a seat tries to extend a build it does not own."""

    reason = "BuildNotOwned"


class UnknownSelection(InvalidSelection):
    """Raised when an action references cards or builds that are not in play."""

    reason = "UnknownSelection"


class IllegalTrail(CasinoError):
    reason = "IllegalTrail"


class ActiveBuildBlocksTrail(IllegalTrail):
    reason = "ActiveBuildBlocksTrail"


class OutOfTurn(CasinoError):
    reason = "OutOfTurn"


class InsufficientCards(CasinoError):
    """Raised when a deal needs more cards than the deck holds."""

    reason = "InsufficientCards"


class InvariantViolation(CasinoError):
    """Raised when an internal consistency check fails."""

    reason = "InvariantViolation"


RECOVERABLE_ERRORS = (InvalidSelection, IllegalTrail, OutOfTurn)
FATAL_ERRORS = (InsufficientCards, InvariantViolation)
