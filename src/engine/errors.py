"""
Dice Poker - Error Taxonomy

Local errors (bad snapshots, bad menu input, nothing to call) never reach
the Ledger. Ledger errors are surfaced to the participant verbatim.
"""

from __future__ import annotations


class DicePokerError(Exception):
    """Base exception for all Dice Poker client errors."""


class MalformedSnapshot(DicePokerError, ValueError):
    """Ledger data violates the session invariants. Fatal for one poll cycle."""


class InvalidSelection(DicePokerError, ValueError):
    """Menu choice or amount entry could not be accepted."""


class NothingToCall(DicePokerError):
    """Viewer's bet already matches the current level; a notice, not a failure."""

    def __init__(self) -> None:
        super().__init__("Nothing to call")


class LedgerError(DicePokerError):
    """Base class for failures reported by or on the way to the Ledger."""


class Rejected(LedgerError):
    """The Ledger refused a submitted action (wrong turn, bad amount, ...)."""

    def __init__(self, reason: str, action: str | None = None) -> None:
        self.reason = reason
        self.action = action
        super().__init__(reason)


class LedgerUnavailable(LedgerError):
    """Transport failure or timeout while talking to the Ledger."""


class EvaluatorPrecondition(DicePokerError, RuntimeError):
    """Winner evaluation was attempted before both hands were fully revealed."""
