"""
Dice Poker - Ledger Interface

The narrow read/write surface the client needs from whatever system holds
the authoritative game state. Implementations raise Rejected when the
Ledger refuses an action and LedgerUnavailable on transport failure.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from src.engine.base import ActionKind
from src.ledger.models import Confirmation, SessionSnapshot


class LedgerAction(str, Enum):
    """Transition names understood by the Ledger."""

    JOIN = "join"
    BET = "bet"
    CALL = "call"
    FOLD = "fold"
    REVEAL_FIRST = "reveal_first"
    REVEAL_LAST = "reveal_last"
    RESET = "reset"

    @classmethod
    def for_kind(cls, kind: ActionKind) -> LedgerAction:
        """Map a menu action to its Ledger transition."""
        try:
            return cls[kind.name]
        except KeyError:
            raise ValueError(f"{kind.name} is not a Ledger action.") from None


@runtime_checkable
class Ledger(Protocol):
    """Read/submit interface consumed by GameOrchestrator."""

    def read_state(self, session_id: str) -> SessionSnapshot:
        """Return the current raw snapshot of a session."""
        ...

    def submit_action(
        self,
        session_id: str,
        actor: str,
        action: LedgerAction,
        amount: int | None = None,
    ) -> Confirmation:
        """Submit one transition and block until the Ledger confirms it."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...
