"""
Dice Poker - Ledger Models

Pydantic models that mirror the Ledger's session row and its
confirmation payloads.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class SessionSnapshot(BaseModel):
    """Mirrors the `dice_poker_sessions` table: one raw read of a session."""

    session_id: str | None = None
    phase: int
    players: list[str]
    bets: list[int] = Field(default_factory=lambda: [0, 0])
    has_rolled_first: list[bool] = Field(default_factory=lambda: [False, False])
    has_rolled_last: list[bool] = Field(default_factory=lambda: [False, False])
    dice: list[list[int]] = Field(default_factory=lambda: [[0] * 5, [0] * 5])
    current_bet_level: int = 0
    last_terminal_at: datetime | None = None

    model_config = {"from_attributes": True}


class Confirmation(BaseModel):
    """What the Ledger returns once a submitted action has been applied."""

    session_id: str
    action: str
    actor: str
    amount: int | None = None
    reference: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    confirmed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"from_attributes": True}
