"""
Dice Poker - Session Event Definitions

Event types and payloads derived by diffing two successive Ledger snapshots.
Payload data only ever contains masked dice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import GamePhase, GameSession
from src.engine.reveal import DiceRevealMasker, format_view


class GameEvent(Enum):
    """Events that can occur during a game."""

    PLAYER_JOINED = auto()
    BET_PLACED = auto()
    DICE_REVEALED = auto()
    PHASE_ADVANCED = auto()
    GAME_ENDED = auto()
    GAME_RESET = auto()
    GAME_DECIDED = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for session event data."""

    event: GameEvent
    session_id: str
    player_index: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


def _changed_player(previous: GameSession, current: GameSession, attr: str) -> int | None:
    for i in range(2):
        if getattr(previous.players[i], attr) != getattr(current.players[i], attr):
            return i
    return None


def _revealed_player(previous: GameSession, current: GameSession) -> int | None:
    for i in range(2):
        before, after = previous.players[i], current.players[i]
        if (before.has_rolled_first, before.has_rolled_last) != (
            after.has_rolled_first, after.has_rolled_last
        ):
            return i
    return None


def classify_session_change(
    previous: GameSession, current: GameSession
) -> tuple[GameEvent, int | None] | None:
    """Determine the game event, and the player it concerns, between two snapshots."""
    if current == previous:
        return None

    if current.phase is GamePhase.JOINING and previous.phase is not GamePhase.JOINING:
        return GameEvent.GAME_RESET, None

    joined = _changed_player(previous, current, "address")
    if joined is not None and not current.players[joined].is_empty:
        return GameEvent.PLAYER_JOINED, joined

    if current.phase is GamePhase.GAME_ENDED and previous.phase is not GamePhase.GAME_ENDED:
        return GameEvent.GAME_ENDED, None

    revealed = _revealed_player(previous, current)
    if revealed is not None:
        return GameEvent.DICE_REVEALED, revealed

    bettor = _changed_player(previous, current, "bet")
    if bettor is not None:
        return GameEvent.BET_PLACED, bettor

    if current.phase != previous.phase:
        return GameEvent.PHASE_ADVANCED, None

    return GameEvent.STATE_UPDATED, None


def session_event(
    session_id: str, previous: GameSession, current: GameSession
) -> EventPayload | None:
    """Build the EventPayload for a snapshot change, or None if nothing changed."""
    change = classify_session_change(previous, current)
    if change is None:
        return None

    event, player_index = change
    views = DiceRevealMasker.session_views(current)
    return EventPayload(
        event=event,
        session_id=session_id,
        player_index=player_index,
        data={
            "phase": current.phase.label,
            "previous_phase": previous.phase.label,
            "bets": [slot.bet for slot in current.players],
            "dice": [format_view(view) for view in views],
        },
    )
