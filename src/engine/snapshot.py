"""
Dice Poker - Snapshot Loader

Turns a raw Ledger read into an immutable GameSession. Pure: no I/O,
no retries.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from src.engine.base import (
    FIRST_TRANCHE,
    LAST_TRANCHE,
    DiceHand,
    GameSession,
    PlayerSlot,
)
from src.engine.errors import MalformedSnapshot
from src.engine.validators import (
    validate_amount,
    validate_dice_values,
    validate_phase_index,
)
from src.ledger.models import SessionSnapshot

_PAIRED_FIELDS = ("players", "bets", "has_rolled_first", "has_rolled_last", "dice")


def load_session(raw: SessionSnapshot | Mapping[str, Any]) -> GameSession:
    """
    Build a GameSession from a raw Ledger snapshot.

    Args:
        raw: A SessionSnapshot, or a mapping with the same keys

    Returns:
        The validated GameSession

    Raises:
        MalformedSnapshot: If the phase index is out of range, a revealed die
            is outside 1-6, an amount is negative or a per-player field does
            not have exactly two entries
    """
    if not isinstance(raw, SessionSnapshot):
        try:
            raw = SessionSnapshot.model_validate(raw)
        except ValidationError as exc:
            raise MalformedSnapshot(f"Snapshot failed validation: {exc}") from exc

    for name in _PAIRED_FIELDS:
        if len(getattr(raw, name)) != 2:
            raise MalformedSnapshot(f"Field '{name}' must have exactly 2 entries.")

    try:
        phase = validate_phase_index(raw.phase)
        current_bet_level = validate_amount(raw.current_bet_level)

        players = []
        hands = []
        for i in range(2):
            first = raw.has_rolled_first[i]
            last = raw.has_rolled_last[i]
            hidden = set()
            if not first:
                hidden.update(FIRST_TRANCHE)
            if not last:
                hidden.update(LAST_TRANCHE)

            faces = validate_dice_values(raw.dice[i], hidden_indices=hidden)
            players.append(PlayerSlot(
                address=raw.players[i],
                bet=validate_amount(raw.bets[i]),
                has_rolled_first=first,
                has_rolled_last=last,
            ))
            hands.append(DiceHand.from_sequence(faces))
    except ValueError as exc:
        raise MalformedSnapshot(str(exc)) from exc

    return GameSession(
        phase=phase,
        players=(players[0], players[1]),
        hands=(hands[0], hands[1]),
        current_bet_level=current_bet_level,
        last_terminal_at=raw.last_terminal_at,
    )
