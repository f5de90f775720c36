"""
Dice Poker - Dice Reveal Masker

Produces the player-visible view of a hand. A face in an unrevealed tranche
is always None, whatever the Ledger stored, so client output never carries
information about an opponent's hidden dice.
"""

from typing import Sequence

from src.engine.base import FIRST_TRANCHE, DiceHand, GameSession

UNKNOWN_FACE = "?"


class DiceRevealMasker:
    """Stateless masking of hidden dice."""

    @classmethod
    def view(
        cls,
        hand: DiceHand,
        revealed_first: bool,
        revealed_last: bool,
    ) -> tuple[int | None, ...]:
        """Return five optional faces; hidden tranches become None."""
        return tuple(
            face if (revealed_first if i in FIRST_TRANCHE else revealed_last) else None
            for i, face in enumerate(hand.faces)
        )

    @classmethod
    def session_views(cls, session: GameSession) -> tuple[tuple[int | None, ...], ...]:
        """Masked views of both hands, indexed like session.players."""
        return tuple(
            cls.view(hand, slot.has_rolled_first, slot.has_rolled_last)
            for slot, hand in zip(session.players, session.hands)
        )


def format_view(view: Sequence[int | None]) -> str:
    """Render a masked view, e.g. ``[4, 2, 6, ?, ?]``."""
    return "[" + ", ".join(UNKNOWN_FACE if face is None else str(face) for face in view) + "]"
