"""
Dice Poker - Turn Resolver

Table-driven answer to "whose move is it" and "what may the viewer do".
This is the single place that knows which phases are betting, reveal or
idle phases.

All methods are stateless class methods.
"""

from typing import ClassVar

from src.engine.base import ActionKind, GamePhase, Turn


RESET_COOLDOWN_SECONDS = 5.0


class TurnResolver:
    """Stateless phase-to-turn and phase-to-action mapping."""

    _TURNS: ClassVar[dict[GamePhase, Turn]] = {
        GamePhase.JOINING: Turn.NONE,
        GamePhase.P1_BET_1: Turn.PLAYER0,
        GamePhase.P2_BET_OR_CALL_1: Turn.PLAYER1,
        GamePhase.P1_RAISE_OR_CALL_1: Turn.PLAYER0,
        GamePhase.P2_RAISE_OR_CALL_1: Turn.PLAYER1,
        GamePhase.P1_ROLL_FIRST: Turn.PLAYER0,
        GamePhase.P2_ROLL_FIRST: Turn.PLAYER1,
        GamePhase.P1_BET_2: Turn.PLAYER0,
        GamePhase.P2_BET_OR_CALL_2: Turn.PLAYER1,
        GamePhase.P1_RAISE_OR_CALL_2: Turn.PLAYER0,
        GamePhase.P2_RAISE_OR_CALL_2: Turn.PLAYER1,
        GamePhase.P1_ROLL_LAST: Turn.PLAYER0,
        GamePhase.P2_ROLL_LAST: Turn.PLAYER1,
        GamePhase.DETERMINE_WINNER: Turn.NONE,
        GamePhase.TIE: Turn.NONE,
        GamePhase.GAME_ENDED: Turn.NONE,
    }

    BETTING_PHASES: ClassVar[frozenset[GamePhase]] = frozenset({
        GamePhase.P1_BET_1,
        GamePhase.P2_BET_OR_CALL_1,
        GamePhase.P1_RAISE_OR_CALL_1,
        GamePhase.P2_RAISE_OR_CALL_1,
        GamePhase.P1_BET_2,
        GamePhase.P2_BET_OR_CALL_2,
        GamePhase.P1_RAISE_OR_CALL_2,
        GamePhase.P2_RAISE_OR_CALL_2,
    })
    FIRST_REVEAL_PHASES: ClassVar[frozenset[GamePhase]] = frozenset({
        GamePhase.P1_ROLL_FIRST,
        GamePhase.P2_ROLL_FIRST,
    })
    LAST_REVEAL_PHASES: ClassVar[frozenset[GamePhase]] = frozenset({
        GamePhase.P1_ROLL_LAST,
        GamePhase.P2_ROLL_LAST,
    })

    @classmethod
    def whose_turn(cls, phase: GamePhase) -> Turn:
        """Return the player the phase is waiting on, or Turn.NONE."""
        return cls._TURNS[phase]

    @classmethod
    def legal_action_kinds(
        cls,
        phase: GamePhase,
        viewer_is_current_turn: bool,
        *,
        viewer_has_slot: bool = False,
        open_slot: bool = False,
        seconds_since_terminal: float | None = None,
    ) -> frozenset[ActionKind]:
        """
        Compute the phase-gated actions available to a viewer.

        Args:
            phase: Current GamePhase
            viewer_is_current_turn: Whether the viewer holds the slot
                whose_turn(phase) points at
            viewer_has_slot: Whether the viewer already occupies a slot
            open_slot: Whether at least one slot is still empty
            seconds_since_terminal: Ledger-clock seconds since the session
                entered GameEnded, or None when unknown

        Returns:
            Set of legal ActionKinds (never SHOW_HANDS or EXIT, which the
            menu adds unconditionally)
        """
        kinds: set[ActionKind] = set()

        if phase is GamePhase.JOINING and not viewer_has_slot and open_slot:
            kinds.add(ActionKind.JOIN)

        if viewer_is_current_turn:
            if phase in cls.BETTING_PHASES:
                kinds.update((ActionKind.BET, ActionKind.CALL, ActionKind.FOLD))
            elif phase in cls.FIRST_REVEAL_PHASES:
                kinds.add(ActionKind.REVEAL_FIRST)
            elif phase in cls.LAST_REVEAL_PHASES:
                kinds.add(ActionKind.REVEAL_LAST)

        if (
            phase is GamePhase.GAME_ENDED
            and seconds_since_terminal is not None
            and seconds_since_terminal >= RESET_COOLDOWN_SECONDS
        ):
            kinds.add(ActionKind.RESET)

        return frozenset(kinds)
