"""
Dice Poker - Action Menu Builder

Composes TurnResolver, the viewer's identity and a GameSession into the
ordered list of options shown to the participant. Entries always appear in
the same relative order so menu numbers stay stable across polls.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Sequence

from src.engine.base import ActionKind, GamePhase, GameSession, as_utc
from src.engine.errors import InvalidSelection, MalformedSnapshot
from src.engine.turns import TurnResolver


@dataclass(frozen=True)
class MenuOption:
    """One numbered entry of the participant menu."""
    kind: ActionKind
    label: str


class ActionMenuBuilder:
    """Stateless menu composition."""

    ORDER: ClassVar[tuple[ActionKind, ...]] = (
        ActionKind.JOIN,
        ActionKind.BET,
        ActionKind.CALL,
        ActionKind.FOLD,
        ActionKind.REVEAL_FIRST,
        ActionKind.REVEAL_LAST,
        ActionKind.RESET,
    )
    ALWAYS: ClassVar[tuple[ActionKind, ...]] = (
        ActionKind.SHOW_HANDS,
        ActionKind.EXIT,
    )
    LABELS: ClassVar[dict[ActionKind, str]] = {
        ActionKind.JOIN: "Join Game",
        ActionKind.BET: "Place/Raise Bet",
        ActionKind.CALL: "Call",
        ActionKind.FOLD: "Fold",
        ActionKind.REVEAL_FIRST: "Reveal 3 dice",
        ActionKind.REVEAL_LAST: "Reveal 2 dice & finish",
        ActionKind.RESET: "Reset Game",
        ActionKind.SHOW_HANDS: "Show Hands",
        ActionKind.EXIT: "Exit",
    }

    @classmethod
    def build(
        cls,
        session: GameSession,
        viewer_address: str,
        now: datetime,
    ) -> tuple[MenuOption, ...]:
        """
        Build the menu for one viewer.

        Args:
            session: Current GameSession
            viewer_address: Identifier of the local participant
            now: Current time, compared against session.last_terminal_at

        Returns:
            Phase-gated options in fixed order, then Show Hands and Exit
        """
        me = session.index_of(viewer_address)
        turn = TurnResolver.whose_turn(session.phase)
        viewer_is_current_turn = me is not None and me == turn.index

        seconds_since_terminal = None
        if session.phase is GamePhase.GAME_ENDED and session.last_terminal_at is not None:
            seconds_since_terminal = (
                as_utc(now) - as_utc(session.last_terminal_at)
            ).total_seconds()

        legal = TurnResolver.legal_action_kinds(
            session.phase,
            viewer_is_current_turn,
            viewer_has_slot=me is not None,
            open_slot=session.has_open_slot,
            seconds_since_terminal=seconds_since_terminal,
        )

        kinds = [kind for kind in cls.ORDER if kind in legal]
        kinds.extend(cls.ALWAYS)
        return tuple(MenuOption(kind=kind, label=cls.LABELS[kind]) for kind in kinds)


def amount_to_call(session: GameSession, viewer_index: int) -> int:
    """
    Amount the viewer must add to match the current bet level.

    Raises:
        MalformedSnapshot: If the viewer's bet already exceeds the level
    """
    to_call = session.current_bet_level - session.players[viewer_index].bet
    if to_call < 0:
        raise MalformedSnapshot(
            f"Player {viewer_index + 1} bet {session.players[viewer_index].bet} "
            f"exceeds current bet level {session.current_bet_level}."
        )
    return to_call


def select_option(menu: Sequence[MenuOption], choice: str) -> MenuOption:
    """
    Resolve a 1-based menu number typed by the participant.

    Raises:
        InvalidSelection: If the text is not a number in range
    """
    try:
        number = int(choice.strip())
    except ValueError:
        raise InvalidSelection(f"Invalid choice '{choice.strip()}'") from None
    if not 1 <= number <= len(menu):
        raise InvalidSelection(f"Invalid choice {number}, pick 1-{len(menu)}")
    return menu[number - 1]
