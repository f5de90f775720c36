"""
Dice Poker - Shared Test Data

Addresses, raw Ledger rows and in-memory doubles used across test modules.
conftest.py wraps these in fixtures.
"""

from __future__ import annotations

import copy
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from src.engine.base import EMPTY_ADDRESS, ActionKind, GamePhase, GameSession
from src.engine.errors import Rejected
from src.engine.menu import MenuOption
from src.engine.showdown import Outcome
from src.ledger.base import LedgerAction
from src.ledger.models import Confirmation, SessionSnapshot


ALICE = "0xA11CE00000000000000000000000000000000001"
BOB = "0xB0B0000000000000000000000000000000000002"
CAROL = "0xCA401000000000000000000000000000000000003"

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# RAW SNAPSHOT / SESSION FACTORIES
# =============================================================================

def raw_snapshot(**overrides: Any) -> dict[str, Any]:
    """A Joining-phase row with both slots empty, updated with overrides."""
    row: dict[str, Any] = {
        "session_id": "main",
        "phase": 0,
        "players": [EMPTY_ADDRESS, EMPTY_ADDRESS],
        "bets": [0, 0],
        "has_rolled_first": [False, False],
        "has_rolled_last": [False, False],
        "dice": [[0, 0, 0, 0, 0], [0, 0, 0, 0, 0]],
        "current_bet_level": 0,
        "last_terminal_at": None,
    }
    row.update(overrides)
    return row


# =============================================================================
# FAKE LEDGER
# =============================================================================

_NEXT_BET_PHASE = {
    GamePhase.P1_BET_1: GamePhase.P2_BET_OR_CALL_1,
    GamePhase.P2_BET_OR_CALL_1: GamePhase.P1_RAISE_OR_CALL_1,
    GamePhase.P1_RAISE_OR_CALL_1: GamePhase.P2_RAISE_OR_CALL_1,
    GamePhase.P1_BET_2: GamePhase.P2_BET_OR_CALL_2,
    GamePhase.P2_BET_OR_CALL_2: GamePhase.P1_RAISE_OR_CALL_2,
    GamePhase.P1_RAISE_OR_CALL_2: GamePhase.P2_RAISE_OR_CALL_2,
}
_ROUND_ONE = {
    GamePhase.P1_BET_1, GamePhase.P2_BET_OR_CALL_1,
    GamePhase.P1_RAISE_OR_CALL_1, GamePhase.P2_RAISE_OR_CALL_1,
}
_ROUND_TWO = {
    GamePhase.P1_BET_2, GamePhase.P2_BET_OR_CALL_2,
    GamePhase.P1_RAISE_OR_CALL_2, GamePhase.P2_RAISE_OR_CALL_2,
}
_SEAT = {
    GamePhase.P1_BET_1: 0, GamePhase.P2_BET_OR_CALL_1: 1,
    GamePhase.P1_RAISE_OR_CALL_1: 0, GamePhase.P2_RAISE_OR_CALL_1: 1,
    GamePhase.P1_ROLL_FIRST: 0, GamePhase.P2_ROLL_FIRST: 1,
    GamePhase.P1_BET_2: 0, GamePhase.P2_BET_OR_CALL_2: 1,
    GamePhase.P1_RAISE_OR_CALL_2: 0, GamePhase.P2_RAISE_OR_CALL_2: 1,
    GamePhase.P1_ROLL_LAST: 0, GamePhase.P2_ROLL_LAST: 1,
}


class FakeLedger:
    """In-memory stand-in for the Ledger with just enough rules for the tests."""

    def __init__(self, hands: Sequence[Sequence[int]] = ((6, 5, 4, 4, 3), (5, 4, 4, 3, 3))) -> None:
        self.row = raw_snapshot()
        self.hands = [list(h) for h in hands]
        self.now = T0
        self.reads = 0
        self.submissions: list[tuple[str, str, LedgerAction, int | None]] = []
        self.read_failures: deque[Exception] = deque()
        self.submit_failures: deque[Exception] = deque()
        self.closed = False

    # -- Ledger interface --

    def read_state(self, session_id: str) -> SessionSnapshot:
        self.reads += 1
        if self.read_failures:
            raise self.read_failures.popleft()
        return SessionSnapshot.model_validate(copy.deepcopy(self.row))

    def submit_action(
        self, session_id: str, actor: str, action: LedgerAction, amount: int | None = None
    ) -> Confirmation:
        self.submissions.append((session_id, actor, action, amount))
        if self.submit_failures:
            raise self.submit_failures.popleft()
        getattr(self, f"_{action.value}")(actor, amount or 0)
        return Confirmation(
            session_id=session_id,
            action=action.value,
            actor=actor,
            amount=amount,
            reference=f"tx-{len(self.submissions)}",
        )

    def close(self) -> None:
        self.closed = True

    # -- Rules --

    @property
    def phase(self) -> GamePhase:
        return GamePhase(self.row["phase"])

    def _seat(self, actor: str) -> int:
        seat = _SEAT.get(self.phase)
        if seat is None or self.row["players"][seat].lower() != actor.lower():
            raise Rejected("Not your turn")
        return seat

    def _end(self) -> None:
        self.row["phase"] = int(GamePhase.GAME_ENDED)
        self.row["last_terminal_at"] = self.now.isoformat()

    def _join(self, actor: str, amount: int) -> None:
        players = self.row["players"]
        if self.phase is not GamePhase.JOINING or actor in players:
            raise Rejected("Cannot join")
        players[players.index(EMPTY_ADDRESS)] = actor
        if EMPTY_ADDRESS not in players:
            self.row["phase"] = int(GamePhase.P1_BET_1)

    def _bet(self, actor: str, amount: int) -> None:
        seat = self._seat(actor)
        if self.phase not in _NEXT_BET_PHASE or amount <= 0:
            raise Rejected("Cannot bet now")
        self.row["bets"][seat] += amount
        self.row["current_bet_level"] = max(self.row["current_bet_level"], self.row["bets"][seat])
        self.row["phase"] = int(_NEXT_BET_PHASE[self.phase])

    def _call(self, actor: str, amount: int) -> None:
        seat = self._seat(actor)
        if self.row["bets"][seat] + amount != self.row["current_bet_level"]:
            raise Rejected("Call amount does not match")
        self.row["bets"][seat] += amount
        if self.phase in _ROUND_ONE:
            self.row["phase"] = int(GamePhase.P1_ROLL_FIRST)
        elif self.phase in _ROUND_TWO:
            self.row["phase"] = int(GamePhase.P1_ROLL_LAST)
        else:
            raise Rejected("Cannot call now")

    def _fold(self, actor: str, amount: int) -> None:
        self._seat(actor)
        self._end()

    def _reveal_first(self, actor: str, amount: int) -> None:
        seat = self._seat(actor)
        self.row["has_rolled_first"][seat] = True
        self.row["dice"][seat][0:3] = self.hands[seat][0:3]
        self.row["phase"] = int(
            GamePhase.P2_ROLL_FIRST if seat == 0 else GamePhase.P1_BET_2
        )

    def _reveal_last(self, actor: str, amount: int) -> None:
        seat = self._seat(actor)
        self.row["has_rolled_last"][seat] = True
        self.row["dice"][seat][3:5] = self.hands[seat][3:5]
        if seat == 0:
            self.row["phase"] = int(GamePhase.P2_ROLL_LAST)
        else:
            self._end()

    def _reset(self, actor: str, amount: int) -> None:
        ended_at = datetime.fromisoformat(self.row["last_terminal_at"])
        if self.phase is not GamePhase.GAME_ENDED or self.now - ended_at < timedelta(seconds=5):
            raise Rejected("Reset not available yet")
        self.row = raw_snapshot()


# =============================================================================
# SCRIPTED PARTICIPANT
# =============================================================================

class ScriptedParticipant:
    """Answers menu prompts from a queue of ActionKinds or raw strings."""

    def __init__(self, choices: Sequence[ActionKind | str] = (), amounts: Sequence[str] = ()) -> None:
        self.choices: deque[ActionKind | str] = deque(choices)
        self.amounts: deque[str] = deque(amounts)
        self.sessions: list[tuple[GameSession, list[tuple[int | None, ...]], int | None]] = []
        self.menus: list[list[MenuOption]] = []
        self.messages: list[str] = []
        self.hands_shown: list[list[tuple[int | None, ...]]] = []
        self.outcomes: list[Outcome] = []

    def queue(self, *choices: ActionKind | str, amounts: Sequence[str] = ()) -> None:
        self.choices.extend(choices)
        self.amounts.extend(amounts)

    def show_session(self, session, views, viewer_index) -> None:
        self.sessions.append((session, [tuple(v) for v in views], viewer_index))

    def choose(self, menu) -> str:
        self.menus.append(list(menu))
        choice = self.choices.popleft()
        if isinstance(choice, str):
            return choice
        kinds = [option.kind for option in menu]
        if choice not in kinds:
            raise AssertionError(f"{choice.name} not offered; menu was {[k.name for k in kinds]}")
        return str(kinds.index(choice) + 1)

    def ask_amount(self, prompt: str) -> str:
        return self.amounts.popleft()

    def show_hands(self, views) -> None:
        self.hands_shown.append([tuple(v) for v in views])

    def show_outcome(self, session, outcome) -> None:
        self.outcomes.append(outcome)

    def notify(self, message: str) -> None:
        self.messages.append(message)
