"""
Dice Poker - Game Orchestrator

The polling loop that drives one participant through a session: read the
Ledger, rebuild the GameSession, present the menu, submit the chosen
action, wait for confirmation, repeat.

Nothing is ever applied locally. Every cycle starts from a fresh Ledger
read, and at most one Ledger request is outstanding at a time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Callable, Protocol, Sequence

from src.engine.base import ActionKind, GamePhase, GameSession
from src.engine.errors import (
    InvalidSelection,
    LedgerError,
    MalformedSnapshot,
    NothingToCall,
)
from src.engine.menu import ActionMenuBuilder, MenuOption, amount_to_call, select_option
from src.engine.reveal import DiceRevealMasker
from src.engine.showdown import Outcome, WinnerEvaluator
from src.engine.snapshot import load_session
from src.engine.validators import format_amount, parse_amount, validate_amount
from src.ledger.base import Ledger, LedgerAction
from src.realtime.events import EventPayload, GameEvent, session_event

logger = logging.getLogger(__name__)

MaskedViews = Sequence[Sequence[int | None]]


class OrchestratorState(Enum):
    """States of the driving loop itself (not of the game)."""

    IDLE = auto()
    AWAITING_LEDGER_SNAPSHOT = auto()
    AWAITING_PARTICIPANT_CHOICE = auto()
    SUBMITTING_ACTION = auto()
    AWAITING_CONFIRMATION = auto()
    TERMINATED = auto()


class Participant(Protocol):
    """The local player's side of the loop: display and input."""

    def show_session(
        self, session: GameSession, views: MaskedViews, viewer_index: int | None
    ) -> None: ...

    def choose(self, menu: Sequence[MenuOption]) -> str: ...

    def ask_amount(self, prompt: str) -> str: ...

    def show_hands(self, views: MaskedViews) -> None: ...

    def show_outcome(self, session: GameSession, outcome: Outcome) -> None: ...

    def notify(self, message: str) -> None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GameOrchestrator:
    """Runs one participant's session against a Ledger.

    Each instance owns its own snapshot; separate sessions never share
    mutable state.
    """

    def __init__(
        self,
        ledger: Ledger,
        session_id: str,
        viewer: str,
        participant: Participant,
        *,
        amount_decimals: int = 18,
        currency_symbol: str = "ETH",
        clock: Callable[[], datetime] = _utc_now,
        on_event: Callable[[EventPayload], None] | None = None,
    ) -> None:
        self.ledger = ledger
        self.session_id = session_id
        self.viewer = viewer
        self.participant = participant
        self.amount_decimals = amount_decimals
        self.currency_symbol = currency_symbol
        self._clock = clock
        self._on_event = on_event
        self._last_session: GameSession | None = None
        self.last_outcome: Outcome | None = None
        self.state = OrchestratorState.IDLE

    # -- Loop ------------------------------------------------------------

    def run(self) -> None:
        """Cycle until the participant picks Exit."""
        logger.info("Starting session %s as %s", self.session_id, self.viewer)
        try:
            while self.state is not OrchestratorState.TERMINATED:
                self.step()
        finally:
            self.close()

    def step(self) -> OrchestratorState:
        """Run one read / choose / submit cycle and return the resulting state."""
        self.state = OrchestratorState.AWAITING_LEDGER_SNAPSHOT
        session = self._read_session()
        if session is None:
            self.state = OrchestratorState.IDLE
            return self.state

        views = DiceRevealMasker.session_views(session)
        self.participant.show_session(session, views, session.index_of(self.viewer))

        self.state = OrchestratorState.AWAITING_PARTICIPANT_CHOICE
        menu = ActionMenuBuilder.build(session, self.viewer, self._clock())
        option = self._choose(menu)

        if option.kind is ActionKind.EXIT:
            self.participant.notify("Exiting")
            self.state = OrchestratorState.TERMINATED
            return self.state

        if option.kind.submits:
            self._submit(session, option.kind)
        else:
            self.participant.show_hands(views)

        self.state = OrchestratorState.AWAITING_LEDGER_SNAPSHOT
        return self.state

    def close(self) -> None:
        """Release the Ledger and end the session."""
        if self.state is not OrchestratorState.TERMINATED:
            self.state = OrchestratorState.TERMINATED
        self.ledger.close()
        logger.info("Session %s closed", self.session_id)

    # -- Steps -----------------------------------------------------------

    def _read_session(self) -> GameSession | None:
        """Fetch and load one snapshot; failures are reported once and yield None."""
        try:
            session = load_session(self.ledger.read_state(self.session_id))
        except LedgerError as exc:
            logger.warning("Ledger read failed for session %s: %s", self.session_id, exc)
            self.participant.notify(f"Ledger error: {exc}")
            return None
        except MalformedSnapshot as exc:
            logger.error("Malformed snapshot for session %s: %s", self.session_id, exc)
            self.participant.notify(f"Malformed snapshot: {exc}")
            return None

        self._track(session)
        return session

    def _choose(self, menu: Sequence[MenuOption]) -> MenuOption:
        """Prompt until the participant picks a valid entry. Never touches the Ledger."""
        while True:
            try:
                return select_option(menu, self.participant.choose(menu))
            except InvalidSelection as exc:
                self.participant.notify(str(exc))

    def _submit(self, session: GameSession, kind: ActionKind) -> None:
        me = session.index_of(self.viewer)
        try:
            amount = self._amount_for(session, kind, me)
        except NothingToCall as exc:
            self.participant.notify(str(exc))
            return
        except (InvalidSelection, MalformedSnapshot) as exc:
            self.participant.notify(str(exc))
            return

        action = LedgerAction.for_kind(kind)
        self.state = OrchestratorState.SUBMITTING_ACTION
        logger.info(
            "Submitting %s for session %s (amount=%s)", action.value, self.session_id, amount
        )

        self.state = OrchestratorState.AWAITING_CONFIRMATION
        try:
            confirmation = self.ledger.submit_action(self.session_id, self.viewer, action, amount)
        except LedgerError as exc:
            logger.warning("%s failed for session %s: %s", action.value, self.session_id, exc)
            self.participant.notify(str(exc))
            return

        logger.debug("Confirmed %s: %s", action.value, confirmation.reference)
        self.participant.notify(self._confirmation_message(kind, amount))

        if kind is ActionKind.REVEAL_LAST and session.phase is GamePhase.P2_ROLL_LAST:
            self._report_showdown()

    def _amount_for(
        self, session: GameSession, kind: ActionKind, me: int | None
    ) -> int | None:
        """Amount to attach to a submission, in base units."""
        if kind is ActionKind.CALL:
            if me is None:
                raise InvalidSelection("You are not seated in this game")
            to_call = amount_to_call(session, me)
            if to_call == 0:
                raise NothingToCall()
            return to_call

        if kind is ActionKind.BET:
            text = self.participant.ask_amount(f"Amount ({self.currency_symbol}): ")
            amount = self._parse(text)
            try:
                return validate_amount(amount, allow_zero=False)
            except ValueError as exc:
                raise InvalidSelection(str(exc)) from exc

        if kind is ActionKind.JOIN:
            text = self.participant.ask_amount(
                f"Stake to join ({self.currency_symbol}, blank for none): "
            )
            if not text.strip():
                return None
            return self._parse(text)

        return None

    def _parse(self, text: str) -> int:
        try:
            return parse_amount(text, self.amount_decimals)
        except ValueError as exc:
            raise InvalidSelection(str(exc)) from exc

    def _report_showdown(self) -> None:
        """Re-read the final hands and report the winner."""
        try:
            session = load_session(self.ledger.read_state(self.session_id))
        except (LedgerError, MalformedSnapshot) as exc:
            self.participant.notify(f"Could not read final hands: {exc}")
            return

        outcome = WinnerEvaluator.evaluate_session(session)
        self.last_outcome = outcome
        logger.info("Session %s decided: %s", self.session_id, outcome)
        self.participant.show_outcome(session, outcome)
        self._track(session)
        self._dispatch(EventPayload(
            event=GameEvent.GAME_DECIDED,
            session_id=self.session_id,
            player_index=outcome.winner,
            data={"sums": list(outcome.sums), "phase": session.phase.label},
        ))

    # -- Events ----------------------------------------------------------

    def _track(self, session: GameSession) -> None:
        """Diff against the previous snapshot and emit an event for the change."""
        previous = self._last_session
        self._last_session = session
        if previous is None:
            return
        payload = session_event(self.session_id, previous, session)
        if payload is not None:
            self._dispatch(payload)

    def _dispatch(self, payload: EventPayload) -> None:
        logger.info(
            "%s in session %s (player=%s) %s",
            payload.event.name, payload.session_id, payload.player_index, payload.data,
        )
        if self._on_event is None:
            return
        try:
            self._on_event(payload)
        except Exception:
            logger.exception("Error in event callback for %s", payload.event.name)

    def _confirmation_message(self, kind: ActionKind, amount: int | None) -> str:
        shown = (
            f"{format_amount(amount, self.amount_decimals)} {self.currency_symbol}"
            if amount is not None else ""
        )
        messages = {
            ActionKind.JOIN: f"Joined game {shown}".rstrip(),
            ActionKind.BET: f"Bet {shown}",
            ActionKind.CALL: f"Called {shown}",
            ActionKind.FOLD: "You folded",
            ActionKind.REVEAL_FIRST: "Dice revealed",
            ActionKind.REVEAL_LAST: "Dice revealed",
            ActionKind.RESET: "Game reset. Back to Joining.",
        }
        return messages[kind]
