"""
Dice Poker - Supabase Ledger

Reads sessions from the `dice_poker_sessions` table and executes
transitions through Postgres RPC functions (`dice_poker_join`,
`dice_poker_bet`, ...). The database functions enforce the game rules; this
adapter only moves data and translates failures.
"""

from __future__ import annotations

import logging

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from src.engine.errors import LedgerUnavailable, MalformedSnapshot, Rejected
from src.ledger.base import LedgerAction
from src.ledger.models import Confirmation, SessionSnapshot

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (httpx.TransportError, ConnectionError, OSError)


class SupabaseLedger:
    """Ledger backed by a Supabase project."""

    def __init__(
        self,
        client: Client,
        *,
        table: str = "dice_poker_sessions",
        rpc_prefix: str = "dice_poker_",
    ) -> None:
        self.client = client
        self.table_name = table
        self.rpc_prefix = rpc_prefix

    def read_state(self, session_id: str) -> SessionSnapshot:
        """Get the current row for a session."""
        try:
            data = (
                self.client.table(self.table_name)
                .select("*")
                .eq("session_id", session_id)
                .execute()
            )
        except APIError as exc:
            raise Rejected(_api_message(exc)) from exc
        except _TRANSPORT_ERRORS as exc:
            raise LedgerUnavailable(f"Could not read session {session_id}: {exc}") from exc

        if not data.data:
            raise Rejected(f"Session {session_id} does not exist")
        try:
            return SessionSnapshot.model_validate(data.data[0])
        except ValidationError as exc:
            raise MalformedSnapshot(f"Session {session_id} row failed validation: {exc}") from exc

    def submit_action(
        self,
        session_id: str,
        actor: str,
        action: LedgerAction,
        amount: int | None = None,
    ) -> Confirmation:
        """Run the transition's RPC function and return its confirmation."""
        params = {
            "p_session_id": session_id,
            "p_actor": actor,
            "p_amount": amount,
        }
        function = f"{self.rpc_prefix}{action.value}"
        logger.debug("Submitting %s for session %s", function, session_id)

        try:
            data = self.client.rpc(function, params).execute()
        except APIError as exc:
            raise Rejected(_api_message(exc), action=action.value) from exc
        except _TRANSPORT_ERRORS as exc:
            raise LedgerUnavailable(f"{action.value} not confirmed: {exc}") from exc

        payload = data.data if isinstance(data.data, dict) else {"result": data.data}
        return Confirmation(
            session_id=session_id,
            action=action.value,
            actor=actor,
            amount=amount,
            reference=payload.get("reference"),
            payload=payload,
        )

    def close(self) -> None:
        """The Supabase client is a shared singleton; nothing to release here."""
        logger.debug("Supabase ledger for table %s closed", self.table_name)


def _api_message(exc: APIError) -> str:
    return getattr(exc, "message", None) or str(exc)
