"""
Dice Poker - Transaction Audit Log

Wraps any Ledger and appends one line per submitted action to a per-session
log file:

    2026-01-01T12:00:00+00:00 | bet | params={...} | confirmation={...} | timeMs=412

Failed submissions are recorded with ``error=...`` in place of the
confirmation, then re-raised unchanged.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from src.engine.errors import LedgerError
from src.ledger.base import Ledger, LedgerAction
from src.ledger.models import Confirmation, SessionSnapshot

logger = logging.getLogger(__name__)


class AuditedLedger:
    """Ledger decorator that records every submission with its duration."""

    def __init__(self, inner: Ledger, log_dir: str | Path) -> None:
        self._inner = inner
        self._log_dir = Path(log_dir)
        self._log_dir.mkdir(parents=True, exist_ok=True)

    def log_path(self, session_id: str) -> Path:
        return self._log_dir / f"{session_id}.log"

    def read_state(self, session_id: str) -> SessionSnapshot:
        return self._inner.read_state(session_id)

    def submit_action(
        self,
        session_id: str,
        actor: str,
        action: LedgerAction,
        amount: int | None = None,
    ) -> Confirmation:
        params = {"actor": actor, "amount": amount}
        start = time.monotonic()
        try:
            confirmation = self._inner.submit_action(session_id, actor, action, amount)
        except LedgerError as exc:
            self._append(session_id, action, params, f"error={json.dumps(str(exc))}", start)
            raise

        self._append(
            session_id,
            action,
            params,
            f"confirmation={confirmation.model_dump_json()}",
            start,
        )
        return confirmation

    def close(self) -> None:
        self._inner.close()

    def _append(
        self,
        session_id: str,
        action: LedgerAction,
        params: dict,
        result: str,
        start: float,
    ) -> None:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        entry = " | ".join([
            datetime.now(timezone.utc).isoformat(),
            action.value,
            f"params={json.dumps(params)}",
            result,
            f"timeMs={elapsed_ms}",
        ])
        try:
            with self.log_path(session_id).open("a", encoding="utf-8") as fh:
                fh.write(entry + "\n")
        except OSError:
            logger.exception("Could not write audit entry for session %s", session_id)
