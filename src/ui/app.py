"""Dice Poker — Command-line Entrypoint.

Usage:
    dice-poker --address 0xAbC...             # play the default session
    dice-poker --address 0xAbC... --session 7  # play a specific session
    dice-poker --address 0xAbC... --no-audit   # skip the transaction log
"""

from __future__ import annotations

import argparse
import sys

from src.config.settings import Settings, configure_logging, get_settings
from src.ledger.audit import AuditedLedger
from src.ledger.base import Ledger
from src.ledger.client import get_supabase_client
from src.ledger.supabase_ledger import SupabaseLedger
from src.realtime.orchestrator import GameOrchestrator
from src.ui.console import ConsoleParticipant

_BANNER = """\
Dice Poker
Win by highest total of your 5 dice; a tie splits the pot.
Two rounds of betting, reveal 3 dice, two more rounds, reveal the last 2.
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Play Dice Poker against a Ledger-hosted session",
    )
    parser.add_argument(
        "--address",
        required=True,
        help="Your participant address on the Ledger",
    )
    parser.add_argument(
        "--session",
        default=None,
        help="Session id to play (default: DEFAULT_SESSION_ID setting)",
    )
    parser.add_argument(
        "--no-audit",
        action="store_true",
        help="Do not write submitted actions to the audit log",
    )
    return parser.parse_args(argv)


def build_ledger(settings: Settings, *, audit: bool = True) -> Ledger:
    """Create the Supabase-backed Ledger, wrapped in the audit log if enabled."""
    ledger: Ledger = SupabaseLedger(
        get_supabase_client(),
        table=settings.session_table,
        rpc_prefix=settings.rpc_prefix,
    )
    if audit and settings.audit_log_dir is not None:
        ledger = AuditedLedger(ledger, settings.audit_log_dir)
    return ledger


def main(argv: list[str] | None = None) -> int:
    """Run one interactive session; returns the process exit code."""
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    session_id = args.session or settings.default_session_id
    orchestrator = GameOrchestrator(
        build_ledger(settings, audit=not args.no_audit),
        session_id,
        args.address,
        ConsoleParticipant(
            amount_decimals=settings.amount_decimals,
            currency_symbol=settings.currency_symbol,
        ),
        amount_decimals=settings.amount_decimals,
        currency_symbol=settings.currency_symbol,
    )

    print(_BANNER)
    try:
        orchestrator.run()
    except (KeyboardInterrupt, EOFError):
        print("\nExiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
