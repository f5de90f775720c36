"""
Dice Poker Ledger Layer.

Supabase-backed access to the authoritative session state, plus the
audit-log decorator for submitted actions.
"""

from src.ledger.client import get_supabase_client
from src.ledger.models import Confirmation, SessionSnapshot
from src.ledger.base import Ledger, LedgerAction
from src.ledger.supabase_ledger import SupabaseLedger
from src.ledger.audit import AuditedLedger

__all__ = [
    "get_supabase_client",
    "AuditedLedger",
    "Confirmation",
    "Ledger",
    "LedgerAction",
    "SessionSnapshot",
    "SupabaseLedger",
]
