"""
Dice Poker Session Driver.

Polling loop and snapshot-diff events for a live session.
"""

from src.realtime.events import EventPayload, GameEvent, classify_session_change
from src.realtime.orchestrator import GameOrchestrator, OrchestratorState, Participant

__all__ = [
    "EventPayload",
    "GameEvent",
    "GameOrchestrator",
    "OrchestratorState",
    "Participant",
    "classify_session_change",
]
