"""
Dice Poker - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from src.engine.base import GamePhase, GameSession
from src.engine.snapshot import load_session

from helpers import ALICE, BOB, FakeLedger, ScriptedParticipant, raw_snapshot


@pytest.fixture
def make_raw() -> Callable[..., dict[str, Any]]:
    return raw_snapshot


@pytest.fixture
def make_session() -> Callable[..., GameSession]:
    """Build a GameSession through load_session, e.g. make_session(phase=GamePhase.TIE)."""
    def _make(**overrides: Any) -> GameSession:
        if isinstance(overrides.get("phase"), GamePhase):
            overrides["phase"] = int(overrides["phase"])
        return load_session(raw_snapshot(**overrides))
    return _make


@pytest.fixture
def seated() -> dict[str, Any]:
    """Overrides for a session with Alice in slot 0 and Bob in slot 1."""
    return {"players": [ALICE, BOB]}


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()

@pytest.fixture
def participant() -> ScriptedParticipant:
    return ScriptedParticipant()


@pytest.fixture
def make_participant() -> Callable[..., ScriptedParticipant]:
    return ScriptedParticipant
