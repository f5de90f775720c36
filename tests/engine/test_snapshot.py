"""Tests for src/engine/snapshot.py — raw Ledger rows to GameSession."""

from datetime import datetime, timezone

import pytest

from src.engine.base import GamePhase
from src.engine.errors import MalformedSnapshot
from src.engine.snapshot import load_session
from src.ledger.models import SessionSnapshot

from helpers import ALICE, BOB


class TestLoadSession:
    def test_fresh_session(self, make_raw):
        session = load_session(make_raw())
        assert session.phase is GamePhase.JOINING
        assert all(slot.is_empty for slot in session.players)
        assert session.has_open_slot

    def test_accepts_model(self, make_raw):
        session = load_session(SessionSnapshot.model_validate(make_raw(phase=5, players=[ALICE, BOB])))
        assert session.phase is GamePhase.P1_ROLL_FIRST
        assert session.players[1].address == BOB

    def test_full_row(self, make_raw):
        session = load_session(make_raw(
            phase=7,
            players=[ALICE, BOB],
            bets=[40, 100],
            has_rolled_first=[True, True],
            dice=[[1, 2, 3, 0, 0], [4, 5, 6, 0, 0]],
            current_bet_level=100,
        ))
        assert session.phase is GamePhase.P1_BET_2
        assert session.players[0].bet == 40
        assert session.players[0].has_rolled_first
        assert not session.players[0].has_rolled_last
        assert session.hands[1].first_tranche == (4, 5, 6)
        assert session.current_bet_level == 100

    def test_terminal_timestamp_parsed(self, make_raw):
        session = load_session(make_raw(phase=15, last_terminal_at="2026-01-01T12:00:00+00:00"))
        assert session.last_terminal_at == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)

    @pytest.mark.parametrize("phase", [-1, 16, 255])
    def test_phase_out_of_range(self, make_raw, phase):
        with pytest.raises(MalformedSnapshot, match="out of range"):
            load_session(make_raw(phase=phase))

    def test_revealed_face_out_of_range(self, make_raw):
        with pytest.raises(MalformedSnapshot):
            load_session(make_raw(
                phase=6,
                has_rolled_first=[True, False],
                dice=[[7, 1, 1, 0, 0], [0, 0, 0, 0, 0]],
            ))

    def test_revealed_zero_face_rejected(self, make_raw):
        with pytest.raises(MalformedSnapshot):
            load_session(make_raw(
                phase=12,
                has_rolled_first=[True, True],
                has_rolled_last=[True, False],
                dice=[[1, 1, 1, 0, 1], [1, 1, 1, 0, 0]],
            ))

    def test_hidden_face_above_six_rejected(self, make_raw):
        with pytest.raises(MalformedSnapshot):
            load_session(make_raw(dice=[[0, 0, 0, 0, 9], [0, 0, 0, 0, 0]]))

    def test_wrong_die_count(self, make_raw):
        with pytest.raises(MalformedSnapshot):
            load_session(make_raw(dice=[[1, 1, 1, 1], [1, 1, 1, 1, 1]]))

    def test_three_players(self, make_raw):
        with pytest.raises(MalformedSnapshot, match="players"):
            load_session(make_raw(players=[ALICE, BOB, ALICE]))

    def test_negative_bet(self, make_raw):
        with pytest.raises(MalformedSnapshot, match="negative"):
            load_session(make_raw(bets=[-1, 0]))

    def test_missing_field(self, make_raw):
        row = make_raw()
        del row["phase"]
        with pytest.raises(MalformedSnapshot, match="validation"):
            load_session(row)

    def test_malformed_is_value_error(self, make_raw):
        with pytest.raises(ValueError):
            load_session(make_raw(phase=42))
