"""Tests for the concurrent session registry."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from rpsls.game_server.game.models import Choice
from rpsls.game_server.game.registry import SessionRegistry


def _started_session(registry, players, rounds=1):
    session_id = registry.create_session(rounds)
    for player in players:
        assert registry.join_session(session_id, player)
    assert registry.start_session(session_id)
    return session_id


def test_create_get_delete(registry):
    session_id = registry.create(2)

    assert session_id in registry
    handle = registry.get(session_id)
    assert handle is not None
    assert handle.snapshot()["state"] == "forming"
    assert handle.snapshot()["rounds"] == 2

    assert registry.delete(session_id) is True
    assert registry.get(session_id) is None
    assert registry.delete(session_id) is False


def test_create_rejects_zero_rounds(registry):
    with pytest.raises(ValueError):
        registry.create(0)
    assert len(registry) == 0


def test_unknown_session_operations_fail_quietly(registry):
    assert registry.join_session("missing", "alice") is False
    assert registry.start_session("missing") is False
    assert registry.submit_choice("missing", "alice", "r") is None
    assert registry.render_session("missing") is None
    assert registry.is_session_finished("missing") is True


def test_handle_is_inert_after_delete(registry):
    session_id = registry.create(1)
    handle = registry.get(session_id)
    registry.delete(session_id)

    assert handle.join("alice") is False
    assert handle.start() is False
    assert handle.submit("alice", "r") == (False, None)


def test_multi_round_session_removed_when_finished(registry):
    session_id = _started_session(registry, ["alice", "bob"], rounds=2)

    registry.submit_choice(session_id, "alice", "r")
    report = registry.submit_choice(session_id, "bob", "s")

    assert report is not None and report.round_number == 1
    snapshot = registry.get(session_id).snapshot()
    assert snapshot["completed_rounds"] == 1
    assert snapshot["committed"] == []
    assert snapshot["state"] == "choosing"
    assert registry.is_session_finished(session_id) is False

    registry.submit_choice(session_id, "alice", "v")
    final = registry.submit_choice(session_id, "bob", "s")

    assert final.finished is True
    assert final.round_number == 2
    assert session_id not in registry
    assert registry.is_session_finished(session_id) is True
    assert dict(final.leaderboard) == {"alice": 2, "bob": 0}


def test_late_submission_after_finish_is_rejected(registry):
    session_id = _started_session(registry, ["alice", "bob"])
    handle = registry.get(session_id)
    handle.submit_choice("alice", Choice.PAPER)
    handle.submit_choice("bob", Choice.ROCK)

    assert handle.submit("alice", Choice.LIZARD) == (False, None)
    assert handle.is_finished() is True


def test_round_hint_mismatch_rejected(registry):
    session_id = _started_session(registry, ["alice", "bob"], rounds=3)
    handle = registry.get(session_id)

    assert handle.submit("alice", "r", round_hint=2) == (False, None)
    assert handle.submit("alice", "r", round_hint=1) == (True, None)


def test_callbacks_fire_on_resolution_and_finish():
    resolved = Mock()
    finished = Mock()
    registry = SessionRegistry(on_round_resolved=resolved, on_session_finished=finished)
    session_id = _started_session(registry, ["alice", "bob"], rounds=2)

    registry.submit_choice(session_id, "alice", "r")
    first = registry.submit_choice(session_id, "bob", "r")

    resolved.assert_called_once_with(session_id, first)
    finished.assert_not_called()

    registry.submit_choice(session_id, "alice", "r")
    second = registry.submit_choice(session_id, "bob", "p")

    assert resolved.call_count == 2
    finished.assert_called_once_with(session_id, second)


def test_callback_failure_propagates_after_state_applied(registry):
    registry.configure_callbacks(on_round_resolved=Mock(side_effect=RuntimeError("boom")))
    session_id = _started_session(registry, ["alice", "bob"], rounds=2)
    registry.submit_choice(session_id, "alice", "r")

    with pytest.raises(RuntimeError, match="boom"):
        registry.submit_choice(session_id, "bob", "s")

    assert registry.get(session_id).snapshot()["completed_rounds"] == 1


def test_concurrent_creates_produce_distinct_ids(registry):
    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(lambda _: registry.create(1), range(200)))

    assert len(set(ids)) == 200
    assert len(registry) == 200


def test_concurrent_duplicate_joins_succeed_once(registry):
    session_id = registry.create(1)
    barrier = threading.Barrier(12)

    def join():
        barrier.wait()
        return registry.join_session(session_id, "alice")

    with ThreadPoolExecutor(max_workers=12) as pool:
        results = list(pool.map(lambda _: join(), range(12)))

    assert results.count(True) == 1
    assert registry.get(session_id).snapshot()["players"] == ["alice"]


def test_concurrent_submissions_resolve_round_once():
    resolved = Mock()
    registry = SessionRegistry(on_round_resolved=resolved)
    players = [f"p{i}" for i in range(16)]
    session_id = _started_session(registry, players, rounds=1)
    symbols = ["r", "p", "s", "l", "v"]
    barrier = threading.Barrier(len(players))

    def submit(index):
        barrier.wait()
        return registry.submit_choice(session_id, players[index], symbols[index % len(symbols)])

    with ThreadPoolExecutor(max_workers=len(players)) as pool:
        reports = list(pool.map(submit, range(len(players))))

    completed = [report for report in reports if report is not None]
    assert len(completed) == 1
    assert completed[0].finished is True
    assert resolved.call_count == 1
    assert session_id not in registry
