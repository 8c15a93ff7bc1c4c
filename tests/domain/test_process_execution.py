"""Tests for the ProcessExecution state machine."""

from datetime import datetime, timedelta, timezone

import pytest

from bpm_core.domain.entities import ProcessExecution
from bpm_core.domain.enums import ExecutionStatus
from bpm_core.domain.exceptions import ValidationError


T0 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def make_execution(user_id=None) -> ProcessExecution:
    return ProcessExecution(process_id=1, step_id=1, user_id=user_id)


def test_new_execution_is_pending():
    execution = make_execution(user_id=7)

    assert execution.status == ExecutionStatus.PENDING
    assert execution.user_id == 7
    assert execution.started_at is None
    assert execution.completed_at is None
    assert execution.id is None
    assert execution.created_at.tzinfo is not None


@pytest.mark.parametrize("process_id, step_id", [(0, 1), (1, 0), (-3, 2), (None, 1)])
def test_requires_positive_ids(process_id, step_id):
    with pytest.raises(ValidationError):
        ProcessExecution(process_id=process_id, step_id=step_id)


def test_start_sets_started_at_once():
    execution = make_execution()
    execution.start(started_at=T0)
    execution.start(started_at=T0 + timedelta(hours=1))

    assert execution.status == ExecutionStatus.STARTED
    assert execution.started_at == T0


def test_start_replaces_user_when_given():
    execution = make_execution(user_id=1)
    execution.start()
    assert execution.user_id == 1

    execution.start(user_id=2)
    assert execution.user_id == 2


def test_complete_after_start():
    execution = make_execution()
    execution.start(started_at=T0)
    execution.complete("  done  ", completed_at=T0 + timedelta(minutes=5))

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.started_at == T0
    assert execution.completed_at == T0 + timedelta(minutes=5)
    assert execution.remarks == "done"
    assert execution.is_terminal


def test_complete_never_started_backfills_started_at():
    execution = make_execution()
    execution.complete(completed_at=T0)

    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.started_at == T0
    assert execution.completed_at == T0


def test_complete_before_start_is_rejected():
    execution = make_execution()
    execution.start(started_at=T0)

    with pytest.raises(ValidationError):
        execution.complete(completed_at=T0 - timedelta(seconds=1))
    assert execution.status == ExecutionStatus.STARTED
    assert execution.completed_at is None


def test_complete_cancelled_is_rejected():
    execution = make_execution()
    execution.cancel()

    with pytest.raises(ValidationError, match="cancelled"):
        execution.complete()


def test_complete_twice_is_rejected():
    execution = make_execution()
    execution.complete(completed_at=T0)

    with pytest.raises(ValidationError, match="already completed"):
        execution.complete(completed_at=T0 + timedelta(hours=1))
    assert execution.completed_at == T0


def test_cancel_uses_completed_at_slot():
    execution = make_execution()
    execution.start(started_at=T0)
    execution.cancel("no longer needed", cancelled_at=T0 + timedelta(minutes=1))

    assert execution.status == ExecutionStatus.CANCELLED
    assert execution.completed_at == T0 + timedelta(minutes=1)
    assert execution.remarks == "no longer needed"


def test_cancel_pending_keeps_started_at_empty():
    execution = make_execution()
    execution.cancel(cancelled_at=T0)

    assert execution.started_at is None
    assert execution.completed_at == T0


def test_cancel_before_start_time_is_rejected():
    execution = make_execution()
    execution.start(started_at=T0)

    with pytest.raises(ValidationError):
        execution.cancel(cancelled_at=T0 - timedelta(minutes=1))


def test_cancel_twice_is_rejected():
    execution = make_execution()
    execution.cancel()

    with pytest.raises(ValidationError):
        execution.cancel()


@pytest.mark.parametrize("terminal", ["complete", "cancel"])
def test_start_terminal_is_rejected(terminal):
    execution = make_execution()
    getattr(execution, terminal)()

    with pytest.raises(ValidationError):
        execution.start()


def test_completed_is_sticky():
    execution = make_execution()
    execution.start(started_at=T0)
    execution.complete(completed_at=T0 + timedelta(minutes=1))

    with pytest.raises(ValidationError):
        execution.start()
    with pytest.raises(ValidationError):
        execution.cancel()
    for status in (ExecutionStatus.PENDING, ExecutionStatus.STARTED, ExecutionStatus.CANCELLED):
        with pytest.raises(ValidationError):
            execution.set_status(status)

    execution.set_status(ExecutionStatus.COMPLETED)
    assert execution.status == ExecutionStatus.COMPLETED


def test_set_status_accepts_labels():
    execution = make_execution()
    execution.set_status("started")
    assert execution.status == ExecutionStatus.STARTED

    execution.set_status(3)
    assert execution.status == ExecutionStatus.CANCELLED


def test_set_times_validates_order():
    execution = make_execution()

    with pytest.raises(ValidationError):
        execution.set_times(T0, T0 - timedelta(seconds=1))

    execution.set_times(T0, T0)
    assert execution.started_at == T0
    assert execution.completed_at == T0

    execution.set_times(None, T0)
    assert execution.started_at is None


def test_transitions_touch_updated_at():
    execution = make_execution()
    assert execution.updated_at is None

    execution.start()
    first = execution.updated_at
    execution.complete()

    assert first is not None
    assert execution.updated_at > first


def test_reconstitute_restores_identity_and_state():
    execution = ProcessExecution.reconstitute(
        id=42,
        process_id=3,
        step_id=9,
        user_id=None,
        status="Completed",
        started_at=T0,
        completed_at=T0 + timedelta(hours=2),
        remarks="ok",
        created_at=T0 - timedelta(days=1),
    )

    assert execution.id == 42
    assert execution.status == ExecutionStatus.COMPLETED
    assert execution.created_at == T0 - timedelta(days=1)
    with pytest.raises(ValidationError):
        execution.cancel()


def test_reconstitute_rejects_inverted_times():
    with pytest.raises(ValidationError):
        ProcessExecution.reconstitute(
            id=1,
            process_id=1,
            step_id=1,
            user_id=None,
            status=ExecutionStatus.COMPLETED,
            started_at=T0,
            completed_at=T0 - timedelta(hours=1),
            remarks=None,
            created_at=T0,
        )
