"""Tests for ExecutionStatus ordinals and labels."""

import pytest

from bpm_core.domain.enums import ExecutionStatus
from bpm_core.domain.exceptions import ValidationError


def test_ordinals_are_stable():
    assert [int(s) for s in ExecutionStatus] == [0, 1, 2, 3]
    assert ExecutionStatus.PENDING == 0
    assert ExecutionStatus.STARTED == 1
    assert ExecutionStatus.COMPLETED == 2
    assert ExecutionStatus.CANCELLED == 3


def test_canonical_labels():
    assert [s.label for s in ExecutionStatus] == ["Pending", "Started", "Completed", "Cancelled"]


@pytest.mark.parametrize("status", list(ExecutionStatus))
def test_label_round_trip(status):
    assert int(ExecutionStatus.parse(status.label)) == int(status)
    assert ExecutionStatus.parse(status.label.upper()) is status
    assert ExecutionStatus.parse(f"  {status.label.lower()} ") is status


@pytest.mark.parametrize("value, expected", [
    (0, ExecutionStatus.PENDING),
    ("2", ExecutionStatus.COMPLETED),
    (ExecutionStatus.CANCELLED, ExecutionStatus.CANCELLED),
])
def test_parse_ordinals(value, expected):
    assert ExecutionStatus.parse(value) is expected


@pytest.mark.parametrize("value", ["Pendente", "done", "", 4, -1, True, None, 1.0])
def test_parse_rejects_unknown(value):
    with pytest.raises(ValidationError):
        ExecutionStatus.parse(value)


def test_terminal_states():
    assert {s for s in ExecutionStatus if s.is_terminal} == {
        ExecutionStatus.COMPLETED,
        ExecutionStatus.CANCELLED,
    }
