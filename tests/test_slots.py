"""Tests for rack unit span arithmetic."""

import uuid

import pytest

from dcinventory.core.errors import ConflictError, FitError
from dcinventory.core.slots import (
    RackSlotSpan,
    check_placement,
    find_conflict,
    free_units,
    spans_overlap,
)

X = uuid.uuid4()
Y = uuid.uuid4()


def test_span_end():
    assert RackSlotSpan(start=3, height=2).end == 4
    assert RackSlotSpan(start=1, height=1).end == 1


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ((1, 2), (2, 2), True),   # shares unit 2
        ((1, 2), (3, 2), False),  # adjacent
        ((1, 4), (2, 1), True),   # contains
        ((2, 1), (1, 4), True),   # contained
        ((5, 1), (1, 4), False),
    ],
)
def test_spans_overlap(a, b, expected):
    sa, sb = RackSlotSpan(*a), RackSlotSpan(*b)
    assert spans_overlap(sa, sb) is expected
    assert spans_overlap(sb, sa) is expected


def test_rack_of_four_example():
    occupied = [RackSlotSpan(start=1, height=2, asset_id=X, asset_name="X")]

    with pytest.raises(ConflictError, match="X") as exc:
        check_placement(4, RackSlotSpan(start=2, height=2, asset_id=Y), occupied)
    assert exc.value.context["conflicting_asset_id"] == X

    check_placement(4, RackSlotSpan(start=3, height=2, asset_id=Y), occupied)


@pytest.mark.parametrize("start", [0, -1, 4])
def test_out_of_rack_is_fit_error(start):
    with pytest.raises(FitError):
        check_placement(4, RackSlotSpan(start=start, height=2), [])


def test_fit_checked_before_conflict():
    occupied = [RackSlotSpan(start=1, height=4, asset_id=X, asset_name="X")]
    with pytest.raises(FitError):
        check_placement(4, RackSlotSpan(start=4, height=2, asset_id=Y), occupied)


def test_own_span_is_ignored():
    occupied = [RackSlotSpan(start=1, height=2, asset_id=X, asset_name="X")]
    assert find_conflict(RackSlotSpan(start=2, height=2, asset_id=X), occupied) is None


def test_free_units():
    occupied = [RackSlotSpan(start=1, height=2), RackSlotSpan(start=5, height=1)]
    assert free_units(6, occupied) == [3, 4, 6]
