"""Rack unit span arithmetic.

Units are 1-based and counted from the top of the rack. A span covers
``start .. start + height - 1`` inclusive.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from dcinventory.core.errors import ConflictError, FitError


@dataclass(frozen=True)
class RackSlotSpan:
    start: int
    height: int
    asset_id: uuid.UUID | None = None
    asset_name: str | None = None

    @property
    def end(self) -> int:
        return self.start + self.height - 1

    def units(self) -> range:
        return range(self.start, self.end + 1)


def spans_overlap(a: RackSlotSpan, b: RackSlotSpan) -> bool:
    return a.start <= b.end and a.end >= b.start


def check_fit(rack_height: int, candidate: RackSlotSpan) -> None:
    if candidate.height < 1:
        raise FitError(f"Asset height must be at least 1U, got {candidate.height}")
    if candidate.start < 1 or candidate.end > rack_height:
        raise FitError(
            "Asset doesn't fit at this position "
            f"(units {candidate.start}-{candidate.end} in a {rack_height}U rack)",
            start_unit=candidate.start,
            height_units=candidate.height,
            rack_height=rack_height,
        )


def find_conflict(
    candidate: RackSlotSpan, occupied: Iterable[RackSlotSpan]
) -> RackSlotSpan | None:
    """Return the first occupied span sharing a unit with *candidate*."""
    for span in occupied:
        if candidate.asset_id is not None and span.asset_id == candidate.asset_id:
            continue
        if spans_overlap(candidate, span):
            return span
    return None


def check_placement(
    rack_height: int, candidate: RackSlotSpan, occupied: Iterable[RackSlotSpan]
) -> None:
    """Raise FitError or ConflictError unless *candidate* can go in the rack."""
    check_fit(rack_height, candidate)
    conflict = find_conflict(candidate, occupied)
    if conflict is not None:
        raise ConflictError(
            f"Position conflicts with {conflict.asset_name or conflict.asset_id}",
            conflicting_asset_id=conflict.asset_id,
            conflicting_asset_name=conflict.asset_name,
        )


def free_units(rack_height: int, occupied: Iterable[RackSlotSpan]) -> list[int]:
    taken: set[int] = set()
    for span in occupied:
        taken.update(span.units())
    return [u for u in range(1, rack_height + 1) if u not in taken]
