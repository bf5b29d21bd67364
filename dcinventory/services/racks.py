"""Rack placement and rack lifecycle.

Placing an asset locks the target rack row for the duration of the
transaction, so the conflict scan and the position write are serialized
against every other placement into the same rack. The scan also reads the
asset rows fresh, so a placement committed while this one waited is seen.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dcinventory.core.config import get_settings
from dcinventory.core.errors import ConflictError, FitError, InventoryError, NotFoundError
from dcinventory.core.logging import get_logger
from dcinventory.core.slots import RackSlotSpan, check_placement, free_units
from dcinventory.models.asset import Asset
from dcinventory.models.data_center import DataCenter
from dcinventory.models.rack import Rack
from dcinventory.services.audit import ChangeEntry, ChangeLogSink

logger = get_logger(__name__)


def asset_span(asset: Asset) -> RackSlotSpan:
    return RackSlotSpan(
        start=asset.rack_position,
        height=asset.height_units or 1,
        asset_id=asset.id,
        asset_name=asset.name,
    )


class RackService:
    def __init__(self, changes: ChangeLogSink) -> None:
        self.changes = changes

    async def get_rack(
        self, session: AsyncSession, rack_id: uuid.UUID, for_update: bool = False
    ) -> Rack:
        """Load a rack. With *for_update*, hold it locked until commit.

        The lock is taken with a write (bumping ``updated_at``) before the
        ``SELECT ... FOR UPDATE``. SQLite ignores ``FOR UPDATE`` and does not
        lock on reads, but the write claims its database write lock, so
        placements serialize there as well.
        """
        if for_update:
            await session.execute(
                update(Rack)
                .where(Rack.id == rack_id)
                .values(updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
        query = select(Rack).where(Rack.id == rack_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        rack = (await session.execute(query)).scalar_one_or_none()
        if rack is None:
            raise NotFoundError("Rack not found", rack_id=rack_id)
        return rack

    async def occupied_spans(
        self,
        session: AsyncSession,
        rack_id: uuid.UUID,
        exclude_asset_id: uuid.UUID | None = None,
    ) -> list[RackSlotSpan]:
        query = (
            select(Asset)
            .where(Asset.rack_id == rack_id, Asset.rack_position.is_not(None))
            .order_by(Asset.rack_position)
            .execution_options(populate_existing=True)
        )
        if exclude_asset_id is not None:
            query = query.where(Asset.id != exclude_asset_id)
        result = await session.execute(query)
        return [asset_span(a) for a in result.scalars().all()]

    async def _check_grid_slot(
        self,
        session: AsyncSession,
        data_center_id: uuid.UUID,
        row: str,
        column: str,
        exclude_rack_id: uuid.UUID | None = None,
    ) -> None:
        query = select(Rack.id).where(
            Rack.data_center_id == data_center_id,
            Rack.row_position == row,
            Rack.column_position == column,
        )
        if exclude_rack_id is not None:
            query = query.where(Rack.id != exclude_rack_id)
        if (await session.execute(query.limit(1))).scalar_one_or_none() is not None:
            raise ConflictError(
                f"A rack already exists at row {row}, column {column}",
                row_position=row,
                column_position=column,
            )

    async def _commit_grid_change(self, session: AsyncSession, row: str, column: str) -> None:
        try:
            await session.commit()
        except IntegrityError as exc:
            # Another rack took the grid slot between the check and the commit
            await session.rollback()
            raise ConflictError(
                f"A rack already exists at row {row}, column {column}",
                row_position=row,
                column_position=column,
            ) from exc

    # ── Rack lifecycle ────────────────────────────────────────────────────────

    async def create_rack(self, session: AsyncSession, data: dict[str, Any]) -> Rack:
        if await session.get(DataCenter, data["data_center_id"]) is None:
            raise NotFoundError("Data center not found", data_center_id=data["data_center_id"])
        await self._check_grid_slot(
            session, data["data_center_id"], data["row_position"], data["column_position"]
        )
        if not data.get("height_units"):
            data["height_units"] = get_settings().default_rack_height

        rack = Rack(**data)
        session.add(rack)
        await self._commit_grid_change(session, data["row_position"], data["column_position"])
        await session.refresh(rack)
        logger.info("Rack created", rack_id=str(rack.id), name=rack.name, height=rack.height_units)
        return rack

    async def update_rack(
        self, session: AsyncSession, rack_id: uuid.UUID, data: dict[str, Any]
    ) -> Rack:
        rack = await self.get_rack(session, rack_id, for_update=True)
        data = {k: v for k, v in data.items() if v is not None or k == "notes"}

        row = data.get("row_position", rack.row_position)
        column = data.get("column_position", rack.column_position)
        if (row, column) != (rack.row_position, rack.column_position):
            await self._check_grid_slot(
                session, rack.data_center_id, row, column, exclude_rack_id=rack.id
            )

        new_height = data.get("height_units")
        if new_height is not None and new_height < rack.height_units:
            spans = await self.occupied_spans(session, rack.id)
            tallest = max((s.end for s in spans), default=0)
            if tallest > new_height:
                await session.rollback()
                raise FitError(
                    f"Cannot shrink rack to {new_height}U: units up to {tallest} are occupied",
                    rack_height=new_height,
                )

        for field, value in data.items():
            setattr(rack, field, value)
        await self._commit_grid_change(session, row, column)
        await session.refresh(rack)
        return rack

    async def delete_rack(self, session: AsyncSession, rack_id: uuid.UUID) -> None:
        rack = await self.get_rack(session, rack_id, for_update=True)
        count = (
            await session.execute(
                select(func.count()).select_from(Asset).where(Asset.rack_id == rack_id)
            )
        ).scalar_one()
        if count:
            await session.rollback()
            raise ConflictError(
                "Cannot delete rack with assets. Please move or remove assets first.",
                assets=count,
            )
        await session.delete(rack)
        await session.commit()
        logger.info("Rack deleted", rack_id=str(rack_id))

    async def rack_layout(self, session: AsyncSession, rack_id: uuid.UUID) -> dict[str, Any]:
        rack = await self.get_rack(session, rack_id)
        spans = await self.occupied_spans(session, rack_id)
        free = free_units(rack.height_units, spans)
        return {
            "rack_id": rack.id,
            "height_units": rack.height_units,
            "used_units": rack.height_units - len(free),
            "spans": [
                {
                    "asset_id": s.asset_id,
                    "asset_name": s.asset_name,
                    "start_unit": s.start,
                    "end_unit": s.end,
                    "height_units": s.height,
                }
                for s in spans
            ],
            "free_units": free,
        }

    # ── Placement ─────────────────────────────────────────────────────────────

    async def place_asset(
        self,
        session: AsyncSession,
        asset_id: uuid.UUID,
        rack_id: uuid.UUID,
        start_unit: int,
    ) -> Asset:
        """Put an asset into a rack at *start_unit*.

        Raises:
            NotFoundError: unknown asset or rack.
            FitError: the span falls outside the rack.
            ConflictError: the span overlaps another asset in the rack; the
                error names that asset.
        """
        try:
            rack = await self.get_rack(session, rack_id, for_update=True)
            asset = (
                await session.execute(select(Asset).where(Asset.id == asset_id).with_for_update())
            ).scalar_one_or_none()
            if asset is None:
                raise NotFoundError("Asset not found", asset_id=asset_id)

            candidate = RackSlotSpan(
                start=start_unit,
                height=asset.height_units or 1,
                asset_id=asset.id,
                asset_name=asset.name,
            )
            occupied = await self.occupied_spans(session, rack.id, exclude_asset_id=asset.id)
            check_placement(rack.height_units, candidate, occupied)

            before = {"rack_id": asset.rack_id, "rack_position": asset.rack_position}
            asset.rack_id = rack.id
            asset.rack_position = start_unit
            await session.commit()
        except InventoryError:
            await session.rollback()
            raise

        await session.refresh(asset)
        logger.info(
            "Asset placed",
            asset_id=str(asset.id),
            rack_id=str(rack_id),
            start_unit=start_unit,
            end_unit=candidate.end,
        )
        await self.changes.record(
            ChangeEntry(
                table_name="assets",
                record_id=asset.id,
                action="UPDATE",
                before=before,
                after={"rack_id": rack_id, "rack_position": start_unit},
                description=f"{asset.name} moved to {rack.name} U{start_unit}-U{candidate.end}",
            )
        )
        return asset

    async def remove_asset_from_rack(self, session: AsyncSession, asset_id: uuid.UUID) -> Asset:
        """Clear an asset's rack placement. Other assets keep their positions."""
        asset = await session.get(Asset, asset_id)
        if asset is None:
            raise NotFoundError("Asset not found", asset_id=asset_id)
        if asset.rack_id is None:
            return asset

        before = {"rack_id": asset.rack_id, "rack_position": asset.rack_position}
        asset.rack_id = None
        asset.rack_position = None
        await session.commit()
        await session.refresh(asset)
        logger.info("Asset removed from rack", asset_id=str(asset_id), rack_id=str(before["rack_id"]))
        await self.changes.record(
            ChangeEntry(
                table_name="assets",
                record_id=asset.id,
                action="UPDATE",
                before=before,
                after={"rack_id": None, "rack_position": None},
                description=f"{asset.name} removed from rack",
            )
        )
        return asset

    async def check_resize(self, session: AsyncSession, asset: Asset, new_height: int) -> None:
        """Raise if a placed asset cannot grow to *new_height* where it stands."""
        if asset.rack_id is None or new_height == asset.height_units:
            return
        rack = await self.get_rack(session, asset.rack_id, for_update=True)
        candidate = RackSlotSpan(
            start=asset.rack_position, height=new_height, asset_id=asset.id, asset_name=asset.name
        )
        occupied = await self.occupied_spans(session, rack.id, exclude_asset_id=asset.id)
        check_placement(rack.height_units, candidate, occupied)

    async def available_assets(self, session: AsyncSession) -> list[Asset]:
        """Active assets that are not in any rack."""
        result = await session.execute(
            select(Asset)
            .where(Asset.rack_id.is_(None), Asset.status == "active")
            .order_by(Asset.name)
        )
        return list(result.scalars().all())
