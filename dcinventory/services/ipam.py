"""IP address management: pool seeding and the allocation ledger.

Every ledger transition is a compare-and-set UPDATE guarded by the status
the caller observed. Two callers racing for the same address both read
``available``, but only one UPDATE matches; the other sees zero rows and
gets a ConflictError.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from itertools import islice
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dcinventory.core.addressing import (
    ADDRESS_STATUSES,
    STATUS_ASSIGNED,
    STATUS_AVAILABLE,
    STATUS_BLOCKED,
    STATUS_RESERVED,
    contains,
    generate_address_space,
    ip_to_int,
    usable_host_count,
)
from dcinventory.core.errors import (
    ConfigError,
    ConflictError,
    NotFoundError,
    PoolSeedError,
    ValidationError,
)
from dcinventory.core.logging import get_logger
from dcinventory.models.asset import Asset
from dcinventory.models.ip_pool import IpAddress, IpPool
from dcinventory.services.audit import ChangeEntry, ChangeLogSink

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 100

_RELEASABLE = (STATUS_ASSIGNED, STATUS_RESERVED)
_BULK_STATUSES = (STATUS_AVAILABLE, STATUS_RESERVED, STATUS_BLOCKED)


def _chunks(items: Iterable[dict[str, Any]], size: int) -> Iterator[list[dict[str, Any]]]:
    it = iter(items)
    while batch := list(islice(it, size)):
        yield batch


def _validate_vlan(vlan_id: int | None) -> None:
    if vlan_id is not None and not 1 <= vlan_id <= 4094:
        raise ConfigError(f"VLAN id must be between 1 and 4094, got {vlan_id}", vlan_id=vlan_id)


def _validate_dns(dns_servers: list[str] | None) -> list[str] | None:
    if not dns_servers:
        return None
    cleaned = [s.strip() for s in dns_servers if s and s.strip()]
    for server in cleaned:
        ip_to_int(server)
    return cleaned or None


def _snapshot(record: IpAddress) -> dict[str, Any]:
    return {
        "status": record.status,
        "asset_id": record.asset_id,
        "hostname": record.hostname,
        "notes": record.notes,
    }


class IpamService:
    """Pool lifecycle and address ledger operations.

    Methods commit their own transaction so that audit entries are only
    written for changes that are durable.
    """

    def __init__(self, changes: ChangeLogSink, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.changes = changes
        self.batch_size = batch_size

    # ── Pools ─────────────────────────────────────────────────────────────────

    async def create_pool(
        self,
        session: AsyncSession,
        *,
        name: str,
        network_address: str,
        prefix_length: int,
        gateway: str | None = None,
        vlan_id: int | None = None,
        dns_servers: list[str] | None = None,
        description: str | None = None,
    ) -> IpPool:
        """Create a pool and seed one address record per usable host.

        Either the pool and its complete address space are committed, or
        nothing is.

        Raises:
            ConfigError: invalid network, prefix, gateway, VLAN or DNS server.
            ConflictError: a pool with this name already exists.
            PoolSeedError: the address records could not be written.
        """
        network_address = network_address.strip()
        gateway = gateway.strip() if gateway else None
        # Validates network, prefix and gateway before touching the database
        addresses = generate_address_space(network_address, prefix_length, gateway)
        _validate_vlan(vlan_id)
        dns = _validate_dns(dns_servers)
        if gateway and not contains(network_address, prefix_length, gateway):
            logger.warning(
                "Gateway outside pool range, nothing reserved",
                pool=name,
                gateway=gateway,
                cidr=f"{network_address}/{prefix_length}",
            )

        await self._ensure_name_free(session, name)

        pool = IpPool(
            name=name,
            network_address=network_address,
            prefix_length=prefix_length,
            gateway=gateway,
            vlan_id=vlan_id,
            dns_servers=dns,
            description=description,
        )
        session.add(pool)
        try:
            await session.flush()
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError(f"IP pool {name!r} already exists") from exc

        expected = usable_host_count(prefix_length)
        written = 0
        rows = (
            {
                "pool_id": pool.id,
                "ip_address": address,
                "ip_int": ip_to_int(address),
                "status": status,
            }
            for address, status in addresses
        )
        try:
            for batch in _chunks(rows, self.batch_size):
                await session.execute(insert(IpAddress), batch)
                written += len(batch)
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.error(
                "Address seeding failed, pool rolled back",
                pool=name,
                written=written,
                expected=expected,
                error=str(exc),
            )
            raise PoolSeedError(
                f"Failed to seed addresses for pool {name!r} "
                f"({written}/{expected} written before failure); nothing was created",
                written=written,
                expected=expected,
            ) from exc

        logger.info(
            "IP pool created",
            pool_id=str(pool.id),
            pool=name,
            cidr=pool.cidr,
            addresses=written,
        )
        await self.changes.record(
            ChangeEntry(
                table_name="ip_pools",
                record_id=pool.id,
                action="INSERT",
                after={"name": name, "cidr": pool.cidr, "gateway": gateway, "addresses": written},
                description=f"IP pool {name} created ({pool.cidr}, {written} addresses)",
            )
        )
        return pool

    async def _ensure_name_free(self, session: AsyncSession, name: str) -> None:
        existing = await session.execute(select(IpPool.id).where(IpPool.name == name))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(f"IP pool {name!r} already exists")

    async def get_pool(self, session: AsyncSession, pool_id: uuid.UUID) -> IpPool:
        pool = await session.get(IpPool, pool_id)
        if pool is None:
            raise NotFoundError("IP pool not found", pool_id=pool_id)
        return pool

    async def update_pool(
        self, session: AsyncSession, pool_id: uuid.UUID, data: dict[str, Any]
    ) -> IpPool:
        """Edit pool metadata. Network address and prefix length are immutable."""
        pool = await self.get_pool(session, pool_id)

        if "gateway" in data and data["gateway"]:
            data["gateway"] = data["gateway"].strip()
            ip_to_int(data["gateway"])
        if "vlan_id" in data:
            _validate_vlan(data["vlan_id"])
        if "dns_servers" in data:
            data["dns_servers"] = _validate_dns(data["dns_servers"])
        if data.get("name") and data["name"] != pool.name:
            await self._ensure_name_free(session, data["name"])

        if "name" in data and not data["name"]:
            del data["name"]

        name = data.get("name") or pool.name
        before = {k: getattr(pool, k) for k in data}
        for key, value in data.items():
            # Blank optional fields are stored as NULL
            setattr(pool, key, value if value not in ("", []) else None)
        try:
            await session.commit()
        except IntegrityError as exc:
            # A concurrent rename took the name after the check above
            await session.rollback()
            raise ConflictError(f"IP pool {name!r} already exists") from exc
        await session.refresh(pool)

        await self.changes.record(
            ChangeEntry(
                table_name="ip_pools",
                record_id=pool.id,
                action="UPDATE",
                before=before,
                after={k: getattr(pool, k) for k in data},
                description=f"IP pool {pool.name} updated",
            )
        )
        return pool

    async def delete_pool(self, session: AsyncSession, pool_id: uuid.UUID) -> None:
        """Delete a pool; its address records go with it."""
        pool = await self.get_pool(session, pool_id)
        name, cidr = pool.name, pool.cidr
        await session.execute(
            delete(IpAddress)
            .where(IpAddress.pool_id == pool_id)
            .execution_options(synchronize_session=False)
        )
        await session.delete(pool)
        await session.commit()
        logger.info("IP pool deleted", pool_id=str(pool_id), pool=name)
        await self.changes.record(
            ChangeEntry(
                table_name="ip_pools",
                record_id=pool_id,
                action="DELETE",
                before={"name": name, "cidr": cidr},
                description=f"IP pool {name} deleted",
            )
        )

    async def pool_stats(self, session: AsyncSession, pool_id: uuid.UUID) -> dict[str, Any]:
        pool = await self.get_pool(session, pool_id)
        result = await session.execute(
            select(IpAddress.status, func.count())
            .where(IpAddress.pool_id == pool_id)
            .group_by(IpAddress.status)
        )
        counts = dict.fromkeys(ADDRESS_STATUSES, 0)
        counts.update({status: n for status, n in result.all()})
        total = sum(counts.values())
        used = counts[STATUS_ASSIGNED] + counts[STATUS_RESERVED] + counts[STATUS_BLOCKED]
        return {
            "pool_id": pool.id,
            "name": pool.name,
            "cidr": pool.cidr,
            "total": total,
            **counts,
            "utilization": round(used / total, 3) if total else 0.0,
        }

    # ── Ledger ────────────────────────────────────────────────────────────────

    async def get_address(self, session: AsyncSession, address_id: uuid.UUID) -> IpAddress:
        record = await session.get(IpAddress, address_id, populate_existing=True)
        if record is None:
            raise NotFoundError("IP address not found", address_id=address_id)
        return record

    async def _compare_and_set(
        self,
        session: AsyncSession,
        record: IpAddress,
        expected_status: str,
        values: dict[str, Any],
    ) -> IpAddress:
        """UPDATE the record only if its status is still *expected_status*."""
        address_id = record.id
        result = await session.execute(
            update(IpAddress)
            .where(IpAddress.id == address_id, IpAddress.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await session.rollback()
            current = await self.get_address(session, address_id)
            raise ConflictError(
                f"IP address {current.ip_address} is no longer {expected_status} "
                f"(now {current.status})",
                address_id=address_id,
                status=current.status,
            )
        await session.commit()
        return await self.get_address(session, address_id)

    async def assign_address(
        self,
        session: AsyncSession,
        address_id: uuid.UUID,
        asset_id: uuid.UUID | None = None,
        hostname: str | None = None,
    ) -> IpAddress:
        """Bind an available address to an asset and/or hostname.

        Raises:
            NotFoundError: unknown address or asset.
            ConflictError: the address is not available (already assigned,
                reserved, blocked, or taken by a concurrent caller).
        """
        record = await self.get_address(session, address_id)
        if asset_id is not None and await session.get(Asset, asset_id) is None:
            raise NotFoundError("Asset not found", asset_id=asset_id)
        if record.status != STATUS_AVAILABLE:
            raise ConflictError(
                f"IP address {record.ip_address} is {record.status}; release it first",
                address_id=address_id,
                status=record.status,
            )

        before = _snapshot(record)
        hostname = hostname.strip() if hostname and hostname.strip() else None
        record = await self._compare_and_set(
            session,
            record,
            STATUS_AVAILABLE,
            {
                "status": STATUS_ASSIGNED,
                "asset_id": asset_id,
                "hostname": hostname,
                "assignment_date": datetime.now(timezone.utc),
            },
        )
        logger.info(
            "IP address assigned",
            ip=record.ip_address,
            asset_id=str(asset_id) if asset_id else None,
            hostname=hostname,
        )
        await self.changes.record(
            ChangeEntry(
                table_name="ip_addresses",
                record_id=record.id,
                action="UPDATE",
                before=before,
                after=_snapshot(record),
                description=f"IP address {record.ip_address} assigned to {hostname or 'asset'}",
            )
        )
        return record

    async def release_address(self, session: AsyncSession, address_id: uuid.UUID) -> IpAddress:
        """Return an assigned or reserved address to the available state.

        Releasing an address that is already available is a no-op.

        Raises:
            NotFoundError: unknown address.
            ConflictError: the address is blocked, or changed concurrently.
        """
        record = await self.get_address(session, address_id)
        if record.status == STATUS_AVAILABLE:
            return record
        if record.status not in _RELEASABLE:
            raise ConflictError(
                f"IP address {record.ip_address} is {record.status} and cannot be released",
                address_id=address_id,
                status=record.status,
            )

        before = _snapshot(record)
        record = await self._compare_and_set(
            session,
            record,
            record.status,
            {
                "status": STATUS_AVAILABLE,
                "asset_id": None,
                "hostname": None,
                "assignment_date": None,
                "notes": None,
            },
        )
        logger.info("IP address released", ip=record.ip_address, previous=before["status"])
        await self.changes.record(
            ChangeEntry(
                table_name="ip_addresses",
                record_id=record.id,
                action="UPDATE",
                before=before,
                after=_snapshot(record),
                description=f"IP address {record.ip_address} released",
            )
        )
        return record

    async def reserve_address(
        self, session: AsyncSession, address_id: uuid.UUID, reason: str | None
    ) -> IpAddress:
        """Hold an available address back from assignment.

        Raises:
            ValidationError: blank reason.
            NotFoundError: unknown address.
            ConflictError: the address is not available.
        """
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required to reserve an IP address")

        record = await self.get_address(session, address_id)
        if record.status != STATUS_AVAILABLE:
            raise ConflictError(
                f"IP address {record.ip_address} is {record.status}; only available "
                "addresses can be reserved",
                address_id=address_id,
                status=record.status,
            )

        before = _snapshot(record)
        record = await self._compare_and_set(
            session, record, STATUS_AVAILABLE, {"status": STATUS_RESERVED, "notes": reason}
        )
        logger.info("IP address reserved", ip=record.ip_address, reason=reason)
        await self.changes.record(
            ChangeEntry(
                table_name="ip_addresses",
                record_id=record.id,
                action="UPDATE",
                before=before,
                after=_snapshot(record),
                description=f"IP address {record.ip_address} reserved: {reason}",
            )
        )
        return record

    async def delete_asset(self, session: AsyncSession, asset_id: uuid.UUID) -> int:
        """Delete an asset and return its assigned addresses to their pools.

        The release and the delete share one transaction; each freed address
        is audited like an explicit release. Returns the number freed.
        """
        asset = await session.get(Asset, asset_id)
        if asset is None:
            raise NotFoundError("Asset not found", asset_id=asset_id)
        asset_name = asset.name

        result = await session.execute(
            select(IpAddress).where(
                IpAddress.asset_id == asset_id, IpAddress.status == STATUS_ASSIGNED
            )
        )
        bound = list(result.scalars().all())
        before = {record.id: (record.ip_address, _snapshot(record)) for record in bound}

        freed: list[uuid.UUID] = []
        if before:
            freed = list(
                (
                    await session.execute(
                        update(IpAddress)
                        .where(
                            IpAddress.id.in_(before),
                            IpAddress.status == STATUS_ASSIGNED,
                        )
                        .values(
                            status=STATUS_AVAILABLE,
                            asset_id=None,
                            hostname=None,
                            assignment_date=None,
                            notes=None,
                        )
                        .returning(IpAddress.id)
                        .execution_options(synchronize_session=False)
                    )
                ).scalars()
            )
        await session.delete(asset)
        await session.commit()
        logger.info("Asset deleted", asset_id=str(asset_id), name=asset_name, released=len(freed))

        await self.changes.record(
            *(
                ChangeEntry(
                    table_name="ip_addresses",
                    record_id=address_id,
                    action="UPDATE",
                    before=before[address_id][1],
                    after={"status": STATUS_AVAILABLE, "asset_id": None, "hostname": None},
                    description=(
                        f"IP address {before[address_id][0]} released "
                        f"(asset {asset_name} deleted)"
                    ),
                )
                for address_id in freed
            )
        )
        return len(freed)

    async def bulk_update_status(
        self,
        session: AsyncSession,
        address_ids: list[uuid.UUID],
        status: str,
        reason: str | None = None,
    ) -> int:
        """Administratively force a set of addresses into *status*.

        This is the only way into ``blocked``. Any consumer binding is
        dropped. All rows change in one statement, or none do.
        """
        if status not in _BULK_STATUSES:
            raise ValidationError(
                f"Bulk status must be one of {', '.join(_BULK_STATUSES)}, got {status!r}"
            )
        reason = (reason or "").strip() or None
        if status != STATUS_AVAILABLE and reason is None:
            raise ValidationError(f"A reason is required to mark addresses {status}")

        ids = list(dict.fromkeys(address_ids))
        result = await session.execute(
            select(IpAddress.id, IpAddress.status).where(IpAddress.id.in_(ids))
        )
        previous = dict(result.all())
        missing = [i for i in ids if i not in previous]
        if missing:
            raise NotFoundError(
                f"{len(missing)} IP address(es) not found", address_id=missing[0]
            )

        await session.execute(
            update(IpAddress)
            .where(IpAddress.id.in_(ids))
            .values(
                status=status,
                notes=reason,
                asset_id=None,
                hostname=None,
                assignment_date=None,
            )
            .execution_options(synchronize_session=False)
        )
        await session.commit()
        logger.info("IP addresses bulk-updated", count=len(ids), status=status)

        await self.changes.record(
            *(
                ChangeEntry(
                    table_name="ip_addresses",
                    record_id=i,
                    action="UPDATE",
                    before={"status": previous[i]},
                    after={"status": status, "notes": reason},
                    description=f"IP address status set to {status} (bulk)",
                )
                for i in ids
            )
        )
        return len(ids)
