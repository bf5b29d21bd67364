"""Tests for the change log sink."""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from dcinventory.models.change_log import ChangeLog
from dcinventory.services.audit import ChangeEntry, ChangeLogSink


@pytest.mark.asyncio
async def test_record_persists_entries(sink, db_session):
    record_id = uuid.uuid4()
    ok = await sink.record(
        ChangeEntry(
            table_name="assets",
            record_id=record_id,
            action="UPDATE",
            before={"rack_id": None},
            after={"rack_id": record_id},
            description="moved",
        )
    )
    assert ok is True

    entry = (await db_session.execute(select(ChangeLog))).scalar_one()
    assert entry.record_id == record_id
    assert entry.changes == {"before": {"rack_id": None}, "after": {"rack_id": str(record_id)}}


@pytest.mark.asyncio
async def test_record_nothing_is_a_no_op(sink):
    assert await sink.record() is True


@pytest.mark.asyncio
async def test_failed_write_is_swallowed():
    def broken_factory():
        raise OperationalError("INSERT", {}, Exception("no such table: change_logs"))

    sink = ChangeLogSink(broken_factory)
    entry = ChangeEntry(
        table_name="ip_addresses", record_id=uuid.uuid4(), action="UPDATE", description="x"
    )
    assert await sink.record(entry) is False
