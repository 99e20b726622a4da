"""
TableBook Backend — Database Handle Tests
===========================================

What we test:
    ✅ Failing statements are mapped to DatabaseError
    ✅ Connections go back to the pool on success AND on failure
    ✅ The startup version probe is best-effort (never raises)
    ✅ The health ping
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import text

from tablebook.database import Database
from tablebook.exceptions import DatabaseError, NotFoundError


class TestSession:

    @pytest.mark.asyncio
    async def test_failed_statement_raises_database_error(self, database):
        with pytest.raises(DatabaseError) as exc_info:
            async with database.session() as session:
                await session.execute(text("SELECT * FROM no_such_table"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"
        assert "no_such_table" in exc_info.value.context["original_error"]

    @pytest.mark.asyncio
    async def test_connection_released_after_failure(self, database):
        with pytest.raises(DatabaseError):
            async with database.session() as session:
                await session.execute(text("SELECT * FROM no_such_table"))

        assert database.engine.pool.checkedout() == 0

    @pytest.mark.asyncio
    async def test_connection_released_after_success(self, database):
        async with database.session() as session:
            assert (await session.execute(text("SELECT 1"))).scalar() == 1

        assert database.engine.pool.checkedout() == 0

    @pytest.mark.asyncio
    async def test_application_errors_pass_through_unwrapped(self, database):
        with pytest.raises(NotFoundError):
            async with database.session() as session:
                await session.execute(text("SELECT 1"))
                raise NotFoundError("Reservation not found")

        assert database.engine.pool.checkedout() == 0


class TestServerVersionProbe:

    @pytest.mark.asyncio
    async def test_probe_failure_is_swallowed(self, database):
        # SQLite has no version() function, so the probe fails
        assert await database.log_server_version() is None
        assert database.server_version is None

    @pytest.mark.asyncio
    async def test_probe_records_version(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'probe.db'}", pool_size=1)
        await db.engine.dispose()

        conn = MagicMock()
        result = MagicMock()
        result.scalar.return_value = "PostgreSQL 16.2 on x86_64-pc-linux-gnu"
        conn.execute = AsyncMock(return_value=result)
        db.engine = MagicMock()
        db.engine.connect.return_value.__aenter__.return_value = conn

        version = await db.log_server_version()

        assert version.startswith("PostgreSQL 16.2")
        assert db.server_version == version

    @pytest.mark.asyncio
    async def test_probe_survives_unreachable_server(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'probe.db'}", pool_size=1)
        await db.engine.dispose()
        db.engine = MagicMock()
        db.engine.connect.return_value.__aenter__.side_effect = ConnectionRefusedError("refused")

        assert await db.log_server_version() is None


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_reachable(self, database):
        assert await database.ping() is True
