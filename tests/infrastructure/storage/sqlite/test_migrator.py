"""Unit tests for the database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from catering.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial"
        assert len(info.checksum) == 16

    def test_invalid_filename_raises(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError):
            MigrationInfo.from_file(bad)


class TestDiscovery:
    def test_bundled_migrations_found(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)


class TestInitializeDatabase:
    async def test_creates_all_tables(self, tmp_path: Path):
        db_path = tmp_path / "data" / "catering.db"

        results = await initialize_database(db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
            assert set(REQUIRED_TABLES) <= tables
            assert await get_current_version(conn) == discover_migrations()[-1].version
            cursor = await conn.execute("PRAGMA table_info(order_payments)")
            assert "version" in {row[1] for row in await cursor.fetchall()}

    async def test_second_run_is_noop(self, tmp_path: Path):
        db_path = tmp_path / "catering.db"
        await initialize_database(db_path, create_backup_before=False)

        results = await initialize_database(db_path, create_backup_before=False)

        assert results == []

    async def test_backup_removed_after_success(self, tmp_path: Path):
        db_path = tmp_path / "catering.db"
        await initialize_database(db_path, create_backup_before=False)

        await initialize_database(db_path, create_backup_before=True)

        assert list(tmp_path.glob("*.backup_*.db")) == []


class TestStatusAndIntegrity:
    async def test_status_without_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "missing.db")
        assert status["exists"] is False
        assert status["current_version"] is None

    async def test_status_after_migration(self, tmp_path: Path):
        db_path = tmp_path / "catering.db"
        await initialize_database(db_path, create_backup_before=False)

        status = await get_migration_status(db_path)

        assert status["exists"] is True
        assert status["pending_migrations"] == []
        assert "001" in status["applied_migrations"]

    async def test_integrity_checks_pass(self, tmp_path: Path):
        db_path = tmp_path / "catering.db"
        await initialize_database(db_path, create_backup_before=False)

        checks = await verify_schema_integrity(db_path)

        assert {c["check"] for c in checks} == {"foreign_keys", "integrity", "required_tables"}
        assert all(c["status"] == "PASS" for c in checks)


class TestBackups:
    def test_backup_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "catering.db"
        db_path.write_bytes(b"original")

        backup = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup)

        assert db_path.read_bytes() == b"original"
