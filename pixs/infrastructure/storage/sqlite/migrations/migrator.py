"""
Versioned schema migrations for the reminder database.

Migration scripts live next to this module as ``vNNN_description.sql``
and are applied in version order. Applied versions are recorded in
``schema_migrations`` together with a checksum of the script, so an
edited script is reported instead of silently re-run. The database file
is snapshotted with SQLite's online backup API before any pending script
runs and restored from that snapshot if one fails.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from pixs.config import get_logger, get_settings
from pixs.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = ("reminders", "schema_migrations")

_FILENAME_RE = re.compile(r"^v(?P<version>\d{3,})_(?P<name>\w+)\.sql$")

_TRACKING_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass(frozen=True)
class MigrationInfo:
    """One migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME_RE.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match["version"],
            name=match["name"],
            path=path,
            checksum=digest[:16],
        )

    def read_sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """List migration scripts in ``directory`` ordered by version."""
    found: list[MigrationInfo] = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("migration_file_ignored", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def _copy_database(source: Path, target: Path) -> None:
    async with aiosqlite.connect(source) as src, aiosqlite.connect(target) as dst:
        await src.backup(dst)


class SchemaMigrator:
    """Applies pending migrations to one database file."""

    def __init__(self, db_path: Path, migrations_dir: Path = MIGRATIONS_DIR) -> None:
        self.db_path = Path(db_path)
        self.migrations_dir = migrations_dir

    async def applied(self, conn: aiosqlite.Connection) -> dict[str, str]:
        """Map of applied version to recorded checksum; empty before the first run."""
        try:
            cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
        except aiosqlite.OperationalError:
            return {}
        return {row[0]: row[1] for row in await cursor.fetchall()}

    async def pending(self, conn: aiosqlite.Connection) -> list[MigrationInfo]:
        """Migrations not yet recorded; warns about edited scripts."""
        applied = await self.applied(conn)
        todo = []
        for migration in discover_migrations(self.migrations_dir):
            recorded = applied.get(migration.version)
            if recorded is None:
                todo.append(migration)
            elif recorded != migration.checksum:
                logger.warning(
                    "migration_checksum_mismatch",
                    version=migration.version,
                    recorded=recorded,
                    current=migration.checksum,
                )
        return todo

    async def _apply(self, conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
        started = time.perf_counter()
        try:
            await conn.executescript(migration.read_sql())
            elapsed = int((time.perf_counter() - started) * 1000)
            await conn.execute(
                "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
                "VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error("migration_failed", version=migration.version, error=str(e))
            return MigrationResult(
                migration.version,
                migration.name,
                success=False,
                execution_time_ms=int((time.perf_counter() - started) * 1000),
                error=str(e),
            )

        logger.info(
            "migration_applied",
            version=migration.version,
            name=migration.name,
            execution_time_ms=elapsed,
        )
        return MigrationResult(migration.version, migration.name, True, elapsed)

    async def migrate(self, backup: bool = True) -> list[MigrationResult]:
        """
        Apply every pending migration, stopping at the first failure.

        Raises:
            DatabaseError: a migration failed; the database was restored
                from the pre-migration snapshot when one was taken.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        existed = self.db_path.exists()
        results: list[MigrationResult] = []

        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute(_TRACKING_TABLE_SQL)
            todo = await self.pending(conn)
            await conn.commit()
            if not todo:
                logger.debug("schema_up_to_date", db_path=str(self.db_path))
                return results

            snapshot = None
            if backup and existed:
                stamp = datetime.now().strftime("%Y%m%d%H%M%S")
                snapshot = self.db_path.with_name(f"{self.db_path.stem}.backup_{stamp}.db")
                await _copy_database(self.db_path, snapshot)
                logger.info("database_snapshot_created", path=str(snapshot))

            for migration in todo:
                result = await self._apply(conn, migration)
                results.append(result)
                if not result.success:
                    break

        failed = next((r for r in results if not r.success), None)
        if failed is not None:
            if snapshot is not None:
                await _copy_database(snapshot, self.db_path)
                logger.warning("database_restored", path=str(snapshot))
            raise DatabaseError(f"migration v{failed.version}", failed.error or "unknown error")

        if snapshot is not None:
            snapshot.unlink(missing_ok=True)
        return results

    async def status(self) -> dict:
        """Describe applied and pending versions without changing anything."""
        discovered = discover_migrations(self.migrations_dir)
        if not self.db_path.exists():
            return {
                "exists": False,
                "current_version": None,
                "applied_migrations": [],
                "pending_migrations": [m.version for m in discovered],
            }

        async with aiosqlite.connect(self.db_path) as conn:
            applied = await self.applied(conn)
        versions = sorted(applied, key=int)
        return {
            "exists": True,
            "current_version": versions[-1] if versions else None,
            "applied_migrations": versions,
            "pending_migrations": [m.version for m in discovered if m.version not in applied],
        }

    async def verify(self) -> list[dict]:
        """Run SQLite's integrity check and look for the required tables."""
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute("PRAGMA integrity_check")
            integrity = (await cursor.fetchone())[0]
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in await cursor.fetchall()}

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        return [
            {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
            {"check": "required_tables", "status": "FAIL" if missing else "PASS", "missing": missing},
        ]


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """Bring the database at ``db_path`` (default from settings) up to date."""
    db_path = db_path or get_settings().storage.db_path
    return await SchemaMigrator(db_path).migrate(backup=create_backup_before)


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    return await SchemaMigrator(db_path or get_settings().storage.db_path).status()


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    return await SchemaMigrator(db_path or get_settings().storage.db_path).verify()


def main() -> None:
    """Command-line entry point: ``pixs-migrate [--status | --verify]``."""
    import argparse

    parser = argparse.ArgumentParser(description="PIXS schema migrations")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--status", action="store_true", help="Show applied and pending versions")
    group.add_argument("--verify", action="store_true", help="Check schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration snapshot")
    args = parser.parse_args()

    if args.status:
        status = asyncio.run(get_migration_status(args.db_path))
        for key, value in status.items():
            print(f"{key}: {value}")
    elif args.verify:
        checks = asyncio.run(verify_schema_integrity(args.db_path))
        for check in checks:
            print(f"[{check['status']}] {check['check']}")
        if any(c["status"] != "PASS" for c in checks):
            raise SystemExit(1)
    else:
        results = asyncio.run(initialize_database(args.db_path, not args.no_backup))
        for result in results:
            print(f"v{result.version} {result.name}: {result.execution_time_ms}ms")
        if not results:
            print("Schema is up to date")


if __name__ == "__main__":
    main()
