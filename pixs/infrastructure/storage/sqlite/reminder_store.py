"""
SQLite implementation of reminder storage.

Handles CRUD and scheduling queries for reminders.
"""

from datetime import datetime
from uuid import UUID

import aiosqlite

from pixs.config import get_logger
from pixs.core.entities.reminder import EarlyReminderChoice, Reminder, RepeatInterval
from pixs.core.exceptions import DatabaseError
from pixs.core.interfaces.storage import IReminderStore
from pixs.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)


class SQLiteReminderStore(IReminderStore):
    """SQLite implementation of reminder storage."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        return self._pool

    async def create(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        reminder.updated_at = datetime.utcnow()
        pool = await self._get_pool()
        try:
            await self._insert(pool, reminder)
        except aiosqlite.IntegrityError as e:
            raise DatabaseError("create reminder", str(e)) from e
        logger.info("reminder_created", reminder_id=str(reminder.id), title=reminder.title)
        return reminder

    async def _insert(self, pool: ConnectionPool, reminder: Reminder) -> None:
        async with pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO reminders (
                    id, title, due_at, is_complete, note_id,
                    has_date, has_time, repeat_interval, early_reminder,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(reminder.id),
                    reminder.title,
                    reminder.date.isoformat(),
                    1 if reminder.is_complete else 0,
                    str(reminder.note_id) if reminder.note_id else None,
                    1 if reminder.has_date else 0,
                    1 if reminder.has_time else 0,
                    reminder.repeat_interval.value,
                    reminder.early_reminder.value,
                    reminder.created_at.isoformat(),
                    reminder.updated_at.isoformat(),
                ),
            )

    async def get(self, reminder_id: UUID) -> Reminder | None:
        """Get reminder by ID."""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM reminders WHERE id = ?", (str(reminder_id),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def update(self, reminder: Reminder) -> Reminder:
        """Update an existing reminder."""
        reminder.updated_at = datetime.utcnow()
        pool = await self._get_pool()
        async with pool.transaction() as conn:
            await conn.execute(
                """
                UPDATE reminders SET
                    title = ?, due_at = ?, is_complete = ?, note_id = ?,
                    has_date = ?, has_time = ?, repeat_interval = ?,
                    early_reminder = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    reminder.title,
                    reminder.date.isoformat(),
                    1 if reminder.is_complete else 0,
                    str(reminder.note_id) if reminder.note_id else None,
                    1 if reminder.has_date else 0,
                    1 if reminder.has_time else 0,
                    reminder.repeat_interval.value,
                    reminder.early_reminder.value,
                    reminder.updated_at.isoformat(),
                    str(reminder.id),
                ),
            )
            logger.info("reminder_updated", reminder_id=str(reminder.id))
            return reminder

    async def delete(self, reminder_id: UUID) -> bool:
        """Delete a reminder by ID."""
        pool = await self._get_pool()
        async with pool.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM reminders WHERE id = ?", (str(reminder_id),)
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("reminder_deleted", reminder_id=str(reminder_id))
            return deleted

    async def list_reminders(
        self, include_complete: bool = True, limit: int = 100, offset: int = 0
    ) -> list[Reminder]:
        """List reminders, newest first."""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            if include_complete:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    ORDER BY created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    WHERE is_complete = 0
                    ORDER BY created_at DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def list_schedulable(self) -> list[Reminder]:
        """List reminders that are not complete and have a date."""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM reminders
                WHERE is_complete = 0 AND has_date = 1
                ORDER BY due_at ASC
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def find_by_note(self, note_id: UUID) -> list[Reminder]:
        """Find reminders pointing at a note."""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM reminders
                WHERE note_id = ?
                ORDER BY created_at DESC
                """,
                (str(note_id),),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Reminder:
        """Convert a database row to a Reminder entity."""
        try:
            repeat = RepeatInterval(row["repeat_interval"])
        except ValueError:
            repeat = RepeatInterval.NEVER

        try:
            early = EarlyReminderChoice(row["early_reminder"])
        except ValueError:
            early = EarlyReminderChoice.NONE

        created_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = created_at
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return Reminder(
            id=UUID(row["id"]),
            title=row["title"],
            date=datetime.fromisoformat(row["due_at"]),
            is_complete=bool(row["is_complete"]),
            note_id=UUID(row["note_id"]) if row["note_id"] else None,
            has_date=bool(row["has_date"]),
            has_time=bool(row["has_time"]),
            repeat_interval=repeat,
            early_reminder=early,
            created_at=created_at,
            updated_at=updated_at,
        )
