"""
aiosqlite connection pool.

A fixed number of connections are opened lazily and handed out through
an asyncio queue. Every connection runs in WAL mode with foreign keys on
and returns rows as ``aiosqlite.Row``.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from pixs.config import get_logger, get_settings

logger = get_logger(__name__)


async def open_connection(db_path: Path, busy_timeout: int = 30000) -> aiosqlite.Connection:
    """Open a connection with the pragmas every PIXS connection uses."""
    conn = await aiosqlite.connect(db_path)
    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute("PRAGMA synchronous=NORMAL")
    await conn.execute("PRAGMA foreign_keys=ON")
    await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout)}")
    conn.row_factory = aiosqlite.Row
    return conn


class ConnectionPool:
    """Bounded pool of aiosqlite connections to one database file."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = Path(db_path)
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opened: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._opened)

    async def initialize(self) -> None:
        """Open every connection. Does nothing when already open."""
        async with self._lock:
            if self._opened:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await open_connection(self.db_path, self.busy_timeout)
                self._opened.append(conn)
                self._idle.put_nowait(conn)

        logger.info("connection_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; waits while all of them are in use."""
        if not self._opened:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection and commit on exit, rolling back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        """Close every connection; the pool reopens on next use."""
        async with self._lock:
            opened, self._opened = self._opened, []
            self._idle = asyncio.Queue()
            for conn in opened:
                await conn.close()

        if opened:
            logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """
    Process-wide pool built from settings.

    Only for callers that were not handed a pool explicitly.
    """
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(storage.db_path, storage.pool_size, storage.busy_timeout)
    await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
