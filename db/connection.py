"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and runs statements against it.
Uses psycopg2's ThreadedConnectionPool for efficient connection reuse.

Statements are written with numbered placeholders (``$1``, ``$2``, ...)
and rewritten to psycopg2's ``%s`` style right before execution.
"""

import re
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from utils.errors import QueryFailure
from utils.logger import get_logger

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_pyformat(sql: str, params: Sequence = ()) -> tuple[str, Optional[tuple]]:
    """
    Rewrite ``$n`` placeholders into psycopg2's positional ``%s`` form.

    Literal ``%`` characters are doubled so psycopg2 does not read them
    as placeholders. The returned values follow the textual order of the
    placeholders, so ``$2 ... $1`` or a repeated ``$1`` bind correctly.
    A statement without placeholders is returned untouched with ``None``
    values, which tells psycopg2 to skip formatting altogether.

    Args:
        sql: Statement text using ``$1..$n`` placeholders.
        params: Values, where ``params[n - 1]`` binds ``$n``.

    Returns:
        Tuple of (psycopg2 statement, ordered values or None).

    Raises:
        QueryFailure: If a placeholder has no matching parameter.
    """
    if not _PLACEHOLDER.search(sql):
        return sql, None

    values: list = []

    def _swap(match: re.Match) -> str:
        index = int(match.group(1))
        if not 1 <= index <= len(params):
            raise QueryFailure(
                f"Placeholder ${index} has no bound parameter ({len(params)} given)"
            )
        values.append(params[index - 1])
        return "%s"

    text = _PLACEHOLDER.sub(_swap, sql.replace("%", "%%"))
    return text, tuple(values)


class Database:
    """
    Query executor backed by a connection pool.

    Create one per process, call ``open()`` on startup and ``close()`` on
    shutdown, and hand the instance to the repositories that need it.

    Usage:
        with Database() as db:
            rows = db.execute("SELECT * FROM users WHERE id = $1", [7])
    """

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.ThreadedConnectionPool | None = None

    # ── LIFECYCLE ─────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """
        Initialize the connection pool. Calling it twice is a no-op.

        Raises:
            QueryFailure: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise QueryFailure(f"Failed to initialize database pool: {e}", cause=e) from e

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Check a connection out of the pool and always return it.

        Raises:
            QueryFailure: If the pool is not open or is exhausted.
        """
        if self._pool is None:
            raise QueryFailure("Database pool not initialized. Call open() first.")
        try:
            conn = self._pool.getconn()
        except psycopg2.Error as e:
            logger.error(f"Could not get a connection from the pool: {e}")
            raise QueryFailure(f"Could not get a connection from the pool: {e}", cause=e) from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    # ── EXECUTION ─────────────────────────────────────────

    def execute(self, sql: str, params: Sequence = ()) -> list[dict]:
        """
        Run one statement and return its rows.

        The statement is committed on success and rolled back on failure.

        Args:
            sql: Statement text using ``$1..$n`` placeholders.
            params: Ordered parameter values.

        Returns:
            List of rows as dicts (empty for statements without a result set).

        Raises:
            QueryFailure: On any driver error; the driver error is the cause.
        """
        text, values = to_pyformat(sql, params)
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    logger.debug(f"Executing: {' '.join(text.split())} | params={values}")
                    cur.execute(text, values)
                    rows = [dict(row) for row in cur.fetchall()] if cur.description else []
                conn.commit()
                return rows
            except psycopg2.Error as e:
                if not conn.closed:
                    conn.rollback()
                logger.error(f"Query failed: {e}")
                raise QueryFailure(f"Query failed: {e}", cause=e) from e

    def execute_one(self, sql: str, params: Sequence = ()) -> Optional[dict]:
        """Run one statement and return its first row, or None."""
        rows = self.execute(sql, params)
        return rows[0] if rows else None
