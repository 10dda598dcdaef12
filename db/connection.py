"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so concurrent reads can each
hold their own connection.
"""

import re
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

import psycopg2
from psycopg2 import errors, extras, pool

from errors import ConflictError, InvalidInputError, JoblyError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

_MARKER = re.compile(r"\$(\d+)")


def to_pyformat(sql: str) -> str:
    """
    Rewrite ``$n`` markers into psycopg2 named placeholders.

    ``$1`` becomes ``%(p1)s`` so markers bind by position even when
    a statement reuses or reorders them.
    """
    return _MARKER.sub(lambda m: f"%(p{m.group(1)})s", sql)


def bind_params(params: Sequence[Any]) -> dict:
    """Map an ordered parameter list onto the names produced by to_pyformat()."""
    return {f"p{idx}": value for idx, value in enumerate(params, start=1)}


def translate_error(exc: psycopg2.Error) -> JoblyError:
    """Map a driver error onto the Jobly error taxonomy."""
    diag = getattr(exc, "diag", None)
    message = (diag.message_primary if diag else None) or str(exc).strip() or type(exc).__name__
    if isinstance(exc, errors.UniqueViolation):
        return ConflictError(message)
    if isinstance(
        exc,
        (errors.ForeignKeyViolation, errors.CheckViolation, errors.InvalidTextRepresentation),
    ):
        return InvalidInputError(message)
    return StorageError(message)


class Database:
    """
    Owns the connection pool shared by every repository.

    Open it once at startup and close it at shutdown, or use it as a
    context manager::

        with Database(DATABASE_URL) as db:
            CompanyRepository(db).list_all()
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 5):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.ThreadedConnectionPool | None = None

    def open(self) -> "Database":
        """
        Initialize the connection pool.

        Raises:
            StorageError: If the database is unreachable.
        """
        if self._pool is not None:
            return self
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise StorageError("Database unavailable") from e
        return self

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Borrow a connection from the pool and give it back afterwards.

        Raises:
            RuntimeError: If the pool has not been opened.
            StorageError: If no connection can be taken (pool exhausted,
                or the server refused a new connection).
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        try:
            conn = self._pool.getconn()
        except (pool.PoolError, psycopg2.OperationalError) as e:
            logger.error(f"Failed to get a database connection: {e}")
            raise StorageError("Database unavailable") from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict]:
        """
        Run one statement and commit it.

        Args:
            sql: Statement using ``$1``, ``$2``... markers.
            params: Values for the markers, in marker order.

        Returns:
            The rows the statement produced, as dicts keyed by column
            alias. Empty for statements without a result set.

        Raises:
            ConflictError: On a uniqueness violation.
            InvalidInputError: On a foreign key, check or type violation.
            StorageError: On any other database failure.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(to_pyformat(sql), bind_params(params) or None)
                    rows = [dict(r) for r in cur.fetchall()] if cur.description else []
                conn.commit()
                return rows
            except psycopg2.Error as e:
                if not conn.closed:
                    conn.rollback()
                logger.error(f"Query failed: {e}")
                raise translate_error(e) from e

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
        """Like query(), returning the first row or None."""
        rows = self.query(sql, params)
        return rows[0] if rows else None
