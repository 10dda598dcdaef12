"""
Tests for db/connection.py - pool ownership and query execution.
"""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2 import errors
from psycopg2.pool import PoolError

from db.connection import Database, bind_params, to_pyformat, translate_error
from errors import ConflictError, InvalidInputError, StorageError


class TestPlaceholders:
    """Test $n marker rewriting."""

    def test_markers_become_named(self):
        sql = 'UPDATE companies SET "name" = $1 WHERE handle = $2'
        assert to_pyformat(sql) == 'UPDATE companies SET "name" = %(p1)s WHERE handle = %(p2)s'

    def test_multi_digit_markers(self):
        assert to_pyformat("$10, $1") == "%(p10)s, %(p1)s"

    def test_bind_params(self):
        assert bind_params(["a", None, 3]) == {"p1": "a", "p2": None, "p3": 3}

    def test_no_params(self):
        assert bind_params([]) == {}


class TestTranslateError:
    """Test driver error mapping."""

    def test_unique_violation_is_conflict(self):
        assert isinstance(translate_error(errors.UniqueViolation()), ConflictError)

    @pytest.mark.parametrize(
        "exc_type",
        [errors.ForeignKeyViolation, errors.CheckViolation, errors.InvalidTextRepresentation],
    )
    def test_bad_data_is_invalid_input(self, exc_type):
        assert isinstance(translate_error(exc_type()), InvalidInputError)

    def test_everything_else_is_storage_error(self):
        result = translate_error(psycopg2.OperationalError("server closed the connection"))
        assert isinstance(result, StorageError)
        assert result.status_code == 500


class TestDatabase:
    """Test pool lifecycle and query()."""

    @pytest.fixture
    def pool_mock(self):
        with patch("db.connection.pool.ThreadedConnectionPool") as factory:
            yield factory

    @pytest.fixture
    def conn(self, pool_mock):
        conn = MagicMock()
        conn.closed = 0
        pool_mock.return_value.getconn.return_value = conn
        return conn

    @pytest.fixture
    def cursor(self, conn):
        cur = MagicMock()
        conn.cursor.return_value.__enter__.return_value = cur
        return cur

    def test_query_requires_open_pool(self):
        db = Database("postgresql://localhost/none")
        with pytest.raises(RuntimeError, match="not initialized"):
            db.query("SELECT 1")

    def test_open_is_idempotent(self, pool_mock):
        db = Database("dsn", min_conn=2, max_conn=7)
        db.open()
        db.open()
        pool_mock.assert_called_once_with(2, 7, "dsn")

    def test_open_failure_is_storage_error(self, pool_mock):
        pool_mock.side_effect = psycopg2.OperationalError("refused")
        with pytest.raises(StorageError):
            Database("dsn").open()

    def test_context_manager_closes_pool(self, pool_mock):
        with Database("dsn"):
            pass
        pool_mock.return_value.closeall.assert_called_once()

    def test_query_returns_dict_rows_and_commits(self, pool_mock, conn, cursor):
        """Test execution, binding, commit and connection release."""
        cursor.description = [("handle",)]
        cursor.fetchall.return_value = [{"handle": "c1"}]

        with Database("dsn") as db:
            rows = db.query("SELECT handle FROM companies WHERE handle = $1", ["c1"])

        assert rows == [{"handle": "c1"}]
        cursor.execute.assert_called_once_with(
            "SELECT handle FROM companies WHERE handle = %(p1)s", {"p1": "c1"}
        )
        conn.commit.assert_called_once()
        pool_mock.return_value.putconn.assert_called_once_with(conn)

    def test_query_without_result_set(self, pool_mock, conn, cursor):
        cursor.description = None
        with Database("dsn") as db:
            assert db.query("CREATE TABLE t (x int)") == []
        cursor.execute.assert_called_once_with("CREATE TABLE t (x int)", None)

    def test_query_one(self, pool_mock, conn, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = []
        with Database("dsn") as db:
            assert db.query_one("SELECT id FROM jobs WHERE id = $1", [9]) is None

    def test_failure_rolls_back_and_translates(self, pool_mock, conn, cursor):
        """Test that a failed statement rolls back and still releases."""
        cursor.execute.side_effect = errors.UniqueViolation()

        with Database("dsn") as db:
            with pytest.raises(ConflictError):
                db.query("INSERT INTO companies (handle) VALUES ($1)", ["c1"])

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool_mock.return_value.putconn.assert_called_once_with(conn)

    def test_exhausted_pool_is_storage_error(self, pool_mock, conn, cursor):
        """Test that failing to borrow a connection maps to StorageError."""
        pool_mock.return_value.getconn.side_effect = PoolError("connection pool exhausted")

        with Database("dsn", max_conn=1) as db:
            with pytest.raises(StorageError, match="Database unavailable") as exc_info:
                db.query("SELECT 1")

        assert isinstance(exc_info.value.__cause__, PoolError)
        cursor.execute.assert_not_called()
        pool_mock.return_value.putconn.assert_not_called()

    def test_refused_connection_is_storage_error(self, pool_mock, conn):
        pool_mock.return_value.getconn.side_effect = psycopg2.OperationalError("refused")

        with Database("dsn") as db:
            with pytest.raises(StorageError):
                db.query_one("SELECT 1")
