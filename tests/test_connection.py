from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from db.connection import Database, to_pyformat
from utils.errors import QueryFailure


def test_to_pyformat_rewrites_placeholders_in_order():
    sql, values = to_pyformat("SELECT * FROM t WHERE a = $1 AND b = $2 LIMIT $3", ["x", 2, 10])

    assert sql == "SELECT * FROM t WHERE a = %s AND b = %s LIMIT %s"
    assert values == ("x", 2, 10)


def test_to_pyformat_follows_text_order_and_reuse():
    sql, values = to_pyformat("SELECT $2, $1, $2", ["a", "b"])

    assert sql == "SELECT %s, %s, %s"
    assert values == ("b", "a", "b")


def test_to_pyformat_escapes_literal_percent():
    sql, values = to_pyformat("SELECT 10 % 3, $1", [1])

    assert sql == "SELECT 10 %% 3, %s"
    assert values == (1,)


def test_to_pyformat_without_placeholders_skips_formatting():
    assert to_pyformat("SELECT '100%'") == ("SELECT '100%'", None)


def test_to_pyformat_rejects_unbound_placeholder():
    with pytest.raises(QueryFailure):
        to_pyformat("SELECT $1, $2", ["only one"])


@pytest.fixture
def mock_pool():
    with patch("db.connection.pool.ThreadedConnectionPool") as pool_cls:
        conn = MagicMock()
        conn.closed = 0
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.description = [("id",)]
        cursor.fetchall.return_value = [{"id": 1}, {"id": 2}]
        pool_cls.return_value.getconn.return_value = conn
        yield pool_cls, conn, cursor


def test_execute_returns_rows_and_commits(mock_pool):
    pool_cls, conn, cursor = mock_pool
    db = Database("postgresql://test")
    db.open()

    rows = db.execute("SELECT id FROM users WHERE email = $1", ["a@b.c"])

    assert rows == [{"id": 1}, {"id": 2}]
    cursor.execute.assert_called_once_with("SELECT id FROM users WHERE email = %s", ("a@b.c",))
    conn.commit.assert_called_once()
    pool_cls.return_value.putconn.assert_called_once_with(conn, close=False)


def test_execute_one_returns_first_row(mock_pool):
    db = Database("postgresql://test")
    db.open()

    assert db.execute_one("SELECT id FROM users") == {"id": 1}


def test_execute_without_result_set_returns_empty_list(mock_pool):
    _, _, cursor = mock_pool
    cursor.description = None
    db = Database("postgresql://test")
    db.open()

    assert db.execute("CREATE TABLE IF NOT EXISTS t (id INT)") == []
    cursor.fetchall.assert_not_called()


def test_driver_error_propagates_as_query_failure(mock_pool):
    pool_cls, conn, cursor = mock_pool
    driver_error = psycopg2.ProgrammingError("syntax error at or near \"WHER\"")
    cursor.execute.side_effect = driver_error
    db = Database("postgresql://test")
    db.open()

    with pytest.raises(QueryFailure) as excinfo:
        db.execute("SELECT * FROM users WHER id = $1", [1])

    assert excinfo.value.cause is driver_error
    assert excinfo.value.__cause__ is driver_error
    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    pool_cls.return_value.putconn.assert_called_once_with(conn, close=False)


def test_closed_connection_is_discarded(mock_pool):
    pool_cls, conn, cursor = mock_pool
    cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection")
    conn.closed = 2
    db = Database("postgresql://test")
    db.open()

    with pytest.raises(QueryFailure):
        db.execute("SELECT 1")

    conn.rollback.assert_not_called()
    pool_cls.return_value.putconn.assert_called_once_with(conn, close=True)


def test_exhausted_pool_raises_query_failure(mock_pool):
    pool_cls, _, _ = mock_pool
    pool_cls.return_value.getconn.side_effect = psycopg2.pool.PoolError("connection pool exhausted")
    db = Database("postgresql://test")
    db.open()

    with pytest.raises(QueryFailure):
        db.execute("SELECT 1")


def test_execute_before_open_raises():
    with pytest.raises(QueryFailure):
        Database("postgresql://test").execute("SELECT 1")


def test_open_failure_raises_query_failure():
    with patch(
        "db.connection.pool.ThreadedConnectionPool",
        side_effect=psycopg2.OperationalError("could not connect"),
    ):
        db = Database("postgresql://test")
        with pytest.raises(QueryFailure):
            db.open()
    assert not db.is_open


def test_context_manager_opens_and_closes(mock_pool):
    pool_cls, _, _ = mock_pool

    with Database("postgresql://test", min_conn=2, max_conn=4) as db:
        assert db.is_open
        db.open()

    pool_cls.assert_called_once_with(2, 4, "postgresql://test")
    pool_cls.return_value.closeall.assert_called_once()
    assert not db.is_open
