# This file wraps database access so API repositories can run parameterized statements safely.
# It exists to keep engine and connection handling out of router and service code.
# Reads run on short-lived connections; writes that must commit together share `transaction()`.
# On SQLite, where `SELECT ... FOR UPDATE` is not available, `transaction()` opens with
# BEGIN IMMEDIATE so the database write lock is held from the first read of the transaction.

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Connection, Engine, Result, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

Statement = str | Executable

SQLITE_BUSY_TIMEOUT_SECONDS = 30.0
_WRITE_LOCK_OPTION = "ledger_write_lock"


def _install_sqlite_begin_hooks(engine: Engine) -> None:
    """Take transaction control away from pysqlite and issue BEGIN ourselves.

    pysqlite only sends BEGIN before the first write, which leaves reads in a
    write transaction unisolated. Write transactions start with BEGIN IMMEDIATE,
    plain reads with a deferred BEGIN.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(connection: Connection) -> None:
        if connection.get_execution_options().get(_WRITE_LOCK_OPTION):
            connection.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            connection.exec_driver_sql("BEGIN")


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for ledger read/write access."""

    def __init__(self, *, database_url: str) -> None:
        connect_args: dict[str, Any] = {}
        if make_url(database_url).get_backend_name() == "sqlite":
            connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS}
        self._engine: Engine = create_engine(
            database_url,
            pool_pre_ping=True,
            future=True,
            connect_args=connect_args,
        )
        if self.dialect_name == "sqlite":
            _install_sqlite_begin_hooks(self._engine)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        return inspect(self._engine).has_table(table_name)

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection whose statements commit together, or roll back on any exception."""

        with self._engine.connect() as connection:
            connection.execution_options(**{_WRITE_LOCK_OPTION: True})
            with connection.begin():
                yield connection
    def fetch_all(
        self,
        query: Statement,
        params: Mapping[str, Any] | None = None,
        *,
        connection: Connection | None = None,
    ) -> list[dict[str, Any]]:
        with self._bind(connection) as bound:
            rows = self._run(bound, query, params).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(
        self,
        query: Statement,
        params: Mapping[str, Any] | None = None,
        *,
        connection: Connection | None = None,
    ) -> dict[str, Any] | None:
        with self._bind(connection) as bound:
            row = self._run(bound, query, params).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(
        self,
        query: Statement,
        params: Mapping[str, Any] | None = None,
        *,
        connection: Connection | None = None,
    ) -> Any:
        with self._bind(connection) as bound:
            return self._run(bound, query, params).scalar_one()

    def execute(
        self,
        query: Statement,
        params: Mapping[str, Any] | None = None,
        *,
        connection: Connection | None = None,
    ) -> int:
        """Run a write statement and return the number of affected rows."""

        if connection is not None:
            return self._run(connection, query, params).rowcount
        with self.transaction() as owned:
            return self._run(owned, query, params).rowcount

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _bind(self, connection: Connection | None) -> Iterator[Connection]:
        if connection is not None:
            yield connection
            return
        with self._engine.connect() as owned:
            yield owned

    @staticmethod
    def _run(connection: Connection, query: Statement, params: Mapping[str, Any] | None) -> Result[Any]:
        statement = text(query) if isinstance(query, str) else query
        if params:
            return connection.execute(statement, dict(params))
        return connection.execute(statement)
