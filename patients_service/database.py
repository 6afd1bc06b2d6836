"""Database access: connection pool, executors and transactions."""

from __future__ import annotations

import re
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import DbConfig

DEFAULT_TIMEOUT = 30.0

_PLACEHOLDER = re.compile(r"\$(\d+)")


class DatabaseError(Exception):
    """Raised when a database operation fails."""


def build_url(db_config: DbConfig) -> URL:
    """Build the connection URL for a database configuration."""
    return URL.create(
        "postgresql",
        username=db_config.user,
        password=db_config.password,
        host=db_config.host,
        port=db_config.port,
        database=db_config.db_name,
    )


def _adapt(value: Any) -> Any:
    return str(value) if isinstance(value, uuid.UUID) else value


def convert_placeholders(query: str, args: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Turn $N placeholders into named parameters bound to args."""
    params: dict[str, Any] = {}

    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < 1 or index > len(args):
            raise DatabaseError(f"placeholder ${index} has no argument")
        name = f"p{index}"
        params[name] = _adapt(args[index - 1])
        return f":{name}"

    return _PLACEHOLDER.sub(replace, query), params


class PgContext:
    """A connection pool with a default statement timeout."""

    def __init__(self, engine: Engine, conn_timeout: float = DEFAULT_TIMEOUT) -> None:
        self.engine = engine
        self.conn_timeout = conn_timeout

    @contextmanager
    def executor(self, tx: Connection | None) -> Iterator[Connection]:
        """Yield the transaction if given, otherwise a connection from the pool."""
        if tx is not None:
            yield tx
            return
        with self.engine.begin() as conn:
            yield conn

    def execute(self, tx: Connection | None, query: str, *args: Any) -> int:
        """Run a statement and return the number of affected rows."""
        sql, params = convert_placeholders(query, args)
        with self.executor(tx) as conn:
            return conn.execute(text(sql), params).rowcount

    def query_row(self, tx: Connection | None, query: str, *args: Any) -> tuple[Any, ...] | None:
        """Return the first row of a query, or None when there is none."""
        sql, params = convert_placeholders(query, args)
        with self.executor(tx) as conn:
            row = conn.execute(text(sql), params).first()
        return None if row is None else tuple(row)

    def query(self, query: str, *args: Any) -> list[tuple[Any, ...]]:
        """Return all rows of a query run on the pool."""
        sql, params = convert_placeholders(query, args)
        with self.executor(None) as conn:
            return [tuple(row) for row in conn.execute(text(sql), params)]

    def close(self) -> None:
        self.engine.dispose()


def connect(db_config: DbConfig) -> PgContext:
    """Create a pool for the configured database and check it answers."""
    try:
        engine = create_engine(build_url(db_config))
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseError(f"error: {exc}") from exc
    return PgContext(engine)


class TransactionManager:
    """Begins, commits and rolls back transactions on a pool."""

    def __init__(self, pg_context: PgContext) -> None:
        self.pg_context = pg_context

    def begin_transaction(self) -> Connection:
        try:
            conn = self.pg_context.engine.connect()
            conn.begin()
        except SQLAlchemyError as exc:
            raise DatabaseError(f"failed to begin transaction: {exc}") from exc
        return conn

    def commit_transaction(self, tx: Connection | None) -> None:
        if tx is None:
            raise DatabaseError("transaction not found in context")
        try:
            tx.commit()
        except SQLAlchemyError as exc:
            raise DatabaseError(f"failed to commit transaction: {exc}") from exc
        finally:
            tx.close()

    def rollback_transaction(self, tx: Connection | None) -> None:
        if tx is None:
            raise DatabaseError("transaction not found in context")
        if tx.closed or not tx.in_transaction():
            raise DatabaseError("failed to rollback transaction: tx is closed")
        try:
            tx.rollback()
        except SQLAlchemyError as exc:
            raise DatabaseError(f"failed to rollback transaction: {exc}") from exc
        finally:
            tx.close()