"""
Database connection handling.

A `Database` owns one psycopg connection pool for the whole process. It is
created once at startup (see `biztime.app.create_app`) and handed to the
data-access layer explicitly rather than imported as a global.

Every unit of work goes through `Database.transaction()`, which checks out a
pooled connection, opens a transaction, applies the configured statement
timeout and yields a dict-row cursor. The transaction commits on normal exit
and rolls back on any exception.

For testing, use set_connection_override() to inject a connection
that will be used instead of the pool. Work then runs in savepoints
inside the test's own transaction, which the fixture rolls back.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from biztime.config import Config, config
from biztime.log import get_logger

logger = get_logger(__name__)

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of checking one out of the pool.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


def _safe_conninfo(conninfo: str) -> str:
    # Mask credentials in logs
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    return conninfo


# =============================================================================
# Connection Management
# =============================================================================


class Database:
    """Process-wide connection pool plus the statement deadline applied to every transaction."""

    def __init__(
        self,
        conninfo: str,
        min_size: int = 1,
        max_size: int = 5,
        timeout: float = 10.0,
        statement_timeout_ms: int = 5000,
    ):
        self.conninfo = conninfo
        self.statement_timeout_ms = statement_timeout_ms
        self.pool = ConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            open=False,
            name="biztime",
        )

    @classmethod
    def from_config(cls, cfg: Config = None) -> "Database":
        cfg = cfg or config
        return cls(
            cfg.database_url,
            min_size=cfg.pool_min_size,
            max_size=cfg.pool_max_size,
            timeout=cfg.pool_timeout,
            statement_timeout_ms=cfg.statement_timeout_ms,
        )

    def open(self, wait: bool = False) -> None:
        """
        Open the pool.

        Args:
            wait: Block until min_size connections are established
        """
        self.pool.open(wait=wait)
        logger.info(
            "Connection pool opened: %s (min=%s, max=%s)",
            _safe_conninfo(self.conninfo),
            self.pool.min_size,
            self.pool.max_size,
        )

    def close(self) -> None:
        """Close the pool and every connection it holds."""
        if not self.pool.closed:
            self.pool.close()
            logger.info("Connection pool closed")

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        """
        Context manager for a connection.

        In normal operation the connection is checked out of the pool and
        returned to it afterwards. With an override set (testing) the
        override connection is yielded as-is.
        """
        if _connection_override is not None:
            yield _connection_override
            return

        with self.pool.connection() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[psycopg.Cursor]:
        """
        Context manager for a dict-row cursor inside a scoped transaction.

        The statement timeout is set with `set_config(..., true)`, so it
        only lasts until the transaction ends.

        Usage:
            with database.transaction() as cur:
                cur.execute("SELECT * FROM companies")
                rows = cur.fetchall()  # List of dicts
        """
        with self.connection() as conn:
            with conn.transaction():
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        "SELECT set_config('statement_timeout', %s, true)",
                        (str(self.statement_timeout_ms),),
                    )
                    yield cur
