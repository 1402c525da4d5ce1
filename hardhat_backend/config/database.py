import logging
import threading
from contextlib import contextmanager
from typing import Generator

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from config.settings import Settings
from models.errors import StorageFailure

logger = logging.getLogger(__name__)


class Database:
    """Process-wide gateway to PostgreSQL backed by a bounded connection pool.

    Connections are opened lazily. When every connection is checked out,
    callers wait up to ``pool_timeout`` seconds for one to be returned and
    then fail with ``StorageFailure``.
    """

    def __init__(self, settings: Settings):
        self.pool_size = settings.db_pool_size
        self.pool_timeout = settings.db_pool_timeout
        self._slots = threading.BoundedSemaphore(self.pool_size)
        self._pool = ThreadedConnectionPool(
            0,
            self.pool_size,
            cursor_factory=RealDictCursor,
            **settings.connection_kwargs()
        )

    @contextmanager
    def connection(self, operation: str = "query") -> Generator:
        if not self._slots.acquire(timeout=self.pool_timeout):
            raise StorageFailure(operation, "connection pool exhausted")
        try:
            try:
                conn = self._pool.getconn()
            except psycopg2.Error as e:
                raise StorageFailure(operation, str(e)) from e

            broken = False
            try:
                yield conn
                conn.commit()
            except psycopg2.Error as e:
                broken = self._rollback(conn)
                raise StorageFailure(operation, str(e)) from e
            except Exception:
                broken = self._rollback(conn)
                raise
            finally:
                self._pool.putconn(conn, close=broken or bool(conn.closed))
        finally:
            self._slots.release()

    @staticmethod
    def _rollback(conn) -> bool:
        """Roll back; report whether the connection is unusable afterwards."""
        try:
            conn.rollback()
            return False
        except psycopg2.Error:
            logger.warning("Rollback failed, discarding connection", exc_info=True)
            return True

    def test_connection(self) -> bool:
        try:
            with self.connection("health check") as conn:
                cur = conn.cursor()
                cur.execute("SELECT 1")
                return True
        except StorageFailure as e:
            logger.error("Database connection failed: %s", e.detail)
            return False

    def close(self) -> None:
        self._pool.closeall()
