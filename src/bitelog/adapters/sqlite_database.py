"""SQLite connection and transaction provider."""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

from bitelog.adapters.sqlite_errors import translate_sqlite_error
from bitelog.domain.errors import DataAccessError

MEMORY_LOCATION = ":memory:"

_logger = logging.getLogger(__name__)


@dataclass
class SqliteDatabase:
    """Explicitly opened SQLite database handing out short-lived connections.

    Every connection is closed by the context manager that created it. An
    in-memory location is backed by a named shared-cache database that lives
    until ``close`` drops the anchor connection. Shared-cache table locks fail
    immediately instead of waiting, so connections to an in-memory database
    are handed out one at a time.
    """

    location: str
    _uri: str | None = field(default=None, init=False, repr=False)
    _anchor: sqlite3.Connection | None = field(default=None, init=False, repr=False)
    _guard: AbstractContextManager[object] = field(
        default_factory=nullcontext, init=False, repr=False
    )

    @property
    def is_open(self) -> bool:
        """Return True between ``open`` and ``close``."""
        return self._uri is not None

    def open(self) -> None:
        """Resolve the storage location; idempotent."""
        if self._uri is not None:
            return
        if self.location == MEMORY_LOCATION:
            self._uri = f"file:bitelog-{uuid4().hex}?mode=memory&cache=shared"
            self._guard = threading.RLock()
            self._anchor = self._connect(check_same_thread=False)
            _logger.info("Opened in-memory database")
            return
        path = Path(self.location)
        existed = path.exists()
        path.parent.mkdir(parents=True, exist_ok=True)
        self._uri = path.resolve().as_uri()
        with self.connection():
            pass
        if existed:
            _logger.info("Opened existing database at %s", path)
        else:
            _logger.info("Created new database at %s", path)

    def close(self) -> None:
        """Release the database; in-memory contents are discarded."""
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
        self._uri = None
        self._guard = nullcontext()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield an autocommit connection for reads or single statements."""
        with self._guard:
            conn = self._connect()
            try:
                yield conn
            finally:
                conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside one transaction.

        The transaction commits when the block exits normally and rolls back
        on any exception, which is re-raised.
        """
        with self.connection() as conn:
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            conn.commit()

    def _connect(self, check_same_thread: bool = True) -> sqlite3.Connection:
        if self._uri is None:
            raise DataAccessError(f"Database {self.location} is not open")
        try:
            conn = sqlite3.connect(
                self._uri,
                uri=True,
                isolation_level=None,
                check_same_thread=check_same_thread,
            )
            conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as exc:
            raise translate_sqlite_error(
                exc, f"connecting to {self.location}"
            ) from exc
        conn.row_factory = sqlite3.Row
        return conn
