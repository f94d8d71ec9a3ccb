"""
Single-connection SQLite helper

SQLiteHelper owns at most one sqlite3 connection and moves through
unconfigured -> configured -> connected -> disconnected. Every call that
touches the connection is serialized behind one internal lock, so the
helper can be shared between threads.
"""

import sqlite3
import threading
from enum import Enum
from typing import Any, Dict, Optional

from fanlog.core.config import Config
from fanlog.core.errors import ConfigurationError, ExecutionError, StoreConnectionError
from fanlog.utils.file_size import format_size, get_file_size
from fanlog.utils.logger import get_logger


logger = get_logger(__name__)


class StoreState(Enum):
    """Lifecycle of the helper's connection"""

    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class SQLiteHelper:
    """Serialized access to one SQLite connection"""

    def __init__(self, timeout: float = 60.0, pragmas: Optional[Dict[str, Any]] = None):
        """
        Args:
            timeout: Seconds to wait on a locked database
            pragmas: PRAGMA name -> value applied after every connect
        """
        self.timeout = timeout
        self.pragmas = dict(pragmas or {})
        self._db_path: Optional[str] = None
        self._conn: Optional[sqlite3.Connection] = None
        self._state = StoreState.UNCONFIGURED
        self._lock = threading.RLock()

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def db_path(self) -> Optional[str]:
        return self._db_path

    @property
    def is_connected(self) -> bool:
        return self._state is StoreState.CONNECTED

    def configure(self, config: Config) -> None:
        """Apply database.path, database.timeout and database.pragmas"""
        db_config = config.get_database_config()
        timeout = float(db_config.get("timeout", self.timeout))
        pragmas = dict(db_config.get("pragmas") or {})
        db_path = db_config.get("path")

        with self._lock:
            if db_path:
                self.set_path(str(db_path))
            self.timeout = timeout
            self.pragmas = pragmas

    def set_path(self, db_path: str) -> None:
        """
        Set the database location

        Args:
            db_path: Path to the database file, or ":memory:"

        Raises:
            ConfigurationError: If the path is empty or a connection was
                already opened with the current path
        """
        if not db_path:
            raise ConfigurationError("db path is empty")

        with self._lock:
            if self._state in (StoreState.CONNECTED, StoreState.DISCONNECTED):
                raise ConfigurationError(
                    f"db path is fixed to {self._db_path} once connected"
                )
            self._db_path = str(db_path)
            self._state = StoreState.CONFIGURED
            logger.debug(f"Database path set to {self._db_path}")

    def connect(self) -> None:
        """
        Open the connection

        Raises:
            ConfigurationError: If no path was set
            StoreConnectionError: If the database cannot be opened
        """
        with self._lock:
            if self._state is StoreState.UNCONFIGURED:
                raise ConfigurationError("db path is empty; call set_path() before connect()")
            if self._state is StoreState.CONNECTED:
                logger.debug(f"Already connected to {self._db_path}")
                return

            conn = None
            try:
                conn = sqlite3.connect(
                    self._db_path,
                    timeout=self.timeout,
                    check_same_thread=False,
                    isolation_level=None,
                )
                # sqlite opens lazily; read the header so bad files fail here
                conn.execute("PRAGMA schema_version").fetchone()
            except sqlite3.Error as e:
                if conn is not None:
                    conn.close()
                logger.error(f"Can't open database {self._db_path}: {e}")
                raise StoreConnectionError(f"can't open db {self._db_path}: {e}") from e

            self._apply_pragmas(conn)
            self._conn = conn
            self._state = StoreState.CONNECTED
            logger.info(f"Connected to database {self._db_path}")

    def _apply_pragmas(self, conn: sqlite3.Connection) -> None:
        for name, value in self.pragmas.items():
            try:
                conn.execute(f"PRAGMA {name}={value}").fetchall()
            except sqlite3.Error as e:
                logger.warning(f"Could not set PRAGMA {name}={value}: {e}")

    def disconnect(self) -> None:
        """
        Close the connection

        After a failed close the handle is dropped, so the next connect()
        opens a fresh connection.

        Raises:
            StoreConnectionError: If the close fails
        """
        with self._lock:
            if self._state is not StoreState.CONNECTED:
                logger.debug(f"Disconnect ignored in state {self._state.value}")
                return

            conn, self._conn = self._conn, None
            self._state = StoreState.DISCONNECTED
            try:
                conn.close()
            except sqlite3.Error as e:
                logger.error(f"Can't close database {self._db_path}: {e}")
                raise StoreConnectionError(f"can't close db {self._db_path}: {e}") from e
            logger.info(f"Disconnected from database {self._db_path}")

    def execute(self, sql: str) -> None:
        """
        Run one or more SQL statements, discarding any result rows

        Args:
            sql: Statement text (DDL/DML); several statements may be separated by ';'

        Raises:
            ConfigurationError: If no path was ever set
            StoreConnectionError: If not connected
            ExecutionError: If the database rejects the statement
        """
        with self._lock:
            if self._state is StoreState.UNCONFIGURED:
                raise ConfigurationError("db path is empty; call set_path() and connect() first")
            if self._state is not StoreState.CONNECTED:
                raise StoreConnectionError(f"not connected to {self._db_path}")

            # NUL bytes and lone surrogates raise ValueError before sqlite sees the text
            try:
                self._conn.executescript(sql)
            except (sqlite3.Error, ValueError) as e:
                logger.error(f"Can't execute sql: {e}")
                raise ExecutionError(str(e) or type(e).__name__, sql) from e

    def info(self) -> Dict[str, Any]:
        """Path, state and on-disk size of the database"""
        size_info = get_file_size(self._db_path or "")
        return {
            "path": self._db_path,
            "state": self._state.value,
            "exists": size_info["exists"],
            "size_bytes": size_info["size_bytes"],
            "formatted_size": format_size(size_info["size_bytes"]),
        }


# Process-wide helper
_sqlite_helper: Optional[SQLiteHelper] = None
_sqlite_helper_lock = threading.Lock()


def get_sqlite_helper() -> SQLiteHelper:
    """
    Get the process-wide SQLiteHelper

    The instance is built once, even when first requested from several
    threads at the same time.

    Example:
        from fanlog.storage import get_sqlite_helper
        db = get_sqlite_helper()
        db.set_path("app.db")
        db.connect()
        db.execute("CREATE TABLE IF NOT EXISTS t(x)")
    """
    global _sqlite_helper
    if _sqlite_helper is None:
        with _sqlite_helper_lock:
            if _sqlite_helper is None:
                _sqlite_helper = SQLiteHelper()
    return _sqlite_helper
