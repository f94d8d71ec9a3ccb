"""
fanlog - Dual-sink logging facade and single-connection SQLite helper

One logging handle writes every record to a rotating log file and to the
console under a shared severity filter and format. A process-wide
SQLiteHelper serializes access to a single SQLite connection.
"""

from fanlog.core.config import Config
from fanlog.core.errors import (
    FanlogError,
    ConfigurationError,
    StoreConnectionError,
    ExecutionError,
    SinkInitError,
)
from fanlog.log import LogFacade, Severity, initialize_logging, get_log_handle, shutdown_logging
from fanlog.storage import SQLiteHelper, StoreState, get_sqlite_helper

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FanlogError",
    "ConfigurationError",
    "StoreConnectionError",
    "ExecutionError",
    "SinkInitError",
    "LogFacade",
    "Severity",
    "initialize_logging",
    "get_log_handle",
    "shutdown_logging",
    "SQLiteHelper",
    "StoreState",
    "get_sqlite_helper",
]
