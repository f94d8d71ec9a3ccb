"""Log facade: one handle, two sinks, shared filter and format"""

from fanlog.log.severity import Severity
from fanlog.log.models import LogEntry
from fanlog.log.filters import SeverityFilter
from fanlog.log.formatter import RecordFormatter
from fanlog.log.sinks import RotatingFileSink, ConsoleSink
from fanlog.log.facade import (
    LogFacade,
    SeverityLogger,
    initialize_logging,
    get_log_handle,
    shutdown_logging,
)

__all__ = [
    "Severity",
    "LogEntry",
    "SeverityFilter",
    "RecordFormatter",
    "RotatingFileSink",
    "ConsoleSink",
    "LogFacade",
    "SeverityLogger",
    "initialize_logging",
    "get_log_handle",
    "shutdown_logging",
]
