"""
Data model for rendered log records
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fanlog.log.severity import Severity


def record_severity(record: logging.LogRecord) -> Severity:
    """Severity of a stdlib record, derived from its level if not stamped"""
    severity = getattr(record, "severity", None)
    if isinstance(severity, Severity):
        return severity
    return Severity.from_level(record.levelno)


@dataclass(frozen=True)
class LogEntry:
    """The six fields every rendered record carries"""

    timestamp: datetime
    thread_id: int
    severity: Severity
    process_id: int
    process_name: str
    message: str

    @classmethod
    def from_record(cls, record: logging.LogRecord, process_name: Optional[str] = None) -> "LogEntry":
        """
        Build an entry from a stdlib record

        Args:
            record: The record to render
            process_name: Name shown for the process; defaults to the
                record's own process_name attribute, then processName
        """
        timestamp = getattr(record, "timestamp", None)
        if timestamp is None:
            timestamp = datetime.fromtimestamp(record.created)
        return cls(
            timestamp=timestamp,
            thread_id=record.thread,
            severity=record_severity(record),
            process_id=record.process,
            process_name=process_name or getattr(record, "process_name", None) or record.processName,
            message=record.getMessage(),
        )
