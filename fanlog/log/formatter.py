"""
Record formatter shared by every sink

Output layout:
    [YYYY-MM-DD HH:MM:SS.ffffff] [thread-id] [severity] [process-id] [process-name] message
"""

import logging
from typing import Optional

from fanlog.log.models import LogEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


class RecordFormatter(logging.Formatter):
    """Render records with the fixed six-field bracketed template"""

    template = "[{timestamp}] [{thread_id}] [{severity}] [{process_id}] [{process_name}] {message}"

    def __init__(self, process_name: Optional[str] = None):
        super().__init__()
        self.process_name = process_name

    def format_entry(self, entry: LogEntry) -> str:
        """Render a single entry without trailing newline"""
        return self.template.format(
            timestamp=entry.timestamp.strftime(TIMESTAMP_FORMAT),
            thread_id=entry.thread_id,
            severity=entry.severity.label,
            process_id=entry.process_id,
            process_name=entry.process_name,
            message=entry.message,
        )

    def format(self, record: logging.LogRecord) -> str:
        line = self.format_entry(LogEntry.from_record(record, self.process_name))

        # Tracebacks follow the line, as logging.Formatter does
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        if record.stack_info:
            line = f"{line}\n{self.formatStack(record.stack_info)}"
        return line
