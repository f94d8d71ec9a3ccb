"""
Sink backends for the log facade

RotatingFileSink writes to timestamp-named files and rotates on size or at
a daily time of day, whichever comes first. ConsoleSink writes to an
existing stream that it never closes.
"""

import logging
import logging.handlers
import sys
import time
from datetime import datetime, timedelta, time as dtime
from pathlib import Path
from typing import Optional, TextIO, Union

from fanlog.utils.file_size import format_size, get_file_size
from fanlog.utils.logger import get_logger


logger = get_logger(__name__)

DEFAULT_FILE_NAME = "log_%Y-%m-%d_%H-%M-%S.%f.log"
DEFAULT_ROTATION_SIZE = 10 * 1024 * 1024
DEFAULT_ROTATION_TIME = dtime(0, 0, 0)


def parse_rotation_time(value: Union[str, dtime]) -> dtime:
    """
    Parse a HH:MM[:SS] string into a time of day

    Raises:
        ValueError: If the string is not a valid time of day
    """
    if isinstance(value, dtime):
        return value
    parts = [int(part) for part in str(value).split(":")]
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid rotation time: {value!r}")
    return dtime(*parts)


class _CountingSinkMixin:
    """Count write failures instead of raising them to the logging caller"""

    failures = 0
    last_failure_at: Optional[datetime] = None

    def handleError(self, record):
        self.failures += 1
        self.last_failure_at = datetime.now()
        super().handleError(record)


class RotatingFileSink(_CountingSinkMixin, logging.handlers.BaseRotatingHandler):
    """File backend with size and time-of-day rotation"""

    def __init__(
        self,
        log_dir: Union[str, Path],
        file_name: str = DEFAULT_FILE_NAME,
        rotation_size: int = DEFAULT_ROTATION_SIZE,
        rotation_time: dtime = DEFAULT_ROTATION_TIME,
        encoding: str = "utf-8",
    ):
        """
        Open the first log file

        Args:
            log_dir: Directory that receives the log files
            file_name: strftime pattern evaluated when each file is opened
            rotation_size: Size in bytes at which a new file is started
            rotation_time: Local time of day at which a new file is started

        Raises:
            OSError: If the directory or the file cannot be created
        """
        if rotation_size <= 0:
            raise ValueError("rotation_size must be positive")

        self.log_dir = Path(log_dir).absolute()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.file_name = file_name
        self.rotation_size = rotation_size
        self.rotation_time = rotation_time

        opened_at = datetime.now()
        super().__init__(str(self._new_file_path(opened_at)), mode="a", encoding=encoding, delay=False)
        self.opened_at = opened_at
        self.rollover_at = self._compute_rollover(opened_at)

    @property
    def current_file(self) -> Path:
        return Path(self.baseFilename)

    def _new_file_path(self, when: datetime) -> Path:
        """Name for a file opened at `when`, never an existing file"""
        path = self.log_dir / when.strftime(self.file_name)
        counter = 1
        while path.exists():
            path = self.log_dir / f"{when.strftime(self.file_name)}.{counter}"
            counter += 1
        return path

    def _compute_rollover(self, opened_at: datetime) -> float:
        """Timestamp of the first rotation boundary after opened_at"""
        boundary = datetime.combine(opened_at.date(), self.rotation_time)
        if boundary <= opened_at:
            boundary += timedelta(days=1)
        return boundary.timestamp()

    def shouldRollover(self, record: logging.LogRecord) -> bool:
        if self.stream is None:
            self.stream = self._open()

        if time.time() >= self.rollover_at:
            return True

        msg = "%s\n" % self.format(record)
        self.stream.seek(0, 2)
        position = self.stream.tell()
        # An empty file always takes the record, however large
        if not position:
            return False
        return position + len(msg.encode(self.encoding or "utf-8")) >= self.rotation_size

    def doRollover(self):
        closed_file = self.current_file
        if self.stream:
            self.stream.close()
            self.stream = None

        opened_at = datetime.now()
        self.baseFilename = str(self._new_file_path(opened_at))
        self.stream = self._open()
        self.opened_at = opened_at
        self.rollover_at = self._compute_rollover(opened_at)

        closed_size = get_file_size(closed_file)["size_bytes"]
        logger.debug(
            f"Log rotation: closed {closed_file.name} ({format_size(closed_size)}), "
            f"new log file at {self.baseFilename}"
        )


class ConsoleSink(_CountingSinkMixin, logging.StreamHandler):
    """Stream backend that borrows an existing stream"""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream if stream is not None else sys.stderr)

    def close(self):
        # The stream is borrowed, so flush it and leave it open
        self.flush()
        super().close()
