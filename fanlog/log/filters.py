"""
Severity filter shared by every sink
"""

import logging

from fanlog.log.models import record_severity
from fanlog.log.severity import Severity


class SeverityFilter(logging.Filter):
    """Accept records whose severity is at or above a fixed threshold"""

    def __init__(self, threshold: Severity = Severity.INFO):
        super().__init__()
        self._threshold = Severity(threshold)

    @property
    def threshold(self) -> Severity:
        return self._threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record_severity(record) >= self._threshold
