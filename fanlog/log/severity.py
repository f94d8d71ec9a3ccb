"""
Severity levels for the log facade
"""

import logging
from enum import IntEnum


class Severity(IntEnum):
    """
    Ordered record severity

    Values are standard logging level numbers so records pass through the
    stdlib logging core unchanged. Declaration order is severity order.
    """

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL

    @property
    def label(self) -> str:
        """Lowercase name used in rendered output"""
        return self.name.lower()

    @classmethod
    def from_level(cls, levelno: int) -> "Severity":
        """
        Map a logging level number onto a severity

        Returns the highest severity whose level does not exceed levelno.
        Anything below DEBUG is TRACE.
        """
        result = cls.TRACE
        for severity in cls:
            if severity <= levelno:
                result = severity
        return result

    def __str__(self) -> str:
        return self.label
