"""
Error taxonomy for fanlog

Store errors are always raised to the caller of the failing operation.
Sink errors are only raised while the log facade is being built.
"""

from typing import Optional


class FanlogError(Exception):
    """Base class for all fanlog errors"""


class ConfigurationError(FanlogError):
    """A required setting is missing or can no longer be changed"""


class StoreConnectionError(FanlogError):
    """The store could not be opened or closed, or is not connected"""


class ExecutionError(FanlogError):
    """The store rejected a submitted statement"""

    def __init__(self, diagnostic: str, sql: Optional[str] = None):
        """
        Args:
            diagnostic: Error text reported by the store engine
            sql: Statement that failed
        """
        super().__init__(f"can't execute sql: {diagnostic}")
        self.diagnostic = diagnostic
        self.sql = sql


class SinkInitError(FanlogError):
    """A log sink backend could not be constructed"""

    def __init__(self, target: str, reason: str):
        super().__init__(f"can't open log sink {target}: {reason}")
        self.target = target
        self.reason = reason
