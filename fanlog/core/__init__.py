"""Core components: configuration and errors"""

from fanlog.core.config import Config
from fanlog.core.errors import (
    FanlogError,
    ConfigurationError,
    StoreConnectionError,
    ExecutionError,
    SinkInitError,
)

__all__ = [
    "Config",
    "FanlogError",
    "ConfigurationError",
    "StoreConnectionError",
    "ExecutionError",
    "SinkInitError",
]
