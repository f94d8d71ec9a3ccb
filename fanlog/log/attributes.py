"""
Global record attributes

Installs a logging record factory that stamps every record with its local
capture time and severity. The previous factory is chained, not replaced.
Every facade holds one install; the previous factory is restored when the
last one is released.
"""

import logging
import os
import sys
import threading
from datetime import datetime
from typing import Callable, Optional

from fanlog.log.severity import Severity

_previous_factory: Optional[Callable[..., logging.LogRecord]] = None
_install_count = 0
_install_lock = threading.Lock()


def get_process_name() -> str:
    """Name of the running program, as shown in rendered records"""
    argv0 = sys.argv[0] if sys.argv else ""
    name = os.path.basename(argv0)
    return name or "python"


def install_global_attributes() -> None:
    """Stamp "timestamp" and "severity" on every new record"""
    global _previous_factory, _install_count
    with _install_lock:
        _install_count += 1
        if _previous_factory is not None:
            return

        previous = logging.getLogRecordFactory()

        def factory(*args, **kwargs) -> logging.LogRecord:
            record = previous(*args, **kwargs)
            record.timestamp = datetime.fromtimestamp(record.created)
            record.severity = Severity.from_level(record.levelno)
            return record

        logging.setLogRecordFactory(factory)
        _previous_factory = previous


def uninstall_global_attributes(force: bool = False) -> None:
    """
    Release one install; the last release restores the previous factory

    Args:
        force: Restore the previous factory regardless of outstanding installs
    """
    global _previous_factory, _install_count
    with _install_lock:
        if _previous_factory is None:
            _install_count = 0
            return
        _install_count = 0 if force else _install_count - 1
        if _install_count > 0:
            return
        logging.setLogRecordFactory(_previous_factory)
        _previous_factory = None


def attributes_installed() -> bool:
    return _previous_factory is not None
