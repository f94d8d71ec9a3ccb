"""
Dual-sink log facade

A LogFacade owns one severity filter, one formatter and two sinks (a
rotating file and a console stream). Both sinks share the same filter and
formatter instances, so every accepted record is rendered identically on
both. Callers write through the SeverityLogger handle returned by
get_handle().
"""

import logging
from typing import List, Optional, TextIO

from fanlog.core.config import Config
from fanlog.core.errors import FanlogError, SinkInitError
from fanlog.log.attributes import get_process_name, install_global_attributes, uninstall_global_attributes
from fanlog.log.filters import SeverityFilter
from fanlog.log.formatter import RecordFormatter
from fanlog.log.severity import Severity
from fanlog.log.sinks import ConsoleSink, RotatingFileSink, parse_rotation_time
from fanlog.utils.logger import get_logger


logger = get_logger(__name__)


class SeverityLogger:
    """Logging handle that tags every message with a Severity"""

    def __init__(self, channel: logging.Logger):
        self._channel = channel

    @property
    def name(self) -> str:
        return self._channel.name

    def log(self, severity: Severity, message: str, *args, **kwargs) -> None:
        """
        Write one record to every sink that accepts it

        Args:
            severity: Record severity
            message: Message text, %-formatted with args when args are given
        """
        self._channel.log(int(Severity(severity)), message, *args, **kwargs)

    def trace(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.TRACE, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.ERROR, message, *args, **kwargs)

    def fatal(self, message: str, *args, **kwargs) -> None:
        self.log(Severity.FATAL, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        """Log at ERROR with the active exception's traceback"""
        kwargs.setdefault("exc_info", True)
        self.log(Severity.ERROR, message, *args, **kwargs)


class LogFacade:
    """Fan records out to a rotating file and a console stream"""

    def __init__(self, config: Optional[Config] = None, stream: Optional[TextIO] = None):
        """
        Args:
            config: Config instance; defaults are used when None
            stream: Console stream; sys.stderr when None
        """
        self.config = config or Config()
        self._stream = stream
        log_config = self.config.get_logging_config()

        self._channel = logging.getLogger(log_config.get("channel", "fanlog.records"))
        self._handle = SeverityLogger(self._channel)

        self.filter: Optional[SeverityFilter] = None
        self.formatter: Optional[RecordFormatter] = None
        self.file_sink: Optional[RotatingFileSink] = None
        self.console_sink: Optional[ConsoleSink] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def sinks(self) -> List[logging.Handler]:
        return [sink for sink in (self.file_sink, self.console_sink) if sink is not None]

    def initialize(self) -> None:
        """
        Build the filter, formatter and both sinks, then register the sinks

        Raises:
            FanlogError: If the facade is already initialized
            SinkInitError: If the file sink cannot open its target
        """
        if self._initialized:
            raise FanlogError("log facade is already initialized")

        log_filter = self._build_filter()
        formatter = self._build_format()
        file_sink = self._build_file_sink(log_filter, formatter)
        console_sink = self._build_console_sink(log_filter, formatter)

        install_global_attributes()

        self._channel.setLevel(Severity.TRACE)
        self._channel.propagate = False
        self._channel.addHandler(file_sink)
        self._channel.addHandler(console_sink)

        self.filter = log_filter
        self.formatter = formatter
        self.file_sink = file_sink
        self.console_sink = console_sink
        self._initialized = True

        logger.info(f"Log facade initialized: channel={self._channel.name}, file={file_sink.current_file}")

    def get_handle(self) -> SeverityLogger:
        """
        Get the shared logging handle

        Raises:
            FanlogError: If initialize() has not been called
        """
        if not self._initialized:
            raise FanlogError("log facade is not initialized")
        return self._handle

    def shutdown(self) -> None:
        """Detach and close both sinks; the console stream stays open"""
        if not self._initialized:
            return

        for sink in self.sinks:
            self._channel.removeHandler(sink)
            sink.close()

        uninstall_global_attributes()
        self.file_sink = None
        self.console_sink = None
        self._initialized = False
        logger.info(f"Log facade shut down: channel={self._channel.name}")

    def _build_filter(self) -> SeverityFilter:
        return SeverityFilter(Severity.INFO)

    def _build_format(self) -> RecordFormatter:
        return RecordFormatter(process_name=self.config.get("logging.process_name") or get_process_name())

    def _build_file_sink(self, log_filter: SeverityFilter, formatter: RecordFormatter) -> RotatingFileSink:
        log_config = self.config.get_logging_config()
        log_dir = log_config["log_dir"]

        try:
            sink = RotatingFileSink(
                log_dir,
                file_name=log_config.get("file_name", "log_%Y-%m-%d_%H-%M-%S.%f.log"),
                rotation_size=int(log_config.get("rotation_size", 10 * 1024 * 1024)),
                rotation_time=parse_rotation_time(log_config.get("rotation_time", "00:00:00")),
            )
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to open file sink in {log_dir}: {e}")
            raise SinkInitError(str(log_dir), str(e)) from e

        sink.addFilter(log_filter)
        sink.setFormatter(formatter)
        return sink

    def _build_console_sink(self, log_filter: SeverityFilter, formatter: RecordFormatter) -> ConsoleSink:
        sink = ConsoleSink(self._stream)
        sink.addFilter(log_filter)
        sink.setFormatter(formatter)
        return sink


# Process-wide facade
_log_facade: Optional[LogFacade] = None


def initialize_logging(config: Optional[Config] = None, stream: Optional[TextIO] = None) -> LogFacade:
    """
    Create and initialize the process-wide log facade

    This should be called once at application startup.

    Example:
        from fanlog.log import initialize_logging, get_log_handle, Severity
        initialize_logging()
        log = get_log_handle()
        log.log(Severity.INFO, "service started")
    """
    global _log_facade
    if _log_facade is not None and _log_facade.is_initialized:
        raise FanlogError("logging is already initialized")

    facade = LogFacade(config, stream)
    facade.initialize()
    _log_facade = facade
    return facade


def get_log_handle() -> SeverityLogger:
    """
    Get the handle of the process-wide log facade

    Raises:
        FanlogError: If initialize_logging() has not been called
    """
    if _log_facade is None:
        raise FanlogError("logging is not initialized; call initialize_logging() first")
    return _log_facade.get_handle()


def shutdown_logging() -> None:
    """Shut down the process-wide log facade, if any"""
    global _log_facade
    if _log_facade is None:
        return
    _log_facade.shutdown()
    _log_facade = None
