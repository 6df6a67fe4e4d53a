#!/usr/bin/env python3
"""Structured logging for pyextglob.

Messages carry key-value context rendered after the text
(``message | key=value ...``). The library is quiet by default: scanner
degradation, compilation and cache events are DEBUG, and an exhausted
search is a WARNING. Host applications raise the level through
configuration (``pyextglob.logging.level``) or :meth:`Logger.set_level`.

Example:
    >>> logger = Logger(level=LogLevel.DEBUG)
    >>> logger.debug("Compiled pattern", pattern="*(a|b)", dialect="bash")
"""

import logging
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

DEFAULT_LOGGER_NAME = "pyextglob"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


class Logger:
    """Key-value logger over a standard library logger.

    Output never reaches the host application's root logger; the logger
    writes only to its own handlers.
    """

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Name of the underlying ``logging`` logger
            level: Minimum level to output
            handlers: Handlers replacing the default stderr handler
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)
        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: LogLevel or a level name such as "debug"
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        """Get current log level."""
        return LogLevel(self.logger.level)

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if context:
            msg = f"{msg} | " + " ".join(f"{k}={v!r}" for k, v in context.items())
        self.logger.log(level, msg, extra={"context": context})

    def debug(self, msg: str, **context) -> None:
        """Log debug message with context key-value pairs."""
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        """Log info message with context key-value pairs."""
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message with context key-value pairs."""
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        """Log error message with context key-value pairs."""
        self._log(LogLevel.ERROR, msg, context)


_global_logger: Optional[Logger] = None


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> Logger:
    """Get or create the shared logger.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Optional[Logger]) -> None:
    """Install the shared logger (None resets to lazy creation)."""
    global _global_logger
    _global_logger = logger
