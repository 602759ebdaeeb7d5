"""Contextual logging configuration for mcp-jira."""

import contextvars
import logging
import os
import sys
import time
import types
import uuid
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIRECTORY = "logs"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Shared by every ContextualLogger; follows asyncio tasks.
_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "mcp_jira_log_context", default={}
)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return dict(_log_context.get())


def _format_context(context_data: Mapping[str, Any]) -> str:
    if not context_data:
        return "no-context"
    # operation=X,trace_id=Y,...
    return ",".join(f"{k}={v}" for k, v in context_data.items())


class ContextualLogger(logging.Logger):
    """Logger that stamps every record with the current operation context."""

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple[object, ...] | Mapping[str, object],
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        """Overrides _log method to include context."""
        extra = dict(extra or {})
        extra.setdefault("context", _format_context(_log_context.get()))
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)

    def set_context(self, **kwargs: Any) -> None:
        """
        Sets context values for the current task.

        Args:
            **kwargs: Key-value pairs to add to the context
        """
        _log_context.set({**_log_context.get(), **kwargs})

    def clear_context(self) -> None:
        """Removes all context data for the current task."""
        _log_context.set({})


class _ContextDefaultFilter(logging.Filter):
    """Fills ``context`` for records emitted by plain loggers sharing our handlers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = _format_context(_log_context.get())
        return True


class LoggingContextManager:
    """Context manager that scopes an operation name and trace id."""

    def __init__(
        self, logger: logging.Logger, operation: str, **context: Any
    ) -> None:
        """
        Initializes the logging context manager.

        Args:
            logger: Logger used for start/end records
            operation: Name of the operation being executed
            **context: Additional context data
        """
        self.logger = logger
        self.operation = operation
        self.context = context.copy()
        self.trace_id = self.context.pop("trace_id", None) or str(uuid.uuid4())[:8]
        self.start_time = 0.0
        self._token: contextvars.Token | None = None

    def __enter__(self) -> "LoggingContextManager":
        self.start_time = time.time()
        self._token = _log_context.set(
            {
                **_log_context.get(),
                **self.context,
                "operation": self.operation,
                "trace_id": self.trace_id,
            }
        )
        self.logger.info(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        duration = time.time() - self.start_time

        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {duration:.3f}s - {exc_val}"
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {duration:.3f}s"
            )

        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def setup_logger(
    name: str = "mcp-jira",
    level: str | None = None,
    log_to_file: bool = False,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configures and returns a contextual logger.

    Console output goes to stderr because stdout carries the stdio MCP transport.
    Calling this twice for the same name replaces the handlers instead of
    stacking them.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.); defaults to $LOG_LEVEL
        log_to_file: If True, also logs to a rotating file
        log_dir: Directory to store log files; defaults to $LOG_DIR
        log_format: Log format; defaults to $LOG_FORMAT

    Returns:
        Configured contextual logger
    """
    logging.setLoggerClass(ContextualLogger)
    logger = logging.getLogger(name)

    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))
    context_filter = _ContextDefaultFilter()

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    if log_to_file:
        log_directory = Path(log_dir or os.getenv("LOG_DIR", DEFAULT_LOG_DIRECTORY))
        log_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_directory / f"{name}.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return cast(ContextualLogger, logger)


def log_operation(
    logger: logging.Logger, operation: str, **context: Any
) -> LoggingContextManager:
    """
    Creates a context manager for operation logging.

    Args:
        logger: Logger for start/end records
        operation: Name of the operation
        **context: Additional context data

    Returns:
        Context manager configured for operation logging
    """
    return LoggingContextManager(logger, operation, **context)
