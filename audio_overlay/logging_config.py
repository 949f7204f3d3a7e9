"""Logging configuration for Audio Overlay."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

OK = logging.INFO + 5
logging.addLevelName(OK, "OK")

_COLORS = {
    "DEBUG": "\033[0;36m",
    "INFO": "\033[0;34m",
    "OK": "\033[0;32m",
    "WARNING": "\033[1;33m",
    "ERROR": "\033[0;31m",
    "CRITICAL": "\033[0;31m",
}
_RESET = "\033[0m"
_TAGS = {"WARNING": "WARN"}


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "execution_id"):
            log_entry["execution_id"] = record.execution_id

        if hasattr(record, "component"):
            log_entry["component"] = record.component

        if hasattr(record, "metrics"):
            log_entry["metrics"] = record.metrics

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """``[LEVEL] message`` lines, colored when writing to a terminal."""

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        tag = _TAGS.get(record.levelname, record.levelname)
        if self.use_color:
            tag = f"{_COLORS.get(record.levelname, '')}[{tag}]{_RESET}"
        else:
            tag = f"[{tag}]"
        line = f"{tag} {record.getMessage()}"
        metrics = getattr(record, "metrics", None)
        if metrics:
            line += ": " + " ".join(f"{key}={value}" for key, value in metrics.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ExecutionLogger:
    """Logger with execution context and structured logging."""

    def __init__(self, execution_id: str, component: str = "main"):
        """Initialize execution logger."""
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"audio_overlay.{component}")
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None

    def _log_with_context(self, level: int, message: str, **kwargs) -> None:
        """Log message with execution context."""
        extra = {
            "execution_id": self.execution_id,
            "component": self.component,
            **kwargs,
        }
        self.logger.log(level, message, extra=extra)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self._log_with_context(logging.INFO, message, **kwargs)

    def ok(self, message: str, **kwargs) -> None:
        """Log a success message with context."""
        self._log_with_context(OK, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message with context."""
        self._log_with_context(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def log_execution_start(self, **kwargs) -> None:
        """Log execution start with timestamp."""
        self.start_time = datetime.now(UTC)
        self.debug(
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **kwargs,
        )

    def log_execution_end(self, success: bool = True, **kwargs) -> None:
        """Log execution end with timestamp and duration."""
        self.end_time = datetime.now(UTC)

        duration_seconds = None
        if self.start_time:
            duration_seconds = (self.end_time - self.start_time).total_seconds()

        self.debug(
            f"Completed {self.component} execution",
            execution_end=self.end_time.isoformat(),
            execution_duration_seconds=duration_seconds,
            execution_success=success,
            **kwargs,
        )

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        """Log execution metrics."""
        self.debug("Execution metrics", metrics=metrics)


def setup_logging(log_level: str = "INFO", log_format: str = "text", stream: TextIO | None = None) -> None:
    """Setup logging for the application.

    Log records go to stderr unless another stream is given; stdout is kept
    for dry-run command output.
    """
    stream = stream or sys.stderr
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    if log_format == "json":
        console_handler.setFormatter(StructuredFormatter())
    else:
        isatty = getattr(stream, "isatty", None)
        console_handler.setFormatter(ConsoleFormatter(use_color=bool(isatty and isatty())))
    root_logger.addHandler(console_handler)


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger for a component."""
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    return ExecutionLogger(execution_id, component)
