"""
Logging configuration for drill-editor.

Exports run on a worker thread, so every record also carries its thread
name; the CSV file keeps it in its own column.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings
    from ..settings.logging import LoggingSettings

PROJECT_LOGGER = "drill_editor"

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(threadName)s : %(message)s"

# Loggers of libraries that are chatty at DEBUG
LIBRARY_LOGGERS = ("PIL", "urllib3", "requests", "qtawesome")


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class CSVFormatter(logging.Formatter):
    """One semicolon separated row per record, quoted for spreadsheets."""

    COLUMNS = ("time", "level", "elapsed", "thread", "logger", "line", "message")

    @staticmethod
    def _quote(value: str) -> str:
        return '"' + value.replace('"', '""').replace("\n", " | ") + '"'

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message} {self.formatException(record.exc_info)}"
        fields = (
            self.formatTime(record, self.datefmt),
            record.levelname,
            f"{int(record.relativeCreated)} ms",
            record.threadName or "",
            record.name,
            str(record.lineno),
            message,
        )
        return ";".join(self._quote(value) for value in fields)


def _console_handler(options: "LoggingSettings") -> logging.Handler:
    formatter_cls = ColoredFormatter if options.console_use_colors else logging.Formatter
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, options.console_log_level, logging.INFO))
    handler.setFormatter(formatter_cls(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(options: "LoggingSettings", log_path: Path) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not log_path.exists() or log_path.stat().st_size == 0

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=options.max_file_size_mb * 1024 * 1024,
        backupCount=options.backup_count,
        encoding="utf-8",
    )
    if write_header:
        handler.stream.write(";".join(CSVFormatter.COLUMNS) + "\n")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(settings: "AppSettings") -> Optional[Path]:
    """
    Install console and file handlers according to the logging settings.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        settings: AppSettings instance providing the logging subsystem

    Returns:
        Path of the log file, or None when file logging is off or failed
    """
    options = settings.logging

    # Root passes everything, handlers filter
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    logging.getLogger(PROJECT_LOGGER).setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if options.console_logging:
        root_logger.addHandler(_console_handler(options))

    log_path: Optional[Path] = None
    if options.file_logging:
        try:
            log_path = options.log_file_path
            root_logger.addHandler(_file_handler(options, log_path))
        except OSError as e:
            # Console logging stays usable without a log file
            root_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    library_level = getattr(logging, options.library_log_level, logging.INFO)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if options.console_logging:
        logger.debug(
            f"Console logging: {options.console_log_level} (colors: {options.console_use_colors})"
        )
    if log_path is not None:
        logger.debug(
            f"File logging: DEBUG at {log_path} "
            f"({options.max_file_size_mb} MB x {options.backup_count} backups)"
        )
    return log_path
