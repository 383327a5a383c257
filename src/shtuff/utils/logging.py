"""
Logging system for shtuff.

This module wires stdlib logging to the configuration system: a colored
console handler on stderr (stdout is where indicators and bars are drawn),
an optional rotating JSON file handler, and a performance timer for watched
tasks.
"""

import os
import sys
import json
import time
import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Optional, TextIO
from contextlib import contextmanager
from datetime import datetime


class Colors:
    """ANSI color codes for console output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    # Standard colors
    BLACK = '\033[30m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    # Bright colors
    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


def supports_color(stream: TextIO) -> bool:
    """Check if a stream is a terminal that supports color output."""
    if os.getenv('NO_COLOR'):
        return False

    if os.getenv('FORCE_COLOR'):
        return True

    # Not a terminal, or being piped
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False

    term = os.getenv('TERM', '').lower()
    return 'color' in term or term in ('xterm', 'xterm-256color', 'screen', 'linux')


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors to console output based on log level."""

    LEVEL_COLORS = {
        'DEBUG': Colors.BRIGHT_BLACK,
        'INFO': Colors.BRIGHT_BLUE,
        'WARNING': Colors.BRIGHT_YELLOW,
        'ERROR': Colors.BRIGHT_RED,
        'CRITICAL': Colors.BRIGHT_MAGENTA + Colors.BOLD,
    }

    def __init__(self, use_colors=True, stream: Optional[TextIO] = None):
        """Initialize the formatter.

        Args:
            use_colors: Whether to use colors in output
            stream: Stream the handler writes to, used for color detection
        """
        self.use_colors = use_colors and supports_color(stream or sys.stderr)

        # Console format: timestamp | level | module | message
        fmt = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        super().__init__(fmt, datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        formatted = super().format(record)

        if not self.use_colors:
            return formatted

        color = self.LEVEL_COLORS.get(record.levelname, '')
        if color:
            formatted = f"{color}{formatted}{Colors.RESET}"

        return formatted


class JSONFileFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs for file storage."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.name,
            'message': record.getMessage(),
            'extra': {}
        }

        for field in ('filename', 'lineno', 'funcName', 'process', 'thread'):
            if hasattr(record, field):
                log_entry['extra'][field] = getattr(record, field)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class PerformanceTimer:
    """Logs how long a watched task ran, and whether the watch failed."""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started: Optional[float] = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.log(self.level, f"Watching {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self._started
        outcome = "Finished" if exc_type is None else "Aborted"
        self.logger.log(self.level, f"{outcome} {self.operation} after {elapsed:.3f}s")


class LoggingManager:
    """Central logging manager for shtuff."""

    def __init__(self):
        self._initialized = False
        self._loggers: Dict[str, logging.Logger] = {}

    def setup_logging(self, config, verbose: bool = False, force_reinit: bool = False,
                      stream: Optional[TextIO] = None):
        """Setup logging based on configuration.

        Args:
            config: ShtuffConfig instance
            verbose: Enable verbose logging (overrides config)
            force_reinit: Force reinitialization even if already setup
            stream: Console stream (defaults to stderr)
        """
        if self._initialized and not force_reinit:
            return

        if verbose or config.app.verbose_logging:
            log_level = logging.DEBUG
        else:
            log_level = getattr(logging, config.app.log_level.value.upper(), logging.WARNING)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # Remove existing handlers to avoid duplicates
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        self._setup_console_handler(root_logger, log_level, stream or sys.stderr)

        if config.app.log_file:
            self._setup_file_handler(root_logger, config, log_level)

        self._initialized = True

        logger = self.get_logger('shtuff.logging')
        logger.debug(f"Logging initialized at {logging.getLevelName(log_level)}")

    def _setup_console_handler(self, root_logger: logging.Logger, log_level: int,
                               stream: TextIO):
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredConsoleFormatter(use_colors=True, stream=stream))
        root_logger.addHandler(console_handler)

    def _setup_file_handler(self, root_logger: logging.Logger, config, log_level: int):
        """Setup file logging handler with rotation."""
        try:
            log_file = Path(config.app.log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=config.app.max_log_size_mb * 1024 * 1024,
                backupCount=config.app.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(JSONFileFormatter())

            root_logger.addHandler(file_handler)

        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for the given name.

        Args:
            name: Logger name (typically __name__)
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def create_performance_timer(self, operation: str, level: int = logging.DEBUG) -> PerformanceTimer:
        logger = self.get_logger('shtuff.performance')
        return PerformanceTimer(logger, operation, level)


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config, verbose: bool = False, force_reinit: bool = False,
                  stream: Optional[TextIO] = None):
    """Setup logging based on configuration.

    Args:
        config: ShtuffConfig instance
        verbose: Enable verbose logging
        force_reinit: Force reinitialization
        stream: Console stream (defaults to stderr)
    """
    _logging_manager.setup_logging(config, verbose, force_reinit, stream)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return _logging_manager.get_logger(name)


@contextmanager
def log_performance(operation: str, level: int = logging.DEBUG):
    """Context manager for performance timing.

    Yields:
        PerformanceTimer instance
    """
    timer = _logging_manager.create_performance_timer(operation, level)
    with timer:
        yield timer
