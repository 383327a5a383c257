"""
shtuff utilities: logging and the error taxonomy.
"""

from .logging import (
    Colors,
    setup_logging,
    get_logger,
    log_performance,
)

from .error_handling import (
    ShtuffError,
    ArgumentError,
    UnknownStyleError,
    NotFoundError,
    RangeError,
    TaskTerminationError,
    OperationError,
    ConfigurationError,
    TaskFailure,
    reports_failures,
    validate_count,
)

__all__ = [
    # Logging utilities
    "Colors",
    "setup_logging",
    "get_logger",
    "log_performance",

    # Error handling utilities
    "ShtuffError",
    "ArgumentError",
    "UnknownStyleError",
    "NotFoundError",
    "RangeError",
    "TaskTerminationError",
    "OperationError",
    "ConfigurationError",
    "TaskFailure",
    "reports_failures",
    "validate_count",
]
