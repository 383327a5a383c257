"""
shtuff - watch background tasks and draw progress in the terminal.

    from shtuff import launch, watch, DisplayOptions

    handle = launch(["tar", "czf", "backup.tgz", "data/"])
    exit_code = watch(handle, DisplayOptions(
        label="Archiving",
        success_label="Archive written",
        failure_label="Archive failed",
    ))
"""

__version__ = "0.1.0"

from .utils.error_handling import (
    ShtuffError,
    ArgumentError,
    UnknownStyleError,
    NotFoundError,
    RangeError,
    TaskTerminationError,
    OperationError,
    ConfigurationError,
    TaskFailure,
)
from .ui.terminal import Terminal
from .ui.styles import IndicatorStyle, STYLES, get_style, list_styles
from .core.tasks import TaskHandle, ProcessHandle, as_handle, launch
from .ui.animator import Animator
from .ui.progress import ProgressBar, render
from .core.monitor import DisplayOptions, Monitor, watch
from .core.cancel import cancel

__all__ = [
    "__version__",
    # Errors
    "ShtuffError",
    "ArgumentError",
    "UnknownStyleError",
    "NotFoundError",
    "RangeError",
    "TaskTerminationError",
    "OperationError",
    "ConfigurationError",
    "TaskFailure",
    # Rendering
    "Terminal",
    "IndicatorStyle",
    "STYLES",
    "get_style",
    "list_styles",
    "Animator",
    "ProgressBar",
    "render",
    # Tasks
    "TaskHandle",
    "ProcessHandle",
    "as_handle",
    "launch",
    "DisplayOptions",
    "Monitor",
    "watch",
    "cancel",
]
