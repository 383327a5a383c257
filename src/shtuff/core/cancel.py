"""
Cancellation of a tracked task.
"""

import signal
from typing import Optional

from .tasks import as_handle
from ..ui.terminal import Terminal
from ..utils.error_handling import NotFoundError, reports_failures
from ..utils.logging import get_logger

logger = get_logger(__name__)


@reports_failures("cancel")
def cancel(handle, sig: int = signal.SIGTERM, terminal: Optional[Terminal] = None) -> int:
    """
    Ask a task to stop and block until it has exited.

    If a monitor is currently watching the task, the handle is left for the
    monitor to reap, so the watch still prints its verdict for the forced
    exit. Otherwise this call reaps the task itself.

    Args:
        handle: ``TaskHandle`` or ``subprocess.Popen``
        sig: Signal to send

    Returns:
        The task's exit code (negative signal number when killed by ``sig``)

    Raises:
        ArgumentError: If the handle is empty or invalid
        NotFoundError: If the handle was already consumed
        TaskTerminationError: If the signal could not be delivered,
            including when the task had already exited
    """
    task = as_handle(handle)
    if not task.exists():
        raise NotFoundError(f"Task {task.pid} does not exist", details={"pid": task.pid})

    watched = task.watched
    task.terminate(sig)
    exit_code = task.join() if watched else task.wait()

    logger.debug(f"Cancelled task {task.pid}, exit code {exit_code}")
    return exit_code
