"""
Task monitor: watch one running task, then report how it ended.

A watch goes through Idle -> Animating -> Reaping -> Reporting -> Done. The
monitor is a passive observer: it has no timeout and never stops the task
itself. The only way to end a watch early is to end the task, for example
with ``shtuff.cancel``; the forced exit is then reported like any other.
"""

from dataclasses import dataclass
from typing import Optional

from .tasks import TaskHandle, as_handle
from ..ui.animator import Animator
from ..ui.styles import get_style
from ..ui.terminal import Terminal, color_code
from ..utils.error_handling import reports_failures
from ..utils.logging import get_logger, log_performance


@dataclass(frozen=True)
class DisplayOptions:
    """What to show while a task runs and after it ends.

    A missing ``success_label`` or ``failure_label`` means nothing is printed
    for that outcome. ``style`` and ``color`` fall back to the monitor
    configuration.
    """
    label: str = "Processing"
    style: Optional[str] = None
    success_label: Optional[str] = None
    failure_label: Optional[str] = None
    color: Optional[str] = None


class Monitor:
    """Watches tasks on one terminal with one monitor configuration."""

    def __init__(self, terminal: Optional[Terminal] = None, config=None,
                 animator: Optional[Animator] = None):
        if config is None:
            from ..config import get_config
            config = get_config().monitor
        self.terminal = terminal or Terminal()
        self.config = config
        self.animator = animator or Animator(self.terminal, interval=config.frame_interval)
        self.logger = get_logger(__name__)

    def _claim_handle(self, handle) -> TaskHandle:
        task = as_handle(handle)
        task.claim()
        return task

    def _run(self, task: TaskHandle, options: DisplayOptions) -> int:
        style = get_style(options.style or self.config.default_style)
        color = color_code(options.color or self.config.indicator_color)

        self.logger.debug(f"Watching task {task.pid} with style '{style.name}'")

        self.terminal.hide_cursor()
        try:
            with log_performance(f"task {task.pid}"):
                self.animator.animate(task, style, options.label, color)
                return task.reap()
        finally:
            self.terminal.clear_line()
            self.terminal.show_cursor()

    @reports_failures("watch")
    def watch(self, handle, options: Optional[DisplayOptions] = None) -> int:
        """
        Animate until the task ends, then print its verdict.

        Args:
            handle: ``TaskHandle`` or ``subprocess.Popen`` of a running task
            options: Labels, style and color for this watch

        Returns:
            The task's exit code, unchanged

        Raises:
            ArgumentError: If the handle is empty or the style/color unknown
            NotFoundError: If the handle no longer refers to a task
        """
        options = options or DisplayOptions()
        task = self._claim_handle(handle)
        try:
            exit_code = self._run(task, options)
        finally:
            task.release()

        if exit_code == 0:
            if options.success_label:
                self.terminal.success(options.success_label)
        elif options.failure_label:
            self.terminal.failure(options.failure_label)

        self.logger.debug(f"Task {task.pid} exited with code {exit_code}")
        return exit_code


def watch(handle, options: Optional[DisplayOptions] = None,
          terminal: Optional[Terminal] = None, config=None) -> int:
    """Watch ``handle`` until it ends and return its exit code. See ``Monitor.watch``."""
    if terminal is None or config is None:
        from ..config import get_config
        shtuff_config = get_config()
        terminal = terminal or Terminal.from_config(shtuff_config.ui)
        config = config or shtuff_config.monitor
    return Monitor(terminal, config).watch(handle, options)
