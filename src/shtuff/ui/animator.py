"""
Single-task animator: redraws ``<frame> <label>`` until the task ends.
"""

import itertools
import time
from typing import Callable, Optional, Union

from .styles import FRAME_INTERVAL, IndicatorStyle, get_style
from .terminal import Terminal
from ..core.tasks import as_handle
from ..utils.error_handling import reports_failures
from ..utils.logging import get_logger


class Animator:
    """Draws an indicator on the current line while a task is alive.

    Liveness is polled once per frame. ``sleep`` is injectable so tests can
    run the loop without real delays.
    """

    def __init__(self, terminal: Optional[Terminal] = None,
                 interval: float = FRAME_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep):
        self.terminal = terminal or Terminal()
        self.interval = interval
        self._sleep = sleep
        self.logger = get_logger(__name__)

    @reports_failures("animate")
    def animate(self, handle, style: Union[str, IndicatorStyle], label: str,
                color: Optional[str] = None) -> None:
        """
        Animate until ``handle`` stops being alive.

        The style is resolved before anything is drawn, so an unknown style
        never leaves a half-drawn line behind.

        Args:
            handle: Task to watch
            style: Style name or ``IndicatorStyle``
            label: Text drawn after the frame
            color: ANSI color code for frame and label
        """
        indicator = get_style(style)
        task = as_handle(handle)

        frames_drawn = 0
        for frame in itertools.cycle(indicator.frames):
            if not task.is_alive():
                break
            self.terminal.draw_line(self.terminal.colorize(f"{frame} {label}", color))
            frames_drawn += 1
            self._sleep(self.interval)

        self.logger.debug(f"Task {task.pid} ended after {frames_drawn} frames")
