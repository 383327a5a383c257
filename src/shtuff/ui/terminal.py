"""
Terminal control for shtuff.

All drawing goes through a ``Terminal`` instance instead of writing to
``sys.stdout`` directly. Tests pass a ``Terminal`` over an ``io.StringIO`` and
inspect exactly what would have reached the screen.
"""

import sys
from typing import List, Optional, TextIO

from ..utils.error_handling import ArgumentError
from ..utils.logging import Colors, supports_color


def color_names() -> List[str]:
    """Lower-case color names usable in configuration, e.g. ``"cyan"``."""
    return [
        name.lower() for name in vars(Colors)
        if name.isupper() and name not in ("RESET", "BOLD")
    ]


def color_code(name: str) -> str:
    """Look up an ANSI color code by its configuration name."""
    if not name or name.lower() not in color_names():
        raise ArgumentError(
            f"Unknown color '{name}'. Valid colors: {', '.join(color_names())}"
        )
    return getattr(Colors, name.upper())


class Cursor:
    """ANSI cursor and line control sequences."""
    HIDE = '\033[?25l'
    SHOW = '\033[?25h'
    SAVE = '\0337'
    RESTORE = '\0338'
    CLEAR_LINE = '\r\033[K'
    CLEAR_TO_END = '\033[K'

    @staticmethod
    def up(lines: int) -> str:
        return f'\033[{lines}A'


SUCCESS_GLYPH = "✓"
FAILURE_GLYPH = "✗"


class Terminal:
    """The one terminal line and cursor that shtuff draws on.

    Control sequences are always emitted; only colors depend on
    ``use_colors``. Error messages go to ``error_stream`` so that a rejected
    call leaves the drawing stream untouched.
    """

    def __init__(self, stream: Optional[TextIO] = None,
                 error_stream: Optional[TextIO] = None,
                 use_colors: Optional[bool] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.error_stream = error_stream if error_stream is not None else sys.stderr
        self.use_colors = supports_color(self.stream) if use_colors is None else use_colors

    @classmethod
    def from_config(cls, ui_config, stream: Optional[TextIO] = None,
                    error_stream: Optional[TextIO] = None) -> "Terminal":
        """Create a terminal honouring ``ui.color`` (auto, always or never)."""
        mode = getattr(ui_config.color, "value", ui_config.color)
        use_colors = {"always": True, "never": False}.get(mode)
        return cls(stream, error_stream, use_colors=use_colors)

    def colorize(self, text: str, color: Optional[str]) -> str:
        if not text or not color or not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def draw_line(self, text: str) -> None:
        """Overwrite the current line with ``text``."""
        self.write(f"\r{text}{Cursor.CLEAR_TO_END}")

    def clear_line(self) -> None:
        self.write(Cursor.CLEAR_LINE)

    def hide_cursor(self) -> None:
        self.write(Cursor.HIDE)

    def show_cursor(self) -> None:
        self.write(Cursor.SHOW)

    def success(self, message: str) -> None:
        self.write(self.colorize(f"{SUCCESS_GLYPH} {message}", Colors.GREEN) + "\n")

    def failure(self, message: str) -> None:
        self.write(self.colorize(f"{FAILURE_GLYPH} {message}", Colors.RED) + "\n")

    def error(self, message: str) -> None:
        """Print a red error line on the error stream."""
        text = f"{FAILURE_GLYPH} {message}"
        if self.use_colors:
            text = f"{Colors.RED}{text}{Colors.RESET}"
        self.error_stream.write(text + "\n")
        self.error_stream.flush()
