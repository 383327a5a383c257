"""
Progress bar renderer.

Draws ``LABEL [█████░░░░░]  50% (05/10)`` in place on the current line. The
renderer keeps no state: every call receives the full state and redraws the
whole bar, so calling it twice with the same arguments writes the same bytes
twice.

A bar can be pinned above output that scrolls underneath it: pass
``lines_above`` with the number of lines printed since the bar was first
drawn, and the cursor is moved up to the bar and back again.
"""

from typing import Optional

from .terminal import Cursor, Terminal
from ..utils.error_handling import ArgumentError, RangeError, reports_failures, validate_count
from ..utils.logging import Colors

FILLED_GLYPH = "█"
EMPTY_GLYPH = "░"


class ProgressBar:
    """Renders a labeled percentage bar on a ``Terminal``."""

    def __init__(self, terminal: Optional[Terminal] = None, config=None):
        if config is None:
            from ..config import get_config
            config = get_config().progress
        self.terminal = terminal or Terminal()
        self.config = config

    def validate(self, current, total, width=None) -> tuple:
        """
        Check the bar inputs and return them as ``(current, total, width)``.

        Validation happens in this order, and stops at the first problem:
        ``current`` present and numeric, ``total`` present, numeric and
        nonzero, ``width`` numeric and nonzero, ``current`` within ``total``.

        Raises:
            ArgumentError: For missing or non-numeric values
            RangeError: For values outside their allowed range
        """
        current = validate_count(current, "current")
        if current < 0:
            raise RangeError(f"current must be non-negative, got {current}")

        total = validate_count(total, "total")
        if total <= 0:
            raise RangeError(f"total must be a positive integer, got {total}")

        width = validate_count(width, "width", required=False)
        if width is None:
            width = self.config.width
        if width <= 0:
            raise RangeError(f"width must be a positive integer, got {width}")

        if current > total:
            raise RangeError(
                f"current ({current}) exceeds total ({total})",
                details={"current": current, "total": total},
            )

        return current, total, width

    def format(self, current, total, label: Optional[str] = None,
               width=None) -> str:
        """Build the bar text without any cursor movement."""
        current, total, width = self.validate(current, total, width)

        label = self.config.label if label is None else label

        percent = current * 100 // total
        filled = current * width // total
        empty = width - filled

        bar = (self.terminal.colorize(FILLED_GLYPH * filled, Colors.GREEN)
               + EMPTY_GLYPH * empty)
        count = f"({current:0{len(str(total))}d}/{total})"

        return f"{label} [{bar}] {percent:3d}% {count}"

    @reports_failures("progress")
    def render(self, current, total, label: Optional[str] = None, width=None,
               lines_above=0, done: bool = False) -> None:
        """
        Draw or update the bar in place.

        A trailing newline finalizes the bar when ``current == total``, or
        earlier when ``done`` is set. Nothing is written if validation fails.
        For a pinned bar the newline is written on the bar line itself, before
        the cursor returns below it.

        Args:
            current: Completed units, 0..total
            total: Units representing 100%
            label: Text before the bar (configured default if omitted)
            width: Number of glyphs in the bar (configured default if omitted)
            lines_above: Lines between the cursor and the pinned bar
            done: Finalize the bar before reaching ``total``
        """
        current, total, width = self.validate(current, total, width)
        bar = self.format(current, total, label, width)

        offset = validate_count(lines_above, "lines_above", required=False) or 0
        if offset < 0:
            raise RangeError(f"lines_above must be non-negative, got {offset}")
        if not isinstance(done, bool):
            raise ArgumentError(f"done must be a boolean, got {type(done).__name__}")

        parts = ["\r", bar]
        if done or current == total:
            parts.append("\n")
        if offset:
            parts = [Cursor.SAVE, Cursor.up(offset)] + parts + [Cursor.RESTORE]

        self.terminal.write("".join(parts))


def render(current, total, label: Optional[str] = None, width=None,
           lines_above=0, done: bool = False,
           terminal: Optional[Terminal] = None, config=None) -> None:
    """Draw or update a progress bar. See ``ProgressBar.render``."""
    if terminal is None or config is None:
        from ..config import get_config
        shtuff_config = get_config()
        terminal = terminal or Terminal.from_config(shtuff_config.ui)
        config = config or shtuff_config.progress
    ProgressBar(terminal, config).render(current, total, label, width, lines_above, done)
