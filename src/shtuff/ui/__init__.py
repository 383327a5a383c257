"""
Terminal rendering for shtuff: the terminal wrapper, indicator styles, the
single-task animator and the progress bar.

``animator`` and ``progress`` are imported from their modules directly; this
package only exposes the leaf modules so that ``shtuff.core`` can depend on
it without an import cycle.
"""

from .terminal import Terminal, Cursor, color_code, color_names
from .styles import (
    IndicatorStyle,
    STYLES,
    FRAME_INTERVAL,
    DEFAULT_STYLE,
    get_style,
    list_styles,
)

__all__ = [
    "Terminal",
    "Cursor",
    "color_code",
    "color_names",
    "IndicatorStyle",
    "STYLES",
    "FRAME_INTERVAL",
    "DEFAULT_STYLE",
    "get_style",
    "list_styles",
]
