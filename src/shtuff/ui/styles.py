"""
Indicator style registry.

Every style is a fixed, non-empty sequence of frames. All styles share the
same frame interval; only the glyphs differ.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from ..utils.error_handling import ArgumentError, UnknownStyleError

FRAME_INTERVAL = 0.1

SPINNER_STYLE = "spinner"
DOTS_STYLE = "dots"
BARS_STYLE = "bars"
ARROWS_STYLE = "arrows"
CLOCK_STYLE = "clock"

DEFAULT_STYLE = SPINNER_STYLE


@dataclass(frozen=True)
class IndicatorStyle:
    """A named animation: the frames are drawn in order and wrap around."""
    name: str
    frames: Tuple[str, ...]

    def __post_init__(self):
        if not self.frames:
            raise ArgumentError(f"Indicator style '{self.name}' has no frames")

    def frame(self, index: int) -> str:
        return self.frames[index % len(self.frames)]


STYLES: Dict[str, IndicatorStyle] = {
    style.name: style for style in (
        IndicatorStyle(SPINNER_STYLE, ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")),
        IndicatorStyle(DOTS_STYLE, (".", "..", "...", "....")),
        IndicatorStyle(BARS_STYLE, ("▏", "▎", "▍", "▌", "▋", "▊", "▉", "█")),
        IndicatorStyle(ARROWS_STYLE, ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙")),
        IndicatorStyle(CLOCK_STYLE, (
            "🕐", "🕑", "🕒", "🕓", "🕔", "🕕", "🕖", "🕗", "🕘", "🕙", "🕚", "🕛"
        )),
    )
}


def list_styles() -> List[str]:
    """Names of all registered styles, in registration order."""
    return list(STYLES)


def get_style(style: Union[str, IndicatorStyle]) -> IndicatorStyle:
    """
    Resolve a style name to its registered ``IndicatorStyle``.

    Names are matched exactly (case-sensitive). An ``IndicatorStyle``
    instance is returned unchanged.

    Raises:
        ArgumentError: If no style was given
        UnknownStyleError: If the name is not registered
    """
    if isinstance(style, IndicatorStyle):
        return style

    if style is None or style == "":
        raise ArgumentError("No indicator style provided")

    if not isinstance(style, str) or style not in STYLES:
        raise UnknownStyleError(
            f"Unknown loading style: {style}. Valid styles: {', '.join(STYLES)}",
            details={"style": style},
        )

    return STYLES[style]
