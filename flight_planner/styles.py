"""Map small view states to colour tokens."""

from typing import NamedTuple, Optional

GREEN = "#28a745"
RED = "#dc3545"
AMBER = "#ffc107"
BLUE = "#17a2b8"
GREY = "#6c757d"
PURPLE = "#667eea"


class TrendStyle(NamedTuple):
    color: str
    background: str


TREND_STYLES = {
    "down": TrendStyle(GREEN, "#f0fff4"),
    "up": TrendStyle(RED, "#fff0f0"),
    "stable": TrendStyle(AMBER, "#fffbf0"),
}
# No history yet, or a new record low
DEFAULT_TREND_STYLE = TrendStyle(BLUE, "#f0fbfd")


def trend_style(trend: Optional[str]) -> TrendStyle:
    return TREND_STYLES.get(trend or "", DEFAULT_TREND_STYLE)


def timeline_border(is_best: bool) -> str:
    return GREEN if is_best else PURPLE


def open_status(is_open: Optional[bool]) -> tuple[str, str]:
    """Label and colour for a tri-state opening status."""
    if is_open is None:
        return "營業狀態未知", GREY
    if is_open:
        return "營業中", GREEN
    return "已休息", RED


def direction_color(is_faster: bool) -> str:
    return GREEN if is_faster else RED
