import logging
from typing import Iterable

from flight_planner.view import Panel

logger = logging.getLogger(__name__)

TABS = ("search", "tracking", "currency", "timezone", "attractions")
INITIAL_TAB = "search"


class TabController:
    """Top-level view mode.

    Switching tabs, even to the current one, hides every result, error and
    loading region of every registered panel before anything else renders.
    """

    def __init__(self, panels: Iterable[Panel], tabs: Iterable[str] = TABS):
        self.tabs = tuple(tabs)
        if INITIAL_TAB not in self.tabs:
            raise ValueError(f"Tab list must contain {INITIAL_TAB!r}")
        self.panels = list(panels)
        self.current = INITIAL_TAB
        self.select(INITIAL_TAB)

    def is_active(self, tab: str) -> bool:
        return tab == self.current

    def select(self, tab: str) -> None:
        if tab not in self.tabs:
            raise ValueError(f"Unknown tab: {tab}")

        self.current = tab
        for panel in self.panels:
            panel.reset()
        logger.debug(f"Switched to tab {tab}")
