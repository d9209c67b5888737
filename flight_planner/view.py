"""
View state shared by the controllers and the renderers.

Controllers never touch a UI toolkit. They own named ``Region`` objects and
fill them with the pydantic view models below; a renderer (HTML, Streamlit,
plain text) reads the regions afterwards.
"""

import logging
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field

from flight_planner.models.flights import PackingItem

_UNSET = object()


class Region:
    """A toggleable area of the screen with its current content."""

    def __init__(self, name: str):
        self.name = name
        self.visible = False
        self.content: Any = None

    def show(self, content: Any = _UNSET) -> None:
        if content is not _UNSET:
            self.content = content
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def clear(self) -> None:
        self.content = None
        self.visible = False

    def __repr__(self) -> str:
        return f"Region({self.name!r}, visible={self.visible})"


class Panel:
    """A set of regions owned by one controller."""

    REGIONS: tuple[str, ...] = ()

    def __init__(self):
        self.regions = {name: Region(name) for name in self.REGIONS}

    def region(self, name: str) -> Region:
        return self.regions[name]

    def reset(self) -> None:
        """Hide every region of this panel."""
        for region in self.regions.values():
            region.hide()


class ErrorCard(BaseModel):
    message: str = "無法顯示資訊"


class MessageCard(BaseModel):
    """Inline notice inside a result region."""

    message: str
    icon: str = "fa-info-circle"
    tone: str = Field("info", description="info or error")


class EmptyState(BaseModel):
    title: str
    icon: str = "fa-search"
    message: str = ""
    suggestions: list[str] = Field(default_factory=list)


class FlightCard(BaseModel):
    route: str
    duration: str
    red_eye: bool = False
    airline: str
    time_range: str
    stops: int = 0
    flight_number: Optional[str] = None
    price: str
    currency: str


class AdviceCard(BaseModel):
    advice: str = ""
    current: str
    average: str
    diff: str
    low: str
    color: str
    background: str


class WeatherCard(BaseModel):
    header: str
    header_icon: str
    temperature: str
    condition: str = ""
    humidity: Any = None
    wind: Any = None
    rain_chance: float = 0
    icon_url: Optional[str] = None


class WeatherView(BaseModel):
    origin: Optional[WeatherCard] = None
    destination: Optional[WeatherCard] = None
    travel_advice: Optional[str] = None
    packing_list: Optional[list[PackingItem]] = None


class RateCard(BaseModel):
    code: str
    rate: str
    name: str


class ExchangeView(BaseModel):
    base_currency: str
    last_updated: str
    rates: list[RateCard] = Field(default_factory=list)


class FlightResultsView(BaseModel):
    count_text: str
    cards: list[Union[FlightCard, ErrorCard]] = Field(default_factory=list)
    empty: Optional[EmptyState] = None


class TimelineItem(BaseModel):
    date: str
    week: int
    price: str
    best: bool = False
    border_color: str


class TrackingView(BaseModel):
    min_price: str
    avg_price: str
    max_price: str
    best_date: str
    recommendation: str
    timeline: list[TimelineItem] = Field(default_factory=list)
    closing: str


class ConversionView(BaseModel):
    original_amount: str
    from_currency: str
    converted_amount: str
    to_currency: str
    rate: str
    reverse_rate: str
    last_updated: str


class TimeDiffView(BaseModel):
    from_zone: str
    to_zone: str
    signed_diff: str
    speed_word: str
    hours: str
    color: str

    @property
    def relation(self) -> str:
        return (
            f"目標時區 {self.to_zone} 比起始時區 {self.from_zone} "
            f"{self.speed_word} {self.hours} 小時"
        )


class AttractionCard(BaseModel):
    name: str
    category: str
    rating: str
    review_count: int = 0
    distance: str
    price: str
    status: str
    status_color: str
    address: str = ""
    phone: str = ""
    website: str = ""


class AttractionsView(BaseModel):
    header: str
    cards: list[Union[AttractionCard, ErrorCard]] = Field(default_factory=list)
    empty: Optional[EmptyState] = None


def isolate(
    index: int,
    raw: Any,
    present: Callable[[Any], BaseModel],
    message: str,
    logger: logging.Logger,
) -> BaseModel:
    """Present one result item, substituting an error card if it fails."""
    try:
        return present(raw)
    except Exception as e:
        logger.error(f"Failed to render item {index + 1}: {e!r}")
        return ErrorCard(message=message)
