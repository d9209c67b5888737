"""
Flight search orchestration.

One search issues a single request and fans the response out to the result
list, the price advice card, the weather panel and the exchange panel. All
failures end in this controller's error region.
"""

import logging
from typing import Union

from pydantic import BaseModel, ValidationError as PayloadError

from flight_planner.api import ApiClient
from flight_planner.config import DEFAULT_CURRENCY
from flight_planner.errors import (
    PlannerError,
    RenderError,
    TransportError,
    ValidationError,
    describe_payload_error,
)
from flight_planner.formatters import (
    format_datetime,
    format_duration,
    format_price,
    format_rate,
    format_time,
    packing_list,
    round_half_up,
)
from flight_planner.models.flights import (
    ExchangeBundle,
    FlightOffer,
    FlightSearchData,
    PriceAdvice,
    SearchCriteria,
    WeatherBundle,
    WeatherSummary,
    currency_name,
)
from flight_planner.styles import trend_style
from flight_planner.view import (
    AdviceCard,
    EmptyState,
    ExchangeView,
    FlightCard,
    FlightResultsView,
    Panel,
    RateCard,
    WeatherCard,
    WeatherView,
    isolate,
)

logger = logging.getLogger(__name__)

FLIGHT_SEARCH_PATH = "/api/flights/search"
SEARCH_FAILED = "搜尋失敗"
NO_DATA = "尚無資料"
PLACEHOLDER = "--"


def present_flight(offer: FlightOffer) -> FlightCard:
    origin = offer.origin.code if offer.origin and offer.origin.code else "未知"
    destination = (
        offer.destination.code if offer.destination and offer.destination.code else "未知"
    )
    return FlightCard(
        route=f"{origin} → {destination}",
        duration=format_duration(offer.duration),
        red_eye=offer.is_red_eye,
        airline=offer.airline or "未知航空公司",
        time_range=f"{format_time(offer.departure)} - {format_time(offer.arrival)}",
        stops=offer.stops or 0,
        flight_number=offer.flight_number or None,
        price=format_price(offer.price or 0),
        currency=offer.currency or DEFAULT_CURRENCY,
    )


def present_offer(raw) -> FlightCard:
    if not isinstance(raw, dict):
        raise RenderError(f"flight record must be an object, got {type(raw).__name__}")
    return present_flight(FlightOffer.model_validate(raw))


def present_advice(advice: PriceAdvice) -> AdviceCard:
    """Fill the advice card; without history the comparison shows placeholders."""
    style = trend_style(advice.trend)
    has_history = advice.history_avg > 0
    return AdviceCard(
        advice=advice.advice,
        current=f"${format_price(advice.current_lowest)}",
        average=f"${format_price(advice.history_avg)}" if has_history else NO_DATA,
        diff=f"{advice.diff_percent:.1f}%" if has_history else PLACEHOLDER,
        low=f"${format_price(advice.history_low)}" if advice.history_low > 0 else PLACEHOLDER,
        color=style.color,
        background=style.background,
    )


def present_weather_side(weather: WeatherSummary, header_icon: str) -> WeatherCard:
    temperature = (
        f"{round_half_up(weather.avg_temp)}°C" if weather.avg_temp is not None else "--°C"
    )
    return WeatherCard(
        header=f"{weather.city} 天氣",
        header_icon=header_icon,
        temperature=temperature,
        condition=weather.condition,
        humidity=weather.humidity,
        wind=weather.wind_speed,
        rain_chance=weather.chance_of_rain or 0,
        icon_url=f"https:{weather.icon}" if weather.icon else None,
    )


def present_weather(bundle: WeatherBundle) -> WeatherView:
    """Weather for both ends, plus a packing list derived from the destination."""
    view = WeatherView(travel_advice=bundle.travel_advice or None)
    if bundle.origin_weather:
        view.origin = present_weather_side(bundle.origin_weather, "fa-plane-departure")
    if bundle.destination_weather:
        view.destination = present_weather_side(
            bundle.destination_weather, "fa-plane-arrival"
        )
        view.packing_list = packing_list(bundle.destination_weather)
    return view


def present_exchange(bundle: ExchangeBundle) -> ExchangeView:
    return ExchangeView(
        base_currency=bundle.base_currency,
        last_updated=format_datetime(bundle.last_updated),
        rates=[
            RateCard(code=code, rate=format_rate(rate, 4), name=currency_name(code))
            for code, rate in bundle.rates.items()
        ],
    )


class FlightSearchController(Panel):
    """Runs a flight search and fills the search tab regions."""

    REGIONS = ("loading", "error", "results", "advice", "weather", "exchange")

    def __init__(self, client: ApiClient):
        super().__init__()
        self.client = client
        self._latest_request = 0

    def search(self, criteria: Union[SearchCriteria, dict]) -> None:
        """Validate, request and render. Never raises."""
        self.region("results").hide()
        self.region("error").hide()
        # Clear the previous advice so it cannot linger next to new results
        self.region("advice").hide()

        self._latest_request += 1
        request_id = self._latest_request
        self.region("loading").show()

        try:
            criteria = self._validate(criteria)
            logger.info(f"Searching flights: {criteria.to_params()}")
            payload = self.client.get_json(
                FLIGHT_SEARCH_PATH,
                params=criteria.to_params(),
                fallback_error=SEARCH_FAILED,
            )
            if request_id != self._latest_request:
                logger.debug("Dropping stale flight search response")
                return
            try:
                data = FlightSearchData.model_validate(payload.get("data") or {})
            except PayloadError as e:
                raise TransportError(f"伺服器回應格式錯誤: {describe_payload_error(e)}") from e
            self.display(data)
        except PlannerError as e:
            if request_id == self._latest_request:
                logger.error(f"Flight search failed: {e}")
                self.region("error").show(e.message or SEARCH_FAILED)
        finally:
            if request_id == self._latest_request:
                self.region("loading").hide()

    @staticmethod
    def _validate(criteria: Union[SearchCriteria, dict]) -> SearchCriteria:
        if isinstance(criteria, SearchCriteria):
            return criteria
        try:
            return SearchCriteria.model_validate(criteria)
        except PayloadError as e:
            raise ValidationError(describe_payload_error(e)) from e

    def display(self, data: FlightSearchData) -> None:
        if not data.flights:
            self.region("results").show(
                FlightResultsView(
                    count_text="找到 0 個航班",
                    empty=EmptyState(
                        icon="fa-plane-slash",
                        title="沒有找到符合條件的航班",
                        message="請嘗試調整搜尋條件",
                    ),
                )
            )
            self.region("weather").hide()
            self.region("exchange").hide()
            return

        count = (data.meta.count if data.meta else None) or len(data.flights)

        self._show_bundle("advice", data.price_advice, PriceAdvice, present_advice)
        self._show_bundle("weather", data.weather, WeatherBundle, present_weather)
        self._show_bundle("exchange", data.exchange, ExchangeBundle, present_exchange)

        cards = [
            isolate(index, raw, present_offer, "無法顯示航班資訊", logger)
            for index, raw in enumerate(data.flights)
        ]
        logger.info(f"Rendered {len(cards)} flight cards")
        self.region("results").show(
            FlightResultsView(count_text=f"找到 {count} 個航班", cards=cards)
        )

    def _show_bundle(self, name: str, raw, model: type[BaseModel], present) -> None:
        """Fill one optional panel; a bundle that does not parse only hides its panel."""
        region = self.region(name)
        if not raw:
            region.hide()
            return
        try:
            region.show(present(model.model_validate(raw)))
        except PayloadError as e:
            logger.warning(f"Ignoring malformed {name} data: {describe_payload_error(e)}")
            region.hide()
