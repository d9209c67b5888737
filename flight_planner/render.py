"""
Renderers turn view models into output for a particular front end.

``HtmlRenderer`` produces HTML fragments; every text that comes from the user
or a server goes through ``escape_html``.
"""

from typing import Protocol

from pydantic import BaseModel

from flight_planner.formatters import escape_html as esc
from flight_planner.styles import RED
from flight_planner.view import (
    AdviceCard,
    AttractionCard,
    AttractionsView,
    ConversionView,
    EmptyState,
    ErrorCard,
    ExchangeView,
    FlightCard,
    FlightResultsView,
    MessageCard,
    TimeDiffView,
    TrackingView,
    WeatherCard,
    WeatherView,
)


def _number(value) -> str:
    """Weather readings, where 0 is a real value and None is unknown."""
    if value is None:
        return "--"
    if isinstance(value, (int, float)):
        return f"{value:g}"
    return esc(value)


class Renderer(Protocol):
    def render(self, view: BaseModel) -> str: ...


class HtmlRenderer:
    """HTML fragments for the view models."""

    def __init__(self):
        self._handlers = {
            AdviceCard: self.advice,
            AttractionCard: self.attraction,
            AttractionsView: self.attractions,
            ConversionView: self.conversion,
            EmptyState: self.empty_state,
            ErrorCard: self.error_card,
            ExchangeView: self.exchange,
            FlightCard: self.flight,
            FlightResultsView: self.flight_results,
            MessageCard: self.message,
            TimeDiffView: self.time_difference,
            TrackingView: self.tracking,
            WeatherCard: self.weather_card,
            WeatherView: self.weather,
        }

    def render(self, view: BaseModel) -> str:
        try:
            handler = self._handlers[type(view)]
        except KeyError:
            raise TypeError(f"No HTML renderer for {type(view).__name__}") from None
        return handler(view)

    def error_card(self, card: ErrorCard) -> str:
        return (
            f'<div class="card error" style="color: {RED}; text-align: center;">'
            f'<i class="fas fa-exclamation-triangle"></i><p>{esc(card.message)}</p></div>'
        )

    def message(self, card: MessageCard) -> str:
        color = RED if card.tone == "error" else "#666"
        return (
            f'<div class="message" style="text-align: center; padding: 20px; color: {color};">'
            f'<i class="fas {esc(card.icon)}"></i><p>{esc(card.message)}</p></div>'
        )

    def empty_state(self, state: EmptyState) -> str:
        suggestions = "".join(f"<li>{esc(item)}</li>" for item in state.suggestions)
        return (
            '<div class="empty-state" style="text-align: center; padding: 40px; color: #666;">'
            f'<i class="fas {esc(state.icon)}"></i>'
            f"<h3>{esc(state.title)}</h3>"
            f"<p>{esc(state.message)}</p>"
            + (f"<ul>{suggestions}</ul>" if suggestions else "")
            + "</div>"
        )

    def flight(self, card: FlightCard) -> str:
        badge = (
            '<span class="badge-redeye" title="此航班在深夜起飛">'
            '<i class="fas fa-moon"></i> 紅眼航班</span>'
            if card.red_eye
            else ""
        )
        number = (
            f'<span><i class="fas fa-ticket-alt"></i> {esc(card.flight_number)}</span>'
            if card.flight_number
            else ""
        )
        return (
            '<div class="flight-card"><div class="flight-info">'
            f'<div class="flight-airports">{esc(card.route)}</div>'
            f'<div class="flight-duration">{esc(card.duration)} {badge}</div>'
            '<div class="flight-details">'
            f'<span><i class="fas fa-plane"></i> {esc(card.airline)}</span>'
            f'<span><i class="fas fa-clock"></i> {esc(card.time_range)}</span>'
            f'<span><i class="fas fa-stopwatch"></i> {card.stops} 次停靠</span>'
            f"{number}</div></div>"
            f'<div class="flight-price"><div class="price">{esc(card.price)}</div>'
            f'<div class="currency">{esc(card.currency)}</div></div></div>'
        )

    def flight_results(self, view: FlightResultsView) -> str:
        body = self.empty_state(view.empty) if view.empty else "".join(
            self.render(card) for card in view.cards
        )
        return f'<div class="results-count">{esc(view.count_text)}</div>{body}'

    def advice(self, card: AdviceCard) -> str:
        return (
            f'<div class="price-advice" style="border-left: 4px solid {card.color}; '
            f'background-color: {card.background};">'
            f"<p>{esc(card.advice)}</p>"
            f"<span>目前最低 {esc(card.current)}</span>"
            f"<span>歷史平均 {esc(card.average)}</span>"
            f"<span>差異 {esc(card.diff)}</span>"
            f"<span>歷史最低 {esc(card.low)}</span></div>"
        )

    def weather_card(self, card: WeatherCard) -> str:
        icon = (
            f'<img src="{esc(card.icon_url)}" alt="{esc(card.condition)}">'
            if card.icon_url
            else ""
        )
        return (
            '<div class="weather-card">'
            f'<h4><i class="fas {esc(card.header_icon)}"></i> {esc(card.header)}</h4>'
            f"{icon}<div class=\"temp\">{esc(card.temperature)}</div>"
            f"<div>{esc(card.condition)}</div>"
            f"<div>濕度 {_number(card.humidity)}% · 風速 {_number(card.wind)} · "
            f"降雨機率 {card.rain_chance:g}%</div></div>"
        )

    def weather(self, view: WeatherView) -> str:
        parts = [self.weather_card(card) for card in (view.origin, view.destination) if card]
        if view.travel_advice:
            parts.append(f'<p class="travel-advice">{esc(view.travel_advice)}</p>')
        if view.packing_list is not None:
            tags = "".join(
                f'<div class="packing-tag"><i class="fas {esc(item.icon)}"></i> {esc(item.name)}</div>'
                for item in view.packing_list
            )
            parts.append(
                '<div id="dynamicPackingList" class="packing-list-section">'
                '<h4><i class="fas fa-suitcase-rolling"></i> 智慧打包建議 (依據當地天氣)</h4>'
                f'<div class="packing-tags">{tags}</div></div>'
            )
        return "".join(parts)

    def exchange(self, view: ExchangeView) -> str:
        cards = "".join(
            '<div class="exchange-rate-card">'
            f'<div class="currency-code">{esc(rate.code)}</div>'
            f'<div class="currency-rate">{esc(rate.rate)}</div>'
            f'<div class="currency-name">{esc(rate.name)}</div></div>'
            for rate in view.rates
        )
        return (
            f"<p>基準貨幣 {esc(view.base_currency)} · 更新時間 {esc(view.last_updated)}</p>"
            f'<div class="exchange-rates">{cards}</div>'
        )

    def tracking(self, view: TrackingView) -> str:
        timeline = "".join(
            '<div class="timeline-item" style="border-left: 4px solid '
            f'{item.border_color};"><div>{esc(item.date)}</div>'
            f"<div>第 {item.week} 週</div><div>{esc(item.price)}</div></div>"
            for item in view.timeline
        ) or "沒有價格數據"
        return (
            '<div class="analysis-summary"><div class="summary-grid">'
            f"<div><h3>最低價格</h3>{esc(view.min_price)}</div>"
            f"<div><h3>平均價格</h3>{esc(view.avg_price)}</div>"
            f"<div><h3>最高價格</h3>{esc(view.max_price)}</div>"
            f"<div><h3>最佳出發</h3>{esc(view.best_date)}</div></div>"
            f'<div class="recommendation">💡 {esc(view.recommendation)}</div></div>'
            f'<div class="timeline" style="max-height: 400px; overflow-y: auto;">{timeline}</div>'
            f'<div class="analysis-done"><strong>分析完成！</strong><p>{esc(view.closing)}</p></div>'
        )

    def conversion(self, view: ConversionView) -> str:
        return (
            '<div class="conversion">'
            f"<div>{esc(view.original_amount)} {esc(view.from_currency)} = "
            f"{esc(view.converted_amount)} {esc(view.to_currency)}</div>"
            f"<div>{esc(view.rate)}</div><div>{esc(view.reverse_rate)}</div>"
            f"<small>{esc(view.last_updated)}</small></div>"
        )

    def time_difference(self, view: TimeDiffView) -> str:
        return (
            '<div class="result-display">'
            f"<strong>{esc(view.from_zone)}</strong> → <strong>{esc(view.to_zone)}</strong></div>"
            f'<h3 class="highlight-diff">時差：{esc(view.signed_diff)}</h3>'
            f"<p>（目標時區 <strong>{esc(view.to_zone)}</strong> 比起始時區 "
            f"<strong>{esc(view.from_zone)}</strong> "
            f'<span style="font-weight: bold; color: {view.color};">{view.speed_word}</span> '
            f"{esc(view.hours)} 小時）</p>"
        )

    def attraction(self, card: AttractionCard) -> str:
        rows = [
            f"<span>⭐ {esc(card.rating)}</span>"
            + (f" <span>({card.review_count} 則評論)</span>" if card.review_count > 0 else ""),
            f"<span>🚶 {esc(card.distance)}</span>",
            f"<span>{esc(card.price)}</span>",
            f'<span style="color: {card.status_color};">{esc(card.status)}</span>',
        ]
        if card.address:
            rows.append(f"<span>📍 {esc(card.address)}</span>")
        if card.phone:
            rows.append(f"<span>📞 {esc(card.phone)}</span>")
        if card.website:
            rows.append(f'<a href="{esc(card.website)}" target="_blank">訪問網站</a>')
        body = "".join(f"<div>{row}</div>" for row in rows)
        return (
            '<div class="attraction-card">'
            f"<h3>{esc(card.name)}</h3>"
            f'<span class="attraction-category">{esc(card.category)}</span>{body}</div>'
        )

    def attractions(self, view: AttractionsView) -> str:
        body = self.empty_state(view.empty) if view.empty else "".join(
            self.render(card) for card in view.cards
        )
        return f'<div class="attractions-count">{esc(view.header)}</div>{body}'
