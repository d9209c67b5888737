import logging
from typing import Optional

import pandas as pd
from pydantic import ValidationError as PayloadError

from flight_planner.api import ApiClient
from flight_planner.config import DEFAULT_TRACK_WEEKS
from flight_planner.errors import (
    PlannerError,
    TransportError,
    ValidationError,
    describe_payload_error,
)
from flight_planner.formatters import format_date, format_price
from flight_planner.models.tracking import PriceAnalysis
from flight_planner.styles import timeline_border
from flight_planner.view import Panel, TimelineItem, TrackingView

logger = logging.getLogger(__name__)

TRACK_PRICES_PATH = "/api/flights/track-prices"
TRACKING_FAILED = "價格追蹤失敗"
DEFAULT_RECOMMENDATION = "建議根據價格趨勢選擇出發時間"


def build_timeline(analysis: PriceAnalysis) -> list[TimelineItem]:
    """Timeline rows; every point at the minimum price is marked best."""
    items = []
    for point in analysis.data_points:
        best = analysis.is_best(point)
        items.append(
            TimelineItem(
                date=format_date(point.date),
                week=point.week,
                price=f"${format_price(point.price)}",
                best=best,
                border_color=timeline_border(best),
            )
        )
    return items


def present_analysis(analysis: PriceAnalysis) -> TrackingView:
    best_date = format_date(analysis.best_date)
    return TrackingView(
        min_price=f"${format_price(analysis.min_price)}",
        avg_price=f"${format_price(analysis.avg_price)}",
        max_price=f"${format_price(analysis.max_price)}",
        best_date=best_date,
        recommendation=analysis.recommendation or DEFAULT_RECOMMENDATION,
        timeline=build_timeline(analysis),
        closing=(
            f"已分析 {analysis.track_weeks} 週的價格數據，"
            f"建議您在 {best_date} 附近出發可獲得最優價格"
        ),
    )


def timeline_frame(view: TrackingView) -> pd.DataFrame:
    """Timeline as a table for tabular renderers."""
    frame = pd.DataFrame(
        [item.model_dump(include={"date", "week", "price", "best"}) for item in view.timeline],
        columns=["date", "week", "price", "best"],
    )
    return frame.rename(
        columns={"date": "日期", "week": "週次", "price": "價格", "best": "最低價"}
    )


class PriceTrackingController(Panel):
    """Historical price analysis for one route."""

    REGIONS = ("loading", "error", "results")

    def __init__(self, client: ApiClient):
        super().__init__()
        self.client = client

    def track(self, origin: str, destination: str, weeks: Optional[int] = None) -> None:
        """Request the analysis and render it. Never raises."""
        self.region("results").hide()
        self.region("error").hide()
        self.region("loading").show()

        try:
            origin = (origin or "").strip().upper()
            destination = (destination or "").strip().upper()
            if not origin or not destination:
                raise ValidationError("請輸入出發地和目的地")

            params = {
                "origin": origin,
                "destination": destination,
                "weeks": weeks or DEFAULT_TRACK_WEEKS,
            }
            logger.info(f"Tracking prices: {params}")
            payload = self.client.get_json(
                TRACK_PRICES_PATH, params=params, fallback_error=TRACKING_FAILED
            )
            try:
                analysis = PriceAnalysis.model_validate(payload.get("data") or {})
            except PayloadError as e:
                raise TransportError(f"伺服器回應格式錯誤: {describe_payload_error(e)}") from e

            self.region("results").show(present_analysis(analysis))
        except PlannerError as e:
            logger.error(f"Price tracking failed: {e}")
            self.region("error").show(e.message or TRACKING_FAILED)
        finally:
            self.region("loading").hide()
