"""
Attraction search: geocode a free-text place, then search around it.

The second stage only runs when the first one resolves to coordinates.
"""

import logging
from typing import Optional, Protocol

from flight_planner.api import ApiClient
from flight_planner.config import (
    DEFAULT_ATTRACTION_RADIUS,
    FALLBACK_ATTRACTION_CATEGORIES,
)
from flight_planner.errors import ApplicationError, PlannerError
from flight_planner.formatters import round_half_up
from flight_planner.models.attractions import Attraction, GeocodeResult
from flight_planner.styles import open_status
from flight_planner.view import (
    AttractionCard,
    AttractionsView,
    EmptyState,
    Panel,
    isolate,
)

logger = logging.getLogger(__name__)

ATTRACTION_SEARCH_PATH = "/api/attractions/search"
CATEGORIES_PATH = "/api/attractions/categories"
SEARCH_FAILED = "搜尋失敗"
ALL_CATEGORIES = "all"


class Geocoder(Protocol):
    def geocode(self, query: str) -> Optional[GeocodeResult]: ...


def present_attraction(raw) -> AttractionCard:
    attraction = Attraction.from_payload(raw)
    status, status_color = open_status(attraction.is_open_now)
    return AttractionCard(
        name=attraction.name or "未知名稱",
        category=attraction.category or "未分類",
        rating=f"{attraction.rating:.1f}" if attraction.rating > 0 else "無評分",
        review_count=attraction.review_count,
        distance=(
            f"{round_half_up(attraction.distance)} 公尺"
            if attraction.distance
            else "未知 公尺"
        ),
        price="$" * attraction.price_level if attraction.price_level > 0 else "未知",
        status=status,
        status_color=status_color,
        address=attraction.address,
        phone=attraction.phone,
        website=attraction.website,
    )


def present_results(raw_results, meta: dict) -> AttractionsView:
    results = raw_results if isinstance(raw_results, list) else []
    location = meta.get("location") or "指定位置"
    radius = meta.get("radius") or "未知"
    header = f"在「{location}」附近找到 {len(results)} 個景點 (半徑: {radius} 公尺)"

    if not results:
        return AttractionsView(
            header=header,
            empty=EmptyState(
                icon="fa-search-location",
                title=f"在「{location}」附近沒有找到符合條件的景點",
                message="請嘗試：",
                suggestions=["調整搜尋關鍵字", "擴大搜尋半徑", "確認地點名稱是否正確"],
            ),
        )

    cards = [
        isolate(index, raw, present_attraction, "無法顯示景點資訊", logger)
        for index, raw in enumerate(results)
    ]
    return AttractionsView(header=header, cards=cards)


class AttractionsController(Panel):
    """Geocode-then-search pipeline behind the attractions tab."""

    REGIONS = ("loading", "error", "results")

    def __init__(self, client: ApiClient, geocoder: Geocoder):
        super().__init__()
        self.client = client
        self.geocoder = geocoder

    def search(
        self,
        location: str,
        radius: Optional[int] = None,
        query: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        """Run both stages and render. Never raises."""
        location = (location or "").strip()
        if not location:
            self.region("results").hide()
            self.region("error").show("請輸入地點名稱")
            return

        self.region("loading").show()
        self.region("error").hide()
        self.region("results").hide()

        try:
            place = self.geocoder.geocode(location)
            if place is None:
                raise ApplicationError(f'找不到地點 "{location}"，請嘗試更明確的名稱')

            radius = radius or DEFAULT_ATTRACTION_RADIUS
            params = {"lat": str(place.lat), "lng": str(place.lng), "radius": str(radius)}
            if query and query.strip():
                params["query"] = query.strip()
            if category and category != ALL_CATEGORIES:
                params["category"] = category

            logger.info(f"Searching attractions near {place.display_name}: {params}")
            payload = self.client.get_json(
                ATTRACTION_SEARCH_PATH,
                params=params,
                fallback_error=SEARCH_FAILED,
                message_keys=("message", "error"),
            )

            meta = payload.get("meta")
            meta = dict(meta) if isinstance(meta, dict) else {}
            meta.setdefault("radius", radius)
            if not meta.get("location"):
                meta["location"] = place.display_name

            self.region("results").show(present_results(payload.get("data"), meta))
        except PlannerError as e:
            logger.error(f"Attraction search failed: {e}")
            self.region("error").show(f"{SEARCH_FAILED}: {e.message}")
        finally:
            self.region("loading").hide()

    def load_categories(self) -> list[str]:
        """Categories offered by the backend, or the built-in list."""
        try:
            payload = self.client.get_json(CATEGORIES_PATH)
        except PlannerError as e:
            logger.warning(f"Could not load attraction categories: {e}")
            return list(FALLBACK_ATTRACTION_CATEGORIES)
        categories = payload.get("categories")
        if not isinstance(categories, list) or not categories:
            return list(FALLBACK_ATTRACTION_CATEGORIES)
        return [str(category) for category in categories]
