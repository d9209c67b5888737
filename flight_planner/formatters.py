"""Pure formatting helpers and small derived heuristics."""

import math
import re
from typing import Optional

from flight_planner.models.flights import PackingItem, WeatherSummary
from flight_planner.timeutils import (  # noqa: F401
    UNKNOWN_TIME,
    format_date,
    format_datetime,
    format_time,
    is_red_eye,
    parse_timestamp,
)

DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")
RAIN_KEYWORD = "Rain"
RAIN_CHANCE_THRESHOLD = 40

UNKNOWN_DURATION = "未知時長"

BASE_PACKING_ITEMS = [
    PackingItem(icon="fa-passport", name="護照/證件"),
    PackingItem(icon="fa-mobile-alt", name="充電器/網卡"),
]
COLD_ITEMS = [
    PackingItem(icon="fa-snowflake", name="厚外套/圍巾"),
    PackingItem(icon="fa-mitten", name="暖暖包"),
]
MILD_ITEMS = [PackingItem(icon="fa-tshirt", name="薄外套/長袖")]
HOT_ITEMS = [
    PackingItem(icon="fa-sun", name="防曬乳/墨鏡"),
    PackingItem(icon="fa-fan", name="手持風扇"),
]
RAIN_ITEMS = [
    PackingItem(icon="fa-umbrella", name="摺疊傘"),
    PackingItem(icon="fa-shoe-prints", name="防水鞋"),
]


def round_half_up(value: float) -> int:
    return math.floor(float(value) + 0.5)


def format_price(price) -> str:
    """Format a price as a rounded integer with thousands separators."""
    if not price:
        return "0"
    return f"{round_half_up(price):,}"


def format_rate(rate: float, places: int = 4) -> str:
    return f"{rate:.{places}f}"


def format_duration(duration: Optional[str]) -> str:
    """Turn an ISO-8601 ``PT#H#M`` duration into hours and minutes."""
    if not duration:
        return UNKNOWN_DURATION

    match = DURATION_PATTERN.match(duration)
    if not match:
        return duration

    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2)) if match.group(2) else 0

    result = ""
    if hours > 0:
        result += f"{hours}小時"
    if minutes > 0:
        result += f"{minutes}分鐘"
    return result or "0分鐘"


def escape_html(unsafe) -> str:
    if not unsafe:
        return ""
    return (
        str(unsafe)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def packing_list(weather: Optional[WeatherSummary]) -> list[PackingItem]:
    """
    Infer what to pack from the destination weather.

    The temperature and rain rules are independent: a cold, rainy city gets
    both the cold-weather items and the rain gear.
    """
    items = list(BASE_PACKING_ITEMS)
    if weather is None:
        return items

    temp = weather.avg_temp
    condition = weather.condition or ""
    rain_chance = weather.chance_of_rain or 0

    if temp is not None:
        if temp < 10:
            items.extend(COLD_ITEMS)
        elif temp < 20:
            items.extend(MILD_ITEMS)
        elif temp > 28:
            items.extend(HOT_ITEMS)

    if RAIN_KEYWORD in condition or rain_chance > RAIN_CHANCE_THRESHOLD:
        items.extend(RAIN_ITEMS)

    return items
