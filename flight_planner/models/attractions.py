from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flight_planner.errors import RenderError

# Candidate payload paths per field, highest priority first.
ATTRACTION_FIELD_PATHS: dict[str, tuple[tuple, ...]] = {
    "name": (("name",),),
    "category": (("category",), ("primary_category",), ("categories", 0, "name")),
    "rating": (("rating",),),
    "distance": (("distance",),),
    "price_level": (("price",), ("price_level",)),
    "address": (("address",), ("location", "formatted_address")),
    "phone": (("phone",), ("contact", "phone"), ("tel",)),
    "website": (("website",), ("contact", "website")),
    "review_count": (("review_count",), ("stats", "review_count")),
}


def _walk(record: Any, path: tuple) -> Any:
    current = record
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
            current = current[key]
        elif isinstance(current, dict):
            current = current.get(key)
        else:
            return None
    return current


def lookup_field(record: dict, field: str, default: Any = None) -> Any:
    """Return the first non-empty value among the candidate paths of ``field``."""
    for path in ATTRACTION_FIELD_PATHS[field]:
        value = _walk(record, path)
        if value:
            return value
    return default


class GeocodeResult(BaseModel):
    """Best match for a free-text location."""

    lat: float = Field(description="Latitude")
    lng: float = Field(description="Longitude")
    display_name: str = Field("", description="Human readable place name")


class Attraction(BaseModel):
    """A point of interest near the searched location."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    category: str = ""
    rating: float = Field(0, description="0 means no rating")
    distance: Optional[float] = Field(None, description="Distance in meters")
    price_level: int = Field(0, description="0 unknown, 1 to 4 cheap to expensive")
    is_open_now: Optional[bool] = Field(None, description="None when unknown")
    address: str = ""
    phone: str = ""
    website: str = ""
    review_count: int = 0

    @field_validator("price_level")
    @classmethod
    def clamp_price_level(cls, value: int) -> int:
        return max(0, min(value, 4))

    @classmethod
    def from_payload(cls, record: dict) -> "Attraction":
        """Normalise one search result, whatever shape the provider used."""
        if not isinstance(record, dict):
            raise RenderError(f"attraction record must be an object, got {type(record).__name__}")

        values = {field: lookup_field(record, field) for field in ATTRACTION_FIELD_PATHS}
        open_now = record.get("is_open_now")
        values["is_open_now"] = open_now if isinstance(open_now, bool) else None
        return cls.model_validate({k: v for k, v in values.items() if v is not None})
