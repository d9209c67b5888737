from datetime import date
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from flight_planner.config import DEFAULT_CURRENCY
from flight_planner.timeutils import is_red_eye

CURRENCY_NAMES = {
    "USD": "美元",
    "EUR": "歐元",
    "JPY": "日圓",
    "GBP": "英鎊",
    "CNY": "人民幣",
    "KRW": "韓元",
    "HKD": "港幣",
    "SGD": "新加坡元",
    "TWD": "新台幣",
}


def currency_name(code: str) -> str:
    """Display name for a currency code, falling back to the code itself."""
    return CURRENCY_NAMES.get(code, code)


class SearchCriteria(BaseModel):
    """Validated input of the flight search form."""

    origin: str = Field(description="Origin airport code")
    destination: str = Field(description="Destination airport code")
    departure_date: date = Field(description="Departure date")
    return_date: Optional[date] = Field(None, description="Return date if round trip")
    passengers: int = Field(default=1, ge=1, description="Number of adult passengers")
    currency: str = Field(default=DEFAULT_CURRENCY, description="Price currency")

    @field_validator("origin", "destination")
    @classmethod
    def normalise_code(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("請輸入機場代碼")
        return value

    @field_validator("return_date", mode="before")
    @classmethod
    def blank_return_date(cls, value):
        return value or None

    @model_validator(mode="after")
    def check_dates(self) -> "SearchCriteria":
        if self.departure_date < date.today():
            raise ValueError("出發日期不能早於今天")
        if self.return_date is not None and self.return_date < self.departure_date:
            raise ValueError("回程日期不能早於出發日期")
        return self

    def to_params(self) -> dict:
        """Query parameters understood by the flight search endpoint."""
        params = {
            "origin": self.origin,
            "destination": self.destination,
            "departure_date": self.departure_date.isoformat(),
            "adults": self.passengers,
            "currency": self.currency,
        }
        if self.return_date:
            params["return_date"] = self.return_date.isoformat()
        return params


class Airport(BaseModel):
    """One airport suggestion row."""

    code: str = Field("", description="IATA code")
    name: str = Field("", description="Airport name")
    city: str = Field("", description="City name")

    @property
    def label(self) -> str:
        return f"{self.code} - {self.name} ({self.city})"


class AirportRef(BaseModel):
    code: str = ""
    name: str = ""
    city: str = ""
    terminal: str = ""


class FlightOffer(BaseModel):
    """One flight search result record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    origin: Optional[AirportRef] = Field(
        None, validation_alias=AliasChoices("from", "origin")
    )
    destination: Optional[AirportRef] = Field(
        None, validation_alias=AliasChoices("to", "destination")
    )
    departure: Optional[str] = Field(None, description="ISO-8601 local departure time")
    arrival: Optional[str] = Field(None, description="ISO-8601 local arrival time")
    airline: Optional[str] = None
    stops: Optional[int] = Field(0, ge=0)
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    duration: Optional[str] = Field(None, description="ISO-8601 duration, e.g. PT2H30M")
    flight_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("flight_number", "flightNumber")
    )

    @property
    def is_red_eye(self) -> bool:
        return is_red_eye(self.departure)


class PackingItem(BaseModel):
    icon: str
    name: str


class WeatherSummary(BaseModel):
    """Weather at one end of the trip."""

    model_config = ConfigDict(extra="ignore")

    city: str = ""
    avg_temp: Optional[float] = Field(None, description="Average temperature in °C")
    condition: str = ""
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    chance_of_rain: float = Field(0, ge=0, le=100)
    icon: str = Field("", description="Protocol-relative icon URL")

    @field_validator("chance_of_rain", mode="before")
    @classmethod
    def default_rain(cls, value):
        return value or 0

    @field_validator("condition", "city", "icon", mode="before")
    @classmethod
    def default_text(cls, value):
        return value or ""


class WeatherBundle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    origin_weather: Optional[WeatherSummary] = None
    destination_weather: Optional[WeatherSummary] = None
    travel_advice: Optional[str] = None


class ExchangeBundle(BaseModel):
    """Exchange rates relative to ``base_currency``; insertion order is kept."""

    model_config = ConfigDict(extra="ignore")

    base_currency: str = ""
    last_updated: Optional[str] = None
    rates: dict[str, float] = Field(default_factory=dict)


class PriceAdvice(BaseModel):
    """How the current lowest price compares with the route history."""

    model_config = ConfigDict(extra="ignore")

    current_lowest: float = 0
    history_avg: float = 0
    history_low: float = 0
    diff_percent: float = 0
    trend: str = Field("none", description="down, up, stable or none")
    advice: str = ""

    @field_validator("trend", mode="before")
    @classmethod
    def default_trend(cls, value):
        return value or "none"

    @field_validator("advice", mode="before")
    @classmethod
    def default_advice(cls, value):
        return value or ""

    @field_validator(
        "current_lowest", "history_avg", "history_low", "diff_percent", mode="before"
    )
    @classmethod
    def default_amount(cls, value):
        return 0 if value is None else value


class SearchMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: Optional[int] = None


class FlightSearchData(BaseModel):
    """The ``data`` member of a flight search response.

    Offers and the optional bundles are kept raw so that one malformed record
    or bundle cannot reject the whole response; they are parsed one by one
    when displayed.
    """

    model_config = ConfigDict(extra="ignore")

    flights: list[Any] = Field(default_factory=list)
    weather: Any = None
    exchange: Any = None
    price_advice: Any = None
    meta: Optional[SearchMeta] = None

    @field_validator("flights", mode="before")
    @classmethod
    def default_flights(cls, value):
        return value or []
