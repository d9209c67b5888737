from flight_planner.models.attractions import Attraction, GeocodeResult
from flight_planner.models.currency import ConversionRequest, ConversionResult
from flight_planner.models.flights import (
    CURRENCY_NAMES,
    Airport,
    AirportRef,
    ExchangeBundle,
    FlightOffer,
    FlightSearchData,
    PackingItem,
    PriceAdvice,
    SearchCriteria,
    WeatherBundle,
    WeatherSummary,
    currency_name,
)
from flight_planner.models.timezone import TimeDifference
from flight_planner.models.tracking import PriceAnalysis, PriceHistoryPoint

__all__ = [
    "Airport",
    "AirportRef",
    "Attraction",
    "CURRENCY_NAMES",
    "ConversionRequest",
    "ConversionResult",
    "ExchangeBundle",
    "FlightOffer",
    "FlightSearchData",
    "GeocodeResult",
    "PackingItem",
    "PriceAdvice",
    "PriceAnalysis",
    "PriceHistoryPoint",
    "SearchCriteria",
    "TimeDifference",
    "WeatherBundle",
    "WeatherSummary",
    "currency_name",
]
