import os

from dotenv import load_dotenv

load_dotenv()

# API configuration
API_BASE_URL = os.getenv("FLIGHT_PLANNER_API_URL", "http://localhost:8080")
API_TIMEOUT = float(os.getenv("FLIGHT_PLANNER_API_TIMEOUT", "90"))
HEALTH_CHECK_TIMEOUT = 5

# Geocoding collaborator (OpenStreetMap Nominatim)
GEOCODER_URL = os.getenv(
    "FLIGHT_PLANNER_GEOCODER_URL", "https://nominatim.openstreetmap.org/search"
)
GEOCODER_USER_AGENT = os.getenv(
    "FLIGHT_PLANNER_GEOCODER_USER_AGENT", "flight-planner/1.0"
)

# Behaviour defaults
DEFAULT_CURRENCY = "TWD"
DEFAULT_TRACK_WEEKS = 12
DEFAULT_ATTRACTION_RADIUS = 1000
MIN_AUTOCOMPLETE_CHARS = 2

# Used when the backend cannot list them
FALLBACK_CURRENCIES = ["TWD", "USD", "EUR", "JPY", "GBP", "CNY", "KRW", "HKD", "SGD"]
FALLBACK_ATTRACTION_CATEGORIES = [
    "museum",
    "park",
    "restaurant",
    "coffee",
    "bar",
    "hotel",
    "shopping_mall",
    "tourist_attraction",
    "art_gallery",
    "theater",
    "cinema",
    "stadium",
]

RADIUS_OPTIONS = [500, 1000, 2000, 5000]
