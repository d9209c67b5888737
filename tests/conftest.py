import json
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest
import requests

from flight_planner.api import ApiClient


def build_response(
    status: int = 200,
    payload=None,
    text: str = "",
    content_type: str = "application/json; charset=utf-8",
) -> requests.Response:
    """A real ``requests.Response`` with the given body."""
    response = requests.Response()
    response.status_code = status
    body = json.dumps(payload) if payload is not None else text
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = content_type
    return response


@pytest.fixture
def make_response():
    """Factory fixture for fake HTTP responses."""
    return build_response


@pytest.fixture
def session():
    """Mock requests session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    """API client bound to the mock session."""
    return ApiClient(base_url="http://backend.test", session=session)


@pytest.fixture
def future_date():
    """A departure date comfortably in the future."""
    return date.today() + timedelta(days=30)


@pytest.fixture
def sample_flight():
    """Sample flight record as the search endpoint returns it."""
    return {
        "id": "1",
        "price": 12000,
        "currency": "TWD",
        "airline": "China Airlines",
        "flight_number": "CI100",
        "from": {"code": "TPE"},
        "to": {"code": "NRT"},
        "departure": "2030-05-01T08:15:00",
        "arrival": "2030-05-01T12:30:00",
        "duration": "PT3H15M",
        "stops": 0,
    }


@pytest.fixture
def sample_weather():
    """Sample weather bundle."""
    return {
        "origin_weather": {
            "city": "Taipei",
            "avg_temp": 26.4,
            "condition": "Sunny",
            "humidity": 70,
            "wind_speed": 12,
            "chance_of_rain": 10,
            "icon": "//cdn.weatherapi.com/weather/64x64/day/113.png",
        },
        "destination_weather": {
            "city": "Tokyo",
            "avg_temp": 8.6,
            "condition": "Light Rain",
            "humidity": 80,
            "wind_speed": 20,
            "icon": "//cdn.weatherapi.com/weather/64x64/day/296.png",
        },
        "travel_advice": "東京較冷，請注意保暖",
    }
