from unittest.mock import MagicMock

import pytest
import requests

from flight_planner.config import GEOCODER_USER_AGENT
from flight_planner.geocoding import NominatimGeocoder


@pytest.fixture
def geo_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def geocoder(geo_session):
    return NominatimGeocoder(url="http://geo.test/search", session=geo_session)


class TestNominatimGeocoder:
    """Test suite for place lookup."""

    def test_best_match(self, geocoder, geo_session, make_response):
        geo_session.get.return_value = make_response(
            payload=[{"lat": "25.0330", "lon": "121.5654", "display_name": "Taipei, Taiwan"}]
        )

        result = geocoder.geocode("Taipei")

        assert result.lat == 25.033
        assert result.lng == 121.5654
        assert result.display_name == "Taipei, Taiwan"
        kwargs = geo_session.get.call_args.kwargs
        assert kwargs["params"] == {"format": "json", "q": "Taipei", "limit": 1}
        assert kwargs["headers"]["User-Agent"] == GEOCODER_USER_AGENT

    def test_no_match(self, geocoder, geo_session, make_response):
        geo_session.get.return_value = make_response(payload=[])
        assert geocoder.geocode("Nowhereville") is None

    def test_network_failure(self, geocoder, geo_session):
        geo_session.get.side_effect = requests.exceptions.ConnectionError("down")
        assert geocoder.geocode("Taipei") is None

    def test_http_failure(self, geocoder, geo_session, make_response):
        geo_session.get.return_value = make_response(
            status=503, text="busy", content_type="text/plain"
        )
        assert geocoder.geocode("Taipei") is None

    def test_unusable_match(self, geocoder, geo_session, make_response):
        geo_session.get.return_value = make_response(payload=[{"display_name": "Somewhere"}])
        assert geocoder.geocode("Somewhere") is None
