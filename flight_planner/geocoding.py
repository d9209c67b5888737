import logging
from typing import Optional

import requests

from flight_planner.config import API_TIMEOUT, GEOCODER_URL, GEOCODER_USER_AGENT
from flight_planner.models.attractions import GeocodeResult

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Free-text place lookup against OpenStreetMap Nominatim."""

    def __init__(
        self,
        url: str = GEOCODER_URL,
        session: Optional[requests.Session] = None,
        timeout: float = API_TIMEOUT,
    ):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def geocode(self, query: str) -> Optional[GeocodeResult]:
        """Best match for ``query``, or None when nothing matches or the call fails."""
        logger.info(f"Geocoding {query!r}")
        try:
            response = self.session.get(
                self.url,
                params={"format": "json", "q": query, "limit": 1},
                headers={"User-Agent": GEOCODER_USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            matches = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Geocoding error for {query!r}: {e}")
            return None

        if not isinstance(matches, list) or not matches:
            logger.warning(f"No location found for {query!r}")
            return None

        best = matches[0]
        try:
            result = GeocodeResult(
                lat=float(best["lat"]),
                lng=float(best["lon"]),
                display_name=best.get("display_name", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unusable geocoding match for {query!r}: {e}")
            return None

        logger.info(f"Found location: {result.display_name}")
        return result
