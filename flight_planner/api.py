import logging
from typing import Optional, Sequence

import requests

from flight_planner.config import API_BASE_URL, API_TIMEOUT, HEALTH_CHECK_TIMEOUT
from flight_planner.errors import ApplicationError, ProtocolError, TransportError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class ApiClient:
    """Uniform request helper for the backend endpoints.

    Every call ends in one of three ways: a decoded JSON payload, an
    ``ApplicationError`` carrying the server message, or a ``TransportError``.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def check_health(self) -> bool:
        """Check if the backend API is running."""
        try:
            response = self.session.get(self.url("/health"), timeout=HEALTH_CHECK_TIMEOUT)
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    def get_json(self, path: str, params: Optional[dict] = None, **kwargs) -> dict:
        return self.fetch_json("GET", path, params=params, **kwargs)

    def post_json(self, path: str, body: dict, **kwargs) -> dict:
        return self.fetch_json("POST", path, json=body, **kwargs)

    def post_form(self, path: str, form: dict, **kwargs) -> dict:
        return self.fetch_json("POST", path, data=form, **kwargs)

    def fetch_json(
        self,
        method: str,
        path: str,
        *,
        fallback_error: str = "請求失敗",
        message_keys: Sequence[str] = ("error", "message"),
        require_json_content: bool = False,
        **request_kwargs,
    ) -> dict:
        """Issue a request and classify the outcome."""
        url = self.url(path)
        logger.debug(f"{method} {url} {request_kwargs}")

        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **request_kwargs
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise TransportError("請求逾時，請稍後再試") from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(str(e)) from e

        logger.info(f"{method} {url} -> {response.status_code}")

        content_type = response.headers.get("content-type") or ""
        if require_json_content and JSON_CONTENT_TYPE not in content_type:
            logger.error(f"Non-JSON response from {url}: {response.text!r}")
            raise ProtocolError(f"伺服器回應格式錯誤: {response.text}")

        try:
            payload = response.json()
        except ValueError as e:
            if not response.ok:
                raise TransportError(
                    f"HTTP錯誤: {response.status_code} - {response.text}"
                ) from e
            raise ProtocolError(f"伺服器回應格式錯誤: {response.text}") from e

        if not isinstance(payload, dict):
            raise ProtocolError("伺服器回應格式錯誤")

        if not response.ok or payload.get("success") is False:
            message = next(
                (payload[key] for key in message_keys if payload.get(key)),
                fallback_error,
            )
            logger.warning(f"{method} {url} reported failure: {message}")
            raise ApplicationError(message, status_code=response.status_code)

        return payload
