import logging

from pydantic import ValidationError as PayloadError

from flight_planner.api import ApiClient
from flight_planner.errors import (
    ApplicationError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from flight_planner.models.timezone import TimeDifference
from flight_planner.styles import direction_color
from flight_planner.view import Panel, TimeDiffView

logger = logging.getLogger(__name__)

TIMEDIFF_PATH = "/timediff"
MISSING_INPUT = "請填寫完整的起始和目標時區。"
TIMEDIFF_FAILED = "計算時差失敗，請檢查時區名稱是否為 Region/City 格式。"
CONNECTION_FAILED = "連線錯誤，請檢查網路或後端服務是否正常: "


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


def present_difference(result: TimeDifference) -> TimeDiffView:
    """Zero counts as non-negative (``+``) but is worded as slower."""
    magnitude = result.diff_str.lstrip("+-") if result.diff_str else f"{abs(result.diff):.1f} 小時"
    return TimeDiffView(
        from_zone=result.from_zone,
        to_zone=result.to_zone,
        signed_diff=f"{result.sign}{magnitude}",
        speed_word="快" if result.is_faster else "慢",
        hours=_format_hours(abs(result.diff)),
        color=direction_color(result.is_faster),
    )


class TimezoneController(Panel):
    """Hour difference between two ``Region/City`` time zones."""

    REGIONS = ("error", "result")

    def __init__(self, client: ApiClient):
        super().__init__()
        self.client = client

    def calculate(self, from_zone: str, to_zone: str) -> None:
        self.region("error").hide()
        self.region("result").hide()

        try:
            from_zone = (from_zone or "").strip()
            to_zone = (to_zone or "").strip()
            if not from_zone or not to_zone:
                raise ValidationError(MISSING_INPUT)

            payload = self.client.post_form(
                TIMEDIFF_PATH,
                {"from": from_zone, "to": to_zone},
                fallback_error=TIMEDIFF_FAILED,
                message_keys=("error",),
                require_json_content=True,
            )
            try:
                result = TimeDifference.model_validate(payload)
            except PayloadError as e:
                raise ApplicationError(TIMEDIFF_FAILED) from e
        except (ValidationError, ApplicationError, ProtocolError) as e:
            self._show_error(e.message)
            return
        except TransportError as e:
            logger.error(f"Time difference request failed: {e}")
            self._show_error(CONNECTION_FAILED + e.message)
            return

        logger.info(f"Time difference {result.from_zone} -> {result.to_zone}: {result.diff}")
        self.region("result").show(present_difference(result))

    def _show_error(self, message: str) -> None:
        self.region("error").show(message)
        self.region("result").hide()
