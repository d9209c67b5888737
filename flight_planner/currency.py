import logging
import re
from typing import Optional, Union

from pydantic import ValidationError as PayloadError

from flight_planner.api import ApiClient
from flight_planner.config import DEFAULT_CURRENCY, FALLBACK_CURRENCIES
from flight_planner.errors import ApplicationError, PlannerError, TransportError
from flight_planner.formatters import format_datetime, format_price
from flight_planner.models.currency import ConversionRequest, ConversionResult
from flight_planner.view import ConversionView, MessageCard, Panel

logger = logging.getLogger(__name__)

CONVERT_PATH = "/api/currency/convert"
SUPPORTED_PATH = "/api/currency/supported"
CONVERSION_FAILED = "轉換失敗"
SERVICE_UNAVAILABLE = "轉換服務暫時不可用"
SAME_CURRENCY = "請選擇不同的貨幣進行轉換"

AMOUNT_PATTERN = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_amount(value: Union[str, float, int, None]) -> Optional[float]:
    """Leading-number parse of the amount field; None when there is none."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = AMOUNT_PATTERN.match(value)
    if not match:
        return None
    return float(match.group(1))


def present_conversion(result: ConversionResult) -> ConversionView:
    return ConversionView(
        original_amount=format_price(result.original_amount),
        from_currency=result.from_currency,
        converted_amount=format_price(result.converted_amount),
        to_currency=result.to_currency,
        rate=f"1 {result.from_currency} = {result.exchange_rate:.6f} {result.to_currency}",
        reverse_rate=(
            f"1 {result.to_currency} = {result.reverse_rate:.6f} {result.from_currency}"
        ),
        last_updated=format_datetime(result.last_updated),
    )


class CurrencyCalculator(Panel):
    """Two-way conversion panel that recomputes on every qualifying change."""

    REGIONS = ("result",)

    def __init__(
        self,
        client: ApiClient,
        from_currency: str = DEFAULT_CURRENCY,
        to_currency: str = "USD",
    ):
        super().__init__()
        self.client = client
        self.amount_text = ""
        self.from_currency = from_currency
        self.to_currency = to_currency

    @property
    def amount(self) -> Optional[float]:
        return parse_amount(self.amount_text)

    def set_amount(self, value) -> None:
        self.amount_text = "" if value is None else str(value)
        if self.amount_text:
            self.calculate()
        else:
            self.region("result").hide()

    def submit(self) -> None:
        """Enter key."""
        self.calculate()

    def set_from(self, currency: str) -> None:
        self.from_currency = currency
        if self.amount_text:
            self.calculate()

    def set_to(self, currency: str) -> None:
        self.to_currency = currency
        if self.amount_text:
            self.calculate()

    def swap(self) -> None:
        self.from_currency, self.to_currency = self.to_currency, self.from_currency
        if self.amount_text:
            self.calculate()

    def calculate(self) -> None:
        region = self.region("result")
        amount = self.amount

        if not amount or amount <= 0:
            region.hide()
            return

        if self.from_currency == self.to_currency:
            region.show(MessageCard(message=SAME_CURRENCY, icon="fa-info-circle"))
            return

        request = ConversionRequest(
            amount=amount, from_currency=self.from_currency, to_currency=self.to_currency
        )
        try:
            payload = self.client.post_json(
                CONVERT_PATH,
                request.model_dump(),
                fallback_error=CONVERSION_FAILED,
                message_keys=("error",),
            )
            result = ConversionResult.model_validate(payload.get("data") or {})
        except ApplicationError as e:
            self._show_error(e.message or CONVERSION_FAILED)
            return
        except TransportError as e:
            logger.error(f"Currency conversion error: {e}")
            self._show_error(SERVICE_UNAVAILABLE)
            return
        except PayloadError as e:
            logger.error(f"Malformed conversion payload: {e}")
            self._show_error(CONVERSION_FAILED)
            return

        region.show(present_conversion(result))

    def _show_error(self, message: str) -> None:
        self.region("result").show(
            MessageCard(message=message, icon="fa-exclamation-triangle", tone="error")
        )

    def load_supported_currencies(self) -> list[str]:
        """Currencies offered by the backend, or the built-in list."""
        try:
            payload = self.client.get_json(SUPPORTED_PATH)
        except PlannerError as e:
            logger.warning(f"Could not load supported currencies: {e}")
            return list(FALLBACK_CURRENCIES)
        currencies = payload.get("data")
        if not isinstance(currencies, list) or not currencies:
            return list(FALLBACK_CURRENCIES)
        return [str(code) for code in currencies]
