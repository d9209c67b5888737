import logging
from typing import Optional, Union

from pydantic import ValidationError as PayloadError

from flight_planner.api import ApiClient
from flight_planner.config import MIN_AUTOCOMPLETE_CHARS
from flight_planner.errors import PlannerError
from flight_planner.models.flights import Airport
from flight_planner.view import Panel

logger = logging.getLogger(__name__)

AIRPORT_SEARCH_PATH = "/api/airports/search"


class AutocompleteController(Panel):
    """Airport suggestions for one text input.

    The list is owned by this instance: focus re-shows it, blur hides it.
    Responses are tagged with a request id and only the latest one renders.
    """

    REGIONS = ("suggestions",)

    def __init__(self, field_id: str, client: ApiClient):
        super().__init__()
        self.field_id = field_id
        self.client = client
        self.value = ""
        self.focused = False
        self._latest_request = 0

    @property
    def suggestions(self) -> list[Airport]:
        return self.region("suggestions").content or []

    @property
    def rows(self) -> list[str]:
        return [airport.label for airport in self.suggestions]

    def _next_request_id(self) -> int:
        self._latest_request += 1
        return self._latest_request

    def on_input(self, text: str) -> None:
        """Handle an edit of the input text."""
        self.value = text
        query = text.strip()
        region = self.region("suggestions")

        if len(query) < MIN_AUTOCOMPLETE_CHARS:
            # Anything still in flight is stale now
            self._next_request_id()
            region.hide()
            return

        request_id = self._next_request_id()
        try:
            payload = self.client.get_json(AIRPORT_SEARCH_PATH, params={"q": query})
            airports = [Airport.model_validate(row) for row in payload.get("data") or []]
        except (PlannerError, PayloadError) as e:
            logger.warning(f"Airport search failed for {self.field_id} ({query!r}): {e}")
            if request_id == self._latest_request:
                region.hide()
            return

        if request_id != self._latest_request:
            logger.debug(f"Dropping stale airport suggestions for {query!r}")
            return

        if airports:
            region.show(airports)
        else:
            region.hide()

    def select(self, choice: Union[int, str, Airport]) -> Optional[str]:
        """Write the chosen airport code into the input and close the list."""
        if isinstance(choice, int):
            choice = self.suggestions[choice]
        code = choice.code if isinstance(choice, Airport) else str(choice)
        self.value = code
        self.region("suggestions").hide()
        return code

    def on_focus(self) -> None:
        self.focused = True
        if self.suggestions:
            self.region("suggestions").show()

    def on_blur(self) -> None:
        self.focused = False
        self.region("suggestions").hide()
