import requests

from flight_planner.autocomplete import AutocompleteController

TAIPEI = {"code": "TPE", "name": "Taoyuan International", "city": "Taipei"}
SONGSHAN = {"code": "TSA", "name": "Songshan", "city": "Taipei"}


class TestAutocompleteController:
    """Test suite for airport suggestions."""

    def test_short_query_hides_without_request(self, client, session):
        """Test that fewer than two characters never hits the network."""
        controller = AutocompleteController("origin", client)
        controller.region("suggestions").show([])

        controller.on_input(" T ")

        session.request.assert_not_called()
        assert controller.region("suggestions").visible is False

    def test_renders_rows(self, client, session, make_response):
        """Test that results render as CODE - Name (City)."""
        session.request.return_value = make_response(
            payload={"success": True, "data": [TAIPEI, SONGSHAN]}
        )
        controller = AutocompleteController("origin", client)

        controller.on_input("Taipei")

        assert controller.region("suggestions").visible is True
        assert controller.rows == [
            "TPE - Taoyuan International (Taipei)",
            "TSA - Songshan (Taipei)",
        ]
        assert session.request.call_args.kwargs["params"] == {"q": "Taipei"}

    def test_select_writes_code(self, client, session, make_response):
        """Test that picking a row writes the code and closes the list."""
        session.request.return_value = make_response(
            payload={"success": True, "data": [TAIPEI, SONGSHAN]}
        )
        controller = AutocompleteController("origin", client)
        controller.on_input("Taipei")

        assert controller.select(1) == "TSA"
        assert controller.value == "TSA"
        assert controller.region("suggestions").visible is False

    def test_empty_result_hides(self, client, session, make_response):
        """Test that no matches hide the list."""
        session.request.return_value = make_response(payload={"success": True, "data": []})
        controller = AutocompleteController("origin", client)

        controller.on_input("Zzz")

        assert controller.region("suggestions").visible is False

    def test_failure_degrades_silently(self, client, session):
        """Test that a transport failure hides the list without raising."""
        session.request.side_effect = requests.exceptions.ConnectionError("down")
        controller = AutocompleteController("origin", client)
        controller.region("suggestions").show([])

        controller.on_input("Tai")

        assert controller.region("suggestions").visible is False

    def test_stale_response_dropped(self, client, session, make_response):
        """Test that an older response arriving late does not overwrite a newer one."""
        controller = AutocompleteController("origin", client)
        stale = make_response(payload={"success": True, "data": [TAIPEI]})
        fresh = make_response(payload={"success": True, "data": [SONGSHAN]})

        def respond(method, url, **kwargs):
            if kwargs["params"]["q"] == "TP":
                # The user types again before the first answer arrives
                controller.on_input("TSA")
                return stale
            return fresh

        session.request.side_effect = respond
        controller.on_input("TP")

        assert [airport.code for airport in controller.suggestions] == ["TSA"]

    def test_focus_and_blur(self, client, session, make_response):
        """Test that focus re-shows existing rows and blur hides them."""
        session.request.return_value = make_response(
            payload={"success": True, "data": [TAIPEI]}
        )
        controller = AutocompleteController("origin", client)
        controller.on_input("TPE")

        controller.on_blur()
        assert controller.region("suggestions").visible is False

        controller.on_focus()
        assert controller.region("suggestions").visible is True

    def test_focus_without_rows(self, client):
        """Test that focus alone does not show an empty list."""
        controller = AutocompleteController("origin", client)
        controller.on_focus()
        assert controller.region("suggestions").visible is False

    def test_instances_are_independent(self, client, session, make_response):
        """Test that one field's blur does not close another field's list."""
        session.request.return_value = make_response(
            payload={"success": True, "data": [TAIPEI]}
        )
        origin = AutocompleteController("origin", client)
        destination = AutocompleteController("destination", client)
        origin.on_input("TPE")
        destination.on_input("TPE")

        origin.on_blur()

        assert destination.region("suggestions").visible is True
