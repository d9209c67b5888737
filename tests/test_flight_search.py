from datetime import date, timedelta

import requests

from flight_planner.flight_search import (
    FlightSearchController,
    present_advice,
    present_weather,
)
from flight_planner.models.flights import PriceAdvice, WeatherBundle
from flight_planner.view import ErrorCard, FlightCard


def search_response(make_response, flights, **data):
    return make_response(payload={"success": True, "data": {"flights": flights, **data}})


class TestFlightSearchController:
    """Test suite for the flight search orchestration."""

    def test_end_to_end(self, client, session, make_response, future_date, sample_flight):
        """Test a one-way TPE to NRT search with price advice."""
        session.request.return_value = search_response(
            make_response,
            [sample_flight],
            price_advice={
                "current_lowest": 12000,
                "history_avg": 14000,
                "history_low": 11800,
                "diff_percent": -14.3,
                "trend": "down",
                "advice": "目前價格低於平均",
            },
        )
        controller = FlightSearchController(client)

        controller.search(
            {"origin": "tpe", "destination": "nrt", "departure_date": future_date}
        )

        params = session.request.call_args.kwargs["params"]
        assert params["origin"] == "TPE"
        assert params["destination"] == "NRT"
        assert params["adults"] == 1
        assert params["currency"] == "TWD"
        assert "return_date" not in params

        results = controller.region("results")
        assert results.visible is True
        assert results.content.count_text == "找到 1 個航班"
        card = results.content.cards[0]
        assert isinstance(card, FlightCard)
        assert card.price == "12,000"
        assert card.route == "TPE → NRT"
        assert card.duration == "3小時15分鐘"
        assert card.time_range == "上午08:15 - 下午12:30"
        assert card.red_eye is False

        advice = controller.region("advice").content
        assert controller.region("advice").visible is True
        assert advice.color == "#28a745"
        assert advice.background == "#f0fff4"
        assert advice.current == "$12,000"
        assert advice.diff == "-14.3%"

        assert controller.region("loading").visible is False
        assert controller.region("error").visible is False

    def test_round_trip_params(self, client, session, make_response, future_date):
        """Test that the return date is sent when present."""
        session.request.return_value = search_response(make_response, [])
        controller = FlightSearchController(client)
        return_date = future_date + timedelta(days=7)

        controller.search(
            {
                "origin": "TPE",
                "destination": "NRT",
                "departure_date": future_date.isoformat(),
                "return_date": return_date.isoformat(),
                "passengers": 2,
                "currency": "USD",
            }
        )

        params = session.request.call_args.kwargs["params"]
        assert params["return_date"] == return_date.isoformat()
        assert params["adults"] == 2
        assert params["currency"] == "USD"

    def test_zero_results(self, client, session, make_response, future_date):
        """Test the empty state and that weather/exchange stay hidden."""
        session.request.return_value = search_response(
            make_response, [], exchange={"base_currency": "TWD", "rates": {"USD": 0.03}}
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        view = controller.region("results").content
        assert view.count_text == "找到 0 個航班"
        assert view.cards == []
        assert view.empty.title == "沒有找到符合條件的航班"
        assert controller.region("weather").visible is False
        assert controller.region("exchange").visible is False

    def test_meta_count_wins(self, client, session, make_response, future_date, sample_flight):
        """Test that meta.count is preferred over the list length."""
        session.request.return_value = search_response(
            make_response, [sample_flight], meta={"count": 40}
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("results").content.count_text == "找到 40 個航班"

    def test_application_error(self, client, session, make_response, future_date):
        """Test that a server message lands in the error region."""
        session.request.return_value = make_response(
            status=400, payload={"success": False, "error": "無效的機場代碼"}
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "XXX", "departure_date": future_date})

        assert controller.region("error").visible is True
        assert controller.region("error").content == "無效的機場代碼"
        assert controller.region("results").visible is False
        assert controller.region("loading").visible is False

    def test_fallback_error(self, client, session, make_response, future_date):
        """Test the generic message when the server gives none."""
        session.request.return_value = make_response(payload={"success": False})
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("error").content == "搜尋失敗"

    def test_transport_error(self, client, session, future_date):
        """Test that a network failure is reported instead of raised."""
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("error").visible is True
        assert "refused" in controller.region("error").content
        assert controller.region("loading").visible is False

    def test_past_date_makes_no_request(self, client, session):
        """Test that invalid criteria never reach the network."""
        controller = FlightSearchController(client)

        controller.search(
            {
                "origin": "TPE",
                "destination": "NRT",
                "departure_date": date.today() - timedelta(days=1),
            }
        )

        session.request.assert_not_called()
        assert controller.region("error").content == "出發日期不能早於今天"

    def test_return_before_departure(self, client, session, future_date):
        """Test that a return date earlier than departure is rejected."""
        controller = FlightSearchController(client)

        controller.search(
            {
                "origin": "TPE",
                "destination": "NRT",
                "departure_date": future_date,
                "return_date": future_date - timedelta(days=1),
            }
        )

        session.request.assert_not_called()
        assert controller.region("error").content == "回程日期不能早於出發日期"

    def test_malformed_offer_is_isolated(
        self, client, session, make_response, future_date, sample_flight
    ):
        """Test that one broken record renders as an error card between good ones."""
        session.request.return_value = search_response(
            make_response, [sample_flight, "not a flight", {"price": -5}, sample_flight]
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        cards = controller.region("results").content.cards
        assert len(cards) == 4
        assert isinstance(cards[0], FlightCard)
        assert isinstance(cards[1], ErrorCard)
        assert cards[1].message == "無法顯示航班資訊"
        assert isinstance(cards[2], ErrorCard)
        assert isinstance(cards[3], FlightCard)

    def test_weather_and_exchange(
        self, client, session, make_response, future_date, sample_flight, sample_weather
    ):
        """Test that the weather and exchange panels are filled from one response."""
        session.request.return_value = search_response(
            make_response,
            [sample_flight],
            weather=sample_weather,
            exchange={
                "base_currency": "TWD",
                "last_updated": "2025-03-01T14:30:00",
                "rates": {"USD": 0.0305, "JPY": 4.61234},
            },
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        weather = controller.region("weather").content
        assert controller.region("weather").visible is True
        assert weather.destination.temperature == "9°C"
        assert weather.destination.icon_url.startswith("https://cdn.weatherapi.com")
        assert weather.origin.temperature == "26°C"

        exchange = controller.region("exchange").content
        assert exchange.last_updated == "2025/3/1 下午2:30:00"
        assert [(rate.code, rate.rate, rate.name) for rate in exchange.rates] == [
            ("USD", "0.0305", "美元"),
            ("JPY", "4.6123", "日圓"),
        ]

    def test_new_search_hides_previous_advice(
        self, client, session, make_response, future_date, sample_flight
    ):
        """Test that advice from an earlier search does not linger."""
        controller = FlightSearchController(client)
        session.request.return_value = search_response(
            make_response, [sample_flight], price_advice={"current_lowest": 12000, "trend": "up"}
        )
        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})
        assert controller.region("advice").visible is True

        session.request.return_value = search_response(make_response, [sample_flight])
        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("advice").visible is False

    def test_null_history_average(
        self, client, session, make_response, future_date, sample_flight
    ):
        """Test that a route without history shows placeholders, not an error."""
        session.request.return_value = search_response(
            make_response,
            [sample_flight],
            price_advice={
                "current_lowest": 12000,
                "history_avg": None,
                "history_low": None,
                "diff_percent": None,
                "trend": None,
                "advice": None,
            },
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("error").visible is False
        assert controller.region("results").content.count_text == "找到 1 個航班"
        advice = controller.region("advice").content
        assert advice.current == "$12,000"
        assert advice.average == "尚無資料"
        assert advice.diff == "--"
        assert advice.color == "#17a2b8"

    def test_malformed_exchange_keeps_flights(
        self, client, session, make_response, future_date, sample_flight, sample_weather
    ):
        """Test that a bad exchange rate hides only the exchange panel."""
        session.request.return_value = search_response(
            make_response,
            [sample_flight],
            weather=sample_weather,
            exchange={"base_currency": "TWD", "rates": {"USD": 0.03, "XAU": None}},
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("error").visible is False
        assert controller.region("exchange").visible is False
        assert controller.region("weather").visible is True
        cards = controller.region("results").content.cards
        assert isinstance(cards[0], FlightCard)
        assert cards[0].price == "12,000"

    def test_malformed_weather_keeps_flights(
        self, client, session, make_response, future_date, sample_flight
    ):
        session.request.return_value = search_response(
            make_response,
            [sample_flight],
            weather={"destination_weather": {"city": "Tokyo", "avg_temp": "cold"}},
        )
        controller = FlightSearchController(client)

        controller.search({"origin": "TPE", "destination": "NRT", "departure_date": future_date})

        assert controller.region("weather").visible is False
        assert controller.region("results").visible is True


class TestPresenters:
    """Test suite for the search result presenters."""

    def test_advice_without_history(self):
        """Test the placeholders when the route has no history."""
        card = present_advice(PriceAdvice(current_lowest=9800, advice="首次查詢"))

        assert card.current == "$9,800"
        assert card.average == "尚無資料"
        assert card.diff == "--"
        assert card.low == "--"
        assert card.color == "#17a2b8"

    def test_advice_trend_colours(self):
        """Test the up and stable trend colours."""
        assert present_advice(PriceAdvice(trend="up")).color == "#dc3545"
        assert present_advice(PriceAdvice(trend="stable")).color == "#ffc107"

    def test_packing_list_from_destination(self, sample_weather):
        """Test that a cold, rainy destination gets both rule sets."""
        view = present_weather(WeatherBundle.model_validate(sample_weather))

        names = [item.name for item in view.packing_list]
        assert names == [
            "護照/證件",
            "充電器/網卡",
            "厚外套/圍巾",
            "暖暖包",
            "摺疊傘",
            "防水鞋",
        ]
        assert view.travel_advice == "東京較冷，請注意保暖"

    def test_no_destination_weather(self, sample_weather):
        """Test that the packing list needs destination weather."""
        bundle = WeatherBundle.model_validate(
            {"origin_weather": sample_weather["origin_weather"]}
        )
        view = present_weather(bundle)
        assert view.destination is None
        assert view.packing_list is None
