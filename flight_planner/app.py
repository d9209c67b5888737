import logging
from datetime import date, timedelta

import streamlit as st

from flight_planner.api import ApiClient
from flight_planner.attractions import AttractionsController
from flight_planner.autocomplete import AutocompleteController
from flight_planner.config import DEFAULT_TRACK_WEEKS, RADIUS_OPTIONS
from flight_planner.currency import CurrencyCalculator
from flight_planner.flight_search import FlightSearchController
from flight_planner.geocoding import NominatimGeocoder
from flight_planner.price_tracking import PriceTrackingController, timeline_frame
from flight_planner.render import HtmlRenderer
from flight_planner.tabs import TABS, TabController
from flight_planner.timezone import TimezoneController
from flight_planner.view import Region

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TAB_LABELS = {
    "search": "✈️ 即時航班搜尋",
    "tracking": "📈 價格追蹤",
    "currency": "💱 貨幣計算機",
    "timezone": "⏰ 時差計算",
    "attractions": "🏛️ 景點搜尋",
}

renderer = HtmlRenderer()


def get_controllers() -> dict:
    """One set of controllers per browser session."""
    if "controllers" not in st.session_state:
        client = ApiClient()
        controllers = {
            "client": client,
            "search": FlightSearchController(client),
            "tracking": PriceTrackingController(client),
            "currency": CurrencyCalculator(client),
            "timezone": TimezoneController(client),
            "attractions": AttractionsController(client, NominatimGeocoder()),
        }
        for field in ("origin", "destination", "trackingOrigin", "trackingDestination"):
            controllers[field] = AutocompleteController(field, client)
        controllers["tabs"] = TabController(
            controllers[name] for name in TABS if name in controllers
        )
        st.session_state.controllers = controllers
    return st.session_state.controllers


def show_region(region: Region, kind: str = "html") -> None:
    """Draw a region if it is visible."""
    if not region.visible or region.content is None:
        return
    if kind == "error":
        st.error(f"❌ {region.content}")
    else:
        st.markdown(renderer.render(region.content), unsafe_allow_html=True)


def airport_input(label: str, controller: AutocompleteController) -> str:
    """Text input with an airport suggestion picker below it."""
    text = st.text_input(label, value=controller.value)
    if text != controller.value:
        controller.on_input(text)
    region = controller.region("suggestions")
    if region.visible and controller.rows:
        choice = st.selectbox(
            "建議機場",
            options=range(len(controller.rows)),
            format_func=lambda i: controller.rows[i],
            index=None,
            key=f"{controller.field_id}_suggestions",
        )
        if choice is not None:
            controller.select(choice)
            st.rerun()
    return controller.value


def render_search_tab(controllers: dict) -> None:
    search = controllers["search"]
    with st.container(border=True):
        col1, col2 = st.columns(2)
        with col1:
            origin = airport_input("出發地", controllers["origin"])
            departure = st.date_input(
                "出發日期", value=date.today() + timedelta(days=7), min_value=date.today()
            )
            passengers = st.number_input("乘客人數", min_value=1, max_value=9, value=1)
        with col2:
            destination = airport_input("目的地", controllers["destination"])
            return_date = st.date_input("回程日期（選填）", value=None, min_value=date.today())
        submitted = st.button("🔍 搜尋航班", type="primary")

    if submitted:
        with st.spinner("搜尋中..."):
            search.search(
                {
                    "origin": origin,
                    "destination": destination,
                    "departure_date": departure,
                    "return_date": return_date,
                    "passengers": passengers,
                }
            )

    show_region(search.region("error"), "error")
    show_region(search.region("advice"))
    show_region(search.region("weather"))
    show_region(search.region("exchange"))
    show_region(search.region("results"))


def render_tracking_tab(controllers: dict) -> None:
    tracking = controllers["tracking"]
    with st.container(border=True):
        origin = airport_input("出發地", controllers["trackingOrigin"])
        destination = airport_input("目的地", controllers["trackingDestination"])
        weeks = st.slider("追蹤週數", min_value=4, max_value=24, value=DEFAULT_TRACK_WEEKS)
        submitted = st.button("📈 分析價格", type="primary")

    if submitted:
        with st.spinner("分析價格中..."):
            tracking.track(origin, destination, weeks)

    show_region(tracking.region("error"), "error")
    results = tracking.region("results")
    if results.visible and results.content is not None:
        show_region(results)
        st.dataframe(timeline_frame(results.content), use_container_width=True, hide_index=True)


def render_currency_tab(controllers: dict) -> None:
    calculator = controllers["currency"]
    if "currencies" not in st.session_state:
        st.session_state.currencies = calculator.load_supported_currencies()
    currencies = st.session_state.currencies

    amount = st.text_input("金額", value=calculator.amount_text)
    col1, col2, col3 = st.columns([2, 1, 2])
    with col1:
        from_currency = st.selectbox(
            "從", currencies, index=_index(currencies, calculator.from_currency)
        )
    with col2:
        swap = st.button("⇄", key="swapCurrencies")
    with col3:
        to_currency = st.selectbox(
            "到", currencies, index=_index(currencies, calculator.to_currency)
        )

    if swap:
        calculator.swap()
        st.rerun()
    if amount != calculator.amount_text:
        calculator.set_amount(amount)
    if from_currency != calculator.from_currency:
        calculator.set_from(from_currency)
    if to_currency != calculator.to_currency:
        calculator.set_to(to_currency)
    if st.button("計算", key="calculateBtn"):
        calculator.submit()

    show_region(calculator.region("result"))


def render_timezone_tab(controllers: dict) -> None:
    timezone = controllers["timezone"]
    with st.form("timeDiffForm"):
        from_zone = st.text_input("起始時區", placeholder="Asia/Taipei")
        to_zone = st.text_input("目標時區", placeholder="Europe/London")
        submitted = st.form_submit_button("⏰ 計算時差", type="primary")

    if submitted:
        timezone.calculate(from_zone, to_zone)

    show_region(timezone.region("error"), "error")
    show_region(timezone.region("result"))


def render_attractions_tab(controllers: dict) -> None:
    attractions = controllers["attractions"]
    if "categories" not in st.session_state:
        st.session_state.categories = ["all"] + attractions.load_categories()

    with st.form("attractionsForm"):
        location = st.text_input("地點", placeholder="例如：台北101")
        col1, col2, col3 = st.columns(3)
        with col1:
            radius = st.selectbox("半徑 (公尺)", RADIUS_OPTIONS, index=1)
        with col2:
            query = st.text_input("關鍵字（選填）")
        with col3:
            category = st.selectbox("類別", st.session_state.categories)
        submitted = st.form_submit_button("🔍 搜尋景點", type="primary")

    if submitted:
        with st.spinner("搜尋景點中..."):
            attractions.search(location, radius, query, category)

    show_region(attractions.region("error"), "error")
    show_region(attractions.region("results"))


def _index(options: list[str], value: str) -> int:
    return options.index(value) if value in options else 0


def main():
    """Main application function."""
    st.set_page_config(page_title="航班搜尋", page_icon="✈️", layout="wide")
    st.title("✈️ 航班搜尋與旅遊規劃")

    controllers = get_controllers()

    if not controllers["client"].check_health():
        st.warning("🔴 後端服務未啟動，部分功能可能無法使用。")

    tabs: TabController = controllers["tabs"]
    selected = st.radio(
        "功能",
        TABS,
        index=TABS.index(tabs.current),
        format_func=TAB_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    if selected != tabs.current:
        tabs.select(selected)

    {
        "search": render_search_tab,
        "tracking": render_tracking_tab,
        "currency": render_currency_tab,
        "timezone": render_timezone_tab,
        "attractions": render_attractions_tab,
    }[tabs.current](controllers)


if __name__ == "__main__":
    main()
