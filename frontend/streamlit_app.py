"""A Streamlit frontend that renders the weather store and forwards user actions to it."""

import logging
import threading
import streamlit as st

from weathercard.config import settings
from weathercard.core.display import weather_style
from weathercard.core.loop_runner import LoopRunner
from weathercard.core.store import WeatherStateStore
from weathercard.core.weather_api import JuheWeatherClient
from weathercard.models.state import FetchStatus

logging.basicConfig(level=settings.effective_log_level)
logger = logging.getLogger(__name__)

# --- Page Configuration ---
st.set_page_config(page_title="Weather Card", page_icon="🌦️", layout="wide")
LOADING_POLL_SECONDS = 0.5


@st.cache_resource
def get_runner() -> LoopRunner:
    """One background event loop shared by every browser session."""
    runner = LoopRunner()
    runner.start()
    return runner


def get_store() -> WeatherStateStore:
    """Gets this browser session's store, creating it (and its first fetch) on demand."""
    if "store" not in st.session_state:
        runner = get_runner()
        store = runner.call(WeatherStateStore, JuheWeatherClient())
        changed = threading.Event()
        runner.call(store.subscribe, lambda state: changed.set())
        st.session_state.store = store
        st.session_state.state_changed = changed
        logger.info("Created weather store for new browser session")
    return st.session_state.store


def dispatch(action, *args):
    """Runs a store action on the loop thread that owns the store."""
    get_runner().call(action, *args)


store = get_store()
state = store.current_state()

# --- Main App ---
st.title("🌦️ Weather Card")

# --- Sidebar: city selection and favorites ---
with st.sidebar:
    st.header("City")
    st.caption(f"Showing: **{state.current_city}**")
    with st.form("select_city", clear_on_submit=True):
        city_input = st.text_input("City", placeholder="e.g., 上海")
        if st.form_submit_button("Show Weather", use_container_width=True):
            dispatch(store.select_city, city_input)
            st.rerun()

    st.header("Favorites")
    fav_city = st.text_input("City to add", placeholder="e.g., 广州")
    add_col, rem_col = st.columns(2)
    with add_col:
        if st.button("Add", use_container_width=True, disabled=not fav_city.strip()):
            dispatch(store.add_favorite, fav_city)
            st.rerun()
    with rem_col:
        if st.button(
            "Remove oldest",
            use_container_width=True,
            disabled=not state.favorite_cities,
        ):
            dispatch(store.remove_last_favorite)
            st.rerun()

    if not state.favorite_cities:
        st.info("No favorites yet.")
    for city in state.favorite_cities:
        if st.button(city, key=f"fav-{city}", use_container_width=True):
            dispatch(store.select_city, city)
            st.rerun()

# --- Error notice ---
if state.status == FetchStatus.FAILED:
    with st.container(border=True):
        st.error(f"Request failed: {state.error_message}", icon="🚨")
        if st.button("OK"):
            dispatch(store.dismiss_error)
            st.rerun()

# --- Weather content ---
if state.status == FetchStatus.LOADING:
    with st.spinner(f"Loading weather for {state.current_city}..."):
        changed = st.session_state.state_changed
        changed.clear()
        changed.wait(LOADING_POLL_SECONDS)
    st.rerun()

snapshot = state.snapshot
if snapshot is None:
    st.info("No weather data yet.")
    st.stop()

realtime = snapshot.realtime
style = weather_style(realtime.description)
st.markdown(
    f"""
    <div style="background:{style.color};border-radius:16px;padding:24px;text-align:center;color:white">
        <div style="font-size:64px">{style.emoji}</div>
        <div style="font-size:40px;font-weight:bold">{realtime.temperature}°C</div>
        <div style="font-size:20px">{realtime.description}</div>
        <div>{snapshot.city}</div>
        <div style="opacity:0.8">Humidity: {realtime.humidity}% | Wind: {realtime.wind_direction} {realtime.wind_power} | AQI: {realtime.air_quality_index}</div>
    </div>
    """,
    unsafe_allow_html=True,
)

# --- Next days strip ---
st.subheader("Next days")
upcoming = snapshot.forecast[:5]
if upcoming:
    for column, day in zip(st.columns(len(upcoming)), upcoming):
        with column.container(border=True):
            st.markdown(f"**{day.date[5:]}**")
            st.markdown(f"{weather_style(day.weather_description).emoji} {day.weather_description}")
            st.caption(day.temperature_range)

# --- Detailed forecast ---
st.subheader("Detailed forecast")
for day in snapshot.forecast:
    with st.container(border=True):
        date_col, weather_col, temp_col, wind_col = st.columns(4)
        date_col.markdown(f"**{day.date}**")
        weather_col.markdown(
            f"{weather_style(day.weather_description).emoji} {day.weather_description}"
        )
        temp_col.markdown(day.temperature_range)
        wind_col.caption(f"{day.wind_direction} · icons {day.day_icon_id}/{day.night_icon_id}")
