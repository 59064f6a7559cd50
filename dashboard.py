"""
UK Location Data Mashup - Streamlit Dashboard
Enter a postcode, get a map, local crime and the weather.

Run:
    streamlit run dashboard.py

The API server (``python run.py``) must be reachable at MASHUP_API_URL.
"""

import streamlit as st
import streamlit.components.v1 as components

from mashup.api_client import MashupClient
from mashup.client import Clear, PostcodeChanged, Program, ServerState, Submit
from mashup.config import MASHUP_API_URL
from mashup.view import (
    bing_map_url,
    crime_chart,
    location_lines,
    weather_caption,
    weather_icon,
)


# Page config
st.set_page_config(
    page_title="UK Location Data Mashup",
    page_icon="🗺️",
    layout="wide"
)


@st.cache_resource
def get_api_client() -> MashupClient:
    """Shared HTTP client for the mashup API"""
    return MashupClient(MASHUP_API_URL)


def get_program() -> Program:
    """One state machine per browser session"""
    if "program" not in st.session_state:
        st.session_state.program = Program(get_api_client().fetch_report)
    return st.session_state.program


# ── Callbacks (run before the script re-renders) ──

def on_postcode_changed():
    get_program().dispatch(PostcodeChanged(st.session_state.postcode_input))


def on_submit():
    with st.spinner("Fetching report..."):
        get_program().dispatch(Submit())


def on_clear():
    st.session_state.postcode_input = ""
    get_program().dispatch(Clear())


def render_location_tile(report):
    st.subheader("Location")
    town, region, distance = location_lines(report.location)
    st.markdown(f"### {town}")
    st.markdown(f"#### {region}")
    st.markdown(f"#### {distance}")


def render_weather_tile(report):
    st.subheader("Weather")
    st.markdown(f"# {weather_icon(report.weather.weather_type)}")
    st.markdown(f"#### {weather_caption(report.weather)}")


def main():
    st.title("🗺️ UK Location Data Mashup")

    state = get_program().state

    st.text_input(
        "Postcode",
        key="postcode_input",
        placeholder="Ex: EC2A 4NE",
        on_change=on_postcode_changed,
    )
    if state.validation_error:
        st.error(state.validation_error)
    elif state.can_submit:
        st.success("✓ Valid postcode")

    col1, col2, _ = st.columns([1, 1, 6])
    col1.button(
        "Submit",
        type="primary",
        disabled=not state.can_submit,
        on_click=on_submit,
        use_container_width=True,
    )
    col2.button("Clear", on_click=on_clear, use_container_width=True)

    if state.server_state == ServerState.ERROR:
        st.error(f"⚠️ {state.error_message}")
        return

    report = state.report
    if report is None:
        return

    st.markdown("---")
    st.subheader("Map")
    components.iframe(bing_map_url(report.location.location.position), height=410)

    col1, col2 = st.columns([1, 2])

    with col1:
        render_location_tile(report)
        st.markdown("---")
        render_weather_tile(report)

    with col2:
        if report.crimes:
            st.plotly_chart(crime_chart(report.crimes), use_container_width=True)
        else:
            st.subheader("Crime")
            st.info("No crime data available for this area.")


if __name__ == "__main__":
    main()
