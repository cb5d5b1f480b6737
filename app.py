"""
Trips Tiles Map - Streamlit GUI Application

This module provides the Streamlit-based web interface for exploring trip
counts per map tile, filtered by date range and hour of day.
"""

import logging

import streamlit as st
from streamlit_option_menu import option_menu

from components.trips.page import render_trips_map_page
from components.trips.encoding import EncodingTable, INTERPOLATION_BASE, EXTRUSION_OPACITY
from components.trips.query_builder import TILE_ENDPOINT

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Configure Streamlit page
st.set_page_config(
    page_title="Trips Tiles Map",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def main():
    """Main Streamlit application entry point"""

    page_configs = [
        ("Trips Map", "map"),
        ("Map Encoding", "palette"),
    ]

    with st.sidebar:
        st.markdown("### Navigation")

        page = option_menu(
            menu_title=None,
            options=[config[0] for config in page_configs],
            icons=[config[1] for config in page_configs],
            menu_icon="cast",
            default_index=0,
            orientation="vertical",
            key="nav_menu",
            styles={
                "container": {"padding": "0!important", "background-color": "#f0f2f6"},
                "icon": {"color": "#0068c9", "font-size": "16px"},
                "nav-link": {
                    "font-size": "14px",
                    "text-align": "left",
                    "margin": "0px",
                    "color": "#262730",
                    "background-color": "#f0f2f6",
                    "--hover-color": "#e8f4f8"
                },
                "nav-link-selected": {
                    "background-color": "#e8f4f8",
                    "color": "#000000 !important",
                    "font-weight": "bold"
                },
            }
        )

    if page == "Trips Map":
        trips_map_page()
    elif page == "Map Encoding":
        encoding_page()


def trips_map_page():
    """Trips map page"""
    try:
        render_trips_map_page()
    except Exception as e:
        st.error(f"❌ Error in trips map page: {e}")
        st.info("🔧 Error details:")
        import traceback
        st.code(traceback.format_exc())
        st.info("💡 Try refreshing the page or check the tile server.")


def encoding_page():
    """How trip counts become height and color"""
    st.title("🎨 Map Encoding")
    st.markdown("---")

    st.markdown(f"""
Tiles are served by `{TILE_ENDPOINT}` with `date_from`, `date_to` (M.D.YYYY) and `hour` parameters.

Each tile's trip count sets its extrusion height and fill color. Between breakpoints the value is
interpolated exponentially with base **{INTERPOLATION_BASE}**; outside the table it is clamped to
the nearest breakpoint. Opacity is fixed at **{EXTRUSION_OPACITY}**.
""")

    st.dataframe(EncodingTable().to_frame(), hide_index=True)


if __name__ == "__main__":
    main()
