"""
Trips map page.

Streamlit page with the date range and hour filters and the extruded trips
map. Widget callbacks go through StyleSynchronizer.change_filter, so the map
only re-queries when the date range is complete.
"""

from datetime import date
from typing import Optional
import logging

import streamlit as st
import streamlit.components.v1 as components

from .filter_state import FilterStateMachine
from .map_config import TripsMapConfig, get_trips_map_config
from .renderer import MapboxStyleRenderer
from .synchronizer import StyleSynchronizer

logger = logging.getLogger(__name__)

SESSION_KEY = 'trips_map_synchronizer'


def create_synchronizer(config: TripsMapConfig) -> StyleSynchronizer:
    """Build a renderer, filter state and synchronizer wired to the load event."""
    renderer = MapboxStyleRenderer(map_settings=config.get_map_settings())
    filters = FilterStateMachine(config.get_default_filter_state())
    synchronizer = StyleSynchronizer(renderer, filters, config)
    synchronizer.attach()
    renderer.fire_load()
    return synchronizer


class TripsMapPage:
    """Renders the trips map with its filter controls."""

    def __init__(self, config: Optional[TripsMapConfig] = None):
        self.config = config or get_trips_map_config()

    def _get_synchronizer(self) -> StyleSynchronizer:
        if SESSION_KEY not in st.session_state:
            st.session_state[SESSION_KEY] = create_synchronizer(self.config)
            logger.info("Created trips map session")
        return st.session_state[SESSION_KEY]

    def _on_widget_change(self, name: str, widget_key: str) -> None:
        synchronizer = self._get_synchronizer()
        synchronizer.change_filter(name, st.session_state[widget_key])

    def render_filters(self, synchronizer: StyleSynchronizer) -> None:
        state = synchronizer.filters.state

        col1, col2, col3 = st.columns(3)
        with col1:
            st.date_input(
                "From",
                value=state.date_from,
                key='trips_filter_from',
                on_change=self._on_widget_change,
                args=('from', 'trips_filter_from')
            )
        with col2:
            st.date_input(
                "To",
                value=state.date_to,
                key='trips_filter_to',
                on_change=self._on_widget_change,
                args=('to', 'trips_filter_to')
            )
        with col3:
            st.slider(
                "Hour",
                min_value=0,
                max_value=23,
                value=state.hour,
                key='trips_filter_hour',
                on_change=self._on_widget_change,
                args=('hour', 'trips_filter_hour')
            )

        if not state.is_complete:
            st.caption("Pick both dates to update the map")

    def render_legend(self, synchronizer: StyleSynchronizer) -> None:
        st.markdown("**Trips per tile**")
        st.dataframe(synchronizer.encoding.to_frame(), hide_index=True)

    def render(self) -> None:
        """Render the full page."""
        st.title("🗺️ Trips Map")

        synchronizer = self._get_synchronizer()
        self.render_filters(synchronizer)

        height = self.config.get_map_settings().get('frame_height', 700)
        components.html(synchronizer.renderer.to_html(), height=height)

        st.caption(f"Tile source: {synchronizer.current_url}")
        self.render_legend(synchronizer)


def render_trips_map_page() -> None:
    """Entry point used by the app."""
    TripsMapPage().render()
