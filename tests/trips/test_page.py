"""
Tests for the trips map Streamlit page.

The page is run headless with Streamlit's AppTest; widget changes must reach
StyleSynchronizer.change_filter and only a complete date range re-queries.
"""

import pytest
from datetime import date

from streamlit.testing.v1 import AppTest

from components.trips.page import SESSION_KEY

DEFAULT_URL = "/tiles/rpc/public.get_trips.json?date_from=1.1.2017&date_to=2.1.2017&hour=9"


def trips_page_script():
    from components.trips.map_config import TripsMapConfig
    from components.trips.page import TripsMapPage

    TripsMapPage(TripsMapConfig("missing_trips_map_config.json")).render()


@pytest.fixture
def app():
    """Trips page after its first run."""
    at = AppTest.from_function(trips_page_script, default_timeout=30)
    at.run()
    assert not at.exception
    return at


@pytest.mark.integration
class TestTripsMapPage:
    """Test the page's filter widgets against the synchronizer."""

    def test_first_run_shows_default_source(self, app):
        """The map starts on the default query with no dates picked."""
        synchronizer = app.session_state[SESSION_KEY]

        assert synchronizer.current_url == DEFAULT_URL
        assert synchronizer.filters.state.date_from is None
        assert app.slider(key='trips_filter_hour').value == 9

    def test_one_date_keeps_default(self, app):
        """Picking only the start date does not re-query."""
        app.date_input(key='trips_filter_from').set_value(date(2017, 1, 1)).run()
        synchronizer = app.session_state[SESSION_KEY]

        assert synchronizer.filters.state.date_from == date(2017, 1, 1)
        assert synchronizer.current_url == DEFAULT_URL
        assert synchronizer.renderer.style_pushes == 0

    def test_both_dates_rewrite_source(self, app):
        """A complete range points the source at the new query."""
        app.date_input(key='trips_filter_from').set_value(date(2017, 1, 1)).run()
        app.date_input(key='trips_filter_to').set_value(date(2017, 1, 2)).run()
        synchronizer = app.session_state[SESSION_KEY]

        assert synchronizer.current_url == (
            "/tiles/rpc/public.get_trips.json?date_from=1.1.2017&date_to=1.2.2017&hour=9"
        )
        style = synchronizer.renderer.get_style()
        assert style['sources']['public.get_trips']['url'] == synchronizer.current_url

    def test_hour_change_after_range(self, app):
        """Moving the hour slider re-queries once the range is set."""
        app.date_input(key='trips_filter_from').set_value(date(2017, 1, 1)).run()
        app.date_input(key='trips_filter_to').set_value(date(2017, 1, 2)).run()
        app.slider(key='trips_filter_hour').set_value(18).run()

        assert app.session_state[SESSION_KEY].current_url.endswith("&hour=18")
