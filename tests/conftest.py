"""
Pytest configuration and fixtures for trips map tests.
"""

import pytest
from datetime import date
import json
import os
import tempfile

from components.trips.filter_state import FilterState, FilterStateMachine
from components.trips.map_config import TripsMapConfig
from components.trips.renderer import MapboxStyleRenderer
from components.trips.synchronizer import StyleSynchronizer


@pytest.fixture
def temp_directory():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def trips_config(temp_directory):
    """Default configuration backed by a path that does not exist yet."""
    return TripsMapConfig(os.path.join(temp_directory, "trips_map_config.json"))


@pytest.fixture
def config_file(temp_directory):
    """Write a partial configuration file and return its path."""
    def _write(content):
        path = os.path.join(temp_directory, "custom_config.json")
        with open(path, 'w') as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(content, f)
        return path
    return _write


@pytest.fixture
def complete_state():
    """Complete filter state for January 2017 at 09:00."""
    return FilterState(date_from=date(2017, 1, 1), date_to=date(2017, 1, 2), hour=9)


@pytest.fixture
def renderer():
    """Renderer whose base style has not loaded yet."""
    return MapboxStyleRenderer(map_settings={'height': '70vh', 'navigation_position': 'top-right'})


@pytest.fixture
def synchronizer(renderer, trips_config):
    """Synchronizer attached to an unloaded renderer."""
    sync = StyleSynchronizer(renderer, FilterStateMachine(), trips_config)
    sync.attach()
    return sync


@pytest.fixture
def loaded_synchronizer(synchronizer):
    """Synchronizer after the renderer's load event has fired."""
    synchronizer.renderer.fire_load()
    return synchronizer


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
