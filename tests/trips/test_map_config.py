"""
Tests for TripsMapConfig.
"""

import json
import os

import pytest

from components.trips.filter_state import FilterState
from components.trips.map_config import TripsMapConfig
from components.trips.query_builder import TileQuery


@pytest.mark.unit
class TestTripsMapConfig:
    """Test cases for TripsMapConfig."""

    def test_defaults_when_file_missing(self, trips_config):
        """Missing file falls back to the built-in defaults."""
        assert trips_config.config == trips_config.default_config
        assert trips_config.get_tile_source()['name'] == 'public.get_trips'
        assert trips_config.get_tile_source()['endpoint'] == '/tiles/rpc/public.get_trips.json'
        assert trips_config.get_layer_settings()['id'] == 'trips'

    def test_default_query(self, trips_config):
        """Fallback query covers January 2017 at 09:00."""
        assert trips_config.get_default_query() == TileQuery(date_from='1.1.2017', date_to='2.1.2017', hour=9)

    def test_default_filter_state(self, trips_config):
        """Initial filters have no dates and the configured hour."""
        assert trips_config.get_default_filter_state() == FilterState(hour=9)

    def test_partial_file_merges_over_defaults(self, config_file):
        """Only the keys in the file are overridden."""
        path = config_file({'map_settings': {'zoom': 14}, 'filters': {'initial_hour': 18}})

        config = TripsMapConfig(path)

        assert config.get_map_settings()['zoom'] == 14
        assert config.get_map_settings()['navigation_position'] == 'top-right'
        assert config.get_default_filter_state().hour == 18

    def test_invalid_json_uses_defaults(self, config_file):
        """A corrupt file is logged and ignored."""
        path = config_file("{not json")

        config = TripsMapConfig(path)

        assert config.config == config.default_config

    def test_undecodable_file_uses_defaults(self, temp_directory):
        """A file that is not UTF-8 is logged and ignored."""
        path = os.path.join(temp_directory, 'binary.json')
        with open(path, 'wb') as f:
            f.write(b'\xff\xfe\x00{')

        config = TripsMapConfig(path)

        assert config.config == config.default_config

    def test_non_object_json_uses_defaults(self, config_file):
        """Valid JSON that is not an object is treated as a read error."""
        path = config_file([1, 2])

        config = TripsMapConfig(path)

        assert config.config == config.default_config
        assert config.get_tile_source()['name'] == 'public.get_trips'

    def test_save_and_reload(self, temp_directory):
        """Saved settings are read back."""
        path = os.path.join(temp_directory, 'nested', 'trips.json')
        config = TripsMapConfig(path)
        config.config['tile_source']['base_url'] = 'http://localhost:3000'

        config.save_config()

        with open(path) as f:
            assert json.load(f)['tile_source']['base_url'] == 'http://localhost:3000'
        assert TripsMapConfig(path).get_tile_source()['base_url'] == 'http://localhost:3000'

    def test_defaults_are_not_shared(self, trips_config):
        """Editing the live config leaves the defaults intact."""
        trips_config.config['map_settings']['zoom'] = 3

        assert trips_config.default_config['map_settings']['zoom'] == 11

        trips_config.reset_to_defaults()
        assert trips_config.get_map_settings()['zoom'] == 11
