"""
Configuration management for the trips map.

Settings are read from a JSON file and merged over built-in defaults, so a
partial file only needs the keys it overrides.
"""

import copy
import json
import os
from datetime import date
from typing import Dict, Any, Optional
from pathlib import Path
import logging

from .filter_state import FilterState, DEFAULT_HOUR
from .query_builder import TILE_ENDPOINT, TileQuery
from .date_format import format_date

logger = logging.getLogger(__name__)


class TripsMapConfig:
    """Manages tile source, layer and map display settings."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "trips_map_config.json"
        self.default_config = self._get_default_config()
        self.config = self._load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default trips map configuration."""
        return {
            "tile_source": {
                "name": "public.get_trips",
                "endpoint": TILE_ENDPOINT,
                "base_url": "",
                "source_layer": "trips"
            },
            "layer": {
                "id": "trips"
            },
            # Shown before the user picks a range, so the first paint is not empty
            "default_query": {
                "date_from": "2017-01-01",
                "date_to": "2017-02-01",
                "hour": DEFAULT_HOUR
            },
            "filters": {
                "initial_hour": DEFAULT_HOUR
            },
            "map_settings": {
                "style_url": "mapbox://styles/mapbox/light-v10",
                "access_token": "",
                "center": [34.78, 32.08],
                "zoom": 11,
                "pitch": 45,
                "height": "70vh",
                "frame_height": 700,
                "scroll_zoom": False,
                "navigation_position": "top-right"
            }
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    config = json.load(f)
                if not isinstance(config, dict):
                    raise ValueError(f"expected a JSON object, got {type(config).__name__}")
                logger.info(f"Loaded trips map configuration from {self.config_path}")

                # Merge with defaults to ensure all keys exist
                return self._merge_configs(self.default_config, config)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
                return copy.deepcopy(self.default_config)
        else:
            logger.info(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(self.default_config)

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        merged = copy.deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(self.config, f, indent=2)
            logger.info(f"Saved trips map configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")

    def get_tile_source(self) -> Dict[str, Any]:
        return self.config["tile_source"]

    def get_layer_settings(self) -> Dict[str, Any]:
        return self.config["layer"]

    def get_map_settings(self) -> Dict[str, Any]:
        """Get map display settings."""
        return self.config["map_settings"]

    def get_default_query(self) -> TileQuery:
        """Get the query installed before any filter is chosen."""
        defaults = self.config["default_query"]
        return TileQuery(
            date_from=format_date(date.fromisoformat(defaults["date_from"])),
            date_to=format_date(date.fromisoformat(defaults["date_to"])),
            hour=int(defaults["hour"]),
        )

    def get_default_filter_state(self) -> FilterState:
        """Get the initial filter state: no dates, configured hour."""
        return FilterState(hour=int(self.config["filters"]["initial_hour"]))

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = copy.deepcopy(self.default_config)
        logger.info("Reset configuration to defaults")


# Global configuration instance
_trips_map_config = None

def get_trips_map_config(config_path: Optional[str] = None) -> TripsMapConfig:
    """Get global trips map configuration instance."""
    global _trips_map_config
    if _trips_map_config is None:
        _trips_map_config = TripsMapConfig(config_path)
    return _trips_map_config
