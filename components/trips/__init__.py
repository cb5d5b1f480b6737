"""
Trips Component - extruded trips-per-tile map with date and hour filters.

Filter changes are turned into tile source queries and pushed into the
renderer's style description; layer styling is installed once on load.
"""

from .date_format import format_date
from .encoding import EncodingBreakpoint, EncodingTable, TRIP_BREAKPOINTS
from .filter_state import FilterState, FilterStateMachine
from .map_config import TripsMapConfig
from .query_builder import TileQuery, build_query, build_tile_url
from .renderer import MapboxStyleRenderer
from .synchronizer import StyleSynchronizer

__all__ = [
    'format_date',
    'EncodingBreakpoint',
    'EncodingTable',
    'TRIP_BREAKPOINTS',
    'FilterState',
    'FilterStateMachine',
    'TripsMapConfig',
    'TileQuery',
    'build_query',
    'build_tile_url',
    'MapboxStyleRenderer',
    'StyleSynchronizer'
]
