"""
Filter-to-style synchronization for the trips map.

On load the synchronizer installs the trips vector source (with a default
query) and the extrusion layer. After that, each completed filter change
rewrites only the source URL inside the renderer's style description and
writes the style back in one call. Layers are never touched after setup.
"""

from typing import Any, Dict, Optional
import logging

from .encoding import EncodingTable
from .filter_state import FilterState, FilterStateMachine
from .map_config import TripsMapConfig
from .query_builder import build_query, build_tile_url, TileQuery
from .renderer import MapRenderer

logger = logging.getLogger(__name__)


class StyleSynchronizer:
    """Keeps the renderer's tile source in step with the filter state."""

    def __init__(self, renderer: MapRenderer, filters: FilterStateMachine,
                 config: TripsMapConfig, encoding: Optional[EncodingTable] = None):
        self.renderer = renderer
        self.filters = filters
        self.config = config
        self.encoding = encoding or EncodingTable()

        tile_source = config.get_tile_source()
        self.source_name = tile_source["name"]
        self.source_layer = tile_source["source_layer"]
        self.endpoint = tile_source["endpoint"]
        self.base_url = tile_source.get("base_url", "")
        self.layer_id = config.get_layer_settings()["id"]

        self._initialized = False
        self._current_url: Optional[str] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def current_url(self) -> Optional[str]:
        """Tile URL last written to the renderer."""
        return self._current_url

    def attach(self) -> None:
        """Run initialize() once the renderer's base style has loaded."""
        self.renderer.on('load', self.initialize)

    def tile_url(self, query: TileQuery) -> str:
        return build_tile_url(query, endpoint=self.endpoint, base_url=self.base_url)

    def layer_definition(self) -> Dict[str, Any]:
        return {
            'id': self.layer_id,
            'type': 'fill-extrusion',
            'source': self.source_name,
            'source-layer': self.source_layer,
            'paint': self.encoding.paint(),
        }

    def initialize(self) -> None:
        """
        Install the trips source with the default query and the extrusion layer.

        This is the only place a source or layer is created.
        """
        if self._initialized:
            raise RuntimeError(f"Source '{self.source_name}' has already been initialized")

        url = self.tile_url(self.config.get_default_query())
        self.renderer.add_source(self.source_name, {'type': 'vector', 'url': url})
        self.renderer.add_layer(self.layer_definition())

        self._initialized = True
        self._current_url = url
        logger.info(f"Installed source '{self.source_name}' and layer '{self.layer_id}' with {url}")

    def on_filter_changed(self, state: FilterState) -> Optional[str]:
        """
        Point the trips source at the query for the given filter state.

        Args:
            state: Filter state after the latest update

        Returns:
            The URL written to the renderer, or None if nothing was written
        """
        query = build_query(state)
        if query is None:
            return None

        if not self._initialized or not self.renderer.loaded:
            logger.warning("Renderer not ready, dropping filter update")
            return None

        url = self.tile_url(query)
        style = self.renderer.get_style()
        style['sources'][self.source_name]['url'] = url
        self.renderer.set_style(style)

        self._current_url = url
        logger.debug(f"Source '{self.source_name}' now points at {url}")
        return url

    def change_filter(self, name: str, value: Any) -> Optional[str]:
        """Apply a UI filter change and push the resulting query."""
        state = self.filters.update(name, value)
        return self.on_filter_changed(state)
