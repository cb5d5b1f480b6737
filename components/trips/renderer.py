"""
Map renderer control surface.

The synchronizer talks to the renderer through a small surface modelled on
Mapbox GL JS: add a source, add a layer, read and write the whole style,
and subscribe to the load event. MapboxStyleRenderer keeps the style
description in Python and renders it to a Mapbox GL JS page that Streamlit
embeds as an HTML component.
"""

import copy
import json
from typing import Any, Callable, Dict, List, Optional, Protocol
import logging

logger = logging.getLogger(__name__)

MAPBOX_GL_VERSION = "v1.13.3"


class MapRenderer(Protocol):
    """Operations the synchronizer needs from a renderer."""

    @property
    def loaded(self) -> bool: ...

    def add_source(self, name: str, source: Dict[str, Any]) -> None: ...

    def add_layer(self, layer: Dict[str, Any]) -> None: ...

    def get_style(self) -> Dict[str, Any]: ...

    def set_style(self, style: Dict[str, Any]) -> None: ...

    def on(self, event: str, callback: Callable[[], None]) -> None: ...


class MapboxStyleRenderer:
    """In-process style holder with Mapbox GL JS semantics."""

    def __init__(self, map_settings: Optional[Dict[str, Any]] = None,
                 base_style: Optional[Dict[str, Any]] = None):
        self.map_settings = map_settings or {}
        self._style: Dict[str, Any] = copy.deepcopy(base_style) if base_style else {
            'version': 8,
            'sources': {},
            'layers': [],
        }
        self._style.setdefault('sources', {})
        self._style.setdefault('layers', [])
        self._callbacks: Dict[str, List[Callable[[], None]]] = {}
        self._loaded = False
        self.style_pushes = 0

    @property
    def loaded(self) -> bool:
        return self._loaded

    def on(self, event: str, callback: Callable[[], None]) -> None:
        self._callbacks.setdefault(event, []).append(callback)

    def fire_load(self) -> None:
        """Mark the base style as loaded and run load callbacks."""
        self._loaded = True
        logger.debug(f"Renderer loaded, running {len(self._callbacks.get('load', []))} callbacks")
        for callback in self._callbacks.get('load', []):
            callback()

    def add_source(self, name: str, source: Dict[str, Any]) -> None:
        if name in self._style['sources']:
            raise ValueError(f"There is already a source with id '{name}'")
        self._style['sources'][name] = copy.deepcopy(source)

    def add_layer(self, layer: Dict[str, Any]) -> None:
        layer_id = layer.get('id')
        if any(existing.get('id') == layer_id for existing in self._style['layers']):
            raise ValueError(f"Layer with id '{layer_id}' already exists on this map")
        source = layer.get('source')
        if source is not None and source not in self._style['sources']:
            raise ValueError(f"Source '{source}' not found for layer '{layer_id}'")
        self._style['layers'].append(copy.deepcopy(layer))

    def get_style(self) -> Dict[str, Any]:
        """Return a snapshot of the current style description."""
        return copy.deepcopy(self._style)

    def set_style(self, style: Dict[str, Any]) -> None:
        self._style = copy.deepcopy(style)
        self.style_pushes += 1

    def to_html(self) -> str:
        """Render the current style as a standalone Mapbox GL JS page."""
        settings = self.map_settings
        style_url = settings.get('style_url', 'mapbox://styles/mapbox/light-v10')
        navigation = settings.get('navigation_position')

        navigation_js = ""
        if navigation:
            navigation_js = f"map.addControl(new mapboxgl.NavigationControl(), {json.dumps(navigation)});"
        scroll_js = "" if settings.get('scroll_zoom', False) else "map.scrollZoom.disable();"

        return f"""
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <script src="https://api.mapbox.com/mapbox-gl-js/{MAPBOX_GL_VERSION}/mapbox-gl.js"></script>
  <link href="https://api.mapbox.com/mapbox-gl-js/{MAPBOX_GL_VERSION}/mapbox-gl.css" rel="stylesheet">
  <style>body {{ margin: 0; }} #map {{ height: {settings.get('height', '70vh')}; width: 100%; }}</style>
</head>
<body>
  <div id="map"></div>
  <script>
    mapboxgl.accessToken = {json.dumps(settings.get('access_token', ''))};
    const map = new mapboxgl.Map({{
      container: 'map',
      style: {json.dumps(style_url)},
      center: {json.dumps(settings.get('center', [0, 0]))},
      zoom: {json.dumps(settings.get('zoom', 10))},
      pitch: {json.dumps(settings.get('pitch', 0))}
    }});
    {scroll_js}
    {navigation_js}
    const sources = {json.dumps(self._style['sources'])};
    const layers = {json.dumps(self._style['layers'])};
    map.on('load', () => {{
      Object.entries(sources).forEach(([name, source]) => map.addSource(name, source));
      layers.forEach(layer => map.addLayer(layer));
    }});
  </script>
</body>
</html>
"""
