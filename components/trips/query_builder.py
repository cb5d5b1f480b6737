"""
Tile query construction.

Turns a FilterState into the query string and URL of the trips tile
endpoint. Output is deterministic: equal states give byte-identical URLs,
which is what the synchronizer relies on to push updates.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote
import logging

from .date_format import format_date
from .filter_state import FilterState

logger = logging.getLogger(__name__)

TILE_ENDPOINT = "/tiles/rpc/public.get_trips.json"

# Characters left untouched when a whole URI is encoded (RFC 3986 reserved
# and unreserved sets, matching browser encodeURI).
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


@dataclass(frozen=True)
class TileQuery:
    """Parameters of one tile source request."""

    date_from: str
    date_to: str
    hour: int

    def to_query_string(self) -> str:
        raw = f"date_from={self.date_from}&date_to={self.date_to}&hour={self.hour}"
        return quote(raw, safe=_URI_SAFE)


def build_query(state: FilterState) -> Optional[TileQuery]:
    """
    Build a tile query from filter state.

    Args:
        state: Current filter state

    Returns:
        TileQuery, or None when the date range is incomplete
    """
    if not state.is_complete:
        logger.debug("Date range incomplete, no tile query built")
        return None

    return TileQuery(
        date_from=format_date(state.date_from),
        date_to=format_date(state.date_to),
        hour=state.hour,
    )


def build_query_string(state: FilterState) -> Optional[str]:
    query = build_query(state)
    return query.to_query_string() if query is not None else None


def build_tile_url(query: TileQuery, endpoint: str = TILE_ENDPOINT, base_url: str = "") -> str:
    """
    Build the full tile source URL for a query.

    Args:
        query: Tile query
        endpoint: Tile endpoint path
        base_url: Optional scheme and host prefix (empty for same-origin)

    Returns:
        Tile source URL
    """
    return f"{base_url.rstrip('/')}{endpoint}?{query.to_query_string()}"
