"""
Filter state for the trips map.

Holds the user-selected date range and hour of day. The filter set is
complete once both dates are present; the hour always has a value.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_HOUR = 9

# UI filter name -> FilterState field
FILTER_FIELDS: Dict[str, str] = {
    'from': 'date_from',
    'to': 'date_to',
    'hour': 'hour',
}

FILTER_NAMES = tuple(FILTER_FIELDS)


@dataclass
class FilterState:
    """Current filter values."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    hour: int = DEFAULT_HOUR

    @property
    def is_complete(self) -> bool:
        return self.date_from is not None and self.date_to is not None


class FilterStateMachine:
    """Applies single-field updates to an owned FilterState record."""

    def __init__(self, initial: Optional[FilterState] = None):
        self._state = initial if initial is not None else FilterState()

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    def snapshot(self) -> FilterState:
        """Return a copy of the current state."""
        return replace(self._state)

    def update(self, name: str, value: Any) -> FilterState:
        """
        Replace one named filter value, leaving the others untouched.

        Values are not validated; the widgets producing them are expected
        to supply the right type.

        Args:
            name: Filter name ('from', 'to' or 'hour')
            value: New value for the filter

        Returns:
            The updated state
        """
        if name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter '{name}', must be one of {list(FILTER_NAMES)}")

        setattr(self._state, FILTER_FIELDS[name], value)
        logger.debug(f"Filter '{name}' set to {value!r} (complete={self.is_complete})")
        return self._state
