"""
Visual encoding of trip counts.

Trip counts per tile drive two parallel curves sharing the same breakpoints:
extrusion height (pixels) and fill color. Both use exponential interpolation
with base 1.3 between neighbouring breakpoints and clamp outside the table.
The renderer receives the table as declarative interpolate expressions; the
Python evaluation here backs the legend and the tests.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple
import logging

import matplotlib.colors as mcolors
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

INTERPOLATION_BASE = 1.3
EXTRUSION_OPACITY = 0.75
METRIC_PROPERTY = 'trips'


@dataclass(frozen=True)
class EncodingBreakpoint:
    """One knot of the height and color curves."""

    metric_value: float
    height: float
    color: str


TRIP_BREAKPOINTS: Tuple[EncodingBreakpoint, ...] = (
    EncodingBreakpoint(17, 10, '#f2a8ff'),     # light purple
    EncodingBreakpoint(1204, 100, '#dc70ff'),  # purple
    EncodingBreakpoint(2526, 200, '#bc39fe'),  # violet
    EncodingBreakpoint(4738, 400, '#9202fd'),  # magenta
    EncodingBreakpoint(6249, 600, '#6002c5'),  # dark purple
)


def exponential_weight(t, base: float = INTERPOLATION_BASE):
    """
    Interpolation weight for normalised progress t in [0, 1].

    Args:
        t: Progress between two breakpoints (scalar or array)
        base: Exponential base, 1 gives linear interpolation

    Returns:
        (base**t - 1) / (base - 1)
    """
    t = np.asarray(t, dtype=float)
    if base == 1:
        return t
    return (np.power(base, t) - 1) / (base - 1)


class EncodingTable:
    """Height and color curves keyed on trip count."""

    def __init__(self, breakpoints: Sequence[EncodingBreakpoint] = TRIP_BREAKPOINTS,
                 base: float = INTERPOLATION_BASE, opacity: float = EXTRUSION_OPACITY,
                 metric_property: str = METRIC_PROPERTY):
        if len(breakpoints) == 0:
            raise ValueError("Encoding table needs at least one breakpoint")

        metrics = [bp.metric_value for bp in breakpoints]
        if any(m < 0 for m in metrics):
            raise ValueError(f"Breakpoint metric values must be non-negative: {metrics}")
        if any(b <= a for a, b in zip(metrics, metrics[1:])):
            raise ValueError(f"Breakpoint metric values must be strictly increasing: {metrics}")

        self.breakpoints = tuple(breakpoints)
        self.base = base
        self.opacity = opacity
        self.metric_property = metric_property

        self._metrics = np.array(metrics, dtype=float)
        self._heights = np.array([bp.height for bp in breakpoints], dtype=float)
        self._colors = np.array([mcolors.to_rgba(bp.color) for bp in breakpoints], dtype=float)

    def _interpolate(self, values, outputs: np.ndarray) -> np.ndarray:
        m = np.atleast_1d(np.asarray(values, dtype=float))

        if len(self._metrics) == 1:
            return np.repeat(outputs[:1], len(m), axis=0)

        # Index of the lower breakpoint of each segment
        idx = np.searchsorted(self._metrics, m, side='right') - 1
        idx = np.clip(idx, 0, len(self._metrics) - 2)

        lower = self._metrics[idx]
        upper = self._metrics[idx + 1]
        t = np.clip((m - lower) / (upper - lower), 0.0, 1.0)
        weight = exponential_weight(t, self.base)

        lo_out = outputs[idx]
        hi_out = outputs[idx + 1]
        if outputs.ndim > 1:
            weight = weight[:, np.newaxis]
            at_upper = (t >= 1.0)[:, np.newaxis]
        else:
            at_upper = t >= 1.0

        return np.where(at_upper, hi_out, lo_out + (hi_out - lo_out) * weight)

    def heights(self, values) -> np.ndarray:
        return self._interpolate(values, self._heights)

    def colors(self, values) -> np.ndarray:
        """RGBA rows in [0, 1] for each value."""
        return self._interpolate(values, self._colors)

    def height(self, metric: float) -> float:
        return float(self.heights([metric])[0])

    def color(self, metric: float) -> Tuple[float, float, float, float]:
        return tuple(float(c) for c in self.colors([metric])[0])

    def _expression(self, outputs: List[Any]) -> List[Any]:
        expression = [
            'interpolate',
            ['exponential', self.base],
            ['get', self.metric_property],
        ]
        for bp, output in zip(self.breakpoints, outputs):
            expression.extend([bp.metric_value, output])
        return expression

    def height_expression(self) -> List[Any]:
        return self._expression([bp.height for bp in self.breakpoints])

    def color_expression(self) -> List[Any]:
        return self._expression([bp.color for bp in self.breakpoints])

    def paint(self) -> Dict[str, Any]:
        """Paint properties for the fill-extrusion layer."""
        return {
            'fill-extrusion-height': self.height_expression(),
            'fill-extrusion-color': self.color_expression(),
            'fill-extrusion-opacity': self.opacity,
        }

    def to_frame(self) -> pd.DataFrame:
        """Breakpoint table for legend display."""
        return pd.DataFrame({
            'trips': [bp.metric_value for bp in self.breakpoints],
            'height_px': [bp.height for bp in self.breakpoints],
            'color': [bp.color for bp in self.breakpoints],
        })
