"""
Heat color scale for combined intensities.

Maps each intensity to a translucent HSL color: the smallest value of the
current selection is green (hue 120), the largest red (hue 0).
"""

import numpy as np
from typing import Dict, List, Mapping, Tuple
import logging

from .intensity import format_volume

logger = logging.getLogger(__name__)

MAX_HUE = 120
SATURATION = '100%'
LIGHTNESS = '50%'
OPACITY = 0.3

# Used for every key when all intensities are equal
FLAT_HUE = 60


def hsla(hue: float, opacity: float = OPACITY) -> str:
    """CSS color string at fixed saturation and lightness."""
    return f"hsla({format_volume(hue)}, {SATURATION}, {LIGHTNESS}, {format_volume(opacity)})"


def percentage_to_hue(percentage: float) -> float:
    """Hue for a position in [0, 1]: 0 -> 120 (green), 1 -> 0 (red)."""
    return MAX_HUE * (1 - percentage)


FLAT_COLOR = hsla(FLAT_HUE)


class HeatColorScale:
    """Linear min/max color scale over one selection's intensities."""

    def __init__(self, intensities: Mapping[str, float]):
        self.intensities = dict(intensities)

        if self.intensities:
            values = np.array(list(self.intensities.values()), dtype=float)
            self.min_value = float(values.min())
            self.max_value = float(values.max())
        else:
            self.min_value = 0.0
            self.max_value = 0.0
        self.value_range = self.max_value - self.min_value

    @property
    def is_flat(self) -> bool:
        """True when every intensity is equal, including the single-entry case."""
        return self.value_range == 0

    def normalize(self, value: float) -> float:
        if self.is_flat:
            return 0.0
        return (value - self.min_value) / self.value_range

    def hue(self, key: str) -> float:
        if self.is_flat:
            return FLAT_HUE
        return percentage_to_hue(self.normalize(self.intensities[key]))

    def color(self, key: str) -> str:
        if self.is_flat:
            return FLAT_COLOR
        return hsla(self.hue(key))

    def colors(self) -> Dict[str, str]:
        """Color for every key of the scale."""
        colors = {key: self.color(key) for key in self.intensities}
        logger.debug(f"Colored {len(colors)} intensities over range {self.min_value:.2f} to {self.max_value:.2f}")
        return colors

    def legend_entries(self) -> List[Tuple[float, str]]:
        """
        Representative (intensity, color) pairs for a legend.

        Returns:
            Minimum, midpoint and maximum for a graded scale, a single entry
            for a flat scale and nothing for an empty one
        """
        if not self.intensities:
            return []
        if self.is_flat:
            return [(self.min_value, FLAT_COLOR)]

        entries = []
        for position in (0.0, 0.5, 1.0):
            value = self.min_value + position * self.value_range
            entries.append((value, hsla(percentage_to_hue(position))))
        return entries
