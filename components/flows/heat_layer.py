"""
Heat overlay construction.

Joins combined intensities against named zones and produces the styled,
labeled features that make up the heat layer for one selection.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Tuple

import logging

from .color_scale import HeatColorScale
from .geometry import NamedFeature
from .intensity import CombinedIntensity, combine_intensities
from .transitions import FlowMaps

logger = logging.getLogger(__name__)

HEAT_LAYER_NAME = 'heat-overlay'
HEAT_LAYER_Z_INDEX = 3


@dataclass(frozen=True)
class StyledFeature:
    """A zone with the fill color and label it is drawn with."""

    feature: NamedFeature
    color: str
    label: str
    intensity: float

    @property
    def name(self) -> str:
        return self.feature.name


@dataclass(frozen=True)
class HeatOverlay:
    """Named, z-ordered layer of styled zones for the current selection."""

    selected: Optional[str] = None
    features: Tuple[StyledFeature, ...] = field(default_factory=tuple)
    name: str = HEAT_LAYER_NAME
    z_index: int = HEAT_LAYER_Z_INDEX
    # Scale the colors were taken from; None for an overlay without intensities
    color_scale: Optional[HeatColorScale] = field(default=None, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.features

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def names(self) -> Tuple[str, ...]:
        return tuple(styled.name for styled in self.features)


def build_heat_overlay(intensities: Dict[str, float],
                       label_for: Callable[[str], str],
                       color_scale: HeatColorScale,
                       features: Iterable[NamedFeature],
                       selected: Optional[str] = None) -> HeatOverlay:
    """
    Style every zone whose name has an intensity.

    Args:
        intensities: Combined intensity per related node
        label_for: Label for a related node
        color_scale: Scale built over ``intensities``
        features: All named zones, in drawing order
        selected: Node the overlay describes

    Returns:
        HeatOverlay with one StyledFeature per matching zone
    """
    styled = []
    for feature in features:
        if feature.name not in intensities:
            continue
        styled.append(StyledFeature(
            feature=feature,
            color=color_scale.color(feature.name),
            label=label_for(feature.name),
            intensity=intensities[feature.name],
        ))

    missing = len(intensities) - len({s.name for s in styled})
    if missing:
        logger.debug(f"{missing} related nodes have no matching zone")

    return HeatOverlay(selected=selected, features=tuple(styled), color_scale=color_scale)


def compose_heat_overlay(selected: Optional[str],
                         flow_maps: Optional[FlowMaps],
                         features: Iterable[NamedFeature]) -> HeatOverlay:
    """
    Combine, color and style the flows of ``selected`` in one step.

    No selection, no flow maps or a node without flows all give an empty overlay.
    """
    if selected is None or flow_maps is None:
        return HeatOverlay()

    combined: CombinedIntensity = combine_intensities(selected, flow_maps.outbound, flow_maps.inbound)
    if not combined:
        return HeatOverlay(selected=selected)

    overlay = build_heat_overlay(
        combined.values, combined.label, HeatColorScale(combined.values), features, selected=selected
    )
    logger.info(f"Built heat overlay for {selected} with {len(overlay)} zones")
    return overlay
