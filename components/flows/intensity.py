"""
Intensity combination for a selected node.

Merges the outbound and inbound volumes of one node into a single log-scaled
intensity per related node, together with a label describing both directions.
The caller's flow maps are only read, never modified.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import logging

from .transitions import FlowMap

logger = logging.getLogger(__name__)

# Synthetic self-reference removed from every combined view
CORRIDOR_KEY = 'Corridor'

# Volumes must be strictly greater than this to be shown
VOLUME_THRESHOLD = 3


def format_volume(value: float) -> str:
    """Format a volume the way it appears in labels: ``15`` rather than ``15.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(float(value))


@dataclass(frozen=True)
class CombinedIntensity:
    """Log-scaled intensities and the raw volumes they were derived from."""

    values: Dict[str, float] = field(default_factory=dict)
    outbound: Dict[str, float] = field(default_factory=dict)
    inbound: Dict[str, float] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def label(self, key: str) -> str:
        """Directional label for a related node, e.g. ``To 10 From 5``."""
        parts = []
        if key in self.outbound:
            parts.append(f"To {format_volume(self.outbound[key])}")
        if key in self.inbound:
            parts.append(f"From {format_volume(self.inbound[key])}")
        return ' '.join(parts)

    def labels(self) -> Dict[str, str]:
        return {key: self.label(key) for key in self.values}


def _qualifies(volume: float) -> bool:
    return volume > VOLUME_THRESHOLD


def _direction_view(flow_map: Optional[FlowMap], selected: str) -> Optional[Dict[str, float]]:
    """Copy of the selected node's entry without the corridor key, or None if unavailable."""
    if flow_map is None:
        return None
    entry = flow_map.get(selected)
    if entry is None:
        return None
    return {key: volume for key, volume in entry.items() if key != CORRIDOR_KEY}


def combine_intensities(selected: str,
                        outbound: Optional[FlowMap],
                        inbound: Optional[FlowMap]) -> CombinedIntensity:
    """
    Combine the outbound and inbound volumes of ``selected``.

    Args:
        selected: Name of the selected node
        outbound: Origin -> destination -> volume, or None if unavailable
        inbound: Destination -> origin -> volume, or None if unavailable

    Returns:
        CombinedIntensity holding only related nodes with a qualifying volume
    """
    out = _direction_view(outbound, selected)
    in_ = _direction_view(inbound, selected)

    if out is None and in_ is None:
        logger.debug(f"No flows recorded for {selected}")
        return CombinedIntensity()

    if in_ is None:
        return _single_direction(out, outbound=True)
    if out is None:
        return _single_direction(in_, outbound=False)

    values: Dict[str, float] = {}
    shown_out: Dict[str, float] = {}
    shown_in: Dict[str, float] = {}
    dropped_out = set()
    dropped_in = set()

    for key, out_volume in out.items():
        if key in in_:
            in_volume = in_[key]
            if _qualifies(out_volume) and _qualifies(in_volume):
                values[key] = math.log2(out_volume + in_volume)
            elif _qualifies(out_volume):
                values[key] = math.log2(out_volume)
                dropped_in.add(key)
            elif _qualifies(in_volume):
                # Left for the inbound scan below
                dropped_out.add(key)
        elif _qualifies(out_volume):
            values[key] = math.log2(out_volume)

    for key, in_volume in in_.items():
        if key in dropped_in:
            continue
        if key in out and key not in dropped_out:
            continue
        if _qualifies(in_volume):
            values[key] = math.log2(in_volume)

    for key in values:
        if key in out and key not in dropped_out:
            shown_out[key] = out[key]
        if key in in_ and key not in dropped_in:
            shown_in[key] = in_[key]

    logger.debug(f"Combined {len(out)} outbound and {len(in_)} inbound flows of {selected} into {len(values)} intensities")
    return CombinedIntensity(values=values, outbound=shown_out, inbound=shown_in)


def _single_direction(volumes: Mapping[str, float], outbound: bool) -> CombinedIntensity:
    values = {key: math.log2(volume) for key, volume in volumes.items() if _qualifies(volume)}
    shown = {key: volumes[key] for key in values}
    if outbound:
        return CombinedIntensity(values=values, outbound=shown)
    return CombinedIntensity(values=values, inbound=shown)
