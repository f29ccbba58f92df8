"""
Transition aggregation module for the flow heat map.

This module turns flat transition records (one row per origin, one column per
destination) into the two directional flow maps used by the heat overlay.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Set

import pandas as pd
import logging

logger = logging.getLogger(__name__)

FlowMap = Dict[str, Dict[str, float]]

ORIGIN_FIELD = 'Source'
EXCLUDED_FIELDS = frozenset(['_id', '_index', '_type', ORIGIN_FIELD, 'timestamp'])


@dataclass(frozen=True)
class FlowMaps:
    """Outbound (origin -> destination) and inbound (destination -> origin) volumes."""

    outbound: FlowMap = field(default_factory=dict)
    inbound: FlowMap = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.outbound and not self.inbound

    def nodes(self) -> Set[str]:
        """All node names appearing on either side of a transition."""
        names = set(self.outbound) | set(self.inbound)
        for related in self.outbound.values():
            names.update(related)
        return names

    def related(self, node: str) -> bool:
        return node in self.outbound or node in self.inbound


def _edge_weight(value: Any) -> float:
    """Return the value as a positive weight, or 0.0 if it cannot count as one."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    if math.isnan(value) or value <= 0:
        return 0.0
    return value


def aggregate_transitions(rows: Iterable[Mapping[str, Any]]) -> FlowMaps:
    """
    Build outbound and inbound flow maps from transition rows.

    Args:
        rows: Records with a ``Source`` field naming the origin and one numeric
              field per destination

    Returns:
        FlowMaps where ``outbound[o][d] == inbound[d][o]`` for every pair
    """
    outbound: FlowMap = {}
    inbound: FlowMap = {}
    row_count = 0

    for row in rows:
        row_count += 1
        origin = row.get(ORIGIN_FIELD)
        if origin is None:
            logger.debug(f"Skipping row {row_count} without {ORIGIN_FIELD}")
            continue

        destinations = outbound.setdefault(origin, {})

        for destination, value in row.items():
            if destination in EXCLUDED_FIELDS:
                continue
            weight = _edge_weight(value)
            if not weight:
                continue

            destinations[destination] = destinations.get(destination, 0) + weight
            sources = inbound.setdefault(destination, {})
            sources[origin] = sources.get(origin, 0) + weight

    # Origins whose rows carried no usable destination
    outbound = {origin: related for origin, related in outbound.items() if related}

    logger.info(f"Aggregated {row_count} rows into {len(outbound)} origins and {len(inbound)} destinations")
    return FlowMaps(outbound=outbound, inbound=inbound)


def rows_from_frame(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a transitions DataFrame into row mappings.

    Empty cells (NaN) are dropped so they are treated as missing fields.
    """
    if frame is None or frame.empty:
        return []

    rows = []
    for record in frame.to_dict(orient='records'):
        rows.append({key: value for key, value in record.items() if not _is_missing(value)})
    return rows


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like cells
        return False
