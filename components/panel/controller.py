"""
Panel controller for the flow heat map.

Stores the current flow maps, zones and selection, and swaps in a freshly
composed heat overlay whenever the selection changes. All computation is
delegated to the functions in ``components.flows``.
"""

from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd
import logging

from components.flows import (
    FlowMaps,
    HeatOverlay,
    NamedFeature,
    aggregate_transitions,
    compose_heat_overlay,
    rows_from_frame,
)

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    NO_SELECTION = 'NoSelection'
    RENDERING = 'Rendering'


class FlowPanelController:
    """Owns panel state between dataset and selection events."""

    def __init__(self, features: Optional[Iterable[NamedFeature]] = None):
        self.features: List[NamedFeature] = list(features or [])
        self.flow_maps: Optional[FlowMaps] = None
        self.selected: Optional[str] = None
        self.overlay = HeatOverlay()

    @property
    def state(self) -> SelectionState:
        if self.selected is None:
            return SelectionState.NO_SELECTION
        return SelectionState.RENDERING

    def load_rows(self, rows: Iterable[Mapping[str, Any]]) -> Optional[FlowMaps]:
        """
        Replace the flow maps with ones built from ``rows``.

        The selection is cleared, as in a fresh panel.
        """
        rows = list(rows)
        # Build completely before installing
        flow_maps = aggregate_transitions(rows) if rows else None
        self.flow_maps = flow_maps
        self.deselect()
        logger.info(f"Loaded {len(rows)} transition rows")
        return flow_maps

    def load_frame(self, frame: pd.DataFrame) -> Optional[FlowMaps]:
        return self.load_rows(rows_from_frame(frame))

    def load_features(self, features: Iterable[NamedFeature]) -> None:
        self.features = list(features)
        if self.selected is not None:
            self.overlay = compose_heat_overlay(self.selected, self.flow_maps, self.features)

    def select(self, node: Optional[str]) -> bool:
        """
        Select a zone by name; ``None`` deselects.

        Returns:
            True if the overlay was replaced, False for a repeated selection
        """
        if node == self.selected:
            return False
        if node is None:
            self.deselect()
            return True

        self.selected = node
        self.overlay = compose_heat_overlay(node, self.flow_maps, self.features)
        logger.debug(f"Selected {node}: {len(self.overlay)} zones in overlay")
        return True

    def deselect(self) -> None:
        self.selected = None
        self.overlay = HeatOverlay()
