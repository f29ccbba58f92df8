"""
Flows Component - Transition aggregation and heat overlay composition.

This component turns transition records into directional flow maps and,
for a selected zone, builds the colored and labeled heat overlay drawn
on the map panel.
"""

from .transitions import FlowMaps, aggregate_transitions, rows_from_frame
from .intensity import CombinedIntensity, combine_intensities
from .color_scale import HeatColorScale
from .geometry import GeometryKind, NamedFeature, features_from_geojson, load_features
from .heat_layer import HeatOverlay, StyledFeature, build_heat_overlay, compose_heat_overlay

__all__ = [
    'FlowMaps',
    'aggregate_transitions',
    'rows_from_frame',
    'CombinedIntensity',
    'combine_intensities',
    'HeatColorScale',
    'GeometryKind',
    'NamedFeature',
    'features_from_geojson',
    'load_features',
    'HeatOverlay',
    'StyledFeature',
    'build_heat_overlay',
    'compose_heat_overlay'
]
