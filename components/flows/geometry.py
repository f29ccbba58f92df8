"""
Named zone geometry for the heat overlay.

Reads GeoJSON features that carry a ``name`` property and a Polygon or
LineString geometry. Line strings are closed into area footprints so every
zone can be filled the same way.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import geopandas as gpd
from shapely.geometry import Point, Polygon, mapping, shape
import logging

logger = logging.getLogger(__name__)


class GeometryKind(Enum):
    POLYGON = 'Polygon'
    LINE_STRING = 'LineString'


@dataclass(frozen=True)
class NamedFeature:
    """A zone name with its geometry in longitude/latitude."""

    name: str
    kind: GeometryKind
    coordinates: Any

    def area_coordinates(self) -> List:
        """Coordinates as polygon rings; a line string becomes the single ring."""
        if self.kind is GeometryKind.POLYGON:
            return self.coordinates
        elif self.kind is GeometryKind.LINE_STRING:
            return [self.coordinates]
        raise ValueError(f"Unsupported geometry kind: {self.kind}")

    def to_polygon(self) -> Polygon:
        rings = self.area_coordinates()
        return Polygon(rings[0], rings[1:])

    def label_point(self) -> Point:
        """
        Point inside the zone footprint for placing its label.

        A line string too short to close into an area is labeled on the line itself.
        """
        try:
            polygon = self.to_polygon()
        except ValueError as e:
            logger.debug(f"Zone {self.name} has no area footprint ({e}), labeling its outline")
            polygon = None

        if polygon is None or polygon.is_empty or polygon.area == 0:
            return shape({'type': self.kind.value, 'coordinates': self.coordinates}).representative_point()
        return polygon.representative_point()

    def area_geojson(self) -> Dict[str, Any]:
        return {'type': 'Polygon', 'coordinates': self.area_coordinates()}


def _feature_from_geojson(feature: Dict[str, Any]) -> Optional[NamedFeature]:
    properties = feature.get('properties') or {}
    name = properties.get('name')
    geometry = feature.get('geometry') or {}

    if not name:
        logger.debug("Skipping feature without a name")
        return None

    try:
        kind = GeometryKind(geometry.get('type'))
    except ValueError:
        logger.debug(f"Skipping feature {name} with geometry type {geometry.get('type')}")
        return None

    return NamedFeature(name=str(name), kind=kind, coordinates=geometry.get('coordinates'))


def features_from_geojson(document: Dict[str, Any]) -> List[NamedFeature]:
    """
    Extract named features from a GeoJSON FeatureCollection.

    Args:
        document: Parsed GeoJSON with a ``features`` list

    Returns:
        Named Polygon and LineString features in document order

    Raises:
        ValueError: If the document has no ``features`` list
    """
    features = document.get('features') if isinstance(document, dict) else None
    if not isinstance(features, list):
        raise ValueError("GeoJSON document must contain a 'features' list")

    named = [f for f in (_feature_from_geojson(feature) for feature in features) if f is not None]
    logger.info(f"Loaded {len(named)} named zones from {len(features)} features")
    return named


def features_from_geodataframe(gdf: gpd.GeoDataFrame, name_column: str = 'name') -> List[NamedFeature]:
    """Named features from a GeoDataFrame, converted to WGS84 when it has another CRS."""
    if gdf.empty:
        return []

    if gdf.crs is not None and gdf.crs.to_string() != "EPSG:4326":
        gdf = gdf.to_crs("EPSG:4326")

    features = []
    for _, row in gdf.iterrows():
        if row['geometry'] is None:
            continue
        features.append({
            'properties': {'name': row.get(name_column)},
            'geometry': mapping(row['geometry']),
        })

    return features_from_geojson({'features': _as_lists(features)})


def _as_lists(features: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # shapely mappings use tuples; GeoJSON documents use lists
    return json.loads(json.dumps(list(features)))


def load_features(path: Union[str, Path]) -> List[NamedFeature]:
    """
    Load named zones from a GeoJSON (or any format geopandas reads).

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    try:
        if path.suffix.lower() in ('.geojson', '.json'):
            with open(path, 'r', encoding='utf-8') as f:
                return features_from_geojson(json.load(f))
        return features_from_geodataframe(gpd.read_file(path))
    except Exception as e:
        logger.error(f"Failed to load zones from {path}: {e}")
        raise
