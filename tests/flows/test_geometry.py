"""
Tests for named zone geometry.
"""

import json
import os

import geopandas as gpd
import pytest
from shapely.geometry import LineString, Polygon

from components.flows.geometry import (
    GeometryKind,
    NamedFeature,
    features_from_geodataframe,
    features_from_geojson,
    load_features,
)

pytestmark = pytest.mark.unit


class TestFeaturesFromGeojson:
    """Test cases for GeoJSON parsing."""

    def test_named_polygons_and_lines(self, sample_geojson):
        """Test that only named Polygon and LineString features are kept."""
        features = features_from_geojson(sample_geojson)

        assert [f.name for f in features] == ['Store A', 'Store B', 'Store C', 'Store D']
        assert features[2].kind is GeometryKind.LINE_STRING

    def test_missing_features_list(self):
        """Test that a document without features is rejected."""
        with pytest.raises(ValueError):
            features_from_geojson({'type': 'FeatureCollection'})

    def test_empty_collection(self):
        """Test that an empty collection gives no features."""
        assert features_from_geojson({'features': []}) == []


class TestNamedFeature:
    """Test cases for area footprints."""

    def test_polygon_coordinates_unchanged(self):
        """Test that polygon rings are used as they are."""
        rings = [[[0, 0], [1, 0], [1, 1], [0, 0]]]
        feature = NamedFeature('P', GeometryKind.POLYGON, rings)

        assert feature.area_coordinates() == rings
        assert feature.area_geojson() == {'type': 'Polygon', 'coordinates': rings}

    def test_line_string_is_wrapped(self):
        """Test that a line string becomes the single ring of a polygon."""
        line = [[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]
        feature = NamedFeature('L', GeometryKind.LINE_STRING, line)

        assert feature.area_coordinates() == [line]
        assert feature.to_polygon().area == pytest.approx(4.0)

    def test_polygon_with_hole(self):
        """Test that interior rings become holes."""
        rings = [
            [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]],
            [[1, 1], [2, 1], [2, 2], [1, 2], [1, 1]],
        ]
        polygon = NamedFeature('H', GeometryKind.POLYGON, rings).to_polygon()

        assert polygon.area == pytest.approx(15.0)

    def test_label_point_inside_area(self):
        """Test that the label point of an area lies inside it."""
        line = [[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]
        point = NamedFeature('L', GeometryKind.LINE_STRING, line).label_point()

        assert Polygon(line).contains(point)

    @pytest.mark.parametrize("line", [
        [[11.0, 48.0], [11.1, 48.1]],
        [[0, 0], [1, 1], [2, 2]],
    ])
    def test_label_point_of_line_without_area(self, line):
        """Test that a line that cannot close into an area is labeled on the line."""
        feature = NamedFeature('Path', GeometryKind.LINE_STRING, line)

        point = feature.label_point()

        assert LineString(line).distance(point) == pytest.approx(0.0, abs=1e-9)


class TestLoadFeatures:
    """Test cases for loading zones from disk."""

    def test_load_geojson_file(self, sample_geojson, temp_directory):
        """Test loading a GeoJSON file."""
        path = os.path.join(temp_directory, 'zones.geojson')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(sample_geojson, f)

        features = load_features(path)

        assert len(features) == 4

    def test_missing_file(self, temp_directory):
        """Test that a missing file raises."""
        with pytest.raises(FileNotFoundError):
            load_features(os.path.join(temp_directory, 'missing.geojson'))

    def test_from_geodataframe(self):
        """Test conversion of a GeoDataFrame with mixed geometries."""
        gdf = gpd.GeoDataFrame(
            {
                'name': ['Zone 1', 'Zone 2'],
                'geometry': [
                    Polygon([(0, 0), (1, 0), (1, 1), (0, 0)]),
                    LineString([(0, 0), (1, 0), (1, 1), (0, 0)]),
                ]
            },
            crs='EPSG:4326'
        )

        features = features_from_geodataframe(gdf)

        assert [f.kind for f in features] == [GeometryKind.POLYGON, GeometryKind.LINE_STRING]
        assert features[0].coordinates[0][0] == [0.0, 0.0]
