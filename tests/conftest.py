"""
Pytest configuration and fixtures for flow heat map tests.
"""

import pytest
import pandas as pd
import numpy as np
import tempfile


@pytest.fixture
def sample_rows():
    """Transition rows between four stores, with metadata columns."""
    return [
        {'_id': 'a1', '_index': 'transitions', '_type': 'doc', 'timestamp': 1700000000,
         'Source': 'Store A', 'Store B': 10, 'Store C': 2, 'Corridor': 5},
        {'_id': 'a2', '_index': 'transitions', '_type': 'doc', 'timestamp': 1700000060,
         'Source': 'Store A', 'Store B': 5, 'Store D': 8},
        {'_id': 'b1', '_index': 'transitions', '_type': 'doc', 'timestamp': 1700000120,
         'Source': 'Store B', 'Store A': 6, 'Store C': 4, 'Store D': 0},
        {'_id': 'c1', '_index': 'transitions', '_type': 'doc', 'timestamp': 1700000180,
         'Source': 'Store C', 'Store A': 1, 'Store B': 12},
        {'_id': 'd1', '_index': 'transitions', '_type': 'doc', 'timestamp': 1700000240,
         'Source': 'Store D', 'Store A': -3},
    ]


@pytest.fixture
def sample_frame(sample_rows):
    """The sample rows as a DataFrame, with NaN where a row has no value."""
    return pd.DataFrame(sample_rows)


def _square(x, y, size=1.0):
    return [[[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]]


@pytest.fixture
def sample_geojson():
    """Zone outlines for the sample stores, as a GeoJSON FeatureCollection."""
    return {
        'type': 'FeatureCollection',
        'features': [
            {'type': 'Feature', 'properties': {'name': 'Store A'},
             'geometry': {'type': 'Polygon', 'coordinates': _square(11.0, 48.0)}},
            {'type': 'Feature', 'properties': {'name': 'Store B'},
             'geometry': {'type': 'Polygon', 'coordinates': _square(12.0, 48.0)}},
            {'type': 'Feature', 'properties': {'name': 'Store C'},
             'geometry': {'type': 'LineString', 'coordinates': _square(13.0, 48.0)[0]}},
            {'type': 'Feature', 'properties': {'name': 'Store D'},
             'geometry': {'type': 'Polygon', 'coordinates': _square(14.0, 48.0)}},
            {'type': 'Feature', 'properties': {'name': 'Entrance'},
             'geometry': {'type': 'Point', 'coordinates': [11.5, 48.5]}},
            {'type': 'Feature', 'properties': {},
             'geometry': {'type': 'Polygon', 'coordinates': _square(15.0, 48.0)}},
        ]
    }


@pytest.fixture
def sample_features(sample_geojson):
    """Named features parsed from the sample GeoJSON."""
    from components.flows import features_from_geojson
    return features_from_geojson(sample_geojson)


@pytest.fixture
def temp_directory():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_config():
    """Create sample panel configuration for testing."""
    return {
        "panel": {
            "center_lat": 52.52,
            "center_lon": 13.405,
            "zoom_level": 15
        },
        "styles": {
            "hover_stroke": "#ff0000"
        }
    }


# Test data generators
class TestDataGenerator:
    """Utility class for generating test data."""

    @staticmethod
    def create_random_rows(n_rows: int = 200, n_nodes: int = 12, seed: int = 7) -> list:
        """Random integer transitions, including zero and negative values."""
        rng = np.random.default_rng(seed)
        nodes = [f'N{i:02d}' for i in range(n_nodes)]
        rows = []
        for i in range(n_rows):
            row = {'_id': f'r{i}', 'Source': nodes[rng.integers(n_nodes)]}
            for destination in rng.choice(nodes, size=3, replace=False):
                row[str(destination)] = int(rng.integers(-2, 20))
            rows.append(row)
        return rows


@pytest.fixture
def test_data_generator():
    """Provide test data generator instance."""
    return TestDataGenerator()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
