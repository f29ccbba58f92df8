"""
Folium rendering for the flow map panel.

Builds the base map, the optional custom tile layer, the clickable zone
outlines and the heat overlay. Layers are added in z-order so higher layers
are drawn on top.
"""

import folium
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from components.flows import HeatOverlay, NamedFeature

logger = logging.getLogger(__name__)

CUSTOM_TILE_Z_INDEX = 1
ZONE_LAYER_NAME = 'zone-outlines'
ZONE_LAYER_Z_INDEX = 2


class PanelMapRenderer:
    """Renders panel layers onto a Folium map."""

    def __init__(self, panel_options: Dict[str, Any], base_tiles: Dict[str, Any], styles: Dict[str, Any]):
        self.panel_options = panel_options
        self.base_tiles = base_tiles
        self.styles = styles

    def create_base_map(self) -> folium.Map:
        """Create the map with the base tiles at the configured center and zoom."""
        center = [self.panel_options['center_lat'], self.panel_options['center_lon']]
        m = folium.Map(
            location=center,
            zoom_start=self.panel_options['zoom_level'],
            max_zoom=self.base_tiles.get('max_zoom', 20),
            tiles=None
        )
        folium.TileLayer(
            tiles=self.base_tiles['url'],
            attr=self.base_tiles['attribution'],
            name='base',
            max_zoom=self.base_tiles.get('max_zoom', 20),
            control=False
        ).add_to(m)

        logger.debug(f"Created base map centered at {center}")
        return m

    def custom_tile_layer(self) -> Optional[Tuple[int, folium.TileLayer]]:
        """Custom tiles drawn above the base map, if a URL is configured."""
        tile_url = self.panel_options.get('tile_url') or ''
        if tile_url == '':
            return None
        return CUSTOM_TILE_Z_INDEX, folium.TileLayer(tiles=tile_url, attr='custom', name='custom-tiles', overlay=True)

    def zone_layer(self, features: Iterable[NamedFeature]) -> Tuple[int, folium.FeatureGroup]:
        """Transparent, hoverable zone outlines carrying each zone's name."""
        group = folium.FeatureGroup(name=ZONE_LAYER_NAME)
        collection = {
            'type': 'FeatureCollection',
            'features': [
                {
                    'type': 'Feature',
                    'properties': {'name': feature.name},
                    'geometry': feature.area_geojson()
                }
                for feature in features
            ]
        }
        if not collection['features']:
            return ZONE_LAYER_Z_INDEX, group

        zone_fill = self.styles['zone_fill']
        hover_stroke = self.styles['hover_stroke']
        hover_width = self.styles['hover_stroke_width']

        folium.GeoJson(
            collection,
            style_function=lambda x: {
                'fillColor': zone_fill,
                'fillOpacity': 1.0,
                'color': hover_stroke,
                'weight': 0
            },
            highlight_function=lambda x: {
                'color': hover_stroke,
                'weight': hover_width
            },
            tooltip=folium.GeoJsonTooltip(fields=['name'], labels=False)
        ).add_to(group)
        return ZONE_LAYER_Z_INDEX, group

    def heat_layer(self, overlay: HeatOverlay) -> Tuple[int, folium.FeatureGroup]:
        """Filled, labeled zones of the current heat overlay."""
        group = folium.FeatureGroup(name=overlay.name)
        if overlay.is_empty:
            return overlay.z_index, group

        collection = {
            'type': 'FeatureCollection',
            'features': [
                {
                    'type': 'Feature',
                    'properties': {'name': styled.name, 'label': styled.label, 'color': styled.color},
                    'geometry': styled.feature.area_geojson()
                }
                for styled in overlay
            ]
        }
        folium.GeoJson(
            collection,
            style_function=lambda x: {
                'fillColor': x['properties']['color'],
                'fillOpacity': 1.0,
                'weight': 0
            },
            tooltip=folium.GeoJsonTooltip(fields=['name'], labels=False)
        ).add_to(group)

        for styled in overlay:
            self._add_label(group, styled.feature, styled.label)

        return overlay.z_index, group

    def _add_label(self, group: folium.FeatureGroup, feature: NamedFeature, label: str) -> None:
        try:
            point = feature.label_point()
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to place label for zone {feature.name}: {e}")
            return
        halo = self.styles['label_halo']
        halo_width = self.styles['label_halo_width']
        shadow = ', '.join(
            f"{dx}px {dy}px 0 {halo}"
            for dx in (-halo_width, 0, halo_width) for dy in (-halo_width, 0, halo_width)
        )
        folium.Marker(
            location=[point.y, point.x],
            icon=folium.DivIcon(
                html=f'''
                <div style="
                    font: {self.styles['label_font']};
                    text-shadow: {shadow};
                    white-space: nowrap;
                    transform: translate(-50%, -50%);
                ">{label}</div>
                ''',
                icon_size=(0, 0)
            )
        ).add_to(group)

    def render(self, features: Iterable[NamedFeature], overlay: HeatOverlay) -> folium.Map:
        """
        Build the full panel map.

        Returns:
            Folium map with custom tiles, zone outlines and heat overlay in z-order
        """
        features = list(features)
        m = self.create_base_map()

        layers: List[Tuple[int, Any]] = [self.zone_layer(features), self.heat_layer(overlay)]
        custom_tiles = self.custom_tile_layer()
        if custom_tiles is not None:
            layers.append(custom_tiles)

        for _, layer in sorted(layers, key=lambda item: item[0]):
            layer.add_to(m)

        logger.info(f"Rendered panel with {len(features)} zones and {len(overlay)} highlighted")
        return m


def selected_zone_name(map_state: Optional[Dict[str, Any]]) -> Optional[str]:
    """Zone name of the last clicked feature reported by ``st_folium``."""
    if not map_state:
        return None
    drawing = map_state.get('last_active_drawing') or {}
    properties = drawing.get('properties') or {}
    return properties.get('name')
