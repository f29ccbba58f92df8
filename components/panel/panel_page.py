"""
Flow panel page.

Streamlit page that loads transition records and zone outlines, draws the
zone map and shows the heat overlay of the zone the user clicks.
"""

import json
import streamlit as st
import pandas as pd
from typing import Any, MutableMapping, Optional
import logging

from components.flows import HeatColorScale, features_from_geojson
from .controller import FlowPanelController
from .layers import PanelMapRenderer, selected_zone_name
from .panel_config import get_panel_config, PanelConfig

logger = logging.getLogger(__name__)


class FlowPanelInterface:
    """Flow panel with data loading, map and selection details."""

    def __init__(self, config: Optional[PanelConfig] = None):
        self.config = config or get_panel_config()
        self.renderer = PanelMapRenderer(
            self.config.get_panel_options(),
            self.config.get_base_tiles(),
            self.config.get_styles()
        )

    def render_panel_page(self) -> None:
        """Render the panel with data loading controls, map and details."""
        st.title("🗺️ Transition Heat Map")
        st.markdown("Click a zone to see where its transitions go to and come from.")

        self._initialize_session_state()
        self._render_loading_section()

        controller: FlowPanelController = st.session_state.flow_panel_controller
        if not controller.features:
            st.info("👆 Please load a zone GeoJSON to display the map")
            return

        self._render_map(controller)
        self._render_selection_details(controller)

    def _initialize_session_state(self) -> None:
        if 'flow_panel_controller' not in st.session_state:
            st.session_state.flow_panel_controller = FlowPanelController()
            self._preload_default_zones(st.session_state.flow_panel_controller)

    def _preload_default_zones(self, controller: FlowPanelController) -> None:
        geojson_path = self.config.get_panel_options().get('geojson_path')
        if not geojson_path:
            return
        try:
            with open(geojson_path, 'r', encoding='utf-8') as f:
                controller.load_features(features_from_geojson(json.load(f)))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to preload zones from {geojson_path}: {e}")

    def _render_loading_section(self) -> None:
        controller: FlowPanelController = st.session_state.flow_panel_controller
        col1, col2 = st.columns(2)

        with col1:
            zones_file = st.file_uploader("Zones (GeoJSON)", type=['geojson', 'json'], key='flow_panel_zones')
            if zones_file is not None and st.session_state.get('flow_panel_zones_name') != zones_file.name:
                try:
                    controller.load_features(features_from_geojson(json.load(zones_file)))
                    st.session_state.flow_panel_zones_name = zones_file.name
                    st.success(f"✅ Loaded {len(controller.features)} zones")
                except ValueError as e:
                    st.error(f"❌ Could not read zones: {e}")

        with col2:
            rows_file = st.file_uploader("Transitions (CSV)", type=['csv'], key='flow_panel_rows')
            if rows_file is not None and st.session_state.get('flow_panel_rows_name') != rows_file.name:
                try:
                    flow_maps = controller.load_frame(pd.read_csv(rows_file))
                    clear_selection(controller, st.session_state)
                    st.session_state.flow_panel_rows_name = rows_file.name
                    origins = len(flow_maps.outbound) if flow_maps else 0
                    st.success(f"✅ Loaded transitions for {origins} origins")
                except (ValueError, pd.errors.ParserError) as e:
                    st.error(f"❌ Could not read transitions: {e}")

    def _render_map(self, controller: FlowPanelController) -> None:
        from streamlit_folium import st_folium

        map_obj = self.renderer.render(controller.features, controller.overlay)
        map_state = st_folium(
            map_obj,
            width=None,
            height=self.config.get_map_settings()['height'],
            returned_objects=["last_active_drawing"],
            key=map_widget_key(st.session_state)
        )

        if apply_map_click(controller, st.session_state, selected_zone_name(map_state)):
            st.rerun()

    def _render_selection_details(self, controller: FlowPanelController) -> None:
        if controller.selected is None:
            return

        st.subheader(f"📍 {controller.selected}")
        if controller.overlay.is_empty:
            st.info("No transitions above the display threshold for this zone")
        else:
            self._render_legend(controller.overlay.color_scale)

            table = pd.DataFrame([
                {'Zone': styled.name, 'Flows': styled.label, 'Intensity (log2)': round(styled.intensity, 2)}
                for styled in controller.overlay
            ]).sort_values('Intensity (log2)', ascending=False)
            st.dataframe(table, hide_index=True, use_container_width=True)

        if st.button("Clear selection"):
            clear_selection(controller, st.session_state)
            st.rerun()

    def _render_legend(self, scale: Optional[HeatColorScale]) -> None:
        if scale is None:
            return
        swatches = ''.join(
            f'<span style="background-color: {color}; padding: 2px 8px; margin-right: 6px; '
            f'border: 1px solid #ccc;">{value:.1f}</span>'
            for value, color in scale.legend_entries()
        )
        st.markdown(f'<div style="font-size: 12px;">Intensity (log2): {swatches}</div>', unsafe_allow_html=True)


def map_widget_key(session_state: MutableMapping[str, Any]) -> str:
    """Widget key of the map; a new key starts the map without a remembered click."""
    return f"flow_panel_map_{session_state.get('flow_panel_map_version', 0)}"


def apply_map_click(controller: FlowPanelController,
                    session_state: MutableMapping[str, Any],
                    clicked: Optional[str]) -> bool:
    """
    Turn the zone reported by the map into a selection.

    st_folium reports the last click again on every rerun, so only a click
    that differs from the last one handled changes the selection.

    Returns:
        True if the overlay was replaced
    """
    if clicked == session_state.get('flow_panel_last_click'):
        return False
    session_state['flow_panel_last_click'] = clicked
    return controller.select(clicked)


def clear_selection(controller: FlowPanelController, session_state: MutableMapping[str, Any]) -> None:
    """Deselect and forget the last click so the same zone can be selected again."""
    controller.deselect()
    session_state['flow_panel_last_click'] = None
    session_state['flow_panel_map_version'] = session_state.get('flow_panel_map_version', 0) + 1


def render_panel_page() -> None:
    """Render the flow panel page."""
    FlowPanelInterface().render_panel_page()
