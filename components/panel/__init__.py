"""
Panel Component - Interactive map panel for transition heat maps.

This component owns the panel state, renders the zone and heat layers
with Folium and exposes the Streamlit page.
"""

from .panel_page import render_panel_page
from .panel_config import PanelConfig
from .controller import FlowPanelController, SelectionState
from .layers import PanelMapRenderer

__all__ = [
    'render_panel_page',
    'PanelConfig',
    'FlowPanelController',
    'SelectionState',
    'PanelMapRenderer'
]
