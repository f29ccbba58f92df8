"""
Transition Heat Map - Streamlit GUI Application

This module provides the Streamlit entry point: panel options in the sidebar
and the interactive flow panel in the main area.
"""

import streamlit as st
import logging

from components.panel import render_panel_page
from components.panel.panel_config import get_panel_config

logging.basicConfig(level=logging.INFO)

# Configure Streamlit page
st.set_page_config(
    page_title="Transition Heat Map",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def render_panel_options_sidebar():
    """Sidebar controls for the static panel options."""
    config = get_panel_config()
    options = config.get_panel_options()

    with st.sidebar:
        st.markdown("### ⚙️ Panel Options")

        zoom_level = st.slider("Zoom level", min_value=1, max_value=20, value=int(options['zoom_level']))
        center_lat = st.number_input("Center latitude", value=float(options['center_lat']), format="%.6f")
        center_lon = st.number_input("Center longitude", value=float(options['center_lon']), format="%.6f")
        tile_url = st.text_input(
            "Custom tile URL",
            value=options['tile_url'],
            help="XYZ tile URL drawn above the base map; leave empty for none"
        )

        updates = {
            'zoom_level': zoom_level,
            'center_lat': center_lat,
            'center_lon': center_lon,
            'tile_url': tile_url
        }
        changed = {key: value for key, value in updates.items() if options.get(key) != value}
        if changed:
            config.update_panel_options(changed)

        if st.button("💾 Save options"):
            config.save_config()
            st.success("Options saved")


def main():
    """Main Streamlit application entry point"""
    render_panel_options_sidebar()
    render_panel_page()


if __name__ == "__main__":
    main()
