"""
Configuration management for the flow map panel.

Holds the static panel options (map center, zoom, custom tile URL, zone
file) and the drawing styles of the panel layers.
"""

import json
import os
from copy import deepcopy
from typing import Dict, Any, Optional
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

CARTO_VOYAGER_URL = 'https://{s}.basemaps.cartocdn.com/rastertiles/voyager/{z}/{x}/{y}{r}.png'
CARTO_ATTRIBUTION = '&copy; OpenStreetMap contributors &copy; CARTO'


class PanelConfig:
    """Manages panel options and layer styles."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "flow_panel_config.json"
        self.default_config = self._get_default_config()
        self.config = self._load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default panel configuration."""
        return {
            "panel": {
                "center_lat": 48.262725,
                "center_lon": 11.66725,
                "zoom_level": 18,
                "tile_url": "",
                "geojson_path": None
            },
            "base_tiles": {
                "url": CARTO_VOYAGER_URL,
                "attribution": CARTO_ATTRIBUTION,
                "max_zoom": 20
            },
            "styles": {
                "zone_fill": "#ffffff00",
                "hover_stroke": "#49A8DE",
                "hover_stroke_width": 1,
                "label_halo": "#fff",
                "label_halo_width": 3,
                "label_font": "15px Calibri,sans-serif"
            },
            "map_settings": {
                "height": 600
            }
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config = json.load(f)
                logger.info(f"Loaded panel configuration from {self.config_path}")

                # Merge with defaults to ensure all keys exist
                return self._merge_configs(self.default_config, config)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
                return deepcopy(self.default_config)
        else:
            logger.info(f"Config file {self.config_path} not found, using defaults")
            return deepcopy(self.default_config)

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        merged = deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(self.config, f, indent=2)
            logger.info(f"Saved panel configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")

    def get_panel_options(self) -> Dict[str, Any]:
        """Get map center, zoom, custom tile URL and zone file."""
        return self.config["panel"]

    def get_base_tiles(self) -> Dict[str, Any]:
        return self.config["base_tiles"]

    def get_styles(self) -> Dict[str, Any]:
        """Get layer drawing styles."""
        return self.config["styles"]

    def get_map_settings(self) -> Dict[str, Any]:
        return self.config["map_settings"]

    def update_panel_options(self, updates: Dict[str, Any]) -> None:
        """Update panel options."""
        self.config["panel"].update(updates)
        logger.info(f"Updated panel options: {sorted(updates)}")

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = deepcopy(self.default_config)
        logger.info("Reset configuration to defaults")


# Global configuration instance
_panel_config = None

def get_panel_config(config_path: Optional[str] = None) -> PanelConfig:
    """Get global panel configuration instance."""
    global _panel_config
    if _panel_config is None:
        _panel_config = PanelConfig(config_path)
    return _panel_config
