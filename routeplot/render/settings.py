"""Display settings management.

Provides centralized access to renderer constants from configuration, with
built-in defaults for anything the file leaves out.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "display_settings.yaml"

_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "geometry": {
        "hold_radius": 2.0,
        "nm_per_deg_lat": 60.007,
    },
    "lines": {
        "stroke_width": 1.0,
    },
    "path_labels": {
        "interval": 0.25,
        "color": "#dddddd",
    },
    "markers": {
        "radius": 1,
        "highlight_radius": 4,
        "color": "#ffffff",
    },
    "fix_labels": {
        "color": "#ffffff",
        "offset": 4,
    },
    "font": {
        "family": "EuroScope",
        "size": 12,
    },
}


class DisplaySettings:
    """Renderer settings loaded from display_settings.yaml.

    Sections missing from the file, or the whole file if it cannot be read,
    fall back to the defaults above.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Dict[str, Any]] = {}
        self._load_config()

    def _load_config(self):
        """Load settings from the YAML file, merged over the defaults."""
        self._config = copy.deepcopy(_DEFAULTS)

        if not self.config_path.exists():
            logger.warning(
                f"Display settings not found at {self.config_path}, using defaults"
            )
            return

        try:
            with open(self.config_path, "r") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load display settings: {e}")
            return

        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring malformed display settings in {self.config_path}")
            return

        for section, values in loaded.items():
            if isinstance(values, dict):
                self._config.setdefault(section, {}).update(values)

        logger.debug(f"Loaded display settings from {self.config_path}")

    def get(self, section: str, key: str) -> Any:
        return self._config.get(section, {}).get(key, _DEFAULTS.get(section, {}).get(key))

    @property
    def hold_radius(self) -> float:
        return float(self.get("geometry", "hold_radius"))

    @property
    def nm_per_deg_lat(self) -> float:
        return float(self.get("geometry", "nm_per_deg_lat"))

    @property
    def stroke_width(self) -> float:
        return float(self.get("lines", "stroke_width"))

    @property
    def label_interval(self) -> float:
        """Path label spacing as a fraction of the visible height."""
        return float(self.get("path_labels", "interval"))

    @property
    def path_label_color(self) -> str:
        return self.get("path_labels", "color")

    @property
    def marker_radius(self) -> int:
        return int(self.get("markers", "radius"))

    @property
    def highlight_radius(self) -> int:
        return int(self.get("markers", "highlight_radius"))

    @property
    def marker_color(self) -> str:
        return self.get("markers", "color")

    @property
    def fix_label_color(self) -> str:
        return self.get("fix_labels", "color")

    @property
    def fix_label_offset(self) -> int:
        return int(self.get("fix_labels", "offset"))

    @property
    def font_family(self) -> str:
        return self.get("font", "family")

    @property
    def font_size(self) -> int:
        return int(self.get("font", "size"))

    def reload(self):
        """Reload configuration from file."""
        self._load_config()


# Global instance
_display_settings: Optional[DisplaySettings] = None


def get_display_settings() -> DisplaySettings:
    """Get the global DisplaySettings instance."""
    global _display_settings
    if _display_settings is None:
        _display_settings = DisplaySettings()
    return _display_settings
