# navicam/core/config.py

import copy
import json
import math
from pathlib import Path
from typing import Any, Dict
from navicam.core.logging import get_logger

logger = get_logger()

class Config:
    """
    Camera configuration management.
    Handles loading/saving controller settings from JSON files.
    """

    def __init__(self, config_path: str = "navicam.json"):
        self.config_path = Path(config_path)
        self.data: Dict[str, Any] = {}

        # Default configuration
        self.defaults = {
            'first_person': {
                'layout': 'wasd',
                'speed_horizontal': 1.0,
                'speed_vertical': 1.0,
                'mouse_sensitivity': (1.0 / 360.0) * (math.pi / 4.0),
            },
            'orbit_zoom': {
                'orbit_button': 'mouse:left',
                'zoom_button': 'key:lctrl',
                'pan_button': 'key:lshift',
                'orbit_speed': 0.05,
                'pan_speed': 0.1,
                'zoom_speed': 0.1,
                'min_distance': 0.0,
                'pitch_limit': math.pi / 2.0,
                'distance': 10.0,
            },
        }

        self.load()

    def load(self):
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    loaded_data = json.load(f)

                # Merge with defaults (loaded values override defaults)
                self.data = self._deep_merge(copy.deepcopy(self.defaults), loaded_data)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load configuration from {self.config_path}: {e}")
                self.data = copy.deepcopy(self.defaults)
        else:
            self.data = copy.deepcopy(self.defaults)
            logger.debug(f"Configuration file {self.config_path} not found, using defaults")

    def save(self):
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
            logger.info(f"Saved configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration to {self.config_path}: {e}")

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value by path.
        Example: config.get('first_person.speed_horizontal')
        """
        keys = path.split('.')
        value = self.data

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, path: str, value: Any):
        """
        Set configuration value by path.
        Example: config.set('orbit_zoom.zoom_speed', 0.5)
        """
        keys = path.split('.')
        data = self.data

        for key in keys[:-1]:
            if key not in data:
                data[key] = {}
            data = data[key]

        data[keys[-1]] = value

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Recursively merge override dict into base dict."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
