"""
Configuration module for the workout map system.
Provides dynamic configuration without hardcoded values.
"""
from dataclasses import dataclass
from typing import Dict, Any, Tuple
import os

@dataclass
class MapSettings:
    """Map view configuration."""
    zoom: int = 13  # Zoom level used when centering on the user
    map_style: str = "open-street-map"  # Tile style, no access token required
    animate_pan: bool = True  # Animate the view when panning to a workout
    pan_duration_ms: int = 1000  # Pan animation duration
    fallback_center: Tuple[float, float] = (0.0, 0.0)  # Shown before geolocation resolves

@dataclass
class PopupSettings:
    """Marker popup configuration."""
    max_width: int = 250
    min_width: int = 100

@dataclass
class StorageSettings:
    """Data storage configuration."""
    data_dir: str = "workout_data"  # Directory for storing workout history
    storage_key: str = "workouts"  # Key the history snapshot is written under
    backup_enabled: bool = True  # Enable data backup
    max_backup_files: int = 10  # Maximum backup files to keep

@dataclass
class UISettings:
    """Web interface configuration."""
    title: str = "Workout Map"
    host: str = "127.0.0.1"
    port: int = 8050

class WorkoutMapConfig:
    """Main configuration class for the workout map system."""

    def __init__(self):
        self.map = MapSettings()
        self.popup = PopupSettings()
        self.storage = StorageSettings()
        self.ui = UISettings()
        self._user_inputs: Dict[str, Any] = {}
        self._apply_environment()

    def _apply_environment(self):
        """Pick up overrides from WORKOUT_MAP_* environment variables."""
        data_dir = os.environ.get("WORKOUT_MAP_DATA_DIR")
        if data_dir:
            self.storage.data_dir = data_dir

        zoom = os.environ.get("WORKOUT_MAP_ZOOM")
        if zoom:
            try:
                self.map.zoom = int(zoom)
            except ValueError:
                raise ValueError(f"WORKOUT_MAP_ZOOM must be an integer, got {zoom!r}")

    def _update(self, group: str, settings: Any, **kwargs):
        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)
                self._user_inputs[f'{group}_{key}'] = value
            else:
                raise ValueError(f"Unknown {group} setting: {key}")

    def update_map_settings(self, **kwargs):
        """Update map view settings dynamically."""
        self._update('map', self.map, **kwargs)

    def update_popup_settings(self, **kwargs):
        """Update marker popup settings dynamically."""
        self._update('popup', self.popup, **kwargs)

    def update_storage_settings(self, **kwargs):
        """Update storage settings dynamically."""
        self._update('storage', self.storage, **kwargs)

    def update_ui_settings(self, **kwargs):
        """Update web interface settings dynamically."""
        self._update('ui', self.ui, **kwargs)

    def popup_options(self, popup_class: str) -> Dict[str, Any]:
        """Options attached to every marker popup."""
        return {
            'max_width': self.popup.max_width,
            'min_width': self.popup.min_width,
            'auto_close': False,
            'close_on_click': False,
            'class_name': popup_class,
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary."""
        return {
            'map_settings': {
                'zoom': self.map.zoom,
                'map_style': self.map.map_style,
                'animate_pan': self.map.animate_pan
            },
            'storage_settings': {
                'data_dir': self.storage.data_dir,
                'storage_key': self.storage.storage_key,
                'backup_enabled': self.storage.backup_enabled,
                'max_backup_files': self.storage.max_backup_files
            },
            'user_inputs': self._user_inputs
        }

    def validate_configuration(self) -> bool:
        """Validate that required configuration is set."""
        errors = []

        if not 0 <= self.map.zoom <= 22:
            errors.append("Map zoom must be between 0 and 22")

        if not self.storage.storage_key:
            errors.append("Storage key must not be empty")

        if self.storage.max_backup_files < 0:
            errors.append("Maximum backup files cannot be negative")

        if self.popup.min_width > self.popup.max_width:
            errors.append("Popup min width cannot exceed max width")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")

        return True

# Global configuration instance
config = WorkoutMapConfig()

def get_config() -> WorkoutMapConfig:
    """Get the global configuration instance."""
    return config

def reset_config() -> WorkoutMapConfig:
    """Reset configuration to defaults."""
    global config
    config = WorkoutMapConfig()
    return config
