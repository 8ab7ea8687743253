"""Configuration management."""

from pathlib import Path
from typing import Optional, Dict, Any
import copy
import os

import yaml

from fits_view.core.logging_utils import get_logger


DEFAULTS: Dict[str, Any] = {
    'cuts': {
        'low_sigma': 2.0,
        'high_sigma': 5.0,
    },
    'sampling': {
        'max_sample_length': 10000,
        'seed': None,
    },
    'palette': 'negative',
    'image': {
        'extensions': ['.fits', '.fit', '.fts'],
        'hdu': None,
    },
    'output': {
        'folder': 'rendered',
        'save_metadata': True,
    },
}

ENV_MAPPINGS = {
    'FITSVIEW_LOW_SIGMA': ('cuts', 'low_sigma'),
    'FITSVIEW_HIGH_SIGMA': ('cuts', 'high_sigma'),
    'FITSVIEW_MAX_SAMPLE_LENGTH': ('sampling', 'max_sample_length'),
    'FITSVIEW_SEED': ('sampling', 'seed'),
    'FITSVIEW_PALETTE': ('palette',),
    'FITSVIEW_OUTPUT_FOLDER': ('output', 'folder'),
}


class Config:
    """Configuration manager: defaults, then YAML file, then environment."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = copy.deepcopy(DEFAULTS)

        if config_file and Path(config_file).exists():
            self.load_from_file(Path(config_file))

        self._load_from_env()

    def load_from_file(self, config_file: Path) -> None:
        """Merge a YAML file into the configuration.

        An unreadable file is reported as a warning and leaves the current
        values in place.
        """
        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            get_logger().warning(f"Could not load config file {config_file}: {e}")
            return

        if isinstance(file_config, dict):
            self._merge_config(self.config, file_config)
        elif file_config is not None:
            get_logger().warning(f"Ignoring config file {config_file}: top level is not a mapping")

    def _merge_config(self, base: Dict, override: Dict) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        for env_var, config_path in ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested(self.config, config_path, value)

    def _set_nested(self, config: Dict, path: tuple, value: Any) -> None:
        """Set nested configuration value."""
        for key in path[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]
        config[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key, e.g. ``'cuts.low_sigma'``."""
        value = self.config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dotted key."""
        self._set_nested(self.config, tuple(key.split('.')), value)


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_file: Path to config file (optional)

    Returns:
        Config instance
    """
    return Config(config_file)
