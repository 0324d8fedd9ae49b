"""Configuration loader for YAML and environment variables."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv


DEFAULT_CONFIG: Dict[str, Any] = {
    'ingestion': {
        'delimiter': ',',
    },
    'reporting': {
        'output_dir': './profiles',
        'indent': 2,
    },
    'overlay': {
        'points': 100,
    },
    'regression': {
        'default_polynomial_degree': 2,
    },
}


CONFIG_DIR_ENV = 'STAT_PROFILER_CONFIG_DIR'

# src/stat_profiler/utils -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def find_config_file(filename: str) -> Optional[str]:
    """
    Locate a file from the config directory.

    Search order: $STAT_PROFILER_CONFIG_DIR, ./config, <project root>/config.
    """
    possible_dirs = []
    if os.getenv(CONFIG_DIR_ENV):
        possible_dirs.append(Path(os.getenv(CONFIG_DIR_ENV)))
    possible_dirs.extend([Path('config'), PROJECT_ROOT / 'config'])

    for directory in possible_dirs:
        path = directory / filename
        if path.exists():
            return str(path)

    return None


class ConfigLoader:
    """Loads and manages configuration from YAML and environment variables."""

    def __init__(self, config_path: Optional[str] = None, env_path: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML config file (default: config.yaml via find_config_file)
            env_path: Path to .env file (default: .env in project root)
        """
        # Load environment variables
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()  # Load from default .env location

        self.config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path is not None:
            if not Path(config_path).exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
        else:
            config_path = find_config_file('config.yaml')

        if config_path:
            self._merge(self.config, self._load_yaml(config_path))

        self._merge_env_overrides()

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        """Load YAML configuration file."""
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _merge(cls, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Recursively merge overrides into base."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value

    def _merge_env_overrides(self):
        """Override config values with environment variables if present."""
        if os.getenv('CSV_DELIMITER'):
            self.config.setdefault('ingestion', {})['delimiter'] = os.getenv('CSV_DELIMITER')

        if os.getenv('PROFILE_OUTPUT_DIR'):
            self.config.setdefault('reporting', {})['output_dir'] = os.getenv('PROFILE_OUTPUT_DIR')

        if os.getenv('OVERLAY_POINTS'):
            self.config.setdefault('overlay', {})['points'] = int(os.getenv('OVERLAY_POINTS'))

        if os.getenv('POLYNOMIAL_DEGREE'):
            self.config.setdefault('regression', {})['default_polynomial_degree'] = int(os.getenv('POLYNOMIAL_DEGREE'))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Example: config.get('ingestion.delimiter')
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

            if value is None:
                return default

        return value

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration dictionary."""
        return self.config
