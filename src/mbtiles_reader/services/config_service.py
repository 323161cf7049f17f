import json
import os
from typing import Dict, Any, List
from mbtiles_reader.exceptions.mbtiles_exceptions import ConfigurationError


class ConfigService:
    """Service for loading and validating configuration"""

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Config file {config_path} not found!")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error loading config: {e}") from e

        self.validate_config(config)
        return config

    def validate_config(self, config: Any) -> bool:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a JSON object")

        if 'tilesets' not in config:
            raise ConfigurationError("Missing required key: tilesets")

        tilesets = config['tilesets']
        if not isinstance(tilesets, list) or not all(isinstance(p, str) for p in tilesets):
            raise ConfigurationError("tilesets must be a list of file paths")

        if not isinstance(config.get('logging', {}), dict):
            raise ConfigurationError("logging must be a dictionary")

        return True

    def get_tileset_paths(self, config: Dict[str, Any]) -> List[str]:
        """Get tileset paths, relative ones resolved against the working directory"""
        return [os.path.abspath(path) for path in config.get('tilesets', [])]
