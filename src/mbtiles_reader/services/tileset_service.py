import logging
from typing import Dict, Any, List, Optional
from mbtiles_reader.adapters.mbtiles_adapter import MBTilesAdapter
from mbtiles_reader.services.config_service import ConfigService
from mbtiles_reader.exceptions.mbtiles_exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class TilesetService:
    """Registry of open MBTiles tilesets keyed by identifier"""

    def __init__(self):
        self.tilesets: Dict[str, MBTilesAdapter] = {}

    def register_tileset(self, file_path: str) -> MBTilesAdapter:
        """Open a tileset and register it under its identifier"""
        tileset = MBTilesAdapter(file_path)
        name = tileset.get_name()

        if name in self.tilesets:
            tileset.close()
            raise ConfigurationError(
                f"Duplicate tileset '{name}': {file_path} and {self.tilesets[name].get_path()}"
            )

        self.tilesets[name] = tileset
        logger.info(f"Registered tileset '{name}' from {file_path}")
        return tileset

    def register_from_config(self, config: Dict[str, Any]) -> List[str]:
        """Open every tileset listed in the configuration"""
        names = []
        for path in ConfigService().get_tileset_paths(config):
            names.append(self.register_tileset(path).get_name())
        return names

    def get_tileset(self, name: str) -> Optional[MBTilesAdapter]:
        """Get a registered tileset"""
        return self.tilesets.get(name)

    def list_tilesets(self) -> List[str]:
        """List all registered tilesets"""
        return sorted(self.tilesets.keys())

    def get_tileset_info(self, name: str) -> Dict[str, Any]:
        """Get tileset summary"""
        tileset = self.get_tileset(name)
        if not tileset:
            return {}

        return {
            'name': tileset.get_name(),
            'path': tileset.get_path(),
            'format': tileset.get_tile_format_string(),
            'content_type': tileset.get_content_type(),
            'utf_grid': tileset.has_utf_grid(),
            'utf_grid_data': tileset.has_utf_grid_data(),
            'utf_grid_compression': tileset.get_utf_grid_compression().name if tileset.has_utf_grid() else None,
            'timestamp': tileset.get_timestamp().isoformat()
        }

    def close_all(self) -> None:
        """Close every registered tileset"""
        for tileset in self.tilesets.values():
            tileset.close()
        self.tilesets.clear()
