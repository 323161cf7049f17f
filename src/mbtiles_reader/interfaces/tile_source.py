from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional
from mbtiles_reader.models.tile_format import TileFormat


class ITileSource(ABC):
    """Read interface for a tile container"""

    @abstractmethod
    def get_tile(self, zoom: int, x: int, y: int) -> Optional[bytes]:
        """Get tile data for given coordinates"""
        pass

    @abstractmethod
    def get_tile_format(self) -> TileFormat:
        """Get detected tile format"""
        pass

    @abstractmethod
    def get_content_type(self) -> str:
        """Get HTTP content type of the tiles"""
        pass

    @abstractmethod
    def get_timestamp(self) -> datetime:
        """Get last modification time, whole seconds"""
        pass

    @abstractmethod
    def get_metadata(self) -> Dict[str, Any]:
        """Get typed metadata"""
        pass


class IGridSource(ABC):
    """Read interface for UTFGrid overlays"""

    @abstractmethod
    def has_utf_grid(self) -> bool:
        pass

    @abstractmethod
    def has_utf_grid_data(self) -> bool:
        pass

    @abstractmethod
    def get_utf_grid_compression(self) -> TileFormat:
        """Get grid envelope: ZLIB or GZIP"""
        pass

    @abstractmethod
    def get_grid(self, zoom: int, x: int, y: int) -> Optional[bytes]:
        """Get compressed grid with its key data merged in"""
        pass
