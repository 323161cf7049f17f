import logging
import math
import os
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from mbtiles_reader.adapters.base_adapter import BaseAdapter
from mbtiles_reader.interfaces.tile_source import ITileSource, IGridSource
from mbtiles_reader.models.tile_coordinate import TileCoordinate
from mbtiles_reader.models.tile_format import TileFormat
from mbtiles_reader.utils.format_detector import FormatDetector
from mbtiles_reader.utils.grid_utils import GridUtils
from mbtiles_reader.utils.metadata_utils import MetadataUtils
from mbtiles_reader.utils import mbtiles_utils as sql
from mbtiles_reader.utils.mbtiles_utils import MBTilesUtils
from mbtiles_reader.exceptions.mbtiles_exceptions import (
    TilesetOpenError,
    TileFormatDetectionError,
    TileReadError,
    GridNotSupportedError,
)


logger = logging.getLogger(__name__)


class MBTilesAdapter(BaseAdapter, ITileSource, IGridSource):
    """Read-only handle on one MBTiles file.

    Tile format and grid compression are detected once, from a single sample
    row each, and assumed to hold for the whole file. Nothing is mutated after
    construction, so one instance may be read from several threads.
    """

    def __init__(self, file_path: str):
        super().__init__(file_path, MBTilesUtils.tileset_id(file_path))
        self.connection: Optional[sqlite3.Connection] = None
        self.tile_format = TileFormat.UNKNOWN
        self.timestamp: Optional[datetime] = None
        self.utf_grid = False
        self.utf_grid_data = False
        self.utf_grid_compression = TileFormat.UNKNOWN

        try:
            self.connection = MBTilesUtils.connect_read_only(file_path)
        except sqlite3.Error as e:
            raise TilesetOpenError(f"Could not open MBTiles file {file_path}: {e}") from e

        try:
            self._initialize()
        except Exception:
            self.close()
            raise

        logger.info(
            f"Opened tileset '{self.name}': format={self.tile_format.name}, "
            f"utf_grid={self.utf_grid}, utf_grid_data={self.utf_grid_data}"
        )

    def _initialize(self) -> None:
        """Stat the file and probe tiles and grids"""
        try:
            mtime = os.stat(self.file_path).st_mtime
        except OSError as e:
            raise TilesetOpenError(f"Could not read file stats for MBTiles file: {self.file_path}") from e
        # Last-Modified headers only carry whole seconds
        self.timestamp = datetime.fromtimestamp(math.floor(mtime + 0.5), tz=timezone.utc)

        try:
            sample = MBTilesUtils.fetch_one(self.connection, sql.SQL_SAMPLE_TILE)
        except sqlite3.Error as e:
            raise TilesetOpenError(f"Could not read sample tile from {self.file_path}: {e}") from e
        if sample is None:
            raise TileFormatDetectionError(f"MBTiles file {self.file_path} contains no tiles")

        tile_format = FormatDetector.detect(sample[0])
        if tile_format == TileFormat.GZIP:
            # Only vector tiles are stored gzipped
            tile_format = TileFormat.PBF
        self.tile_format = tile_format

        try:
            self._probe_utf_grid()
        except sqlite3.Error as e:
            raise TilesetOpenError(f"Could not inspect UTFGrids in {self.file_path}: {e}") from e

    def _probe_utf_grid(self) -> None:
        if not MBTilesUtils.has_relation(self.connection, 'grids'):
            return

        sample = MBTilesUtils.fetch_one(self.connection, sql.SQL_SAMPLE_GRID)
        if sample is None:
            logger.debug(f"Tileset '{self.name}' has a grids view but no grids")
            return

        try:
            self.utf_grid_compression = FormatDetector.detect(sample[0])
        except TileFormatDetectionError as e:
            raise TileFormatDetectionError(f"Could not determine UTFGrid compression type: {e}") from e
        self.utf_grid = True
        self.utf_grid_data = MBTilesUtils.has_relation(self.connection, 'grid_data')

    def get_tile(self, zoom: int, x: int, y: int) -> Optional[bytes]:
        """Get tile data for given coordinates, None if absent"""
        coordinate = TileCoordinate(zoom, x, y)
        if not coordinate.fits_sqlite_integer():
            return None
        try:
            row = MBTilesUtils.fetch_one(self.connection, sql.SQL_TILE, coordinate.as_params())
        except sqlite3.Error as e:
            raise TileReadError(f"Failed to get tile {coordinate}: {e}") from e
        return row[0] if row else None

    def get_grid(self, zoom: int, x: int, y: int) -> Optional[bytes]:
        """Get a grid at z, x, y with its key data merged in.

        The result keeps the grid's original envelope (zlib or gzip).
        """
        if not self.utf_grid:
            raise GridNotSupportedError(f"Tileset '{self.name}' does not contain UTFGrids")

        coordinate = TileCoordinate(zoom, x, y)
        if not coordinate.fits_sqlite_integer():
            return None
        try:
            row = MBTilesUtils.fetch_one(self.connection, sql.SQL_GRID, coordinate.as_params())
        except sqlite3.Error as e:
            raise TileReadError(f"Failed to get grid {coordinate}: {e}") from e
        if row is None or row[0] is None:
            return None
        blob = row[0]

        if not self.utf_grid_data:
            return blob

        try:
            rows = MBTilesUtils.fetch_all(self.connection, sql.SQL_GRID_DATA, coordinate.as_params())
        except sqlite3.Error as e:
            raise TileReadError(f"Cannot fetch grid data for {coordinate}: {e}") from e

        context = f"at {coordinate}"
        key_data = GridUtils.decode_key_data(rows, context=context)
        if not key_data:
            return blob

        codec = GridUtils.get_codec(self.utf_grid_compression, context=context)
        logger.debug(f"Merging {len(key_data)} grid keys into {coordinate} ({codec.name})")
        return GridUtils.merge_key_data(blob, key_data, codec, context=context)

    def get_metadata(self) -> Dict[str, Any]:
        """Read the metadata table, typed, with zoom range filled in if missing"""
        try:
            rows = MBTilesUtils.fetch_all(self.connection, sql.SQL_METADATA)
        except sqlite3.Error as e:
            raise TileReadError(f"Failed to read metadata from {self.file_path}: {e}") from e

        metadata = MetadataUtils.normalize(rows)
        if MetadataUtils.has_zoom_range(metadata):
            return metadata

        zoom_range = self._query_zoom_range()
        if zoom_range is None:
            # Not an error; the mapping is returned as built
            logger.warning(f"Could not infer zoom range for tileset '{self.name}'")
            return metadata

        metadata['minzoom'], metadata['maxzoom'] = zoom_range
        return metadata

    def _query_zoom_range(self) -> Optional[tuple]:
        try:
            row = MBTilesUtils.fetch_one(self.connection, sql.SQL_ZOOM_RANGE)
        except sqlite3.Error as e:
            logger.debug(f"Zoom range query failed: {e}")
            return None
        if row is None or row[0] is None or row[1] is None:
            return None
        return int(row[0]), int(row[1])

    def get_tile_format(self) -> TileFormat:
        return self.tile_format

    def get_tile_format_string(self) -> str:
        """Get tile file extension: png, jpg, pbf or webp"""
        return self.tile_format.extension

    def get_content_type(self) -> str:
        return self.tile_format.content_type

    def get_timestamp(self) -> datetime:
        return self.timestamp

    def has_utf_grid(self) -> bool:
        return self.utf_grid

    def has_utf_grid_data(self) -> bool:
        return self.utf_grid_data

    def get_utf_grid_compression(self) -> TileFormat:
        return self.utf_grid_compression

    def close(self) -> None:
        """Close the database connection; later calls do nothing"""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
