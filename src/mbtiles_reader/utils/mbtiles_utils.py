import os
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, List, Optional, Tuple


SQL_SAMPLE_TILE = "SELECT tile_data FROM tiles LIMIT 1"
SQL_SAMPLE_GRID = "SELECT grid FROM grids WHERE grid IS NOT NULL LIMIT 1"
SQL_TILE = "SELECT tile_data FROM tiles WHERE zoom_level = ? AND tile_column = ? AND tile_row = ?"
SQL_GRID = "SELECT grid FROM grids WHERE zoom_level = ? AND tile_column = ? AND tile_row = ?"
SQL_GRID_DATA = ("SELECT key_name, key_json FROM grid_data "
                 "WHERE zoom_level = ? AND tile_column = ? AND tile_row = ?")
SQL_METADATA = "SELECT name, value FROM metadata WHERE value IS NOT NULL AND value != ''"
SQL_ZOOM_RANGE = "SELECT min(zoom_level), max(zoom_level) FROM tiles"


class MBTilesUtils:
    """Utility class for MBTiles store access"""

    @staticmethod
    def tileset_id(file_path: str) -> str:
        """Tileset identifier: file name up to its first dot"""
        return os.path.basename(file_path).split('.')[0]

    @staticmethod
    def connect_read_only(file_path: str) -> sqlite3.Connection:
        """Open an MBTiles file read-only, usable from several threads"""
        uri = f"{Path(file_path).resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True, check_same_thread=False)

    @staticmethod
    def fetch_one(connection: sqlite3.Connection, sql: str, params: Tuple = ()) -> Optional[Tuple[Any, ...]]:
        """Run a query and return its first row, or None"""
        with closing(connection.cursor()) as cursor:
            cursor.execute(sql, params)
            return cursor.fetchone()

    @staticmethod
    def fetch_all(connection: sqlite3.Connection, sql: str, params: Tuple = ()) -> List[Tuple[Any, ...]]:
        """Run a query and return all rows, cursor closed on return"""
        with closing(connection.cursor()) as cursor:
            cursor.execute(sql, params)
            return cursor.fetchall()

    @staticmethod
    def has_relation(connection: sqlite3.Connection, name: str) -> bool:
        """Check for a view (or plain table) with the given name"""
        row = MBTilesUtils.fetch_one(
            connection,
            "SELECT count(*) FROM sqlite_master WHERE type IN ('view', 'table') AND name = ?",
            (name,)
        )
        return bool(row and row[0])
