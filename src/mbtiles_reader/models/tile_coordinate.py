from dataclasses import dataclass
from typing import Tuple


# SQLite INTEGER is a signed 64-bit value
SQLITE_INTEGER_MIN = -2 ** 63
SQLITE_INTEGER_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class TileCoordinate:
    """Data model for a tile address in the tiles index"""
    zoom: int
    column: int
    row: int

    def as_params(self) -> Tuple[int, int, int]:
        """Query parameters in (zoom_level, tile_column, tile_row) order"""
        return (self.zoom, self.column, self.row)

    def fits_sqlite_integer(self) -> bool:
        """False when a value cannot be bound, so no row can match"""
        return all(SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX for value in self.as_params())

    def __str__(self) -> str:
        return f"{self.zoom}/{self.column}/{self.row}"
