"""UTFGrid envelope codecs and key data reconstruction"""
import gzip
import json
import zlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Tuple, Union
from mbtiles_reader.models.tile_format import TileFormat
from mbtiles_reader.exceptions.mbtiles_exceptions import GridDecodeError


@dataclass(frozen=True)
class GridCodec:
    """Decompressor/compressor pair for one grid envelope"""
    name: str
    decompress: Callable[[bytes], bytes]
    compress: Callable[[bytes], bytes]


ZLIB_CODEC = GridCodec('zlib', zlib.decompress, zlib.compress)
GZIP_CODEC = GridCodec('gzip', gzip.decompress, lambda payload: gzip.compress(payload, mtime=0))

GRID_CODECS: Dict[TileFormat, GridCodec] = {
    TileFormat.ZLIB: ZLIB_CODEC,
    TileFormat.GZIP: GZIP_CODEC,
}


class GridUtils:
    """Utility class for UTFGrid payloads"""

    @staticmethod
    def get_codec(compression: TileFormat, context: str = '') -> GridCodec:
        """Get the codec for a detected grid compression"""
        codec = GRID_CODECS.get(compression)
        if codec is None:
            raise GridDecodeError(f"Unsupported UTFGrid compression {context}: {compression.name}")
        return codec

    @staticmethod
    def decode_key_data(rows: Iterable[Tuple[str, Union[str, bytes]]], context: str = '') -> Dict[str, Any]:
        """Decode (key_name, key_json) rows into a key -> value mapping"""
        key_data = {}
        for key, value in rows:
            try:
                key_data[key] = json.loads(value)
            except (TypeError, ValueError) as e:
                raise GridDecodeError(f"Invalid JSON for grid key '{key}' {context}: {e}") from e
        return key_data

    @staticmethod
    def merge_key_data(blob: bytes, key_data: Dict[str, Any], codec: GridCodec, context: str = '') -> bytes:
        """Splice key data into the grid's 'data' field, keeping the envelope"""
        try:
            payload = codec.decompress(blob)
        except (zlib.error, OSError, EOFError) as e:
            raise GridDecodeError(f"Could not decompress {codec.name} grid {context}: {e}") from e

        try:
            grid = json.loads(payload)
        except ValueError as e:
            raise GridDecodeError(f"Grid {context} is not valid JSON: {e}") from e
        if not isinstance(grid, dict):
            raise GridDecodeError(f"Grid JSON {context} is not an object")

        grid['data'] = key_data
        return codec.compress(json.dumps(grid).encode('utf-8'))
