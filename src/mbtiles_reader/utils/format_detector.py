from typing import Dict, Optional
from mbtiles_reader.models.tile_format import TileFormat
from mbtiles_reader.exceptions.mbtiles_exceptions import TileFormatDetectionError


# No buffer can match two of these; keep it that way when adding formats.
TILE_SIGNATURES: Dict[TileFormat, bytes] = {
    TileFormat.GZIP: b"\x1f\x8b",  # also masks PBF
    TileFormat.ZLIB: b"\x78\x9c",
    TileFormat.PNG: b"\x89\x50\x4e\x47\x0d\x0a\x1a\x0a",
    TileFormat.JPG: b"\xff\xd8\xff",
    TileFormat.WEBP: b"\x52\x49\x46\x46\xc0\x00\x00\x00\x57\x45\x42\x50\x56\x50",
}


class FormatDetector:
    """Detects tile formats from leading magic bytes"""

    @staticmethod
    def detect(data: Optional[bytes]) -> TileFormat:
        """Return the format whose signature prefixes data.

        PBF tiles have no signature of their own and come back as GZIP;
        callers probing tile data are expected to reinterpret that.
        """
        if data:
            for tile_format, signature in TILE_SIGNATURES.items():
                if bytes(data[:len(signature)]) == signature:
                    return tile_format

        raise TileFormatDetectionError("Could not detect tile format")
