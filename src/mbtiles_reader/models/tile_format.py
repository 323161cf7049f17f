from enum import Enum


class TileFormat(Enum):
    """Format tag for tile payloads and grid envelopes"""
    UNKNOWN = 0
    GZIP = 1  # Content-Encoding: gzip
    ZLIB = 2  # Content-Encoding: deflate
    PNG = 3
    JPG = 4
    PBF = 5
    WEBP = 6

    @property
    def extension(self) -> str:
        """File extension for tile formats, empty for envelopes"""
        return _EXTENSIONS.get(self, '')

    @property
    def content_type(self) -> str:
        """HTTP content type, empty when the format has none"""
        return _CONTENT_TYPES.get(self, '')

    def __str__(self) -> str:
        return self.extension


_EXTENSIONS = {
    TileFormat.PNG: 'png',
    TileFormat.JPG: 'jpg',
    TileFormat.PBF: 'pbf',
    TileFormat.WEBP: 'webp',
}

_CONTENT_TYPES = {
    TileFormat.PNG: 'image/png',
    TileFormat.JPG: 'image/jpeg',
    TileFormat.PBF: 'application/x-protobuf',  # served with Content-Encoding: gzip
    TileFormat.WEBP: 'image/webp',
}
