class MBTilesReaderException(Exception):
    """Base exception for the MBTiles reader"""
    pass


class ConfigurationError(MBTilesReaderException):
    """Configuration related errors"""
    pass


class TilesetOpenError(MBTilesReaderException):
    """Container could not be opened or inspected"""
    pass


class TileFormatDetectionError(MBTilesReaderException):
    """No known byte signature matched a sample"""
    pass


class TileReadError(MBTilesReaderException):
    """Store failure while reading a tile, grid or metadata row"""
    pass


class GridNotSupportedError(MBTilesReaderException):
    """Grid requested from a tileset without UTFGrids"""
    pass


class GridDecodeError(MBTilesReaderException):
    """Grid blob or grid key data could not be decoded"""
    pass


class MetadataConversionError(MBTilesReaderException):
    """Metadata value could not be converted to its expected type"""
    pass
