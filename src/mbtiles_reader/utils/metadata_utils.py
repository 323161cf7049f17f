import json
from typing import Any, Dict, Iterable, List, Tuple
from mbtiles_reader.exceptions.mbtiles_exceptions import MetadataConversionError


ZOOM_KEYS = ('minzoom', 'maxzoom')
FLOAT_LIST_KEYS = ('bounds', 'center')
JSON_KEY = 'json'


class MetadataUtils:
    """Utility class for typing MBTiles metadata rows"""

    @staticmethod
    def string_to_floats(value: str) -> List[float]:
        """Parse a comma separated list of numbers"""
        return [float(part.strip()) for part in value.split(',')]

    @staticmethod
    def normalize(rows: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
        """Build a typed metadata mapping from (name, value) rows.

        Zoom levels become ints, bounds and center become float lists and the
        fields of the 'json' object are merged into the top level. Anything
        else is kept as the stored string. Later rows override earlier ones.
        """
        metadata: Dict[str, Any] = {}

        for key, value in rows:
            if key in ZOOM_KEYS:
                try:
                    metadata[key] = int(value)
                except (TypeError, ValueError) as e:
                    raise MetadataConversionError(f"Cannot read metadata item {key}: {e}") from e
            elif key in FLOAT_LIST_KEYS:
                try:
                    metadata[key] = MetadataUtils.string_to_floats(value)
                except (AttributeError, ValueError) as e:
                    raise MetadataConversionError(f"Cannot read metadata item {key}: {e}") from e
            elif key == JSON_KEY:
                try:
                    extra = json.loads(value)
                except (TypeError, ValueError) as e:
                    raise MetadataConversionError(f"Cannot read metadata item {key}: {e}") from e
                if not isinstance(extra, dict):
                    raise MetadataConversionError(f"Cannot read metadata item {key}: not an object")
                metadata.update(extra)
            else:
                metadata[key] = value

        return metadata

    @staticmethod
    def has_zoom_range(metadata: Dict[str, Any]) -> bool:
        return all(key in metadata for key in ZOOM_KEYS)
