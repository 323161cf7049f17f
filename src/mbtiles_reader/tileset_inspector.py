#!/usr/bin/env python3
"""
MBTiles Inspector - command line entry point

Prints a tileset summary or its metadata, or extracts a single tile or
UTFGrid.

Usage:
    mbtiles-inspect data/world.mbtiles
    mbtiles-inspect data/world.mbtiles --metadata
    mbtiles-inspect data/world.mbtiles --tile 3/4/2 --output 3-4-2.png
    mbtiles-inspect --config config.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from mbtiles_reader.infrastructure.logging import LoggingManager
from mbtiles_reader.services.config_service import ConfigService
from mbtiles_reader.services.tileset_service import TilesetService
from mbtiles_reader.exceptions.mbtiles_exceptions import MBTilesReaderException


logger = logging.getLogger(__name__)


def parse_coordinate(value: str) -> Tuple[int, int, int]:
    """Parse 'z/x/y' into a tuple"""
    parts = value.split('/')
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected Z/X/Y, got '{value}'")
    try:
        z, x, y = (int(part) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected integers in Z/X/Y, got '{value}'")
    return z, x, y


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Inspect MBTiles files: summary, typed metadata, single tiles and UTFGrids.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            'Examples:\n\n'
            '  mbtiles-inspect world.mbtiles\n'
            '  mbtiles-inspect world.mbtiles --metadata\n'
            '  mbtiles-inspect world.mbtiles --grid 2/1/1 --output grid.json.z\n'
            '  mbtiles-inspect --config config.json\n'
        )
    )
    parser.add_argument('path', nargs='?', help='MBTiles file to inspect')
    parser.add_argument('--config', help='JSON config listing tilesets; prints a summary of each')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--metadata', action='store_true', help='Print typed metadata instead of the summary')
    group.add_argument('--tile', type=parse_coordinate, metavar='Z/X/Y', help='Read one tile')
    group.add_argument('--grid', type=parse_coordinate, metavar='Z/X/Y', help='Read one UTFGrid with key data merged')
    parser.add_argument('--output', help='Write tile or grid bytes to this file')
    parser.add_argument('--log-level', default='WARNING', help='Logging level (default: WARNING)')
    return parser


def _write_blob(kind: str, coordinate: Tuple[int, int, int], data: Optional[bytes], output: Optional[str]) -> int:
    z, x, y = coordinate
    if data is None:
        print(f"No {kind} at {z}/{x}/{y}")
        return 1

    if output:
        with open(output, 'wb') as f:
            f.write(data)
        print(f"Wrote {len(data)} bytes to {output}")
    else:
        print(f"{kind.capitalize()} {z}/{x}/{y}: {len(data)} bytes")
    return 0


def run(args: argparse.Namespace) -> int:
    service = TilesetService()
    try:
        if args.config:
            config_service = ConfigService()
            config = config_service.load_config(args.config)
            if 'logging' in config:
                LoggingManager.setup_logging(config)
            service.register_from_config(config)
            summaries = [service.get_tileset_info(name) for name in service.list_tilesets()]
            print(json.dumps(summaries, indent=2))
            return 0

        tileset = service.register_tileset(args.path)

        if args.tile:
            return _write_blob('tile', args.tile, tileset.get_tile(*args.tile), args.output)
        if args.grid:
            return _write_blob('grid', args.grid, tileset.get_grid(*args.grid), args.output)

        if args.metadata:
            print(json.dumps(tileset.get_metadata(), indent=2))
        else:
            print(json.dumps(service.get_tileset_info(tileset.get_name()), indent=2))
        return 0
    finally:
        service.close_all()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the inspector"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.path and not args.config:
        parser.error('a PATH or --config is required')

    LoggingManager.setup_logging({'logging': {'level': args.log_level}})

    try:
        return run(args)
    except MBTilesReaderException as e:
        logger.debug("Inspection failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
