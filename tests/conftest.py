from pathlib import Path

import pytest

from mbtiles_builder import PNG_TILE, build_mbtiles, zlib_grid


@pytest.fixture
def make_mbtiles(tmp_path: Path):
    """Factory fixture: make_mbtiles('name.mbtiles', tiles=..., ...)"""
    def _make(name: str = 'test.mbtiles', **kwargs) -> str:
        return str(build_mbtiles(tmp_path / name, **kwargs))
    return _make


@pytest.fixture
def png_mbtiles(make_mbtiles) -> str:
    return make_mbtiles(
        'world.mbtiles',
        tiles=[(0, 0, 0, PNG_TILE), (1, 0, 1, PNG_TILE + b"-1")],
        metadata=[('name', 'World'), ('format', 'png')]
    )


@pytest.fixture
def grid_mbtiles(make_mbtiles) -> str:
    return make_mbtiles(
        'grid.mbtiles',
        tiles=[(2, 1, 1, PNG_TILE)],
        grids=[(2, 1, 1, zlib_grid()), (2, 1, 2, zlib_grid())],
        grid_data=[(2, 1, 1, 'a', '1'), (2, 1, 1, 'b', '2')]
    )
