
import os

import pytest

import numpy as np
import shapefile

from polymask import (read_shapefile, GeometryTypeError, NotFoundError,
                      PolymaskError)

from conftest import SQUARE, write_shapefile


@pytest.fixture
def shp_regions(tmp_path):
    polygons = [
        [SQUARE],
        [[(0, 0), (5, 0), (5, 5), (0, 5)],
         [(50, 50), (55, 50), (55, 55), (50, 55)]],
        [[(-20, -20), (-10, -20), (-10, -10)]]
    ]
    return write_shapefile(tmp_path / 'regions', polygons,
                           ['square', 'islands', 'triangle'])


def test_read(shp_regions):
    fc = read_shapefile(shp_regions)
    assert fc.n_features == 3
    assert fc.n_segments == 4

    lats, lons = next(fc.get_rings(0))
    assert set(zip(lons, lats)) == set(SQUARE)


def test_extension(shp_regions):
    base = shp_regions[:-4]
    assert read_shapefile(base).n_features == 3
    assert read_shapefile(base + '.dbf').n_features == 3


def test_select_field(shp_regions):
    fc = read_shapefile(shp_regions, field='NAME',
                        values=['islands', 'triangle'])
    assert fc.n_features == 2
    assert fc.n_segments == 3
    lats, lons = next(fc.get_rings(1))
    assert np.max(lons) == -10

    fc = read_shapefile(shp_regions, field='NAME', values=['none'])
    assert fc.n_features == 0

    with pytest.raises(KeyError):
        read_shapefile(shp_regions, field='UNKNOWN', values=['square'])


def test_not_found(tmp_path):
    with pytest.raises(NotFoundError):
        read_shapefile(str(tmp_path / 'missing.shp'))
    with pytest.raises(FileNotFoundError):
        read_shapefile(str(tmp_path / 'missing'))


def test_not_polygon(tmp_path):
    filename = write_shapefile(tmp_path / 'lines', [[[(0, 0), (10, 10)]]],
                               ['line'], shape_type=shapefile.POLYLINE)
    with pytest.raises(GeometryTypeError):
        read_shapefile(filename)
    with pytest.raises(PolymaskError):
        read_shapefile(filename)


def test_no_attributes(shp_square):
    os.remove(shp_square[:-4] + '.dbf')
    with pytest.raises(NotFoundError):
        read_shapefile(shp_square)
    with pytest.raises(NotFoundError):
        read_shapefile(shp_square, field='NAME', values=['square'])


def test_not_shapefile(tmp_path):
    filename = tmp_path / 'text.shp'
    filename.write_bytes(b'not a shapefile ' * 20)
    with pytest.raises(NotFoundError):
        read_shapefile(str(filename))

    filename.write_bytes(b'short')
    with pytest.raises(NotFoundError):
        read_shapefile(str(filename))
