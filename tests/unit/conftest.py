
import pytest

import numpy as np
import shapefile

from polymask import FeatureCollection


SQUARE = [(15, 15), (35, 15), (35, 35), (15, 35)]


def write_shapefile(filename, polygons, names, shape_type=shapefile.POLYGON):
    """Write a shapefile with a NAME attribute.

    polygons: for each record, a list of parts, each a list of (x, y).
    """
    w = shapefile.Writer(str(filename), shapeType=shape_type)
    w.field('NAME', 'C')
    for parts, name in zip(polygons, names):
        parts = [list(p) for p in parts]
        if shape_type == shapefile.POLYLINE:
            w.line(parts)
        else:
            w.poly(parts)
        w.record(name)
    w.close()
    return str(filename) + '.shp'


@pytest.fixture
def lat():
    return np.array([10., 20., 30., 40.])


@pytest.fixture
def lon():
    return np.array([10., 20., 30., 40.])


@pytest.fixture
def square():
    return FeatureCollection.from_rings([[SQUARE]])


@pytest.fixture
def square_mask():
    mask = np.zeros((4, 4), dtype=int)
    mask[1:3, 1:3] = 1
    return mask


@pytest.fixture
def shp_square(tmp_path):
    return write_shapefile(tmp_path / 'square', [[SQUARE]], ['square'])
