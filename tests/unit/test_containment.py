
import pytest

import numpy as np

from polymask.containment import (contains, get_ring_bounds, encircles_pole,
                                  crosses_antimeridian, get_reference_pole)

from conftest import SQUARE


SQ_LONS, SQ_LATS = zip(*SQUARE)


@pytest.mark.parametrize('method', ['geodesic', 'planar'])
def test_square(method, lat, lon, square_mask):
    inside = contains(lat[:, None], lon[None, :], SQ_LATS, SQ_LONS,
                      method=method)
    assert inside.shape == (4, 4)
    np.testing.assert_array_equal(inside, square_mask == 1)


@pytest.mark.parametrize('method', ['geodesic', 'planar'])
def test_scalar(method):
    assert contains(25, 25, SQ_LATS, SQ_LONS, method=method) is True
    assert contains(50, 25, SQ_LATS, SQ_LONS, method=method) is False


@pytest.mark.parametrize('method', ['geodesic', 'planar'])
def test_boundary(method):
    # Vertex, and middle of a meridian edge
    assert contains(15, 15, SQ_LATS, SQ_LONS, method=method)
    assert contains(25, 35, SQ_LATS, SQ_LONS, method=method)
    # Edge along the equator
    assert contains(0, 5, [0, 0, 10, 10], [0, 10, 10, 0], method=method)


def test_invalid_method():
    with pytest.raises(ValueError):
        contains(0, 0, SQ_LATS, SQ_LONS, method='spherical')


def test_empty_ring():
    assert not contains(0, 0, [], [])


def test_geodesic_rectangle():
    lat = np.array([-10., 0., 10., 20., 30.])
    lon = np.array([10., 20., 25., 30., 40.])
    inside = contains(lat[:, None], lon[None, :],
                      [0, 0, 20, 20], [20, 30, 30, 20])
    expected = np.zeros((5, 5), dtype=bool)
    expected[1:4, 1:4] = True
    np.testing.assert_array_equal(inside, expected)


def test_arcs_bulge():
    """Great circle arcs pass poleward of the parallel."""
    lats = [40, 40, 70, 70]
    lons = [-60, 60, 60, -60]
    assert contains(75, 0, lats, lons, method='geodesic')
    assert not contains(50, 0, lats, lons, method='geodesic')
    assert not contains(75, 0, lats, lons, method='planar')
    assert contains(50, 0, lats, lons, method='planar')


def test_polar_cap():
    lats = [80, 80, 80, 80]
    lons = [0, 90, 180, -90]
    assert encircles_pole(lons)
    assert contains(85, 45, lats, lons)
    assert contains(89, 0, lats, lons)
    assert not contains(75, 45, lats, lons)
    assert not contains(-85, 45, lats, lons)


def test_antimeridian():
    lats = [-10, -10, 10, 10]
    lons = [170, -170, -170, 170]
    assert crosses_antimeridian(lons)
    assert not encircles_pole(lons)
    inside = contains([0, 0, 0, 0, 0], [180, 175, -175, 160, 0], lats, lons)
    np.testing.assert_array_equal(inside, [True, True, True, False, False])


def test_reference_pole():
    assert get_reference_pole(np.array([10., 20.])) == -1
    assert get_reference_pole(np.array([-10., 5.])) == 1


def test_southern_ring():
    lats = [-35, -35, -15, -15]
    lons = [15, 35, 35, 15]
    assert contains(-25, 25, lats, lons)
    assert not contains(-40, 25, lats, lons)
    assert not contains(-25, 40, lats, lons)


def test_bounds_planar():
    bounds = get_ring_bounds(SQ_LATS, SQ_LONS, method='planar')
    assert bounds == (15, 35, 15, 35)


def test_bounds_geodesic():
    lat_min, lat_max, lon_min, lon_max = get_ring_bounds(
        [40, 40, 70, 70], [-60, 60, 60, -60])
    assert lat_min == 40
    assert lat_max == pytest.approx(79.69, abs=0.01)
    assert (lon_min, lon_max) == (-60, 60)


def test_bounds_pole():
    bounds = get_ring_bounds([80, 80, 80, 80], [0, 90, 180, -90])
    assert bounds[1] == 90.
    assert bounds[2] is None and bounds[3] is None


def test_bounds_antimeridian():
    bounds = get_ring_bounds([-10, -10, 10, 10], [170, -170, -170, 170])
    assert bounds[2] is None and bounds[3] is None
    assert bounds[0] < -10 and bounds[1] > 10
