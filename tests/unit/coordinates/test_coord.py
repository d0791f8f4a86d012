
import pytest

import numpy as np

from polymask import Coord


@pytest.fixture
def values():
    a = np.arange(10)
    return a


@pytest.fixture
def coord(values):
    c = Coord('coord_test', values)
    return c


def test_descending(values, coord):
    coord.update_values(values[::-1])
    assert coord.is_descending()


def test_not_sorted():
    with pytest.raises(ValueError):
        Coord('coord_test', [0, 2, 1])
    with pytest.raises(ValueError):
        Coord('coord_test', [0, 1, 1, 2])


def test_not_1d():
    with pytest.raises(TypeError):
        Coord('coord_test', np.zeros((2, 3)))


def test_read_only(coord):
    with pytest.raises(ValueError):
        coord[:][0] = 5


def test_limits(coord):
    assert coord.get_extent() == [0, 9]
    assert coord.get_limits() == [0, 9]
    coord.update_values(coord[::-1])
    assert coord.get_extent() == [9, 0]
    assert coord.get_limits() == [0, 9]


def test_window(coord):
    c = coord

    # Extrema
    assert c.get_window(0, 9) == slice(0, 10, 1)
    assert c.get_window(-1, 15) == slice(0, 10, 1)

    # Margin of one value
    assert c.get_window(2, 4) == slice(1, 6, 1)
    assert c.get_window(2.5, 4.5) == slice(2, 6, 1)
    assert c.get_window(4.2, 4.4) == slice(4, 6, 1)

    # Partially out of bounds
    assert c.get_window(9, 12) == slice(8, 10, 1)
    assert c.get_window(-3, 0) == slice(0, 2, 1)


def test_window_outside(coord):
    c = coord
    assert c.get_window(20, 30) == slice(0, 10, 1)
    assert c.get_window(-5, -1) == slice(0, 10, 1)


def test_window_desc(coord):
    c = coord
    c.update_values(coord[::-1])

    assert c.get_window(0, 9) == slice(0, 10, 1)
    assert c.get_window(2, 4) == slice(4, 9, 1)
    assert c.get_window(2.5, 4.5) == slice(4, 8, 1)
    assert c.get_window(9, 12) == slice(0, 2, 1)
    assert c.get_window(20, 30) == slice(0, 10, 1)

    # Same values as ascending
    asc = Coord('asc', np.arange(10))
    for vmin, vmax in [(2, 4), (2.5, 4.5), (-1, 3), (7.5, 12)]:
        assert (sorted(c[c.get_window(vmin, vmax)])
                == sorted(asc[asc.get_window(vmin, vmax)]))


def test_subset(coord):
    c = coord
    assert c.subset() == slice(0, 10, 1)
    assert c.subset(2, 4) == slice(2, 5, 1)
    assert c.subset(2.5, 4.5) == slice(3, 5, 1)
    assert c.subset(vmax=3) == slice(0, 4, 1)
    assert c.subset(20, 30) == slice(10, 10, 1)

    c.update_values(coord[::-1])
    assert c.subset(2, 4) == slice(5, 8, 1)
    np.testing.assert_array_equal(c[c.subset(2, 4)], [4, 3, 2])
