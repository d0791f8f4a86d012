"""Latitude / longitude grid to rasterize polygons on."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Tuple

import numpy as np

from polymask.coordinates import Lat, Lon
from polymask.errors import InputShapeError


log = logging.getLogger(__name__)


class Grid():
    """Regular (not necessarily evenly spaced) lat/lon grid.

    Both coordinates must be 1D and strictly monotonic,
    ascending or descending.

    :param lat: Latitude values, or Lat object.
    :param lon: Longitude values, or Lon object.

    :raises InputShapeError: If a coordinate is not 1D, is
        empty, or is not strictly monotonic.

    :attr lat: Lat:
    :attr lon: Lon:
    """

    def __init__(self, lat, lon):
        self.lat = self._make_coord(Lat, lat)
        self.lon = self._make_coord(Lon, lon)

    @staticmethod
    def _make_coord(cls, values):
        if isinstance(values, cls):
            if not values.has_data():
                raise InputShapeError("Coordinate '%s' has no values."
                                      % values.name)
            return values
        if np.size(values) == 0:
            raise InputShapeError("Empty %s coordinate." % cls.__name__)
        try:
            coord = cls(array=values)
        except TypeError as e:
            raise InputShapeError("%s coordinate is not a 1D axis (shape %s)."
                                  % (cls.__name__, np.shape(values))) from e
        except ValueError as e:
            raise InputShapeError("%s coordinate is not strictly monotonic."
                                  % cls.__name__) from e
        return coord

    def __str__(self):
        return "Grid %d x %d: lat %s, lon %s" % (
            *self.shape, self.lat.get_extent_str(), self.lon.get_extent_str())

    def __repr__(self):
        return '\n'.join([super().__repr__(), str(self)])

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of a mask on this grid (nlat, nlon)."""
        return (self.lat.size, self.lon.size)

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.lat.size * self.lon.size

    def flip_lon(self) -> Tuple['Grid', np.ndarray]:
        """Return grid with longitudes in [-180, 180).

        Typically transforms a 0..360 grid.

        :returns: New grid, and the order in which to take
            the columns of data co-registered with this grid
            (`data[..., order]`).
        """
        order = self.lon.get_flip_order()
        lon = Lon(self.lon.name, Lon.wrap(self.lon[:])[order],
                  self.lon.units, self.lon.fullname)
        log.info("Flipping longitudes from %s to %s",
                 self.lon.get_extent_str(), lon.get_extent_str())
        return Grid(self.lat, lon), order


def get_grid(grid) -> Grid:
    """Return Grid from a Grid or a (lat, lon) pair.

    :raises InputShapeError: If `grid` cannot be read as
        a latitude / longitude pair of 1D axes.
    """
    if isinstance(grid, Grid):
        return grid
    try:
        lat, lon = grid
    except (TypeError, ValueError) as e:
        raise InputShapeError("Grid must be given as a (lat, lon) pair.") from e
    return Grid(lat, lon)


def guess_shape(grid):
    """Guess the shape of a field on `grid`, without validating it.

    Used to size a sentinel mask when the grid is unusable.
    Return None if nothing sensible can be found.
    """
    if isinstance(grid, Grid):
        return grid.shape
    try:
        lat, lon = grid
    except (TypeError, ValueError):
        return None
    lat_shape = np.shape(lat)
    lon_shape = np.shape(lon)
    if len(lat_shape) == 2:
        return lat_shape
    if len(lon_shape) == 2:
        return lon_shape
    return (int(np.size(lat)), int(np.size(lon)))
