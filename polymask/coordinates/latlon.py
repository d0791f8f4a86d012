"""Latitude and Longitude support."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import numpy as np

from polymask.coordinates.coord import Coord


class Lat(Coord):
    """Latitude coordinate.

    Parameters
    ----------
    name: str, optional
        Identification of the coordinate.
    array: Sequence, optional
        Values of the coordinate.
    units: str, optional
        Coordinate units
    fullname: str, optional
        Print name.
    """

    def __init__(self, name='lat', array=None,
                 units='deg', fullname='Latitude'):
        super().__init__(name, array, units, fullname)

    @staticmethod
    def format(value, fmt='.2f') -> str:
        """Format value.

        Parameters
        ----------
        value: float
        fmt: str
        """
        end = 'N' if value > 0 else 'S'
        fmt = '{:%s}%s' % (fmt, end)
        return fmt.format(abs(value))


class Lon(Coord):
    """Longitude coordinate.

    Parameters
    ----------
    name: str, optional
        Identification of the coordinate.
    array: Sequence, optional
        Values of the coordinate.
    units: str, optional
        Coordinate units
    fullname: str, optional
        Print name.
    """

    def __init__(self, name='lon', array=None,
                 units='deg', fullname='Longitude'):
        super().__init__(name, array, units, fullname)

    @staticmethod
    def format(value, fmt='.2f') -> str:
        """Format value.

        Parameters
        ----------
        value: float
        fmt: str
        """
        end = 'E' if value > 0 else 'W'
        fmt = '{:%s}%s' % (fmt, end)
        return fmt.format(abs(value))

    @staticmethod
    def wrap(values):
        """Return longitudes brought back in [-180, 180)."""
        return (np.asarray(values, dtype=float) + 180.) % 360. - 180.

    def needs_flip(self) -> bool:
        """If some longitudes are beyond 180 degrees."""
        return bool(np.any(self[:] >= 180.))

    def get_flip_order(self) -> np.ndarray:
        """Return indices sorting the wrapped longitudes.

        Taking the coordinate (or the data along it) at these
        indices gives longitudes in [-180, 180), in the same
        order (ascending or descending) as the coordinate.

        :raises ValueError: If two longitudes are equal once
            wrapped.
        """
        wrapped = self.wrap(self[:])
        order = np.argsort(wrapped, kind='stable')
        if self.is_descending():
            order = order[::-1]
        if np.any(np.diff(wrapped[order]) == 0):
            raise ValueError("Longitudes overlap once wrapped in [-180, 180).")
        return order
