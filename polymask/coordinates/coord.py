"""Coordinates."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
import bisect
from typing import List, Sequence

import numpy as np

from polymask.custom_types import KeyLikeInt


log = logging.getLogger(__name__)


class Coord():
    """Coordinate object.

    Contains strictly monoteous values.

    :param name: str: Identification of the coordinate.
    :param array: [opt] Values of the coordinate.
    :param units: [opt] Coordinate units
    :param fullname: [opt] Print name.

    Attributes
    ----------
    name: str
        Identification of the coordinate.
    units: str
        Coordinate units.
    fullname: str
        Print name.
    size: int
        Length of values.
    """

    def __init__(self, name: str,
                 array: Sequence = None,
                 units: str = None, fullname: str = None):
        self.name = name

        if fullname is None:
            fullname = ""
        self.fullname = fullname

        if units is None:
            units = ''
        self.units = units

        self._array = None
        self._descending = None
        self._size = None
        if array is not None:
            self.update_values(array)

    def update_values(self, values: Sequence, dtype=None):
        """Change values.

        Check if new values are monoteous. The array is stored
        read-only.

        :param values: New values.
        :param dtype: [opt] Dtype of the array.
            Default to np.float64
        :type dtype: data-type

        :raises TypeError: If the data is not 1D.
        :raises ValueError: If the data is not sorted.
        """
        if dtype is None:
            dtype = np.float64
        array = np.array(values, dtype=dtype)
        if len(array.shape) == 0:
            array = array.reshape(1)
        elif len(array.shape) > 1:
            raise TypeError("Data not 1D")

        diff = np.diff(array)
        if len(diff) > 0:
            desc = np.all(diff < 0)
        else:
            desc = False
        if not np.all(diff > 0) and not desc:
            raise ValueError("Data not sorted")

        array.flags.writeable = False
        self._array = array
        self._descending = bool(desc)
        self._size = array.size

    def __len__(self) -> int:
        return self.size

    @property
    def size(self) -> int:
        """Length of coordinate."""
        return self._size

    def __getitem__(self, y: KeyLikeInt) -> np.ndarray:
        """Use numpy getitem for the array."""
        if not self.has_data():
            raise AttributeError("Coordinate '%s' data was not set." % self.name)
        return self._array.__getitem__(y)

    def __str__(self):
        s = []
        s.append(str(type(self)))
        s.append("Name: %s" % self.name)
        if self.has_data():
            s.append("Size: %d" % self.size)
            s.append("Extent: %s" % self.get_extent_str())
            s.append("Descending: %s" % ['no', 'yes'][self.is_descending()])
        if self.units:
            s.append("Units: %s" % self.units)
        return '\n'.join(s)

    def __repr__(self):
        return '\n'.join([super().__repr__(), str(self)])

    def get_extent_str(self, slc: KeyLikeInt = None) -> str:
        """Return the extent as string.

        :param slc: [opt]
        """
        return "%s - %s" % tuple(self.format(v) for v in self.get_extent(slc))

    def is_descending(self) -> bool:
        """Return if coordinate is descending"""
        return self._descending

    def has_data(self) -> bool:
        """If coordinate has data."""
        return self._array is not None

    def get_extent(self, slc: KeyLikeInt = None) -> List[float]:
        """Return extent.

        ie first and last values

        :param slc: [opt] Constrain extent to a slice.
        :returns: First and last values.
        """
        if slc is None:
            slc = slice(None, None)
        values = self._array[slc]
        return list(values[[0, -1]])

    def get_limits(self, slc: KeyLikeInt = None) -> List[float]:
        """Return min/max

        :param slc: [opt] Constrain extent with a slice.
        :returns: Min and max
        """
        lim = self.get_extent(slc)
        if self._descending:
            lim = lim[::-1]
        return lim

    def subset(self, vmin: float = None, vmax: float = None) -> slice:
        """Return slice of values between vmin and vmax.

        Bounds are included. The slice has a positive step,
        whatever the coordinate order.

        :param vmin, vmax: [opt] Bounds to select.
            If None, min and max of coordinate are taken.

        Examples
        --------
        >>> lat = Lat(array=np.linspace(20, 60, 41))
        >>> lat.subset(30, 43)
        slice(10, 24, 1)
        """
        C = self._array[::[1, -1][self._descending]]
        n = self.size

        start = 0 if vmin is None else bisect.bisect_left(C, vmin)
        stop = n if vmax is None else bisect.bisect_right(C, vmax)
        if self._descending:
            start, stop = n - stop, n - start
        return slice(start, stop, 1)

    def get_window(self, vmin: float, vmax: float) -> slice:
        """Return the slice of indices covering [vmin, vmax].

        The window starts at the last value strictly below `vmin` and
        stops at the first value strictly above `vmax`, so it holds one
        extra value on each side when there is one.
        If no value is below `vmin` (or above `vmax`) that end of the
        window is the array extremity.
        If [vmin, vmax] lies entirely outside the coordinate, the
        whole coordinate is returned.

        The slice always has a positive step, whatever the
        coordinate order.

        Examples
        --------
        >>> lat = Lat(array=[10., 20., 30., 40.])
        >>> lat.get_window(15, 35)
        slice(0, 4, 1)
        >>> lat.get_window(22, 28)
        slice(1, 3, 1)
        """
        C = self._array[::[1, -1][self._descending]]
        n = self.size

        if vmax < C[0] or vmin > C[-1]:
            log.debug("[%s, %s] outside of '%s' (%s), using the whole axis.",
                      vmin, vmax, self.name, self.get_extent_str())
            return slice(0, n, 1)

        below = bisect.bisect_left(C, vmin)
        start = below - 1 if below > 0 else 0
        above = bisect.bisect_right(C, vmax)
        stop = above if above < n else n - 1

        if self._descending:
            start, stop = n - 1 - stop, n - 1 - start

        return slice(start, stop + 1, 1)

    @staticmethod
    def format(value: float, fmt: str = '{:.2f}') -> str:
        """Format a scalar value."""
        return fmt.format(value)
