"""Rasterize polygon features on a lat/lon grid.

The mask is built by folding over every ring of every feature:
cells found inside a ring are set to 1, and never reset.
To avoid testing the whole grid against each ring, only cells
in the ring candidate window are tested: the contiguous range
of rows and columns around the ring bounding box.

Failures of the preconditions (polygon source not found, not
made of polygons, grid without proper 1D axes) do not raise.
A mask filled with `MASK_MISSING` is returned instead, see
:class:`MaskResult`.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Optional, Tuple, Union

import numpy as np

from polymask.containment import check_method, contains, get_ring_bounds
from polymask.coordinates import Coord
from polymask.errors import NotFoundError, PolymaskError
from polymask.features import FeatureCollection
from polymask.grid import Grid, get_grid, guess_shape
from polymask.shp_reader import read_shapefile


log = logging.getLogger(__name__)

MASK_MISSING = -2147483647
"""Value of a mask that could not be computed.

Same as the netCDF default fill value for 32 bits integers."""

MASK_DTYPE = np.int32


class MaskResult():
    """Result of a masking operation.

    Either a computed mask (0 outside, 1 inside), or a
    mask filled with a missing value, along with the error
    that prevented the computation.

    Attributes
    ----------
    mask: np.ndarray
        2D integer mask.
    error: PolymaskError or None
        Error that prevented the computation.
    missing: int
        Missing value.
    """

    def __init__(self, mask: np.ndarray, error: PolymaskError = None,
                 missing: int = MASK_MISSING):
        self.mask = mask
        self.error = error
        self.missing = missing

    @classmethod
    def failed(cls, shape, error: PolymaskError,
               missing: int = MASK_MISSING) -> 'MaskResult':
        """Return result filled with missing value."""
        mask = np.full(shape, missing, dtype=MASK_DTYPE)
        return cls(mask, error, missing)

    def __repr__(self):
        s = [super().__repr__()]
        s.append("Shape: %s" % (self.shape,))
        if self.ok:
            s.append("Coverage: %.2f%%" % self.coverage())
        else:
            s.append("Failed: %s" % self.error)
        return '\n'.join(s)

    @property
    def ok(self) -> bool:
        """If the mask was computed."""
        return self.error is None

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.mask.shape

    @property
    def inside(self) -> np.ndarray:
        """Boolean array, True inside polygons.

        All False if the mask could not be computed.
        """
        return self.mask == 1

    def coverage(self) -> float:
        """Return percentage of cells inside polygons."""
        if self.mask.size == 0:
            return 0.
        return np.sum(self.inside) / self.mask.size * 100


class GridMasker():
    """Compute masks of polygon features on lat/lon grids.

    Parameters
    ----------
    method: {'geodesic', 'planar'}, optional
        Containment test, see :mod:`polymask.containment`.
        Planar is faster but only valid away from the poles and
        the antimeridian.
    prune: bool, optional
        Restrict tests to the candidate window of each ring.
        If False, the whole grid is tested for every ring.
    missing: int, optional
        Missing value used when the mask cannot be computed.
    shp_kw:
        Passed to :func:`read_shapefile` when features are given
        as a filename.

    Raises
    ------
    ValueError
        Unknown method.

    Examples
    --------
    >>> masker = GridMasker()
    >>> result = masker.compute(([10, 20, 30, 40], [10, 20, 30, 40]), fc)
    >>> if result.ok:
    ...     print(result.mask)
    """

    def __init__(self, method: str = 'geodesic', prune: bool = True,
                 missing: int = MASK_MISSING, **shp_kw):
        check_method(method)
        self.method = method
        self.prune = prune
        self.missing = missing
        self.shp_kw = shp_kw

    def compute(self, grid: Union[Grid, Tuple],
                features: Union[FeatureCollection, str],
                shape: Tuple[int, int] = None) -> MaskResult:
        """Compute mask.

        Never raises on unusable inputs, returns a result filled
        with missing values instead.

        :param grid: Grid, or (lat, lon) pair of 1D arrays.
        :param features: Polygon features, or polygon shapefile.
        :param shape: [opt] Shape of the mask when it cannot be
            computed. Default to the grid shape.
        """
        try:
            grid = get_grid(grid)
            if shape is None:
                shape = grid.shape
            if features is None:
                raise NotFoundError("No polygon source given.")
            if not isinstance(features, FeatureCollection):
                features = read_shapefile(features, **self.shp_kw)
        except PolymaskError as e:
            if shape is None:
                shape = guess_shape(grid) or (0, 0)
            log.error("Cannot compute mask (%s): %s. "
                      "Returning mask filled with missing values.",
                      type(e).__name__, e)
            return MaskResult.failed(shape, e, self.missing)

        mask = self.fold(grid, features)
        log.info("Masked %d features on %s: %d cells inside.",
                 features.n_features, grid, np.sum(mask))
        return MaskResult(mask, missing=self.missing)

    def fold(self, grid: Grid, features: FeatureCollection,
             mask: np.ndarray = None) -> np.ndarray:
        """Accumulate every ring of every feature into a mask.

        :param mask: [opt] Mask to add to, modified in place.
            A new zero mask by default.
        """
        if mask is None:
            mask = np.zeros(grid.shape, dtype=MASK_DTYPE)
        for i in range(features.n_features):
            log.debug("Feature %d / %d", i+1, features.n_features)
            for ring_lats, ring_lons in features.get_rings(i):
                self.mask_ring(grid, ring_lats, ring_lons, mask)
        return mask

    def mask_ring(self, grid: Grid, ring_lats: np.ndarray,
                  ring_lons: np.ndarray, mask: np.ndarray):
        """Set to 1 cells of `mask` that are inside a ring.

        Only cells of the candidate window still at 0 are tested.
        """
        if ring_lats.size == 0:
            return
        if self.prune:
            slc_lat, slc_lon = self.get_window(grid, ring_lats, ring_lons)
        else:
            slc_lat, slc_lon = slice(None), slice(None)

        window = mask[slc_lat, slc_lon]
        rows, cols = np.nonzero(window == 0)
        if rows.size == 0:
            return

        inside = contains(grid.lat[slc_lat][rows], grid.lon[slc_lon][cols],
                          ring_lats, ring_lons, method=self.method)
        window[rows[inside], cols[inside]] = 1
        log.debug("Window lat %s lon %s: %d/%d cells inside",
                  slc_lat, slc_lon, np.sum(inside), rows.size)

    def get_window(self, grid: Grid, ring_lats: np.ndarray,
                   ring_lons: np.ndarray) -> Tuple[slice, slice]:
        """Return candidate window of a ring.

        Contiguous range of rows and columns around the ring
        bounding box. See :func:`Coord.get_window`.
        If the ring longitude range is not contained in the grid
        longitude range, all columns are candidate.
        """
        lat_min, lat_max, lon_min, lon_max = get_ring_bounds(
            ring_lats, ring_lons, method=self.method)

        slc_lat = grid.lat.get_window(lat_min, lat_max)
        slc_lon = get_lon_window(grid.lon, lon_min, lon_max)
        return slc_lat, slc_lon


def get_lon_window(lon: Coord, lon_min: Optional[float],
                   lon_max: Optional[float]) -> slice:
    """Return window on longitudes.

    Whole coordinate if bounds are None, or if they are not
    within the coordinate limits.
    """
    if lon_min is None or lon_max is None:
        return slice(0, lon.size, 1)
    vmin, vmax = lon.get_limits()
    if lon_min < vmin or lon_max > vmax:
        return slice(0, lon.size, 1)
    return lon.get_window(lon_min, lon_max)


def compute_mask(grid: Union[Grid, Tuple],
                 features: Union[FeatureCollection, str],
                 shape: Tuple[int, int] = None, **kwargs) -> MaskResult:
    """Compute mask of features on a grid.

    :param kwargs: Passed to :class:`GridMasker`.

    See :func:`GridMasker.compute`.
    """
    masker = GridMasker(**kwargs)
    return masker.compute(grid, features, shape)


def merge_masks(*masks: np.ndarray, missing: int = MASK_MISSING) -> np.ndarray:
    """Combine masks by logical OR.

    If any mask is missing at a cell, the result is missing there.

    :raises ValueError: No mask given, or shapes differ.
    """
    if not masks:
        raise ValueError("At least one mask is needed.")
    shapes = {np.shape(m) for m in masks}
    if len(shapes) > 1:
        raise ValueError("Masks have different shapes (%s)" % shapes)

    masks = [np.asarray(m) for m in masks]
    out = np.zeros(masks[0].shape, dtype=MASK_DTYPE)
    is_missing = np.zeros(out.shape, dtype=bool)
    for m in masks:
        is_missing |= m == missing
        out |= (m == 1)
    out[is_missing] = missing
    return out
