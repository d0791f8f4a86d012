"""Apply masks to data."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Union

try:
    import scipy.ndimage as ndimage
except ImportError:
    _has_scipy = False
else:
    _has_scipy = True

import numpy as np

from polymask.custom_types import Array
from polymask.masker import MASK_MISSING, MaskResult


log = logging.getLogger(__name__)


def apply_mask(data: Array, mask: Union[MaskResult, Array],
               keep: str = 'inside', fill_value=None) -> np.ma.MaskedArray:
    """Mask data outside (or inside) polygons.

    Parameters
    ----------
    data: Array
        Data co-registered with the mask. Its last two
        dimensions are latitude and longitude, other
        dimensions are looped over.
    mask: MaskResult or Array
        Mask of polygons (1 inside, 0 outside).
        Cells with missing value mask the data whatever `keep`.
    keep: {'inside', 'outside'}
        Which cells are kept.
    fill_value: Any, optional
        Fill value of the returned array.

    Returns
    -------
    Masked array, with the mask of `data` if any.

    Raises
    ------
    IndexError
        Mask does not have the shape of the data last dimensions.
    ValueError
        Invalid `keep`.
    """
    if isinstance(mask, MaskResult):
        missing = mask.missing
        mask = mask.mask
    else:
        missing = MASK_MISSING
    mask = np.asarray(mask)

    if keep not in ('inside', 'outside'):
        raise ValueError("Invalid keep '%s'. Expected one of: "
                         "['inside', 'outside']" % keep)
    if np.ndim(data) < 2 or mask.shape != np.shape(data)[-2:]:
        raise IndexError("Mask has incompatible shape"
                         " (%s, expected %s)" % (list(mask.shape),
                                                 list(np.shape(data)[-2:])))

    if np.all(mask == missing):
        log.warning("Mask was not computed, all data is masked.")

    selected = mask == [0, 1][keep == 'inside']
    masked = np.ma.getmaskarray(data) | ~selected
    out = np.ma.array(data, mask=masked, copy=True)
    if fill_value is not None:
        out.set_fill_value(fill_value)
    return out


def get_circle_kernel(n: int) -> np.ndarray:
    """Return circular kernel for convolution of size nxn."""
    kernel = np.zeros((n, n))
    for i in range(n):
        for j in range(n):
            kernel[i, j] = (i-(n-1)/2)**2 + (j-(n-1)/2)**2 <= (n/2)**2

    return kernel


def enlarge_mask(mask: Array, n_neighbors: int) -> np.ndarray:
    """Enlarge the inside of a mask by `n_neighbors` cells.

    Cells closer than `n_neighbors` (in a circle) to an inside
    cell become inside.
    Missing values of integer masks are preserved.

    Parameters
    ----------
    mask: Array
        2D boolean mask, or integer mask (1 inside).
    n_neighbors: int

    Returns
    -------
    Mask of same dtype.
    """
    if not _has_scipy:
        raise ImportError("scipy package necessary to use enlarge_mask.")

    mask = np.asarray(mask)
    N = 2*n_neighbors + 1
    kernel = get_circle_kernel(N)

    inside = ndimage.convolve(1.*(mask == 1), kernel,
                              mode='constant', cval=0.) > 0

    if mask.dtype == bool:
        return inside
    out = inside.astype(mask.dtype)
    out[mask == MASK_MISSING] = MASK_MISSING
    return out
