"""Mask fields stored in netCDF files."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
import os
from typing import Any, Dict, Tuple

import netCDF4 as nc
import numpy as np

from polymask.apply import apply_mask
from polymask.errors import InputShapeError, NotFoundError
from polymask.grid import Grid
from polymask.masker import MASK_DTYPE, MASK_MISSING, GridMasker, MaskResult


log = logging.getLogger(__name__)


def open_dataset(filename: str, mode: str = 'r', **kwargs: Any) -> nc.Dataset:
    """Open netCDF file.

    :raises NotFoundError: If reading a file that does not exist.
    """
    if mode == 'r' and not os.path.isfile(filename):
        raise NotFoundError("File '%s' not found." % filename)
    file = nc.Dataset(filename, mode, **kwargs)
    log.info("Opening %s", filename)
    return file


def get_variable_grid(file: nc.Dataset, variable: str) -> Grid:
    """Return grid of a variable.

    The last two dimensions of the variable are taken as
    latitude and longitude. They must have coordinate variables:
    1D variables with the same name as the dimension.

    :raises KeyError: Variable not in file.
    :raises InputShapeError: If the variable has less than two
        dimensions, or they lack coordinate variables.
    """
    if variable not in file.variables:
        raise KeyError("Variable '%s' not in file (%s)"
                       % (variable, list(file.variables)))
    dims = file[variable].dimensions
    if len(dims) < 2:
        raise InputShapeError("Variable '%s' is not 2D (dimensions %s)"
                              % (variable, dims))

    coords = []
    for dim in dims[-2:]:
        if dim not in file.variables or file[dim].dimensions != (dim,):
            raise InputShapeError("Dimension '%s' of '%s' has no coordinate"
                                  " variable." % (dim, variable))
        coords.append(file[dim][:])

    return Grid(*coords)


def read_grid(filename: str, variable: str) -> Tuple[Grid, np.ndarray]:
    """Read a field and its grid.

    :returns: Grid, and variable data (masked array).

    :raises NotFoundError: File does not exist.
    :raises InputShapeError: See :func:`get_variable_grid`.
    """
    with open_dataset(filename) as file:
        grid = get_variable_grid(file, variable)
        data = file[variable][:]
    return grid, data


def get_attributes(nc_obj) -> Dict[str, Any]:
    """Return attributes of a netCDF dataset or variable."""
    return {attr: nc_obj.getncattr(attr) for attr in nc_obj.ncattrs()}


def write_masked(filename: str, src: nc.Dataset, variable: str,
                 data: np.ma.MaskedArray, mask: np.ndarray,
                 coords: Dict[str, np.ndarray] = None):
    """Write masked variable to a new file.

    The variable dimensions and coordinates are created, and
    attributes copied from the source file.
    A 'mask' variable is added.

    :param src: Source file.
    :param variable: Variable name.
    :param data: Masked variable data.
    :param mask: Polygons mask.
    :param coords: [opt] Coordinates values replacing those of
        the source file, by dimension name.
    """
    if coords is None:
        coords = {}
    src_var = src[variable]
    dims = src_var.dimensions

    with open_dataset(filename, 'w') as file:
        file.setncatts(get_attributes(src))

        for dim, size in zip(dims, data.shape):
            unlimited = src.dimensions[dim].isunlimited()
            file.createDimension(dim, None if unlimited else size)

            if dim in src.variables and src[dim].dimensions == (dim,):
                values = coords.get(dim, src[dim][:])
                attrs = get_attributes(src[dim])
                fill = attrs.pop('_FillValue', None)
                file.createVariable(dim, src[dim].dtype, (dim,), fill_value=fill)
                file[dim].setncatts(attrs)
                file[dim][:] = values
                log.debug("Laying %s values", dim)

        attrs = get_attributes(src_var)
        fill = attrs.pop('_FillValue',
                         nc.default_fillvals.get(src_var.dtype.str[1:], None))
        file.createVariable(variable, src_var.dtype, dims, fill_value=fill)
        file[variable].setncatts(attrs)
        file[variable][:] = data
        log.info("Inserting variable %s", variable)

        file.createVariable('mask', MASK_DTYPE, dims[-2:],
                            fill_value=MASK_MISSING)
        file['mask'].setncatts({'long_name': 'Polygons mask',
                                'flag_values': np.array([0, 1], dtype=MASK_DTYPE),
                                'flag_meanings': 'outside inside'})
        file['mask'][:] = mask


def mask_file(infile: str, variable: str, shapefile: str, outfile: str,
              keep: str = 'inside', method: str = 'geodesic',
              flip: bool = None, **shp_kw: Any) -> MaskResult:
    """Mask a variable with polygons from a shapefile.

    If the mask cannot be computed, the output file is still
    written, with all data missing.

    Parameters
    ----------
    infile: str
        NetCDF file containing the variable.
    variable: str
        Variable to mask. Its last two dimensions must be
        latitude and longitude.
    shapefile: str
        Polygon shapefile.
    outfile: str
        NetCDF file to create.
    keep: {'inside', 'outside'}
        Which cells are kept.
    method: {'geodesic', 'planar'}
        Containment test.
    flip: bool, optional
        Bring longitudes back in [-180, 180) before masking.
        By default, done if some longitudes are beyond 180.
    shp_kw:
        Passed to :func:`polymask.shp_reader.read_shapefile`.

    Raises
    ------
    NotFoundError
        `infile` does not exist.
    InputShapeError
        Variable is not at least 2D.
    """
    masker = GridMasker(method=method, **shp_kw)

    with open_dataset(infile) as src:
        if variable not in src.variables:
            raise KeyError("Variable '%s' not in file (%s)"
                           % (variable, list(src.variables)))
        data = src[variable][:]
        if data.ndim < 2:
            raise InputShapeError("Variable '%s' is not 2D (dimensions %s)"
                                  % (variable, src[variable].dimensions))
        coords = {}

        try:
            grid = get_variable_grid(src, variable)
        except InputShapeError as e:
            log.error("Cannot compute mask (%s): %s. "
                      "Returning mask filled with missing values.",
                      type(e).__name__, e)
            result = MaskResult.failed(data.shape[-2:], e, masker.missing)
        else:
            if flip is None:
                flip = grid.lon.needs_flip()
            if flip:
                grid, order = grid.flip_lon()
                data = data[..., order]
                coords[src[variable].dimensions[-1]] = grid.lon[:]
            result = masker.compute(grid, shapefile)

        masked = apply_mask(data, result, keep=keep)
        write_masked(outfile, src, variable, masked, result.mask, coords)

    return result
