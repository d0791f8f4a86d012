"""Rasterize polygons on latitude / longitude grids.

Provides

* reading of polygon features from shapefiles or shapely geometries
* computation of inclusion masks on lat/lon grids, with geodesic
  or planar containment tests
* application of masks to data, and to netCDF files
"""

import sys

from .log import set_logging, set_file_log, remove_file_log

from .coordinates import Coord, Lat, Lon
from .errors import (PolymaskError, NotFoundError,
                     GeometryTypeError, InputShapeError)
from .features import FeatureCollection
from .grid import Grid
from .containment import contains
from .shp_reader import read_shapefile
from .masker import (MASK_MISSING, GridMasker, MaskResult,
                     compute_mask, merge_masks)
from .apply import apply_mask, enlarge_mask


__version__ = "0.1"

__all__ = [
    'Coord',
    'Lat',
    'Lon',
    'PolymaskError',
    'NotFoundError',
    'GeometryTypeError',
    'InputShapeError',
    'FeatureCollection',
    'Grid',
    'contains',
    'read_shapefile',
    'MASK_MISSING',
    'GridMasker',
    'MaskResult',
    'compute_mask',
    'merge_masks',
    'apply_mask',
    'enlarge_mask',
    'set_logging',
    'set_file_log',
    'remove_file_log'
]


if sys.version_info[:2] < (3, 7):
    raise Exception("Python 3.7 or above is required.")


set_logging()
