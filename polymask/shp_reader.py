"""Read polygon features from shapefiles."""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
import os
import struct
from typing import Any, Sequence

import numpy as np
import shapefile as shp

from polymask.errors import GeometryTypeError, NotFoundError
from polymask.features import FeatureCollection


log = logging.getLogger(__name__)

POLYGON_TYPES = (shp.POLYGON, shp.POLYGONZ, shp.POLYGONM)
"""Shape types accepted as polygons."""


def get_shp_filename(filename: str) -> str:
    """Return filename of the '.shp' file."""
    root, ext = os.path.splitext(filename)
    if ext.lower() in ('.shp', '.dbf', '.shx'):
        filename = root
    return filename + '.shp'


def read_shapefile(filename: str, field: str = None,
                   values: Sequence[Any] = None) -> FeatureCollection:
    """Read polygon features.

    Each shape record gives a feature, each part of the shape
    a ring. Null shapes are skipped.

    Parameters
    ----------
    filename: str
        Shapefile, with or without extension.
    field: str, optional
        Attribute used to select features.
    values: Sequence, optional
        If `field` is given, only records whose `field` attribute
        is in `values` are kept.

    Raises
    ------
    NotFoundError
        File does not exist or cannot be opened.
    GeometryTypeError
        File does not contain polygons.
    KeyError
        `field` is not an attribute of the file.

    Examples
    --------
    >>> fc = read_shapefile('countries.shp', field='NAME',
    ...                     values=['France', 'Spain'])
    """
    filename = get_shp_filename(filename)
    if not os.path.isfile(filename):
        raise NotFoundError("Polygon source '%s' not found." % filename)

    try:
        with shp.Reader(filename) as sf:
            check_header(sf, filename)
            fc = read_features(sf, field, values)
    except (shp.ShapefileException, struct.error) as e:
        raise NotFoundError("Polygon source '%s' cannot be opened (%s)."
                            % (filename, e)) from e

    log.info("Read %d features (%d rings) from %s",
             fc.n_features, fc.n_segments, filename)
    return fc


def check_header(sf: shp.Reader, filename: str):
    """Check the file is a readable polygon shapefile.

    :raises NotFoundError: Unknown shape type (not a shapefile), or
        attributes file missing.
    :raises GeometryTypeError: File does not contain polygons.
    """
    if sf.shapeType not in shp.SHAPETYPE_LOOKUP:
        raise NotFoundError("Polygon source '%s' cannot be opened (invalid"
                            " shape type %d)." % (filename, sf.shapeType))
    if not sf.fields:
        raise NotFoundError("Polygon source '%s' cannot be opened (no"
                            " attributes file)." % filename)
    if sf.shapeType not in POLYGON_TYPES:
        raise GeometryTypeError("'%s' geometry is of shape type %s,"
                                " not polygon."
                                % (filename, shp.SHAPETYPE_LOOKUP[sf.shapeType]))


def read_features(sf: shp.Reader, field: str = None,
                  values: Sequence[Any] = None) -> FeatureCollection:
    """Gather records of an open shapefile in a collection."""
    if field is not None:
        names = [f[0] for f in sf.fields[1:]]
        if field not in names:
            raise KeyError("Field '%s' not in %s" % (field, names))
        if values is None:
            values = []
        values = set(values)

    lons = []
    lats = []
    segments = []
    table = []
    n_vertices = 0
    for sr in sf.iterShapeRecords():
        if field is not None and sr.record[field] not in values:
            continue
        shape = sr.shape
        if shape.shapeType == shp.NULL or not shape.points:
            continue

        points = np.asarray(shape.points, dtype=float)[:, :2]
        parts = list(shape.parts) + [len(points)]
        table.append([len(segments), len(parts) - 1])
        for start, stop in zip(parts[:-1], parts[1:]):
            segments.append([n_vertices + start, stop - start])
        lons.append(points[:, 0])
        lats.append(points[:, 1])
        n_vertices += len(points)

    if lons:
        lons = np.concatenate(lons)
        lats = np.concatenate(lats)
    return FeatureCollection(lons, lats, segments, table)
