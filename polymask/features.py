"""Flattened collection of polygon features.

Vertices of every ring of every feature are concatenated in
two arrays. Rings (or segments) are indexed by their first vertex
and number of vertices, features by their first segment and
number of segments.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Iterator, List, Sequence, Tuple

try:
    import shapely.geometry as shg
except ImportError:
    _has_shapely = False
else:
    _has_shapely = True

import numpy as np

from polymask.custom_types import Array
from polymask.errors import GeometryTypeError


log = logging.getLogger(__name__)


class FeatureCollection():
    """Polygon features, flattened.

    Arrays are copied and stored read-only.

    :param lons: Longitude of all vertices [V].
    :param lats: Latitude of all vertices [V].
    :param segments: Start index and number of vertices
        of each ring [S, 2].
    :param features: First segment index and number of
        segments of each feature [F, 2].
    :param geometry: Geometry type of the source. Only
        'polygon' is supported.

    :raises GeometryTypeError: If geometry is not 'polygon'.
    :raises ValueError: If the index tables are inconsistent.
    """

    def __init__(self, lons: Array, lats: Array,
                 segments: Array, features: Array,
                 geometry: str = 'polygon'):
        if str(geometry).lower() != 'polygon':
            raise GeometryTypeError("Geometry type must be 'polygon', not '%s'."
                                    % geometry)
        self.geometry = 'polygon'

        self.lons = self._freeze(lons, np.float64)
        self.lats = self._freeze(lats, np.float64)
        self.segments = self._freeze(segments, np.int64).reshape(-1, 2)
        self.features = self._freeze(features, np.int64).reshape(-1, 2)

        self._check()

    @staticmethod
    def _freeze(values, dtype):
        array = np.array(values, dtype=dtype)
        array.flags.writeable = False
        return array

    def _check(self):
        """Check index tables.

        :raises ValueError: If a range points outside its target.
        """
        if self.lons.ndim != 1 or self.lons.shape != self.lats.shape:
            raise ValueError("Longitudes and latitudes must be 1D arrays of"
                             " same length (%s, %s)"
                             % (self.lons.shape, self.lats.shape))
        n_vertices = self.lons.size
        start, count = self.segments.T
        if np.any(start < 0) or np.any(count < 0) \
           or np.any(start + count > n_vertices):
            raise ValueError("Segments table refers to vertices beyond"
                             " the %d available." % n_vertices)
        first, n_seg = self.features.T
        if np.any(first < 0) or np.any(n_seg < 0) \
           or np.any(first + n_seg > self.n_segments):
            raise ValueError("Features table refers to segments beyond"
                             " the %d available." % self.n_segments)

    @classmethod
    def from_rings(cls, features: Sequence[Sequence[Sequence[Tuple[float, float]]]]
                   ) -> 'FeatureCollection':
        """Create collection from nested sequences.

        :param features: For each feature, a list of rings, each ring
            being a list of (lon, lat) vertices.

        Examples
        --------
        >>> square = [(15, 15), (35, 15), (35, 35), (15, 35)]
        >>> fc = FeatureCollection.from_rings([[square]])
        """
        lons = []
        lats = []
        segments = []
        table = []
        for rings in features:
            table.append([len(segments), len(rings)])
            for ring in rings:
                ring = np.asarray(ring, dtype=float).reshape(-1, 2)
                segments.append([len(lons), len(ring)])
                lons += list(ring[:, 0])
                lats += list(ring[:, 1])
        return cls(lons, lats, segments, table)

    @classmethod
    def from_geometries(cls, geometries) -> 'FeatureCollection':
        """Create collection from shapely geometries.

        Each Polygon or MultiPolygon gives a feature, with its
        exterior and interior rings (holes are not subtracted).

        :raises GeometryTypeError: If a geometry is not a polygon.
        """
        if not _has_shapely:
            raise ImportError("shapely package necessary to use from_geometries.")

        features = []
        for geom in geometries:
            if isinstance(geom, shg.Polygon):
                polygons = [geom]
            elif isinstance(geom, shg.MultiPolygon):
                polygons = list(geom.geoms)
            else:
                raise GeometryTypeError("Geometry type must be polygon, not %s."
                                        % geom.geom_type)
            rings = []
            for poly in polygons:
                if poly.is_empty:
                    continue
                rings.append(list(poly.exterior.coords))
                rings += [list(r.coords) for r in poly.interiors]
            features.append(rings)
        return cls.from_rings(features)

    def __len__(self) -> int:
        return self.n_features

    def __str__(self):
        s = ["%s: %d features, %d rings, %d vertices"
             % (self.__class__.__name__, self.n_features,
                self.n_segments, self.n_vertices)]
        if self.n_vertices > 0:
            lon_min, lat_min, lon_max, lat_max = self.bounds()
            s.append("Bounds: lon %.2f - %.2f, lat %.2f - %.2f"
                     % (lon_min, lon_max, lat_min, lat_max))
        return '\n'.join(s)

    @property
    def n_features(self) -> int:
        """Number of features."""
        return self.features.shape[0]

    @property
    def n_segments(self) -> int:
        """Number of rings."""
        return self.segments.shape[0]

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return self.lons.size

    def get_segments(self, feature: int) -> range:
        """Indices of the segments of a feature."""
        first, count = self.features[feature]
        return range(first, first + count)

    def get_ring(self, segment: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return latitudes and longitudes of a ring."""
        start, count = self.segments[segment]
        slc = slice(start, start + count)
        return self.lats[slc], self.lons[slc]

    def get_rings(self, feature: int) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """Iterate over latitudes and longitudes of the rings of a feature."""
        for seg in self.get_segments(feature):
            yield self.get_ring(seg)

    def select(self, indices: Sequence[int]) -> 'FeatureCollection':
        """Return a new collection with some features.

        Features are placed in the order of `indices`.
        """
        lons = []
        lats = []
        segments = []
        table = []
        n_vertices = 0
        for i in indices:
            first = len(segments)
            for lat, lon in self.get_rings(i):
                segments.append([n_vertices, lon.size])
                lons.append(lon)
                lats.append(lat)
                n_vertices += lon.size
            table.append([first, len(segments) - first])
        if lons:
            lons = np.concatenate(lons)
            lats = np.concatenate(lats)
        return self.__class__(lons, lats, segments, table)

    def bounds(self) -> List[float]:
        """Bounding box of all vertices.

        :returns: lon_min, lat_min, lon_max, lat_max
        """
        return [self.lons.min(), self.lats.min(),
                self.lons.max(), self.lats.max()]
