"""Point in polygon tests.

Two tests are available:

* 'geodesic' (default): ring edges are great circle arcs. A
  reference arc is drawn along the meridian of each query point,
  to the pole of the hemisphere opposite to the ring mean
  latitude, and its crossings with the ring edges are counted.
  An odd number of crossings means the point is inside.
  A ring encircling a pole is considered to contain the pole
  of its own hemisphere.
  Valid on the whole sphere, including rings crossing the
  antimeridian or encircling a pole.

* 'planar': longitudes and latitudes are taken as cartesian
  coordinates, and matplotlib does the ray casting.
  Only valid for rings far from the poles and the antimeridian.

For both tests, points lying on an edge or on a vertex, at
`EDGE_TOLERANCE` precision, are inside.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


import logging
from typing import Optional, Tuple, Union

import matplotlib.path as mplp
import numpy as np

from polymask.custom_types import ArrayLike


log = logging.getLogger(__name__)

METHODS = ['geodesic', 'planar']

EDGE_TOLERANCE = 1e-10
"""Distance under which a point is on an edge.

In radians (on the unit sphere) for the geodesic test, in
degrees for the planar one.
"""


def check_method(method: str):
    """Check the containment method is supported.

    :raises ValueError: Unknown method.
    """
    if method not in METHODS:
        raise ValueError("Invalid containment method '%s'. Expected one of: %s"
                         % (method, METHODS))


def to_xyz(lat: ArrayLike, lon: ArrayLike) -> np.ndarray:
    """Return unit vectors for points in degrees.

    :returns: Array of shape [..., 3].
    """
    lat = np.deg2rad(lat)
    lon = np.deg2rad(lon)
    cos = np.cos(lat)
    return np.stack([cos*np.cos(lon), cos*np.sin(lon), np.sin(lat)], axis=-1)


def get_edges(ring_lats: np.ndarray,
              ring_lons: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return start and end vertices of each edge, as unit vectors.

    The ring is closed: the last vertex connects to the first.
    """
    A = to_xyz(ring_lats, ring_lons)
    B = np.roll(A, -1, axis=0)
    return A, B


def get_reference_pole(ring_lats: np.ndarray) -> int:
    """Return the pole the reference arcs go to.

    :returns: -1 for the south pole, 1 for the north pole.
    """
    return -1 if np.mean(ring_lats) >= 0. else 1


def encircles_pole(ring_lons: np.ndarray) -> bool:
    """If the ring winds around the polar axis."""
    dlon = np.diff(np.append(ring_lons, ring_lons[0]))
    dlon = (dlon + 180.) % 360. - 180.
    return abs(np.sum(dlon)) > 180.


def crosses_antimeridian(ring_lons: np.ndarray) -> bool:
    """If an edge jumps by more than 180 degrees of longitude."""
    dlon = np.diff(np.append(ring_lons, ring_lons[0]))
    return bool(np.any(np.abs(dlon) > 180.))


def _on_arc(P: np.ndarray, a: np.ndarray, b: np.ndarray,
            n: np.ndarray) -> np.ndarray:
    """If points P [N, 3] are on the minor arc from a to b.

    n is the unit normal to the arc plane.
    """
    on_circle = np.abs(P @ n) < EDGE_TOLERANCE
    after_a = np.cross(a, P) @ n >= -EDGE_TOLERANCE
    before_b = np.cross(P, b) @ n >= -EDGE_TOLERANCE
    return on_circle & after_a & before_b


def contains_geodesic(lat: np.ndarray, lon: np.ndarray,
                      ring_lats: np.ndarray, ring_lons: np.ndarray) -> np.ndarray:
    """Test if points are inside a ring, on the sphere.

    :param lat, lon: Points coordinates [N], in degrees.
    :param ring_lats, ring_lons: Ring vertices, in degrees.
    :returns: Boolean array [N].
    """
    P = to_xyz(lat, lon)
    lon_r = np.deg2rad(lon)
    zeros = np.zeros_like(lon_r)
    # Normal to the meridian plane, and direction of the meridian half
    meridian = np.stack([-np.sin(lon_r), np.cos(lon_r), zeros], axis=-1)
    east = np.stack([np.cos(lon_r), np.sin(lon_r), zeros], axis=-1)

    pole = get_reference_pole(ring_lats)

    inside = np.zeros(P.shape[0], dtype=bool)
    on_edge = np.zeros(P.shape[0], dtype=bool)

    for a, b in zip(*get_edges(ring_lats, ring_lons)):
        n = np.cross(a, b)
        norm = np.linalg.norm(n)
        if norm < EDGE_TOLERANCE:
            on_edge |= np.linalg.norm(P - a, axis=-1) < EDGE_TOLERANCE
            continue
        n /= norm
        on_edge |= _on_arc(P, a, b, n)

        # Half-open rule on the meridian plane. Vertices closer than
        # the tolerance count as lying on the plane.
        side_a = meridian @ a > EDGE_TOLERANCE
        side_b = meridian @ b > EDGE_TOLERANCE
        crossing = side_a != side_b
        idx = np.nonzero(crossing)[0]
        if idx.size == 0:
            continue

        X = np.cross(n, meridian[idx])
        X_norm = np.linalg.norm(X, axis=-1)
        valid = X_norm > 0
        idx = idx[valid]
        X = X[valid] / X_norm[valid, None]
        # Keep the intersection lying on the minor arc
        X *= np.sign(X @ (a + b))[:, None]

        on_half = np.sum(X * east[idx], axis=-1) > 0
        if pole < 0:
            toward_pole = X[:, 2] < P[idx, 2]
        else:
            toward_pole = X[:, 2] > P[idx, 2]
        inside[idx] ^= on_half & toward_pole

    return inside | on_edge


def _on_segment(points: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """If planar points [N, 2] are on segment [a, b]."""
    ab = b - a
    ap = points - a
    length2 = ab @ ab
    if length2 == 0.:
        return np.hypot(*ap.T) < EDGE_TOLERANCE
    cross = ab[0]*ap[:, 1] - ab[1]*ap[:, 0]
    dot = ap @ ab
    return ((np.abs(cross) <= EDGE_TOLERANCE * np.sqrt(length2))
            & (dot >= -EDGE_TOLERANCE) & (dot <= length2 + EDGE_TOLERANCE))


def contains_planar(lat: np.ndarray, lon: np.ndarray,
                    ring_lats: np.ndarray, ring_lons: np.ndarray) -> np.ndarray:
    """Test if points are inside a ring, in the lon/lat plane.

    :param lat, lon: Points coordinates [N].
    :param ring_lats, ring_lons: Ring vertices.
    :returns: Boolean array [N].
    """
    vertices = np.column_stack([ring_lons, ring_lats])
    points = np.column_stack([lon, lat])

    on_edge = np.zeros(points.shape[0], dtype=bool)
    for a, b in zip(vertices, np.roll(vertices, -1, axis=0)):
        on_edge |= _on_segment(points, a, b)

    if vertices.shape[0] < 3:
        return on_edge

    path = mplp.Path(vertices)
    return path.contains_points(points) | on_edge


def contains(lat: ArrayLike, lon: ArrayLike,
             ring_lats: ArrayLike, ring_lons: ArrayLike,
             method: str = 'geodesic') -> Union[bool, np.ndarray]:
    """Test if points are inside a ring.

    The ring is implicitly closed.
    Points on the ring boundary are inside.

    Parameters
    ----------
    lat, lon: float or Array
        Points coordinates in degrees. Broadcast together.
    ring_lats, ring_lons: Array
        Ring vertices in degrees.
    method: {'geodesic', 'planar'}
        Containment test to use. See module documentation.

    Returns
    -------
    bool, or boolean array with the broadcast shape of `lat` and `lon`.

    Examples
    --------
    >>> contains(25, 25, [15, 15, 35, 35], [15, 35, 35, 15])
    True
    """
    check_method(method)
    lat, lon = np.broadcast_arrays(np.asarray(lat, dtype=float),
                                   np.asarray(lon, dtype=float))
    shape = lat.shape
    ring_lats = np.asarray(ring_lats, dtype=float).ravel()
    ring_lons = np.asarray(ring_lons, dtype=float).ravel()

    if ring_lats.size == 0:
        inside = np.zeros(lat.size, dtype=bool)
    elif method == 'geodesic':
        inside = contains_geodesic(lat.ravel(), lon.ravel(), ring_lats, ring_lons)
    else:
        inside = contains_planar(lat.ravel(), lon.ravel(), ring_lats, ring_lons)

    if shape == ():
        return bool(inside[0])
    return inside.reshape(shape)


def get_arcs_lat_extent(ring_lats: np.ndarray,
                        ring_lons: np.ndarray) -> Tuple[float, float]:
    """Return latitude extent of the great circle arcs of a ring.

    Arcs bulge poleward: their extreme latitude can lie
    between their vertices.
    """
    lat_min = np.min(ring_lats)
    lat_max = np.max(ring_lats)
    for a, b in zip(*get_edges(ring_lats, ring_lons)):
        n = np.cross(a, b)
        norm = np.linalg.norm(n)
        if norm < EDGE_TOLERANCE:
            continue
        n /= norm
        horiz = np.sqrt(max(0., 1. - n[2]**2))
        if horiz < EDGE_TOLERANCE:
            # Arc along the equator
            continue
        # Northernmost point of the great circle, the southernmost is opposite
        top = (np.array([0., 0., 1.]) - n[2]*n) / horiz
        lat_top = np.rad2deg(np.arcsin(min(1., horiz)))
        for vertex, lat in [(top, lat_top), (-top, -lat_top)]:
            if (np.cross(a, vertex) @ n >= 0) and (np.cross(vertex, b) @ n >= 0):
                lat_min = min(lat_min, lat)
                lat_max = max(lat_max, lat)
    return lat_min, lat_max


def get_ring_bounds(ring_lats: ArrayLike, ring_lons: ArrayLike,
                    method: str = 'geodesic'
                    ) -> Tuple[float, float, Optional[float], Optional[float]]:
    """Return bounding box of a ring.

    For the geodesic method, the box contains the great circle
    arcs and not only the vertices. If the ring encircles a pole,
    the box extends to that pole. Longitude bounds are None
    if the ring covers all longitudes or crosses the antimeridian.

    :returns: lat_min, lat_max, lon_min, lon_max
    """
    check_method(method)
    ring_lats = np.asarray(ring_lats, dtype=float).ravel()
    ring_lons = np.asarray(ring_lons, dtype=float).ravel()

    if method == 'planar':
        return (ring_lats.min(), ring_lats.max(),
                ring_lons.min(), ring_lons.max())

    lat_min, lat_max = get_arcs_lat_extent(ring_lats, ring_lons)
    lon_min, lon_max = ring_lons.min(), ring_lons.max()

    if encircles_pole(ring_lons):
        if get_reference_pole(ring_lats) < 0:
            lat_max = 90.
        else:
            lat_min = -90.
        lon_min = lon_max = None
    elif crosses_antimeridian(ring_lons):
        lon_min = lon_max = None

    return lat_min, lat_max, lon_min, lon_max
