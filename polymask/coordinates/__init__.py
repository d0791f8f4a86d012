"""Coordinates objects."""

from .coord import Coord
from .latlon import Lat, Lon

__all__ = ['Coord', 'Lat', 'Lon']
