"""Errors raised when masking preconditions fail.

The masker catches these and returns a sentinel mask instead,
see :class:`polymask.masker.MaskResult`.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK


class PolymaskError(Exception):
    """Base class for masking precondition failures."""


class NotFoundError(PolymaskError, FileNotFoundError):
    """Polygon (or grid) source cannot be located or opened."""


class GeometryTypeError(PolymaskError, TypeError):
    """Polygon source does not hold polygons."""


class InputShapeError(PolymaskError, ValueError):
    """Target grid lacks proper 1D coordinate axes."""
