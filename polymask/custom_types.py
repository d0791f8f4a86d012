"""Defines custom types.

:attr Array: TypeVar: Numpy array or array-like.
:attr ArrayLike: TypeVar: Scalar or sequence accepted where numpy
    converts it to an array.
:attr KeyLikeInt: TypeVar: Integer key for indexing a coordinate.
"""

# This file is part of the 'polymask' project and subject
# to the MIT License as defined in the file 'LICENSE',
# at the root of this project. © 2020 Clément HAËCK

from typing import List, Sequence, TypeVar

Array = TypeVar('Array')

ArrayLike = TypeVar('ArrayLike', float, Sequence[float], Array)

KeyLikeInt = TypeVar('KeyLikeInt', int, List[int], slice, None)
