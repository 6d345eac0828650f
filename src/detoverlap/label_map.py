"""
Label map container and array conversion.

A label map is a 2D grid of unsigned region ids where 0 is background.
Arrays coming from callers are converted here; anything that is not a 2D
(or single-slice 3D) grid of non-negative integers is rejected.
"""

import numpy as np

from detoverlap.errors import UsageError


BACKGROUND = 0


class LabelMap:
    """
    Immutable 2D label image.

    Indexed as label_map(x, y) with x the column and y the row, matching
    the coordinates used for centroids.
    """

    def __init__(self, array):
        array = _check_label_array(array)
        if array.ndim != 2:
            raise UsageError(f"A label map must be 2D, got an array of shape {array.shape}")
        self._array = np.ascontiguousarray(array, dtype=np.uint32)
        self._array.flags.writeable = False

    @property
    def array(self):
        """Read-only (height, width) uint32 view of the labels."""
        return self._array

    @property
    def width(self):
        return self._array.shape[1]

    @property
    def height(self):
        return self._array.shape[0]

    @property
    def shape(self):
        return self._array.shape

    def __call__(self, x, y):
        return int(self._array[y, x])

    def labels(self):
        """Sorted non-background labels present in the map."""
        values = np.unique(self._array)
        return [int(v) for v in values if v != BACKGROUND]

    def __eq__(self, other):
        if not isinstance(other, LabelMap):
            return NotImplemented
        return np.array_equal(self._array, other._array)

    def __repr__(self):
        return f"LabelMap({self.width}x{self.height})"


def _check_label_array(data):
    """
    Return data as an integer array of valid label values.

    Booleans become 0/1. Non-integer dtypes, negative values and values
    above 32 bits raise UsageError.
    """
    array = np.asarray(data)

    if array.dtype == np.bool_:
        array = array.astype(np.uint8)
    elif not np.issubdtype(array.dtype, np.integer):
        raise UsageError(f"label arrays must have an integer dtype, got {array.dtype}")

    if array.size and np.issubdtype(array.dtype, np.signedinteger) and array.min() < 0:
        raise UsageError("label arrays must not contain negative values")

    if array.size and array.max() > np.iinfo(np.uint32).max:
        raise UsageError("label values must fit into 32 bits")

    return array


def to_label_slices(data):
    """
    Convert an array-like into a list of 2D label maps.

    2D arrays give one slice, 3D arrays are read as (depth, height, width).
    Integer and boolean dtypes are accepted; negative values are not.
    """
    if isinstance(data, LabelMap):
        return [data]

    array = np.asarray(data)

    if array.ndim not in (2, 3):
        raise UsageError(
            f"only arrays of dimension 2 or 3 are supported, got shape {array.shape}"
        )

    array = _check_label_array(array)

    if array.ndim == 2:
        return [LabelMap(array)]

    return [LabelMap(array[z]) for z in range(array.shape[0])]


def as_single_label_map(data, name="label map"):
    """Convert to exactly one 2D label map or raise UsageError."""
    slices = to_label_slices(data)
    if len(slices) != 1:
        raise UsageError(
            f"The detection overlap measure only accepts single 2D images, "
            f"{name} has {len(slices)} slices"
        )
    return slices[0]
