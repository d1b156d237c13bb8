from __future__ import annotations

from typing import Tuple, TypeVar

import numpy as np

from geoanchor.constructs.coordinate import AbsoluteCoordinate, LocalCoordinate
from geoanchor.utils.exceptions import OutOfRangeError

# 100 km; float32 still resolves ~8 mm at this distance
MAX_ANCHOR_OFFSET = 100_000.0

AXIS_NAMES = ("east", "north", "height")

T = TypeVar("T")


def swap_handedness(values: Tuple[T, T, T]) -> Tuple[T, T, T]:
    """
    Swap the 2nd and 3rd components of a 3-tuple.

    This converts between the right-handed projected convention (east, north, height)
    and the left-handed vertical-up engine convention (east, height, north). The
    permutation is its own inverse.

    Args:
        values: Any sequence with three components

    Returns:
        A plain tuple (a, c, b)

    Examples:
        >>> swap_handedness((1, 2, 3))
        (1, 3, 2)
    """
    a, b, c = values
    return a, c, b


class AnchorRelativeTransform:
    """
    Converts projected coordinates to and from single precision local coordinates
    measured from a fixed anchor point.

    The transform is a pure function of its inputs and the read-only anchor and can be
    shared freely.

    Args:
        anchor: The projected coordinate of the anchor point
        max_offset: The exclusive per-axis distance limit from the anchor, in meters

    Examples:
        >>> from geoanchor.constructs.coordinate import AbsoluteCoordinate
        >>> transform = AnchorRelativeTransform(AbsoluteCoordinate(567475, 5932475, 0))
        >>> transform.to_local(AbsoluteCoordinate(567480, 5932480, 2))
        LocalCoordinate(x=5.0, y=2.0, z=5.0)
    """

    def __init__(self, anchor: AbsoluteCoordinate, max_offset: float = MAX_ANCHOR_OFFSET):
        if not max_offset > 0:
            raise ValueError(f"max_offset must be positive but got {max_offset}")
        self._anchor = AbsoluteCoordinate.from_tuple(anchor)
        self._max_offset = float(max_offset)

    def __repr__(self):
        return f"AnchorRelativeTransform(anchor={tuple(self._anchor)}, max_offset={self._max_offset})"

    @property
    def anchor(self) -> AbsoluteCoordinate:
        return self._anchor

    @property
    def max_offset(self) -> float:
        return self._max_offset

    def _offsets(self, p: AbsoluteCoordinate) -> Tuple[float, float, float]:
        return (
            p[0] - self._anchor[0],
            p[1] - self._anchor[1],
            p[2] - self._anchor[2],
        )

    def is_within_range(self, p: AbsoluteCoordinate) -> bool:
        """Check whether a projected coordinate can be converted without raising."""
        return all(abs(o) < self._max_offset for o in self._offsets(p))

    def to_local(self, p: AbsoluteCoordinate) -> LocalCoordinate:
        """
        Calculate the position of a point relative to the anchor in local coordinates.

        Each offset from the anchor is narrowed to float32 and north and height are
        swapped to match the engine's vertical-up, left-handed convention.

        Args:
            p: The projected coordinate of the point

        Returns:
            The local coordinate (east offset, height offset, north offset)

        Raises:
            OutOfRangeError: If the point is 100 km or more from the anchor on any axis
        """
        offsets = self._offsets(p)
        for i, offset in enumerate(offsets):
            if not abs(offset) < self._max_offset:
                raise OutOfRangeError(
                    AXIS_NAMES[i], p[i], self._anchor[i], self._max_offset
                )

        return LocalCoordinate.narrowed(*swap_handedness(offsets))

    def to_absolute(self, p: LocalCoordinate) -> AbsoluteCoordinate:
        """
        Calculate the projected coordinate of a local coordinate.

        Args:
            p: The local coordinate (east offset, height offset, north offset)

        Returns:
            The projected coordinate in double precision
        """
        east, north, height = swap_handedness(p)
        return AbsoluteCoordinate(
            float(east) + self._anchor.east,
            float(north) + self._anchor.north,
            float(height) + self._anchor.height,
        )

    def to_local_array(self, points: np.ndarray) -> np.ndarray:
        """
        Convert an (n, 3) array of projected coordinates to an (n, 3) float32 array of
        local coordinates.

        Raises:
            OutOfRangeError: For the first point that is out of range, in row order
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f"expected an array of shape (n, 3) but got {points.shape}")

        offsets = points - np.asarray(self._anchor, dtype=np.float64)
        bad = ~(np.abs(offsets) < self._max_offset)
        if bad.any():
            row, axis = np.argwhere(bad)[0]
            raise OutOfRangeError(
                AXIS_NAMES[axis],
                float(points[row, axis]),
                self._anchor[axis],
                self._max_offset,
            )

        return offsets[:, [0, 2, 1]].astype(np.float32)
