from __future__ import annotations

from typing import NamedTuple

import numpy as np


class AbsoluteCoordinate(NamedTuple):
    """
    A double precision coordinate in the projected (UTM) coordinate system.

    Projected coordinates are right-handed with the height as the third axis. Their
    magnitude (hundreds of kilometers east, thousands of kilometers north) is too large
    to be stored in a single precision float without losing sub-meter detail.

    Attributes:
        east: The easting in meters
        north: The northing in meters
        height: The height in meters. Defaults to 0.

    Examples:
        >>> from geoanchor.constructs.coordinate import AbsoluteCoordinate
        >>> p = AbsoluteCoordinate(567480, 5932480, 2)
        >>> p.north
        5932480
    """

    east: float
    north: float
    height: float = 0.0

    @classmethod
    def from_tuple(cls, values) -> AbsoluteCoordinate:
        """
        Create a coordinate from an (east, north) or (east, north, height) sequence.

        Args:
            values: A sequence with two or three numbers

        Returns:
            A new AbsoluteCoordinate; the height is 0 if it was not given

        Raises:
            ValueError: If the sequence does not have two or three entries
        """
        values = tuple(values)
        if len(values) not in (2, 3):
            raise ValueError(
                f"expected (east, north) or (east, north, height) but got {values}"
            )
        return cls(*(float(v) for v in values))


class LocalCoordinate(NamedTuple):
    """
    A single precision coordinate relative to the anchor point.

    Local coordinates follow the rendering engine's left-handed, vertical-up convention:
    x is the east offset, y is the height offset and z is the north offset. Every
    component is narrowed to float32.

    Attributes:
        x: The east offset from the anchor in meters
        y: The height offset from the anchor in meters
        z: The north offset from the anchor in meters
    """

    x: float
    y: float
    z: float

    @classmethod
    def narrowed(cls, x: float, y: float, z: float) -> LocalCoordinate:
        """Create a local coordinate, rounding each component to float32."""
        return cls(*(float(np.float32(v)) for v in (x, y, z)))


class GeographicCoordinate(NamedTuple):
    """
    A WGS84 (EPSG:4326) geographic coordinate in decimal degrees.

    Attributes:
        longitude: The longitude (range: -180 to 180)
        latitude: The latitude (range: -90 to 90)
    """

    longitude: float
    latitude: float
