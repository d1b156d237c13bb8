from __future__ import annotations

import math
from abc import ABCMeta, abstractmethod
from typing import Optional

import numpy as np


class TerrainInterface(metaclass=ABCMeta):
    """
    Abstract base class for terrain height services.

    A terrain answers height queries at projected horizontal positions. Returning None
    signals that no height is available; callers fall back to a default height.
    """

    @abstractmethod
    def height_at(self, east: float, north: float) -> Optional[float]:
        """
        Get the terrain height at a projected position.

        Args:
            east: The easting in meters
            north: The northing in meters

        Returns:
            The height in meters, or None if the terrain has no height there
        """


class HeightmapTerrain(TerrainInterface):
    """
    A terrain backed by a regular grid of heights in the projected coordinate system.

    Rows of the grid run northwards and columns run eastwards, starting at the south-west
    corner `origin`. Heights between grid posts are interpolated bilinearly. The base
    height is added to every sample, like the elevation of a terrain object placed in a
    scene.

    Args:
        heights: A 2D array of heights in meters, shape (rows, columns)
        origin_east: The easting of the south-west grid post
        origin_north: The northing of the south-west grid post
        cell_size: The distance between neighbouring grid posts in meters
        base_height: A height added to every sample. Default is 0.

    Examples:
        >>> import numpy as np
        >>> terrain = HeightmapTerrain(np.zeros((3, 3)), 567400, 5932400, cell_size=50)
        >>> terrain.height_at(567450, 5932450)
        0.0
        >>> terrain.height_at(0, 0) is None
        True
    """

    def __init__(
        self,
        heights,
        origin_east: float,
        origin_north: float,
        cell_size: float,
        base_height: float = 0.0,
    ):
        heights = np.asarray(heights, dtype=np.float64)
        if heights.ndim != 2 or heights.shape[0] < 2 or heights.shape[1] < 2:
            raise ValueError(
                f"heights must be a 2D grid of at least 2x2 posts but got shape {heights.shape}"
            )
        if not cell_size > 0:
            raise ValueError(f"cell_size must be positive but got {cell_size}")

        self.heights = heights
        self.origin_east = float(origin_east)
        self.origin_north = float(origin_north)
        self.cell_size = float(cell_size)
        self.base_height = float(base_height)

    @property
    def width(self) -> float:
        """The east-west extent in meters."""
        return (self.heights.shape[1] - 1) * self.cell_size

    @property
    def length(self) -> float:
        """The south-north extent in meters."""
        return (self.heights.shape[0] - 1) * self.cell_size

    def contains(self, east: float, north: float) -> bool:
        de = east - self.origin_east
        dn = north - self.origin_north
        return 0.0 <= de <= self.width and 0.0 <= dn <= self.length

    def height_at(self, east: float, north: float) -> Optional[float]:
        if not self.contains(east, north):
            return None

        col = (east - self.origin_east) / self.cell_size
        row = (north - self.origin_north) / self.cell_size

        # clamp so the far edges interpolate within the last cell
        c0 = min(int(math.floor(col)), self.heights.shape[1] - 2)
        r0 = min(int(math.floor(row)), self.heights.shape[0] - 2)
        tc = col - c0
        tr = row - r0

        h = self.heights
        south = h[r0, c0] * (1 - tc) + h[r0, c0 + 1] * tc
        north_ = h[r0 + 1, c0] * (1 - tc) + h[r0 + 1, c0 + 1] * tc

        return float(south * (1 - tr) + north_ * tr) + self.base_height
