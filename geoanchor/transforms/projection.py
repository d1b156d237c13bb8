from __future__ import annotations

import logging
import math
from abc import ABCMeta, abstractmethod
from typing import Tuple, Union

import numpy as np
from pyproj import CRS, Transformer

from geoanchor.constructs.anchor import Hemisphere
from geoanchor.constructs.coordinate import AbsoluteCoordinate, GeographicCoordinate
from geoanchor.utils.crs import LATLON_CRS, utm_crs

log = logging.getLogger(__name__)


class ProjectionInterface(metaclass=ABCMeta):
    """
    Abstract base class for services that project between geographic and projected
    coordinates.

    Implementations only deal with the horizontal position; heights pass through the
    anchor transform untouched.
    """

    @property
    @abstractmethod
    def crs(self) -> CRS:
        """The projected CRS of this service."""

    @abstractmethod
    def projected_to_geographic(self, p: AbsoluteCoordinate) -> GeographicCoordinate:
        """
        Convert a projected coordinate to a geographic coordinate.

        Args:
            p: The projected coordinate; its height is ignored

        Returns:
            The WGS84 longitude and latitude
        """

    @abstractmethod
    def geographic_to_projected(self, lon: float, lat: float) -> AbsoluteCoordinate:
        """
        Convert a geographic coordinate to a projected coordinate.

        Args:
            lon: The longitude in decimal degrees
            lat: The latitude in decimal degrees

        Returns:
            The projected coordinate with a height of 0
        """

    def geographic_to_projected_array(
        self, lon: np.ndarray, lat: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Convert arrays of longitudes and latitudes to arrays of eastings and northings.

        The default implementation projects one point at a time; subclasses may
        override it with a vectorised version.
        """
        projected = [
            self.geographic_to_projected(float(x), float(y)) for x, y in zip(lon, lat)
        ]
        east = np.array([p.east for p in projected], dtype=np.float64)
        north = np.array([p.north for p in projected], dtype=np.float64)
        return east, north


class UtmProjection(ProjectionInterface):
    """
    Projects between WGS84 and a WGS84/UTM zone using pyproj.

    Both pyproj transformers are created once, when the projection is built. All
    coordinates are passed in (x, y) = (lon, lat) / (east, north) order.

    Args:
        zone: The UTM zone number (1 to 60)
        hemisphere: The hemisphere of the zone

    Examples:
        >>> projection = UtmProjection(32)
        >>> p = projection.geographic_to_projected(10.028691, 53.551218)
        >>> projection.projected_to_geographic(p)
    """

    def __init__(
        self,
        zone: int,
        hemisphere: Union[str, Hemisphere] = Hemisphere.NORTHERN,
    ):
        self.zone = zone
        self.hemisphere = Hemisphere.parse(hemisphere)
        self._crs = utm_crs(zone, self.hemisphere.is_northern)

        self._to_geographic = Transformer.from_crs(self._crs, LATLON_CRS, always_xy=True)
        self._to_projected = Transformer.from_crs(LATLON_CRS, self._crs, always_xy=True)

        log.debug("built utm projection for %s", self._crs.to_authority())

    def __repr__(self):
        return f"UtmProjection(zone={self.zone}, hemisphere={self.hemisphere.value})"

    @property
    def crs(self) -> CRS:
        return self._crs

    def projected_to_geographic(self, p: AbsoluteCoordinate) -> GeographicCoordinate:
        lon, lat = self._to_geographic.transform(p[0], p[1])

        if math.isinf(lon) or math.isinf(lat):
            raise ValueError(
                f"Unable to convert {self._crs.to_authority()} ({p[0]}, {p[1]}) -> {LATLON_CRS.to_authority()} ({lon}, {lat})"
            )

        return GeographicCoordinate(longitude=lon, latitude=lat)

    def geographic_to_projected(self, lon: float, lat: float) -> AbsoluteCoordinate:
        east, north = self._to_projected.transform(lon, lat)

        if math.isinf(east) or math.isinf(north):
            raise ValueError(
                f"Unable to convert {LATLON_CRS.to_authority()} ({lon}, {lat}) -> {self._crs.to_authority()} ({east}, {north})"
            )

        return AbsoluteCoordinate(east, north, 0.0)

    def geographic_to_projected_array(
        self, lon: np.ndarray, lat: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        east, north = self._to_projected.transform(
            np.asarray(lon, dtype=np.float64), np.asarray(lat, dtype=np.float64)
        )
        east = np.asarray(east, dtype=np.float64)
        north = np.asarray(north, dtype=np.float64)

        if np.isinf(east).any() or np.isinf(north).any():
            raise ValueError(
                f"Unable to convert some coordinates from {LATLON_CRS.to_authority()} to {self._crs.to_authority()}"
            )

        return east, north
