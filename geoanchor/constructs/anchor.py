from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, NamedTuple, Union

from pyproj import CRS, Transformer

from geoanchor.constructs.coordinate import AbsoluteCoordinate
from geoanchor.utils.crs import LATLON_CRS, utm_crs, utm_zone_for, validate_utm_zone

DEFAULT_UTM_ZONE = 32
DEFAULT_ANCHOR = AbsoluteCoordinate(567475.0, 5932475.0, 0.0)


class Hemisphere(Enum):
    """
    The hemisphere of a UTM zone.

    Values:
        NORTHERN: Northern hemisphere (EPSG:326xx)
        SOUTHERN: Southern hemisphere (EPSG:327xx)
    """

    NORTHERN = "northern"
    SOUTHERN = "southern"

    @property
    def is_northern(self) -> bool:
        return self is Hemisphere.NORTHERN

    @classmethod
    def parse(cls, value: Union[str, Hemisphere]) -> Hemisphere:
        if isinstance(value, Hemisphere):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ValueError(
                f"hemisphere must be one of {[h.value for h in cls]} but got {value!r}"
            ) from e


@lru_cache(maxsize=None)
def _utm_crs_for(zone: int, hemisphere: Hemisphere) -> CRS:
    return utm_crs(zone, hemisphere.is_northern)


class AnchorConfig(NamedTuple):
    """
    The immutable configuration of an anchor-relative coordinate system.

    An AnchorConfig fixes the UTM zone, the hemisphere and the anchor point that local
    coordinates are measured from. Points to be converted must stay within 100 km of
    the anchor on every axis.

    The default configuration is suitable for Hamburg in Germany (zone 32 north).

    Attributes:
        anchor: The projected coordinate of the anchor point. The height is 0 if the
            anchor was derived from geographic coordinates.
        utm_zone: The UTM zone number (1 to 60)
        hemisphere: The hemisphere of the zone

    Examples:
        >>> from geoanchor.constructs.anchor import AnchorConfig, Hemisphere
        >>> config = AnchorConfig()
        >>> config.utm_crs.to_epsg()
        32632
        >>>
        >>> # Anchor on a geographic coordinate, zone chosen automatically
        >>> config = AnchorConfig.from_lat_lon(lon=10.028691, lat=53.551218)
        >>>
        >>> # Load from a json file
        >>> config = AnchorConfig.from_file('anchor.json')
    """

    anchor: AbsoluteCoordinate = DEFAULT_ANCHOR
    utm_zone: int = DEFAULT_UTM_ZONE
    hemisphere: Hemisphere = Hemisphere.NORTHERN

    @classmethod
    def create(
        cls,
        anchor=DEFAULT_ANCHOR,
        utm_zone: int = DEFAULT_UTM_ZONE,
        hemisphere: Union[str, Hemisphere] = Hemisphere.NORTHERN,
    ) -> AnchorConfig:
        """
        Create a validated configuration.

        Args:
            anchor: The anchor point as an AbsoluteCoordinate or a sequence of two or three numbers
            utm_zone: The UTM zone number (1 to 60)
            hemisphere: A Hemisphere or its name ("northern" or "southern")

        Returns:
            A new AnchorConfig

        Raises:
            ValueError: If the zone is out of range, the hemisphere is unknown or the
                anchor does not have two or three components
            TypeError: If the zone is not an integer
        """
        return cls(
            anchor=AbsoluteCoordinate.from_tuple(anchor),
            utm_zone=validate_utm_zone(utm_zone),
            hemisphere=Hemisphere.parse(hemisphere),
        )

    @classmethod
    def from_lat_lon(
        cls,
        lon: float,
        lat: float,
        height: float = 0.0,
        utm_zone: Union[int, None] = None,
    ) -> AnchorConfig:
        """
        Create a configuration anchored on a geographic coordinate.

        Args:
            lon: The anchor longitude in decimal degrees
            lat: The anchor latitude in decimal degrees
            height: The anchor height in meters. Default is 0.
            utm_zone: Force a UTM zone; by default the zone containing the anchor is used

        Returns:
            A new AnchorConfig whose anchor is the projected geographic coordinate
        """
        zone = utm_zone_for(lon, lat) if utm_zone is None else validate_utm_zone(utm_zone)
        hemisphere = Hemisphere.NORTHERN if lat >= 0 else Hemisphere.SOUTHERN
        transformer = Transformer.from_crs(
            LATLON_CRS, _utm_crs_for(zone, hemisphere), always_xy=True
        )
        east, north = transformer.transform(lon, lat)
        return cls.create((east, north, height), zone, hemisphere)

    @classmethod
    def from_json(cls, json: Dict[str, Any]) -> AnchorConfig:
        """
        Create a configuration from a json dictionary.

        The dictionary has an "anchor" list and optional "utm_zone" and "hemisphere"
        keys, as written by to_json.
        """
        if "anchor" not in json:
            raise ValueError("anchor configuration must contain an 'anchor' entry")
        return cls.create(
            anchor=json["anchor"],
            utm_zone=json.get("utm_zone", DEFAULT_UTM_ZONE),
            hemisphere=json.get("hemisphere", Hemisphere.NORTHERN),
        )

    @classmethod
    def from_file(cls, file: Union[str, Path]) -> AnchorConfig:
        """
        Load a configuration from a json file.

        Args:
            file: Path to the json file (as string or Path object)

        Returns:
            A new AnchorConfig

        Raises:
            FileNotFoundError: If the specified file does not exist
            TypeError: If the file does not have a .json extension
        """
        filepath = Path(file)
        if not filepath.is_file():
            raise FileNotFoundError(file)
        elif not filepath.suffix == ".json":
            raise TypeError(
                f"file of type {filepath.suffix} does not appear to be a json file"
            )
        with filepath.open() as f:
            data = json.load(f)

        return cls.from_json(data)

    def to_json(self) -> Dict[str, Any]:
        return {
            "anchor": list(self.anchor),
            "utm_zone": self.utm_zone,
            "hemisphere": self.hemisphere.value,
        }

    @property
    def is_northern(self) -> bool:
        return self.hemisphere.is_northern

    @property
    def utm_crs(self) -> CRS:
        """The projected CRS of this configuration, built once per zone and hemisphere."""
        return _utm_crs_for(self.utm_zone, self.hemisphere)
