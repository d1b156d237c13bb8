"""Coordinate Reference System (CRS) constants and helpers used throughout geoanchor.

This module defines the geographic CRS and builds the WGS84/UTM projected CRS
for a given zone and hemisphere:
- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326)
- utm_crs: WGS84/UTM zone N (EPSG:326xx) or S (EPSG:327xx)
"""

from pyproj import CRS

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# Range: latitude [-90, 90], longitude [-180, 180]
LATLON_CRS = CRS(4326)

MIN_UTM_ZONE = 1
MAX_UTM_ZONE = 60

_UTM_NORTH_EPSG_BASE = 32600
_UTM_SOUTH_EPSG_BASE = 32700


def validate_utm_zone(zone: int) -> int:
    if isinstance(zone, bool) or not isinstance(zone, int):
        raise TypeError(f"utm zone must be an integer but got {zone!r}")
    if not MIN_UTM_ZONE <= zone <= MAX_UTM_ZONE:
        raise ValueError(
            f"utm zone must be between {MIN_UTM_ZONE} and {MAX_UTM_ZONE} but got {zone}"
        )
    return zone


def utm_crs(zone: int, northern: bool = True) -> CRS:
    """
    Build the WGS84/UTM projected CRS for a zone and hemisphere.

    Args:
        zone: The UTM zone number (1 to 60)
        northern: True for the northern hemisphere, False for the southern one

    Returns:
        The pyproj CRS, e.g. EPSG:32632 for zone 32 north

    Examples:
        >>> utm_crs(32).to_epsg()
        32632
        >>> utm_crs(33, northern=False).to_epsg()
        32733
    """
    validate_utm_zone(zone)
    base = _UTM_NORTH_EPSG_BASE if northern else _UTM_SOUTH_EPSG_BASE
    return CRS(base + zone)


def utm_zone_for(lon: float, lat: float) -> int:
    """
    Find the UTM zone containing a geographic coordinate.

    Follows the standard 6 degree zones and the irregular zones around southern
    Norway (32V) and Svalbard (31X, 33X, 35X, 37X).

    Args:
        lon: The longitude in decimal degrees
        lat: The latitude in decimal degrees

    Returns:
        The UTM zone number (1 to 60)
    """
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"longitude must be between -180 and 180 but got {lon}")
    if not -80.0 <= lat <= 84.0:
        raise ValueError(f"latitude must be between -80 and 84 for utm but got {lat}")

    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        return 32

    if 72.0 <= lat <= 84.0 and lon >= 0.0:
        if lon < 9.0:
            return 31
        elif lon < 21.0:
            return 33
        elif lon < 33.0:
            return 35
        elif lon < 42.0:
            return 37

    # 180 degrees wraps back into the last zone
    return min(int((lon + 180.0) // 6.0) + 1, MAX_UTM_ZONE)
