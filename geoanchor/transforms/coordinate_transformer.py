from __future__ import annotations

import json
import logging
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd
from pyproj import CRS, Transformer
import shapely
from shapely.geometry import Polygon, box, mapping

from geoanchor.constructs.anchor import AnchorConfig
from geoanchor.constructs.coordinate import (
    AbsoluteCoordinate,
    GeographicCoordinate,
    LocalCoordinate,
)
from geoanchor.transforms.anchor_transform import AnchorRelativeTransform
from geoanchor.transforms.projection import ProjectionInterface, UtmProjection
from geoanchor.transforms.terrain import TerrainInterface
from geoanchor.utils.crs import LATLON_CRS

log = logging.getLogger(__name__)

DEFAULT_HEIGHT = 0.0

# maximum edge length when reprojecting the anchor window, in meters
WINDOW_SEGMENT_LENGTH = 1000.0

ProjectedInput = Union[AbsoluteCoordinate, Sequence[float]]


class CoordinateTransformer:
    """
    Converts between geographic, projected (UTM) and local engine coordinates.

    The transformer composes three collaborators: a projection service between WGS84 and
    the configured UTM zone, the anchor-relative transform into single precision local
    coordinates, and an optional terrain that supplies heights for 2D positions.

    It is an ordinary object; create one per anchor configuration and pass it to
    whatever needs it.

    Args:
        config: The anchor, zone and hemisphere. Default is the Hamburg configuration.
        terrain: An optional terrain used to derive heights for 2D positions
        projection: The projection service. Default is a UtmProjection for the config.

    Attributes:
        config: The immutable anchor configuration
        anchor_transform: The anchor-relative transform
        projection: The projection service
        terrain: The terrain, or None

    Examples:
        >>> from geoanchor.constructs.anchor import AnchorConfig
        >>> from geoanchor.constructs.coordinate import GeographicCoordinate
        >>> from geoanchor.transforms.coordinate_transformer import CoordinateTransformer
        >>>
        >>> transformer = CoordinateTransformer(AnchorConfig())
        >>> stoltenpark = GeographicCoordinate(longitude=10.028691, latitude=53.551218)
        >>> local = transformer.to_local(stoltenpark)
        >>> transformer.to_lat_lon(local)
    """

    def __init__(
        self,
        config: AnchorConfig = AnchorConfig(),
        terrain: Optional[TerrainInterface] = None,
        projection: Optional[ProjectionInterface] = None,
    ):
        config = AnchorConfig.create(*config)

        self.config = config
        self.anchor_transform = AnchorRelativeTransform(config.anchor)
        self.projection = (
            projection
            if projection is not None
            else UtmProjection(config.utm_zone, config.hemisphere)
        )
        self.terrain = terrain

    def __repr__(self):
        return (
            f"CoordinateTransformer(anchor={tuple(self.config.anchor)}, "
            f"utm_zone={self.config.utm_zone}, hemisphere={self.config.hemisphere.value})"
        )

    @property
    def crs(self) -> CRS:
        return self.projection.crs

    def to_lat_lon(
        self, p: Union[LocalCoordinate, ProjectedInput]
    ) -> GeographicCoordinate:
        """
        Convert a local or projected coordinate to a geographic coordinate.

        Args:
            p: A LocalCoordinate, an AbsoluteCoordinate or a projected (east, north) pair

        Returns:
            The WGS84 longitude and latitude
        """
        if isinstance(p, LocalCoordinate):
            absolute = self.anchor_transform.to_absolute(p)
        else:
            absolute = AbsoluteCoordinate.from_tuple(p)

        return self.projection.projected_to_geographic(absolute)

    def to_utm(self, geographic: GeographicCoordinate) -> AbsoluteCoordinate:
        """
        Convert a geographic coordinate to a projected coordinate with a height of 0.

        Args:
            geographic: The WGS84 longitude and latitude

        Returns:
            The projected coordinate
        """
        return self.projection.geographic_to_projected(
            geographic.longitude, geographic.latitude
        )

    def local_to_utm(self, local: LocalCoordinate) -> AbsoluteCoordinate:
        """Convert a local coordinate to a projected coordinate, height included."""
        return self.anchor_transform.to_absolute(local)

    def to_local(
        self, p: Union[GeographicCoordinate, ProjectedInput]
    ) -> LocalCoordinate:
        """
        Convert a geographic or projected coordinate to a local coordinate.

        Geographic coordinates and projected (east, north) pairs have no height; it is
        taken from the terrain. Without a terrain height the default height of 0 is used
        and a warning is logged.

        Args:
            p: A GeographicCoordinate, an AbsoluteCoordinate, a projected (east, north)
                pair or a projected (east, north, height) triple

        Returns:
            The local coordinate

        Raises:
            OutOfRangeError: If the point is 100 km or more from the anchor on any axis
            TypeError: If the coordinate is already a LocalCoordinate
        """
        if isinstance(p, GeographicCoordinate):
            projected = self.to_utm(p)
            return self._to_local_2d(projected.east, projected.north)
        elif isinstance(p, LocalCoordinate):
            raise TypeError("coordinate is already a LocalCoordinate")

        values = tuple(p)
        if len(values) == 2 and not isinstance(p, AbsoluteCoordinate):
            return self._to_local_2d(float(values[0]), float(values[1]))

        return self.anchor_transform.to_local(AbsoluteCoordinate.from_tuple(values))

    def _to_local_2d(self, east: float, north: float) -> LocalCoordinate:
        height = self.terrain_height(east, north)

        if height is None:
            log.warning(
                "No terrain height available; the requested local coordinate has a default height of %s",
                DEFAULT_HEIGHT,
            )
            height = DEFAULT_HEIGHT

        return self.anchor_transform.to_local(AbsoluteCoordinate(east, north, height))

    def terrain_height(self, east: float, north: float) -> Optional[float]:
        """
        Get the terrain height at a projected position.

        Args:
            east: The easting in meters
            north: The northing in meters

        Returns:
            The terrain height, or None if there is no terrain or no height at the position
        """
        if self.terrain is None:
            return None

        return self.terrain.height_at(east, north)

    def local_frame_from_dataframe(
        self,
        dataframe: pd.DataFrame,
        lat_column: str = "latitude",
        lon_column: str = "longitude",
        height_column: Optional[str] = None,
    ) -> pd.DataFrame:
        """
        Convert a DataFrame of geographic points to local coordinates.

        The projection and range check run on whole columns. When no height column is
        given, heights come from the terrain, defaulting to 0.

        Args:
            dataframe: A pandas DataFrame containing WGS84 coordinates
            lat_column: The name of the column containing latitude values. Default is "latitude".
            lon_column: The name of the column containing longitude values. Default is "longitude".
            height_column: The name of a column with projected heights in meters. Default is None.

        Returns:
            A DataFrame with float32 columns x, y and z, indexed like the input

        Raises:
            ValueError: If the specified columns are not found in the DataFrame
            OutOfRangeError: If any point is 100 km or more from the anchor on any axis

        Examples:
            >>> import pandas as pd
            >>> df = pd.DataFrame({
            ...     'latitude': [53.551218, 53.552],
            ...     'longitude': [10.028691, 10.03]
            ... })
            >>> local = transformer.local_frame_from_dataframe(df)
            >>> local.columns.to_list()
            ['x', 'y', 'z']
        """
        required = [lat_column, lon_column] + (
            [height_column] if height_column is not None else []
        )
        missing = [c for c in required if c not in dataframe.columns]
        if missing:
            raise ValueError(f"Could not find columns {missing} in the dataframe")

        east, north = self.projection.geographic_to_projected_array(
            dataframe[lon_column].to_numpy(dtype=np.float64),
            dataframe[lat_column].to_numpy(dtype=np.float64),
        )

        if height_column is not None:
            height = dataframe[height_column].to_numpy(dtype=np.float64)
        else:
            heights = [self.terrain_height(e, n) for e, n in zip(east, north)]
            n_missing = sum(h is None for h in heights)
            if n_missing:
                log.warning(
                    "No terrain height available for %s of %s points; using a default height of %s",
                    n_missing,
                    len(heights),
                    DEFAULT_HEIGHT,
                )
            height = np.array(
                [DEFAULT_HEIGHT if h is None else h for h in heights], dtype=np.float64
            )

        points = np.column_stack([east, north, height])
        local = self.anchor_transform.to_local_array(points)

        return pd.DataFrame(local, columns=["x", "y", "z"], index=dataframe.index)

    def anchor_window(self, crs: Optional[CRS] = None) -> Polygon:
        """
        Get the horizontal region around the anchor that can be converted to local
        coordinates.

        Args:
            crs: The CRS of the returned polygon. Default is the projected CRS of the
                transformer; any other CRS gets a densified, reprojected polygon.

        Returns:
            A Shapely Polygon of the window. Its boundary itself is out of range.
        """
        anchor = self.anchor_transform.anchor
        limit = self.anchor_transform.max_offset
        polygon = box(
            anchor.east - limit,
            anchor.north - limit,
            anchor.east + limit,
            anchor.north + limit,
        )

        if crs is None:
            return polygon

        crs = CRS(crs)
        if crs == self.crs:
            return polygon

        transformer = Transformer.from_crs(self.crs, crs, always_xy=True)

        def project(xy: np.ndarray) -> np.ndarray:
            return np.column_stack(transformer.transform(xy[:, 0], xy[:, 1]))

        return shapely.transform(polygon.segmentize(WINDOW_SEGMENT_LENGTH), project)

    def anchor_window_geojson(self) -> str:
        """
        Get the anchor window as a GeoJSON string in WGS84 (EPSG:4326).

        Examples:
            >>> with open('window.geojson', 'w') as f:
            ...     f.write(transformer.anchor_window_geojson())
        """
        return json.dumps(mapping(self.anchor_window(LATLON_CRS)))
