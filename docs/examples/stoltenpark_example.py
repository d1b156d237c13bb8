"""
# Stoltenpark Example

An example of placing a geographic coordinate into a float precision scene and reading it back
"""


def main():
    import logging

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("stoltenpark_example")

    """
    First, we build the anchor configuration.
    The default configuration anchors the scene in Hamburg, Germany, which lies in UTM zone 32 north.
    Any point we want to place in the scene has to be closer than 100 km to the anchor on every axis.
    """

    from geoanchor.constructs.anchor import AnchorConfig

    config = AnchorConfig()

    """
    The transformer is a plain object; anything that needs to convert coordinates gets it passed in.
    """

    from geoanchor.transforms.coordinate_transformer import CoordinateTransformer

    transformer = CoordinateTransformer(config)

    """
    Now let's take the geographic coordinates of the Stoltenpark:
    """

    from geoanchor.constructs.coordinate import GeographicCoordinate

    stoltenpark = GeographicCoordinate(longitude=10.028691, latitude=53.551218)
    log.info(
        f"The original geographic coordinates: longitude: {stoltenpark.longitude}, latitude: {stoltenpark.latitude}"
    )

    utm = transformer.to_utm(stoltenpark)
    log.info(f"The utm coordinates of the Stoltenpark: x: {utm.east}, y: {utm.north}")

    """
    Without a terrain the local coordinate gets a default height of 0 (and the transformer logs a warning).
    """

    local = transformer.to_local(stoltenpark)
    log.info(f"The local coordinates of the Stoltenpark: x: {local.x}, y: {local.y}, z: {local.z}")

    """
    Reading the local coordinate back only loses what the float32 narrowing dropped,
    which is far below a millimeter this close to the anchor.
    """

    log.info(f"Geographic coordinates from local coordinates: {transformer.to_lat_lon(local)}")
    log.info(f"Geographic coordinates from utm coordinates: {transformer.to_lat_lon(utm)}")

    """
    With a terrain, 2D positions are placed on the ground:
    """

    import numpy as np

    from geoanchor.transforms.terrain import HeightmapTerrain

    terrain = HeightmapTerrain(
        np.full((11, 11), 6.0),
        origin_east=utm.east - 500,
        origin_north=utm.north - 500,
        cell_size=100,
    )
    grounded = CoordinateTransformer(config, terrain=terrain)
    log.info(f"The local coordinates on the terrain: {grounded.to_local(stoltenpark)}")


if __name__ == "__main__":
    main()
