import math
import numpy as np
from typing import Tuple
from dataclasses import dataclass


@dataclass
class WGS84Coordinates:
    """WGS-84 Geodesic coordinates (latitude, longitude, height)"""
    lat: float  # Latitude in radians
    lon: float  # Longitude in radians
    height: float  # Height in meters


@dataclass
class CartesianCoordinates:
    """Cartesian coordinates (X, Y, Z)"""
    x: float  # X in meters
    y: float  # Y in meters
    z: float  # Z in meters


class CoordinateTransformer:
    """
    Sensor-relative positions to WGS-84.

    Local frame of the sensor: X = East, Y = North, Z = Up (meters).
    Azimuths handed to this class are compass azimuths (0 = North, clockwise).
    """

    # WGS-84 ellipsoid parameters
    A = 6378137.0  # Semi-major axis (meters)
    B = 6356752.3142  # Semi-minor axis (meters)
    E2 = 0.00669437999013  # Eccentricity squared

    # Conversion constants
    FEET_TO_METERS = 0.3048
    NM_TO_METERS = 1852.0
    DEGS_TO_RADS = math.pi / 180.0
    RADS_TO_DEGS = 180.0 / math.pi

    # Numerical precision
    ALMOST_ZERO = 1e-10
    REQUIRED_PRECISION = 1e-8

    def __init__(self, sensor_lat_deg: float, sensor_lon_deg: float, sensor_height_m: float):
        self.sensor_position = WGS84Coordinates(
            lat=sensor_lat_deg * self.DEGS_TO_RADS,
            lon=sensor_lon_deg * self.DEGS_TO_RADS,
            height=sensor_height_m
        )

        # Pre-calculate transformation matrices for the sensor
        self._translation = self._calculate_translation_matrix(self.sensor_position)
        self._rotation = self._calculate_rotation_matrix(
            self.sensor_position.lat,
            self.sensor_position.lon
        )

    @staticmethod
    def _calculate_rotation_matrix(lat: float, lon: float) -> np.ndarray:
        """ECEF -> ENU rotation at (lat, lon), radians."""
        return np.array([
            [-math.sin(lon), math.cos(lon), 0],
            [-math.sin(lat) * math.cos(lon), -math.sin(lat) * math.sin(lon), math.cos(lat)],
            [math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)]
        ])

    def _calculate_translation_matrix(self, coords: WGS84Coordinates) -> np.ndarray:
        """Geocentric position of `coords` as a 3x1 vector."""
        nu = self.A / math.sqrt(1 - self.E2 * math.sin(coords.lat) ** 2)

        return np.array([
            [(nu + coords.height) * math.cos(coords.lat) * math.cos(coords.lon)],
            [(nu + coords.height) * math.cos(coords.lat) * math.sin(coords.lon)],
            [(nu * (1 - self.E2) + coords.height) * math.sin(coords.lat)]
        ])

    def local_to_geocentric(self, local: CartesianCoordinates) -> CartesianCoordinates:
        input_vector = np.array([[local.x], [local.y], [local.z]])

        # geocentric = R^T * local + T
        result = self._rotation.T @ input_vector + self._translation

        return CartesianCoordinates(
            x=result[0, 0],
            y=result[1, 0],
            z=result[2, 0]
        )

    def geocentric_to_geodesic(self, geocentric: CartesianCoordinates) -> WGS84Coordinates:
        """
        Convert geocentric cartesian to WGS-84 geodesic coordinates.
        Iterative method from EUROCONTROL TransLib.
        """
        # Point on the polar axis
        if abs(geocentric.x) < self.ALMOST_ZERO and abs(geocentric.y) < self.ALMOST_ZERO:
            lat = math.copysign(math.pi / 2.0, geocentric.z) if geocentric.z else math.pi / 2.0
            return WGS84Coordinates(lat=lat, lon=0.0, height=abs(geocentric.z) - self.B)

        d_xy = math.sqrt(geocentric.x ** 2 + geocentric.y ** 2)

        # Initial latitude estimate
        lat = math.atan(
            (geocentric.z / d_xy) /
            (1 - (self.A * self.E2) / math.sqrt(d_xy ** 2 + geocentric.z ** 2))
        )
        nu = self.A / math.sqrt(1 - self.E2 * math.sin(lat) ** 2)
        height = (d_xy / math.cos(lat)) - nu

        lat_prev = lat + 0.1 if lat >= 0 else lat - 0.1
        loop_count = 0

        while abs(lat - lat_prev) > self.REQUIRED_PRECISION and loop_count < 50:
            loop_count += 1
            lat_prev = lat

            lat = math.atan(
                (geocentric.z * (1 + height / nu)) /
                (d_xy * ((1 - self.E2) + (height / nu)))
            )

            nu = self.A / math.sqrt(1 - self.E2 * math.sin(lat) ** 2)
            height = d_xy / math.cos(lat) - nu

        lon = math.atan2(geocentric.y, geocentric.x)

        return WGS84Coordinates(lat=lat, lon=lon, height=height)

    def cartesian_to_wgs84(self, x_m: float, y_m: float, z_m: float = 0.0) -> Tuple[float, float, float]:
        """
        Local Cartesian (East, North, Up in meters) -> (lat_deg, lon_deg, height_m).
        """
        geocentric = self.local_to_geocentric(CartesianCoordinates(x=x_m, y=y_m, z=z_m))
        wgs84 = self.geocentric_to_geodesic(geocentric)

        return (
            wgs84.lat * self.RADS_TO_DEGS,
            wgs84.lon * self.RADS_TO_DEGS,
            wgs84.height
        )

    def polar_to_wgs84(self, rho_nm: float, azimuth_deg: float, up_m: float = 0.0) -> Tuple[float, float, float]:
        """
        Range / compass azimuth from the sensor -> (lat_deg, lon_deg, height_m).
        The range is taken as horizontal; `up_m` is the height above the sensor.
        """
        rho_m = rho_nm * self.NM_TO_METERS
        azimuth = azimuth_deg * self.DEGS_TO_RADS

        east = rho_m * math.sin(azimuth)
        north = rho_m * math.cos(azimuth)
        return self.cartesian_to_wgs84(east, north, up_m)
