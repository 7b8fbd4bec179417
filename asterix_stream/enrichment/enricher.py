import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from asterix_stream.models.record import Record
from asterix_stream.types.enums import CAT034Item, CAT048Item, Category
from asterix_stream.utils.coordinate_transformer import CoordinateTransformer
from asterix_stream.utils.correlator import Correlator


@dataclass
class EnrichmentConfig:
    """Sensor pose and conventions used to place CAT048 plots on WGS-84."""
    sensor_lat_deg: float
    sensor_lon_deg: float
    sensor_alt_m: float = 0.0
    azimuth_zero_ref: str = "north"  # "north" or "east"
    clockwise: bool = True  # Radar azimuth increases clockwise
    azimuth_offset_deg: float = 0.0  # Boresight calibration
    utc_date: Optional[date] = None  # Day of the capture, for I048/140
    altitude_preference: Tuple[str, ...] = (CAT048Item.HEIGHT_3D_RADAR, CAT048Item.FLIGHT_LEVEL)
    track_memory_ttl_s: float = 60.0
    # Follow the sensor position reported in CAT034 I034/120
    use_reported_sensor_position: bool = False

    def __post_init__(self):
        if self.azimuth_zero_ref not in ("north", "east"):
            raise ValueError(f"azimuth_zero_ref must be 'north' or 'east', got {self.azimuth_zero_ref!r}")


def time_of_day_to_iso(utc_date: Optional[date], seconds: Optional[float]) -> Optional[str]:
    """Seconds since midnight on `utc_date` -> ISO-8601 UTC timestamp."""
    if utc_date is None or seconds is None or not math.isfinite(seconds):
        return None
    midnight = datetime(utc_date.year, utc_date.month, utc_date.day, tzinfo=timezone.utc)
    timestamp = midnight + timedelta(milliseconds=math.floor(seconds * 1000))
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def flight_level_to_meters(flight_level: float) -> float:
    """Standard-pressure altitude of a flight level (hundreds of feet)."""
    return flight_level * 100 * CoordinateTransformer.FEET_TO_METERS


class RecordEnricher:
    """
    Geodetic position, timestamp, kinematics and identity correlation
    for decoded records.
    """

    def __init__(self, config: EnrichmentConfig):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.config = config
        self.correlator = Correlator(config.track_memory_ttl_s)
        self.transformer = CoordinateTransformer(
            config.sensor_lat_deg, config.sensor_lon_deg, config.sensor_alt_m
        )
        self._sensor = (config.sensor_lat_deg, config.sensor_lon_deg, config.sensor_alt_m)

    def enrich(self, records: Iterable[Record]) -> List[dict]:
        return [self.enrich_record(record) for record in records]

    def enrich_record(self, record: Record) -> dict:
        items = record.items
        timestamp = None
        position = None
        orientation = None

        if record.category == Category.CAT034.value:
            self._follow_sensor_position(items)

        if record.category == Category.CAT048.value:
            tod = items.get(CAT048Item.TIME_OF_DAY)
            if tod is not None:
                timestamp = time_of_day_to_iso(self.config.utc_date, tod["seconds"])
            position = self._position(items)
            orientation = self._orientation(items)

        keys = self._correlation_keys(items)
        hits = self.correlator.update(keys, self._epoch(timestamp))

        sensor_lat, sensor_lon, sensor_alt = self._sensor
        return {
            "category": record.category,
            "timestamp": timestamp,
            "position": position,
            "orientation": orientation,
            "source": {
                "sensor": {"lat_deg": sensor_lat, "lon_deg": sensor_lon, "alt_m": sensor_alt},
                "azimuth_ref": self.config.azimuth_zero_ref,
                "clockwise": self.config.clockwise,
                "azimuth_offset_deg": self.config.azimuth_offset_deg,
            },
            "correlation": {"keys": keys, "hits": hits},
            "raw": record.to_dict(),
        }

    def compass_azimuth(self, theta_deg: float) -> float:
        """Sensor azimuth -> compass azimuth (0 = North, clockwise)."""
        azimuth = theta_deg + self.config.azimuth_offset_deg
        if not self.config.clockwise:
            azimuth = -azimuth
        if self.config.azimuth_zero_ref == "east":
            azimuth = 90.0 + azimuth
        return azimuth % 360.0

    def _altitude_m(self, items: Dict) -> Optional[float]:
        for source in self.config.altitude_preference:
            if source == CAT048Item.FLIGHT_LEVEL and source in items:
                return flight_level_to_meters(items[source]["flightLevel"])
            # I048/110 is kept raw (undecoded); nothing usable yet
        return None

    def _position(self, items: Dict) -> Optional[dict]:
        polar = items.get(CAT048Item.MEASURED_POSITION_POLAR)
        cartesian = items.get(CAT048Item.MEASURED_POSITION_CARTESIAN)
        if polar is None and cartesian is None:
            return None

        altitude = self._altitude_m(items)
        up = altitude - self._sensor[2] if altitude is not None else 0.0

        if polar is not None:
            lat, lon, alt = self.transformer.polar_to_wgs84(
                polar["range_nm"], self.compass_azimuth(polar["bearing_deg"]), up
            )
        else:
            # X = East, Y = North
            lat, lon, alt = self.transformer.cartesian_to_wgs84(
                cartesian["x_nm"] * CoordinateTransformer.NM_TO_METERS,
                cartesian["y_nm"] * CoordinateTransformer.NM_TO_METERS,
                up,
            )
        return {"lat": lat, "lon": lon, "alt_m": alt}

    @staticmethod
    def _orientation(items: Dict) -> Optional[dict]:
        polar = items.get(CAT048Item.TRACK_VELOCITY_POLAR)
        if polar is not None:
            return {
                "ground_speed_mps": polar["mps"],
                "ground_speed_kts": polar["kts"],
                "course_deg": polar["heading_deg"],
            }

        cartesian = items.get(CAT048Item.TRACK_VELOCITY_CARTESIAN)
        if cartesian is not None:
            vx, vy = cartesian["vx_mps"], cartesian["vy_mps"]
            return {
                "ground_speed_mps": math.hypot(vx, vy),
                "ground_speed_kts": math.hypot(cartesian["vx_kts"], cartesian["vy_kts"]),
                "course_deg": math.degrees(math.atan2(vx, vy)) % 360.0,
            }
        return None

    @staticmethod
    def _correlation_keys(items: Dict) -> List[str]:
        keys = []
        if CAT048Item.TRACK_NUMBER in items:
            keys.append(f"cat48:trk:{items[CAT048Item.TRACK_NUMBER]}")
        if CAT048Item.AIRCRAFT_ADDRESS in items:
            keys.append(f"icao24:{items[CAT048Item.AIRCRAFT_ADDRESS]['icao24']}")
        if CAT048Item.MODE_3A_CODE in items:
            keys.append(f"mode3a:{items[CAT048Item.MODE_3A_CODE]['code_octal']}")
        return keys

    @staticmethod
    def _epoch(timestamp: Optional[str]) -> Optional[float]:
        if timestamp is None:
            return None
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).timestamp()

    def _follow_sensor_position(self, items: Dict) -> None:
        reported = items.get(CAT034Item.POSITION_3D_DATA_SOURCE)
        if not self.config.use_reported_sensor_position or reported is None:
            return
        sensor = (reported["lat_deg"], reported["lon_deg"], float(reported["height_m"]))
        if sensor != self._sensor:
            self.logger.info("Sensor position updated from CAT034: %.6f, %.6f, %.1f m", *sensor)
            self._sensor = sensor
            self.transformer = CoordinateTransformer(*sensor)
