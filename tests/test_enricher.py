from datetime import date

import pytest

from asterix_stream.enrichment.enricher import (
    EnrichmentConfig,
    RecordEnricher,
    flight_level_to_meters,
    time_of_day_to_iso,
)
from asterix_stream.models.record import Record
from asterix_stream.utils.coordinate_transformer import CoordinateTransformer
from asterix_stream.utils.correlator import Correlator

SENSOR_LAT = 41.3
SENSOR_LON = 2.1


def _cat048(**items):
    return Record(category=48, length=0, fspec_hex="", block_offset=0, items=dict(items))


def _record(category, items):
    return Record(category=category, length=0, fspec_hex="", block_offset=0, items=items)


@pytest.fixture
def config():
    return EnrichmentConfig(sensor_lat_deg=SENSOR_LAT, sensor_lon_deg=SENSOR_LON, utc_date=date(2025, 8, 12))


@pytest.fixture
def enricher(config):
    return RecordEnricher(config)


class TestCorrelator:
    def test_seen_count_and_expiry(self):
        correlator = Correlator(ttl_s=60)

        assert correlator.update(["cat48:trk:7"], now=0) == [{"id": "cat48:trk:7", "seenCount": 1}]
        assert correlator.update(["cat48:trk:7"], now=30) == [{"id": "cat48:trk:7", "seenCount": 2}]
        # Not seen for longer than the TTL: counting restarts
        assert correlator.update(["cat48:trk:7"], now=200) == [{"id": "cat48:trk:7", "seenCount": 1}]

    def test_empty_keys_skipped(self):
        correlator = Correlator()

        hits = correlator.update([None, "", "icao24:AABBCC"], now=0)

        assert hits == [{"id": "icao24:AABBCC", "seenCount": 1}]
        assert len(correlator) == 1

    def test_prune(self):
        correlator = Correlator(ttl_s=10)
        correlator.update(["a"], now=0)
        correlator.update(["b"], now=5)

        correlator.prune(now=12)

        assert "a" not in correlator
        assert "b" in correlator


class TestHelpers:
    def test_time_of_day_to_iso(self):
        assert time_of_day_to_iso(date(2025, 8, 12), 3600) == "2025-08-12T01:00:00.000Z"
        assert time_of_day_to_iso(date(2025, 8, 12), 0.5078125) == "2025-08-12T00:00:00.507Z"

    def test_time_of_day_without_date(self):
        assert time_of_day_to_iso(None, 3600) is None

    def test_flight_level_to_meters(self):
        assert flight_level_to_meters(100) == pytest.approx(3048.0)

    def test_invalid_azimuth_reference(self):
        with pytest.raises(ValueError):
            EnrichmentConfig(sensor_lat_deg=0, sensor_lon_deg=0, azimuth_zero_ref="south")


class TestCoordinateTransformer:
    def test_sensor_origin(self):
        transformer = CoordinateTransformer(SENSOR_LAT, SENSOR_LON, 0.0)

        lat, lon, height = transformer.cartesian_to_wgs84(0.0, 0.0, 0.0)

        assert lat == pytest.approx(SENSOR_LAT, abs=1e-7)
        assert lon == pytest.approx(SENSOR_LON, abs=1e-7)
        assert height == pytest.approx(0.0, abs=1e-3)

    def test_polar_east(self):
        transformer = CoordinateTransformer(SENSOR_LAT, SENSOR_LON, 0.0)

        lat, lon, _ = transformer.polar_to_wgs84(10.0, 90.0)

        assert lat == pytest.approx(SENSOR_LAT, abs=0.005)
        assert lon > SENSOR_LON


class TestRecordEnricher:
    @pytest.mark.parametrize(
        "zero_ref,clockwise,offset,theta,expected",
        [
            ("north", True, 0.0, 30.0, 30.0),
            ("north", False, 0.0, 30.0, 330.0),
            ("east", True, 0.0, 30.0, 120.0),
            ("east", False, 0.0, 30.0, 60.0),
            ("north", True, 350.0, 20.0, 10.0),
        ]
    )
    def test_compass_azimuth(self, zero_ref, clockwise, offset, theta, expected):
        enricher = RecordEnricher(EnrichmentConfig(
            sensor_lat_deg=SENSOR_LAT, sensor_lon_deg=SENSOR_LON,
            azimuth_zero_ref=zero_ref, clockwise=clockwise, azimuth_offset_deg=offset,
        ))

        assert enricher.compass_azimuth(theta) == pytest.approx(expected)

    def test_polar_position_north(self, enricher):
        record = _cat048(**{"I048/040": {"range_nm": 10.0, "bearing_deg": 0.0}})

        position = enricher.enrich_record(record)["position"]

        # 10 NM is close to 10 arc minutes of latitude
        assert position["lat"] == pytest.approx(SENSOR_LAT + 10 / 60, abs=0.005)
        assert position["lon"] == pytest.approx(SENSOR_LON, abs=1e-6)

    def test_cartesian_position(self, enricher):
        record = _cat048(**{"I048/042": {"x_nm": 0.0, "y_nm": -10.0}})

        position = enricher.enrich_record(record)["position"]

        assert position["lat"] == pytest.approx(SENSOR_LAT - 10 / 60, abs=0.005)

    def test_altitude_from_flight_level(self, enricher):
        record = _cat048(**{
            "I048/040": {"range_nm": 1.0, "bearing_deg": 0.0},
            "I048/090": {"raw": 400, "flightLevel": 100.0},
        })

        position = enricher.enrich_record(record)["position"]

        assert position["alt_m"] == pytest.approx(3048.0, abs=5.0)

    def test_timestamp(self, enricher):
        record = _cat048(**{"I048/140": {"raw": 460800, "seconds": 3600.0}})

        assert enricher.enrich_record(record)["timestamp"] == "2025-08-12T01:00:00.000Z"

    def test_orientation_from_polar_velocity(self, enricher):
        record = _cat048(**{"I048/220": {"mps": 231.5, "kts": 450.0, "heading_deg": 270.0}})

        orientation = enricher.enrich_record(record)["orientation"]

        assert orientation == {"ground_speed_mps": 231.5, "ground_speed_kts": 450.0, "course_deg": 270.0}

    def test_orientation_from_cartesian_velocity(self, enricher):
        record = _cat048(**{"I048/200": {"vx_mps": 100.0, "vy_mps": 0.0, "vx_kts": 194.4, "vy_kts": 0.0}})

        orientation = enricher.enrich_record(record)["orientation"]

        assert orientation["ground_speed_mps"] == pytest.approx(100.0)
        assert orientation["course_deg"] == pytest.approx(90.0)

    def test_no_position_without_measured_position(self, enricher):
        enriched = enricher.enrich_record(_cat048(**{"I048/010": {"sac": 1, "sic": 2}}))

        assert enriched["position"] is None
        assert enriched["orientation"] is None
        assert enriched["raw"]["items"] == {"I048/010": {"sac": 1, "sic": 2}}

    def test_correlation(self, enricher):
        items = {
            "I048/161": 7,
            "I048/240": {"icao24": "AABBCC"},
            "I048/070": {"code_octal": "7700", "raw": 0xFC0},
        }

        first, second = enricher.enrich([_cat048(**items), _cat048(**items)])

        assert first["correlation"]["keys"] == ["cat48:trk:7", "icao24:AABBCC", "mode3a:7700"]
        assert [hit["seenCount"] for hit in second["correlation"]["hits"]] == [2, 2, 2]

    def test_sensor_position_from_cat034(self):
        enricher = RecordEnricher(EnrichmentConfig(
            sensor_lat_deg=SENSOR_LAT, sensor_lon_deg=SENSOR_LON, use_reported_sensor_position=True,
        ))
        service = _record(34, {"I034/120": {"height_m": 100, "lat_deg": 40.0, "lon_deg": 3.0}})
        plot = _cat048(**{"I048/040": {"range_nm": 0.0, "bearing_deg": 0.0}})

        enricher.enrich_record(service)
        enriched = enricher.enrich_record(plot)

        assert enriched["source"]["sensor"] == {"lat_deg": 40.0, "lon_deg": 3.0, "alt_m": 100.0}
        assert enriched["position"]["lat"] == pytest.approx(40.0, abs=1e-6)

    def test_reported_sensor_position_ignored_by_default(self, enricher):
        service = _record(34, {"I034/120": {"height_m": 100, "lat_deg": 40.0, "lon_deg": 3.0}})

        enriched = enricher.enrich_record(service)

        assert enriched["source"]["sensor"]["lat_deg"] == SENSOR_LAT
        assert enriched["position"] is None
