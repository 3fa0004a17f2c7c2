"""
Unit tests for the fixed-point Coordinate value type.
"""

import dataclasses
import math

import pytest

from geomesh import (
    Coordinate,
    CoordinateField,
    GeoMeshError,
    InvalidLiteralError,
    OutOfRangeError,
)
from geomesh.model.coordinate import LAT_RANGE, LON_RANGE, round_half_away


@pytest.fixture
def kumamoto_station():
    """熊本駅"""
    return Coordinate.from_fixed_point(327_903_862, 1_306_883_252)


class TestConstruction:
    def test_from_fixed_point_format(self, kumamoto_station):
        assert kumamoto_station.format() == "Lat: 32.7903862, Lon: 130.6883252"

    def test_from_degrees_format(self):
        tokyo = Coordinate.from_degrees(35.6895, 139.6917)
        assert tokyo.format() == "Lat: 35.6895000, Lon: 139.6917000"

    def test_str_matches_format(self, kumamoto_station):
        assert str(kumamoto_station) == kumamoto_station.format()

    def test_fixed_point_accessors_are_exact(self, kumamoto_station):
        assert kumamoto_station.lat_fixed_point() == 327_903_862
        assert kumamoto_station.lon_fixed_point() == 1_306_883_252

    def test_degree_accessors(self, kumamoto_station):
        assert kumamoto_station.lat_degrees() == 327_903_862 / 10_000_000.0
        assert kumamoto_station.lon_degrees() == 1_306_883_252 / 10_000_000.0

    def test_negative_format_shows_sign(self):
        c = Coordinate.from_fixed_point(-1, -1_800_000_000)
        assert c.format() == "Lat: -0.0000001, Lon: -180.0000000"

    def test_zero_format(self):
        assert Coordinate.from_fixed_point(0, 0).format() == "Lat: 0.0000000, Lon: 0.0000000"


class TestRange:
    def test_out_of_range_reports_latitude_first(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_fixed_point(1_000_000_000, 2_000_000_000)
        err = exc_info.value
        assert err.field is CoordinateField.LATITUDE
        assert err.value == 1_000_000_000
        assert err.valid_range == LAT_RANGE

    def test_out_of_range_longitude(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_fixed_point(0, 1_800_000_001)
        assert exc_info.value.field is CoordinateField.LONGITUDE
        assert exc_info.value.valid_range == LON_RANGE

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (900_000_000, 1_800_000_000),
            (-900_000_000, -1_800_000_000),
            (900_000_000, -1_800_000_000),
            (-900_000_000, 1_800_000_000),
        ],
    )
    def test_endpoints_are_valid(self, lat, lon):
        c = Coordinate.from_fixed_point(lat, lon)
        assert (c.lat_fixed_point(), c.lon_fixed_point()) == (lat, lon)

    @pytest.mark.parametrize(
        "lat,lon,field",
        [
            (900_000_001, 0, CoordinateField.LATITUDE),
            (-900_000_001, 0, CoordinateField.LATITUDE),
            (0, 1_800_000_001, CoordinateField.LONGITUDE),
            (0, -1_800_000_001, CoordinateField.LONGITUDE),
        ],
    )
    def test_just_outside_endpoints(self, lat, lon, field):
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_fixed_point(lat, lon)
        assert exc_info.value.field is field

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            Coordinate.from_fixed_point(0, 2_000_000_000)
        assert issubclass(OutOfRangeError, GeoMeshError)

    def test_from_degrees_propagates_range_error(self):
        # 90.00000006 -> 900000000.6 -> 900000001
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_degrees(90.00000006, 0.0)
        assert exc_info.value.field is CoordinateField.LATITUDE

    def test_from_degrees_endpoints(self):
        c = Coordinate.from_degrees(-90.0, 180.0)
        assert (c.lat_fixed_point(), c.lon_fixed_point()) == (-900_000_000, 1_800_000_000)

    @pytest.mark.parametrize(
        "lat,lon,field",
        [
            (math.nan, 0.0, CoordinateField.LATITUDE),
            (0.0, math.inf, CoordinateField.LONGITUDE),
            (-math.inf, math.nan, CoordinateField.LATITUDE),
        ],
    )
    def test_non_finite_degrees(self, lat, lon, field):
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_degrees(lat, lon)
        assert exc_info.value.field is field

    @pytest.mark.parametrize(
        "lat,lon,field",
        [
            (1e305, 0.0, CoordinateField.LATITUDE),
            (0.0, -1e305, CoordinateField.LONGITUDE),
            (1.7e308, 0.0, CoordinateField.LATITUDE),
        ],
    )
    def test_degrees_overflowing_scale(self, lat, lon, field):
        # 10^7 倍で inf になる有限値
        with pytest.raises(OutOfRangeError) as exc_info:
            Coordinate.from_degrees(lat, lon)
        assert exc_info.value.field is field
        assert exc_info.value.value == (lat if field is CoordinateField.LATITUDE else lon)

    @pytest.mark.parametrize("bad", [1.5, "1", True, None])
    def test_fixed_point_requires_integers(self, bad):
        with pytest.raises(TypeError):
            Coordinate.from_fixed_point(bad, 0)

    def test_direct_construction_is_validated(self):
        with pytest.raises(OutOfRangeError):
            Coordinate(1_000_000_000, 0)


class TestRounding:
    @pytest.mark.parametrize(
        "x,expected",
        [(2.5, 3), (-2.5, -3), (0.5, 1), (-0.5, -1), (1.4999, 1), (-1.4999, -1), (0.0, 0), (7.0, 7)],
    )
    def test_round_half_away_from_zero(self, x, expected):
        assert round_half_away(x) == expected

    def test_from_degrees_ties_away_from_zero(self):
        # 1/256 度 = 39062.5 decimicro
        c = Coordinate.from_degrees(0.00390625, -0.00390625)
        assert (c.lat_fixed_point(), c.lon_fixed_point()) == (39_063, -39_063)

    def test_differs_from_builtin_round(self):
        # round() は偶数丸め
        assert round(2.5) == 2
        assert round_half_away(2.5) == 3

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (35.6895, 139.6917),
            (-33.8688, 151.2093),
            (0.0000001, -0.0000001),
            (89.9999999, -179.9999999),
            (26.2124, 127.6809),
        ],
    )
    def test_degree_round_trip_within_one_unit(self, lat, lon):
        c = Coordinate.from_degrees(lat, lon)
        assert abs(c.lat_degrees() - lat) <= 1e-7
        assert abs(c.lon_degrees() - lon) <= 1e-7


class TestValueSemantics:
    def test_structural_equality(self):
        assert Coordinate.from_degrees(35.6895, 139.6917) == Coordinate.from_fixed_point(
            356_895_000, 1_396_917_000
        )
        assert Coordinate.from_fixed_point(1, 2) != Coordinate.from_fixed_point(2, 1)

    def test_hashable(self):
        a = Coordinate.from_fixed_point(1, 2)
        b = Coordinate.from_fixed_point(1, 2)
        assert len({a, b}) == 1

    def test_immutable(self, kumamoto_station):
        with pytest.raises(dataclasses.FrozenInstanceError):
            kumamoto_station.lat = 0


class TestLiteral:
    def test_literal_valid(self):
        co = Coordinate.literal(327_903_862, 1_306_883_252)
        assert co.lat_fixed_point() == 327_903_862
        assert co == Coordinate.from_fixed_point(327_903_862, 1_306_883_252)

    @pytest.mark.parametrize("lat,lon", [(1_000_000_000, 0), (0, -2_000_000_000)])
    def test_literal_aborts(self, lat, lon):
        with pytest.raises(InvalidLiteralError):
            Coordinate.literal(lat, lon)

    def test_literal_error_escapes_exception_handlers(self):
        with pytest.raises(InvalidLiteralError):
            try:
                Coordinate.literal(1_000_000_000, 0)
            except Exception:
                pytest.fail("literal error must not be an Exception")
