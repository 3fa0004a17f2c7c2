from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import math
import operator

from .errors import CoordinateField, OutOfRangeError, InvalidLiteralError

# 10^-7 度単位 (decimicro)
SCALE = 10_000_000
LAT_RANGE: Tuple[int, int] = (-900_000_000, 900_000_000)
LON_RANGE: Tuple[int, int] = (-1_800_000_000, 1_800_000_000)

_RANGES = {
    CoordinateField.LATITUDE: LAT_RANGE,
    CoordinateField.LONGITUDE: LON_RANGE,
}


def _as_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return operator.index(value)


def _out_of_range(field: CoordinateField, value) -> bool:
    low, high = _RANGES[field]
    return not (low <= value <= high)


def round_half_away(x: float) -> int:
    """四捨五入（0.5 は 0 から遠い方へ）"""
    a = abs(x)
    n = math.floor(a)
    if a - n >= 0.5:
        n += 1
    return n if x >= 0 else -n


def degrees_to_fixed_point(deg: float, field: CoordinateField) -> int:
    if not math.isfinite(deg):
        raise OutOfRangeError(field, deg, _RANGES[field])
    scaled = deg * SCALE
    # 1e305 など有限でも 10^7 倍で inf になる値
    if not math.isfinite(scaled):
        raise OutOfRangeError(field, deg, _RANGES[field])
    return round_half_away(scaled)


@dataclass(frozen=True)
class Coordinate:
    """
    緯度経度を 10^-7 度単位の整数で保持する不変の値型。

    生成は from_fixed_point / from_degrees / literal のいずれかで行う。
    直接 Coordinate(lat, lon) とした場合も同じ範囲検査が走る。
    """
    lat: int
    lon: int

    def __post_init__(self):
        lat = _as_int(self.lat)
        lon = _as_int(self.lon)
        # 緯度を先に検査する
        if _out_of_range(CoordinateField.LATITUDE, lat):
            raise OutOfRangeError(CoordinateField.LATITUDE, lat, LAT_RANGE)
        if _out_of_range(CoordinateField.LONGITUDE, lon):
            raise OutOfRangeError(CoordinateField.LONGITUDE, lon, LON_RANGE)
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lon", lon)

    # --- 生成 ---------------------------------------------------------

    @classmethod
    def from_fixed_point(cls, lat: int, lon: int) -> "Coordinate":
        """decimicro (10^-7 度単位) から生成。範囲外は OutOfRangeError"""
        return cls(lat, lon)

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> "Coordinate":
        """度単位の float から生成。10^7 倍して四捨五入（0 から遠い方へ）"""
        lat_fp = degrees_to_fixed_point(lat, CoordinateField.LATITUDE)
        lon_fp = degrees_to_fixed_point(lon, CoordinateField.LONGITUDE)
        return cls.from_fixed_point(lat_fp, lon_fp)

    @classmethod
    def literal(cls, lat: int, lon: int) -> "Coordinate":
        """
        モジュール定数用のコンストラクタ（decimicro 単位）。

        範囲外の値は回復可能なエラーではなく定義ミスとして扱い、
        InvalidLiteralError（BaseException 派生）で import ごと停止させる。
        実行時の入力には from_fixed_point を使うこと。
        """
        lat = _as_int(lat)
        lon = _as_int(lon)
        for field, value in ((CoordinateField.LATITUDE, lat), (CoordinateField.LONGITUDE, lon)):
            if _out_of_range(field, value):
                low, high = _RANGES[field]
                raise InvalidLiteralError(
                    f"coordinate literal {field.value} {value} is outside [{low}, {high}]"
                )
        return cls(lat, lon)

    # --- 取得 ---------------------------------------------------------

    def lat_degrees(self) -> float:
        return self.lat / 10_000_000.0

    def lon_degrees(self) -> float:
        return self.lon / 10_000_000.0

    def lat_fixed_point(self) -> int:
        return self.lat

    def lon_fixed_point(self) -> int:
        return self.lon

    def format(self) -> str:
        return f"Lat: {self.lat_degrees():.7f}, Lon: {self.lon_degrees():.7f}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class MeshCell:
    """2次メッシュ1区画（南西端 lower_left, 北東端 upper_right）"""
    code: str
    lower_left: Coordinate
    upper_right: Coordinate

    def contains(self, coord: Coordinate) -> bool:
        # 角は 10^-7 度に丸め済みなので整数で境界込み比較
        return (
            self.lower_left.lat <= coord.lat <= self.upper_right.lat
            and self.lower_left.lon <= coord.lon <= self.upper_right.lon
        )

    def center(self) -> Coordinate:
        return Coordinate.from_fixed_point(
            (self.lower_left.lat + self.upper_right.lat) // 2,
            (self.lower_left.lon + self.upper_right.lon) // 2,
        )

    def to_bbox(self) -> Tuple[float, float, float, float]:
        """(lat_min, lat_max, lon_min, lon_max) を度で返す"""
        return (
            self.lower_left.lat_degrees(),
            self.upper_right.lat_degrees(),
            self.lower_left.lon_degrees(),
            self.upper_right.lon_degrees(),
        )


__all__ = [
    "Coordinate",
    "MeshCell",
    "SCALE",
    "LAT_RANGE",
    "LON_RANGE",
    "round_half_away",
    "degrees_to_fixed_point",
]
