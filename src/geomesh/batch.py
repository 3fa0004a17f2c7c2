# batch.py
"""
numpy による 2次メッシュコードの一括エンコード。

各要素は Coordinate.from_degrees と同じ 10^-7 度の量子化を経るため、
結果は to_second_mesh を1点ずつ呼んだ場合と一致する。
"""
from __future__ import annotations
import warnings
import numpy as np

from .config import SECOND_MESH
from .meshcode import format_code
from .model.coordinate import SCALE, LAT_RANGE, LON_RANGE
from .model.errors import CoordinateField, OutOfRangeError, MeshCoverageWarning


def quantize(deg: np.ndarray) -> np.ndarray:
    """度 → decimicro（0.5 は 0 から遠い方へ丸め）。結果は float64 のまま"""
    v = deg * SCALE
    a = np.abs(v)
    n = np.floor(a)
    n = np.where(a - n >= 0.5, n + 1.0, n)
    return np.copysign(n, v)


def _check_range(deg: np.ndarray, fp: np.ndarray, rng) -> np.ndarray:
    low, high = rng
    with np.errstate(invalid="ignore"):
        return ~np.isfinite(fp) | (fp < low) | (fp > high)


def _raise_first(i: int, deg, fp, bad, field, rng):
    if not bad[i]:
        return
    value = float(deg[i]) if not np.isfinite(fp[i]) else int(fp[i])
    raise OutOfRangeError(field, value, rng)


def to_second_mesh_array(lats, lons) -> np.ndarray:
    lat_deg = np.asarray(lats, dtype=np.float64)
    lon_deg = np.asarray(lons, dtype=np.float64)
    if lat_deg.shape != lon_deg.shape:
        raise ValueError(f"shape mismatch: lats {lat_deg.shape} vs lons {lon_deg.shape}")
    shape = lat_deg.shape
    lat_deg = lat_deg.ravel()
    lon_deg = lon_deg.ravel()
    if lat_deg.size == 0:
        return np.empty(shape, dtype="<U6")

    with np.errstate(invalid="ignore", over="ignore"):
        lat_fp = quantize(lat_deg)
        lon_fp = quantize(lon_deg)

    bad_lat = _check_range(lat_deg, lat_fp, LAT_RANGE)
    bad_lon = _check_range(lon_deg, lon_fp, LON_RANGE)
    bad = bad_lat | bad_lon
    if bad.any():
        i = int(np.argmax(bad))
        # 要素ごとに緯度 → 経度の順
        _raise_first(i, lat_deg, lat_fp, bad_lat, CoordinateField.LATITUDE, LAT_RANGE)
        _raise_first(i, lon_deg, lon_fp, bad_lon, CoordinateField.LONGITUDE, LON_RANGE)

    grid = SECOND_MESH
    lat_scaled = (lat_fp / 10_000_000.0) * grid.lat_scale
    lon_shifted = (lon_fp / 10_000_000.0) - grid.lon_offset
    lat_1st = np.floor(lat_scaled).astype(np.int64)
    lon_1st = np.floor(lon_shifted).astype(np.int64)
    # np.mod は Python の % と同じ符号規約
    lat_2nd = np.floor(np.mod(lat_scaled, 1.0) * grid.subdivisions).astype(np.int64)
    lon_2nd = np.floor(np.mod(lon_shifted, 1.0) * grid.subdivisions).astype(np.int64)

    top = grid.first_mesh_max
    covered = (
        (lat_1st >= 0) & (lat_1st <= top) & (lon_1st >= 0) & (lon_1st <= top)
        & (lat_2nd < grid.subdivisions) & (lon_2nd < grid.subdivisions)
    )
    n_out = int((~covered).sum())
    if n_out:
        warnings.warn(
            f"{n_out} of {covered.size} coordinates are outside the second mesh coverage",
            MeshCoverageWarning,
            stacklevel=2,
        )

    codes = [
        format_code(int(a), int(b), int(c), int(d))
        for a, b, c, d in zip(lat_1st, lon_1st, lat_2nd, lon_2nd)
    ]
    return np.array(codes).reshape(shape)


__all__ = ["quantize", "to_second_mesh_array"]
