# meshcode.py
"""
標準地域メッシュ 2次メッシュコード (6桁, 約 5' x 7.5') と Coordinate の相互変換。

    YYXXyx
    YY: 1次メッシュ緯度 = floor(lat * 1.5)
    XX: 1次メッシュ経度 = floor(lon - 100)
    y : 2次メッシュ緯度 (0-7)
    x : 2次メッシュ経度 (0-7)

メッシュは日本周辺（北緯・東経 100〜199度）でのみ定義される。
範囲外の座標も計算はそのまま行い、MeshCoverageWarning を出すだけで補正はしない。
"""
from __future__ import annotations
from typing import Dict, Tuple
import math
import warnings

from .config import SECOND_MESH, MeshGrid
from .model.coordinate import Coordinate, MeshCell
from .model.errors import (
    InvalidMeshCodeError,
    MeshCodeErrorReason,
    MeshCoverageWarning,
)


def mesh_indices(lat: float, lon: float, grid: MeshGrid = SECOND_MESH) -> Tuple[int, int, int, int]:
    """度単位の緯度経度 → (lat_1st, lon_1st, lat_2nd, lon_2nd)"""
    lat_scaled = lat * grid.lat_scale
    lon_shifted = lon - grid.lon_offset
    # 第1次メッシュ
    lat_1st = math.floor(lat_scaled)
    lon_1st = math.floor(lon_shifted)
    # 第2次メッシュ: 小数部は Python の % (床除算の剰余, 常に [0, 1))
    lat_2nd = math.floor(lat_scaled % 1.0 * grid.subdivisions)
    lon_2nd = math.floor(lon_shifted % 1.0 * grid.subdivisions)
    return lat_1st, lon_1st, lat_2nd, lon_2nd


def in_coverage(lat_1st: int, lon_1st: int, lat_2nd: int, lon_2nd: int,
                grid: MeshGrid = SECOND_MESH) -> bool:
    top = grid.first_mesh_max
    return (
        0 <= lat_1st <= top and 0 <= lon_1st <= top
        and 0 <= lat_2nd < grid.subdivisions and 0 <= lon_2nd < grid.subdivisions
    )


def format_code(lat_1st: int, lon_1st: int, lat_2nd: int, lon_2nd: int) -> str:
    return f"{lat_1st:02d}{lon_1st:02d}{lat_2nd:d}{lon_2nd:d}"


def to_second_mesh(coord: Coordinate) -> str:
    """Coordinate → 2次メッシュコード (6桁)"""
    idx = mesh_indices(coord.lat_degrees(), coord.lon_degrees())
    code = format_code(*idx)
    if not in_coverage(*idx):
        warnings.warn(
            f"{coord} is outside the second mesh coverage; got code {code!r}",
            MeshCoverageWarning,
            stacklevel=2,
        )
    return code


def _slice_field(code: str, name: str, start: int, stop: int) -> int:
    part = code[start:stop]
    # int() は符号・空白・全角数字を受け付けるので ASCII 数字のみに限定
    if not (part.isascii() and part.isdigit()):
        raise InvalidMeshCodeError(code, MeshCodeErrorReason.MALFORMED_FIELD, field=name)
    return int(part)


def parse_second_mesh_code(code: str, grid: MeshGrid = SECOND_MESH) -> Dict[str, int]:
    """6桁コードを {field名: 値} に分解。形式エラーは InvalidMeshCodeError"""
    if not isinstance(code, str):
        raise TypeError(f"mesh code must be str, got {type(code).__name__}")
    if len(code) != grid.code_length:
        raise InvalidMeshCodeError(code, MeshCodeErrorReason.WRONG_LENGTH)
    return {name: _slice_field(code, name, start, stop) for name, start, stop in grid.fields}


def from_second_mesh_code(code: str) -> Tuple[Coordinate, Coordinate]:
    """
    2次メッシュコード → (南西端, 北東端)。

    2次メッシュの桁に 8, 9 が来ても拒否せずそのまま計算する。
    1次メッシュが大きすぎて範囲外になる場合は OutOfRangeError が伝播する。
    """
    f = parse_second_mesh_code(code)
    grid = SECOND_MESH

    # 緯度と経度の計算（度単位）
    base_lat = f["lat_1st"] / grid.lat_scale      # 第1次メッシュ基準緯度
    base_lon = f["lon_1st"] + grid.lon_offset     # 第1次メッシュ基準経度

    lat_lower = base_lat + f["lat_2nd"] / (grid.lat_scale * grid.subdivisions)
    lat_upper = lat_lower + grid.cell_height_deg  # 5分 = 1/12度
    lon_lower = base_lon + f["lon_2nd"] / grid.subdivisions
    lon_upper = lon_lower + grid.cell_width_deg   # 7.5分 = 1/8度

    lower_left = Coordinate.from_degrees(lat_lower, lon_lower)
    upper_right = Coordinate.from_degrees(lat_upper, lon_upper)
    return lower_left, upper_right


def second_mesh_cell(code: str) -> MeshCell:
    lower_left, upper_right = from_second_mesh_code(code)
    return MeshCell(code=code, lower_left=lower_left, upper_right=upper_right)


def is_second_mesh_code(code: str) -> bool:
    """例外を投げない形式チェック（2次メッシュ桁が 0-7 であることも確認）"""
    try:
        f = parse_second_mesh_code(code)
    except (InvalidMeshCodeError, TypeError):
        return False
    return f["lat_2nd"] < SECOND_MESH.subdivisions and f["lon_2nd"] < SECOND_MESH.subdivisions


__all__ = [
    "mesh_indices",
    "in_coverage",
    "format_code",
    "to_second_mesh",
    "parse_second_mesh_code",
    "from_second_mesh_code",
    "second_mesh_cell",
    "is_second_mesh_code",
]
