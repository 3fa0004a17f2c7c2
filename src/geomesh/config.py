# config.py
from dataclasses import dataclass
from typing import Tuple

FieldSpan = Tuple[str, int, int]  # (name, start, stop)


@dataclass(frozen=True)
class MeshGrid:
    """標準地域メッシュ（2次メッシュ）の格子定数"""
    lat_scale: float = 1.5        # 1次メッシュ: 緯度40' = 2/3°
    lon_offset: float = 100.0     # 1次メッシュ: 経度 - 100°
    subdivisions: int = 8         # 2次メッシュは 8x8 分割
    code_length: int = 6
    fields: Tuple[FieldSpan, ...] = (
        ("lat_1st", 0, 2),
        ("lon_1st", 2, 4),
        ("lat_2nd", 4, 5),
        ("lon_2nd", 5, 6),
    )

    @property
    def cell_height_deg(self) -> float:
        # 5分 = 1/12度
        return 1.0 / (self.lat_scale * self.subdivisions)

    @property
    def cell_width_deg(self) -> float:
        # 7.5分 = 1/8度
        return 1.0 / self.subdivisions

    @property
    def first_mesh_max(self) -> int:
        return 10 ** (self.fields[0][2] - self.fields[0][1]) - 1


SECOND_MESH = MeshGrid()
