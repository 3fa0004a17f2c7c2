# model/__init__.py
"""
Model layer: 座標の値型とエラー定義。

- Coordinate: 10^-7 度単位の不変な緯度経度
- MeshCell: 2次メッシュ1区画の矩形
- errors: OutOfRangeError / InvalidMeshCodeError ほか
"""
from .errors import (
    CoordinateField,
    MeshCodeErrorReason,
    GeoMeshError,
    OutOfRangeError,
    InvalidMeshCodeError,
    InvalidLiteralError,
    MeshCoverageWarning,
)
from .coordinate import Coordinate, MeshCell

__all__ = [
    "Coordinate",
    "MeshCell",
    "CoordinateField",
    "MeshCodeErrorReason",
    "GeoMeshError",
    "OutOfRangeError",
    "InvalidMeshCodeError",
    "InvalidLiteralError",
    "MeshCoverageWarning",
]
