"""
geomesh: 固定小数点の緯度経度と、標準地域メッシュ 2次メッシュコードの相互変換。

    >>> from geomesh import Coordinate, to_second_mesh, from_second_mesh_code
    >>> c = Coordinate.from_fixed_point(327_903_862, 1_306_883_252)
    >>> to_second_mesh(c)
    '493015'
    >>> lower_left, upper_right = from_second_mesh_code("493015")
    >>> lower_left.format()
    'Lat: 32.7500000, Lon: 130.6250000'
"""
from .config import MeshGrid, SECOND_MESH
from .model import (
    Coordinate,
    MeshCell,
    CoordinateField,
    MeshCodeErrorReason,
    GeoMeshError,
    OutOfRangeError,
    InvalidMeshCodeError,
    InvalidLiteralError,
    MeshCoverageWarning,
)
from .meshcode import (
    to_second_mesh,
    from_second_mesh_code,
    second_mesh_cell,
    is_second_mesh_code,
)
from .batch import to_second_mesh_array

__all__ = [
    "Coordinate",
    "MeshCell",
    "MeshGrid",
    "SECOND_MESH",
    "to_second_mesh",
    "from_second_mesh_code",
    "second_mesh_cell",
    "is_second_mesh_code",
    "to_second_mesh_array",
    "CoordinateField",
    "MeshCodeErrorReason",
    "GeoMeshError",
    "OutOfRangeError",
    "InvalidMeshCodeError",
    "InvalidLiteralError",
    "MeshCoverageWarning",
]
