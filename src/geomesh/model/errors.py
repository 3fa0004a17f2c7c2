from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple


class CoordinateField(Enum):
    LATITUDE = "latitude"
    LONGITUDE = "longitude"


class MeshCodeErrorReason(Enum):
    WRONG_LENGTH = "wrong_length"
    MALFORMED_FIELD = "malformed_field"


class GeoMeshError(ValueError):
    """geomesh が送出する入力エラーの基底クラス"""


class OutOfRangeError(GeoMeshError):
    """緯度・経度が有効範囲外（単位は decimicro = 10^-7 度）"""

    def __init__(self, field: CoordinateField, value, valid_range: Tuple[int, int]):
        self.field = field
        self.value = value
        self.valid_range = valid_range
        low, high = valid_range
        super().__init__(
            f"Invalid {field.value}: {value} is outside [{low}, {high}] in decimicro"
        )


class InvalidMeshCodeError(GeoMeshError):
    """2次メッシュコードの形式エラー"""

    def __init__(self, code: str, reason: MeshCodeErrorReason, field: Optional[str] = None):
        self.code = code
        self.reason = reason
        self.field = field
        if reason is MeshCodeErrorReason.WRONG_LENGTH:
            msg = f"invalid mesh code {code!r}: must be 6 digits long"
        else:
            msg = f"invalid mesh code {code!r}: malformed field {field}"
        super().__init__(msg)


class InvalidLiteralError(BaseException):
    """
    Coordinate.literal() 専用。定数定義の誤りはプログラミングエラーなので
    except Exception では捕まらないよう BaseException から派生させる。
    """


class MeshCoverageWarning(UserWarning):
    """メッシュ範囲外の座標をエンコードした（桁あふれ・負のインデックス）"""


__all__ = [
    "CoordinateField",
    "MeshCodeErrorReason",
    "GeoMeshError",
    "OutOfRangeError",
    "InvalidMeshCodeError",
    "InvalidLiteralError",
    "MeshCoverageWarning",
]
