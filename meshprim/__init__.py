from enum import Enum, IntEnum
import operator
import typing
import numpy as np

POSITION = "POSITION"
NORMAL = "NORMAL"
TANGENT = "TANGENT"
TEXCOORD_0 = "TEXCOORD_0"


class GltfError(Exception):
    pass


class ComponentType(IntEnum):
    BYTE = 5120
    UNSIGNED_BYTE = 5121
    SHORT = 5122
    UNSIGNED_SHORT = 5123
    UNSIGNED_INT = 5125
    FLOAT = 5126

    @property
    def byte_size(self) -> int:
        return _COMPONENT_BYTE_SIZES[self]

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(_COMPONENT_DTYPES[self])


_COMPONENT_BYTE_SIZES = {
    ComponentType.BYTE: 1,
    ComponentType.UNSIGNED_BYTE: 1,
    ComponentType.SHORT: 2,
    ComponentType.UNSIGNED_SHORT: 2,
    ComponentType.UNSIGNED_INT: 4,
    ComponentType.FLOAT: 4,
}

_COMPONENT_DTYPES = {
    ComponentType.BYTE: "<i1",
    ComponentType.UNSIGNED_BYTE: "<u1",
    ComponentType.SHORT: "<i2",
    ComponentType.UNSIGNED_SHORT: "<u2",
    ComponentType.UNSIGNED_INT: "<u4",
    ComponentType.FLOAT: "<f4",
}


class ElementType(Enum):
    SCALAR = "SCALAR"
    VEC2 = "VEC2"
    VEC3 = "VEC3"
    VEC4 = "VEC4"
    MAT2 = "MAT2"
    MAT3 = "MAT3"
    MAT4 = "MAT4"

    @property
    def component_count(self) -> int:
        return {
            "SCALAR": 1,
            "VEC2": 2,
            "VEC3": 3,
            "VEC4": 4,
            "MAT2": 4,
            "MAT3": 9,
            "MAT4": 16,
        }[self.value]

    @staticmethod
    def for_dimensions(dimensions: int) -> "ElementType":
        if dimensions == 1:
            return ElementType.SCALAR
        if dimensions in (2, 3, 4):
            return ElementType(f"VEC{dimensions}")
        raise ValueError(f"Unsupported vector dimensions: {dimensions}")


class PrimitiveMode(IntEnum):
    POINTS = 0
    LINES = 1
    TRIANGLES = 4


class IndexWidth(IntEnum):
    UINT8 = 8
    UINT16 = 16
    UINT32 = 32

    @property
    def component_type(self) -> ComponentType:
        return {
            IndexWidth.UINT8: ComponentType.UNSIGNED_BYTE,
            IndexWidth.UINT16: ComponentType.UNSIGNED_SHORT,
            IndexWidth.UINT32: ComponentType.UNSIGNED_INT,
        }[self]

    @staticmethod
    def parse(value: typing.Union["IndexWidth", ComponentType, int]) -> "IndexWidth":
        if isinstance(value, bool):
            raise ValueError(f"Unsupported index width: {value!r}")
        try:
            value = operator.index(value)
        except TypeError as error:
            raise ValueError(f"Unsupported index width: {value!r}") from error
        for width in IndexWidth:
            if value in (width, width.component_type):
                return width
        raise ValueError(
            "The index width must be 8, 16 or 32 bits (or UNSIGNED_BYTE, "
            f"UNSIGNED_SHORT or UNSIGNED_INT), but is {value!r}"
        )


# pylint: disable = wrong-import-position
from meshprim.accessor import AccessorModel
from meshprim.primitive import MeshPrimitive
from meshprim.builder import MeshPrimitiveBuilder
