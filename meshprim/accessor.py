from __future__ import annotations
import dataclasses
import typing
import numpy as np
import meshprim


@dataclasses.dataclass(frozen=True, eq=False)
class AccessorModel:
    component_type: meshprim.ComponentType
    element_type: meshprim.ElementType
    normalized: bool
    data: bytes

    @property
    def element_byte_size(self) -> int:
        return self.component_type.byte_size * self.element_type.component_count

    @property
    def count(self) -> int:
        return len(self.data) // self.element_byte_size

    @property
    def byte_length(self) -> int:
        return len(self.data)

    def as_array(self) -> np.ndarray:
        values = np.frombuffer(self.data, dtype=self.component_type.numpy_dtype)
        component_count = self.element_type.component_count
        if component_count == 1:
            return values
        return values.reshape(self.count, component_count)

    @property
    def min(self) -> typing.List[typing.Union[int, float]]:
        return self._bounds(np.min)

    @property
    def max(self) -> typing.List[typing.Union[int, float]]:
        return self._bounds(np.max)

    def _bounds(self, reduce: typing.Callable) -> typing.List[typing.Union[int, float]]:
        if not self.count:
            return []
        values = self.as_array().reshape(self.count, -1)
        return reduce(values, axis=0).tolist()


def create(
    component_type: typing.Union[meshprim.ComponentType, int],
    element_type: typing.Union[meshprim.ElementType, str],
    normalized: bool,
    data: typing.Union[bytes, bytearray, memoryview],
) -> AccessorModel:
    component_type = meshprim.ComponentType(component_type)
    element_type = meshprim.ElementType(element_type)
    data = bytes(data)

    element_byte_size = component_type.byte_size * element_type.component_count
    if len(data) % element_byte_size:
        raise ValueError(
            f"Accessor data of {len(data)} bytes is not a multiple of the "
            f"{element_byte_size} byte {component_type.name} "
            f"{element_type.value} element size"
        )

    return AccessorModel(
        component_type=component_type,
        element_type=element_type,
        normalized=normalized,
        data=data,
    )
