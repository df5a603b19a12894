from __future__ import annotations
import logging
import operator
import types
import typing
import meshprim
import meshprim.accessor
import meshprim.buffers
from meshprim.accessor import AccessorModel
from meshprim.buffers import FloatSequence, IntSequence
from meshprim.primitive import MeshPrimitive


class MeshPrimitiveBuilder:
    def __init__(
        self,
        *,
        mode: meshprim.PrimitiveMode = meshprim.PrimitiveMode.TRIANGLES,
        logger: typing.Optional[logging.Logger] = None,
    ):
        self._mode = meshprim.PrimitiveMode(mode)
        self._logger = logger or logging.getLogger(__name__)
        self._indices: typing.Optional[AccessorModel] = None
        self._attributes: typing.Dict[str, AccessorModel] = {}
        self._targets: typing.List[typing.Dict[str, AccessorModel]] = []

    @property
    def mode(self) -> meshprim.PrimitiveMode:
        return self._mode

    def set_mode(self, mode: meshprim.PrimitiveMode) -> MeshPrimitiveBuilder:
        self._mode = meshprim.PrimitiveMode(mode)
        return self

    def set_triangles(self) -> MeshPrimitiveBuilder:
        return self.set_mode(meshprim.PrimitiveMode.TRIANGLES)

    def set_lines(self) -> MeshPrimitiveBuilder:
        return self.set_mode(meshprim.PrimitiveMode.LINES)

    def set_points(self) -> MeshPrimitiveBuilder:
        return self.set_mode(meshprim.PrimitiveMode.POINTS)

    def set_int_indices(self, indices: IntSequence) -> MeshPrimitiveBuilder:
        return self._set_indices_data(
            meshprim.ComponentType.UNSIGNED_INT,
            meshprim.buffers.int_buffer_bytes(indices),
        )

    def set_int_indices_as_short(self, indices: IntSequence) -> MeshPrimitiveBuilder:
        return self._set_indices_data(
            meshprim.ComponentType.UNSIGNED_SHORT,
            meshprim.buffers.cast_to_short_bytes(indices),
        )

    def set_int_indices_as_byte(self, indices: IntSequence) -> MeshPrimitiveBuilder:
        return self._set_indices_data(
            meshprim.ComponentType.UNSIGNED_BYTE,
            meshprim.buffers.cast_to_byte_bytes(indices),
        )

    def set_short_indices(self, indices: IntSequence) -> MeshPrimitiveBuilder:
        return self._set_indices_data(
            meshprim.ComponentType.UNSIGNED_SHORT,
            meshprim.buffers.short_buffer_bytes(indices),
        )

    def set_byte_indices(
        self, indices: typing.Union[bytes, bytearray, memoryview, IntSequence]
    ) -> MeshPrimitiveBuilder:
        return self._set_indices_data(
            meshprim.ComponentType.UNSIGNED_BYTE,
            meshprim.buffers.byte_buffer_bytes(indices),
        )

    def set_indices_as(
        self,
        indices: IntSequence,
        width: typing.Union[meshprim.IndexWidth, meshprim.ComponentType, int],
    ) -> MeshPrimitiveBuilder:
        width = meshprim.IndexWidth.parse(width)
        return self._set_indices_data(
            width.component_type, meshprim.buffers.cast_indices(indices, width)
        )

    def _set_indices_data(
        self, component_type: meshprim.ComponentType, data: bytes
    ) -> MeshPrimitiveBuilder:
        return self.set_indices(
            meshprim.accessor.create(
                component_type, meshprim.ElementType.SCALAR, False, data
            )
        )

    def set_indices(self, indices: AccessorModel) -> MeshPrimitiveBuilder:
        self._indices = indices
        return self

    def add_positions_3d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.POSITION, 3, data)

    def add_positions_4d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.POSITION, 4, data)

    def add_normals_3d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.NORMAL, 3, data)

    def add_normals_4d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.NORMAL, 4, data)

    def add_tangents_3d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.TANGENT, 3, data)

    def add_tangents_4d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.TANGENT, 4, data)

    def add_tex_coords0_2d(self, data: FloatSequence) -> MeshPrimitiveBuilder:
        return self._add_float_attribute(meshprim.TEXCOORD_0, 2, data)

    def _add_float_attribute(
        self, attribute_name: str, dimensions: int, data: FloatSequence
    ) -> MeshPrimitiveBuilder:
        return self.add_attribute(
            attribute_name,
            meshprim.accessor.create(
                meshprim.ComponentType.FLOAT,
                meshprim.ElementType.for_dimensions(dimensions),
                False,
                meshprim.buffers.float_buffer_bytes(data),
            ),
        )

    def add_attribute(
        self, attribute_name: str, attribute: AccessorModel
    ) -> MeshPrimitiveBuilder:
        self._attributes[attribute_name] = attribute
        return self

    def add_morph_target(
        self,
        index: int,
        attribute_name: str,
        data: typing.Union[AccessorModel, bytes, bytearray, memoryview],
    ) -> MeshPrimitiveBuilder:
        try:
            index = operator.index(index)
        except TypeError as error:
            raise ValueError(
                f"Morph target index must be an integer: {index!r}"
            ) from error
        if index < 0:
            raise ValueError(f"Morph target index must not be negative: {index}")

        attribute = self._attributes.get(attribute_name)
        if attribute is None:
            raise meshprim.GltfError(
                f"The mesh primitive does not contain a {attribute_name} attribute"
            )

        if isinstance(data, AccessorModel):
            morph_attribute = data
        else:
            morph_attribute = meshprim.accessor.create(
                attribute.component_type, attribute.element_type, False, data
            )

        if attribute.component_type != morph_attribute.component_type:
            raise meshprim.GltfError(
                f"Attribute {attribute_name} has component type "
                f"{attribute.component_type.name}, but the morphed attribute "
                f"data has component type {morph_attribute.component_type.name}"
            )

        if attribute.element_type != morph_attribute.element_type:
            raise meshprim.GltfError(
                f"Attribute {attribute_name} has element type "
                f"{attribute.element_type.value}, but the morphed attribute "
                f"data has element type {morph_attribute.element_type.value}"
            )

        if index > len(self._targets):
            self._logger.warning(
                "Setting attribute in morph target %d, even though only %d "
                "targets have been created until now",
                index,
                len(self._targets),
            )
        while len(self._targets) <= index:
            self._targets.append({})

        target = self._targets[index]
        if attribute_name in target:
            self._logger.warning(
                "Overwriting existing %s in morph target %d", attribute_name, index
            )
        target[attribute_name] = morph_attribute
        return self

    def build(self) -> MeshPrimitive:
        primitive = MeshPrimitive(
            mode=self._mode,
            indices=self._indices,
            attributes=types.MappingProxyType(self._attributes),
            targets=tuple(types.MappingProxyType(_) for _ in self._targets),
        )

        self._indices = None
        self._attributes = {}
        self._targets = []
        return primitive
