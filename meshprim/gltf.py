from __future__ import annotations
import base64
import json
import typing
import meshprim
from meshprim.accessor import AccessorModel
from meshprim.primitive import MeshPrimitive

ARRAY_BUFFER = 34962
ELEMENT_ARRAY_BUFFER = 34963


def _get_accessor_json(
    *,
    accessor: AccessorModel,
    buffer_view_index: int,
) -> typing.Dict:
    accessor_json = {
        "bufferView": buffer_view_index,
        "componentType": int(accessor.component_type),
        "count": accessor.count,
        "type": accessor.element_type.value,
    }
    if accessor.normalized:
        accessor_json["normalized"] = True
    return accessor_json


def to_json(
    meshes: typing.List[typing.List[MeshPrimitive]],
    *,
    generator: str = "meshprim",
) -> typing.Dict:
    buffer_bytes = bytearray()
    accessors_json: typing.List[typing.Dict] = []
    buffer_views_json: typing.List[typing.Dict] = []
    accessor_id_to_index: typing.Dict[int, int] = {}

    def get_accessor_index(
        accessor: AccessorModel, *, target: int, with_bounds: bool = False
    ) -> int:
        accessor_id = id(accessor)
        if accessor_id not in accessor_id_to_index:
            accessor_id_to_index[accessor_id] = add_accessor(accessor, target=target)

        accessor_json = accessors_json[accessor_id_to_index[accessor_id]]
        # a later POSITION reference adds bounds to an accessor written earlier
        if with_bounds and accessor.count and "min" not in accessor_json:
            accessor_json["min"] = accessor.min
            accessor_json["max"] = accessor.max
        return accessor_id_to_index[accessor_id]

    def add_accessor(accessor: AccessorModel, *, target: int) -> int:
        # bufferView offsets must be multiples of 4
        buffer_bytes.extend(bytes(-len(buffer_bytes) % 4))
        buffer_views_json.append(
            {
                "buffer": 0,
                "byteOffset": len(buffer_bytes),
                "byteLength": accessor.byte_length,
                "target": target,
            }
        )
        buffer_bytes.extend(accessor.data)

        accessor_json = _get_accessor_json(
            accessor=accessor,
            buffer_view_index=len(buffer_views_json) - 1,
        )
        accessors_json.append(accessor_json)
        return len(accessors_json) - 1

    def get_attributes_json(
        attributes: typing.Mapping[str, AccessorModel]
    ) -> typing.Dict[str, int]:
        return {
            name: get_accessor_index(
                accessor,
                target=ARRAY_BUFFER,
                with_bounds=name == meshprim.POSITION,
            )
            for name, accessor in attributes.items()
        }

    def get_primitive_json(primitive: MeshPrimitive) -> typing.Dict:
        primitive_json: typing.Dict[str, typing.Any] = {
            "attributes": get_attributes_json(primitive.attributes)
        }
        if primitive.indices is not None:
            primitive_json["indices"] = get_accessor_index(
                primitive.indices, target=ELEMENT_ARRAY_BUFFER
            )
        if primitive.mode != meshprim.PrimitiveMode.TRIANGLES:
            primitive_json["mode"] = int(primitive.mode)
        if primitive.targets:
            primitive_json["targets"] = [
                get_attributes_json(target) for target in primitive.targets
            ]
        return primitive_json

    meshes_json = [
        {"primitives": [get_primitive_json(primitive) for primitive in primitives]}
        for primitives in meshes
    ]

    gltf_json: typing.Dict[str, typing.Any] = {
        "asset": {"version": "2.0", "generator": generator},
        "meshes": meshes_json,
        "accessors": accessors_json,
        "bufferViews": buffer_views_json,
    }
    if buffer_views_json:
        gltf_json["buffers"] = [
            {
                "byteLength": len(buffer_bytes),
                "uri": "data:application/octet-stream;base64,"
                + base64.b64encode(buffer_bytes).decode("ascii"),
            }
        ]
    return gltf_json


def dump(
    meshes: typing.List[typing.List[MeshPrimitive]],
    file: typing.TextIO,
    *,
    generator: str = "meshprim",
) -> None:
    json.dump(to_json(meshes, generator=generator), file)
