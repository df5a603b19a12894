import base64
import io
import json
import typing
import numpy as np
import meshprim
import meshprim.gltf
from meshprim import ComponentType, MeshPrimitiveBuilder


def read_buffer(gltf_json: typing.Dict) -> bytes:
    uri: str = gltf_json["buffers"][0]["uri"]
    assert uri.startswith("data:application/octet-stream;base64,")
    return base64.b64decode(uri.split(",", 1)[1])


def read_accessor(gltf_json: typing.Dict, accessor_index: int) -> bytes:
    accessor_json = gltf_json["accessors"][accessor_index]
    buffer_view_json = gltf_json["bufferViews"][accessor_json["bufferView"]]
    byte_offset = buffer_view_json["byteOffset"]
    return read_buffer(gltf_json)[
        byte_offset : byte_offset + buffer_view_json["byteLength"]
    ]


def test_triangle() -> None:
    primitive = (
        MeshPrimitiveBuilder()
        .set_int_indices_as_byte([0, 1, 2])
        .add_positions_3d([0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, -1.0])
        .add_normals_3d([0.0, 0.0, 1.0] * 3)
        .build()
    )
    gltf_json = meshprim.gltf.to_json([[primitive]])

    assert gltf_json["asset"]["version"] == "2.0"
    primitive_json = gltf_json["meshes"][0]["primitives"][0]
    assert "mode" not in primitive_json
    assert "targets" not in primitive_json
    assert list(primitive_json["attributes"]) == ["POSITION", "NORMAL"]

    indices_json = gltf_json["accessors"][primitive_json["indices"]]
    assert indices_json["componentType"] == ComponentType.UNSIGNED_BYTE
    assert indices_json["type"] == "SCALAR"
    assert indices_json["count"] == 3
    assert "min" not in indices_json
    assert read_accessor(gltf_json, primitive_json["indices"]) == bytes([0, 1, 2])

    positions_json = gltf_json["accessors"][primitive_json["attributes"]["POSITION"]]
    assert positions_json["min"] == [0.0, 0.0, -1.0]
    assert positions_json["max"] == [1.0, 1.0, 0.0]
    normals_json = gltf_json["accessors"][primitive_json["attributes"]["NORMAL"]]
    assert "min" not in normals_json

    positions = np.frombuffer(
        read_accessor(gltf_json, primitive_json["attributes"]["POSITION"]), dtype="<f4"
    )
    assert positions.tolist() == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, -1.0]


def test_buffer_views_are_aligned() -> None:
    builder = MeshPrimitiveBuilder()
    indexed = builder.set_byte_indices(bytes([0, 1, 2])).build()
    positioned = builder.add_positions_3d([0.0] * 9).build()
    gltf_json = meshprim.gltf.to_json([[indexed, positioned]])

    for buffer_view_json in gltf_json["bufferViews"]:
        assert buffer_view_json["byteOffset"] % 4 == 0
    assert gltf_json["buffers"][0]["byteLength"] == 40
    assert gltf_json["bufferViews"][1]["byteOffset"] == 4
    assert [_["target"] for _ in gltf_json["bufferViews"]] == [
        meshprim.gltf.ELEMENT_ARRAY_BUFFER,
        meshprim.gltf.ARRAY_BUFFER,
    ]


def test_shared_accessors_are_written_once() -> None:
    builder = MeshPrimitiveBuilder()
    first = builder.set_lines().add_positions_3d([0.0] * 6).build()
    second = (
        builder.set_points()
        .add_attribute("POSITION", first.attributes["POSITION"])
        .build()
    )
    gltf_json = meshprim.gltf.to_json([[first], [second]])

    assert len(gltf_json["accessors"]) == 1
    first_json = gltf_json["meshes"][0]["primitives"][0]
    second_json = gltf_json["meshes"][1]["primitives"][0]
    assert first_json["mode"] == meshprim.PrimitiveMode.LINES
    assert second_json["mode"] == meshprim.PrimitiveMode.POINTS
    assert first_json["attributes"] == second_json["attributes"] == {"POSITION": 0}


def test_morph_targets() -> None:
    primitive = (
        MeshPrimitiveBuilder()
        .add_positions_3d([0.0] * 9)
        .add_morph_target(1, "POSITION", bytes(36))
        .build()
    )
    gltf_json = meshprim.gltf.to_json([[primitive]])

    targets_json = gltf_json["meshes"][0]["primitives"][0]["targets"]
    assert targets_json == [{}, {"POSITION": 1}]
    assert gltf_json["accessors"][1]["min"] == [0.0, 0.0, 0.0]


def test_empty() -> None:
    primitive = MeshPrimitiveBuilder().build()
    gltf_json = meshprim.gltf.to_json([[primitive]], generator="test")
    assert gltf_json["asset"]["generator"] == "test"
    assert gltf_json["meshes"] == [{"primitives": [{"attributes": {}}]}]
    assert "buffers" not in gltf_json


def test_dump() -> None:
    primitive = MeshPrimitiveBuilder().add_tex_coords0_2d([0.0, 1.0]).build()
    file = io.StringIO()
    meshprim.gltf.dump([[primitive]], file)
    assert json.loads(file.getvalue()) == meshprim.gltf.to_json([[primitive]])


def test_bounds_added_for_later_position_reference() -> None:
    builder = MeshPrimitiveBuilder()
    first = builder.add_normals_3d([0.0, 0.0, 1.0, 0.0, 1.0, 0.0]).build()
    second = builder.add_attribute("POSITION", first.attributes["NORMAL"]).build()
    gltf_json = meshprim.gltf.to_json([[first, second]])

    assert len(gltf_json["accessors"]) == 1
    assert gltf_json["accessors"][0]["min"] == [0.0, 0.0, 0.0]
    assert gltf_json["accessors"][0]["max"] == [0.0, 1.0, 1.0]
