from __future__ import annotations
import dataclasses
import typing
import meshprim

if typing.TYPE_CHECKING:
    from meshprim.accessor import AccessorModel

AttributeMapping = typing.Mapping[str, "AccessorModel"]


@dataclasses.dataclass(frozen=True, eq=False)
class MeshPrimitive:
    mode: meshprim.PrimitiveMode
    indices: typing.Optional[AccessorModel]
    attributes: AttributeMapping
    targets: typing.Tuple[AttributeMapping, ...]

    @property
    def count(self) -> int:
        if self.indices is not None:
            return self.indices.count
        if meshprim.POSITION in self.attributes:
            return self.attributes[meshprim.POSITION].count
        return 0
