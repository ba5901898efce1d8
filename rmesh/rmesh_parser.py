"""
RMesh file format parser.

RMesh file structure (little-endian, no padding anywhere):
- Header tag (length-prefixed string):
  - "RoomMesh": plain room
  - "RoomMesh.HasTriggerBox": room with a trigger box section
- uint32 mesh count, then complex meshes:
  - 2 texture slots: uint8 blend type, path string only if blend type != 0
  - uint32 vertex count, vertices (31 bytes each):
    position (3x float32), diffuse UV (2x float32), lightmap UV (2x float32),
    color (3x uint8)
  - uint32 triangle count, triangles (3x uint32 vertex indices)
- uint32 collider count, then simple meshes:
  - uint32 vertex count, positions (3x float32)
  - uint32 triangle count, triangles (3x uint32)
- Trigger boxes, only for "RoomMesh.HasTriggerBox":
  - uint32 trigger box count, then per box:
    uint32 mesh count, simple meshes, name string
- uint32 entity count, then entities (see entities.py)

Counts are never stored on the records; the writer derives them from the
collections.

Records are frozen, but the ones holding lists (meshes, trigger boxes and
the header) are unhashable; compare them with ==.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from .binary import BinaryReader
from .entities import Entity, read_entity
from .errors import InvalidBlendTypeError, InvalidFormatTagError
from .strings import read_string

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Triangle = Tuple[int, int, int]


class HeaderType(Enum):
    """Header tag; controls whether the trigger box section exists"""
    SIMPLE = "RoomMesh"
    TRIGGER_BOX = "RoomMesh.HasTriggerBox"


class TextureBlendType(IntEnum):
    NONE = 0
    VISIBLE = 1
    LIGHTMAP = 2
    TRANSPARENT = 3


@dataclass(frozen=True)
class Texture:
    """Texture reference; ``path`` is set exactly when blend_type is not NONE"""
    blend_type: TextureBlendType = TextureBlendType.NONE
    path: Optional[str] = None


@dataclass(frozen=True)
class Vertex:
    """Vertex with position, diffuse/lightmap UVs and a legacy color"""
    position: Vec3
    tex_coords: Tuple[Vec2, Vec2] = ((0.0, 0.0), (0.0, 0.0))
    color: Tuple[int, int, int] = (0, 0, 0)


@dataclass(frozen=True)
class ComplexMesh:
    """Renderable mesh. Texture slot 0 is the primary texture, slot 1 the lightmap."""
    textures: Tuple[Texture, Texture] = (Texture(), Texture())
    vertices: List[Vertex] = field(default_factory=list)
    triangles: List[Triangle] = field(default_factory=list)
    __hash__ = None

    def positions(self) -> List[Vec3]:
        return [vertex.position for vertex in self.vertices]


@dataclass(frozen=True)
class SimpleMesh:
    """Position-only mesh, used for colliders and trigger boxes"""
    vertices: List[Vec3] = field(default_factory=list)
    triangles: List[Triangle] = field(default_factory=list)
    __hash__ = None

    def positions(self) -> List[Vec3]:
        return list(self.vertices)


@dataclass(frozen=True)
class TriggerBox:
    """Named trigger volume made of one or more simple meshes"""
    name: str
    meshes: List[SimpleMesh] = field(default_factory=list)
    __hash__ = None


@dataclass(frozen=True)
class Header:
    """Complete rmesh file data.

    ``format_variant`` is the tag that was read from the file. It does not
    take part in equality and the writer ignores it: the written tag is
    always ``header_type``, derived from ``trigger_boxes``.
    """
    meshes: List[ComplexMesh] = field(default_factory=list)
    colliders: List[SimpleMesh] = field(default_factory=list)
    trigger_boxes: List[TriggerBox] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    format_variant: HeaderType = field(default=HeaderType.SIMPLE, compare=False)
    __hash__ = None

    @property
    def header_type(self) -> HeaderType:
        return HeaderType.TRIGGER_BOX if self.trigger_boxes else HeaderType.SIMPLE


class RMeshParser:
    """Parser for rmesh data held in memory"""

    def __init__(self, data: bytes):
        self.reader = BinaryReader(data)

    def read(self) -> Header:
        """Parse the whole buffer into a Header"""
        format_variant = self._parse_header_tag()

        meshes = self._parse_list(self._parse_complex_mesh)
        colliders = self._parse_list(self._parse_simple_mesh)
        trigger_boxes = []
        if format_variant is HeaderType.TRIGGER_BOX:
            trigger_boxes = self._parse_list(self._parse_trigger_box)
        entities = self._parse_list(self._parse_entity)

        logger.debug(
            "Parsed %s: %d meshes, %d colliders, %d trigger boxes, %d entities",
            format_variant.value, len(meshes), len(colliders),
            len(trigger_boxes), len(entities),
        )
        if self.reader.remaining:
            logger.warning(
                "Ignoring %d trailing bytes at 0x%X",
                self.reader.remaining, self.reader.offset,
            )

        return Header(
            meshes=meshes,
            colliders=colliders,
            trigger_boxes=trigger_boxes,
            entities=entities,
            format_variant=format_variant,
        )

    def _parse_list(self, parse_item) -> list:
        count = self.reader.read_u32()
        return [parse_item() for _ in range(count)]

    def _parse_header_tag(self) -> HeaderType:
        offset = self.reader.offset
        tag = read_string(self.reader)
        try:
            return HeaderType(tag)
        except ValueError:
            raise InvalidFormatTagError(tag, offset) from None

    def _parse_texture(self) -> Texture:
        offset = self.reader.offset
        value = self.reader.read_u8()
        try:
            blend_type = TextureBlendType(value)
        except ValueError:
            raise InvalidBlendTypeError(offset, value) from None

        path = None
        if blend_type is not TextureBlendType.NONE:
            path = read_string(self.reader)
        return Texture(blend_type=blend_type, path=path)

    def _parse_vertex(self) -> Vertex:
        reader = self.reader
        position = reader.read_vec3()
        diffuse_uv = reader.read_vec2()
        lightmap_uv = reader.read_vec2()
        color = reader.read_rgb()
        return Vertex(position=position, tex_coords=(diffuse_uv, lightmap_uv), color=color)

    def _parse_complex_mesh(self) -> ComplexMesh:
        textures = (self._parse_texture(), self._parse_texture())
        vertices = self._parse_list(self._parse_vertex)
        triangles = self._parse_list(self.reader.read_triangle)
        return ComplexMesh(textures=textures, vertices=vertices, triangles=triangles)

    def _parse_simple_mesh(self) -> SimpleMesh:
        vertices = self._parse_list(self.reader.read_vec3)
        triangles = self._parse_list(self.reader.read_triangle)
        return SimpleMesh(vertices=vertices, triangles=triangles)

    def _parse_trigger_box(self) -> TriggerBox:
        # The name follows the meshes on disk
        meshes = self._parse_list(self._parse_simple_mesh)
        name = read_string(self.reader)
        return TriggerBox(name=name, meshes=meshes)

    def _parse_entity(self) -> Entity:
        return read_entity(self.reader)


def read_rmesh(data: bytes) -> Header:
    """Decode rmesh bytes into a Header."""
    return RMeshParser(data).read()


def parse_rmesh(filepath: str) -> Header:
    """Read and decode an rmesh file."""
    with open(filepath, 'rb') as f:
        data = f.read()
    logger.debug("Read %d bytes from %s", len(data), filepath)
    return read_rmesh(data)
