"""
RMesh file writer.

Mirrors rmesh_parser: every count and the header tag are derived from the
Header's collections while writing, so a written file always agrees with
its contents.
"""

import logging
from typing import Callable, Sequence

from .binary import BinaryWriter
from .entities import Entity, write_entity
from .errors import EncodeError
from .rmesh_parser import (
    ComplexMesh,
    Header,
    SimpleMesh,
    Texture,
    TextureBlendType,
    TriggerBox,
    Vertex,
)
from .strings import write_string

logger = logging.getLogger(__name__)


class RMeshWriter:
    """Serializes a Header into rmesh bytes"""

    def __init__(self):
        self.writer = BinaryWriter()

    def write(self, header: Header) -> bytes:
        header_type = header.header_type
        if header.format_variant is not header_type:
            logger.debug(
                "Writing tag %s instead of %s to match the trigger boxes",
                header_type.value, header.format_variant.value,
            )
        write_string(self.writer, header_type.value)

        self._write_list(header.meshes, self._write_complex_mesh)
        self._write_list(header.colliders, self._write_simple_mesh)
        if header.trigger_boxes:
            self._write_list(header.trigger_boxes, self._write_trigger_box)
        self._write_list(header.entities, self._write_entity)

        data = self.writer.getvalue()
        logger.debug(
            "Wrote %s: %d meshes, %d colliders, %d trigger boxes, %d entities (%d bytes)",
            header_type.value, len(header.meshes), len(header.colliders),
            len(header.trigger_boxes), len(header.entities), len(data),
        )
        return data

    def _write_list(self, items: Sequence, write_item: Callable):
        self.writer.write_u32(len(items))
        for item in items:
            write_item(item)

    def _write_texture(self, texture: Texture):
        try:
            blend_type = TextureBlendType(texture.blend_type)
        except ValueError:
            raise EncodeError(f"Invalid texture blend type {texture.blend_type!r}") from None

        has_path = texture.path is not None
        if has_path != (blend_type is not TextureBlendType.NONE):
            raise EncodeError(
                f"Texture with blend type {blend_type.name} "
                f"{'must not' if blend_type is TextureBlendType.NONE else 'must'} have a path"
            )

        self.writer.write_u8(blend_type)
        if has_path:
            write_string(self.writer, texture.path)

    def _write_vertex(self, vertex: Vertex):
        if len(vertex.tex_coords) != 2:
            raise EncodeError(f"Vertex needs 2 UV sets, got {len(vertex.tex_coords)}")
        self.writer.write_vec3(vertex.position)
        self.writer.write_vec2(vertex.tex_coords[0])
        self.writer.write_vec2(vertex.tex_coords[1])
        self.writer.write_rgb(vertex.color)

    def _write_complex_mesh(self, mesh: ComplexMesh):
        if len(mesh.textures) != 2:
            raise EncodeError(f"Complex mesh needs 2 textures, got {len(mesh.textures)}")
        for texture in mesh.textures:
            self._write_texture(texture)
        self._write_list(mesh.vertices, self._write_vertex)
        self._write_list(mesh.triangles, self.writer.write_triangle)

    def _write_simple_mesh(self, mesh: SimpleMesh):
        self._write_list(mesh.vertices, self.writer.write_vec3)
        self._write_list(mesh.triangles, self.writer.write_triangle)

    def _write_trigger_box(self, trigger_box: TriggerBox):
        self._write_list(trigger_box.meshes, self._write_simple_mesh)
        write_string(self.writer, trigger_box.name)

    def _write_entity(self, entity: Entity):
        write_entity(self.writer, entity)


def write_rmesh(header: Header) -> bytes:
    """Encode a Header into rmesh bytes."""
    return RMeshWriter().write(header)


def save_rmesh(header: Header, filepath: str):
    """Encode a Header and write it to ``filepath``."""
    data = write_rmesh(header)
    with open(filepath, 'wb') as f:
        f.write(data)
    logger.debug("Wrote %d bytes to %s", len(data), filepath)
