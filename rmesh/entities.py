"""
Entity records placed in a room.

Entity layout:
- uint32: length of the magic that follows (must match the magic)
- ASCII magic selecting the entity type ("light", "model", ...)
- the type's fields, back to back

Nothing delimits an entity's payload, so an unknown magic cannot be skipped.
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple, Type, Union

from .binary import BinaryReader, BinaryWriter
from .errors import EncodeError, TruncatedError, UnknownEntityTagError
from .strings import read_numeric_triple, read_string, write_numeric_triple, write_string

Vec3 = Tuple[float, float, float]
Triple = Tuple[int, int, int]


@dataclass(frozen=True)
class EntityScreen:
    """Wall screen showing an image"""
    magic: ClassVar[bytes] = b"screen"

    position: Vec3
    name: str

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntityScreen":
        position = reader.read_vec3()
        return cls(position=position, name=read_string(reader))

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)
        write_string(writer, self.name)


@dataclass(frozen=True)
class EntityWaypoint:
    """Navigation waypoint"""
    magic: ClassVar[bytes] = b"waypoint"

    position: Vec3

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntityWaypoint":
        return cls(position=reader.read_vec3())

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)


@dataclass(frozen=True)
class EntityLight:
    """Point light"""
    magic: ClassVar[bytes] = b"light"

    position: Vec3
    range: float
    color: Triple
    intensity: float

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntityLight":
        position = reader.read_vec3()
        light_range = reader.read_f32()
        color = read_numeric_triple(reader)
        intensity = reader.read_f32()
        return cls(position=position, range=light_range, color=color, intensity=intensity)

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)
        writer.write_f32(self.range)
        write_numeric_triple(writer, self.color)
        writer.write_f32(self.intensity)


@dataclass(frozen=True)
class EntitySpotlight:
    """Spot light; ``angles`` is stored as a numeric triple like the color"""
    magic: ClassVar[bytes] = b"spotlight"

    position: Vec3
    range: float
    color: Triple
    intensity: float
    angles: Triple
    inner_cone_angle: float
    outer_cone_angle: float

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntitySpotlight":
        position = reader.read_vec3()
        light_range = reader.read_f32()
        color = read_numeric_triple(reader)
        intensity = reader.read_f32()
        angles = read_numeric_triple(reader)
        inner_cone_angle = reader.read_f32()
        outer_cone_angle = reader.read_f32()
        return cls(
            position=position,
            range=light_range,
            color=color,
            intensity=intensity,
            angles=angles,
            inner_cone_angle=inner_cone_angle,
            outer_cone_angle=outer_cone_angle,
        )

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)
        writer.write_f32(self.range)
        write_numeric_triple(writer, self.color)
        writer.write_f32(self.intensity)
        write_numeric_triple(writer, self.angles)
        writer.write_f32(self.inner_cone_angle)
        writer.write_f32(self.outer_cone_angle)


@dataclass(frozen=True)
class EntitySoundEmitter:
    """Ambient sound source.

    The two fields after the position have no known meaning and are kept
    as read.
    """
    magic: ClassVar[bytes] = b"soundemitter"

    position: Vec3
    reserved_int: int
    reserved_float: float

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntitySoundEmitter":
        position = reader.read_vec3()
        reserved_int = reader.read_u32()
        reserved_float = reader.read_f32()
        return cls(position=position, reserved_int=reserved_int, reserved_float=reserved_float)

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)
        writer.write_u32(self.reserved_int)
        writer.write_f32(self.reserved_float)


@dataclass(frozen=True)
class EntityPlayerStart:
    """Player spawn point"""
    magic: ClassVar[bytes] = b"playerstart"

    position: Vec3
    angles: str

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntityPlayerStart":
        position = reader.read_vec3()
        return cls(position=position, angles=read_string(reader))

    def write(self, writer: BinaryWriter):
        writer.write_vec3(self.position)
        write_string(writer, self.angles)


@dataclass(frozen=True)
class EntityModel:
    """Decorative prop model; ``rotation`` is Euler XYZ in radians"""
    magic: ClassVar[bytes] = b"model"

    name: str
    position: Vec3
    rotation: Vec3
    scale: Vec3

    @classmethod
    def read(cls, reader: BinaryReader) -> "EntityModel":
        name = read_string(reader)
        position = reader.read_vec3()
        rotation = reader.read_vec3()
        scale = reader.read_vec3()
        return cls(name=name, position=position, rotation=rotation, scale=scale)

    def write(self, writer: BinaryWriter):
        write_string(writer, self.name)
        writer.write_vec3(self.position)
        writer.write_vec3(self.rotation)
        writer.write_vec3(self.scale)


Entity = Union[
    EntityScreen,
    EntityWaypoint,
    EntityLight,
    EntitySpotlight,
    EntitySoundEmitter,
    EntityPlayerStart,
    EntityModel,
]

# Matched in this order against the bytes following the length field.
ENTITY_TYPES: Dict[bytes, Type] = {
    cls.magic: cls
    for cls in (
        EntityScreen,
        EntityWaypoint,
        EntityLight,
        EntitySpotlight,
        EntitySoundEmitter,
        EntityPlayerStart,
        EntityModel,
    )
}

MAX_MAGIC_LENGTH = max(len(magic) for magic in ENTITY_TYPES)


def read_entity(reader: BinaryReader) -> Entity:
    """Read one entity, dispatching on its magic.

    The magic must fill the declared tag length exactly, so "light_fix"
    is rejected instead of being read as a light.
    """
    declared_length = reader.read_u32()
    tag_offset = reader.offset
    head = reader.peek_bytes(MAX_MAGIC_LENGTH)

    for magic, cls in ENTITY_TYPES.items():
        if head.startswith(magic):
            break
    else:
        if any(magic.startswith(head) for magic in ENTITY_TYPES):
            # Ran out of data in the middle of a magic
            raise TruncatedError(tag_offset, MAX_MAGIC_LENGTH, reader.remaining)
        raise UnknownEntityTagError(tag_offset, head)

    if declared_length != len(magic):
        raise UnknownEntityTagError(tag_offset, head)

    reader.read_bytes(len(magic))
    return cls.read(reader)


def write_entity(writer: BinaryWriter, entity: Entity):
    """Write one entity with its length field and magic."""
    cls = type(entity)
    if ENTITY_TYPES.get(getattr(cls, 'magic', None)) is not cls:
        raise EncodeError(f"Not an rmesh entity: {entity!r}")
    writer.write_u32(len(cls.magic))
    writer.write_bytes(cls.magic)
    entity.write(writer)
