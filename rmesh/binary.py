"""
Little-endian primitive reader and writer.

All rmesh fields are built from a handful of fixed-size primitives:
- uint8, uint32 and float32, little-endian
- vec2 (2x float32), vec3 (3x float32)
- rgb (3x uint8), triangle (3x uint32)
- raw byte runs (string payloads, entity magic)

There is no padding or alignment between fields.
"""

import struct
from typing import Sequence, Tuple

from .errors import EncodeError, TruncatedError

U8 = struct.Struct('<B')
U32 = struct.Struct('<I')
F32 = struct.Struct('<f')
VEC2 = struct.Struct('<2f')
VEC3 = struct.Struct('<3f')
RGB = struct.Struct('<3B')
TRIANGLE = struct.Struct('<3I')


class BinaryReader:
    """Forward-only cursor over an in-memory buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _require(self, size: int):
        if size > self.remaining:
            raise TruncatedError(self.offset, size, self.remaining)

    def _unpack(self, fmt: struct.Struct) -> tuple:
        self._require(fmt.size)
        values = fmt.unpack_from(self.data, self.offset)
        self.offset += fmt.size
        return values

    def read_u8(self) -> int:
        return self._unpack(U8)[0]

    def read_u32(self) -> int:
        return self._unpack(U32)[0]

    def read_f32(self) -> float:
        return self._unpack(F32)[0]

    def read_vec2(self) -> Tuple[float, float]:
        return self._unpack(VEC2)

    def read_vec3(self) -> Tuple[float, float, float]:
        return self._unpack(VEC3)

    def read_rgb(self) -> Tuple[int, int, int]:
        return self._unpack(RGB)

    def read_triangle(self) -> Tuple[int, int, int]:
        return self._unpack(TRIANGLE)

    def read_bytes(self, size: int) -> bytes:
        """Read exactly ``size`` raw bytes."""
        self._require(size)
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def peek_bytes(self, size: int) -> bytes:
        """Return up to ``size`` bytes without advancing the cursor."""
        return self.data[self.offset:self.offset + size]


class BinaryWriter:
    """Append-only little-endian byte sink."""

    def __init__(self):
        self.buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def _pack(self, fmt: struct.Struct, *values, what: str):
        try:
            self.buffer += fmt.pack(*values)
        except (struct.error, OverflowError, TypeError) as e:
            raise EncodeError(f"Cannot encode {values!r} as {what}: {e}") from e

    def write_u8(self, value: int):
        self._pack(U8, value, what="uint8")

    def write_u32(self, value: int):
        self._pack(U32, value, what="uint32")

    def write_f32(self, value: float):
        self._pack(F32, value, what="float32")

    def write_vec2(self, value: Sequence[float]):
        self._pack(VEC2, *_fixed(value, 2, "vec2"), what="vec2")

    def write_vec3(self, value: Sequence[float]):
        self._pack(VEC3, *_fixed(value, 3, "vec3"), what="vec3")

    def write_rgb(self, value: Sequence[int]):
        self._pack(RGB, *_fixed(value, 3, "rgb"), what="rgb")

    def write_triangle(self, value: Sequence[int]):
        self._pack(TRIANGLE, *_fixed(value, 3, "triangle"), what="triangle")

    def write_bytes(self, value: bytes):
        self.buffer += value


def _fixed(value, size: int, what: str) -> tuple:
    """Check that a composite field has exactly ``size`` components."""
    try:
        items = tuple(value)
    except TypeError as e:
        raise EncodeError(f"Cannot encode {value!r} as {what}") from e
    if len(items) != size:
        raise EncodeError(f"{what} needs {size} components, got {len(items)}")
    return items
