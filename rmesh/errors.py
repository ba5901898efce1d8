"""
Exceptions raised by the rmesh codec.

Every decode error records the byte offset at which it was detected so that
tools can point at the offending part of a file.
"""

from typing import Optional


class RMeshError(Exception):
    """Base class for all rmesh errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at offset 0x{offset:X})"
        super().__init__(message)
        self.offset = offset


class TruncatedError(RMeshError):
    """Fewer bytes remain than the next field needs."""

    def __init__(self, offset: int, needed: int, available: int):
        super().__init__(
            f"Unexpected end of data: needed {needed} bytes, {available} available",
            offset,
        )
        self.needed = needed
        self.available = available


class InvalidTextError(RMeshError):
    """A string payload is not valid UTF-8."""

    def __init__(self, offset: int, raw: bytes):
        super().__init__(f"String payload is not valid UTF-8: {raw!r}", offset)
        self.raw = raw


class InvalidNumericTripleError(RMeshError):
    def __init__(self, text: str, offset: Optional[int] = None):
        super().__init__(f"Expected three space separated bytes, got {text!r}", offset)
        self.text = text


class InvalidFormatTagError(RMeshError):
    def __init__(self, tag: str, offset: Optional[int] = None):
        super().__init__(
            f"Invalid header: expected RoomMesh or RoomMesh.HasTriggerBox, got {tag!r}",
            offset,
        )
        self.tag = tag


class UnknownEntityTagError(RMeshError):
    """The bytes after an entity's length field match no known entity magic."""

    def __init__(self, offset: int, found: bytes):
        super().__init__(f"Unknown entity tag starting with {found!r}", offset)
        self.found = found


class InvalidBlendTypeError(RMeshError):
    def __init__(self, offset: int, value: int):
        super().__init__(f"Invalid texture blend type {value}", offset)
        self.value = value


class EncodeError(RMeshError):
    """A value cannot be represented in the rmesh wire format."""
