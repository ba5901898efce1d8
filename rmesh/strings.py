"""
String encodings used by rmesh files.

Length-prefixed string:
- uint32 byte length, followed by exactly that many UTF-8 bytes

Numeric triple:
- three uint8 values written as decimal text, joined by single spaces,
  stored as a length-prefixed string (e.g. colors are "255 0 128")
"""

from typing import Optional, Sequence, Tuple

from .binary import BinaryReader, BinaryWriter
from .errors import EncodeError, InvalidNumericTripleError, InvalidTextError


def read_string(reader: BinaryReader) -> str:
    """Read a length-prefixed UTF-8 string."""
    length = reader.read_u32()
    start = reader.offset
    raw = reader.read_bytes(length)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidTextError(start, raw) from e


def write_string(writer: BinaryWriter, text: str):
    """Write a length-prefixed UTF-8 string."""
    if not isinstance(text, str):
        raise EncodeError(f"Expected a string, got {text!r}")
    try:
        raw = text.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodeError(f"String {text!r} cannot be encoded as UTF-8") from e
    writer.write_u32(len(raw))
    writer.write_bytes(raw)


def parse_numeric_triple(text: str, offset: Optional[int] = None) -> Tuple[int, int, int]:
    """Parse "r g b" text into three bytes."""
    tokens = text.split(' ')
    if len(tokens) != 3:
        raise InvalidNumericTripleError(text, offset)
    values = []
    for token in tokens:
        # ASCII digits only, no signs or "_"
        if not (token.isascii() and token.isdigit()):
            raise InvalidNumericTripleError(text, offset)
        value = int(token)
        if value > 255:
            raise InvalidNumericTripleError(text, offset)
        values.append(value)
    return tuple(values)


def format_numeric_triple(values: Sequence[int]) -> str:
    """Format three bytes as "r g b" text."""
    try:
        items = tuple(values)
    except TypeError as e:
        raise EncodeError(f"Expected three bytes, got {values!r}") from e
    if len(items) != 3:
        raise EncodeError(f"Expected three bytes, got {values!r}")
    for value in items:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise EncodeError(f"Expected three bytes, got {values!r}")
    return ' '.join(str(value) for value in items)


def read_numeric_triple(reader: BinaryReader) -> Tuple[int, int, int]:
    start = reader.offset
    return parse_numeric_triple(read_string(reader), start)


def write_numeric_triple(writer: BinaryWriter, values: Sequence[int]):
    write_string(writer, format_numeric_triple(values))
