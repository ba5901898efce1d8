"""Tests for length-prefixed strings and numeric triples."""

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from rmesh.binary import BinaryReader, BinaryWriter
from rmesh.errors import (
    EncodeError,
    InvalidNumericTripleError,
    InvalidTextError,
    TruncatedError,
)
from rmesh.strings import (
    format_numeric_triple,
    parse_numeric_triple,
    read_numeric_triple,
    read_string,
    write_numeric_triple,
    write_string,
)


def test_string_length_is_utf8_byte_length() -> None:
    """The prefix counts encoded bytes, not characters."""
    writer = BinaryWriter()
    write_string(writer, "héllo")
    data = writer.getvalue()

    assert data[:4] == b'\x06\x00\x00\x00'
    assert data[4:] == "héllo".encode('utf-8')
    assert read_string(BinaryReader(data)) == "héllo"


def test_empty_string() -> None:
    writer = BinaryWriter()
    write_string(writer, "")
    assert writer.getvalue() == b'\x00\x00\x00\x00'
    assert read_string(BinaryReader(writer.getvalue())) == ""


def test_invalid_utf8_is_rejected() -> None:
    """Invalid bytes are an error, never replaced."""
    with pytest.raises(InvalidTextError) as excinfo:
        read_string(BinaryReader(b'\x02\x00\x00\x00\xff\xfe'))
    assert excinfo.value.offset == 4
    assert excinfo.value.raw == b'\xff\xfe'


def test_string_shorter_than_declared_length() -> None:
    with pytest.raises(TruncatedError):
        read_string(BinaryReader(b'\x05\x00\x00\x00abc'))


def test_write_string_rejects_non_text() -> None:
    with pytest.raises(EncodeError):
        write_string(BinaryWriter(), b"bytes")
    with pytest.raises(EncodeError):
        write_string(BinaryWriter(), "\ud800")


def test_numeric_triple_exact_bytes() -> None:
    """(255, 0, 128) is stored as the 9-byte text "255 0 128"."""
    writer = BinaryWriter()
    write_numeric_triple(writer, (255, 0, 128))
    data = writer.getvalue()

    assert data == b'\x09\x00\x00\x00' + b'255 0 128'
    assert read_numeric_triple(BinaryReader(data)) == (255, 0, 128)


@pytest.mark.parametrize(
    "text",
    ["", "1 2", "1 2 3 4", "1  2 3", "256 0 0", "-1 0 0", "a b c", "1 2 3 ", "+1 2 3", "1.0 2 3"],
)
def test_malformed_triples(text: str) -> None:
    with pytest.raises(InvalidNumericTripleError):
        parse_numeric_triple(text)


def test_malformed_triple_in_stream_reports_offset() -> None:
    writer = BinaryWriter()
    writer.write_u32(0)
    write_string(writer, "12 34")
    reader = BinaryReader(writer.getvalue())
    reader.read_u32()

    with pytest.raises(InvalidNumericTripleError) as excinfo:
        read_numeric_triple(reader)
    assert excinfo.value.offset == 4
    assert excinfo.value.text == "12 34"


@pytest.mark.parametrize("values", [(1, 2), (1, 2, 3, 4), (0, 0, 256), (0, -1, 0), (1.0, 2, 3), None])
def test_format_numeric_triple_rejects_bad_values(values) -> None:
    with pytest.raises(EncodeError):
        format_numeric_triple(values)


def test_format_numeric_triple_accepts_lists() -> None:
    assert format_numeric_triple([0, 10, 200]) == "0 10 200"
