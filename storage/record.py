"""Record decoding.

A record is a header followed by the column values:

    [header_size:varint][serial_type:varint]...[value_0][value_1]...

``header_size`` counts its own varint. Each serial type fixes how many bytes
its value occupies, so reaching column N means summing the widths of
columns 0..N-1.

Serial types:
    0       NULL                    0 bytes
    1-4     signed int              1, 2, 3, 4 bytes
    5       signed int              6 bytes
    6       signed int              8 bytes
    7       IEEE 754 float          8 bytes
    8, 9    constant 0, constant 1  0 bytes
    10, 11  reserved
    N>=12   even: blob, odd: text   (N-12)/2 or (N-13)/2 bytes
"""

import struct
from typing import Any

from exceptions import ColumnIndexOutOfRange, InvalidSerialType, InvalidText, TruncatedInput
from models.storage import RecordHeader
from storage import varint

INT_WIDTHS = {1: 1, 2: 2, 3: 3, 4: 4, 5: 6, 6: 8}


def serial_type_width(serial_type: int) -> int:
    """Number of value bytes a serial type occupies."""
    if serial_type in INT_WIDTHS:
        return INT_WIDTHS[serial_type]
    if serial_type in (0, 8, 9):
        return 0
    if serial_type == 7:
        return 8
    if serial_type >= 12:
        return (serial_type - 12) // 2 if serial_type % 2 == 0 else (serial_type - 13) // 2
    raise InvalidSerialType(serial_type)


def decode_record(page: bytes, record_start: int) -> RecordHeader:
    """Decode the record header starting at ``record_start``."""
    header_size, consumed = varint.decode(page, record_start)
    header_end = record_start + header_size

    if header_size < consumed or header_end > len(page):
        raise TruncatedInput(f"Record header size {header_size} out of bounds", record_start)

    serial_types = []
    pos = record_start + consumed
    while pos < header_end:
        serial_type, n = varint.decode(page, pos)
        serial_types.append(serial_type)
        pos += n

    if pos != header_end:
        raise TruncatedInput(f"Serial types overrun record header of {header_size} bytes", record_start)

    return RecordHeader(header_size=header_size, serial_types=tuple(serial_types), values_start=header_end)


def decode_value(page: bytes, offset: int, serial_type: int, encoding: str = "utf-8") -> Any:
    """Decode one value of the given serial type at ``offset``."""
    width = serial_type_width(serial_type)
    end = offset + width
    if end > len(page):
        raise TruncatedInput(f"Value of serial type {serial_type} runs past end of buffer", offset)

    raw = page[offset:end]
    if serial_type == 0:
        return None
    if serial_type in INT_WIDTHS:
        return int.from_bytes(raw, byteorder="big", signed=True)
    if serial_type == 7:
        return struct.unpack(">d", raw)[0]
    if serial_type == 8:
        return 0
    if serial_type == 9:
        return 1
    if serial_type % 2 == 0:
        return bytes(raw)
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise InvalidText(offset, encoding) from e


def column_offset(values_start: int, serial_types: tuple[int, ...] | list[int], index: int) -> int:
    """Byte offset where column ``index`` begins."""
    if index < 0 or index >= len(serial_types):
        raise ColumnIndexOutOfRange(index, len(serial_types))
    return values_start + sum(serial_type_width(t) for t in serial_types[:index])


def read_column(
    page: bytes,
    values_start: int,
    serial_types: tuple[int, ...] | list[int],
    index: int,
    encoding: str = "utf-8",
) -> Any:
    """Decode only column ``index`` of a record."""
    offset = column_offset(values_start, serial_types, index)
    return decode_value(page, offset, serial_types[index], encoding)


def read_record(page: bytes, record_start: int, encoding: str = "utf-8") -> list[Any]:
    """Decode every column of the record at ``record_start``."""
    header = decode_record(page, record_start)
    values = []
    offset = header.values_start
    for serial_type in header.serial_types:
        values.append(decode_value(page, offset, serial_type, encoding))
        offset += serial_type_width(serial_type)
    return values
