"""Database file header model.

The first 100 bytes of the file. All multi-byte fields are big-endian.

Struct format reference (https://docs.python.org/3/library/struct.html):
    >   = big-endian byte order
    16s = 16-byte string (magic)
    H   = unsigned short (2 bytes)
    B   = unsigned char (1 byte)
    I   = unsigned int (4 bytes)
"""

import struct
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, field_validator

from exceptions import InvalidHeader

MAGIC = b"SQLite format 3\x00"

# File header is always 100 bytes, even though most of it is unused here
HEADER_SIZE = 100

# [magic:16][page_size:2][write_version:1][read_version:1][reserved_space:1]
HEADER_PREFIX_FMT = ">16sHBBB"
HEADER_PREFIX_SIZE = 21

TEXT_ENCODINGS = {1: "utf-8", 2: "utf-16-le", 3: "utf-16-be"}


def _u32(data: bytes, offset: int) -> int:
    return struct.unpack(">I", data[offset : offset + 4])[0]


class FileHeader(BaseModel):
    """Database file header (first 100 bytes of page 1).

    Layout (fields this reader uses):
        offset  size  field
        ------  ----  -----
        0       16    magic "SQLite format 3\\0"
        16      2     page_size (1 means 65536)
        20      1     reserved_space at the end of each page
        24      4     file_change_counter
        28      4     database_size in pages
        40      4     schema_cookie
        44      4     schema_format
        56      4     text_encoding (1 UTF-8, 2 UTF-16le, 3 UTF-16be)
        96      4     sqlite_version_number
    """

    model_config = ConfigDict(frozen=True)

    SIZE: ClassVar[int] = HEADER_SIZE

    page_size: int
    write_version: int = 1
    read_version: int = 1
    reserved_space: int = 0
    file_change_counter: int = 0
    database_size: int = 0
    schema_cookie: int = 0
    schema_format: int = 4
    text_encoding: int = 1
    sqlite_version_number: int = 0

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 512 or v > 65536:
            raise ValueError(f"Page size must be between 512 and 65536, got {v}")
        if v & (v - 1) != 0:
            raise ValueError(f"Page size must be a power of 2, got {v}")
        return v

    @field_validator("text_encoding")
    @classmethod
    def validate_text_encoding(cls, v: int) -> int:
        # 0 shows up in freshly created, still empty files
        if v == 0:
            return 1
        if v not in TEXT_ENCODINGS:
            raise ValueError(f"Unknown text encoding: {v}")
        return v

    @property
    def usable_size(self) -> int:
        """Bytes per page available to b-tree content."""
        return self.page_size - self.reserved_space

    @property
    def encoding(self) -> str:
        """Python codec name for text values."""
        return TEXT_ENCODINGS[self.text_encoding]

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """Deserialize from the first 100 bytes of the file."""
        if len(data) < HEADER_SIZE:
            raise InvalidHeader(f"Data too short: expected at least {HEADER_SIZE} bytes, got {len(data)}")

        magic, raw_page_size, write_version, read_version, reserved_space = struct.unpack(
            HEADER_PREFIX_FMT, data[:HEADER_PREFIX_SIZE]
        )

        if magic != MAGIC:
            raise InvalidHeader(f"Invalid magic bytes: expected {MAGIC!r}, got {magic!r}")

        # 65536 does not fit in 16 bits, so it is stored as 1
        page_size = 65536 if raw_page_size == 1 else raw_page_size

        try:
            return cls(
                page_size=page_size,
                write_version=write_version,
                read_version=read_version,
                reserved_space=reserved_space,
                file_change_counter=_u32(data, 24),
                database_size=_u32(data, 28),
                schema_cookie=_u32(data, 40),
                schema_format=_u32(data, 44),
                text_encoding=_u32(data, 56),
                sqlite_version_number=_u32(data, 96),
            )
        except ValueError as e:
            raise InvalidHeader(str(e)) from e

    def to_bytes(self) -> bytes:
        """Serialize to a 100-byte header. Fields this model does not track are zero."""
        data = bytearray(HEADER_SIZE)
        raw_page_size = 1 if self.page_size == 65536 else self.page_size
        data[:HEADER_PREFIX_SIZE] = struct.pack(
            HEADER_PREFIX_FMT, MAGIC, raw_page_size, self.write_version, self.read_version, self.reserved_space
        )
        # Payload fractions are fixed by the format
        data[21:24] = bytes([64, 32, 32])
        for offset, value in (
            (24, self.file_change_counter),
            (28, self.database_size),
            (40, self.schema_cookie),
            (44, self.schema_format),
            (56, self.text_encoding),
            (96, self.sqlite_version_number),
        ):
            data[offset : offset + 4] = struct.pack(">I", value)
        return bytes(data)
