"""Storage-related models: b-tree page headers, cells and record headers.

Struct format reference (https://docs.python.org/3/library/struct.html):
    >  = big-endian byte order
    B  = unsigned char (1 byte)
    H  = unsigned short (2 bytes)
    I  = unsigned int (4 bytes)
"""

import struct
from enum import IntEnum
from typing import Self

from pydantic import BaseModel, ConfigDict

from exceptions import TruncatedInput

# PageHeader format: [page_type:1][first_freeblock:2][cell_count:2][content_start:2][fragmented:1]
PAGE_HEADER_FMT = ">BHHHB"
LEAF_HEADER_SIZE = 8
# Interior pages append [right_child:4]
INTERIOR_HEADER_SIZE = 12


class PageType(IntEnum):
    """B-tree page type identifiers (first byte of the b-tree page header)."""

    INTERIOR_INDEX = 0x02
    INTERIOR_TABLE = 0x05
    LEAF_INDEX = 0x0A
    LEAF_TABLE = 0x0D


class PageHeader(BaseModel):
    """B-tree page header.

    Starts at byte 100 on page 1 and at byte 0 on every other page.

    Layout:
        offset  size  field
        ------  ----  -----
        0       1     page_type
        1       2     first_freeblock
        3       2     cell_count
        5       2     cell_content_start (0 means 65536)
        7       1     fragmented_free_bytes
        8       4     right_child (interior pages only)
    """

    model_config = ConfigDict(frozen=True)

    page_type: PageType
    first_freeblock: int = 0
    cell_count: int = 0
    cell_content_start: int = 0
    fragmented_free_bytes: int = 0
    right_child: int | None = None

    @property
    def is_leaf(self) -> bool:
        return self.page_type in (PageType.LEAF_TABLE, PageType.LEAF_INDEX)

    @property
    def size(self) -> int:
        """Header length, i.e. the offset of the cell-pointer array from the header start."""
        return LEAF_HEADER_SIZE if self.is_leaf else INTERIOR_HEADER_SIZE

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> Self:
        """Deserialize the header starting at ``offset`` within a page."""
        if len(data) < offset + LEAF_HEADER_SIZE:
            raise TruncatedInput("Page too short for b-tree page header", offset)

        page_type, first_freeblock, cell_count, content_start, fragmented = struct.unpack(
            PAGE_HEADER_FMT, data[offset : offset + LEAF_HEADER_SIZE]
        )

        if page_type not in PageType._value2member_map_:
            raise ValueError(f"Invalid page type: 0x{page_type:02x}")

        right_child = None
        if page_type in (PageType.INTERIOR_TABLE, PageType.INTERIOR_INDEX):
            if len(data) < offset + INTERIOR_HEADER_SIZE:
                raise TruncatedInput("Page too short for interior page header", offset)
            (right_child,) = struct.unpack(">I", data[offset + 8 : offset + 12])

        return cls(
            page_type=PageType(page_type),
            first_freeblock=first_freeblock,
            cell_count=cell_count,
            cell_content_start=content_start or 65536,
            fragmented_free_bytes=fragmented,
            right_child=right_child,
        )


class Cell(BaseModel):
    """A leaf table cell: one row.

    ``offset`` is where the cell starts in its page, ``record_start`` is where
    the record (header_size varint) starts, right after the rowid varint.
    """

    model_config = ConfigDict(frozen=True)

    offset: int
    payload_size: int
    rowid: int
    record_start: int

    @property
    def record_end(self) -> int:
        return self.record_start + self.payload_size


class RecordHeader(BaseModel):
    """Decoded record header: one serial type per column, and where values begin."""

    model_config = ConfigDict(frozen=True)

    header_size: int
    serial_types: tuple[int, ...]
    values_start: int

    @property
    def column_count(self) -> int:
        return len(self.serial_types)
