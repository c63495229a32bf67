"""B-tree page decoding.

Leaf table page layout (header at byte 100 on page 1, byte 0 elsewhere):
    [PageHeader:8][cell_pointers:2*n]...[unallocated]...[cells]

Each cell pointer is a big-endian offset from the start of the page (not
from the header) to a cell:
    [payload_size:varint][rowid:varint][record:payload_size]

Only leaf table pages are scanned. Interior pages would require following
child page numbers, which this reader does not do, so they are rejected
rather than silently producing a partial result.
"""

import struct
from collections.abc import Iterator

from exceptions import CellOverflow, InvalidCellPointer, TruncatedInput, UnsupportedPage
from models.storage import Cell, PageHeader, PageType
from storage import varint
from storage.pager import Pager, btree_header_offset

CELL_POINTER_FMT = ">H"
CELL_POINTER_SIZE = 2


def read_page_header(page: bytes, page_number: int) -> PageHeader:
    """Decode the b-tree header of a page already read from disk."""
    offset = btree_header_offset(page_number)
    if offset >= len(page):
        raise TruncatedInput("Page too short for b-tree page header", offset)
    try:
        return PageHeader.from_bytes(page, offset)
    except ValueError as e:
        raise UnsupportedPage(page_number, page[offset]) from e


def read_cell(page: bytes, offset: int, page_number: int) -> Cell:
    """Decode the leaf table cell starting at ``offset``."""
    payload_size, n = varint.decode(page, offset)
    rowid, m = varint.decode(page, offset + n)
    record_start = offset + n + m

    if record_start + payload_size > len(page):
        raise CellOverflow(page_number, offset, payload_size, len(page))

    return Cell(offset=offset, payload_size=payload_size, rowid=rowid, record_start=record_start)


class LeafPageScanner:
    """Iterates the cells of one leaf table page in cell-pointer order.

    Iteration is lazy and can be restarted: each ``iter()`` walks the
    cell-pointer array again over the same page bytes.
    """

    def __init__(self, page: bytes, page_number: int, header: PageHeader | None = None):
        self.page = page
        self.page_number = page_number
        self.header = header or read_page_header(page, page_number)

        if self.header.page_type != PageType.LEAF_TABLE:
            raise UnsupportedPage(page_number, self.header.page_type)

        self._pointers_start = btree_header_offset(page_number) + self.header.size

    @property
    def cell_count(self) -> int:
        return self.header.cell_count

    def cell_pointer(self, index: int) -> int:
        """Offset of cell ``index`` from the start of the page."""
        pos = self._pointers_start + CELL_POINTER_SIZE * index
        if pos + CELL_POINTER_SIZE > len(self.page):
            raise TruncatedInput("Cell pointer array runs past end of page", pos)

        (pointer,) = struct.unpack(CELL_POINTER_FMT, self.page[pos : pos + CELL_POINTER_SIZE])
        if pointer >= len(self.page):
            raise InvalidCellPointer(self.page_number, index, pointer, len(self.page))
        return pointer

    def __len__(self) -> int:
        return self.cell_count

    def __iter__(self) -> Iterator[Cell]:
        for i in range(self.cell_count):
            yield read_cell(self.page, self.cell_pointer(i), self.page_number)


def scan_table(pager: Pager, page_number: int) -> LeafPageScanner:
    """Open the table b-tree rooted at ``page_number`` for scanning.

    Dispatches on the page type. A leaf table page is the whole table and is
    scanned directly. An interior table page means the table spans several
    pages; that raises ``UnsupportedPage`` instead of returning a count or a
    row list covering only part of the table.
    """
    page = pager.read_page(page_number)
    header = read_page_header(page, page_number)

    match header.page_type:
        case PageType.LEAF_TABLE:
            return LeafPageScanner(page, page_number, header)
        case _:
            raise UnsupportedPage(page_number, header.page_type)
