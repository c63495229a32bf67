"""Page-based read access to a database file.

File layout:
    Bytes 0-99:  File header (magic, page_size, text encoding, ...)
    Page 1:      Bytes 0 .. page_size-1, the b-tree header starts at byte 100
    Page N:      Bytes (N-1)*page_size .. N*page_size-1

Pages are numbered from 1. The Pager reads each page fresh from the file on
every call; nothing is cached between reads.
"""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Self

from exceptions import PageIOError
from models.header import HEADER_SIZE, FileHeader

logger = logging.getLogger(__name__)

SCHEMA_PAGE_NUMBER = 1


def btree_header_offset(page_number: int) -> int:
    """Offset of the b-tree page header within a page (page 1 carries the file header first)."""
    return HEADER_SIZE if page_number == SCHEMA_PAGE_NUMBER else 0


class Pager:
    """Read-only page access for a database file.

    Opens the file, reads the file header once, and then serves whole pages
    by 1-based page number. Use as a context manager so the file is closed on
    every path.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._file: BinaryIO | None = None

        if not self.path.exists():
            raise FileNotFoundError(f"Database file not found: {self.path}")

        self._file = open(self.path, "rb")
        try:
            self._header = self._read_header()
        except Exception:
            self.close()
            raise

        logger.debug("Opened %s (page_size=%d)", self.path, self._header.page_size)

    def _read_header(self) -> FileHeader:
        """Read and validate the 100-byte file header."""
        data = self._read_at(0, HEADER_SIZE, page_number=SCHEMA_PAGE_NUMBER)
        return FileHeader.from_bytes(data)

    def _read_at(self, offset: int, length: int, page_number: int) -> bytes:
        if self._file is None:
            raise PageIOError("Pager is closed", page_number)

        try:
            self._file.seek(offset)
            data = self._file.read(length)
        except OSError as e:
            raise PageIOError(f"Failed to read page {page_number}: {e}", page_number) from e

        if len(data) < length:
            raise PageIOError(
                f"Incomplete page read at page {page_number}: expected {length} bytes, got {len(data)}",
                page_number,
            )

        return data

    @property
    def header(self) -> FileHeader:
        return self._header

    @property
    def page_size(self) -> int:
        return self._header.page_size

    @property
    def page_count(self) -> int:
        """Total number of pages in the file, from its size on disk."""
        return os.path.getsize(self.path) // self.page_size

    def _page_offset(self, page_number: int) -> int:
        """Calculate file offset for a page number."""
        return (page_number - 1) * self.page_size

    def read_page(self, page_number: int) -> bytes:
        """Read exactly ``page_size`` bytes for a 1-based page number."""
        if page_number < 1:
            raise PageIOError(f"Invalid page number: {page_number}", page_number)

        logger.debug("Reading page %d", page_number)
        return self._read_at(self._page_offset(page_number), self.page_size, page_number)

    def close(self) -> None:
        """Close the database file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
