"""Storage layer: page-based reads, varints, records and leaf page scanning."""

from storage.pager import Pager
from storage.pages import LeafPageScanner, read_page_header, scan_table
from storage.record import decode_record, read_column, read_record

__all__ = [
    "Pager",
    "LeafPageScanner",
    "decode_record",
    "read_column",
    "read_page_header",
    "read_record",
    "scan_table",
]
