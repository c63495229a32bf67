#!/usr/bin/env python3
"""Database inspection tool for debugging and learning.

Usage:
    python tools/db_inspect.py --db ./sample.db --summary
    python tools/db_inspect.py --db ./sample.db --page 2
    python tools/db_inspect.py --db ./sample.db --schema
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog import build_catalog, parse_column_names
from exceptions import DatabaseError
from models.storage import PageType
from storage.pager import Pager, btree_header_offset
from storage.pages import LeafPageScanner, read_page_header
from storage.record import read_record

MAX_CELLS_SHOWN = 10


def print_header(pager: Pager) -> None:
    """Print file header information."""
    header = pager.header
    print("=== File Header ===")
    print(f"  Page Size: {header.page_size} bytes")
    print(f"  Usable Size: {header.usable_size} bytes")
    print(f"  Database Size: {header.database_size} pages")
    print(f"  Change Counter: {header.file_change_counter}")
    print(f"  Schema Cookie: {header.schema_cookie}")
    print(f"  Schema Format: {header.schema_format}")
    print(f"  Text Encoding: {header.encoding}")
    print(f"  SQLite Version: {header.sqlite_version_number}")
    print()


def print_schema(pager: Pager) -> None:
    """Print every schema object from page 1."""
    print("=== Schema ===")
    catalog = build_catalog(pager)
    for name in catalog:
        entry = catalog[name]
        print(f"  {entry.type} {entry.name!r} (tbl_name={entry.tbl_name!r}, root_page={entry.root_page})")
        if entry.type == "table" and entry.sql:
            print(f"    columns: {', '.join(parse_column_names(entry.sql))}")
    print()


def print_summary(pager: Pager) -> None:
    """Print database summary."""
    print("=" * 50)
    print("DATABASE SUMMARY")
    print("=" * 50)
    print()

    print_header(pager)

    print("=== File Statistics ===")
    print(f"  Total Pages: {pager.page_count}")
    print(f"  File Size: {pager.page_count * pager.page_size} bytes")
    print()

    print_schema(pager)


def print_page(pager: Pager, page_number: int) -> None:
    """Print details of a specific page."""
    page = pager.read_page(page_number)
    header = read_page_header(page, page_number)

    print(f"=== Page {page_number} ===")
    print(f"  Type: {header.page_type.name}")
    print(f"  Header Offset: {btree_header_offset(page_number)}")
    print(f"  Cell Count: {header.cell_count}")
    print(f"  Cell Content Start: {header.cell_content_start}")
    print(f"  Fragmented Free Bytes: {header.fragmented_free_bytes}")
    if header.right_child is not None:
        print(f"  Right Child: {header.right_child}")

    if header.page_type == PageType.LEAF_TABLE:
        scanner = LeafPageScanner(page, page_number, header)
        for i, cell in enumerate(scanner):
            if i >= MAX_CELLS_SHOWN:
                print(f"    ... and {header.cell_count - MAX_CELLS_SHOWN} more cells")
                break
            values = read_record(page, cell.record_start, pager.header.encoding)
            print(f"    [{i}] offset={cell.offset} rowid={cell.rowid} payload={cell.payload_size} {_values_repr(values)}")

    print()


def _values_repr(values: list, max_len: int = 20) -> str:
    """Format record values for display."""
    parts = []
    for value in values:
        text = repr(value)
        if len(text) > max_len:
            text = text[:max_len] + "..."
        parts.append(text)
    return "(" + ", ".join(parts) + ")"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Inspect SQLite database files")
    parser.add_argument("--db", required=True, help="Path to database file")
    parser.add_argument("--summary", action="store_true", help="Show database summary")
    parser.add_argument("--page", type=int, help="Show specific page")
    parser.add_argument("--schema", action="store_true", help="Show schema objects")

    args = parser.parse_args(argv)

    db_path = Path(args.db)
    if not db_path.exists():
        print(f"Error: Database file not found: {db_path}", file=sys.stderr)
        sys.exit(1)

    try:
        with Pager(db_path) as pager:
            if args.summary:
                print_summary(pager)
            elif args.page is not None:
                print_page(pager, args.page)
            elif args.schema:
                print_schema(pager)
            else:
                print_summary(pager)
    except DatabaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
