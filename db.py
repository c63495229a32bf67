import logging
from pathlib import Path
from typing import Any, Self

from catalog import SchemaCatalog, build_catalog, parse_columns
from exceptions import ColumnNotFound
from models import ColumnValues, DatabaseInfo, RowCount, TableList
from storage.pager import SCHEMA_PAGE_NUMBER, Pager
from storage.pages import read_page_header, scan_table
from storage.record import decode_record, read_column

logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Render a column value the way it is printed: NULL is empty, blobs are hex."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.hex()
    return str(value)


class Database:
    """Read-only queries over a single database file.

    Every query is independent: the schema catalog is rebuilt from page 1 on
    each call and nothing is cached between calls.
    """

    def __init__(self, path: Path | str):
        self._pager = Pager(path)

    @property
    def pager(self) -> Pager:
        return self._pager

    def catalog(self) -> SchemaCatalog:
        """Build the schema catalog from page 1."""
        return build_catalog(self._pager)

    def info(self) -> DatabaseInfo:
        """Page size and the number of schema objects (cells on page 1)."""
        page = self._pager.read_page(SCHEMA_PAGE_NUMBER)
        header = read_page_header(page, SCHEMA_PAGE_NUMBER)
        return DatabaseInfo(page_size=self._pager.page_size, cell_count=header.cell_count)

    def count(self, table: str) -> RowCount:
        """Number of rows in a table. If the table does not exist, a TableNotFound exception will be raised"""
        entry = self.catalog().table(table)
        scanner = scan_table(self._pager, entry.root_page)
        logger.debug("count(%s): root page %d has %d cells", table, entry.root_page, scanner.cell_count)
        return RowCount(table=entry.name, row_count=scanner.cell_count)

    def list_tables(self) -> TableList:
        """Sorted names of user tables, without internal objects."""
        names = sorted({entry.name for entry in self.catalog().tables()})
        return TableList(names=tuple(names))

    def project(self, table: str, column: str) -> ColumnValues:
        """
        Values of one column for every row, in cell order. Raises TableNotFound if the table
        is missing and ColumnNotFound if the column is not declared on it.
        """
        entry = self.catalog().table(table)
        columns = parse_columns(entry.sql or "")

        index = next((i for i, c in enumerate(columns) if c.name.lower() == column.lower()), None)
        if index is None:
            raise ColumnNotFound(entry.name, column)
        target = columns[index]

        scanner = scan_table(self._pager, entry.root_page)
        encoding = self._pager.header.encoding
        values = []
        for cell in scanner:
            if target.is_rowid_alias:
                values.append(str(cell.rowid))
                continue
            record = decode_record(scanner.page, cell.record_start)
            value = read_column(scanner.page, record.values_start, record.serial_types, index, encoding)
            values.append(format_value(value))

        logger.debug("project(%s, %s): %d values from page %d", table, column, len(values), entry.root_page)
        return ColumnValues(table=entry.name, column=target.name, values=tuple(values))

    def close(self) -> None:
        self._pager.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
