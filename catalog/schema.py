"""Schema catalog built from page 1.

Page 1 is a leaf table page whose rows describe every table, index, view and
trigger in the file. Each row is an ordinary record:

    [type:text][name:text][tbl_name:text][rootpage:int][sql:text]

so the catalog is read with the same record decoder used for user tables.
The catalog is rebuilt on every call and never cached.
"""

import logging
from collections.abc import Iterator, Mapping

from exceptions import DatabaseError, SchemaCorrupt, TableNotFound
from models.schema import CatalogEntry
from storage.pager import SCHEMA_PAGE_NUMBER, Pager
from storage.pages import scan_table
from storage.record import read_record

logger = logging.getLogger(__name__)

# Column positions in a schema row
TYPE_COLUMN = 0
NAME_COLUMN = 1
TBL_NAME_COLUMN = 2
ROOT_PAGE_COLUMN = 3
SQL_COLUMN = 4
SCHEMA_COLUMN_COUNT = 5


class SchemaCatalog(Mapping[str, CatalogEntry]):
    """Read-only mapping of object name -> CatalogEntry.

    Lookups are case-insensitive, matching how identifiers resolve in SQL.
    """

    def __init__(self, entries: list[CatalogEntry]):
        self._entries = {entry.name.lower(): entry for entry in entries}

    def __getitem__(self, name: str) -> CatalogEntry:
        return self._entries[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return (entry.name for entry in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def table(self, name: str) -> CatalogEntry:
        """Look up a table by name, raising TableNotFound if it is missing."""
        entry = self._entries.get(name.lower())
        if entry is None or entry.type != "table":
            raise TableNotFound(name)
        return entry

    def tables(self) -> list[CatalogEntry]:
        """User tables, excluding the engine's internal objects."""
        return [entry for entry in self._entries.values() if entry.is_user_table]


def _entry_from_row(values: list) -> CatalogEntry:
    if len(values) < SCHEMA_COLUMN_COUNT:
        raise SchemaCorrupt(f"Schema row has {len(values)} columns, expected {SCHEMA_COLUMN_COUNT}")

    root_page = values[ROOT_PAGE_COLUMN]
    # Views and triggers have no b-tree and store 0 (or NULL)
    if root_page is None:
        root_page = 0
    if not isinstance(root_page, int):
        raise SchemaCorrupt(f"Schema row has non-integer rootpage: {root_page!r}")

    for index in (TYPE_COLUMN, NAME_COLUMN, TBL_NAME_COLUMN):
        if not isinstance(values[index], str):
            raise SchemaCorrupt(f"Schema row column {index} is not text: {values[index]!r}")

    sql = values[SQL_COLUMN]
    if sql is not None and not isinstance(sql, str):
        raise SchemaCorrupt(f"Schema row has non-text sql: {sql!r}")

    return CatalogEntry(
        type=values[TYPE_COLUMN],
        name=values[NAME_COLUMN],
        tbl_name=values[TBL_NAME_COLUMN],
        root_page=root_page,
        sql=sql,
    )


def build_catalog(pager: Pager) -> SchemaCatalog:
    """Scan page 1 and index every schema row by name.

    Any row that fails to decode fails the whole build: skipping it could
    hide the very table a query is looking for.
    """
    encoding = pager.header.encoding
    try:
        scanner = scan_table(pager, SCHEMA_PAGE_NUMBER)
    except DatabaseError as e:
        raise SchemaCorrupt(f"Cannot read schema page: {e}") from e

    entries = []
    try:
        for index, cell in enumerate(scanner):
            values = read_record(scanner.page, cell.record_start, encoding)
            try:
                entries.append(_entry_from_row(values))
            except SchemaCorrupt as e:
                raise SchemaCorrupt(f"Schema cell {index}: {e}") from e
    except SchemaCorrupt:
        raise
    except DatabaseError as e:
        raise SchemaCorrupt(f"Schema cell {len(entries)} failed to decode: {e}") from e

    logger.debug("Built schema catalog with %d entries", len(entries))
    return SchemaCatalog(entries)
