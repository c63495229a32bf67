"""Pydantic models for the on-disk structures and query results."""

from models.header import HEADER_SIZE, MAGIC, FileHeader
from models.results import ColumnValues, DatabaseInfo, RowCount, TableList
from models.schema import INTERNAL_PREFIX, CatalogEntry, ColumnDef
from models.storage import Cell, PageHeader, PageType, RecordHeader

__all__ = [
    "Cell",
    "CatalogEntry",
    "ColumnDef",
    "ColumnValues",
    "DatabaseInfo",
    "FileHeader",
    "HEADER_SIZE",
    "INTERNAL_PREFIX",
    "MAGIC",
    "PageHeader",
    "PageType",
    "RecordHeader",
    "RowCount",
    "TableList",
]
