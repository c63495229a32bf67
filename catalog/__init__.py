"""Schema catalog: table lookup and CREATE TABLE column parsing."""

from catalog.ddl import parse_column_names, parse_columns
from catalog.schema import SchemaCatalog, build_catalog

__all__ = [
    "SchemaCatalog",
    "build_catalog",
    "parse_column_names",
    "parse_columns",
]
