"""Schema catalog models."""

from pydantic import BaseModel, ConfigDict

# Objects whose names start with this prefix belong to the engine itself
INTERNAL_PREFIX = "sqlite_"


class CatalogEntry(BaseModel):
    """One row of the schema table on page 1.

    Columns are read by position: type, name, tbl_name, rootpage, sql.
    ``sql`` is None for automatically created indexes.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    tbl_name: str
    root_page: int
    sql: str | None = None

    @property
    def is_internal(self) -> bool:
        return self.name.lower().startswith(INTERNAL_PREFIX)

    @property
    def is_user_table(self) -> bool:
        return self.type == "table" and not self.is_internal


class ColumnDef(BaseModel):
    """A column definition parsed from a CREATE TABLE statement."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str = ""
    # INTEGER PRIMARY KEY columns are stored as NULL and read the rowid
    is_rowid_alias: bool = False
