"""Query results returned by the executor. Formatting them is the caller's job."""

from pydantic import BaseModel, ConfigDict


class DatabaseInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_size: int
    # Cells on page 1, i.e. number of schema objects
    cell_count: int


class RowCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    row_count: int


class TableList(BaseModel):
    model_config = ConfigDict(frozen=True)

    names: tuple[str, ...] = ()


class ColumnValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    column: str
    values: tuple[str, ...] = ()
