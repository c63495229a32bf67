"""Errors raised while decoding a database file.

Every error is terminal for the query that raised it. The offending page,
offset, table or column is kept as an attribute so callers can report it.
"""


class DatabaseError(Exception):
    """Base class for all decoding and lookup failures."""


class PageIOError(DatabaseError):
    """A page could not be read from the file (seek failure or short read)."""

    def __init__(self, message: str, page_number: int | None = None):
        super().__init__(message)
        self.page_number = page_number


class InvalidHeader(DatabaseError):
    """The 100-byte file header is not a valid database header."""


class TruncatedInput(DatabaseError):
    """A varint or fixed-width field runs past the end of the buffer."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


class InvalidCellPointer(DatabaseError):
    def __init__(self, page_number: int, index: int, pointer: int, page_size: int):
        super().__init__(
            f"Cell pointer {index} on page {page_number} is out of bounds: {pointer} >= {page_size}"
        )
        self.page_number = page_number
        self.index = index
        self.pointer = pointer


class CellOverflow(DatabaseError):
    """A cell payload does not fit in its page. Overflow pages are not supported."""

    def __init__(self, page_number: int, offset: int, payload_size: int, page_size: int):
        super().__init__(
            f"Cell at offset {offset} on page {page_number} declares {payload_size} payload bytes, "
            f"which runs past the page end ({page_size})"
        )
        self.page_number = page_number
        self.offset = offset
        self.payload_size = payload_size


class UnsupportedPage(DatabaseError):
    """The page is valid but of a kind this reader does not traverse (interior or index pages)."""

    def __init__(self, page_number: int, page_type: int):
        super().__init__(f"Page {page_number} has unsupported page type 0x{page_type:02x}")
        self.page_number = page_number
        self.page_type = page_type


class TableNotFound(DatabaseError):
    def __init__(self, table: str):
        super().__init__(f"No such table: {table}")
        self.table = table


class ColumnNotFound(DatabaseError):
    def __init__(self, table: str, column: str):
        super().__init__(f"No such column: {column} in table {table}")
        self.table = table
        self.column = column


class SchemaCorrupt(DatabaseError):
    """A schema row or CREATE statement could not be decoded."""


class ColumnIndexOutOfRange(DatabaseError):
    def __init__(self, index: int, column_count: int):
        super().__init__(f"Column index {index} out of range for record with {column_count} columns")
        self.index = index
        self.column_count = column_count


class InvalidSerialType(DatabaseError):
    """A record header uses a reserved serial type (10 or 11)."""

    def __init__(self, serial_type: int):
        super().__init__(f"Reserved serial type: {serial_type}")
        self.serial_type = serial_type


class InvalidText(DatabaseError):
    """A text value is not valid in the database text encoding."""

    def __init__(self, offset: int, encoding: str):
        super().__init__(f"Text at offset {offset} is not valid {encoding}")
        self.offset = offset
        self.encoding = encoding
