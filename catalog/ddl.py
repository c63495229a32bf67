"""Column extraction from CREATE TABLE statements.

Grammar subset handled here:

    create   := ... "(" item ("," item)* ")" ...
    item     := column_def | table_constraint
    column_def := name [type_name] [constraint ...]

* The column list is the text inside the first balanced pair of parentheses.
* Items are split on commas at nesting depth 0. Commas inside nested
  parentheses, e.g. ``DECIMAL(10, 2)`` or ``CHECK (a IN (1, 2))``, and inside
  quotes (``'...'``, ``"..."``, ``[...]``, backticks) do not split.
* The leading token of an item is the column name. Quoted names are
  unquoted; a doubled quote inside a quoted name stands for one quote.
* Items whose leading token is a table-constraint keyword (CONSTRAINT,
  PRIMARY, UNIQUE, CHECK, FOREIGN) are not columns and are skipped.
* A PRIMARY KEY table constraint over one INTEGER column makes that column
  a rowid alias, like INTEGER PRIMARY KEY on the column itself.
"""

from exceptions import SchemaCorrupt
from models.schema import ColumnDef

TABLE_CONSTRAINT_KEYWORDS = frozenset({"CONSTRAINT", "PRIMARY", "UNIQUE", "CHECK", "FOREIGN"})

# Words that end the type name of a column definition
COLUMN_CONSTRAINT_KEYWORDS = frozenset(
    {"PRIMARY", "NOT", "NULL", "UNIQUE", "CHECK", "DEFAULT", "COLLATE", "REFERENCES", "CONSTRAINT", "GENERATED", "AS"}
)

# opening quote -> closing quote
QUOTES = {"'": "'", '"': '"', "`": "`", "[": "]"}


def _skip_quoted(text: str, pos: int) -> int:
    """Return the index just past the quoted section that starts at ``pos``."""
    close = QUOTES[text[pos]]
    i = pos + 1
    while i < len(text):
        if text[i] == close:
            # Doubled quote is an escaped quote, except for [...]
            if close != "]" and i + 1 < len(text) and text[i + 1] == close:
                i += 2
                continue
            return i + 1
        i += 1
    raise SchemaCorrupt(f"Unterminated quote starting at {pos}: {text!r}")


def column_list_text(sql: str) -> str:
    """Text between the first "(" and its matching ")"."""
    depth = 0
    start = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch in QUOTES:
            i = _skip_quoted(sql, i)
            continue
        if ch == "(":
            if depth == 0:
                start = i + 1
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
            if depth == 0:
                return sql[start:i]
        i += 1

    raise SchemaCorrupt(f"No column list found in: {sql!r}")


def split_items(body: str) -> list[str]:
    """Split a column list on top-level commas."""
    items = []
    depth = 0
    start = 0
    i = 0
    while i < len(body):
        ch = body[i]
        if ch in QUOTES:
            i = _skip_quoted(body, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            items.append(body[start:i].strip())
            start = i + 1
        i += 1
    items.append(body[start:].strip())
    return [item for item in items if item]


def _leading_token(item: str) -> tuple[str, str, bool]:
    """Split an item into (token, rest, was_quoted)."""
    if item[0] in QUOTES:
        end = _skip_quoted(item, 0)
        close = QUOTES[item[0]]
        name = item[1 : end - 1]
        if close != "]":
            name = name.replace(close * 2, close)
        return name, item[end:].strip(), True

    parts = item.split(None, 1)
    # Constraints may be written without a space, as in "UNIQUE(a)"
    token = parts[0].split("(", 1)[0]
    rest = item[len(token) :].strip()
    return token, rest, False


def _type_name(rest: str) -> str:
    words = []
    for word in rest.split():
        if word.upper() in COLUMN_CONSTRAINT_KEYWORDS:
            break
        words.append(word)
    return " ".join(words)


def _is_rowid_alias(type_name: str, rest: str) -> bool:
    upper = " ".join(rest.upper().split())
    if type_name.upper() != "INTEGER" or "PRIMARY KEY" not in upper:
        return False
    # INTEGER PRIMARY KEY DESC is a quirk: it is not a rowid alias
    return "PRIMARY KEY DESC" not in upper


def _primary_key_names(item: str) -> list[str] | None:
    """Column names of a PRIMARY KEY table constraint, or None for other constraints."""
    token, rest, _ = _leading_token(item)
    if token.upper() == "CONSTRAINT":
        if not rest:
            return None
        # Skip the constraint name
        _, rest, _ = _leading_token(rest)
        if not rest:
            return None
        token, rest, _ = _leading_token(rest)
    if token.upper() != "PRIMARY":
        return None
    return [_leading_token(key)[0] for key in split_items(column_list_text(rest))]


def parse_columns(sql: str) -> list[ColumnDef]:
    """Column definitions of a CREATE TABLE statement, in declaration order.

    A single INTEGER column named by a PRIMARY KEY table constraint is a rowid
    alias too. Unlike the column form, PRIMARY KEY(x DESC) still aliases.
    """
    columns = []
    primary_key = None
    for item in split_items(column_list_text(sql)):
        token, rest, quoted = _leading_token(item)
        if not quoted and token.upper() in TABLE_CONSTRAINT_KEYWORDS:
            primary_key = _primary_key_names(item) or primary_key
            continue
        type_name = _type_name(rest)
        columns.append(ColumnDef(name=token, type_name=type_name, is_rowid_alias=_is_rowid_alias(type_name, rest)))

    if primary_key is not None and len(primary_key) == 1:
        key = primary_key[0].lower()
        columns = [
            column.model_copy(update={"is_rowid_alias": True})
            if column.name.lower() == key and column.type_name.upper() == "INTEGER"
            else column
            for column in columns
        ]
    return columns


def parse_column_names(sql: str) -> list[str]:
    """Column names of a CREATE TABLE statement, in declaration order."""
    return [column.name for column in parse_columns(sql)]
