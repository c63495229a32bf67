"""Tests for CREATE TABLE column parsing."""

import pytest

from catalog.ddl import column_list_text, parse_column_names, parse_columns, split_items
from exceptions import SchemaCorrupt


class TestParseColumnNames:
    def test_simple(self):
        assert parse_column_names("CREATE TABLE users (id integer, name text)") == ["id", "name"]

    def test_multiline(self):
        sql = """CREATE TABLE apples
(
    id integer primary key autoincrement,
    name text,
    color text
)"""
        assert parse_column_names(sql) == ["id", "name", "color"]

    def test_no_types(self):
        assert parse_column_names("CREATE TABLE t(a, b, c)") == ["a", "b", "c"]

    def test_nested_parentheses_in_type(self):
        sql = "CREATE TABLE prices (id integer, amount DECIMAL(10, 2), currency varchar(3))"
        assert parse_column_names(sql) == ["id", "amount", "currency"]

    def test_check_constraint_with_commas(self):
        sql = "CREATE TABLE t (status text CHECK (status IN ('a', 'b')), note text)"
        assert parse_column_names(sql) == ["status", "note"]

    def test_default_string_with_comma_and_paren(self):
        sql = "CREATE TABLE t (label text DEFAULT 'x, (y', size int)"
        assert parse_column_names(sql) == ["label", "size"]

    @pytest.mark.parametrize(
        "quoted,name",
        [('"first name"', "first name"), ("`first name`", "first name"), ("[first name]", "first name")],
    )
    def test_quoted_identifiers(self, quoted, name):
        sql = f"CREATE TABLE t (id integer, {quoted} text)"
        assert parse_column_names(sql) == ["id", name]

    def test_escaped_quote_in_identifier(self):
        assert parse_column_names('CREATE TABLE t ("say ""hi""" text)') == ['say "hi"']

    def test_quoted_table_name_with_parenthesis(self):
        assert parse_column_names('CREATE TABLE "odd(name" (a int, b int)') == ["a", "b"]

    def test_table_constraints_skipped(self):
        sql = """CREATE TABLE orders (
            id integer,
            customer_id integer,
            code text,
            PRIMARY KEY (id),
            UNIQUE (code),
            CONSTRAINT fk FOREIGN KEY (customer_id) REFERENCES customers(id),
            CHECK (id > 0)
        )"""
        assert parse_column_names(sql) == ["id", "customer_id", "code"]

    def test_quoted_keyword_is_a_column(self):
        assert parse_column_names('CREATE TABLE t ("primary" text, "check" int)') == ["primary", "check"]

    def test_no_column_list(self):
        with pytest.raises(SchemaCorrupt, match="No column list"):
            parse_column_names("CREATE TABLE t")

    def test_unbalanced(self):
        with pytest.raises(SchemaCorrupt):
            parse_column_names("CREATE TABLE t (a int, b int")

    def test_unterminated_quote(self):
        with pytest.raises(SchemaCorrupt, match="Unterminated quote"):
            parse_column_names("CREATE TABLE t (\"a int, b int)")


class TestParseColumns:
    def test_type_names(self):
        columns = parse_columns("CREATE TABLE t (id integer primary key, name text not null, amount DECIMAL(10, 2))")
        assert [c.type_name for c in columns] == ["integer", "text", "DECIMAL(10, 2)"]

    @pytest.mark.parametrize(
        "definition,is_alias",
        [
            ("id integer primary key", True),
            ("id INTEGER PRIMARY KEY AUTOINCREMENT", True),
            ("id integer primary key asc", True),
            ("id integer primary key desc", False),
            ("id int primary key", False),
            ("id integer", False),
            ("id integer not null", False),
        ],
    )
    def test_rowid_alias(self, definition, is_alias):
        (column,) = parse_columns(f"CREATE TABLE t ({definition})")
        assert column.is_rowid_alias is is_alias

    @pytest.mark.parametrize(
        "constraint",
        ["PRIMARY KEY (id)", "primary key(ID)", "PRIMARY KEY (id DESC)", "CONSTRAINT pk PRIMARY KEY (\"id\")"],
    )
    def test_table_primary_key_is_rowid_alias(self, constraint):
        columns = parse_columns(f"CREATE TABLE t (id INTEGER, name TEXT, {constraint})")
        assert [c.is_rowid_alias for c in columns] == [True, False]

    @pytest.mark.parametrize(
        "sql",
        [
            "CREATE TABLE t (id INT, name TEXT, PRIMARY KEY (id))",
            "CREATE TABLE t (id INTEGER, name TEXT, PRIMARY KEY (id, name))",
            "CREATE TABLE t (id INTEGER, name TEXT, UNIQUE (id))",
        ],
    )
    def test_table_constraint_not_rowid_alias(self, sql):
        assert not any(c.is_rowid_alias for c in parse_columns(sql))


class TestHelpers:
    def test_column_list_text(self):
        assert column_list_text("CREATE TABLE t (a int, b varchar(3)) WITHOUT ROWID") == "a int, b varchar(3)"

    def test_split_items_drops_empty(self):
        assert split_items(" a int , , b int ") == ["a int", "b int"]
