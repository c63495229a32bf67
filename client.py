"""Command-line client.

Usage:
    sqlite-reader sample.db .dbinfo
    sqlite-reader sample.db .tables
    sqlite-reader sample.db "SELECT COUNT(*) FROM apples"
    sqlite-reader sample.db "SELECT name FROM apples"
"""

import argparse
import logging
import re
import sys
from dataclasses import dataclass

from db import Database
from exceptions import DatabaseError

COUNT_QUERY = re.compile(r"^\s*select\s+count\(\s*\*\s*\)\s+from\s+(?P<table>\S+?)\s*;?\s*$", re.IGNORECASE)
COLUMN_QUERY = re.compile(r"^\s*select\s+(?P<column>\S+?)\s+from\s+(?P<table>\S+?)\s*;?\s*$", re.IGNORECASE)


@dataclass
class Command:
    """A parsed command: one of info, tables, count or project."""

    kind: str
    table: str | None = None
    column: str | None = None


def _unquote(name: str) -> str:
    if len(name) >= 2 and name[0] in "\"'`[" and name[-1] in "\"'`]":
        return name[1:-1]
    return name


def parse_command(text: str) -> Command:
    """Match the command text against the supported forms."""
    stripped = text.strip()
    if stripped == ".dbinfo":
        return Command("info")
    if stripped == ".tables":
        return Command("tables")

    match = COUNT_QUERY.match(stripped)
    if match:
        return Command("count", table=_unquote(match["table"]))

    match = COLUMN_QUERY.match(stripped)
    if match:
        return Command("project", table=_unquote(match["table"]), column=_unquote(match["column"]))

    raise ValueError(f"Missing or invalid command passed: {text}")


def run(db: Database, command: Command) -> list[str]:
    """Execute a command and return the output lines."""
    match command.kind:
        case "info":
            info = db.info()
            return [f"database page size: {info.page_size}", f"number of tables: {info.cell_count}"]
        case "tables":
            return [" ".join(db.list_tables().names)]
        case "count":
            return [str(db.count(command.table).row_count)]
        case "project":
            return list(db.project(command.table, command.column).values)
        case _:
            raise ValueError(f"Unknown command kind: {command.kind}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Query a SQLite database file")
    parser.add_argument("database", help="Path to database file")
    parser.add_argument("command", help='.dbinfo, .tables, "SELECT COUNT(*) FROM t" or "SELECT col FROM t"')
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        command = parse_command(args.command)
        with Database(args.database) as db:
            lines = run(db, command)
    except (DatabaseError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
