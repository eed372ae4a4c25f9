import sys
from functools import partial

from sqlalchemy.exc import SQLAlchemyError

from calmtunes.cli import ArgumentParser, execute, parse_args
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.exceptions import StatementError
from calmtunes.inspector import SchemaInspector, format_report

DEFAULT_TABLES = ("drawing_sessions", "music_sessions", "mood_entries")


async def check_schema(settings: Settings, tables=DEFAULT_TABLES) -> int:
    print("🔍 Checking database schema...\n")
    async with Database(settings) as database:
        try:
            reports = await SchemaInspector(database).inspect_tables(tables)
        except SQLAlchemyError as exc:
            raise StatementError("check_schema", exc) from exc
    print(format_report(reports))
    return 0


def main(argv=None) -> int:
    parser = ArgumentParser(prog="calmtunes-check-schema")
    parser.add_argument("tables", nargs="*", help=f"tables to inspect (default: {', '.join(DEFAULT_TABLES)})")
    args = parse_args(parser, argv)
    if args is None:
        return 1
    return execute(partial(check_schema, tables=tuple(args.tables) or DEFAULT_TABLES))


if __name__ == "__main__":
    sys.exit(main())
