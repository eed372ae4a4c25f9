import sys
from functools import partial

from calmtunes.cli import ArgumentParser, execute, parse_args
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.logger import get_logger
from calmtunes.runner import MigrationRunner, script_from_file

logger = get_logger("cli")

USAGE = "Usage: calmtunes-run-specific migrations/fix_password_hash_nullable.sql [--down]"


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="calmtunes-run-specific",
        description="Run a single .sql or .py migration file.",
    )
    parser.add_argument("path", nargs="?", help="path to the migration file")
    parser.add_argument("--down", action="store_true", help="run downgrade() of a .py script")
    return parser


async def run_specific(settings: Settings, path: str, down: bool = False) -> int:
    script = script_from_file(path)
    async with Database(settings) as database:
        runner = MigrationRunner(database)
        result = await (runner.revert([script]) if down else runner.run([script]))
    return result.exit_code


def main(argv=None) -> int:
    args = parse_args(build_parser(), argv)
    if args is None:
        return 1
    # 인자가 없으면 DB 접속 전에 종료
    if not args.path:
        logger.error("❌ Please provide a migration file path")
        logger.error(USAGE)
        return 1
    return execute(partial(run_specific, path=args.path, down=args.down))


if __name__ == "__main__":
    sys.exit(main())
