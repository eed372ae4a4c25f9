"""Apply every built-in schema script in dependency order."""
import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import ALL_SCRIPTS
from calmtunes.runner import MigrationRunner


async def migrate_all(settings: Settings) -> int:
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(ALL_SCRIPTS)
    if result.ok:
        print("📋 Tables ready:")
        for name in result.completed:
            print(f"  - {name}")
    return result.exit_code


def main() -> int:
    return execute(migrate_all)


if __name__ == "__main__":
    sys.exit(main())
