"""Run the fixed bootstrap sequence: users, then the therapist request tables."""
import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import BOOTSTRAP_SEQUENCE, get_scripts
from calmtunes.runner import MigrationRunner


async def run_migration(settings: Settings) -> int:
    scripts = get_scripts(*BOOTSTRAP_SEQUENCE)
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(scripts)
    return result.exit_code


def main() -> int:
    return execute(run_migration)


if __name__ == "__main__":
    sys.exit(main())
