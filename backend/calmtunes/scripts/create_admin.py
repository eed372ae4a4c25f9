"""Create or update the admin account (run once per environment)."""
import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.exceptions import UsageError
from calmtunes.logger import get_logger
from calmtunes.migrations import MigrationScript
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.admin import upsert_admin

logger = get_logger("cli")


async def create_admin(settings: Settings) -> int:
    if not settings.admin_password:
        raise UsageError("ADMIN_PASSWORD is not set")

    async def apply(conn) -> None:
        row = await upsert_admin(conn, settings.admin_email, settings.admin_password, settings.admin_name)
        logger.info(f"✅ Admin user created/updated successfully: {row}")

    async with Database(settings) as database:
        result = await MigrationRunner(database).run([MigrationScript(name="create_admin", apply=apply)])
    return result.exit_code


def main() -> int:
    return execute(create_admin)


if __name__ == "__main__":
    sys.exit(main())
