import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import MigrationScript, get_scripts
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.mood import seed_mood_entries
from calmtunes.seeds.users import MOOD_TRACKER_USER, get_or_create_user


async def seed(conn) -> None:
    user_id, _ = await get_or_create_user(conn, **MOOD_TRACKER_USER)
    await seed_mood_entries(conn, user_id)


async def setup_mood_tracker(settings: Settings) -> int:
    print("🚀 Setting up mood tracker database...")
    steps = get_scripts("create_users", "create_mood_entries") + [
        MigrationScript(name="seed_mood_entries", apply=seed),
    ]
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(steps)

    if result.ok:
        print("🎉 Mood tracker setup completed successfully!")
        print(f"  - Test user: {MOOD_TRACKER_USER['email']}")
    return result.exit_code


def main() -> int:
    return execute(setup_mood_tracker)


if __name__ == "__main__":
    sys.exit(main())
