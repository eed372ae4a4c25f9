import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import MigrationScript, get_scripts
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.drawing import seed_drawing_sessions
from calmtunes.seeds.users import SAMPLE_PATIENTS, ensure_sample_patients


async def seed(conn) -> None:
    for user_id in await ensure_sample_patients(conn):
        await seed_drawing_sessions(conn, user_id)


async def setup_drawing_sessions(settings: Settings) -> int:
    print("🎨 Setting up drawing sessions database...")
    steps = get_scripts("create_users", "create_drawing_sessions", "add_artwork_column") + [
        MigrationScript(name="seed_drawing_sessions", apply=seed),
    ]
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(steps)

    if result.ok:
        print("🎉 Drawing sessions setup completed successfully!")
        print(f"  - Test users: {', '.join(u['email'] for u in SAMPLE_PATIENTS)}")
    return result.exit_code


def main() -> int:
    return execute(setup_drawing_sessions)


if __name__ == "__main__":
    sys.exit(main())
