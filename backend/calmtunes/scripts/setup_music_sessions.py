import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import MigrationScript, get_scripts
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.music import seed_music_sessions
from calmtunes.seeds.users import SAMPLE_PATIENTS, ensure_sample_patients


async def seed(conn) -> None:
    for user_id in await ensure_sample_patients(conn):
        await seed_music_sessions(conn, user_id)


async def setup_music_sessions(settings: Settings) -> int:
    print("🎵 Setting up music sessions database...")
    steps = get_scripts("create_users", "create_music_sessions") + [
        MigrationScript(name="seed_music_sessions", apply=seed),
    ]
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(steps)

    if result.ok:
        print("🎉 Music sessions setup completed successfully!")
        print(f"  - Test users: {', '.join(u['email'] for u in SAMPLE_PATIENTS)}")
    return result.exit_code


def main() -> int:
    return execute(setup_music_sessions)


if __name__ == "__main__":
    sys.exit(main())
