import sys
from functools import partial

from calmtunes.cli import ArgumentParser, execute, parse_args
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.exceptions import UsageError
from calmtunes.logger import get_logger
from calmtunes.migrations import MigrationScript
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.users import set_therapist_profile_image

logger = get_logger("cli")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="calmtunes-set-therapist-image",
        description="Set users.profile_image for every therapist.",
    )
    parser.add_argument("filename", help="image file name under the uploads directory")
    return parser


async def set_therapist_image(settings: Settings, filename: str) -> int:
    # 파일명만 저장 (경로는 업로드 디렉터리 기준)
    if not filename.strip() or "/" in filename or "\\" in filename:
        raise UsageError(f"Expected a bare file name, got {filename!r}")

    updated = []

    async def apply(conn) -> None:
        updated.extend(await set_therapist_profile_image(conn, filename))

    async with Database(settings) as database:
        result = await MigrationRunner(database).run([MigrationScript(name="set_therapist_image", apply=apply)])

    if result.ok and not updated:
        logger.warning("⚠️ No therapists found; nothing updated")
    return result.exit_code


def main(argv=None) -> int:
    args = parse_args(build_parser(), argv)
    if args is None:
        return 1
    return execute(partial(set_therapist_image, filename=args.filename))


if __name__ == "__main__":
    sys.exit(main())
