"""Row counts per feature table for the first patient, to confirm seeding worked."""
import sys
from typing import Optional

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.exceptions import StatementError
from calmtunes.models import DrawingSession, MoodEntry, MusicSession, PanicSession, User

FEATURE_TABLES = (
    ("🎨 Drawing Sessions", DrawingSession),
    ("🎵 Music Sessions", MusicSession),
    ("💭 Mood Entries", MoodEntry),
    ("🚨 Panic Sessions", PanicSession),
)


async def patient_counts(conn) -> tuple[Optional[int], dict[str, Optional[int]]]:
    """(patient_id, {table: count}); count is None when the table is missing."""
    existing = set(await conn.run_sync(lambda c: inspect(c).get_table_names()))
    if User.__tablename__ not in existing:
        return None, {}

    res = await conn.execute(
        select(User.id).where(User.role == "patient").order_by(User.id).limit(1)
    )
    patient_id = res.scalar_one_or_none()
    if patient_id is None:
        return None, {}

    counts = {}
    for _, model in FEATURE_TABLES:
        if model.__tablename__ not in existing:
            counts[model.__tablename__] = None
            continue
        res = await conn.execute(
            select(func.count()).select_from(model).where(model.user_id == patient_id)
        )
        counts[model.__tablename__] = res.scalar_one()
    return patient_id, counts


async def verify_patient_data(settings: Settings) -> int:
    print("🔍 Checking patient data in database...\n")
    async with Database(settings) as database:
        try:
            async with database.connect() as conn:
                patient_id, counts = await patient_counts(conn)
        except SQLAlchemyError as exc:
            raise StatementError("verify_patient_data", exc) from exc

    if patient_id is None:
        print("⚠️ No patients found in database!")
        return 0

    print(f"📊 Checking data for patient ID: {patient_id}\n")
    for label, model in FEATURE_TABLES:
        count = counts[model.__tablename__]
        print(f"{label}: {'table does not exist' if count is None else count}")
    return 0


def main() -> int:
    return execute(verify_patient_data)


if __name__ == "__main__":
    sys.exit(main())
