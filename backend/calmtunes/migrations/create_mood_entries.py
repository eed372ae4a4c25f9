"""Create mood_entries table

mood_intensity is range-checked (1-10) by a table constraint, not only by the
application.
"""
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import MoodEntry

name = "create_mood_entries"


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(MoodEntry.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(MoodEntry.__table__.drop, checkfirst=True)
