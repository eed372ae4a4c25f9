"""Create music_sessions table"""
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import MusicSession

name = "create_music_sessions"


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(MusicSession.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(MusicSession.__table__.drop, checkfirst=True)
