"""Create drawing_sessions table"""
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import DrawingSession

name = "create_drawing_sessions"


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(DrawingSession.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(DrawingSession.__table__.drop, checkfirst=True)
