from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import PanicSession

name = "create_panic_sessions"


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(PanicSession.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(PanicSession.__table__.drop, checkfirst=True)
