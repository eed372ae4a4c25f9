"""Create user_contacts table (emergency contacts, one phone number per user)"""
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import UserContact

name = "create_user_contacts"


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(UserContact.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(UserContact.__table__.drop, checkfirst=True)
