from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.models import User

name = "create_users"


async def upgrade(conn: AsyncConnection) -> None:
    # 다른 모든 테이블이 users.id를 참조하므로 항상 가장 먼저 실행
    await conn.run_sync(User.__table__.create, checkfirst=True)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(User.__table__.drop, checkfirst=True)
