"""Sample and baseline data, safe to re-run."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncConnection


async def has_rows(conn: AsyncConnection, model, user_id: int) -> bool:
    res = await conn.execute(select(func.count()).select_from(model).where(model.user_id == user_id))
    return res.scalar_one() > 0
