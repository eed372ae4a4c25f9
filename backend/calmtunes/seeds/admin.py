from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql import func

from calmtunes.exceptions import UsageError
from calmtunes.models import User
from calmtunes.services.auth_service import hash_password

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def upsert_admin(conn: AsyncConnection, email: str, password: str, name: str = "Admin User") -> dict:
    """
    이메일 기준 upsert: 없으면 생성, 있으면 password_hash / role / updated_at만 갱신.
    created_at은 최초 생성 시각 그대로 유지된다.
    """
    dialect_insert = _UPSERT_INSERTS.get(conn.dialect.name)
    if dialect_insert is None:
        raise UsageError(f"Admin upsert is not supported on {conn.dialect.name}")

    stmt = dialect_insert(User).values(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role="admin",
        created_at=func.now(),
        updated_at=func.now(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[User.email],
        set_={
            "password_hash": stmt.excluded.password_hash,
            "role": stmt.excluded.role,
            "updated_at": func.now(),
        },
    ).returning(User.id, User.name, User.email, User.role)

    res = await conn.execute(stmt)
    return dict(res.mappings().one())
