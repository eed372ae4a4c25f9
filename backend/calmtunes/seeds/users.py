from __future__ import annotations
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import User

logger = get_logger("seeds")

SAMPLE_PATIENTS = [
    {"email": "patient1@example.com", "name": "John Patient", "role": "patient"},
    {"email": "patient2@example.com", "name": "Jane Patient", "role": "patient"},
]

MOOD_TRACKER_USER = {"email": "test@example.com", "name": "Test User", "role": "patient"}


async def get_user_id(conn: AsyncConnection, email: str) -> Optional[int]:
    res = await conn.execute(select(User.id).where(User.email == email))
    return res.scalar_one_or_none()


async def get_or_create_user(
    conn: AsyncConnection, email: str, name: Optional[str] = None, role: str = "patient"
) -> tuple[int, bool]:
    """Returns (user_id, created). Re-running with the same email is a no-op."""
    existing = await get_user_id(conn, email)
    if existing is not None:
        logger.info(f"✅ User already exists: {name or email} (ID: {existing})")
        return existing, False

    res = await conn.execute(
        insert(User).values(email=email, name=name, role=role).returning(User.id)
    )
    user_id = res.scalar_one()
    logger.info(f"✅ Created user: {name or email} (ID: {user_id})")
    return user_id, True


async def ensure_sample_patients(conn: AsyncConnection) -> list[int]:
    user_ids = []
    for user in SAMPLE_PATIENTS:
        user_id, _ = await get_or_create_user(conn, user["email"], user["name"], user["role"])
        user_ids.append(user_id)
    return user_ids


async def set_therapist_profile_image(conn: AsyncConnection, filename: str) -> list[int]:
    """Point every therapist's profile_image at ``filename``; returns the updated ids."""
    res = await conn.execute(
        update(User)
        .where(User.role == "therapist")
        .values(profile_image=filename, updated_at=func.now())
        .returning(User.id, User.name)
    )
    updated = []
    for user_id, name in res.all():
        logger.info(f"✅ Updated therapist ID {user_id} ({name}) with profile image: {filename}")
        updated.append(user_id)
    return updated
