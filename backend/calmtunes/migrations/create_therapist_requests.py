"""Therapist request system: requests, patient relationships, notifications.

Each table is created in its own awaited step; a failure on the second table
leaves the first one in place, and re-running picks up from there.
"""
from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.logger import get_logger
from calmtunes.models import Notification, TherapistPatientRelationship, TherapistRequest

name = "create_therapist_requests"

logger = get_logger("migrations")

TABLES = (TherapistRequest, TherapistPatientRelationship, Notification)


async def upgrade(conn: AsyncConnection) -> None:
    for model in TABLES:
        await conn.run_sync(model.__table__.create, checkfirst=True)
        logger.info(f"{model.__tablename__} table ready")


async def downgrade(conn: AsyncConnection) -> None:
    for model in reversed(TABLES):
        await conn.run_sync(model.__table__.drop, checkfirst=True)
