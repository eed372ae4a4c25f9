"""Add artwork_image column to drawing_sessions

Path of the saved artwork under public/uploads/drawings/, plus a partial index
on rows that actually have one.
"""
from alembic.migration import MigrationContext
from alembic.operations import Operations
import sqlalchemy as sa
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncConnection

name = "add_artwork_column"

TABLE = "drawing_sessions"
COLUMN = "artwork_image"
INDEX = "idx_drawing_sessions_artwork_image"


def _upgrade(sync_conn) -> None:
    op = Operations(MigrationContext.configure(sync_conn))
    inspector = inspect(sync_conn)

    # artwork_image 컬럼이 없으면 추가
    columns = [c["name"] for c in inspector.get_columns(TABLE)]
    if COLUMN not in columns:
        op.add_column(
            TABLE,
            sa.Column(
                COLUMN,
                sa.String(255),
                nullable=True,
                comment="Path to the saved artwork image file in public/uploads/drawings/ directory",
            ),
        )

    indexes = [i["name"] for i in inspector.get_indexes(TABLE)]
    if INDEX not in indexes:
        op.create_index(
            INDEX,
            TABLE,
            [COLUMN],
            postgresql_where=sa.text(f"{COLUMN} IS NOT NULL"),
            sqlite_where=sa.text(f"{COLUMN} IS NOT NULL"),
        )


def _downgrade(sync_conn) -> None:
    op = Operations(MigrationContext.configure(sync_conn))
    inspector = inspect(sync_conn)

    if INDEX in [i["name"] for i in inspector.get_indexes(TABLE)]:
        op.drop_index(INDEX, table_name=TABLE)
    if COLUMN in [c["name"] for c in inspector.get_columns(TABLE)]:
        op.drop_column(TABLE, COLUMN)


async def upgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(_upgrade)


async def downgrade(conn: AsyncConnection) -> None:
    await conn.run_sync(_downgrade)
