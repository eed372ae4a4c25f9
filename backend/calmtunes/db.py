from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, InvalidRequestError, NoSuchModuleError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from calmtunes.config import Settings
from calmtunes.exceptions import DatabaseConnectionError
from calmtunes.logger import get_logger

logger = get_logger("database")


class Base(DeclarativeBase):
    pass


def build_database_url(settings: Settings) -> URL:
    """
    DB URL 우선순위:
    1) DATABASE_URL (postgres:// / postgresql:// 는 asyncpg 드라이버로 변환)
    2) DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME
    """
    if settings.database_url:
        try:
            url = make_url(settings.database_url)
        except (ArgumentError, ValueError) as exc:
            # 포트가 숫자가 아닌 경우 make_url 에서 ValueError
            raise DatabaseConnectionError(f"Malformed database URL: {exc}") from exc
        if url.drivername in ("postgres", "postgresql"):
            url = url.set(drivername="postgresql+asyncpg")
        return url

    return URL.create(
        "postgresql+asyncpg",
        username=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def build_connect_args(url: URL, settings: Settings) -> dict:
    # TLS 완화는 URL 기반 Postgres 접속에만 적용 (암호화는 하되 인증서 검증 안 함)
    if url.get_backend_name() == "postgresql" and settings.database_url and settings.db_ssl_relaxed:
        return {"ssl": "require"}
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Pooled connection provider for one CLI invocation or one app lifetime.

    ``open()`` builds the engine and pings it so a bad descriptor or an
    unreachable host fails fast with ``DatabaseConnectionError``. ``close()``
    disposes the pool and may be called any number of times.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None

    async def open(self) -> "Database":
        if self.engine is not None:
            return self

        url = build_database_url(self.settings)
        try:
            engine = create_async_engine(
                url,
                echo=False,
                pool_pre_ping=True,
                connect_args=build_connect_args(url, self.settings),
            )
        except (ArgumentError, NoSuchModuleError, InvalidRequestError, ImportError) as exc:
            # 동기 드라이버 URL, 설치되지 않은 드라이버 포함
            raise DatabaseConnectionError(f"Cannot create engine for {url!r}: {exc}") from exc

        if url.get_backend_name() == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (DBAPIError, OSError) as exc:
            await engine.dispose()
            raise DatabaseConnectionError(f"Cannot reach database {url!r}: {exc}") from exc

        self.engine = engine
        logger.info(f"Connected to {url.get_backend_name()} database {url.database!r}")
        return self

    async def close(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        logger.debug("Connection pool closed")

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Autocommit connection: every statement commits on its own."""
        if self.engine is None:
            raise DatabaseConnectionError("Database is not open")
        async with self.engine.connect() as conn:
            conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
            yield conn

    async def __aenter__(self) -> "Database":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def execute_script(conn: AsyncConnection, sql: str) -> None:
    """Run a multi-statement SQL text through the driver as one script."""
    raw = await conn.get_raw_connection()
    driver = raw.driver_connection
    if conn.dialect.name == "sqlite":
        await driver.executescript(sql)
    else:
        # asyncpg: 인자 없는 execute는 여러 문장을 한 번에 실행
        await driver.execute(sql)
