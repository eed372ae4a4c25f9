import pytest
import pytest_asyncio
from sqlalchemy import create_engine, inspect

from calmtunes.config import Settings
from calmtunes.db import Database


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "calmtunes.db"


@pytest.fixture
def settings(db_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{db_path}")


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings)
    await db.open()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def cli_env(monkeypatch, db_path):
    """Environment for the console entry points, pointed at a temp SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    for var in ("ADMIN_PASSWORD", "BASIC_AUTH_ENABLED", "LOG_DIR", "DB_PORT"):
        monkeypatch.delenv(var, raising=False)
    return db_path


@pytest.fixture
def table_names(db_path):
    """Synchronous peek at the tables in the temp database."""
    def _names() -> set[str]:
        engine = create_engine(f"sqlite:///{db_path}")
        try:
            return set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
    return _names
