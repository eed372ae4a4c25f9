import pytest
from sqlalchemy import text

from calmtunes.config import Settings
from calmtunes.db import Database, build_connect_args, build_database_url, execute_script
from calmtunes.exceptions import DatabaseConnectionError


def test_postgres_scheme_uses_asyncpg_driver():
    url = build_database_url(Settings(database_url="postgres://u:p@db.example.com:5433/calm"))
    assert url.drivername == "postgresql+asyncpg"
    assert (url.host, url.port, url.database) == ("db.example.com", 5433, "calm")


def test_discrete_fields_are_the_fallback():
    settings = Settings(db_host="pg", db_port=6543, db_user="calm", db_password="p@ss", db_name="calmtunes")
    url = build_database_url(settings)
    assert url.drivername == "postgresql+asyncpg"
    assert (url.host, url.port, url.username, url.password, url.database) == (
        "pg", 6543, "calm", "p@ss", "calmtunes"
    )


def test_tls_relaxation_only_for_url_based_postgres():
    relaxed = Settings(database_url="postgresql://u:p@h/db", db_ssl_relaxed=True)
    strict = Settings(database_url="postgresql://u:p@h/db", db_ssl_relaxed=False)
    discrete = Settings(db_ssl_relaxed=True)

    assert build_connect_args(build_database_url(relaxed), relaxed) == {"ssl": "require"}
    assert build_connect_args(build_database_url(strict), strict) == {}
    assert build_connect_args(build_database_url(discrete), discrete) == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [
    "this is not a url",
    "nosuchdialect://user@host/db",
    "sqlite+aiosqlite:////nonexistent-dir/for/calmtunes.db",
    "postgresql+asyncpg://user:pw@db.example.com:notaport/calm",
    "sqlite:///calmtunes-sync.db",
    "postgresql+nosuchdriver://user@host/db",
    "mysql+mysqldb://user@host/db",
])
async def test_bad_descriptor_raises_connection_error(url):
    database = Database(Settings(database_url=url))
    with pytest.raises(DatabaseConnectionError):
        await database.open()
    assert database.engine is None


@pytest.mark.asyncio
async def test_context_manager_always_closes(settings):
    database = Database(settings)
    with pytest.raises(RuntimeError):
        async with database:
            assert database.engine is not None
            raise RuntimeError("boom")
    assert database.engine is None
    # closing again is harmless
    await database.close()


@pytest.mark.asyncio
async def test_connect_requires_open(settings):
    with pytest.raises(DatabaseConnectionError):
        async with Database(settings).connect():
            pass


@pytest.mark.asyncio
async def test_execute_script_runs_every_statement(database):
    async with database.connect() as conn:
        await execute_script(conn, """
            CREATE TABLE playlists (id INTEGER PRIMARY KEY, title TEXT NOT NULL);
            INSERT INTO playlists (title) VALUES ('Calm');
            INSERT INTO playlists (title) VALUES ('Focus');
        """)
    async with database.connect() as conn:
        res = await conn.execute(text("SELECT count(*) FROM playlists"))
        assert res.scalar_one() == 2
