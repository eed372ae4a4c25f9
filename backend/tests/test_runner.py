import pytest
from sqlalchemy import text

from calmtunes.exceptions import StatementError, UsageError
from calmtunes.inspector import SchemaInspector
from calmtunes.migrations import MigrationScript, get_scripts
from calmtunes.runner import MigrationRunner, RunState, script_from_file


def sql_script(name, *statements):
    async def apply(conn):
        for statement in statements:
            await conn.execute(text(statement))
    return MigrationScript(name=name, apply=apply)


async def exists(database, table):
    return (await SchemaInspector(database).inspect_table(table)).exists


@pytest.mark.asyncio
async def test_all_scripts_succeed(database):
    runner = MigrationRunner(database)
    result = await runner.run(get_scripts("create_users", "create_user_contacts"))

    assert result.state == RunState.SUCCEEDED
    assert result.exit_code == 0
    assert result.completed == ["create_users", "create_user_contacts"]
    assert runner.state == RunState.SUCCEEDED


@pytest.mark.asyncio
async def test_halts_on_first_failure_without_rolling_back(database):
    entered = []

    async def never(conn):
        entered.append("c")

    scripts = [
        sql_script("a", "CREATE TABLE a_done (id INTEGER PRIMARY KEY)"),
        sql_script("b", "INSERT INTO table_that_does_not_exist VALUES (1)"),
        MigrationScript(name="c", apply=never),
    ]
    result = await MigrationRunner(database).run(scripts)

    assert result.state == RunState.FAILED
    assert result.exit_code == 1
    assert result.completed == ["a"]
    assert (result.failed_script, result.failed_index) == ("b", 2)
    assert isinstance(result.error, StatementError)
    assert result.error.script == "b"
    assert entered == []
    # A stays applied
    assert await exists(database, "a_done")


@pytest.mark.asyncio
async def test_rerun_after_failure_starts_from_first_script(database):
    flaky = {"fail": True}

    async def sometimes(conn):
        if flaky["fail"]:
            raise RuntimeError("temporary")
        await conn.execute(text("CREATE TABLE IF NOT EXISTS b_done (id INTEGER)"))

    scripts = get_scripts("create_users") + [MigrationScript(name="b", apply=sometimes)]
    first = await MigrationRunner(database).run(scripts)
    flaky["fail"] = False
    second = await MigrationRunner(database).run(scripts)

    assert first.state == RunState.FAILED
    assert second.completed == ["create_users", "b"]


@pytest.mark.asyncio
async def test_failure_is_logged_with_script_name(database, caplog):
    await MigrationRunner(database).run([sql_script("broken_step", "SELEC nonsense")])
    assert any("broken_step" in r.getMessage() and r.levelname == "ERROR" for r in caplog.records)


@pytest.mark.asyncio
async def test_revert_runs_in_reverse_order(database):
    order = []

    def script(name):
        async def apply(conn):
            order.append(f"up:{name}")

        async def revert(conn):
            order.append(f"down:{name}")
        return MigrationScript(name=name, apply=apply, revert=revert)

    scripts = [script("one"), script("two")]
    runner = MigrationRunner(database)
    await runner.run(scripts)
    result = await runner.revert(scripts)

    assert result.ok
    assert order == ["up:one", "up:two", "down:two", "down:one"]


@pytest.mark.asyncio
async def test_revert_without_revert_operation_fails(database):
    result = await MigrationRunner(database).revert([sql_script("one_way", "SELECT 1")])
    assert result.state == RunState.FAILED
    assert "no revert" in result.error.message


@pytest.mark.asyncio
async def test_sql_file_script(database, tmp_path):
    path = tmp_path / "create_quotes.sql"
    path.write_text(
        "CREATE TABLE IF NOT EXISTS quotes (id INTEGER PRIMARY KEY, body TEXT NOT NULL);\n"
        "INSERT INTO quotes (body) VALUES ('Breathe in, breathe out.');\n",
        encoding="utf-8",
    )
    script = script_from_file(path)
    result = await MigrationRunner(database).run([script])

    assert script.name == "create_quotes.sql"
    assert result.ok
    async with database.connect() as conn:
        assert (await conn.execute(text("SELECT count(*) FROM quotes"))).scalar_one() == 1


@pytest.mark.asyncio
async def test_python_file_script_with_downgrade(database, tmp_path):
    path = tmp_path / "add_journal.py"
    path.write_text(
        "from sqlalchemy import text\n"
        "\n"
        "async def upgrade(conn):\n"
        "    await conn.execute(text('CREATE TABLE IF NOT EXISTS journal (id INTEGER PRIMARY KEY)'))\n"
        "\n"
        "async def downgrade(conn):\n"
        "    await conn.execute(text('DROP TABLE IF EXISTS journal'))\n",
        encoding="utf-8",
    )
    script = script_from_file(path)
    runner = MigrationRunner(database)

    assert (await runner.run([script])).ok
    assert await exists(database, "journal")
    assert (await runner.revert([script])).ok
    assert not await exists(database, "journal")


@pytest.mark.asyncio
async def test_missing_file_fails_the_step(database, tmp_path):
    result = await MigrationRunner(database).run([script_from_file(tmp_path / "nope.sql")])
    assert result.state == RunState.FAILED
    assert result.failed_script == "nope.sql"


def test_unsupported_file_type():
    with pytest.raises(UsageError):
        script_from_file("migrations/notes.txt")
