"""
Migration runner - executes schema/seed scripts one after another.

Scripts run strictly in list order on an autocommit connection. The first
failure halts the sequence; scripts that already succeeded are not reverted,
so re-running starts again from script 1 and relies on each script being
idempotent.
"""
from __future__ import annotations
import importlib.util
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.db import Database, execute_script
from calmtunes.exceptions import StatementError, UsageError
from calmtunes.logger import get_logger
from calmtunes.migrations import MigrationScript

logger = get_logger("runner")

SUPPORTED_SUFFIXES = (".sql", ".py")


class RunState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RunResult:
    state: RunState = RunState.PENDING
    completed: list[str] = field(default_factory=list)
    failed_script: Optional[str] = None
    failed_index: Optional[int] = None
    error: Optional[StatementError] = None

    @property
    def ok(self) -> bool:
        return self.state == RunState.SUCCEEDED

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class MigrationRunner:
    def __init__(self, database: Database):
        self.database = database
        self.state = RunState.PENDING
        self.current: Optional[int] = None

    async def run(self, scripts: Sequence[MigrationScript]) -> RunResult:
        """Apply every script in order, stopping at the first failure."""
        return await self._execute(scripts, direction="apply")

    async def revert(self, scripts: Sequence[MigrationScript]) -> RunResult:
        """Revert scripts in reverse order with the same halt-on-failure policy."""
        return await self._execute(list(reversed(scripts)), direction="revert")

    async def _execute(self, scripts: Sequence[MigrationScript], direction: str) -> RunResult:
        result = RunResult()
        total = len(scripts)
        logger.info(f"🚀 Starting {direction} of {total} script(s)")

        for index, script in enumerate(scripts, start=1):
            self.state = result.state = RunState.RUNNING
            self.current = index
            logger.info(f"📋 Step {index}/{total}: {direction} {script.name}")

            try:
                operation = script.apply if direction == "apply" else script.revert
                if operation is None:
                    raise StatementError(script.name, message=f"{script.name} has no revert operation")
                async with self.database.connect() as conn:
                    await operation(conn)
            except Exception as exc:
                error = exc if isinstance(exc, StatementError) else StatementError(script.name, exc)
                logger.error(f"❌ {script.name} failed: {error.message}")
                self.state = result.state = RunState.FAILED
                result.failed_script = script.name
                result.failed_index = index
                result.error = error
                return result

            result.completed.append(script.name)
            logger.info(f"✅ {script.name} completed successfully")

        self.state = result.state = RunState.SUCCEEDED
        self.current = None
        logger.info(f"🎉 All {total} script(s) completed successfully")
        return result


def _load_module(path: Path):
    spec = importlib.util.spec_from_file_location(f"calmtunes_script_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise UsageError(f"Cannot load script module: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def script_from_file(path: str | Path) -> MigrationScript:
    """
    Wrap a standalone script file.

    ``.sql`` files are read when the step runs and executed as one script;
    ``.py`` files must define ``async upgrade(conn)`` and may define
    ``async downgrade(conn)``.
    """
    path = Path(path)
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise UsageError(f"Unsupported script type {path.suffix!r}; expected one of {SUPPORTED_SUFFIXES}")

    if path.suffix == ".sql":
        async def apply_sql(conn: AsyncConnection) -> None:
            sql = path.read_text(encoding="utf-8")
            await execute_script(conn, sql)

        return MigrationScript(name=path.name, apply=apply_sql)

    async def apply_module(conn: AsyncConnection) -> None:
        module = _load_module(path)
        if not hasattr(module, "upgrade"):
            raise StatementError(path.name, message=f"{path.name} has no upgrade()")
        await module.upgrade(conn)

    async def revert_module(conn: AsyncConnection) -> None:
        module = _load_module(path)
        if not hasattr(module, "downgrade"):
            raise StatementError(path.name, message=f"{path.name} has no downgrade()")
        await module.downgrade(conn)

    return MigrationScript(name=path.name, apply=apply_module, revert=revert_module)
