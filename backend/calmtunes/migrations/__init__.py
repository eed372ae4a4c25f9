"""
Built-in schema scripts.

Every module here exposes ``name``, ``async upgrade(conn)`` and
``async downgrade(conn)``. ``upgrade`` must be safe to run against a database
that already has the object in the desired shape.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import ModuleType
from typing import Awaitable, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncConnection

from calmtunes.exceptions import UsageError

ScriptOperation = Callable[[AsyncConnection], Awaitable[None]]


@dataclass
class MigrationScript:
    name: str
    apply: ScriptOperation
    revert: Optional[ScriptOperation] = None

    @classmethod
    def from_module(cls, module: ModuleType) -> "MigrationScript":
        upgrade = getattr(module, "upgrade", None)
        if upgrade is None:
            raise UsageError(f"{module.__name__} has no upgrade()")
        name = getattr(module, "name", module.__name__.rsplit(".", 1)[-1])
        return cls(name=name, apply=upgrade, revert=getattr(module, "downgrade", None))


from calmtunes.migrations import (  # noqa: E402
    create_users,
    create_mood_entries,
    create_music_sessions,
    create_panic_sessions,
    create_user_contacts,
    create_drawing_sessions,
    add_artwork_column,
    create_therapist_requests,
)

# dependency order: users first, artwork column after drawing_sessions
ALL_SCRIPTS: list[MigrationScript] = [
    MigrationScript.from_module(m)
    for m in (
        create_users,
        create_mood_entries,
        create_music_sessions,
        create_panic_sessions,
        create_user_contacts,
        create_drawing_sessions,
        add_artwork_column,
        create_therapist_requests,
    )
]

SCRIPTS: dict[str, MigrationScript] = {s.name: s for s in ALL_SCRIPTS}

BOOTSTRAP_SEQUENCE = ("create_users", "create_therapist_requests")


def get_scripts(*names: str) -> list[MigrationScript]:
    try:
        return [SCRIPTS[n] for n in names]
    except KeyError as exc:
        raise UsageError(f"Unknown migration script: {exc.args[0]}") from exc
