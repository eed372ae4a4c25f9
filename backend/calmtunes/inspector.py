from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

from sqlalchemy import inspect

from calmtunes.db import Database


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    type: str
    nullable: bool


@dataclass
class TableReport:
    table: str
    exists: bool
    columns: list[ColumnInfo] = field(default_factory=list)

    def column(self, name: str) -> ColumnInfo:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(name)


def _read_table(sync_conn, table: str) -> TableReport:
    inspector = inspect(sync_conn)
    if not inspector.has_table(table):
        return TableReport(table=table, exists=False)
    # get_columns는 테이블 정의(ordinal) 순서 그대로 반환
    columns = [
        ColumnInfo(name=c["name"], type=str(c["type"]), nullable=bool(c["nullable"]))
        for c in inspector.get_columns(table)
    ]
    return TableReport(table=table, exists=True, columns=columns)


class SchemaInspector:
    """Read-only catalog lookups; a missing table is reported, never raised."""

    def __init__(self, database: Database):
        self.database = database

    async def inspect_table(self, table: str) -> TableReport:
        async with self.database.connect() as conn:
            return await conn.run_sync(_read_table, table)

    async def inspect_tables(self, tables: Iterable[str]) -> list[TableReport]:
        reports = []
        for table in tables:
            reports.append(await self.inspect_table(table))
        return reports


def format_report(reports: Iterable[TableReport]) -> str:
    lines = []
    for report in reports:
        lines.append(f"📋 {report.table}:")
        if not report.exists:
            lines.append(f"  ❌ {report.table} table does not exist!")
        for col in report.columns:
            lines.append(f"  {col.name}: {col.type} {'NULL' if col.nullable else 'NOT NULL'}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")
