"""Async SQLite persistence for registered projects."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from planlink.db.migrations import apply_migrations
from planlink.models.project import GitHubRepoRef, Project


class SQLiteStore:
    """Data access layer for projects."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self._db_path)
        conn.row_factory = aiosqlite.Row
        try:
            await apply_migrations(conn)
            yield conn
        finally:
            await conn.close()

    async def upsert_project(self, project: Project) -> None:
        async with self.connection() as conn:
            await conn.execute(
                """
                INSERT INTO projects(
                    id,
                    origin,
                    plan_path,
                    github_organization,
                    github_repo,
                    created_at
                )
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    origin=excluded.origin,
                    plan_path=excluded.plan_path,
                    github_organization=excluded.github_organization,
                    github_repo=excluded.github_repo
                """,
                (
                    project.id,
                    project.origin,
                    project.plan_path,
                    project.github.organization,
                    project.github.repo,
                    project.created_at.isoformat(),
                ),
            )
            await conn.commit()

    async def list_projects(self) -> list[Project]:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects ORDER BY created_at ASC")
            rows = await cursor.fetchall()
        return [self._project_from_row(row) for row in rows]

    async def get_project(self, project_id: str) -> Project | None:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._project_from_row(row)

    async def delete_project(self, project_id: str) -> None:
        async with self.connection() as conn:
            await conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
            await conn.commit()

    @staticmethod
    def _project_from_row(row: aiosqlite.Row) -> Project:
        return Project(
            id=str(row["id"]),
            origin=str(row["origin"]),
            plan_path=str(row["plan_path"]),
            github=GitHubRepoRef(
                organization=str(row["github_organization"]),
                repo=str(row["github_repo"]),
            ),
            created_at=datetime.fromisoformat(str(row["created_at"])),
        )
