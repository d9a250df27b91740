from __future__ import annotations

import sqlite3
from pathlib import Path

from resourcedir.core.errors import PersistenceError
from resourcedir.domain.models.resource import StoredResource
from resourcedir.infrastructure.db.sqlite import get_connection


class ResourceRepo:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def insert(self, resource: StoredResource) -> None:
        try:
            with get_connection(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO resources (
                        id,
                        title,
                        description,
                        link,
                        created_at
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        resource.id,
                        resource.title,
                        resource.description,
                        resource.link,
                        resource.created_at,
                    ),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Unable to store resource {resource.id}: {exc}") from exc

    def get_by_id(self, resource_id: str) -> StoredResource | None:
        try:
            with get_connection(self.db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM resources WHERE id = ?",
                    (resource_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Unable to read resource {resource_id}: {exc}") from exc
        return self._to_model(row) if row else None

    def list_all(self) -> list[StoredResource]:
        try:
            with get_connection(self.db_path) as conn:
                rows = conn.execute(
                    """
                    SELECT * FROM resources
                    ORDER BY created_at ASC, rowid ASC
                    """
                ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Unable to list resources: {exc}") from exc
        return [self._to_model(row) for row in rows]

    @staticmethod
    def _to_model(row) -> StoredResource:
        return StoredResource(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            link=row["link"],
            created_at=row["created_at"],
        )
