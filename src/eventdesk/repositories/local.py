"""Local persisted store: projects and registrations in a JSON snapshot file.

Rows are kept in the same snake_case shape as the relational tables so the
two backends share one mapping. Without a path the store is memory-only.
"""

import json
import logging
import os
import threading
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from eventdesk.errors import FetchError, NotFoundError
from eventdesk.models.project_config import Project
from eventdesk.models.registration import Registration
from eventdesk.repositories.mapping import (
    changes_to_columns,
    project_from_row,
    project_to_row,
    registration_from_row,
    registration_to_row,
)

logger = logging.getLogger(__name__)


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _sort_key(value) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value or ""


class LocalRepository:
    """Implements both the project and the registration repository contracts"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self._lock = threading.Lock()
        self._projects: Dict[str, Dict[str, Any]] = {}
        self._registrations: List[Dict[str, Any]] = []
        if self.path is not None:
            self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"No local store at {self.path}, starting empty")
            return
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                snapshot = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read local store {self.path}: {e}")
            raise FetchError(f"Local store {self.path} is unreadable") from e

        self._projects = {row["id"]: row for row in snapshot.get("projects", [])}
        self._registrations = list(snapshot.get("registrations", []))
        logger.info(
            f"Loaded {len(self._projects)} projects and "
            f"{len(self._registrations)} registrations from {self.path}"
        )

    def _flush(self) -> None:
        if self.path is None:
            return
        snapshot = {
            "projects": list(self._projects.values()),
            "registrations": self._registrations,
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(snapshot, fh, default=_json_default, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Could not write local store {self.path}: {e}")
            raise FetchError(f"Local store {self.path} is not writable") from e

    def _commit(self, projects=None, registrations=None) -> None:
        """Swap in new state and flush; restore the previous state if the flush fails"""
        previous = (self._projects, self._registrations)
        if projects is not None:
            self._projects = projects
        if registrations is not None:
            self._registrations = registrations
        try:
            self._flush()
        except FetchError:
            self._projects, self._registrations = previous
            raise

    def _roundtrip(self, row: Dict[str, Any]) -> Dict[str, Any]:
        # Store JSON-shaped copies so callers never share mutable state
        return json.loads(json.dumps(row, default=_json_default))

    # Projects

    def load_projects(self) -> List[Project]:
        with self._lock:
            rows = sorted(
                self._projects.values(),
                key=lambda r: _sort_key(r.get("created_at")),
                reverse=True,
            )
            return [project_from_row(row) for row in rows]

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._lock:
            row = self._projects.get(project_id)
            return project_from_row(row) if row is not None else None

    def create_project(self, project: Project) -> Project:
        now = datetime.now(timezone.utc)
        project = project.model_copy(
            update={
                "id": project.id or str(uuid.uuid4()),
                "version": 0,
                "created_at": now,
                "updated_at": now,
            }
        )
        row = self._roundtrip(project_to_row(project))
        with self._lock:
            self._commit(projects={**self._projects, row["id"]: row})
        logger.info(f"Project created successfully: {row['id']}")
        return project_from_row(row)

    def save_project(self, project_id: str, changes: Dict[str, Any]) -> Project:
        columns = self._roundtrip(changes_to_columns(changes))
        columns.pop("id", None)
        with self._lock:
            current = self._projects.get(project_id)
            if current is None:
                raise NotFoundError(f"Project {project_id} not found")
            row = {**current, **columns}
            row["version"] = (current.get("version") or 0) + 1
            row["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._commit(projects={**self._projects, project_id: row})
        logger.info(f"Project updated successfully: {project_id} (version={row['version']})")
        return project_from_row(row)

    def delete_project(self, project_id: str) -> None:
        with self._lock:
            if project_id not in self._projects:
                raise NotFoundError(f"Project {project_id} not found")
            projects = {k: v for k, v in self._projects.items() if k != project_id}
            registrations = [
                r for r in self._registrations if r.get("project_id") != project_id
            ]
            self._commit(projects=projects, registrations=registrations)
        logger.info(f"Project deleted: {project_id}")

    # Registrations

    def load_registrations(self, project_id: str) -> List[Registration]:
        with self._lock:
            rows = [r for r in self._registrations if r.get("project_id") == project_id]
        rows.sort(key=lambda r: _sort_key(r.get("submitted_at")))
        return [registration_from_row(row) for row in rows]

    def count_registrations(self, project_id: str) -> int:
        with self._lock:
            return sum(1 for r in self._registrations if r.get("project_id") == project_id)

    def save_registration(self, registration: Registration) -> Registration:
        registration = registration.model_copy(
            update={
                "id": registration.id or str(uuid.uuid4()),
                "submitted_at": registration.submitted_at or datetime.now(timezone.utc),
            }
        )
        row = self._roundtrip(registration_to_row(registration))
        with self._lock:
            self._commit(registrations=[*self._registrations, row])
        logger.info(f"Created registration {row['id']} for project {row['project_id']}")
        return registration_from_row(row)
