"""Relational repositories backed by SQLModel sessions"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from eventdesk.errors import FetchError, NotFoundError
from eventdesk.models.project import ProjectRecord
from eventdesk.models.project_config import Project, ProjectStatus
from eventdesk.models.registration import Registration, RegistrationRecord
from eventdesk.repositories.mapping import (
    changes_to_columns,
    project_from_row,
    project_to_row,
    registration_from_row,
)

logger = logging.getLogger(__name__)


class _SqlRepository:
    def __init__(self, db_session: Session):
        self.db = db_session

    @contextmanager
    def _store_errors(self, action: str):
        """Roll back and surface database failures as FetchError"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while {action}: {e}")
            raise FetchError(f"Storage unavailable while {action}") from e


class SqlProjectRepository(_SqlRepository):
    """Projects stored in the ``projects`` table"""

    def load_projects(self) -> List[Project]:
        with self._store_errors("loading projects"):
            statement = select(ProjectRecord).order_by(ProjectRecord.created_at.desc())
            records = self.db.exec(statement).all()
        logger.info(f"Retrieved {len(records)} projects")
        return [project_from_row(r.model_dump()) for r in records]

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._store_errors(f"loading project {project_id}"):
            record = self.db.get(ProjectRecord, project_id)
        if record is None:
            return None
        return project_from_row(record.model_dump())

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
        row = project_to_row(project)
        row["status"] = ProjectStatus(row["status"])
        record = ProjectRecord(**row)

        with self._store_errors("creating project"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)

        logger.info(f"Project created successfully: {record.id}")
        return project_from_row(record.model_dump())

    def save_project(self, project_id: str, changes: Dict[str, Any]) -> Project:
        columns = changes_to_columns(changes)
        columns.pop("id", None)
        if "status" in columns:
            columns["status"] = ProjectStatus(columns["status"])

        with self._store_errors(f"updating project {project_id}"):
            record = self.db.get(ProjectRecord, project_id)
            if record is None:
                raise NotFoundError(f"Project {project_id} not found")

            for column, value in columns.items():
                setattr(record, column, value)
            record.version = (record.version or 0) + 1
            record.updated_at = datetime.now(timezone.utc)

            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)

        logger.info(
            f"Project updated successfully: {project_id} "
            f"(columns={sorted(columns)}, version={record.version})"
        )
        return project_from_row(record.model_dump())

    def delete_project(self, project_id: str) -> None:
        with self._store_errors(f"deleting project {project_id}"):
            record = self.db.get(ProjectRecord, project_id)
            if record is None:
                raise NotFoundError(f"Project {project_id} not found")

            registrations = self.db.exec(
                select(RegistrationRecord).where(
                    RegistrationRecord.project_id == project_id
                )
            ).all()
            for registration in registrations:
                self.db.delete(registration)
            self.db.delete(record)
            self.db.commit()

        logger.info(
            f"Project deleted: {project_id} ({len(registrations)} registrations removed)"
        )


class SqlRegistrationRepository(_SqlRepository):
    """Registrations stored in the ``registrations`` table"""

    def load_registrations(self, project_id: str) -> List[Registration]:
        with self._store_errors(f"loading registrations for {project_id}"):
            statement = (
                select(RegistrationRecord)
                .where(RegistrationRecord.project_id == project_id)
                .order_by(RegistrationRecord.submitted_at)
            )
            records = self.db.exec(statement).all()
        return [registration_from_row(r.model_dump()) for r in records]

    def count_registrations(self, project_id: str) -> int:
        with self._store_errors(f"counting registrations for {project_id}"):
            statement = (
                select(func.count())
                .select_from(RegistrationRecord)
                .where(RegistrationRecord.project_id == project_id)
            )
            return self.db.exec(statement).one()

    def save_registration(self, registration: Registration) -> Registration:
        record = RegistrationRecord(
            id=registration.id or str(uuid.uuid4()),
            project_id=registration.project_id,
            answers=dict(registration.answers),
            submitted_at=registration.submitted_at or datetime.now(timezone.utc),
        )

        with self._store_errors(f"saving registration for {registration.project_id}"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)

        logger.info(
            f"Created registration {record.id} for project {record.project_id}"
        )
        return registration_from_row(record.model_dump())
