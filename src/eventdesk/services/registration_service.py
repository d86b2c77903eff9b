"""Registration service for handling form submissions"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from eventdesk.errors import AdmissionError, NotFoundError, ValidationError
from eventdesk.models.project_config import Project
from eventdesk.models.registration import Registration, RegistrationDraft
from eventdesk.repositories.base import ProjectRepository, RegistrationRepository
from eventdesk.services.admission import (
    ADMISSION_MESSAGES,
    AdmissionState,
    evaluate_admission,
    utc_now,
)
from eventdesk.services.registration_assembler import RegistrationAssembler

logger = logging.getLogger(__name__)

SORT_ORDERS = ("latest", "oldest")


def _answer_text(registration: Registration) -> str:
    parts = []
    for value in registration.answers.values():
        if isinstance(value, list):
            parts.extend(value)
        else:
            parts.append(value)
    return " ".join(str(p) for p in parts).lower()


class RegistrationService:
    """Service for accepting and listing registrations"""

    def __init__(
        self, projects: ProjectRepository, registrations: RegistrationRepository
    ):
        self.projects = projects
        self.registrations = registrations

    def _get_project(self, project_id: str) -> Project:
        project = self.projects.get_project(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def availability(
        self,
        project: Project,
        now: Optional[datetime] = None,
        count: Optional[int] = None,
    ) -> AdmissionState:
        """Current admission state for a project.

        ``count`` is read from the store unless the caller already has it.
        """
        if count is None:
            count = self.registrations.count_registrations(project.id)
        return evaluate_admission(
            now or utc_now(),
            project.schedule,
            project.policy,
            count,
            project.registration_page.is_enabled,
        )

    def submit(
        self,
        project_id: str,
        draft: RegistrationDraft,
        now: Optional[datetime] = None,
    ) -> Registration:
        """
        Validate a draft and store it as a registration.

        Admission is evaluated again here with a fresh count and clock; a
        state shown when the page was loaded is not trusted.

        Raises:
            NotFoundError: unknown project
            AdmissionError: the project does not accept registrations now
            ValidationError: the draft is incomplete or invalid
            FetchError: the store is unavailable
        """
        project = self._get_project(project_id)
        now = now or utc_now()

        state = self.availability(project, now)
        if state != AdmissionState.OPEN:
            logger.info(f"Rejected registration for {project_id}: {state.value}")
            raise AdmissionError(state, ADMISSION_MESSAGES[state])

        assembler = RegistrationAssembler(
            project.registration_page.fields, project.terms, draft
        )
        answers = assembler.assemble()

        saved = self.registrations.save_registration(
            Registration(project_id=project_id, answers=answers)
        )
        # Stores that do not assign these leave them to us
        if saved.id is None or saved.submitted_at is None:
            saved = saved.model_copy(
                update={
                    "id": saved.id or str(uuid.uuid4()),
                    "submitted_at": saved.submitted_at or now,
                }
            )

        logger.info(f"Accepted registration {saved.id} for project {project_id}")
        return saved

    def list_registrations(
        self,
        project_id: str,
        search: Optional[str] = None,
        sort: str = "latest",
    ) -> List[Registration]:
        """
        List a project's registrations.

        Args:
            search: case-insensitive substring matched against every answer
            sort: "latest" (newest first) or "oldest"
        """
        if sort not in SORT_ORDERS:
            raise ValidationError(
                f"Unknown sort order '{sort}'",
                errors=[{"field_id": "sort", "message": "Use latest or oldest"}],
            )

        self._get_project(project_id)
        registrations = self.registrations.load_registrations(project_id)

        needle = (search or "").strip().lower()
        if needle:
            registrations = [r for r in registrations if needle in _answer_text(r)]

        registrations.sort(
            key=lambda r: r.submitted_at.timestamp() if r.submitted_at else 0.0,
            reverse=(sort == "latest"),
        )
        return registrations

    def count_registrations(self, project_id: str) -> int:
        return self.registrations.count_registrations(project_id)
