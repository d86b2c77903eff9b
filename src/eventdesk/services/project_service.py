"""Project service: admin-side editing of projects and their configuration"""

import logging
from typing import Any, Dict, List, Optional

from eventdesk.errors import NotFoundError, ValidationError
from eventdesk.models.form_field import FormField
from eventdesk.models.project_config import (
    ConfigSection,
    Project,
    SeoConfig,
)
from eventdesk.repositories.base import ProjectRepository, RegistrationRepository
from eventdesk.services import form_schema

logger = logging.getLogger(__name__)

# Descriptive attributes editable through update_project
DETAIL_FIELDS = ("name", "date", "location", "manager_id", "status")
REQUIRED_DETAILS = ("name", "date", "manager_id")

PROJECT_SORT_ORDERS = (
    "latest",
    "oldest",
    "most-registrations",
    "least-registrations",
    "name-asc",
)


class ProjectSummary(Project):
    """A project as shown in the admin list, with its registration count"""

    registration_count: int = 0


def effective_seo(project: Project) -> SeoConfig:
    """SEO values used when rendering: explicit SEO, then landing page, then name"""
    seo = project.seo
    return seo.model_copy(
        update={
            "title": seo.title or project.landing_page.title or project.name,
            "description": seo.description or project.landing_page.description,
        }
    )


def _check_details(project: Project) -> None:
    missing = [name for name in REQUIRED_DETAILS if not getattr(project, name)]
    if missing:
        raise ValidationError(
            "Please fill in all required project details",
            errors=[{"field_id": name, "message": "Required"} for name in missing],
        )


class ProjectService:
    """Service for creating projects and editing their configuration sections"""

    def __init__(
        self,
        projects: ProjectRepository,
        registrations: Optional[RegistrationRepository] = None,
    ):
        self.projects = projects
        self.registrations = registrations

    def list_projects(
        self, search: Optional[str] = None, sort: str = "latest"
    ) -> List[ProjectSummary]:
        """
        List projects for the admin overview.

        Args:
            search: case-insensitive substring of the project name or manager
            sort: latest, oldest, most-registrations, least-registrations
                or name-asc

        Raises:
            ValidationError: unknown sort order
        """
        if sort not in PROJECT_SORT_ORDERS:
            raise ValidationError(
                f"Unknown sort order '{sort}'",
                errors=[
                    {
                        "field_id": "sort",
                        "message": f"Use one of {', '.join(PROJECT_SORT_ORDERS)}",
                    }
                ],
            )

        projects = self.projects.load_projects()

        needle = (search or "").strip().lower()
        if needle:
            projects = [
                p
                for p in projects
                if needle in p.name.lower() or needle in p.manager_id.lower()
            ]

        summaries = [
            ProjectSummary(
                **p.model_dump(),
                registration_count=(
                    self.registrations.count_registrations(p.id)
                    if self.registrations is not None
                    else 0
                ),
            )
            for p in projects
        ]

        if sort in ("latest", "oldest"):
            summaries.sort(
                key=lambda p: p.created_at.timestamp() if p.created_at else 0.0,
                reverse=(sort == "latest"),
            )
        elif sort in ("most-registrations", "least-registrations"):
            summaries.sort(
                key=lambda p: p.registration_count,
                reverse=(sort == "most-registrations"),
            )
        else:
            summaries.sort(key=lambda p: p.name.lower())
        return summaries

    def get_project(self, project_id: str) -> Project:
        project = self.projects.get_project(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def create_project(self, details: Dict[str, Any]) -> Project:
        """
        Create a project with default configuration.

        Args:
            details: name, date, location, managerId and status

        Returns:
            The stored project

        Raises:
            ValidationError: unknown keys, invalid values or missing
                name/date/manager
        """
        seed = Project(name=details.get("name") or "").merged(
            {k: v for k, v in details.items() if k != "name"}
        )
        _check_details(seed)

        project = Project.create_default(
            name=seed.name,
            date=seed.date,
            location=seed.location,
            manager_id=seed.manager_id,
            status=seed.status,
        )
        created = self.projects.create_project(project)
        logger.info(f"Created project {created.id} ({created.name})")
        return created

    def update_project(self, project_id: str, details: Dict[str, Any]) -> Project:
        """Update descriptive attributes (name, date, location, manager, status)"""
        project = self.get_project(project_id)

        aliases = Project.key_aliases()
        allowed = {Project.model_fields[name].alias or name for name in DETAIL_FIELDS}
        rejected = sorted(k for k in details if aliases.get(k) not in allowed)
        if rejected:
            raise ValidationError(
                f"Cannot update {', '.join(rejected)} here",
                errors=[{"field_id": k, "message": "Not editable"} for k in rejected],
            )

        updated = project.merged(details)
        _check_details(updated)

        changes = {name: getattr(updated, name) for name in DETAIL_FIELDS}
        return self.projects.save_project(project_id, changes)

    def apply_patch(
        self, project_id: str, section: str, patch: Dict[str, Any]
    ) -> Project:
        """Shallow-merge ``patch`` into one configuration section and persist it.

        Only the touched section is written, so concurrent edits to other
        sections are not overwritten.
        """
        try:
            section = ConfigSection(section)
        except ValueError:
            raise ValidationError(f"Unknown configuration section '{section}'")

        project = self.get_project(project_id)
        updated = project.apply_patch(section, patch)

        if section == ConfigSection.REGISTRATION_PAGE:
            self._check_registration_page(updated)

        logger.info(f"Patching {section.value} of project {project_id}: {sorted(patch)}")
        return self.projects.save_project(
            project_id, {section.value: updated.section(section)}
        )

    def delete_project(self, project_id: str) -> None:
        self.projects.delete_project(project_id)
        logger.info(f"Deleted project {project_id}")

    # Form fields

    def add_field(self, project_id: str) -> FormField:
        project = self.get_project(project_id)
        fields = form_schema.add_field(project.registration_page.fields)
        self._save_fields(project, fields)
        return fields[-1]

    def update_field(
        self, project_id: str, field_id: str, changes: Dict[str, Any]
    ) -> Project:
        project = self.get_project(project_id)
        if not any(f.id == field_id for f in project.registration_page.fields):
            return project
        fields = form_schema.update_field(
            project.registration_page.fields, field_id, changes
        )
        return self._save_fields(project, fields)

    def set_field_options(
        self, project_id: str, field_id: str, raw_options: str
    ) -> Project:
        """Replace a field's options from admin-typed comma separated text"""
        return self.update_field(
            project_id, field_id, {"options": form_schema.parse_options(raw_options)}
        )

    def remove_field(self, project_id: str, field_id: str) -> Project:
        project = self.get_project(project_id)
        if not any(f.id == field_id for f in project.registration_page.fields):
            return project
        fields = form_schema.remove_field(project.registration_page.fields, field_id)
        return self._save_fields(project, fields)

    def _save_fields(self, project: Project, fields: List[FormField]) -> Project:
        updated = project.model_copy(
            update={
                "registration_page": project.registration_page.model_copy(
                    update={"fields": fields}
                )
            }
        )
        self._check_registration_page(updated)
        return self.projects.save_project(
            project.id, {"registration_page": updated.registration_page}
        )

    def _check_registration_page(self, project: Project) -> None:
        # An enabled registration form must always be renderable
        if project.registration_page.is_enabled:
            form_schema.check_schema(project.registration_page.fields)

