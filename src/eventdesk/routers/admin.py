"""Admin router: project management and registration listing"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Body, Depends, status
from pydantic import Field

from eventdesk.dependencies import get_project_service, get_registration_service
from eventdesk.models.base import CamelModel
from eventdesk.models.form_field import FormField
from eventdesk.models.project_config import Project
from eventdesk.models.registration import Registration
from eventdesk.services.project_service import ProjectService, ProjectSummary
from eventdesk.services.registration_service import RegistrationService

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


class ProjectDetails(CamelModel):
    """Descriptive project attributes. Required ones are checked by the service."""

    name: Optional[str] = Field(None, json_schema_extra={"example": "Spring Meetup"})
    date: Optional[str] = Field(None, json_schema_extra={"example": "2025-04-15"})
    location: Optional[str] = None
    manager_id: Optional[str] = None
    status: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class RegistrationListing(CamelModel):
    """Filtered registrations plus the unfiltered total"""

    total: int
    registrations: List[Registration]


class OptionsRequest(CamelModel):
    raw: str = Field(
        ...,
        description="Comma separated option labels",
        json_schema_extra={"example": "Vegan, Vegetarian, No preference"},
    )


@router.get("/projects", response_model=List[ProjectSummary])
async def list_projects(
    search: Optional[str] = None,
    sort: Literal[
        "latest", "oldest", "most-registrations", "least-registrations", "name-asc"
    ] = "latest",
    service: ProjectService = Depends(get_project_service),
):
    """Projects with their registration counts, searchable by name or manager"""
    return service.list_projects(search=search, sort=sort)


@router.post(
    "/projects", response_model=Project, status_code=status.HTTP_201_CREATED
)
async def create_project(
    request: ProjectDetails,
    service: ProjectService = Depends(get_project_service),
):
    """Create a project with default configuration (pages disabled, starter form)"""
    return service.create_project(request.changes())


@router.get("/projects/{project_id}", response_model=Project)
async def get_project(
    project_id: str, service: ProjectService = Depends(get_project_service)
):
    return service.get_project(project_id)


@router.patch("/projects/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    request: ProjectDetails,
    service: ProjectService = Depends(get_project_service),
):
    return service.update_project(project_id, request.changes())


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str, service: ProjectService = Depends(get_project_service)
):
    service.delete_project(project_id)


@router.patch("/projects/{project_id}/config/{section}", response_model=Project)
async def patch_config_section(
    project_id: str,
    section: str,
    patch: Dict[str, Any] = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    """
    Shallow-merge a partial update into one configuration section.

    ``section`` is one of seo, landingPage, registrationPage, schedule,
    policy, terms, design, notification (snake_case also accepted).
    """
    return service.apply_patch(project_id, section, patch)


@router.post(
    "/projects/{project_id}/fields",
    response_model=FormField,
    status_code=status.HTTP_201_CREATED,
)
async def add_field(
    project_id: str, service: ProjectService = Depends(get_project_service)
):
    return service.add_field(project_id)


@router.patch("/projects/{project_id}/fields/{field_id}", response_model=Project)
async def update_field(
    project_id: str,
    field_id: str,
    changes: Dict[str, Any] = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    return service.update_field(project_id, field_id, changes)


@router.delete("/projects/{project_id}/fields/{field_id}", response_model=Project)
async def remove_field(
    project_id: str,
    field_id: str,
    service: ProjectService = Depends(get_project_service),
):
    return service.remove_field(project_id, field_id)


@router.post(
    "/projects/{project_id}/fields/{field_id}/options", response_model=Project
)
async def set_field_options(
    project_id: str,
    field_id: str,
    request: OptionsRequest,
    service: ProjectService = Depends(get_project_service),
):
    return service.set_field_options(project_id, field_id, request.raw)


@router.get(
    "/projects/{project_id}/registrations", response_model=RegistrationListing
)
async def list_registrations(
    project_id: str,
    search: Optional[str] = None,
    sort: Literal["latest", "oldest"] = "latest",
    service: RegistrationService = Depends(get_registration_service),
):
    registrations = service.list_registrations(project_id, search=search, sort=sort)
    return RegistrationListing(
        total=service.count_registrations(project_id), registrations=registrations
    )
