"""Public event pages: landing, registration form, submission and drafts"""

import datetime as dt
import logging
from typing import List, Optional

import redis
from fastapi import APIRouter, Depends, HTTPException, status

from eventdesk.dependencies import (
    get_draft_store,
    get_project_service,
    get_registration_service,
)
from eventdesk.models.base import CamelModel
from eventdesk.models.project_config import (
    DesignConfig,
    LandingPageConfig,
    ScheduleConfig,
    SeoConfig,
    TermsConfig,
)
from eventdesk.models.registration import Registration, RegistrationDraft
from eventdesk.services.admission import ADMISSION_MESSAGES, AdmissionState
from eventdesk.services.draft_store import DraftStore
from eventdesk.services.form_schema import RenderedField, render_form
from eventdesk.services.project_service import ProjectService, effective_seo
from eventdesk.services.registration_service import RegistrationService

router = APIRouter(prefix="/event", tags=["Events"])
logger = logging.getLogger(__name__)


class AdmissionView(CamelModel):
    state: AdmissionState
    message: str
    can_register: bool

    @classmethod
    def of(cls, state: AdmissionState) -> "AdmissionView":
        return cls(
            state=state,
            message=ADMISSION_MESSAGES[state],
            can_register=state == AdmissionState.OPEN,
        )


class LandingView(CamelModel):
    project_id: str
    name: str
    date: Optional[dt.date] = None
    location: str = ""
    seo: SeoConfig
    landing_page: LandingPageConfig
    design: DesignConfig
    registration_enabled: bool
    schedule: ScheduleConfig
    max_participants: Optional[int] = None
    registration_count: int
    admission: AdmissionView


class RegistrationFormView(CamelModel):
    project_id: str
    title: str
    description: str = ""
    fields: List[RenderedField]
    terms: TermsConfig
    seo: SeoConfig
    design: DesignConfig
    admission: AdmissionView


class SubmissionRequest(RegistrationDraft):
    draft_id: Optional[str] = None


class SubmissionResponse(CamelModel):
    registration: Registration
    success_message: str
    redirect_url: str


class SuccessView(CamelModel):
    project_id: str
    name: str
    success_message: str
    design: DesignConfig


@router.get("/{project_id}", response_model=LandingView)
async def landing_page(
    project_id: str,
    preview: bool = False,
    projects: ProjectService = Depends(get_project_service),
    registrations: RegistrationService = Depends(get_registration_service),
):
    """Landing page data with effective SEO and call-to-action state.

    Disabled landing pages are hidden unless ``preview=true``.
    """
    project = projects.get_project(project_id)
    if not project.landing_page.is_enabled and not preview:
        raise HTTPException(status_code=404, detail="Event page not found")

    count = registrations.count_registrations(project.id)
    return LandingView(
        project_id=project.id,
        name=project.name,
        date=project.date,
        location=project.location,
        seo=effective_seo(project),
        landing_page=project.landing_page,
        design=project.design,
        registration_enabled=project.registration_page.is_enabled,
        schedule=project.schedule,
        max_participants=project.policy.max_participants,
        registration_count=count,
        admission=AdmissionView.of(registrations.availability(project, count=count)),
    )


@router.get("/{project_id}/register", response_model=RegistrationFormView)
async def registration_form(
    project_id: str,
    projects: ProjectService = Depends(get_project_service),
    registrations: RegistrationService = Depends(get_registration_service),
):
    project = projects.get_project(project_id)
    page = project.registration_page
    if not page.is_enabled:
        raise HTTPException(status_code=404, detail="Registration page not found")

    return RegistrationFormView(
        project_id=project.id,
        title=page.title,
        description=page.description,
        fields=render_form(page.fields),
        terms=project.terms,
        seo=effective_seo(project),
        design=project.design,
        admission=AdmissionView.of(registrations.availability(project)),
    )


@router.post(
    "/{project_id}/register",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_registration(
    project_id: str,
    request: SubmissionRequest,
    projects: ProjectService = Depends(get_project_service),
    registrations: RegistrationService = Depends(get_registration_service),
    drafts: DraftStore = Depends(get_draft_store),
):
    """
    Submit a registration.

    With a ``draftId`` the answers are saved as a draft first, so a failed
    submission (validation, admission or storage) can be resumed.
    """
    draft = RegistrationDraft.model_validate(
        request.model_dump(exclude={"draft_id"})
    )

    if request.draft_id:
        try:
            drafts.save_draft(project_id, request.draft_id, draft)
        except redis.RedisError as e:
            logger.warning(f"Could not save draft before submitting: {e}")

    registration = registrations.submit(project_id, draft)

    if request.draft_id:
        try:
            drafts.clear_draft(project_id, request.draft_id)
        except redis.RedisError as e:
            logger.warning(f"Could not clear draft after submitting: {e}")

    project = projects.get_project(project_id)
    return SubmissionResponse(
        registration=registration,
        success_message=project.notification.success_message,
        redirect_url=f"/event/{project_id}/register/success",
    )


@router.get(
    "/{project_id}/register/drafts/{draft_id}", response_model=RegistrationDraft
)
async def get_draft(
    project_id: str,
    draft_id: str,
    projects: ProjectService = Depends(get_project_service),
    drafts: DraftStore = Depends(get_draft_store),
):
    projects.get_project(project_id)
    draft = drafts.get_draft(project_id, draft_id)
    if draft is None:
        raise HTTPException(status_code=404, detail="Draft not found or expired")
    return draft


@router.put(
    "/{project_id}/register/drafts/{draft_id}", response_model=RegistrationDraft
)
async def save_draft(
    project_id: str,
    draft_id: str,
    draft: RegistrationDraft,
    projects: ProjectService = Depends(get_project_service),
    drafts: DraftStore = Depends(get_draft_store),
):
    projects.get_project(project_id)
    return drafts.save_draft(project_id, draft_id, draft)


@router.get("/{project_id}/register/success", response_model=SuccessView)
async def registration_success(
    project_id: str, projects: ProjectService = Depends(get_project_service)
):
    project = projects.get_project(project_id)
    return SuccessView(
        project_id=project.id,
        name=project.name,
        success_message=project.notification.success_message,
        design=project.design,
    )
