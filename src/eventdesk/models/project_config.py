"""Project configuration aggregate: the sections an admin edits as one unit"""

import datetime as dt
import enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic.alias_generators import to_camel

from eventdesk.models.base import CamelModel
from eventdesk.models.field_type import FieldType
from eventdesk.models.form_field import FormField, generate_field_id

DEFAULT_THEME_COLOR = "#3b82f6"
DEFAULT_REGISTRATION_TITLE = "Registration"
DEFAULT_PRIVACY_POLICY = (
    "I agree to the collection and use of my personal information."
)
DEFAULT_SUCCESS_MESSAGE = "Your registration has been received."


class ProjectStatus(str, enum.Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"


class ConfigSection(str, enum.Enum):
    """Independently mergeable sections of a project.

    Values match the storage column names; the camelCase spelling used by
    the JSON API (e.g. ``landingPage``) is accepted as well.
    """

    SEO = "seo"
    LANDING_PAGE = "landing_page"
    REGISTRATION_PAGE = "registration_page"
    SCHEDULE = "schedule"
    POLICY = "policy"
    TERMS = "terms"
    DESIGN = "design"
    NOTIFICATION = "notification"

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if to_camel(member.value) == value:
                return member
        return None


class SeoConfig(CamelModel):
    title: str = ""
    description: str = ""
    og_image: Optional[str] = None
    favicon_url: Optional[str] = None


class LandingPageConfig(CamelModel):
    is_enabled: bool = False
    title: str = ""
    description: str = ""
    hero_image: Optional[str] = None
    theme_color: str = DEFAULT_THEME_COLOR


class RegistrationPageConfig(CamelModel):
    is_enabled: bool = False
    title: str = ""
    description: str = ""
    fields: List[FormField] = Field(default_factory=list)


class ScheduleConfig(CamelModel):
    """Application and event windows. Any bound may be absent (open-ended)."""

    application_start: Optional[dt.datetime] = None
    application_end: Optional[dt.datetime] = None
    event_start: Optional[dt.datetime] = None
    event_end: Optional[dt.datetime] = None

    @field_validator(
        "application_start",
        "application_end",
        "event_start",
        "event_end",
        mode="before",
    )
    @classmethod
    def _parse_iso(cls, v):
        # Cleared datetime inputs arrive as empty strings
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, str):
            try:
                return dt.datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
            except ValueError:
                raise ValueError(f"Invalid ISO-8601 timestamp: '{v}'")
        return v


class PolicyConfig(CamelModel):
    # None or <= 0 means unlimited
    max_participants: Optional[int] = None
    # Advisory only: duplicate submissions are not detected
    allow_duplicate: bool = False

    @field_validator("max_participants", mode="before")
    @classmethod
    def _blank_is_unlimited(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def capacity_limited(self) -> bool:
        return self.max_participants is not None and self.max_participants > 0


class TermsConfig(CamelModel):
    privacy_policy: str = ""
    marketing_consent: Optional[str] = None
    require_privacy: bool = False
    require_marketing: bool = False


class DesignConfig(CamelModel):
    logo_url: Optional[str] = None
    footer_text: Optional[str] = None
    contact_info: Optional[str] = None


class NotificationConfig(CamelModel):
    success_message: str = ""


class Project(CamelModel):
    """Aggregate root: an event and all of its configuration"""

    id: Optional[str] = None
    name: str
    manager_id: str = ""
    date: Optional[dt.date] = None
    location: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING

    seo: SeoConfig = Field(default_factory=SeoConfig)
    landing_page: LandingPageConfig = Field(default_factory=LandingPageConfig)
    registration_page: RegistrationPageConfig = Field(
        default_factory=RegistrationPageConfig
    )
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    terms: TermsConfig = Field(default_factory=TermsConfig)
    design: DesignConfig = Field(default_factory=DesignConfig)
    notification: NotificationConfig = Field(default_factory=NotificationConfig)

    version: int = 0
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @classmethod
    def create_default(
        cls,
        name: str,
        date: Optional[dt.date] = None,
        location: str = "",
        manager_id: str = "",
        status: ProjectStatus = ProjectStatus.PLANNING,
    ) -> "Project":
        """Build a new project with usable default configuration.

        Landing and registration pages start disabled, the form starts with
        three required starter questions, and privacy consent is required.
        """
        field_ids: List[str] = []
        for _ in range(3):
            field_ids.append(generate_field_id(field_ids))

        starter_fields = [
            FormField(id=field_ids[0], type=FieldType.TEXT, label="Name", required=True),
            FormField(id=field_ids[1], type=FieldType.TEL, label="Contact", required=True),
            FormField(id=field_ids[2], type=FieldType.EMAIL, label="Email", required=True),
        ]

        return cls(
            name=name,
            manager_id=manager_id,
            date=date,
            location=location,
            status=status,
            seo=SeoConfig(title=name),
            landing_page=LandingPageConfig(is_enabled=False, title=name),
            registration_page=RegistrationPageConfig(
                is_enabled=False,
                title=DEFAULT_REGISTRATION_TITLE,
                fields=starter_fields,
            ),
            terms=TermsConfig(
                privacy_policy=DEFAULT_PRIVACY_POLICY,
                require_privacy=True,
                require_marketing=False,
            ),
            notification=NotificationConfig(success_message=DEFAULT_SUCCESS_MESSAGE),
        )

    def section(self, section) -> CamelModel:
        return getattr(self, ConfigSection(section).value)

    def apply_patch(self, section, patch: Dict[str, Any]) -> "Project":
        """Shallow-merge ``patch`` into one section and return the new project.

        Sibling sections and keys absent from ``patch`` are left unchanged,
        so an empty patch returns an equal project. Keys may use either the
        attribute name or the camelCase alias; unknown keys are rejected.
        """
        section = ConfigSection(section)
        current = getattr(self, section.value)
        return self.model_copy(update={section.value: current.merged(patch)})
