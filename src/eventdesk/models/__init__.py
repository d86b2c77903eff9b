"""Database and domain models for EventDesk"""

from eventdesk.models.field_type import CHOICE_TYPES, OTHER_OPTION, FieldType
from eventdesk.models.form_field import FormField
from eventdesk.models.project import ProjectRecord
from eventdesk.models.project_config import (
    ConfigSection,
    DesignConfig,
    LandingPageConfig,
    NotificationConfig,
    PolicyConfig,
    Project,
    ProjectStatus,
    RegistrationPageConfig,
    ScheduleConfig,
    SeoConfig,
    TermsConfig,
)
from eventdesk.models.registration import (
    Registration,
    RegistrationDraft,
    RegistrationRecord,
)

__all__ = [
    "CHOICE_TYPES",
    "OTHER_OPTION",
    "FieldType",
    "FormField",
    "ProjectRecord",
    "ConfigSection",
    "DesignConfig",
    "LandingPageConfig",
    "NotificationConfig",
    "PolicyConfig",
    "Project",
    "ProjectStatus",
    "RegistrationPageConfig",
    "ScheduleConfig",
    "SeoConfig",
    "TermsConfig",
    "Registration",
    "RegistrationDraft",
    "RegistrationRecord",
]
