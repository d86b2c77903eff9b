"""Bidirectional mapping between the camelCase model and snake_case storage.

Every model attribute has exactly one storage column and vice versa.
Section objects are stored as JSON with camelCase keys.
"""

import enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel

from eventdesk.models.project_config import ConfigSection, Project
from eventdesk.models.registration import Registration

PROJECT_FIELD_MAP: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "managerId": "manager_id",
    "date": "date",
    "location": "location",
    "status": "status",
    "seo": "seo",
    "landingPage": "landing_page",
    "registrationPage": "registration_page",
    "schedule": "schedule",
    "policy": "policy",
    "terms": "terms",
    "design": "design",
    "notification": "notification",
    "version": "version",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
PROJECT_COLUMN_MAP: Dict[str, str] = {v: k for k, v in PROJECT_FIELD_MAP.items()}

REGISTRATION_FIELD_MAP: Dict[str, str] = {
    "id": "id",
    "projectId": "project_id",
    "submittedAt": "submitted_at",
    "answers": "answers",
}
REGISTRATION_COLUMN_MAP: Dict[str, str] = {
    v: k for k, v in REGISTRATION_FIELD_MAP.items()
}

SECTION_COLUMNS = frozenset(section.value for section in ConfigSection)


def to_column(key: str) -> str:
    """Storage column for a model key given as camelCase alias or snake_case name"""
    if key in PROJECT_FIELD_MAP:
        return PROJECT_FIELD_MAP[key]
    if key in PROJECT_COLUMN_MAP:
        return key
    raise KeyError(f"Unknown project attribute '{key}'")


def _column_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, enum.Enum):
        return value.value
    return value


def changes_to_columns(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a partial project update into storage columns and values"""
    return {to_column(key): _column_value(value) for key, value in changes.items()}


def project_to_row(project: Project) -> Dict[str, Any]:
    row = {}
    for name in Project.model_fields:
        alias = Project.model_fields[name].alias or name
        row[PROJECT_FIELD_MAP[alias]] = _column_value(getattr(project, name))
    return row


def migrate_project_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Bring a stored row up to the current shape without rewriting it.

    Rows written before SEO settings existed get an ``seo`` section derived
    from the landing page (falling back to the project name).
    """
    row = dict(row)
    if not row.get("seo"):
        landing = row.get("landing_page") or {}
        row["seo"] = {
            "title": landing.get("title") or row.get("name") or "",
            "description": landing.get("description") or "",
        }
    return row


def project_from_row(row: Mapping[str, Any]) -> Project:
    row = migrate_project_row(row)
    data = {}
    for column, value in row.items():
        if column not in PROJECT_COLUMN_MAP:
            continue
        if column in SECTION_COLUMNS and value is None:
            # Missing sections load as their defaults
            continue
        data[PROJECT_COLUMN_MAP[column]] = value
    return Project.model_validate(data)


def registration_to_row(registration: Registration) -> Dict[str, Any]:
    return {
        REGISTRATION_FIELD_MAP["id"]: registration.id,
        REGISTRATION_FIELD_MAP["projectId"]: registration.project_id,
        REGISTRATION_FIELD_MAP["submittedAt"]: registration.submitted_at,
        REGISTRATION_FIELD_MAP["answers"]: dict(registration.answers),
    }


def registration_from_row(row: Mapping[str, Any]) -> Registration:
    data = {
        REGISTRATION_COLUMN_MAP[column]: value
        for column, value in row.items()
        if column in REGISTRATION_COLUMN_MAP
    }
    if data.get("answers") is None:
        data["answers"] = {}
    return Registration.model_validate(data)
