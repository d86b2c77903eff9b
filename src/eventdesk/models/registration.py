"""Registration models: the stored table and the domain record"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from eventdesk.models.base import CamelModel

AnswerValue = Union[str, List[str]]


class RegistrationRecord(SQLModel, table=True):
    """Stored registration row (snake_case storage schema)"""

    __tablename__ = "registrations"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    project_id: str = Field(foreign_key="projects.id", index=True)
    answers: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class Registration(CamelModel):
    """A single submission. Created once, never mutated."""

    id: Optional[str] = None
    project_id: str
    submitted_at: Optional[datetime] = None
    answers: Dict[str, AnswerValue] = {}


class RegistrationDraft(CamelModel):
    """In-progress answers for one registration form.

    ``values`` holds a string per text-like or single-choice field and an
    ordered list (selection order) per multi-choice field. ``other_text``
    holds the free text typed next to an "Other" choice.
    """

    values: Dict[str, AnswerValue] = {}
    other_text: Dict[str, str] = {}
    privacy_agreed: bool = False
    marketing_agreed: bool = False
