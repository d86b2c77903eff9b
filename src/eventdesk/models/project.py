"""SQLModel ProjectRecord model"""

import datetime as dt
import uuid
from typing import Optional

from sqlalchemy import JSON, Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

from eventdesk.models.project_config import ProjectStatus


class ProjectRecord(SQLModel, table=True):
    """Stored project row.

    Configuration sections live in JSON columns with camelCase keys; the
    columns themselves follow the snake_case storage schema.
    """

    __tablename__ = "projects"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str
    manager_id: str = Field(default="", index=True)
    date: Optional[dt.date] = Field(default=None, index=True)
    location: str = Field(default="")
    status: ProjectStatus = Field(
        default=ProjectStatus.PLANNING,
        sa_column=Column(
            SAEnum(
                ProjectStatus,
                name="project_status",
                native_enum=True,
                values_callable=lambda enum: [e.value for e in enum],
            ),
            nullable=False,
            server_default=ProjectStatus.PLANNING.value,
        ),
    )

    seo: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    landing_page: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    registration_page: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    schedule: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    policy: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    terms: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    design: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    notification: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    version: int = Field(default=0)
    created_at: Optional[dt.datetime] = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
    updated_at: Optional[dt.datetime] = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
