"""Init DB

Revision ID: 3f1d2c9a7b10
Revises:
Create Date: 2025-03-02 10:12:44.518204

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1d2c9a7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    status_enum = sa.Enum("planning", "active", "completed", name="project_status")

    op.create_table(
        "projects",
        sa.Column("id", sa.VARCHAR(), nullable=False),
        sa.Column("name", sa.VARCHAR(), nullable=False),
        sa.Column("manager_id", sa.VARCHAR(), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("location", sa.VARCHAR(), nullable=False),
        sa.Column("status", status_enum, nullable=False, server_default="planning"),
        # Configuration sections (camelCase JSON documents)
        sa.Column("seo", sa.JSON(), nullable=True),
        sa.Column("landing_page", sa.JSON(), nullable=True),
        sa.Column("registration_page", sa.JSON(), nullable=True),
        sa.Column("schedule", sa.JSON(), nullable=True),
        sa.Column("policy", sa.JSON(), nullable=True),
        sa.Column("terms", sa.JSON(), nullable=True),
        sa.Column("design", sa.JSON(), nullable=True),
        sa.Column("notification", sa.JSON(), nullable=True),
        sa.Column("version", sa.INTEGER(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_projects_manager_id"), "projects", ["manager_id"], unique=False
    )
    op.create_index(op.f("ix_projects_date"), "projects", ["date"], unique=False)

    op.create_table(
        "registrations",
        sa.Column("id", sa.VARCHAR(), nullable=False),
        sa.Column("project_id", sa.VARCHAR(), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Admission counts registrations per project on every submit
    op.create_index(
        op.f("ix_registrations_project_id"),
        "registrations",
        ["project_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_registrations_project_id"), table_name="registrations")
    op.drop_table("registrations")
    op.drop_index(op.f("ix_projects_date"), table_name="projects")
    op.drop_index(op.f("ix_projects_manager_id"), table_name="projects")
    op.drop_table("projects")
    sa.Enum(name="project_status").drop(op.get_bind(), checkfirst=True)
