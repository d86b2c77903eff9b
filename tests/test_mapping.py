"""Tests for the storage <-> model mapping and read-time migration"""

from datetime import date

import pytest

from eventdesk.models.project_config import Project
from eventdesk.models.registration import Registration
from eventdesk.repositories.mapping import (
    PROJECT_COLUMN_MAP,
    PROJECT_FIELD_MAP,
    REGISTRATION_FIELD_MAP,
    changes_to_columns,
    project_from_row,
    project_to_row,
    registration_from_row,
    registration_to_row,
    to_column,
)


def test_project_mapping_is_total_and_bijective():
    aliases = {info.alias or name for name, info in Project.model_fields.items()}

    assert set(PROJECT_FIELD_MAP) == aliases
    assert len(set(PROJECT_FIELD_MAP.values())) == len(PROJECT_FIELD_MAP)
    assert set(PROJECT_COLUMN_MAP) == set(PROJECT_FIELD_MAP.values())


def test_registration_mapping_is_total():
    aliases = {info.alias or name for name, info in Registration.model_fields.items()}
    assert set(REGISTRATION_FIELD_MAP) == aliases


@pytest.mark.parametrize(
    "key, column",
    [
        ("managerId", "manager_id"),
        ("manager_id", "manager_id"),
        ("landingPage", "landing_page"),
        ("registration_page", "registration_page"),
    ],
)
def test_to_column(key, column):
    assert to_column(key) == column


def test_to_column_rejects_unknown():
    with pytest.raises(KeyError):
        to_column("billing")


def test_project_row_round_trip():
    project = Project.create_default(
        name="Spring Meetup", date=date(2025, 4, 15), manager_id="m-1"
    ).model_copy(update={"id": "p-1"})

    row = project_to_row(project)

    assert row["manager_id"] == "m-1"
    assert row["status"] == "planning"
    assert row["landing_page"]["isEnabled"] is False
    assert project_from_row(row) == project


def test_changes_to_columns_serializes_sections():
    project = Project.create_default(name="Spring Meetup")

    columns = changes_to_columns(
        {"landingPage": project.landing_page, "managerId": "m-2"}
    )

    assert columns == {
        "landing_page": project.landing_page.model_dump(mode="json", by_alias=True),
        "manager_id": "m-2",
    }


class TestSeoMigration:
    def test_missing_seo_is_derived_from_landing_page(self):
        row = {
            "id": "p-1",
            "name": "Internal name",
            "landing_page": {"title": "Spring Meetup", "description": "Talks"},
        }

        project = project_from_row(row)

        assert project.seo.title == "Spring Meetup"
        assert project.seo.description == "Talks"
        # The stored row itself is not rewritten
        assert "seo" not in row

    def test_empty_seo_falls_back_to_name(self):
        project = project_from_row({"id": "p-1", "name": "Spring Meetup", "seo": {}})

        assert project.seo.title == "Spring Meetup"
        assert project.seo.description == ""

    def test_existing_seo_is_kept(self):
        project = project_from_row(
            {
                "id": "p-1",
                "name": "Spring Meetup",
                "seo": {"title": "Custom", "description": ""},
                "landing_page": {"title": "Landing"},
            }
        )
        assert project.seo.title == "Custom"


def test_missing_sections_load_as_defaults():
    project = project_from_row({"id": "p-1", "name": "Old", "policy": None})

    assert project.policy.max_participants is None
    assert project.registration_page.fields == []


def test_registration_row_round_trip():
    registration = Registration(
        id="r-1", project_id="p-1", answers={"f1": "Jane", "f4": ["M", "Other: tall"]}
    )

    row = registration_to_row(registration)

    assert row["project_id"] == "p-1"
    assert registration_from_row(row) == registration
