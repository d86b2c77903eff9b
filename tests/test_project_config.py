"""Tests for the project configuration aggregate"""

from datetime import date

import pytest

from eventdesk.errors import ValidationError
from eventdesk.models.field_type import FieldType
from eventdesk.models.project_config import (
    DEFAULT_REGISTRATION_TITLE,
    DEFAULT_SUCCESS_MESSAGE,
    ConfigSection,
    Project,
)
from eventdesk.services.project_service import effective_seo


@pytest.fixture
def project():
    return Project.create_default(
        name="Spring Meetup",
        date=date(2025, 4, 15),
        location="Community Hall",
        manager_id="manager-1",
    )


class TestDefaults:
    def test_pages_start_disabled(self, project):
        assert project.landing_page.is_enabled is False
        assert project.registration_page.is_enabled is False
        assert project.landing_page.title == "Spring Meetup"
        assert project.registration_page.title == DEFAULT_REGISTRATION_TITLE

    def test_starter_fields(self, project):
        fields = project.registration_page.fields

        assert [(f.label, f.type) for f in fields] == [
            ("Name", FieldType.TEXT),
            ("Contact", FieldType.TEL),
            ("Email", FieldType.EMAIL),
        ]
        assert all(f.required for f in fields)
        assert len({f.id for f in fields}) == 3

    def test_terms_and_notification(self, project):
        assert project.terms.require_privacy is True
        assert project.terms.require_marketing is False
        assert project.terms.privacy_policy
        assert project.notification.success_message == DEFAULT_SUCCESS_MESSAGE


class TestApplyPatch:
    @pytest.mark.parametrize("section", list(ConfigSection))
    def test_empty_patch_is_identity(self, project, section):
        assert project.apply_patch(section, {}) == project

    def test_patch_merges_into_one_section(self, project):
        updated = project.apply_patch("landingPage", {"description": "Join us"})

        assert updated.landing_page.description == "Join us"
        assert updated.landing_page.title == "Spring Meetup"
        assert updated.registration_page == project.registration_page
        assert updated.seo == project.seo
        # The original is not modified
        assert project.landing_page.description == ""

    def test_snake_case_keys_and_section_names(self, project):
        updated = project.apply_patch("landing_page", {"is_enabled": True})
        assert updated.landing_page.is_enabled is True

    def test_unknown_key_is_rejected(self, project):
        with pytest.raises(ValidationError) as exc_info:
            project.apply_patch("design", {"fontFamily": "Comic Sans"})
        assert exc_info.value.errors[0]["field_id"] == "fontFamily"

    def test_invalid_value_is_rejected(self, project):
        with pytest.raises(ValidationError):
            project.apply_patch("policy", {"maxParticipants": "many"})

    def test_unknown_section(self, project):
        with pytest.raises(ValueError):
            project.apply_patch("billing", {"plan": "pro"})

    def test_schedule_patch_parses_timestamps(self, project):
        updated = project.apply_patch(
            "schedule",
            {"applicationStart": "2025-03-01T09:00:00+09:00", "applicationEnd": ""},
        )

        assert updated.schedule.application_start.utcoffset().total_seconds() == 9 * 3600
        assert updated.schedule.application_end is None

    def test_camel_case_json(self, project):
        data = project.model_dump(by_alias=True, mode="json")

        assert data["managerId"] == "manager-1"
        assert data["landingPage"]["isEnabled"] is False
        assert data["registrationPage"]["fields"][0]["hasOtherOption"] is False
        assert Project.model_validate(data) == project


class TestEffectiveSeo:
    def test_explicit_seo_wins(self, project):
        project = project.apply_patch("seo", {"title": "Meetup 2025"})
        assert effective_seo(project).title == "Meetup 2025"

    def test_falls_back_to_landing_then_name(self, project):
        project = project.apply_patch("seo", {"title": ""})
        assert effective_seo(project).title == "Spring Meetup"

        project = project.apply_patch("landingPage", {"title": ""})
        project = project.model_copy(update={"name": "Renamed"})
        assert effective_seo(project).title == "Renamed"

    def test_description_falls_back_to_landing(self, project):
        project = project.apply_patch("landingPage", {"description": "Spring talks"})
        assert effective_seo(project).description == "Spring talks"
