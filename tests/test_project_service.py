"""Tests for ProjectService"""

import pytest

from eventdesk.errors import NotFoundError, ValidationError
from eventdesk.models.field_type import FieldType
from eventdesk.models.project_config import ProjectStatus
from eventdesk.models.registration import Registration


class TestProjectLifecycle:
    def test_create_project_with_defaults(self, project_service, project_details):
        project = project_service.create_project(project_details)

        assert project.id
        assert project.name == "Spring Meetup"
        assert project.manager_id == "manager-1"
        assert project.date.isoformat() == "2025-04-15"
        assert project.status == ProjectStatus.PLANNING
        assert project.seo.title == "Spring Meetup"
        assert len(project.registration_page.fields) == 3

    @pytest.mark.parametrize("missing", ["name", "date", "managerId"])
    def test_create_requires_details(self, project_service, project_details, missing):
        details = {**project_details, missing: ""}

        with pytest.raises(ValidationError):
            project_service.create_project(details)

    def test_get_unknown_project(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.get_project("missing")

    def test_list_projects(self, project_service, project):
        assert [p.id for p in project_service.list_projects()] == [project.id]

    def test_update_details(self, project_service, project):
        updated = project_service.update_project(
            project.id, {"location": "Main Hall", "status": "active"}
        )

        assert updated.location == "Main Hall"
        assert updated.status == ProjectStatus.ACTIVE
        assert updated.name == "Spring Meetup"

    def test_update_cannot_touch_sections(self, project_service, project):
        with pytest.raises(ValidationError):
            project_service.update_project(project.id, {"landingPage": {}})

    def test_update_cannot_clear_name(self, project_service, project):
        with pytest.raises(ValidationError):
            project_service.update_project(project.id, {"name": ""})

    def test_delete_project(self, project_service, project):
        project_service.delete_project(project.id)

        with pytest.raises(NotFoundError):
            project_service.get_project(project.id)


class TestProjectListing:
    @pytest.fixture
    def listed(self, project_service, registration_repository, project_details):
        """Three projects with 0, 2 and 1 registrations"""
        projects = {}
        for name, manager, registrations in [
            ("Spring Meetup", "manager-1", 0),
            ("autumn Gala", "manager-2", 2),
            ("Book Club", "Dana", 1),
        ]:
            project = project_service.create_project(
                {**project_details, "name": name, "managerId": manager}
            )
            for _ in range(registrations):
                registration_repository.save_registration(
                    Registration(project_id=project.id, answers={})
                )
            projects[name] = project
        return projects

    def test_items_carry_registration_counts(self, project_service, listed):
        counts = {p.name: p.registration_count for p in project_service.list_projects()}

        assert counts == {"Spring Meetup": 0, "autumn Gala": 2, "Book Club": 1}

    @pytest.mark.parametrize(
        "sort, expected",
        [
            ("most-registrations", ["autumn Gala", "Book Club", "Spring Meetup"]),
            ("least-registrations", ["Spring Meetup", "Book Club", "autumn Gala"]),
            ("name-asc", ["autumn Gala", "Book Club", "Spring Meetup"]),
        ],
    )
    def test_sort(self, project_service, listed, sort, expected):
        assert [p.name for p in project_service.list_projects(sort=sort)] == expected

    def test_search_matches_name_or_manager(self, project_service, listed):
        assert [p.name for p in project_service.list_projects(search="GALA")] == [
            "autumn Gala"
        ]
        assert [p.name for p in project_service.list_projects(search="dana")] == [
            "Book Club"
        ]
        assert project_service.list_projects(search="nomatch") == []

    def test_unknown_sort(self, project_service, listed):
        with pytest.raises(ValidationError):
            project_service.list_projects(sort="random")


class TestConfigPatches:
    def test_apply_patch_persists_section(self, project_service, project):
        project_service.apply_patch(project.id, "policy", {"maxParticipants": 50})

        stored = project_service.get_project(project.id)
        assert stored.policy.max_participants == 50
        assert stored.landing_page == project.landing_page

    def test_unknown_section(self, project_service, project):
        with pytest.raises(ValidationError):
            project_service.apply_patch(project.id, "billing", {})

    def test_unknown_project(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.apply_patch("missing", "seo", {"title": "X"})

    def test_enabling_incomplete_form_is_rejected(self, project_service, project):
        field = project_service.add_field(project.id)
        project_service.update_field(project.id, field.id, {"type": "select"})

        with pytest.raises(ValidationError):
            project_service.apply_patch(
                project.id, "registrationPage", {"isEnabled": True}
            )

        assert project_service.get_project(project.id).registration_page.is_enabled is False


class TestFieldEditing:
    def test_add_field(self, project_service, project):
        field = project_service.add_field(project.id)

        stored = project_service.get_project(project.id)
        assert stored.registration_page.fields[-1] == field
        assert len(stored.registration_page.fields) == 4

    def test_update_and_set_options(self, project_service, project):
        field = project_service.add_field(project.id)

        project_service.update_field(
            project.id, field.id, {"type": "checkbox", "label": "Meal"}
        )
        updated = project_service.set_field_options(
            project.id, field.id, "Vegan, Vegetarian, "
        )

        stored_field = updated.registration_page.fields[-1]
        assert stored_field.type == FieldType.CHECKBOX
        assert stored_field.label == "Meal"
        assert stored_field.options == ["Vegan", "Vegetarian"]

    def test_enabled_form_must_stay_renderable(self, project_service, open_project):
        field = project_service.add_field(open_project.id)

        with pytest.raises(ValidationError):
            project_service.update_field(open_project.id, field.id, {"type": "radio"})

        updated = project_service.update_field(
            open_project.id, field.id, {"type": "radio", "options": ["Yes", "No"]}
        )
        assert updated.registration_page.fields[-1].options == ["Yes", "No"]

    def test_remove_field(self, project_service, project):
        first = project.registration_page.fields[0]

        updated = project_service.remove_field(project.id, first.id)

        assert first.id not in [f.id for f in updated.registration_page.fields]

    def test_missing_field_is_noop(self, project_service, project):
        before = project_service.get_project(project.id)

        after = project_service.update_field(project.id, "missing", {"label": "X"})

        assert after.version == before.version
        assert after.registration_page == before.registration_page
