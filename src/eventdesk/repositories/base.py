"""Repository contracts consumed by the services.

Implementations must report failure with ``FetchError`` instead of hanging
or returning partial results, and must treat absence of data as an empty
list rather than an error.
"""

from typing import Any, Dict, List, Optional, Protocol

from eventdesk.models.project_config import Project
from eventdesk.models.registration import Registration


class ProjectRepository(Protocol):
    def load_projects(self) -> List[Project]:
        ...

    def get_project(self, project_id: str) -> Optional[Project]:
        ...

    def create_project(self, project: Project) -> Project:
        ...

    def save_project(self, project_id: str, changes: Dict[str, Any]) -> Project:
        """Persist the given top-level attributes/sections, last write wins.

        Raises ``NotFoundError`` when the project does not exist.
        """
        ...

    def delete_project(self, project_id: str) -> None:
        ...


class RegistrationRepository(Protocol):
    def load_registrations(self, project_id: str) -> List[Registration]:
        ...

    def count_registrations(self, project_id: str) -> int:
        ...

    def save_registration(self, registration: Registration) -> Registration:
        """Insert a registration and return it with ``id`` and ``submitted_at`` set"""
        ...
