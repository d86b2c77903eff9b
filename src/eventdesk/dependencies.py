"""FastAPI dependencies wiring repositories and services to the configured store"""

import logging
import threading

import redis
from fastapi import Depends
from sqlmodel import Session

from eventdesk.config import config
from eventdesk.models.database import get_db, get_redis
from eventdesk.repositories.base import ProjectRepository, RegistrationRepository
from eventdesk.repositories.local import LocalRepository
from eventdesk.repositories.sql import SqlProjectRepository, SqlRegistrationRepository
from eventdesk.services.draft_store import DraftStore
from eventdesk.services.project_service import ProjectService
from eventdesk.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)

_local_lock = threading.Lock()
_local_repository = None


def get_local_repository() -> LocalRepository:
    """Get the shared local snapshot store (one file per process)"""
    global _local_repository
    if _local_repository is None:
        with _local_lock:
            if _local_repository is None:
                _local_repository = LocalRepository(config["local_store_path"])
                logger.info(
                    f"Initialized local store at {config['local_store_path']}"
                )
    return _local_repository


def _use_local_store() -> bool:
    return config["storage_backend"] == "local"


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    if _use_local_store():
        return get_local_repository()
    return SqlProjectRepository(db)


def get_registration_repository(
    db: Session = Depends(get_db),
) -> RegistrationRepository:
    if _use_local_store():
        return get_local_repository()
    return SqlRegistrationRepository(db)


def get_project_service(
    projects: ProjectRepository = Depends(get_project_repository),
    registrations: RegistrationRepository = Depends(get_registration_repository),
) -> ProjectService:
    return ProjectService(projects, registrations)


def get_registration_service(
    projects: ProjectRepository = Depends(get_project_repository),
    registrations: RegistrationRepository = Depends(get_registration_repository),
) -> RegistrationService:
    return RegistrationService(projects, registrations)


def get_draft_store(redis_client: redis.Redis = Depends(get_redis)) -> DraftStore:
    return DraftStore(redis_client, ttl_seconds=config["draft_ttl_seconds"])
