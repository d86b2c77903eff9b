import json
import logging
from typing import Optional

import redis
from pydantic import ValidationError as PydanticValidationError

from eventdesk.models.registration import RegistrationDraft

logger = logging.getLogger(__name__)


class DraftStore:
    """
    Keeps in-progress registration answers in Redis with a sliding TTL.

    A draft is saved before a submission is committed and cleared after it
    succeeds, so a failed submit can be retried without re-entering answers.
    """

    def __init__(self, redis_client: redis.Redis, ttl_seconds: int = 1800):
        """
        Initialize DraftStore with Redis backend.

        Args:
            redis_client: Redis client instance (from dependency injection)
            ttl_seconds: Time-to-live in seconds, refreshed on every save
        """
        self.redis_client = redis_client
        self.ttl_seconds = ttl_seconds

    def _draft_key(self, project_id: str, draft_id: str) -> str:
        return f"registration_draft:{project_id}:{draft_id}"

    def get_draft(self, project_id: str, draft_id: str) -> Optional[RegistrationDraft]:
        """
        Retrieve a saved draft.

        Returns:
            The draft, or None if missing, expired or corrupted

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(project_id, draft_id)
        try:
            draft_json = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis error getting draft {draft_id} for {project_id}: {e}")
            raise

        if not draft_json:
            return None

        try:
            return RegistrationDraft.model_validate(json.loads(draft_json))
        except (json.JSONDecodeError, PydanticValidationError):
            logger.error(f"Corrupted draft {draft_id} for {project_id}, ignoring")
            return None

    def save_draft(
        self, project_id: str, draft_id: str, draft: RegistrationDraft
    ) -> RegistrationDraft:
        """
        Store a draft and refresh its TTL.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(project_id, draft_id)
        try:
            self.redis_client.setex(
                key, self.ttl_seconds, draft.model_dump_json(by_alias=True)
            )
        except redis.RedisError as e:
            logger.error(f"Redis error saving draft {draft_id} for {project_id}: {e}")
            raise
        return draft

    def clear_draft(self, project_id: str, draft_id: str) -> None:
        """
        Remove a draft after a successful submission.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(project_id, draft_id)
        try:
            self.redis_client.delete(key)
            logger.info(f"Cleared draft {draft_id} for project {project_id}")
        except redis.RedisError as e:
            logger.error(f"Redis error clearing draft {draft_id} for {project_id}: {e}")
            raise
