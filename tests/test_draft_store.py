import pytest
import redis

from eventdesk.models.registration import RegistrationDraft
from eventdesk.services.draft_store import DraftStore
from tests.redis_doubles import UnavailableRedis


def test_get_missing_draft(draft_store):
    """Missing drafts read as absent."""
    assert draft_store.get_draft("p-1", "d-1") is None


def test_save_and_get_draft(draft_store, fake_redis):
    """Saved drafts round-trip and carry the TTL."""
    draft = RegistrationDraft(
        values={"f1": "Jane", "f4": ["M", "Other"]},
        other_text={"f4": "petite"},
        privacy_agreed=True,
    )

    draft_store.save_draft("p-1", "d-1", draft)

    assert draft_store.get_draft("p-1", "d-1") == draft
    assert fake_redis.ttls["registration_draft:p-1:d-1"] == 1800


def test_drafts_are_scoped_by_project(draft_store):
    draft_store.save_draft("p-1", "d-1", RegistrationDraft(values={"f1": "Jane"}))
    assert draft_store.get_draft("p-2", "d-1") is None


def test_corrupted_draft_reads_as_absent(draft_store, fake_redis):
    fake_redis.setex("registration_draft:p-1:d-1", 1800, "{not json")
    assert draft_store.get_draft("p-1", "d-1") is None

    fake_redis.setex("registration_draft:p-1:d-2", 1800, '{"values": 42}')
    assert draft_store.get_draft("p-1", "d-2") is None


def test_clear_draft(draft_store):
    draft_store.save_draft("p-1", "d-1", RegistrationDraft(values={"f1": "Jane"}))

    draft_store.clear_draft("p-1", "d-1")

    assert draft_store.get_draft("p-1", "d-1") is None


def test_redis_errors_are_raised():
    store = DraftStore(redis_client=UnavailableRedis(), ttl_seconds=60)

    with pytest.raises(redis.RedisError):
        store.get_draft("p-1", "d-1")
    with pytest.raises(redis.RedisError):
        store.save_draft("p-1", "d-1", RegistrationDraft())
    with pytest.raises(redis.RedisError):
        store.clear_draft("p-1", "d-1")
