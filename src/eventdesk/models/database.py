"""Database configuration and shared clients"""

import os

import redis
from sqlalchemy import create_engine
from sqlmodel import Session

from eventdesk.config import config

DATABASE_URL = config["database_url"]

if not DATABASE_URL:
    raise ValueError(
        "DATABASE_URL environment variable is not set. "
        "Set DATABASE_URL in the deployment environment or local .env file."
    )

STORE_TIMEOUT_SECONDS = config["store_timeout_seconds"]


def _connect_args(url: str) -> dict:
    # Store calls must fail rather than hang on an unreachable database
    if url.startswith("postgresql"):
        return {"connect_timeout": STORE_TIMEOUT_SECONDS}
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": STORE_TIMEOUT_SECONDS}
    return {}


engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("DEBUG", "false").lower() == "true",
    connect_args=_connect_args(DATABASE_URL),
    pool_pre_ping=True,
)

REDIS_URL = config["redis_url"]

redis_client = redis.from_url(
    REDIS_URL,
    decode_responses=True,
    max_connections=20,
    socket_connect_timeout=STORE_TIMEOUT_SECONDS,
    socket_timeout=STORE_TIMEOUT_SECONDS,
    socket_keepalive=True,
    retry_on_timeout=True,
)


def get_db():
    """Get database session"""
    with Session(engine) as session:
        yield session


def get_redis():
    """Get Redis client"""
    return redis_client
