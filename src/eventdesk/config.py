"""Configuration loader for EventDesk with environment-specific support"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "database_url": os.getenv("DATABASE_URL", "sqlite:///eventdesk.db"),
    "redis_url": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
    "port": int(os.getenv("PORT", "8080")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "environment": os.getenv("ENVIRONMENT", "development"),
    # "sql" uses DATABASE_URL, "local" keeps a JSON snapshot on disk
    "storage_backend": os.getenv("STORAGE_BACKEND", "sql"),
    "local_store_path": os.getenv("LOCAL_STORE_PATH", "eventdesk-store.json"),
    # IANA time zone used for schedule timestamps stored without an offset
    "time_zone": os.getenv("TIME_ZONE", "UTC"),
    "draft_ttl_seconds": int(os.getenv("DRAFT_TTL_SECONDS", "1800")),
    "store_timeout_seconds": int(os.getenv("STORE_TIMEOUT_SECONDS", "5")),
}
