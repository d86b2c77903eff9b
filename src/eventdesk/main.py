#!/usr/bin/env python3
"""EventDesk - event landing pages, dynamic registration forms and admission control"""

import uvicorn
from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from eventdesk.config import config
from eventdesk.logging_config import get_logger, setup_logging
from eventdesk.routers.admin import router as admin_router
from eventdesk.routers.errors import register_exception_handlers
from eventdesk.routers.events import router as events_router
from eventdesk.routers.health import health

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="EventDesk",
    description="Event management API - configure event landing pages and registration forms, and accept public registrations",
    version="1.0.0",
)

# Trust proxy headers from the TLS-terminating load balancer
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

register_exception_handlers(app)

# Include routers
app.include_router(health)
app.include_router(admin_router)
app.include_router(events_router)


if __name__ == "__main__":
    port = config.get("port")
    logger.info(f"Starting EventDesk on 0.0.0.0:{port}")
    logger.info(f"Storage backend: {config['storage_backend']}")
    logger.info(f"Health check available at /health")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise
