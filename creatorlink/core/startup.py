"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from creatorlink.core.config import get_config
from creatorlink.core.logging_config import configure_logging
from creatorlink.database.db import init_db, verify_database_connection

logger = logging.getLogger(__name__)


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()

    if config.DRAFT_STORE_BACKEND == "database":
        if not verify_database_connection():
            raise RuntimeError("Database connectivity check failed.")
        init_db()
    elif config.is_production:
        logger.warning(
            "startup.production.memory_draft_store",
            extra={"event": "startup.production.memory_draft_store"},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated"},
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
